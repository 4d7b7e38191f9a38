import bisect
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from gpxgraph.track import TrackGraph


@dataclass(frozen=True)
class GradeSegment:
    """A distance span with a constant slope between two elevations."""
    start_m: float
    end_m: float
    elevation_at_start_m: float
    elevation_at_end_m: float

    def __post_init__(self):
        if not self.end_m > self.start_m:
            raise ValueError(f"Grade segment must end after it starts: {self.start_m} -> {self.end_m}")

    @classmethod
    def from_grade(cls, start_m: float, end_m: float, grade: float, elevation_at_start_m: float) -> "GradeSegment":
        return cls(start_m, end_m, elevation_at_start_m, elevation_at_start_m + (end_m - start_m) * grade)

    @property
    def length_m(self) -> float:
        return self.end_m - self.start_m

    @property
    def grade(self) -> float:
        return (self.elevation_at_end_m - self.elevation_at_start_m) / self.length_m

    def adjusted(self, grade: float) -> "GradeSegment":
        """Same span and starting elevation, new slope."""
        return GradeSegment.from_grade(self.start_m, self.end_m, grade, self.elevation_at_start_m)


def _elevation_at(distances: List[float], elevations: List[float], position: float) -> float:
    idx = bisect.bisect_right(distances, position)
    if idx == 0:
        return elevations[0]
    if idx >= len(distances):
        return elevations[-1]
    d0, d1 = distances[idx - 1], distances[idx]
    if d1 == d0:
        return elevations[idx]
    return elevations[idx - 1] + (position - d0) / (d1 - d0) * (elevations[idx] - elevations[idx - 1])


def grade_segments(graph: "TrackGraph", segment_length: float) -> List[GradeSegment]:
    """Cut a track graph into consecutive grade segments of ``segment_length`` meters.

    Elevation at each cut is interpolated linearly by distance between the
    surrounding track points. The last segment ends at the track's total
    distance and may be shorter than ``segment_length``.
    """
    if segment_length <= 0:
        raise ValueError(f"Segment length must be positive, got {segment_length}")
    if len(graph.segments) < 2 or graph.total_distance_m <= 0:
        return []

    distances = [s.distance_from_start_m for s in graph.segments]
    elevations = [s.coordinate.elevation or 0.0 for s in graph.segments]

    cuts = []
    idx = 0
    while idx * segment_length < graph.total_distance_m:
        cuts.append(idx * segment_length)
        idx += 1
    cuts.append(graph.total_distance_m)

    result = []
    for start, end in zip(cuts, cuts[1:]):
        if end > start:
            result.append(GradeSegment(start, end,
                                       _elevation_at(distances, elevations, start),
                                       _elevation_at(distances, elevations, end)))
    return result


def flatten(segments: Sequence[GradeSegment], max_delta: float) -> List[GradeSegment]:
    """Limit the grade change between neighbouring segments to ``max_delta``.

    Single left-to-right pass. Each output segment starts at the elevation
    where the previous output segment ended and keeps its original span. A
    grade further than ``max_delta`` from the previous output grade only moves
    ``max_delta`` toward it.
    """
    result: List[GradeSegment] = []
    for segment in segments:
        if not result:
            result.append(segment)
            continue
        previous = result[-1]
        delta = segment.grade - previous.grade
        grade = segment.grade
        if abs(delta) > max_delta:
            grade = previous.grade + math.copysign(max_delta, delta)
        result.append(GradeSegment.from_grade(segment.start_m, segment.end_m, grade, previous.elevation_at_end_m))
    return result
