from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Optional, Sequence, Tuple

from gpxgraph.geo import Coordinate, distance
from gpxgraph.grades import GradeSegment, grade_segments


@dataclass(frozen=True)
class TrackPoint:
    coordinate: Coordinate
    timestamp: Optional[datetime] = None
    power: Optional[float] = None  # watts

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    @property
    def elevation(self) -> Optional[float]:
        return self.coordinate.elevation

    def with_elevation(self, elevation: Optional[float]) -> "TrackPoint":
        return TrackPoint(self.coordinate.with_elevation(elevation), self.timestamp, self.power)


@dataclass(frozen=True)
class TrackSegment:
    coordinate: Coordinate
    distance_from_start_m: float


@dataclass(frozen=True)
class TrackGraph:
    segments: List[TrackSegment] = field(default_factory=list)
    total_distance_m: float = 0.0
    elevation_gain_m: float = 0.0

    @classmethod
    def from_coordinates(cls, coords: Sequence[Coordinate]) -> "TrackGraph":
        """Build the graph of an ordered coordinate sequence.

        Each segment carries the cumulative distance from the first
        coordinate. Elevation gain only counts climbing, descents add nothing.
        """
        pairs = list(zip(coords, coords[1:]))
        distances = [0.0] + [distance(a, b) for a, b in pairs]

        segments = []
        distance_so_far = 0.0
        for coord, step in zip(coords, distances):
            distance_so_far += step
            segments.append(TrackSegment(coordinate=coord, distance_from_start_m=distance_so_far))

        elevation_gain = 0.0
        for a, b in pairs:
            delta = (b.elevation or 0.0) - (a.elevation or 0.0)
            if delta > 0:
                elevation_gain += delta

        return cls(segments=segments, total_distance_m=distance_so_far, elevation_gain_m=elevation_gain)

    @classmethod
    def from_points(cls, points: Sequence[TrackPoint]) -> "TrackGraph":
        return cls.from_coordinates([p.coordinate for p in points])

    @property
    def height_map(self) -> Iterator[Tuple[int, int]]:
        """(distance, elevation) pairs in whole meters, truncated, for plotting."""
        return ((int(s.distance_from_start_m), int(s.coordinate.elevation or 0.0)) for s in self.segments)


@dataclass(frozen=True)
class GPXTrack:
    title: str
    description: Optional[str] = None
    date: Optional[datetime] = None
    keywords: List[str] = field(default_factory=list)
    track_points: List[TrackPoint] = field(default_factory=list)
    grade_segment_length: float = 50.0

    @property
    def graph(self) -> TrackGraph:
        return TrackGraph.from_points(self.track_points)

    @property
    def grade_segments(self) -> List[GradeSegment]:
        return grade_segments(self.graph, self.grade_segment_length)
