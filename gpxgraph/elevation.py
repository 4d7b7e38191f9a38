"""Repair of missing elevation readings in a raw track point sequence."""
import itertools
import logging
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from gpxgraph.geo import distance
from gpxgraph.track import TrackPoint

logger = logging.getLogger(__name__)

T = TypeVar("T")
K = TypeVar("K")


def chunked_on(items: Iterable[T], key: Callable[[T], K]) -> List[Tuple[K, List[T]]]:
    """Split items into maximal runs sharing the same key, in order."""
    return [(k, list(group)) for k, group in itertools.groupby(items, key=key)]


def _is_missing(point: TrackPoint) -> bool:
    return point.elevation is None


def fix_boundary_elevations(points: List[TrackPoint]) -> None:
    """Give the first and last points the nearest known elevation, in place.

    Nothing changes when no point in the sequence has an elevation.
    """
    if not points:
        return
    if _is_missing(points[0]):
        first_known = next((p.elevation for p in points if not _is_missing(p)), None)
        if first_known is not None:
            points[0] = points[0].with_elevation(first_known)
    if _is_missing(points[-1]):
        last_known = next((p.elevation for p in reversed(points) if not _is_missing(p)), None)
        if last_known is not None:
            points[-1] = points[-1].with_elevation(last_known)


def correct_elevation_gaps(points: List[TrackPoint]) -> List[TrackPoint]:
    """Interpolate elevations inside runs of points that have none.

    The straight-line grade between the last known point before a gap and the
    first known point after it is applied to every point in the gap by its
    distance from the start of the gap. Gaps without a known point on both
    sides stay as they are.
    """
    chunks = chunked_on(points, _is_missing)

    grades = []
    known = [chunk for missing, chunk in chunks if not missing]
    for before, after in zip(known, known[1:]):
        start, end = before[-1], after[0]
        dist = distance(start.coordinate, end.coordinate)
        grade = (end.elevation - start.elevation) / dist if dist > 0 else 0.0
        grades.append((start, grade))

    gaps = [chunk for missing, chunk in chunks if missing]
    corrected = []
    for gap, (start, grade) in zip(gaps, grades):
        logger.debug(f"Interpolating {len(gap)} missing elevations after {start.latitude:.6f},{start.longitude:.6f}")
        corrected.append([
            p.with_elevation(start.elevation + distance(start.coordinate, p.coordinate) * grade)
            for p in gap
        ])

    result: List[TrackPoint] = []
    for missing, chunk in chunks:
        if missing and corrected:
            result.extend(corrected.pop(0))
        else:
            result.extend(chunk)
    return result


def repair_elevations(points: List[TrackPoint], default: Optional[float] = 0.0) -> List[TrackPoint]:
    """Fill every missing elevation in a point sequence.

    Boundaries are fixed first, interior gaps are interpolated, and whatever
    is still missing (a track without any elevation) gets ``default``.
    Returns a new list of the same length and order.
    """
    points = list(points)
    fix_boundary_elevations(points)
    return [p.with_elevation(default) if _is_missing(p) else p for p in correct_elevation_gaps(points)]
