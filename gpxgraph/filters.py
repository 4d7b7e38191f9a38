from typing import List, Sequence

from gpxgraph.geo import Coordinate, distance


def remove_if_closer_than(coords: Sequence[Coordinate], threshold_m: float) -> List[Coordinate]:
    """Drop coordinates closer than ``threshold_m`` to the last kept one.

    Greedy single pass, the first coordinate is always kept.
    """
    result: List[Coordinate] = []
    for coord in coords:
        if not result or distance(result[-1], coord) >= threshold_m:
            result.append(coord)
    return result


def smoothed_elevation(coords: Sequence[Coordinate], sample_count: int = 5) -> List[Coordinate]:
    """Moving average of elevation over ``sample_count`` neighbouring samples.

    The window is centered on each coordinate and shifted inward at both
    ends of the sequence so it always spans ``sample_count`` samples.
    Latitude and longitude are left untouched.
    """
    width = min(max(sample_count, 1), len(coords))
    half_window = width // 2
    elevations = [c.elevation or 0.0 for c in coords]

    smoothed = []
    for i, coord in enumerate(coords):
        start = min(max(0, i - half_window), max(0, len(elevations) - width))
        end = start + width
        window = elevations[start:end]
        smoothed.append(coord.with_elevation(sum(window) / len(window)))

    return smoothed
