import math
import random

import pytest

from gpxgraph.geo import EARTH_RADIUS_M, Coordinate, distance
from gpxgraph.filters import remove_if_closer_than, smoothed_elevation

LEIPZIG = Coordinate(latitude=51.32384, longitude=12.37811, elevation=114)
DEHNER = Coordinate(latitude=51.3625, longitude=12.4166, elevation=107)
POSTPLATZ = Coordinate(latitude=51.05067, longitude=13.73290, elevation=114)


def offset(coord, north=0.0, east=0.0, elevation=0.0):
    """Move a coordinate by a number of meters north and east."""
    dlat = math.degrees(north / EARTH_RADIUS_M)
    dlon = math.degrees(east / (EARTH_RADIUS_M * math.cos(math.radians(coord.latitude))))
    return Coordinate(coord.latitude + dlat, coord.longitude + dlon, coord.elevation + elevation)


def test_remove_from_empty_sequence():
    assert remove_if_closer_than([], 1) == []


def test_remove_with_one_element():
    assert remove_if_closer_than([LEIPZIG], 1) == [LEIPZIG]


def test_remove_with_two_distant_elements():
    assert remove_if_closer_than([LEIPZIG, DEHNER], 1) == [LEIPZIG, DEHNER]


def test_remove_duplicate_coordinates():
    coords = [
        LEIPZIG,
        offset(LEIPZIG, east=60),
        offset(LEIPZIG, east=100),
        offset(LEIPZIG, north=120),
        offset(LEIPZIG, north=160),
        POSTPLATZ,
    ]

    assert remove_if_closer_than(coords, 50) == [coords[0], coords[1], coords[3], POSTPLATZ]


def test_points_at_threshold_are_kept():
    coords = [Coordinate(i * 0.001, 0.0) for i in range(5)]
    threshold = min(distance(a, b) for a, b in zip(coords, coords[1:]))

    assert remove_if_closer_than(coords, threshold) == coords


def test_compares_against_last_kept_point():
    # each step is 30 m, so only every second point is 50 m or more from the last kept one
    coords = [offset(LEIPZIG, north=30 * i) for i in range(5)]
    assert remove_if_closer_than(coords, 50) == [coords[0], coords[2], coords[4]]


def test_smoothing_elevation():
    rnd = random.Random(42)
    start = offset(LEIPZIG, elevation=200)
    coords = [
        offset(start,
               north=rnd.uniform(100, 1000),
               east=rnd.uniform(100, 1000),
               elevation=rnd.uniform(500, 550) if idx % 10 == 0 else rnd.uniform(100, 110))
        for idx in range(100)
    ]
    avg = sum(c.elevation for c in coords) / len(coords)

    smoothed = smoothed_elevation(coords, sample_count=50)

    assert len(smoothed) == len(coords)
    for original, coord in zip(coords, smoothed):
        assert coord.latitude == original.latitude
        assert coord.longitude == original.longitude
        assert coord.elevation == pytest.approx(avg, abs=15)


def test_smoothing_single_sample_is_identity():
    coords = [Coordinate(0.0, 0.0, 1.0), Coordinate(0.001, 0.0, 9.0)]
    assert smoothed_elevation(coords, sample_count=1) == coords


def test_smoothing_window_shifts_inward_at_edges():
    coords = [Coordinate(i * 0.001, 0.0, e) for i, e in enumerate([0.0, 3.0, 6.0, 9.0])]
    assert [c.elevation for c in smoothed_elevation(coords, sample_count=3)] == pytest.approx([3.0, 3.0, 6.0, 6.0])


def test_smoothing_window_wider_than_sequence():
    coords = [Coordinate(i * 0.001, 0.0, e) for i, e in enumerate([0.0, 3.0, 6.0])]
    assert [c.elevation for c in smoothed_elevation(coords, sample_count=10)] == pytest.approx([3.0, 3.0, 3.0])


def test_smoothing_empty_sequence():
    assert smoothed_elevation([], sample_count=5) == []
