from gpxgraph.geo import Coordinate, distance
from gpxgraph.track import TrackPoint, TrackSegment, TrackGraph, GPXTrack
from gpxgraph.filters import remove_if_closer_than, smoothed_elevation
from gpxgraph.grades import GradeSegment, grade_segments, flatten
from gpxgraph.parser import (
    DEFAULT_GRADE_SEGMENT_LENGTH,
    GPXFileParser,
    GPXParserError,
    GPXParseError,
    InvalidGPXError,
    NoTracksFoundError,
    parse_gpx,
)

__all__ = [
    "Coordinate",
    "distance",
    "TrackPoint",
    "TrackSegment",
    "TrackGraph",
    "GPXTrack",
    "remove_if_closer_than",
    "smoothed_elevation",
    "GradeSegment",
    "grade_segments",
    "flatten",
    "DEFAULT_GRADE_SEGMENT_LENGTH",
    "GPXFileParser",
    "GPXParserError",
    "GPXParseError",
    "InvalidGPXError",
    "NoTracksFoundError",
    "parse_gpx",
]
