import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from gpxgraph.elevation import repair_elevations
from gpxgraph.geo import Coordinate
from gpxgraph.track import GPXTrack, TrackPoint
from gpxgraph.markup import BasicXMLParser, NoContentError, XMLNode, XMLParseError

logger = logging.getLogger(__name__)

DEFAULT_GRADE_SEGMENT_LENGTH = 50.0

# GPX tags, matched case-insensitively against local names
METADATA = "metadata"
TIME = "time"
TRACK = "trk"
NAME = "name"
TRACK_SEGMENT = "trkseg"
TRACK_POINT = "trkpt"
ELEVATION = "ele"
EXTENSIONS = "extensions"
POWER = "power"
DESCRIPTION = "desc"
KEYWORDS = "keywords"

LATITUDE = "lat"
LONGITUDE = "lon"


class GPXParserError(Exception):
    """Base class for everything that keeps a document from becoming a GPXTrack."""


class InvalidGPXError(GPXParserError):
    """The document could not be read as markup at all."""


class NoTracksFoundError(GPXParserError):
    """The document has no track, or the track has no name."""


class GPXParseError(GPXParserError):
    def __init__(self, error: Exception, line_number: int):
        super().__init__(f"Invalid GPX at line {line_number}: {error}")
        self.error = error
        self.line_number = line_number


def _float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _timestamp(node: Optional[XMLNode]) -> Optional[datetime]:
    if node is None:
        return None
    try:
        return datetime.fromisoformat(node.content.replace('Z', '+00:00'))
    except ValueError:
        return None


def _track_point(node: XMLNode) -> Optional[TrackPoint]:
    lat = _float(node.attributes.get(LATITUDE))
    lon = _float(node.attributes.get(LONGITUDE))
    if lat is None or lon is None:
        return None

    ele = node.child_for(ELEVATION)
    extensions = node.child_for(EXTENSIONS)
    power = extensions.child_for(POWER) if extensions is not None else None
    return TrackPoint(
        coordinate=Coordinate(latitude=lat, longitude=lon,
                              elevation=_float(ele.content) if ele is not None else None),
        timestamp=_timestamp(node.child_for(TIME)),
        power=_float(power.content) if power is not None else None,
    )


class GPXFileParser:
    """Reads a GPX document into a GPXTrack."""

    def __init__(self, xml: str):
        self.xml = xml

    @classmethod
    def from_bytes(cls, data: bytes) -> Optional["GPXFileParser"]:
        """Parser for UTF-8 encoded GPX, or None if the data can't be decoded."""
        try:
            return cls(data.decode("utf-8"))
        except UnicodeDecodeError:
            logger.warning("GPX data is not valid UTF-8")
            return None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> Optional["GPXFileParser"]:
        """Parser for a GPX file, or None if the file can't be read."""
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            logger.warning(f"Could not read GPX file {path}: {e}")
            return None
        return cls.from_bytes(data)

    def parse(self, grade_segment_length: float = DEFAULT_GRADE_SEGMENT_LENGTH) -> GPXTrack:
        """Parse the document.

        Raises InvalidGPXError, NoTracksFoundError or GPXParseError.
        """
        try:
            root = BasicXMLParser(self.xml).parse()
        except NoContentError as e:
            logger.warning(f"No GPX content: {e.error}")
            raise InvalidGPXError(str(e.error)) from e
        except XMLParseError as e:
            logger.warning(f"Failed to parse GPX: {e}")
            raise GPXParseError(e.error, e.line_number) from e

        track = self._parse_root(root, grade_segment_length)
        if track is None:
            raise NoTracksFoundError("No named track found in GPX document")
        return track

    def _parse_root(self, root: XMLNode, grade_segment_length: float) -> Optional[GPXTrack]:
        track_node = root.child_for(TRACK)
        if track_node is None:
            return None
        name = track_node.child_for(NAME)
        if name is None:
            return None

        metadata = root.child_for(METADATA)
        description = track_node.child_for(DESCRIPTION)
        return GPXTrack(
            title=name.content,
            description=description.content if description is not None else None,
            date=_timestamp(metadata.child_for(TIME)) if metadata is not None else None,
            keywords=self._parse_keywords(metadata),
            track_points=self._parse_segment(track_node.child_for(TRACK_SEGMENT)),
            grade_segment_length=grade_segment_length,
        )

    def _parse_keywords(self, metadata: Optional[XMLNode]) -> List[str]:
        keywords = metadata.child_for(KEYWORDS) if metadata is not None else None
        if keywords is None:
            return []
        return keywords.content.split()

    def _parse_segment(self, segment: Optional[XMLNode]) -> List[TrackPoint]:
        if segment is None:
            return []

        nodes = segment.children_of_type(TRACK_POINT)
        points = [p for p in map(_track_point, nodes) if p is not None]
        if len(points) < len(nodes):
            logger.debug(f"Dropped {len(nodes) - len(points)} track points without latitude/longitude")

        return repair_elevations(points)


def parse_gpx(source: Union[str, bytes, Path],
              grade_segment_length: float = DEFAULT_GRADE_SEGMENT_LENGTH) -> Optional[GPXTrack]:
    """Parse GPX from text, UTF-8 bytes or a file path.

    Returns None when the source can't be read or decoded. Parser errors are
    raised as GPXParserError subclasses.
    """
    if isinstance(source, Path):
        parser = GPXFileParser.from_path(source)
    elif isinstance(source, bytes):
        parser = GPXFileParser.from_bytes(source)
    else:
        parser = GPXFileParser(source)
    if parser is None:
        return None
    return parser.parse(grade_segment_length)
