import math
from dataclasses import dataclass, replace
from typing import Optional

EARTH_RADIUS_M = 6371 * 1000  # mean Earth radius


@dataclass(frozen=True)
class Coordinate:
    latitude: float
    longitude: float
    elevation: Optional[float] = 0.0  # None while the elevation is unknown

    @property
    def has_elevation(self) -> bool:
        return self.elevation is not None

    def with_elevation(self, elevation: Optional[float]) -> "Coordinate":
        return replace(self, elevation=elevation)


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the great circle distance in meters between two points using the haversine formula."""
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    c = 2 * math.asin(min(1.0, math.sqrt(a)))

    return EARTH_RADIUS_M * c


def distance(a: Coordinate, b: Coordinate) -> float:
    """Surface distance in meters between two coordinates. Elevation is ignored."""
    return haversine(a.latitude, a.longitude, b.latitude, b.longitude)
