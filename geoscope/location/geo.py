"""Spherical geometry helpers for geographic coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from ..errors import PreconditionError

EARTH_RADIUS_M = 6_371_000.0


@dataclass(frozen=True)
class GeoCoordinate:
    """Latitude/longitude pair in degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise PreconditionError(f"coordinate must be finite: {self.latitude}, {self.longitude}")
        if not -90.0 <= self.latitude <= 90.0:
            raise PreconditionError(f"latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise PreconditionError(f"longitude out of range: {self.longitude}")

    def distance(self, other: "GeoCoordinate") -> float:
        """Great-circle distance in meters."""
        return haversine_distance(self, other)

    def to_unit_vector(self) -> tuple[float, float, float]:
        lat = math.radians(self.latitude)
        lon = math.radians(self.longitude)
        return (math.cos(lat) * math.cos(lon), math.cos(lat) * math.sin(lon), math.sin(lat))


def haversine_distance(first: GeoCoordinate, second: GeoCoordinate) -> float:
    lat1 = math.radians(first.latitude)
    lat2 = math.radians(second.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(second.longitude - first.longitude)

    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # rounding can push a slightly above 1 for antipodal points
    a = min(1.0, a)
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def midpoint(coordinates: Iterable[GeoCoordinate]) -> Optional[GeoCoordinate]:
    """
    Spherical midpoint of the given coordinates.

    Each coordinate is mapped to a unit vector, the vectors are averaged and the
    mean vector is converted back to latitude/longitude. Returns None for an
    empty input.
    """
    x = y = z = 0.0
    count = 0
    for coordinate in coordinates:
        cx, cy, cz = coordinate.to_unit_vector()
        x += cx
        y += cy
        z += cz
        count += 1

    if count == 0:
        return None

    x /= count
    y /= count
    z /= count
    longitude = math.atan2(y, x)
    latitude = math.atan2(z, math.hypot(x, y))
    return GeoCoordinate(math.degrees(latitude), math.degrees(longitude))
