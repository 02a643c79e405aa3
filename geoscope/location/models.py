"""Data models for location mentions and their gazetteer candidates."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .geo import GeoCoordinate


class LocationType(str, Enum):
    """Gazetteer place types."""
    CONTINENT = "continent"
    COUNTRY = "country"
    UNIT = "unit"  # administrative division
    CITY = "city"
    POI = "poi"
    LANDMARK = "landmark"
    REGION = "region"
    STREET = "street"
    ZIP = "zip"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class LocationCandidate:
    """One real-world place a mention could refer to."""

    identifier: int
    name: str
    coordinate: Optional[GeoCoordinate] = None
    location_type: Optional[LocationType] = None
    population: Optional[int] = None
    # gazetteer ids from the root down to the direct parent
    ancestor_ids: tuple[int, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.identifier,
            "name": self.name,
            "latitude": self.coordinate.latitude if self.coordinate else None,
            "longitude": self.coordinate.longitude if self.coordinate else None,
            "type": self.location_type.value if self.location_type else None,
            "population": self.population,
            "ancestor_ids": list(self.ancestor_ids),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LocationCandidate":
        coordinate = None
        if data.get("latitude") is not None and data.get("longitude") is not None:
            coordinate = GeoCoordinate(float(data["latitude"]), float(data["longitude"]))
        location_type = LocationType(data["type"]) if data.get("type") else None
        return cls(
            identifier=int(data["id"]),
            name=data["name"],
            coordinate=coordinate,
            location_type=location_type,
            population=data.get("population"),
            ancestor_ids=tuple(data.get("ancestor_ids", ())),
        )


@dataclass(frozen=True)
class Mention:
    """
    A text span believed to reference a place, with its candidates.

    Candidate order is the iteration order used for tie-breaking; it is
    insertion order and callers should not rely on it being meaningful.
    """

    start: int
    end: int
    value: str
    candidates: tuple[LocationCandidate, ...] = field(default=(), compare=False)

    @property
    def span(self) -> tuple[int, int]:
        return (self.start, self.end)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Mention":
        return cls(
            start=int(data["start"]),
            end=int(data["end"]),
            value=data["value"],
            candidates=tuple(LocationCandidate.from_dict(c) for c in data.get("candidates", [])),
        )


@dataclass(frozen=True)
class ResolvedLocation:
    """A mention together with the candidate it was resolved to."""

    mention: Mention
    location: LocationCandidate
    score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "mention": {"start": self.mention.start, "end": self.mention.end, "value": self.mention.value},
            "location": self.location.to_dict(),
            "score": self.score,
        }
