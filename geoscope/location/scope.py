"""Document scope detection: pick one location representing a document."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional, Union

from ..registry import scope_detector
from .geo import midpoint
from .models import LocationCandidate, ResolvedLocation

ScopeInput = Iterable[Union[LocationCandidate, ResolvedLocation]]


def _locations(items: ScopeInput) -> list[LocationCandidate]:
    return [item.location if isinstance(item, ResolvedLocation) else item for item in items]


class ScopeDetector(ABC):
    """Abstract base class for scope detection strategies."""

    @abstractmethod
    def scope(self, locations: ScopeInput) -> Optional[LocationCandidate]:
        """Return the representative location, or None if there is none."""

    def __str__(self) -> str:
        return getattr(self, "_strategy_name", self.__class__.__name__)


@scope_detector("midpoint")
class MidpointScopeDetector(ScopeDetector):
    """
    Location closest to the spherical midpoint of all located inputs.

    The midpoint itself usually is no real place, so the result snaps to the
    nearest input location. Inputs without a coordinate are ignored.
    """

    def scope(self, locations: ScopeInput) -> Optional[LocationCandidate]:
        located = [loc for loc in _locations(locations) if loc.coordinate is not None]
        center = midpoint(loc.coordinate for loc in located)
        if center is None:
            return None

        smallest_distance = float("inf")
        selected = None
        for location in located:
            distance = center.distance(location.coordinate)
            if distance < smallest_distance:
                smallest_distance = distance
                selected = location
        return selected


@scope_detector("first")
class FirstScopeDetector(ScopeDetector):
    """First location that carries a coordinate."""

    def scope(self, locations: ScopeInput) -> Optional[LocationCandidate]:
        for location in _locations(locations):
            if location.coordinate is not None:
                return location
        return None


@scope_detector("population")
class HighestPopulationScopeDetector(ScopeDetector):
    """Most populous location with a coordinate; first one on ties."""

    def scope(self, locations: ScopeInput) -> Optional[LocationCandidate]:
        selected = None
        for location in _locations(locations):
            if location.coordinate is None:
                continue
            if selected is None or (location.population or 0) > (selected.population or 0):
                selected = location
        return selected
