"""
Feature extraction for (mention, candidate) pairs.

Every candidate of every mention becomes one FeatureInstance. Features are
nominal strings so the instances can be fed to the co-occurrence classifier.
"""

from __future__ import annotations

import logging
import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, Sequence

from ..classification.nominal import LabeledInstance
from .models import LocationCandidate, Mention

logger = logging.getLogger(__name__)

InstanceKey = tuple[int, int, int]

DEFAULT_RADII_KM = (10, 50, 100, 250)
ACRONYM_PATTERN = re.compile(r"[A-Z]+|([A-Z]\.)+")

# gold locations closer than this count as the same place
SAME_PLACE_DISTANCE_KM = 50


def instance_key(mention: Mention, candidate: LocationCandidate) -> InstanceKey:
    """Join key from a feature instance back to its (mention, candidate) pair."""
    return (mention.start, mention.end, candidate.identifier)


@dataclass
class FeatureInstance:
    """Nominal features describing one candidate of one mention."""

    key: InstanceKey
    mention: Mention
    location: LocationCandidate
    features: dict[str, str] = field(default_factory=dict)

    def nominal_values(self) -> list[str]:
        return [f"{name}={value}" for name, value in self.features.items()]

    def to_labeled(self, target: Optional[str]) -> LabeledInstance:
        return LabeledInstance(target=target, feature_values=self.nominal_values())


class FeatureExtractor(Protocol):
    def make_instances(self, text: str, mentions: Sequence[Mention]) -> Iterable[FeatureInstance]:
        ...


def normalize_name(value: str) -> str:
    return " ".join(value.lower().split())


def _bucket(count: int, cap: int = 5) -> str:
    return str(count) if count < cap else f"{cap}+"


def _magnitude(population: Optional[int]) -> str:
    if not population or population <= 0:
        return "none"
    return str(int(math.log10(population)))


def _within(location: LocationCandidate, other: LocationCandidate, radius_km: float) -> bool:
    if location.coordinate is None or other.coordinate is None:
        return False
    return location.coordinate.distance(other.coordinate) <= radius_km * 1000


class LocationFeatureExtractor:
    """Default feature extractor for location disambiguation."""

    def __init__(self, radii_km: Sequence[float] = DEFAULT_RADII_KM):
        self.radii_km = tuple(radii_km)

    def make_instances(self, text: str, mentions: Sequence[Mention]) -> list[FeatureInstance]:
        value_counts = Counter(normalize_name(m.value) for m in mentions)
        all_locations = {c.identifier: c for m in mentions for c in m.candidates}

        instances = []
        for mention in mentions:
            for candidate in mention.candidates:
                others = [loc for loc_id, loc in all_locations.items() if loc_id != candidate.identifier]
                instances.append(FeatureInstance(
                    key=instance_key(mention, candidate),
                    mention=mention,
                    location=candidate,
                    features=self._features(mention, candidate, others, value_counts),
                ))

        logger.debug(f"Created {len(instances)} feature instances for {len(mentions)} mentions")
        return instances

    def _features(
        self,
        mention: Mention,
        candidate: LocationCandidate,
        others: list[LocationCandidate],
        value_counts: Counter,
    ) -> dict[str, str]:
        location_type = candidate.location_type.value if candidate.location_type else "unknown"
        features = {
            "locationType": location_type,
            "populationMagnitude": _magnitude(candidate.population),
            "numTokens": _bucket(len(mention.value.split())),
            "acronym": str(bool(ACRONYM_PATTERN.fullmatch(mention.value))).lower(),
            "ambiguity": _bucket(len(mention.candidates)),
            "count": _bucket(value_counts[normalize_name(mention.value)]),
            "parentOccurs": str(_parent_occurs(candidate, others)).lower(),
            "ancestorOccurs": str(_ancestor_occurs(candidate, others)).lower(),
            "siblingOccurs": str(_sibling_count(candidate, others) > 0).lower(),
        }
        for radius in self.radii_km:
            count = sum(1 for other in others if _within(candidate, other, radius))
            features[f"numLocIn{radius:g}"] = _bucket(count)
        return features


def _parent_occurs(location: LocationCandidate, others: list[LocationCandidate]) -> bool:
    if not location.ancestor_ids:
        return False
    parent_id = location.ancestor_ids[-1]
    return any(other.identifier == parent_id for other in others)


def _ancestor_occurs(location: LocationCandidate, others: list[LocationCandidate]) -> bool:
    ancestors = set(location.ancestor_ids)
    return any(other.identifier in ancestors for other in others)


def _sibling_count(location: LocationCandidate, others: list[LocationCandidate]) -> int:
    if not location.ancestor_ids:
        return 0
    return sum(1 for other in others if other.ancestor_ids == location.ancestor_ids)


def make_training_instances(
    text: str,
    mentions: Sequence[Mention],
    gold: Iterable[LocationCandidate],
    extractor: Optional[FeatureExtractor] = None,
) -> list[LabeledInstance]:
    """
    Label every (mention, candidate) instance against gold locations.

    An instance is "true" when a gold location with a common name lies within
    SAME_PLACE_DISTANCE_KM of the candidate, otherwise "false". Candidates
    without a coordinate are always "false".
    """
    extractor = extractor or LocationFeatureExtractor()
    gold = list(gold)
    labeled = []
    positive = 0
    for instance in extractor.make_instances(text, mentions):
        is_positive = any(_same_place(instance.location, location) for location in gold)
        positive += is_positive
        labeled.append(instance.to_labeled(str(is_positive).lower()))

    if labeled:
        logger.info(f"{positive} positive instances in {len(labeled)} ({positive / len(labeled) * 100:.2f}%)")
    return labeled


def _same_place(candidate: LocationCandidate, gold: LocationCandidate) -> bool:
    if candidate.coordinate is None or gold.coordinate is None:
        return False
    if normalize_name(candidate.name) != normalize_name(gold.name):
        return False
    return _within(candidate, gold, SAME_PLACE_DISTANCE_KM)
