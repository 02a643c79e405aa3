"""
Location disambiguation strategies.

A strategy maps each ambiguous mention to at most one of its candidates.
Mentions that cannot be resolved are left out of the result.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..classification.nominal import CooccurrenceClassifier
from ..errors import InvariantViolation, PreconditionError
from ..registry import disambiguation
from .features import FeatureExtractor, InstanceKey, LocationFeatureExtractor, instance_key
from .models import LocationCandidate, Mention, ResolvedLocation

logger = logging.getLogger(__name__)

PROBABILITY_THRESHOLD = 0.5
TRUE_LABEL = "true"


class ScoringClassifier(Protocol):
    """Consumes a trained model: returns label -> normalized probability."""

    def classify(self, instance: Any, model: Any) -> Mapping[Any, float]:
        ...


class LocationDisambiguation(ABC):
    """Abstract base class for disambiguation strategies."""

    @abstractmethod
    def disambiguate(self, text: str, mentions: Sequence[Mention]) -> list[ResolvedLocation]:
        """
        Resolve mentions to locations.

        Args:
            text: The document text the mentions were found in
            mentions: Mentions with their candidate locations

        Returns:
            One ResolvedLocation per mention that could be resolved
        """


@disambiguation("feature")
class FeatureBasedDisambiguation(LocationDisambiguation):
    """
    Select candidates with a trained scoring model.

    Every candidate is scored by the classifier; per mention the candidate with
    the highest probability for the "true" label wins if that probability
    reaches PROBABILITY_THRESHOLD. The model is only read, so one instance can
    serve concurrent calls.
    """

    def __init__(
        self,
        model: Any,
        classifier: Optional[ScoringClassifier] = None,
        feature_extractor: Optional[FeatureExtractor] = None,
    ):
        if model is None:
            raise PreconditionError("model must not be None")
        self.model = model
        self.classifier = classifier or CooccurrenceClassifier()
        self.feature_extractor = feature_extractor or LocationFeatureExtractor()

    def disambiguate(self, text: str, mentions: Sequence[Mention]) -> list[ResolvedLocation]:
        mentions = list(mentions)
        scored = self._score_candidates(text, mentions)

        result = []
        for mention in mentions:
            highest_score = 0.0
            selected: Optional[LocationCandidate] = None

            for candidate in mention.candidates:
                key = instance_key(mention, candidate)
                if key not in scored:
                    raise InvariantViolation(f"No score for candidate {candidate.identifier} of '{mention.value}'")
                score = scored[key]
                if score > highest_score:
                    highest_score = score
                    selected = candidate

            if selected is not None and highest_score >= PROBABILITY_THRESHOLD:
                result.append(ResolvedLocation(mention, selected, highest_score))
                logger.debug(f"[+] '{mention.value}' was classified as location with {highest_score}: {selected}")
            else:
                logger.debug(f"[-] '{mention.value}' was classified as no location with {highest_score}")

        return result

    def _score_candidates(self, text: str, mentions: Sequence[Mention]) -> dict[InstanceKey, float]:
        scored: dict[InstanceKey, float] = {}
        for instance in self.feature_extractor.make_instances(text, mentions):
            classification = self.classifier.classify(instance, self.model)
            if TRUE_LABEL not in classification:
                raise InvariantViolation(f"Classifier returned no '{TRUE_LABEL}' score for instance {instance.key}")
            scored[instance.key] = float(classification[TRUE_LABEL])
        return scored


@disambiguation("population")
class PopulationDisambiguation(LocationDisambiguation):
    """Baseline: pick the most populous candidate of every mention."""

    def disambiguate(self, text: str, mentions: Sequence[Mention]) -> list[ResolvedLocation]:
        result = []
        for mention in mentions:
            if not mention.candidates:
                continue
            selected = mention.candidates[0]
            for candidate in mention.candidates[1:]:
                if (candidate.population or 0) > (selected.population or 0):
                    selected = candidate
            result.append(ResolvedLocation(mention, selected, 1.0))
        return result
