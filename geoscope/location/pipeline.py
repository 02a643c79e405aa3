"""
Location pipeline: disambiguate the mentions of a document, then detect its scope.
"""

import logging
import time
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from ..registry import DISAMBIGUATION, SCOPE, get_strategy
from .disambiguation import FeatureBasedDisambiguation, LocationDisambiguation
from .features import DEFAULT_RADII_KM, LocationFeatureExtractor
from .models import Mention
from .scope import MidpointScopeDetector, ScopeDetector

logger = logging.getLogger(__name__)


class ScopeResult(BaseModel):
    """Resolved locations and scope of one document."""

    generated_at: datetime = Field(default_factory=datetime.utcnow)
    source: Optional[str] = None

    mention_count: int = 0
    candidate_count: int = 0
    locations: List[Dict[str, Any]] = Field(default_factory=list)
    scope: Optional[Dict[str, Any]] = None

    disambiguation_strategy: str = ""
    scope_strategy: str = ""
    processing_time_seconds: Optional[float] = None

    # domain objects for programmatic access, not serialized
    resolved: List[Any] = Field(default_factory=list, exclude=True)
    scope_location: Optional[Any] = Field(default=None, exclude=True)

    def model_dump(self, **kwargs) -> Dict[str, Any]:
        """Override to handle datetime serialization."""
        data = super().model_dump(**kwargs)
        if isinstance(data.get('generated_at'), datetime):
            data['generated_at'] = data['generated_at'].isoformat()
        return data


class LocationScopePipeline:
    """Runs a disambiguation strategy followed by a scope detector."""

    def __init__(self, disambiguation: LocationDisambiguation, scope_detector: Optional[ScopeDetector] = None):
        self.disambiguation = disambiguation
        self.scope_detector = scope_detector or MidpointScopeDetector()

        logger.info(f"Location pipeline initialized - disambiguation: {self._name(self.disambiguation)}, "
                    f"scope: {self._name(self.scope_detector)}")

    def run(self, text: str, mentions: Sequence[Mention], source: Optional[str] = None) -> ScopeResult:
        mentions = list(mentions)
        start_time = time.time()

        resolved = self.disambiguation.disambiguate(text, mentions)
        scope = self.scope_detector.scope(resolved)

        processing_time = time.time() - start_time
        logger.info(f"Resolved {len(resolved)} of {len(mentions)} mentions in {processing_time:.3f}s")
        if scope is None:
            logger.info("No scope found")
        else:
            logger.info(f"Scope: {scope.name} ({scope.identifier})")

        return ScopeResult(
            source=source,
            mention_count=len(mentions),
            candidate_count=sum(len(m.candidates) for m in mentions),
            locations=[r.to_dict() for r in resolved],
            scope=scope.to_dict() if scope else None,
            disambiguation_strategy=self._name(self.disambiguation),
            scope_strategy=self._name(self.scope_detector),
            processing_time_seconds=processing_time,
            resolved=resolved,
            scope_location=scope,
        )

    @staticmethod
    def _name(strategy: Any) -> str:
        return getattr(strategy, "_strategy_name", strategy.__class__.__name__)


def create_pipeline(
    disambiguation_strategy: str = "feature",
    scope_strategy: str = "midpoint",
    model: Any = None,
    distance_radii_km: Sequence[float] = DEFAULT_RADII_KM,
) -> LocationScopePipeline:
    """Build a pipeline from registered strategy names."""
    disambiguation_cls = get_strategy(DISAMBIGUATION, disambiguation_strategy)
    if issubclass(disambiguation_cls, FeatureBasedDisambiguation):
        disambiguation = disambiguation_cls(model, feature_extractor=LocationFeatureExtractor(distance_radii_km))
    else:
        disambiguation = disambiguation_cls()
    scope_detector = get_strategy(SCOPE, scope_strategy)()
    return LocationScopePipeline(disambiguation, scope_detector)
