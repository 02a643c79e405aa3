"""
Location disambiguation and document scope detection.

- FeatureBasedDisambiguation: resolve mentions with a trained scoring model
- MidpointScopeDetector: location nearest to the spherical midpoint
- LocationScopePipeline: both steps for one document
"""

from .geo import GeoCoordinate, haversine_distance, midpoint
from .models import LocationCandidate, LocationType, Mention, ResolvedLocation
from .features import (
    FeatureInstance,
    LocationFeatureExtractor,
    make_training_instances,
)
from .disambiguation import (
    PROBABILITY_THRESHOLD,
    FeatureBasedDisambiguation,
    LocationDisambiguation,
    PopulationDisambiguation,
)
from .scope import (
    FirstScopeDetector,
    HighestPopulationScopeDetector,
    MidpointScopeDetector,
    ScopeDetector,
)
from .pipeline import LocationScopePipeline, ScopeResult, create_pipeline

__all__ = [
    # Geometry
    'GeoCoordinate',
    'haversine_distance',
    'midpoint',

    # Models
    'LocationCandidate',
    'LocationType',
    'Mention',
    'ResolvedLocation',

    # Features
    'FeatureInstance',
    'LocationFeatureExtractor',
    'make_training_instances',

    # Disambiguation
    'PROBABILITY_THRESHOLD',
    'FeatureBasedDisambiguation',
    'LocationDisambiguation',
    'PopulationDisambiguation',

    # Scope
    'FirstScopeDetector',
    'HighestPopulationScopeDetector',
    'MidpointScopeDetector',
    'ScopeDetector',

    # Pipeline
    'LocationScopePipeline',
    'ScopeResult',
    'create_pipeline',
]
