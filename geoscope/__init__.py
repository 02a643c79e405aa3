"""Geoscope: category scoring, location disambiguation and scope detection."""

__version__ = "0.1.0"

from .errors import GeoscopeError, InvariantViolation, PreconditionError
from .classification import Category, CooccurrenceClassifier, CooccurrenceTable, LabeledInstance, ScoreSet
from .location import (
    FeatureBasedDisambiguation,
    GeoCoordinate,
    LocationCandidate,
    LocationScopePipeline,
    Mention,
    MidpointScopeDetector,
    ResolvedLocation,
)

__all__ = [
    "GeoscopeError",
    "InvariantViolation",
    "PreconditionError",
    "Category",
    "CooccurrenceClassifier",
    "CooccurrenceTable",
    "LabeledInstance",
    "ScoreSet",
    "FeatureBasedDisambiguation",
    "GeoCoordinate",
    "LocationCandidate",
    "LocationScopePipeline",
    "Mention",
    "MidpointScopeDetector",
    "ResolvedLocation",
]
