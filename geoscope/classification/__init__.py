"""
Category scoring and nominal classification.

- ScoreSet: raw and normalized category scores with lazy normalization
- CooccurrenceClassifier: category/feature-value co-occurrence classifier
"""

from .categories import Category, ScoreEntry, ScoreSet
from .nominal import CooccurrenceClassifier, CooccurrenceTable, LabeledInstance

__all__ = [
    'Category',
    'ScoreEntry',
    'ScoreSet',
    'CooccurrenceClassifier',
    'CooccurrenceTable',
    'LabeledInstance',
]
