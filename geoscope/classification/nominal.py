"""
Co-occurrence classifier for nominal feature values.

Training counts how often each category co-occurs with each feature value.
Classification adds, for every category, the share of a value's occurrences
that belong to that category. The resulting raw scores are a sum of
conditional shares and are not a probability distribution; read
``ScoreSet.normalized`` when one is needed.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence, Union

from .categories import Category, ScoreSet

logger = logging.getLogger(__name__)


@dataclass
class LabeledInstance:
    """A training instance: target category plus nominal feature values."""

    target: Optional[str]
    feature_values: list[str] = field(default_factory=list)


class CooccurrenceTable:
    """Immutable (category, value) count matrix with per-value row sums."""

    def __init__(self, counts: dict[tuple[str, str], int], skipped_instances: int = 0):
        self._counts = dict(counts)
        self._row_sums: Counter[str] = Counter()
        categories: dict[str, None] = {}
        for (category, value), count in self._counts.items():
            self._row_sums[value] += count
            categories.setdefault(category, None)
        self._categories = tuple(categories)
        self.skipped_instances = skipped_instances

    @property
    def categories(self) -> tuple[str, ...]:
        return self._categories

    def count(self, category: str, value: str) -> int:
        return self._counts.get((category, value), 0)

    def row_sum(self, value: str) -> int:
        return self._row_sums.get(value, 0)

    def to_dict(self) -> dict[str, Any]:
        nested: dict[str, dict[str, int]] = defaultdict(dict)
        for (category, value), count in self._counts.items():
            nested[category][value] = count
        return {"counts": dict(nested), "skipped_instances": self.skipped_instances}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CooccurrenceTable":
        counts = {
            (category, value): int(count)
            for category, values in data.get("counts", {}).items()
            for value, count in values.items()
        }
        return cls(counts, skipped_instances=int(data.get("skipped_instances", 0)))

    def __len__(self) -> int:
        return len(self._counts)


class CooccurrenceClassifier:
    """Nominal classifier backed by a CooccurrenceTable."""

    def train(self, instances: Iterable[LabeledInstance]) -> CooccurrenceTable:
        """
        Count category/value co-occurrences.

        Instances without a target category are skipped; the number skipped is
        stored on the returned table.
        """
        counts: Counter[tuple[str, str]] = Counter()
        skipped = 0
        total = 0
        for instance in instances:
            total += 1
            target = str(instance.target) if instance.target is not None else ""
            if not target:
                skipped += 1
                continue
            for value in instance.feature_values:
                counts[(target, value)] += 1

        if skipped:
            logger.warning(f"Skipped {skipped} of {total} training instances without target category")
        logger.info(f"Trained co-occurrence table from {total - skipped} instances, {len(counts)} cells")
        return CooccurrenceTable(counts, skipped_instances=skipped)

    def classify(
        self,
        instance: Union[LabeledInstance, Sequence[str], Any],
        table: CooccurrenceTable,
    ) -> ScoreSet:
        """Score every category in ``table`` against the instance's feature values."""
        scores = ScoreSet()
        for category in table.categories:
            scores.add_raw(Category.of(category), 0.0)

        for value in _feature_values(instance):
            row_sum = table.row_sum(value)
            if row_sum == 0:
                continue
            for category in table.categories:
                scores.add_raw(category, table.count(category, value) / row_sum)

        return scores


def _feature_values(instance: Any) -> list[str]:
    if isinstance(instance, LabeledInstance):
        return instance.feature_values
    if hasattr(instance, "nominal_values"):
        return instance.nominal_values()
    return list(instance)
