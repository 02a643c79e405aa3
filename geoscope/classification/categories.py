"""Category scores with lazily recomputed normalization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

from ..errors import PreconditionError


@dataclass(frozen=True)
class Category:
    """A classification label. Equality and hashing use the name only."""

    name: str
    prior: Optional[float] = field(default=None, compare=False)

    @classmethod
    def of(cls, value: Union["Category", str, None]) -> "Category":
        if isinstance(value, Category):
            return value
        if value is None or value == "":
            raise PreconditionError("category must not be empty")
        return cls(str(value))

    def __str__(self) -> str:
        return self.name


CategoryLike = Union[Category, str]


@dataclass
class ScoreEntry:
    """Raw and normalized score of one category inside a ScoreSet."""

    category: Category
    raw: float = 0.0
    normalized: float = 0.0


class ScoreSet:
    """
    Ordered collection of category scores for one classified instance.

    Raw scores are mutated through ``add_raw`` and ``scale_raw``, which only set
    the dirty flag. The normalized values are recomputed for every entry on the
    first read after a mutation. A ScoreSet belongs to a single classification
    call and is never shared.
    """

    def __init__(self) -> None:
        self._entries: dict[Category, ScoreEntry] = {}
        self._dirty = False

    def add_raw(self, category: CategoryLike, delta: float) -> None:
        """Add ``delta`` to the raw score, creating the entry if needed."""
        key = Category.of(category)
        entry = self._entries.get(key)
        current = entry.raw if entry is not None else 0.0
        if current + delta < 0:
            raise PreconditionError(f"raw score of {key} must not become negative: {current} + {delta}")
        if entry is None:
            self._entries[key] = ScoreEntry(key, raw=delta)
        else:
            entry.raw += delta
        self._dirty = True

    def scale_raw(self, category: CategoryLike, factor: float) -> None:
        """Multiply the raw score of an existing category by ``factor``."""
        key = Category.of(category)
        entry = self._entries.get(key)
        if entry is None:
            raise PreconditionError(f"unknown category: {key}")
        if factor < 0:
            raise PreconditionError(f"scale factor must not be negative: {factor}")
        entry.raw *= factor
        self._dirty = True

    def raw(self, category: CategoryLike) -> float:
        entry = self._entries.get(Category.of(category))
        return entry.raw if entry is not None else 0.0

    def normalized(self, category: CategoryLike) -> float:
        """Normalized score in [0, 1]; 0 for unknown categories."""
        if self._dirty:
            self._recompute()
        entry = self._entries.get(Category.of(category))
        return entry.normalized if entry is not None else 0.0

    def categories(self) -> list[Category]:
        return list(self._entries)

    def most_likely(self) -> Optional[Category]:
        """Category with the highest normalized score, first one on ties."""
        best = None
        best_score = -1.0
        for category in self._entries:
            score = self.normalized(category)
            if score > best_score:
                best = category
                best_score = score
        return best

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            category.name: {"raw": self.raw(category), "normalized": self.normalized(category)}
            for category in self._entries
        }

    def _recompute(self) -> None:
        total = sum(entry.raw for entry in self._entries.values())
        for entry in self._entries.values():
            entry.normalized = entry.raw / total if total != 0 else 0.0
        self._dirty = False

    def __contains__(self, category: object) -> bool:
        if not isinstance(category, (Category, str)):
            return False
        return Category.of(category) in self._entries if category else False

    def __getitem__(self, category: CategoryLike) -> float:
        key = Category.of(category)
        if key not in self._entries:
            raise KeyError(key.name)
        return self.normalized(key)

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        scores = ", ".join(f"{c.name}={self.raw(c):.4f}" for c in self._entries)
        return f"ScoreSet({scores})"
