"""
Unit tests for ScoreSet normalization and category handling.
"""

import pytest

from geoscope.classification import Category, ScoreSet
from geoscope.errors import PreconditionError


class TestCategory:
    """Test category identity."""

    def test_equality_ignores_prior(self):
        assert Category("A", prior=0.2) == Category("A", prior=0.9)
        assert hash(Category("A", prior=0.2)) == hash(Category("A"))

    def test_of_accepts_strings(self):
        assert Category.of("A") == Category("A")

    def test_of_rejects_empty(self):
        with pytest.raises(PreconditionError):
            Category.of(None)
        with pytest.raises(PreconditionError):
            Category.of("")


class TestScoreSetMutation:
    """Test raw score mutation."""

    def test_add_raw_creates_entry(self):
        scores = ScoreSet()
        scores.add_raw("A", 2.0)
        assert scores.raw("A") == 2.0
        assert scores.categories() == [Category("A")]

    def test_add_raw_accumulates_including_negative(self):
        scores = ScoreSet()
        scores.add_raw("A", 2.0)
        scores.add_raw("A", -0.5)
        assert scores.raw("A") == 1.5

    def test_scale_raw(self):
        scores = ScoreSet()
        scores.add_raw("A", 2.0)
        scores.scale_raw("A", 3.0)
        assert scores.raw("A") == 6.0

    def test_scale_raw_unknown_category_fails_without_mutation(self):
        scores = ScoreSet()
        scores.add_raw("A", 1.0)
        with pytest.raises(PreconditionError):
            scores.scale_raw("B", 2.0)
        assert scores.categories() == [Category("A")]
        assert scores.normalized("A") == 1.0

    def test_add_raw_rejects_negative_new_entry(self):
        scores = ScoreSet()
        scores.add_raw("A", 2.0)
        with pytest.raises(PreconditionError):
            scores.add_raw("B", -1.0)
        assert "B" not in scores
        assert scores.normalized("A") == 1.0

    def test_add_raw_rejects_going_below_zero(self):
        scores = ScoreSet()
        scores.add_raw("A", 1.0)
        with pytest.raises(PreconditionError):
            scores.add_raw("A", -1.5)
        assert scores.raw("A") == 1.0

    def test_scale_raw_rejects_negative_factor(self):
        scores = ScoreSet()
        scores.add_raw("A", 2.0)
        with pytest.raises(PreconditionError):
            scores.scale_raw("A", -1.0)
        assert scores.raw("A") == 2.0

    def test_normalized_values_stay_in_unit_interval(self):
        scores = ScoreSet()
        scores.add_raw("A", 2.0)
        scores.add_raw("B", 0.5)
        scores.add_raw("A", -1.0)
        scores.scale_raw("B", 4.0)
        scores.add_raw("C", 0.0)
        for category in scores:
            assert 0.0 <= scores.normalized(category) <= 1.0

    def test_categories_keep_insertion_order(self):
        scores = ScoreSet()
        for name in ["C", "A", "B"]:
            scores.add_raw(name, 1.0)
        scores.add_raw("A", 5.0)
        assert [c.name for c in scores.categories()] == ["C", "A", "B"]


class TestScoreSetNormalization:
    """Test lazy normalization."""

    def test_normalized_sums_to_one(self):
        scores = ScoreSet()
        scores.add_raw("A", 1.0)
        scores.add_raw("B", 3.0)
        scores.add_raw("C", 0.0)
        total = sum(scores.normalized(c) for c in scores.categories())
        assert total == pytest.approx(1.0)
        assert scores.normalized("B") == pytest.approx(0.75)

    def test_all_zero_gives_zero(self):
        scores = ScoreSet()
        scores.add_raw("A", 0.0)
        scores.add_raw("B", 0.0)
        assert scores.normalized("A") == 0.0
        assert scores.normalized("B") == 0.0

    def test_unknown_category_is_zero(self):
        scores = ScoreSet()
        scores.add_raw("A", 1.0)
        assert scores.normalized("missing") == 0.0

    def test_empty_set(self):
        scores = ScoreSet()
        assert scores.normalized("A") == 0.0
        assert scores.most_likely() is None
        assert len(scores) == 0

    def test_normalized_is_idempotent(self):
        scores = ScoreSet()
        scores.add_raw("A", 1.0)
        scores.add_raw("B", 2.0)
        first = scores.normalized("A")
        second = scores.normalized("A")
        assert first == second
        assert scores.raw("A") == 1.0
        assert scores.raw("B") == 2.0

    def test_mutation_after_read_is_reflected(self):
        scores = ScoreSet()
        scores.add_raw("A", 1.0)
        scores.add_raw("B", 1.0)
        assert scores.normalized("A") == pytest.approx(0.5)

        scores.scale_raw("B", 3.0)
        assert scores.normalized("A") == pytest.approx(0.25)
        assert scores.normalized("B") == pytest.approx(0.75)

        scores.add_raw("C", 4.0)
        assert scores.normalized("A") == pytest.approx(0.125)


class TestScoreSetMappingAccess:
    """Test label -> probability mapping behaviour."""

    def test_contains_and_getitem(self):
        scores = ScoreSet()
        scores.add_raw("true", 3.0)
        scores.add_raw("false", 1.0)
        assert "true" in scores
        assert "maybe" not in scores
        assert scores["true"] == pytest.approx(0.75)

    def test_getitem_unknown_raises_key_error(self):
        with pytest.raises(KeyError):
            ScoreSet()["true"]

    def test_most_likely_first_wins_on_tie(self):
        scores = ScoreSet()
        scores.add_raw("A", 1.0)
        scores.add_raw("B", 1.0)
        assert scores.most_likely() == Category("A")

    def test_to_dict(self):
        scores = ScoreSet()
        scores.add_raw("A", 1.0)
        scores.add_raw("B", 3.0)
        assert scores.to_dict() == {
            "A": {"raw": 1.0, "normalized": 0.25},
            "B": {"raw": 3.0, "normalized": 0.75},
        }
