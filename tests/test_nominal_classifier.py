"""
Unit tests for the co-occurrence classifier.
"""

import pytest

from geoscope.classification import Category, CooccurrenceClassifier, CooccurrenceTable, LabeledInstance


@pytest.fixture
def classifier():
    return CooccurrenceClassifier()


@pytest.fixture
def training_instances():
    return [
        LabeledInstance(target="A", feature_values=["x"]),
        LabeledInstance(target="A", feature_values=["x"]),
        LabeledInstance(target="B", feature_values=["x"]),
    ]


class TestTraining:
    """Test co-occurrence counting."""

    def test_counts_and_row_sums(self, classifier, training_instances):
        table = classifier.train(training_instances)
        assert table.count("A", "x") == 2
        assert table.count("B", "x") == 1
        assert table.row_sum("x") == 3
        assert table.row_sum("y") == 0
        assert table.categories == ("A", "B")

    def test_instances_without_target_are_skipped(self, classifier):
        table = classifier.train([
            LabeledInstance(target="A", feature_values=["x"]),
            LabeledInstance(target=None, feature_values=["x"]),
            LabeledInstance(target="", feature_values=["y"]),
        ])
        assert table.skipped_instances == 2
        assert table.row_sum("x") == 1
        assert table.row_sum("y") == 0

    def test_non_string_targets_become_category_names(self, classifier):
        table = classifier.train([
            LabeledInstance(target=1, feature_values=["x"]),
            LabeledInstance(target=1, feature_values=["x"]),
            LabeledInstance(target=2, feature_values=["x"]),
        ])
        assert set(table.categories) == {"1", "2"}

        scores = classifier.classify(["x"], table)
        assert len(scores) == 2
        assert scores.raw("1") == pytest.approx(2 / 3)
        assert scores.raw("2") == pytest.approx(1 / 3)

    def test_table_round_trips_through_dict(self, classifier, training_instances):
        table = classifier.train(training_instances)
        restored = CooccurrenceTable.from_dict(table.to_dict())
        assert restored.count("A", "x") == 2
        assert restored.row_sum("x") == 3
        assert set(restored.categories) == {"A", "B"}


class TestClassification:
    """Test scoring of new instances."""

    def test_conditional_shares(self, classifier, training_instances):
        table = classifier.train(training_instances)
        scores = classifier.classify(["x"], table)
        assert scores.raw("A") == pytest.approx(2 / 3)
        assert scores.raw("B") == pytest.approx(1 / 3)

    def test_scores_are_summed_not_renormalized(self, classifier):
        table = classifier.train([
            LabeledInstance(target="A", feature_values=["x", "y"]),
            LabeledInstance(target="B", feature_values=["x"]),
        ])
        scores = classifier.classify(["x", "y"], table)
        # x: A=1/2, B=1/2; y: A=1
        assert scores.raw("A") == pytest.approx(1.5)
        assert scores.raw("B") == pytest.approx(0.5)
        assert scores.normalized("A") == pytest.approx(0.75)

    def test_unseen_value_contributes_zero(self, classifier, training_instances):
        table = classifier.train(training_instances)
        scores = classifier.classify(["never-seen"], table)
        assert scores.categories() == [Category("A"), Category("B")]
        assert scores.raw("A") == 0.0
        assert scores.normalized("B") == 0.0

    def test_accepts_labeled_instance(self, classifier, training_instances):
        table = classifier.train(training_instances)
        scores = classifier.classify(LabeledInstance(target=None, feature_values=["x"]), table)
        assert scores.raw("A") == pytest.approx(2 / 3)

    def test_classification_is_deterministic(self, classifier, training_instances):
        table = classifier.train(training_instances)
        first = classifier.classify(["x", "z"], table)
        second = classifier.classify(["x", "z"], table)
        assert first.to_dict() == second.to_dict()

    def test_each_call_returns_fresh_score_set(self, classifier, training_instances):
        table = classifier.train(training_instances)
        first = classifier.classify(["x"], table)
        first.scale_raw("A", 10.0)
        second = classifier.classify(["x"], table)
        assert second.raw("A") == pytest.approx(2 / 3)
