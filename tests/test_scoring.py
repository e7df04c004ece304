"""Tests for scoring module."""

import math

import pytest
from reviewlens.core.models import AnalyzedReview, AspectDefinition, AspectSegment, SentimentLabel
from reviewlens.core.scoring import aggregate_aspects, compute_confidence, sentiment_distribution


def _segment(aspect, score, trigger):
    if score >= 0.05:
        label = SentimentLabel.POSITIVE
    elif score <= -0.05:
        label = SentimentLabel.NEGATIVE
    else:
        label = SentimentLabel.NEUTRAL
    return AspectSegment(f"{trigger} clause", aspect, label, score, trigger)


TAXONOMY = [
    AspectDefinition("Taste", "How it tastes", ("taste", "flavor", "sweet")),
    AspectDefinition("Packaging", "", ("box",)),
    AspectDefinition("Smell", "", ("smell",)),
]


def test_compute_confidence_bounds():
    """Confidence stays in [0, 1]."""
    assert compute_confidence(0, 0) == 0.0
    assert compute_confidence(50, 3) == pytest.approx(1.0)
    assert compute_confidence(10_000, 10) == pytest.approx(1.0)


def test_compute_confidence_single_phrase_penalty():
    """Many reviews through one repeated keyword cap out at 0.7 + 0.1."""
    assert compute_confidence(1000, 1) == pytest.approx(0.8)
    assert compute_confidence(1000, 1) < compute_confidence(1000, 3)


def test_compute_confidence_coverage():
    expected = 0.7 * math.log2(8) / math.log2(50) + 0.3 * (2 / 3)
    assert compute_confidence(7, 2) == pytest.approx(expected)


def test_compute_confidence_custom_saturation():
    assert compute_confidence(3, 1, coverage_saturation=4, diversity_saturation=1) == pytest.approx(1.0)


class TestAggregateAspects:
    """Test aggregate_aspects()."""

    def setup_method(self):
        self.reviews = [
            AnalyzedReview("rev-1", "...", (
                _segment("Taste", 0.6, "taste"),
                _segment("Packaging", -0.4, "box"),
            )),
            AnalyzedReview("rev-2", "...", (
                _segment("Taste", 0.2, "flavor"),
                _segment("Taste", -0.2, "taste"),
            )),
            AnalyzedReview("rev-3", "...", (
                _segment("Taste", 0.0, "sweet"),
            )),
        ]
        self.stats = aggregate_aspects(self.reviews, TAXONOMY)

    def test_sorted_by_count(self):
        assert [s.name for s in self.stats] == ["Taste", "Packaging", "Smell"]

    def test_counts(self):
        taste = self.stats[0]
        assert taste.count == 4
        assert taste.review_count == 3
        assert (taste.positive, taste.negative, taste.neutral) == (2, 1, 1)
        assert taste.net_sentiment == pytest.approx(0.15)
        assert taste.trigger_counts == {"taste": 2, "flavor": 1, "sweet": 1}
        assert taste.keywords == ("taste", "flavor", "sweet")
        assert taste.description == "How it tastes"

    def test_unmatched_aspect_has_zero_row(self):
        smell = self.stats[2]
        assert smell.count == 0
        assert smell.net_sentiment == 0.0
        assert smell.confidence == 0.0

    def test_conservation(self):
        assert sum(s.count for s in self.stats) == sum(len(r.segments) for r in self.reviews)

    def test_bounds(self):
        for s in self.stats:
            assert 0.0 <= s.confidence <= 1.0
            assert -1.0 <= s.net_sentiment <= 1.0

    def test_unknown_aspect_is_kept(self):
        reviews = [AnalyzedReview("rev-1", "...", (_segment("Shipping", -0.5, "late"),))]
        stats = aggregate_aspects(reviews, TAXONOMY)
        assert sum(s.count for s in stats) == 1
        assert stats[0].name == "Shipping"
        assert stats[0].keywords == ()

    def test_ties_keep_taxonomy_order(self):
        stats = aggregate_aspects([], TAXONOMY)
        assert [s.name for s in stats] == ["Taste", "Packaging", "Smell"]


def test_sentiment_distribution():
    stats = aggregate_aspects([AnalyzedReview("rev-1", "...", (_segment("Packaging", -0.4, "box"),))], TAXONOMY)
    distribution = sentiment_distribution(stats)
    assert distribution["Packaging"] == {"Positive": 0, "Negative": 1, "Neutral": 0}
    assert list(distribution) == ["Packaging", "Taste", "Smell"]


if __name__ == "__main__":
    pytest.main([__file__])
