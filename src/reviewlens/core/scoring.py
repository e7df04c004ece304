"""Scoring and aggregation modules."""

import logging
import math
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Sequence

from .constants import ConfidenceConstants
from .models import AnalyzedReview, AspectDefinition, AspectStats, SentimentLabel

logger = logging.getLogger(__name__)


def _coverage_score(review_count: int, saturation: int) -> float:
    """log2(n+1)/log2(saturation), capped at 1.0."""
    if review_count <= 0:
        return 0.0
    if saturation <= 1:
        return 1.0
    return min(1.0, math.log2(review_count + 1) / math.log2(saturation))


def _diversity_score(distinct_triggers: int, saturation: int) -> float:
    if distinct_triggers <= 0:
        return 0.0
    if saturation <= 0:
        return 1.0
    return min(1.0, distinct_triggers / saturation)


def compute_confidence(
    review_count: int,
    distinct_triggers: int,
    coverage_saturation: int = ConfidenceConstants.COVERAGE_SATURATION,
    diversity_saturation: int = ConfidenceConstants.DIVERSITY_SATURATION,
) -> float:
    """
    Confidence that an aspect is real rather than an artefact.

    Blend of coverage (how many distinct reviews mention it, saturating at
    ``coverage_saturation``) and diversity (how many different keywords fired,
    saturating at ``diversity_saturation``). An aspect seen in many reviews
    through a single repeated phrase never exceeds 0.8.
    """
    coverage = _coverage_score(review_count, coverage_saturation)
    diversity = _diversity_score(distinct_triggers, diversity_saturation)
    confidence = ConfidenceConstants.COVERAGE_WEIGHT * coverage + ConfidenceConstants.DIVERSITY_WEIGHT * diversity
    return max(0.0, min(1.0, confidence))


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return max(-1.0, min(1.0, sum(values) / len(values)))


def aggregate_aspects(
    reviews: Iterable[AnalyzedReview],
    taxonomy: Sequence[AspectDefinition],
    coverage_saturation: int = ConfidenceConstants.COVERAGE_SATURATION,
    diversity_saturation: int = ConfidenceConstants.DIVERSITY_SATURATION,
) -> List[AspectStats]:
    """Fold matched segments into per-aspect statistics, sorted by count desc.

    Every taxonomy aspect gets a row, even with zero matches. Segments whose
    aspect is not part of the taxonomy still get a row (appended after the
    taxonomy aspects) so that segment counts are always conserved.
    """
    order = [a.name for a in taxonomy]
    definitions = {a.name: a for a in taxonomy}
    scores = defaultdict(list)
    labels = defaultdict(Counter)
    review_ids = defaultdict(set)
    triggers = defaultdict(Counter)

    for review in reviews:
        for segment in review.segments:
            name = segment.aspect_category
            if name not in definitions and name not in scores:
                order.append(name)
            scores[name].append(segment.sentiment_score)
            labels[name][segment.sentiment] += 1
            review_ids[name].add(review.review_id)
            triggers[name][segment.trigger_word] += 1

    stats = []
    for name in order:
        definition = definitions.get(name)
        review_count = len(review_ids[name])
        stats.append(AspectStats(
            name=name,
            count=len(scores[name]),
            review_count=review_count,
            positive=labels[name][SentimentLabel.POSITIVE],
            negative=labels[name][SentimentLabel.NEGATIVE],
            neutral=labels[name][SentimentLabel.NEUTRAL],
            net_sentiment=_mean(scores[name]),
            confidence=compute_confidence(review_count, len(triggers[name]),
                                          coverage_saturation, diversity_saturation),
            keywords=definition.keywords if definition else (),
            description=definition.description if definition else "",
            trigger_counts=dict(triggers[name].most_common()),
        ))

    # stable sort keeps taxonomy order among equal counts
    stats.sort(key=lambda s: -s.count)
    return stats


def sentiment_distribution(stats: Iterable[AspectStats]) -> Dict[str, Dict[str, int]]:
    """Chart-friendly ``{aspect: {Positive, Negative, Neutral}}`` mapping."""
    return {
        s.name: {
            SentimentLabel.POSITIVE.value: s.positive,
            SentimentLabel.NEGATIVE.value: s.negative,
            SentimentLabel.NEUTRAL.value: s.neutral,
        }
        for s in stats
    }
