"""Dataset integrity checks (duplication and vocabulary concentration)."""

import logging
from typing import List, Sequence

from .constants import IntegrityConstants
from .models import ReviewInput, WordStat

logger = logging.getLogger(__name__)


def _fingerprint(text: str) -> str:
    return " ".join((text or "").lower().split())


def repetition_rate(reviews: Sequence[ReviewInput]) -> float:
    """Share of reviews that duplicate an earlier review (case/whitespace-insensitive)."""
    if not reviews:
        return 0.0
    unique = len({_fingerprint(r.text) for r in reviews})
    return 1.0 - unique / len(reviews)


def concentration_ratio(top_words: Sequence[WordStat], top_n: int = IntegrityConstants.CONCENTRATION_TOP_N) -> float:
    """Share of the summed score mass held by the ``top_n`` best WordStats."""
    total = sum(max(0.0, w.score) for w in top_words)
    if total <= 0:
        return 0.0
    head = sorted((max(0.0, w.score) for w in top_words), reverse=True)[:top_n]
    return sum(head) / total


def check_integrity(
    reviews: Sequence[ReviewInput],
    top_words: Sequence[WordStat],
    repetition_threshold: float = IntegrityConstants.REPETITION_THRESHOLD,
    concentration_threshold: float = IntegrityConstants.CONCENTRATION_THRESHOLD,
) -> List[str]:
    """Advisory warnings about the corpus; never blocks the analysis."""
    warnings = []

    rate = repetition_rate(reviews)
    if rate > repetition_threshold:
        warnings.append(
            f"High duplication: {rate:.0%} of reviews repeat an earlier review "
            f"(threshold {repetition_threshold:.0%}). Results may be skewed by copied or spam content."
        )

    ratio = concentration_ratio(top_words)
    if ratio > concentration_threshold:
        head = ", ".join(w.token for w in top_words[:IntegrityConstants.CONCENTRATION_TOP_N])
        warnings.append(
            f"Low vocabulary entropy: the top terms ({head}) hold {ratio:.0%} of the signal mass "
            f"(threshold {concentration_threshold:.0%}). The dataset may be synthetic or spammy."
        )

    for warning in warnings:
        logger.warning(warning)
    return warnings
