"""Vocabulary signal extraction (unigram/bigram statistics).

The extractor scans the whole corpus once and ranks candidate topic terms:

* bigrams are scored by ``count * PMI`` and kept only when their PMI clears a
  threshold, so collocations such as "battery life" survive while chance
  neighbours do not;
* unigrams are scored by ``count * log2(df + 1)``, which rewards terms that
  are spread across many reviews over terms repeated inside a few of them.

Stop-words are removed before bigram counting, so they act as phrase
boundaries. The ranked list seeds taxonomy discovery.
"""

import logging
import math
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from .constants import SignalConstants
from .models import ReviewInput, WordStat
from .tokenizer import normalize

logger = logging.getLogger(__name__)


def pmi(bigram_count: int, count_w1: int, count_w2: int, total_bigrams: int, total_unigrams: int) -> float:
    """Pointwise mutual information (log2) of an adjacent token pair."""
    if min(bigram_count, count_w1, count_w2, total_bigrams, total_unigrams) <= 0:
        return float("-inf")
    p_joint = bigram_count / total_bigrams
    p_w1 = count_w1 / total_unigrams
    p_w2 = count_w2 / total_unigrams
    return math.log2(p_joint / (p_w1 * p_w2))


def extract_signals(
    reviews: Sequence[ReviewInput],
    limit: int = SignalConstants.DEFAULT_LIMIT,
    *,
    stop_words: Optional[Iterable[str]] = None,
    min_count: int = SignalConstants.MIN_COUNT,
    pmi_threshold: float = SignalConstants.PMI_THRESHOLD,
    polarity_words: Optional[Iterable[str]] = None,
) -> List[WordStat]:
    """Rank the corpus vocabulary; returns at most ``limit`` WordStats, best first."""
    if limit <= 0 or not reviews:
        return []

    stops = frozenset(stop_words) if stop_words is not None else None
    polar = frozenset(polarity_words or ())

    unigram_counts = Counter()
    doc_freq = Counter()
    bigram_counts = Counter()
    bigram_doc_freq = Counter()

    for review in reviews:
        tokens = normalize(review.text, stops)
        if not tokens:
            continue
        unigram_counts.update(tokens)
        doc_freq.update(set(tokens))
        pairs = list(zip(tokens, tokens[1:]))
        bigram_counts.update(pairs)
        bigram_doc_freq.update(set(pairs))

    total_unigrams = sum(unigram_counts.values())
    total_bigrams = sum(bigram_counts.values())
    if total_unigrams == 0:
        logger.info("No topic vocabulary found in %d reviews", len(reviews))
        return []

    candidates = []

    for (w1, w2), count in bigram_counts.items():
        if count < min_count:
            continue
        score_pmi = pmi(count, unigram_counts[w1], unigram_counts[w2], total_bigrams, total_unigrams)
        if score_pmi <= pmi_threshold:
            continue
        candidates.append(WordStat(
            token=f"{w1} {w2}",
            count=count,
            score=count * score_pmi,
            document_frequency=bigram_doc_freq[(w1, w2)],
            kind="bigram",
        ))

    for token, count in unigram_counts.items():
        if count < min_count or token in polar:
            continue
        df = doc_freq[token]
        candidates.append(WordStat(
            token=token,
            count=count,
            score=count * math.log2(df + 1),
            document_frequency=df,
            kind="unigram",
        ))

    candidates.sort(key=lambda s: (-s.score, s.token))
    logger.debug(f"Signal extraction: {len(candidates)} candidates from {len(unigram_counts)} unigrams "
                 f"and {len(bigram_counts)} bigrams")
    return candidates[:limit]
