"""Sentiment analysis modules."""

import logging
from typing import FrozenSet, Optional

from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer, BOOSTER_DICT

from .constants import SentimentConstants
from .models import SentimentLabel, SentimentResult
from .tokenizer import clean_text, stem

logger = logging.getLogger(__name__)

NEUTRAL_RESULT = SentimentResult(SentimentLabel.NEUTRAL, 0.0)

# Boosters only; BOOSTER_DICT also holds dampeners ("barely", "kind of") with negative weight
INTENSIFIERS = frozenset(word for word, weight in BOOSTER_DICT.items() if weight > 0)


def label_for_score(
    score: float,
    positive_threshold: float = SentimentConstants.POSITIVE_THRESHOLD,
    negative_threshold: float = SentimentConstants.NEGATIVE_THRESHOLD,
) -> SentimentLabel:
    """Map a compound score to a polarity label."""
    if score >= positive_threshold:
        return SentimentLabel.POSITIVE
    if score <= negative_threshold:
        return SentimentLabel.NEGATIVE
    return SentimentLabel.NEUTRAL


def has_intensifier(text: str) -> bool:
    """True if the text contains one of VADER's booster words ("very", "extremely", ...)."""
    lowered = " " + " ".join(clean_text(text).split()) + " "
    for booster in INTENSIFIERS:
        if f" {booster} " in lowered:
            return True
    return False


class VADERSentimentScorer:
    """VADER sentiment scorer.

    Pure and total: the same text always gets the same result, and any failure
    inside the analyzer degrades to Neutral/0.0 instead of propagating.
    """

    def __init__(
        self,
        positive_threshold: float = SentimentConstants.POSITIVE_THRESHOLD,
        negative_threshold: float = SentimentConstants.NEGATIVE_THRESHOLD,
        clamp: bool = SentimentConstants.CLAMP_ENABLED,
        clamp_limit: float = SentimentConstants.CLAMP_LIMIT,
        analyzer: Optional[SentimentIntensityAnalyzer] = None,
    ):
        self.analyzer = analyzer or SentimentIntensityAnalyzer()
        self.positive_threshold = positive_threshold
        self.negative_threshold = negative_threshold
        self.clamp = clamp
        self.clamp_limit = clamp_limit
        self._polarity_words = None

    @classmethod
    def from_options(cls, options) -> "VADERSentimentScorer":
        return cls(
            positive_threshold=options.positive_threshold,
            negative_threshold=options.negative_threshold,
            clamp=options.clamp_sentiment,
            clamp_limit=options.clamp_limit,
        )

    def _adjust(self, compound: float, text: str) -> float:
        score = max(-1.0, min(1.0, float(compound)))
        if self.clamp and abs(score) > self.clamp_limit and not has_intensifier(text):
            score = self.clamp_limit if score > 0 else -self.clamp_limit
        return score

    def score(self, text: str) -> SentimentResult:
        """Score a clause; never raises."""
        try:
            compound = self.analyzer.polarity_scores(text)["compound"]
            score = self._adjust(compound, text)
        except Exception as e:
            logger.debug(f"Sentiment scoring failed, using neutral: {e}")
            return NEUTRAL_RESULT
        return SentimentResult(label_for_score(score, self.positive_threshold, self.negative_threshold), score)

    @property
    def polarity_words(self) -> FrozenSet[str]:
        """Stemmed forms of every alphabetic word with a VADER valence.

        Used to keep opinion words out of the topic vocabulary.
        """
        if self._polarity_words is None:
            words = set()
            for word, valence in getattr(self.analyzer, "lexicon", {}).items():
                if not valence or not word.isalpha():
                    continue
                for token in clean_text(word).split():
                    words.add(stem(token))
            self._polarity_words = frozenset(words)
        return self._polarity_words
