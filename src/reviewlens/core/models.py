"""Data models for ReviewLens."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple, FrozenSet

from .constants import (
    SignalConstants,
    SentimentConstants,
    ConfidenceConstants,
    IntegrityConstants,
    PipelineConstants,
    UIConstants,
)


class SentimentLabel(Enum):
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


@dataclass(frozen=True)
class ReviewInput:
    """Represents a single raw review line."""
    id: str
    text: str


@dataclass(frozen=True)
class WordStat:
    """A ranked vocabulary signal (unigram or space-joined bigram)."""
    token: str
    count: int
    score: float
    document_frequency: int = 0
    kind: str = "unigram"

    @property
    def is_phrase(self) -> bool:
        return self.kind == "bigram"


@dataclass(frozen=True)
class AspectDefinition:
    """An aspect of the taxonomy with the keywords that trigger it."""
    name: str
    description: str = ""
    keywords: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AspectDefinition":
        keywords = data.get("keywords") or []
        if isinstance(keywords, str):
            keywords = [keywords]
        elif not isinstance(keywords, (list, tuple)):
            keywords = []
        return cls(
            name=str(data.get("name") or "").strip(),
            description=str(data.get("description") or "").strip(),
            keywords=tuple(k for k in keywords if isinstance(k, str)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "keywords": list(self.keywords)}


@dataclass(frozen=True)
class SentimentResult:
    """Polarity label plus compound score in [-1, 1]."""
    label: SentimentLabel
    score: float


@dataclass(frozen=True)
class AspectMatch:
    """Which aspect a clause belongs to and the keyword that decided it."""
    aspect: str
    trigger: str


@dataclass(frozen=True)
class AspectSegment:
    """One clause tagged with an aspect and a sentiment."""
    segment_text: str
    aspect_category: str
    sentiment: SentimentLabel
    sentiment_score: float
    trigger_word: str
    reasoning: str = SentimentConstants.REASONING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "segment_text": self.segment_text,
            "aspect_category": self.aspect_category,
            "sentiment": self.sentiment.value,
            "sentiment_score": self.sentiment_score,
            "trigger_word": self.trigger_word,
            "reasoning": self.reasoning,
        }


@dataclass(frozen=True)
class AnalyzedReview:
    """A review with at least one matched segment."""
    review_id: str
    original_text: str
    segments: Tuple[AspectSegment, ...]

    def aspects(self) -> List[str]:
        return list(dict.fromkeys(s.aspect_category for s in self.segments))


@dataclass(frozen=True)
class AspectStats:
    """Aggregated statistics for one aspect."""
    name: str
    count: int
    review_count: int
    positive: int
    negative: int
    neutral: int
    net_sentiment: float
    confidence: float
    keywords: Tuple[str, ...] = ()
    description: str = ""
    trigger_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def perception(self) -> str:
        if self.net_sentiment > UIConstants.POSITIVE_PERCEPTION:
            return "generally positive"
        if self.net_sentiment < UIConstants.NEGATIVE_PERCEPTION:
            return "generally negative"
        return "mixed"


@dataclass(frozen=True)
class AnalysisResult:
    """Immutable snapshot of one analysis run."""
    reviews: Tuple[AnalyzedReview, ...]
    aspects: Tuple[AspectStats, ...]
    top_words: Tuple[WordStat, ...]
    warnings: Tuple[str, ...]
    processed_count: int
    taxonomy: Tuple[AspectDefinition, ...] = ()
    taxonomy_source: str = "llm"

    @classmethod
    def empty(cls, taxonomy_source: str = "llm") -> "AnalysisResult":
        return cls(reviews=(), aspects=(), top_words=(), warnings=(), processed_count=0,
                   taxonomy_source=taxonomy_source)

    @property
    def total_segments(self) -> int:
        return sum(a.count for a in self.aspects)

    @property
    def overall_net_sentiment(self) -> float:
        """Segment-weighted mean of the per-aspect net sentiment."""
        total = self.total_segments
        if total == 0:
            return 0.0
        return sum(a.net_sentiment * a.count for a in self.aspects) / total

    def get_aspect(self, name: str) -> Optional[AspectStats]:
        for stats in self.aspects:
            if stats.name == name:
                return stats
        return None

    def reviews_for_aspect(self, name: Optional[str]) -> List[AnalyzedReview]:
        if not name:
            return list(self.reviews)
        return [r for r in self.reviews if any(s.aspect_category == name for s in r.segments)]

    @staticmethod
    def page(reviews: List[AnalyzedReview], page: int, per_page: int = UIConstants.REVIEWS_PER_PAGE) -> List[AnalyzedReview]:
        """1-based pagination over an already filtered review list."""
        page = max(1, int(page))
        start = (page - 1) * per_page
        return list(reviews[start:start + per_page])


@dataclass
class PipelineOptions:
    """Every tunable the local pipeline accepts."""
    stop_words: Optional[FrozenSet[str]] = None
    signal_limit: int = SignalConstants.DEFAULT_LIMIT
    min_count: int = SignalConstants.MIN_COUNT
    pmi_threshold: float = SignalConstants.PMI_THRESHOLD
    batch_size: int = PipelineConstants.BATCH_SIZE
    sample_size: int = PipelineConstants.SAMPLE_SIZE
    coverage_saturation: int = ConfidenceConstants.COVERAGE_SATURATION
    diversity_saturation: int = ConfidenceConstants.DIVERSITY_SATURATION
    positive_threshold: float = SentimentConstants.POSITIVE_THRESHOLD
    negative_threshold: float = SentimentConstants.NEGATIVE_THRESHOLD
    clamp_sentiment: bool = SentimentConstants.CLAMP_ENABLED
    clamp_limit: float = SentimentConstants.CLAMP_LIMIT
    repetition_threshold: float = IntegrityConstants.REPETITION_THRESHOLD
    concentration_threshold: float = IntegrityConstants.CONCENTRATION_THRESHOLD
    split_contrastive: bool = True
    exclude_polarity_words: bool = True

    @classmethod
    def from_settings(cls, settings=None, **overrides) -> "PipelineOptions":
        if settings is None:
            from .config import settings
        values = dict(
            signal_limit=settings.signal_limit,
            min_count=settings.min_count,
            pmi_threshold=settings.pmi_threshold,
            batch_size=settings.batch_size,
            sample_size=settings.sample_size,
            coverage_saturation=settings.coverage_saturation,
            diversity_saturation=settings.diversity_saturation,
            positive_threshold=settings.positive_threshold,
            negative_threshold=settings.negative_threshold,
            clamp_sentiment=settings.clamp_sentiment,
            clamp_limit=settings.clamp_limit,
            repetition_threshold=settings.repetition_threshold,
            concentration_threshold=settings.concentration_threshold,
        )
        values.update(overrides)
        return cls(**values)
