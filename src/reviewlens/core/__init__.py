"""Core modules for ReviewLens."""

from .models import *
from .config import settings
from .errors import ReviewLensError, InputError, CollaboratorError, AnalysisCancelled
from .tokenizer import normalize, stem
from .signals import extract_signals
from .segmenter import segment_clauses
from .aspect import KeywordMatcher, match_aspect, validate_taxonomy, load_taxonomy, parse_taxonomy
from .sentiment import VADERSentimentScorer
from .scoring import aggregate_aspects, compute_confidence
from .integrity import check_integrity
from .pipeline import analyze_reviews, run_analysis, build_reviews, sample_reviews

__all__ = [
    "settings",
    "ReviewInput",
    "WordStat",
    "AspectDefinition",
    "AspectSegment",
    "AnalyzedReview",
    "AspectStats",
    "AnalysisResult",
    "PipelineOptions",
    "SentimentLabel",
    "ReviewLensError",
    "InputError",
    "CollaboratorError",
    "AnalysisCancelled",
    "normalize",
    "stem",
    "extract_signals",
    "segment_clauses",
    "KeywordMatcher",
    "match_aspect",
    "validate_taxonomy",
    "load_taxonomy",
    "parse_taxonomy",
    "VADERSentimentScorer",
    "aggregate_aspects",
    "compute_confidence",
    "check_integrity",
    "analyze_reviews",
    "run_analysis",
    "build_reviews",
    "sample_reviews",
]
