"""End-to-end analysis pipeline.

Two passes over the corpus:

1. a global pass (``extract_signals``) that ranks vocabulary signals and
   seeds taxonomy discovery;
2. a local pass (``analyze_reviews``) that segments every review into
   clauses, matches each clause against the taxonomy and scores its
   sentiment, reporting progress every ``batch_size`` reviews.

All per-run state lives inside these calls; nothing is shared between runs.
"""

import logging
import random
from dataclasses import dataclass
from typing import Callable, Generator, Iterable, List, Optional, Sequence, Tuple, Union

from .aspect import KeywordMatcher, validate_taxonomy
from .constants import PipelineConstants, SentimentConstants
from .errors import AnalysisCancelled, CollaboratorError
from .integrity import check_integrity
from .models import (
    AnalysisResult,
    AnalyzedReview,
    AspectDefinition,
    AspectSegment,
    AspectStats,
    PipelineOptions,
    ReviewInput,
    WordStat,
)
from .scoring import aggregate_aspects
from .segmenter import segment_clauses
from .sentiment import VADERSentimentScorer
from .signals import extract_signals

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]
CancelCheck = Callable[[], bool]
DiscoverFn = Callable[[List[str], List[str]], Sequence[AspectDefinition]]


@dataclass(frozen=True)
class Progress:
    """Checkpoint emitted by the local pass."""
    processed: int
    total: int

    @property
    def percent(self) -> int:
        if self.total <= 0:
            return 100
        return min(100, int(self.processed * 100 / self.total))


def build_reviews(lines: Iterable[str]) -> List[ReviewInput]:
    """Drop blank lines and assign stable ``rev-{n}`` ids (1-based)."""
    reviews = []
    for line in lines:
        if line is None or not str(line).strip():
            continue
        index = len(reviews) + 1
        reviews.append(ReviewInput(id=PipelineConstants.REVIEW_ID_TEMPLATE.format(index=index), text=str(line)))
    return reviews


def sample_reviews(texts: Sequence[str], size: int = PipelineConstants.SAMPLE_SIZE, seed: Optional[int] = None) -> List[str]:
    """Random sample of distinct positions, shown to the taxonomy collaborator."""
    size = max(0, min(size, len(texts)))
    rng = random.Random(seed)
    return [texts[i] for i in rng.sample(range(len(texts)), size)]


def analyze_review(review: ReviewInput, matcher: KeywordMatcher, scorer: VADERSentimentScorer,
                   split_contrastive: bool = True) -> Optional[AnalyzedReview]:
    """Tag every clause of one review; None when no clause matches."""
    segments = []
    for clause in segment_clauses(review.text, split_contrastive=split_contrastive):
        match = matcher.match(clause)
        if match is None:
            continue
        sentiment = scorer.score(clause)
        segments.append(AspectSegment(
            segment_text=clause,
            aspect_category=match.aspect,
            sentiment=sentiment.label,
            sentiment_score=sentiment.score,
            trigger_word=match.trigger,
            reasoning=SentimentConstants.REASONING,
        ))
    if not segments:
        return None
    return AnalyzedReview(review_id=review.id, original_text=review.text, segments=tuple(segments))


def iter_analysis(
    reviews: Sequence[ReviewInput],
    taxonomy: Sequence[AspectDefinition],
    options: Optional[PipelineOptions] = None,
    scorer: Optional[VADERSentimentScorer] = None,
) -> Generator[Progress, None, Tuple[List[AnalyzedReview], List[AspectStats]]]:
    """Generator form of the local pass.

    Yields a Progress at the start, after every ``batch_size`` reviews and at
    completion; the generator's return value is ``(analyzed_reviews, stats)``.
    """
    options = options or PipelineOptions()
    scorer = scorer or VADERSentimentScorer.from_options(options)
    matcher = KeywordMatcher(taxonomy)
    batch_size = max(1, int(options.batch_size))
    total = len(reviews)

    analyzed = []
    yield Progress(0, total)
    for i, review in enumerate(reviews, start=1):
        result = analyze_review(review, matcher, scorer, options.split_contrastive)
        if result is not None:
            analyzed.append(result)
        if i % batch_size == 0 and i < total:
            yield Progress(i, total)
    yield Progress(total, total)

    stats = aggregate_aspects(analyzed, matcher.taxonomy, options.coverage_saturation, options.diversity_saturation)
    return analyzed, stats


def analyze_reviews(
    reviews: Sequence[ReviewInput],
    taxonomy: Sequence[AspectDefinition],
    options: Optional[PipelineOptions] = None,
    on_progress: Optional[ProgressCallback] = None,
    should_cancel: Optional[CancelCheck] = None,
    scorer: Optional[VADERSentimentScorer] = None,
) -> Tuple[List[AnalyzedReview], List[AspectStats]]:
    """Run the local pass, reporting progress and honouring cancellation at checkpoints."""
    steps = iter_analysis(reviews, taxonomy, options, scorer)
    last_percent = 0
    while True:
        try:
            progress = next(steps)
        except StopIteration as stop:
            return stop.value
        last_percent = max(last_percent, progress.percent)
        if on_progress:
            on_progress(last_percent)
        if should_cancel and progress.processed < progress.total and should_cancel():
            steps.close()
            logger.info(f"Analysis cancelled at {progress.processed}/{progress.total} reviews")
            raise AnalysisCancelled(progress.processed, progress.total)


def discover_taxonomy(discover: DiscoverFn, top_words: Sequence[WordStat], samples: List[str]) -> List[AspectDefinition]:
    """Call the taxonomy collaborator; every failure surfaces as CollaboratorError."""
    tokens = [w.token for w in top_words]
    try:
        aspects = discover(tokens, samples)
    except CollaboratorError:
        raise
    except Exception as e:
        raise CollaboratorError(f"Taxonomy discovery failed: {e}") from e
    if not isinstance(aspects, (list, tuple)):
        raise CollaboratorError(f"Taxonomy discovery returned malformed data: {type(aspects).__name__}")
    if any(not isinstance(a, (dict, AspectDefinition)) for a in aspects):
        raise CollaboratorError("Taxonomy discovery returned non-object aspects")
    return validate_taxonomy(aspects)


def run_analysis(
    corpus: Union[Sequence[str], Sequence[ReviewInput]],
    taxonomy: Optional[Sequence[AspectDefinition]] = None,
    discover: Optional[DiscoverFn] = None,
    options: Optional[PipelineOptions] = None,
    on_progress: Optional[ProgressCallback] = None,
    should_cancel: Optional[CancelCheck] = None,
    taxonomy_source: Optional[str] = None,
    seed: Optional[int] = None,
) -> AnalysisResult:
    """Analyze a corpus and return an immutable AnalysisResult.

    Either ``taxonomy`` or ``discover`` must be given. An empty corpus gives an
    empty result (with a final 100% progress report) instead of an error.
    """
    if taxonomy is None and discover is None:
        raise ValueError("run_analysis needs a taxonomy or a discover callable")
    options = options or PipelineOptions.from_settings()
    source = taxonomy_source or ("provided" if taxonomy is not None else "llm")

    if all(isinstance(r, ReviewInput) for r in corpus):
        reviews = [r for r in corpus if r.text and r.text.strip()]
    else:
        reviews = build_reviews(corpus)

    if not reviews:
        logger.info("Empty corpus, nothing to analyze")
        if on_progress:
            on_progress(100)
        return AnalysisResult.empty(taxonomy_source=source)

    logger.info(f"Analyzing {len(reviews)} reviews")
    scorer = VADERSentimentScorer.from_options(options)

    top_words = extract_signals(
        reviews,
        options.signal_limit,
        stop_words=options.stop_words,
        min_count=options.min_count,
        pmi_threshold=options.pmi_threshold,
        polarity_words=scorer.polarity_words if options.exclude_polarity_words else None,
    )

    if taxonomy is None:
        samples = sample_reviews([r.text for r in reviews], options.sample_size, seed)
        taxonomy = discover_taxonomy(discover, top_words, samples)
    else:
        taxonomy = validate_taxonomy(taxonomy)

    warnings = []
    if not taxonomy:
        warnings.append("The taxonomy contains no usable aspects; no clause could be matched.")
        logger.warning(warnings[-1])

    analyzed, stats = analyze_reviews(reviews, taxonomy, options, on_progress, should_cancel, scorer)
    warnings.extend(check_integrity(reviews, top_words, options.repetition_threshold, options.concentration_threshold))

    logger.info(f"Matched {sum(s.count for s in stats)} segments in {len(analyzed)} of {len(reviews)} reviews")
    return AnalysisResult(
        reviews=tuple(analyzed),
        aspects=tuple(stats),
        top_words=tuple(top_words),
        warnings=tuple(warnings),
        processed_count=len(reviews),
        taxonomy=tuple(taxonomy),
        taxonomy_source=source,
    )
