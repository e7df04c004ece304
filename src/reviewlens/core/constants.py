"""Constants and configuration values for ReviewLens."""

# Signal Extraction Constants
class SignalConstants:
    """Constants related to vocabulary signal extraction."""

    DEFAULT_LIMIT = 100  # top-N WordStats handed to taxonomy discovery
    MIN_COUNT = 3  # noise floor for unigrams and bigrams
    PMI_THRESHOLD = 2.0  # bigrams must beat this PMI (log2) to survive
    MIN_TOKEN_LENGTH = 3  # tokens of length <= 2 are dropped
    STEM_MIN_LENGTH = 4  # words shorter than this are never stemmed


# Segmentation Constants
class SegmentConstants:
    """Constants for clause segmentation."""

    MIN_CLAUSE_LENGTH = 3  # chars after trimming
    CONTRASTIVE_CONJUNCTIONS = ("but", "however", "although", "yet", "while")


# Sentiment Constants
class SentimentConstants:
    """Constants for lexicon-based sentiment scoring."""

    POSITIVE_THRESHOLD = 0.05  # compound >= this -> Positive
    NEGATIVE_THRESHOLD = -0.05  # compound <= this -> Negative
    CLAMP_LIMIT = 0.85  # magnitude cap when no intensifier is present
    CLAMP_ENABLED = False
    REASONING = "Keyword Match"


# Confidence Constants
class ConfidenceConstants:
    """Constants for per-aspect confidence scoring."""

    COVERAGE_WEIGHT = 0.7
    DIVERSITY_WEIGHT = 0.3
    COVERAGE_SATURATION = 50  # distinct reviews at which coverage reaches 1.0
    DIVERSITY_SATURATION = 3  # distinct trigger keywords at which diversity reaches 1.0


# Integrity Constants
class IntegrityConstants:
    """Constants for dataset integrity warnings."""

    REPETITION_THRESHOLD = 0.3  # share of duplicate texts
    CONCENTRATION_THRESHOLD = 0.6  # share of score mass held by the top words
    CONCENTRATION_TOP_N = 3


# Pipeline Constants
class PipelineConstants:
    """Constants for the local analysis loop."""

    BATCH_SIZE = 500  # reviews between progress/cancel checkpoints
    SAMPLE_SIZE = 15  # raw reviews shown to the taxonomy collaborator
    REVIEW_ID_TEMPLATE = "rev-{index}"


# Prompt Constants
class PromptConstants:
    """Constants for LLM prompts and templates."""

    # Prompt Versions (for cache invalidation)
    TAXONOMY_PROMPT_VERSION = "v1.2"

    TAXONOMY_MAX_TOKENS = 1500
    TAXONOMY_TEMPERATURE = 0.2
    MAX_SAMPLE_CHARS = 400  # per sample review in the prompt


# Cache Constants
class CacheConstants:
    """Constants for caching behavior."""

    CACHE_TTL_HOURS = 24  # cache time-to-live in hours
    CACHE_KEY_LENGTH = 8  # length of cache key for logging


# Error Handling Constants
class ErrorConstants:
    """Constants for error handling and retries."""

    MAX_RETRY_ATTEMPTS = 3  # maximum retry attempts
    RETRY_BASE_DELAY = 2  # base delay for exponential backoff
    REQUEST_TIMEOUT = 60  # timeout for API requests


# File and Path Constants
class FileConstants:
    """Constants for file operations."""

    CACHE_DIR = "cache/llm_cache"  # cache directory
    LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# UI Constants
class UIConstants:
    """Constants for the dashboard."""

    REVIEWS_PER_PAGE = 50
    SIMULATED_REVIEW_COUNT = 5000
    POSITIVE_PERCEPTION = 0.2  # net sentiment above this reads as "generally positive"
    NEGATIVE_PERCEPTION = -0.2
