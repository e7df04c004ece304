"""Configuration management for ReviewLens."""

from pydantic_settings import BaseSettings
from pydantic import Field

from .constants import (
    SignalConstants,
    SentimentConstants,
    ConfidenceConstants,
    IntegrityConstants,
    PipelineConstants,
    FileConstants,
)


class Settings(BaseSettings):
    """Application settings."""

    # OpenAI API
    openai_api_key: str = Field("", description="OpenAI API key")
    OPENAI_API_KEY: str = Field("", description="OpenAI API key (alternative naming)")
    openai_model: str = Field("gpt-4o-mini", description="Chat model used for taxonomy discovery")

    @property
    def effective_openai_key(self) -> str:
        """Get the effective OpenAI API key from either field."""
        return self.openai_api_key or self.OPENAI_API_KEY

    # Logging
    log_level: str = Field("INFO", description="Logging level")
    cache_dir: str = Field(FileConstants.CACHE_DIR, description="Directory for cached LLM responses")

    # Signal extraction
    signal_limit: int = Field(SignalConstants.DEFAULT_LIMIT, description="Number of WordStats to keep")
    min_count: int = Field(SignalConstants.MIN_COUNT, description="Noise floor for unigram/bigram counts")
    pmi_threshold: float = Field(SignalConstants.PMI_THRESHOLD, description="Minimum PMI for a bigram")

    # Local pass
    batch_size: int = Field(PipelineConstants.BATCH_SIZE, description="Reviews between progress checkpoints")
    sample_size: int = Field(PipelineConstants.SAMPLE_SIZE, description="Raw reviews sampled for discovery")

    # Sentiment
    positive_threshold: float = Field(SentimentConstants.POSITIVE_THRESHOLD, description="Compound score for Positive")
    negative_threshold: float = Field(SentimentConstants.NEGATIVE_THRESHOLD, description="Compound score for Negative")
    clamp_sentiment: bool = Field(SentimentConstants.CLAMP_ENABLED, description="Clamp extreme scores without intensifiers")
    clamp_limit: float = Field(SentimentConstants.CLAMP_LIMIT, description="Magnitude cap used when clamping")

    # Confidence
    coverage_saturation: int = Field(ConfidenceConstants.COVERAGE_SATURATION, description="Reviews for full coverage")
    diversity_saturation: int = Field(ConfidenceConstants.DIVERSITY_SATURATION, description="Keywords for full diversity")

    # Integrity
    repetition_threshold: float = Field(IntegrityConstants.REPETITION_THRESHOLD, description="Duplicate share that triggers a warning")
    concentration_threshold: float = Field(IntegrityConstants.CONCENTRATION_THRESHOLD, description="Top-3 score share that triggers a warning")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
