"""ReviewLens - explainable aspect-based sentiment analysis for review corpora."""

__version__ = "1.0.0"
__author__ = "ReviewLens Team"

from .core.models import *
from .core.config import settings
from .core.pipeline import run_analysis
from .services.llm import LLMServiceFactory

__all__ = [
    "settings",
    "run_analysis",
    "LLMServiceFactory",
]
