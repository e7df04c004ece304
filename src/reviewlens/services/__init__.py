"""Services for ReviewLens."""

from .llm import LLMServiceFactory, OpenAIService, FallbackLLMService

__all__ = [
    "LLMServiceFactory",
    "OpenAIService",
    "FallbackLLMService",
]
