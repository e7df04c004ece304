"""LLM service for taxonomy discovery."""

import hashlib
import json
import logging
import re
from textwrap import dedent
from typing import Any, List, Optional, Sequence

import openai
from diskcache import Cache
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..core.aspect import select_predefined_taxonomy, validate_taxonomy
from ..core.config import settings
from ..core.constants import CacheConstants, ErrorConstants, PromptConstants
from ..core.errors import CollaboratorError
from ..core.models import AspectDefinition

logger = logging.getLogger(__name__)

TAXONOMY_SYSTEM_PROMPT = (
    "You are an expert NLP Data Scientist. "
    "You prefer broad, comprehensive categories over tiny, fragmented ones."
)

TAXONOMY_PROMPT = dedent("""
I have a large dataset of product reviews. Define an Aspect Taxonomy (classification rules)
so that a rule-based keyword matcher can run over the full dataset.

Context 1: High-confidence vocabulary signals.
These are the highest-scoring nouns and 2-word phrases of the dataset ({review_count} reviews),
already filtered for stop words, verbs and opinion words:
[{signals}]

Context 2: Qualitative context. A few actual review snippets:
{samples}

Task:
1. Use the vocabulary signals to find the natural clusters of conversation.
   - e.g. "shipping", "box", "packaging" -> a "Shipping & Packaging" aspect.
   - e.g. "taste", "flavor", "sweet" -> a "Taste & Flavor" aspect.
2. Create as many aspects as the data needs; more for complex data, fewer for simple data.
3. For EACH aspect give a list of strict keywords.
   - You MUST include the exact words/phrases from the vocabulary signals in the relevant aspect.
   - Add synonyms and singular/plural variants so similar mentions are caught.

Return ONLY JSON with this exact schema:
{{"aspects": [{{"name": str, "description": str, "keywords": [str]}}]}}
""").strip()


def _strip_code_fences(s: str) -> str:
    s = s.strip()
    return re.sub(r"^```(?:json)?|```$", "", s, flags=re.IGNORECASE | re.MULTILINE).strip()


def _safe_json_loads(s: str) -> Any:
    """Parse JSON from an LLM response, tolerating code fences, prose and trailing commas."""
    cleaned = _strip_code_fences(s or "")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    cleaned = re.sub(r",\s*([}\]])", r"\1", cleaned)  # trailing commas before } or ]
    obj_match = re.search(r"\{.*\}", cleaned, re.S)
    if obj_match:
        try:
            return json.loads(obj_match.group(0))
        except json.JSONDecodeError:
            pass

    raise ValueError(f"Could not parse JSON from: {s[:200]}...")


def parse_taxonomy_response(content: str) -> List[AspectDefinition]:
    """Turn the model's reply into a validated taxonomy.

    Raises CollaboratorError when the reply is not JSON or does not carry an
    ``aspects`` list. An empty list is a valid (if useless) answer.
    """
    try:
        data = _safe_json_loads(content)
    except ValueError as e:
        raise CollaboratorError(f"Taxonomy response is not valid JSON: {e}", raw_response=content)

    aspects = data.get("aspects") if isinstance(data, dict) else data
    if not isinstance(aspects, list):
        raise CollaboratorError("Taxonomy response has no 'aspects' list", raw_response=content)
    if any(not isinstance(a, dict) for a in aspects):
        raise CollaboratorError("Taxonomy response contains non-object aspects", raw_response=content)

    taxonomy = validate_taxonomy(aspects)
    logger.info(f"Taxonomy discovery returned {len(aspects)} aspects, {len(taxonomy)} usable")
    return taxonomy


class LLMServiceFactory:
    """Factory for creating LLM services."""

    @staticmethod
    def create():
        """Create appropriate LLM service."""
        if settings.effective_openai_key:
            return OpenAIService()
        else:
            return FallbackLLMService()


class OpenAIService:
    """OpenAI-based taxonomy discovery."""

    taxonomy_source = "llm"

    def __init__(self, client=None, cache: Optional[Cache] = None, model: Optional[str] = None):
        self.client = client or openai.OpenAI(api_key=settings.effective_openai_key)
        self.model = model or settings.openai_model
        self.cache = cache if cache is not None else Cache(settings.cache_dir)
        logger.info("OpenAI service initialized with caching")

    @retry(
        retry=retry_if_exception_type(openai.APIError),
        stop=stop_after_attempt(ErrorConstants.MAX_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=1, min=ErrorConstants.RETRY_BASE_DELAY, max=10),
        reraise=True,
    )
    def _complete(self, system: str, user: str, temperature: float, max_tokens: int) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            max_tokens=max_tokens,
            temperature=temperature,
            response_format={"type": "json_object"},
            timeout=ErrorConstants.REQUEST_TIMEOUT,
        )
        return (response.choices[0].message.content or "").strip()

    def chat(self, system: str, user: str, temperature: float = PromptConstants.TAXONOMY_TEMPERATURE,
             max_tokens: int = PromptConstants.TAXONOMY_MAX_TOKENS) -> str:
        """Chat completion with response caching."""
        cache_key = hashlib.md5(
            f"{self.model}|{system}|{user}|{temperature}|{max_tokens}|{PromptConstants.TAXONOMY_PROMPT_VERSION}".encode()
        ).hexdigest()

        cached_response = self.cache.get(cache_key)
        if cached_response:
            logger.debug(f"Cache hit for LLM request: {cache_key[:CacheConstants.CACHE_KEY_LENGTH]}...")
            return cached_response

        try:
            result = self._complete(system, user, temperature, max_tokens)
        except Exception as e:
            logger.error(f"Chat failed: {e}")
            raise CollaboratorError(f"LLM request failed: {e}") from e

        if not result:
            raise CollaboratorError("Empty response from LLM")

        self.cache.set(cache_key, result, expire=3600 * CacheConstants.CACHE_TTL_HOURS)
        logger.debug(f"Cached LLM response: {cache_key[:CacheConstants.CACHE_KEY_LENGTH]}...")
        return result

    def build_prompt(self, top_words: Sequence[str], sample_reviews: Sequence[str], review_count: int = None) -> str:
        samples = "\n".join(
            f'- "{" ".join(s.split())[:PromptConstants.MAX_SAMPLE_CHARS]}"' for s in sample_reviews
        )
        return TAXONOMY_PROMPT.format(
            review_count=review_count if review_count is not None else "many",
            signals=", ".join(top_words),
            samples=samples or "- (no samples)",
        )

    def discover_taxonomy(self, top_words: Sequence[str], sample_reviews: Sequence[str],
                          review_count: int = None) -> List[AspectDefinition]:
        """Ask the model for a taxonomy grounded in the corpus signals."""
        prompt = self.build_prompt(top_words, sample_reviews, review_count=review_count)
        content = self.chat(TAXONOMY_SYSTEM_PROMPT, prompt)
        return parse_taxonomy_response(content)


class FallbackLLMService:
    """Fallback service using the predefined taxonomies."""

    taxonomy_source = "predefined"

    def __init__(self):
        logger.info("Using fallback LLM service")

    def discover_taxonomy(self, top_words: Sequence[str], sample_reviews: Sequence[str],
                          review_count: int = None) -> List[AspectDefinition]:
        """Pick the predefined taxonomy that best fits the signals."""
        logger.warning("No OpenAI key configured - using a predefined taxonomy")
        return select_predefined_taxonomy(top_words)
