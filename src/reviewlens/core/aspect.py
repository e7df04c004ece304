"""Aspect taxonomies and keyword-based aspect matching."""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

import yaml

from .errors import InputError
from .models import AspectDefinition, AspectMatch

logger = logging.getLogger(__name__)

TaxonomyLike = Iterable[Union[AspectDefinition, Dict[str, Any]]]


# Domain-aware predefined taxonomies, used when no LLM is configured
FOOD_ASPECTS = {
    "Taste & Flavor": ["taste", "flavor", "flavour", "sweet", "bland", "chocolatey", "delicious", "tastes"],
    "Texture": ["texture", "crunchy", "crunch", "soggy", "crispy", "chewy", "stale"],
    "Ingredients & Health": ["ingredients", "ingredients list", "sugar", "healthy", "healthier", "protein", "fiber", "calories"],
    "Packaging": ["packaging", "box", "bag", "resealable bag", "package", "container", "seal"],
    "Price & Value": ["price", "cost", "value", "value for money", "expensive", "cheap", "size"],
    "Smell": ["smell", "smells", "odor", "aroma", "scent"],
}

ELECTRONICS_ASPECTS = {
    "Battery Life": ["battery", "battery life", "charge", "charging", "charger", "drain"],
    "Display": ["screen", "display", "resolution", "brightness", "touchscreen"],
    "Performance": ["performance", "speed", "lag", "processor", "fast", "slow", "freezes"],
    "Build Quality": ["build", "build quality", "materials", "durable", "plastic", "sturdy", "cheaply made"],
    "Sound": ["sound", "audio", "speaker", "speakers", "volume", "bass", "microphone"],
    "Connectivity": ["bluetooth", "wifi", "pairing", "connection", "signal"],
    "Price & Value": ["price", "cost", "value", "expensive", "cheap", "worth the money"],
    "Customer Service": ["customer service", "support", "warranty", "refund", "return", "replacement"],
}

GENERAL_ASPECTS = {
    "Quality": ["quality", "build", "construction", "materials", "durable", "reliable"],
    "Performance": ["performance", "speed", "fast", "slow", "power", "efficiency"],
    "Design": ["design", "looks", "appearance", "style", "color", "size"],
    "Price & Value": ["price", "cost", "value", "expensive", "cheap", "affordable"],
    "Ease of Use": ["easy", "difficult", "instructions", "setup", "usability", "comfortable"],
    "Shipping & Packaging": ["shipping", "delivery", "arrived", "packaging", "box", "damaged"],
    "Customer Service": ["customer service", "support", "warranty", "refund", "seller"],
}

PREDEFINED_TAXONOMIES = {
    "food": FOOD_ASPECTS,
    "electronics": ELECTRONICS_ASPECTS,
    "general": GENERAL_ASPECTS,
}


def taxonomy_from_mapping(mapping: Dict[str, Sequence[str]]) -> List[AspectDefinition]:
    """Build AspectDefinitions from a ``name -> keywords`` mapping."""
    return [AspectDefinition(name=name, keywords=tuple(keywords)) for name, keywords in mapping.items()]


def select_predefined_taxonomy(top_tokens: Iterable[str]) -> List[AspectDefinition]:
    """Pick the predefined taxonomy whose keywords overlap the corpus signals most.

    Falls back to the general taxonomy when nothing overlaps.
    """
    vocabulary = set()
    for token in top_tokens:
        vocabulary.add(token.lower())
        vocabulary.update(token.lower().split())

    best_domain, best_overlap = "general", 0
    for domain, mapping in PREDEFINED_TAXONOMIES.items():
        keywords = {k.lower() for kws in mapping.values() for k in kws}
        overlap = len(keywords & vocabulary)
        if overlap > best_overlap:
            best_domain, best_overlap = domain, overlap

    logger.info(f"Selected predefined taxonomy '{best_domain}' ({best_overlap} overlapping keywords)")
    return taxonomy_from_mapping(PREDEFINED_TAXONOMIES[best_domain])


def _clean_keywords(keywords: Iterable[Any]) -> tuple:
    if isinstance(keywords, str):
        keywords = (keywords,)
    elif not isinstance(keywords, (list, tuple, set, frozenset)):
        keywords = ()
    seen = set()
    cleaned = []
    for keyword in keywords or ():
        if not isinstance(keyword, str):
            continue
        k = " ".join(keyword.split())
        if not k or k.lower() in seen:
            continue
        seen.add(k.lower())
        cleaned.append(k)
    return tuple(cleaned)


def validate_taxonomy(aspects: TaxonomyLike) -> List[AspectDefinition]:
    """Return a usable taxonomy: unique names, non-empty keyword lists.

    Aspects without a name or without any keyword would never match, so they
    are dropped (and logged) rather than allowed to reach the matcher.
    """
    validated = []
    names = set()
    for raw in aspects or ():
        aspect = AspectDefinition.from_dict(raw) if isinstance(raw, dict) else raw
        if not isinstance(aspect, AspectDefinition):
            logger.warning(f"Ignoring malformed aspect entry: {raw!r}")
            continue
        if not isinstance(aspect.name, str):
            logger.warning(f"Dropping aspect with a non-string name: {aspect.name!r}")
            continue
        name = aspect.name.strip()
        keywords = _clean_keywords(aspect.keywords)
        if not name:
            logger.warning("Dropping aspect without a name")
            continue
        if not keywords:
            logger.warning(f"Dropping aspect '{name}': empty keyword list")
            continue
        if name in names:
            logger.warning(f"Dropping duplicate aspect name '{name}'")
            continue
        names.add(name)
        description = aspect.description if isinstance(aspect.description, str) else ""
        validated.append(AspectDefinition(name=name, description=description, keywords=keywords))
    return validated


def parse_taxonomy(content: Union[str, bytes], source: str = "uploaded taxonomy") -> List[AspectDefinition]:
    """Parse taxonomy YAML held in memory.

    Accepts either a mapping ``{aspect name: [keywords]}`` or a list of
    ``{name, description, keywords}`` entries.
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise InputError(f"Invalid YAML in {source}: {e}")

    if isinstance(data, dict) and "aspects" in data:
        data = data["aspects"]
    if isinstance(data, dict):
        entries = [{"name": name, "keywords": kws} for name, kws in data.items()]
    elif isinstance(data, list):
        entries = data
    else:
        raise InputError(f"{source} must contain a mapping or a list of aspects")

    taxonomy = validate_taxonomy(entries)
    logger.info(f"Loaded {len(taxonomy)} aspects from {source}")
    return taxonomy


def load_taxonomy(path: Union[str, Path]) -> List[AspectDefinition]:
    """Load a taxonomy from a YAML file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise InputError(f"Taxonomy file {path} not found")
    return parse_taxonomy(content, source=f"taxonomy file {path}")


def _keyword_pattern(keyword: str) -> "re.Pattern":
    body = r"\s+".join(re.escape(part) for part in keyword.lower().split())
    return re.compile(rf"(?<!\w){body}(?!\w)")


class KeywordMatcher:
    """Longest-keyword-wins matcher compiled once per taxonomy.

    All keywords of all aspects are ordered by length (longest first), then by
    taxonomy order, then by keyword order; the first keyword found in a clause
    decides its aspect. Matching is case-insensitive on whole words, so "bar"
    never fires inside "barely".
    """

    def __init__(self, taxonomy: TaxonomyLike):
        self.taxonomy = validate_taxonomy(taxonomy)
        entries = []
        for aspect_index, aspect in enumerate(self.taxonomy):
            for keyword_index, keyword in enumerate(aspect.keywords):
                entries.append((len(keyword), aspect_index, keyword_index, aspect.name, keyword))
        entries.sort(key=lambda e: (-e[0], e[1], e[2]))
        self._patterns = [(_keyword_pattern(kw), name, kw) for _, _, _, name, kw in entries]

    def __len__(self) -> int:
        return len(self._patterns)

    def match(self, clause: str) -> Optional[AspectMatch]:
        text = (clause or "").lower()
        if not text:
            return None
        for pattern, aspect_name, keyword in self._patterns:
            if pattern.search(text):
                return AspectMatch(aspect=aspect_name, trigger=keyword)
        return None


def match_aspect(clause: str, taxonomy: TaxonomyLike) -> Optional[AspectMatch]:
    """One-off convenience wrapper; build a KeywordMatcher for repeated use."""
    return KeywordMatcher(taxonomy).match(clause)
