"""Clause segmentation for reviews."""

import re
from typing import Iterable, List

from .constants import SegmentConstants

# Break after a run of terminal punctuation unless a digit (3.5) or closing quote follows.
_SENTENCE_BREAK = re.compile(r"(?<=[.!?])(?![.!?\d\"')\]])\s*|[\r\n]+")


def _contrastive_pattern(conjunctions: Iterable[str]) -> "re.Pattern":
    words = "|".join(re.escape(c) for c in conjunctions)
    return re.compile(rf"\s*,?\s*\b(?:{words})\b\s*,?\s*", re.IGNORECASE)


_CONTRASTIVE = _contrastive_pattern(SegmentConstants.CONTRASTIVE_CONJUNCTIONS)


def split_sentences(text: str) -> List[str]:
    """Split on terminal punctuation, with or without trailing whitespace, and on line breaks."""
    return [s for s in _SENTENCE_BREAK.split(text or "") if s and s.strip()]


def segment_clauses(
    text: str,
    split_contrastive: bool = True,
    min_length: int = SegmentConstants.MIN_CLAUSE_LENGTH,
) -> List[str]:
    """Split a review into clause strings.

    "Tastes great but the box was crushed." becomes
    ["Tastes great", "the box was crushed."]: the conjunction is dropped so
    each clause carries only its own sentiment. Clauses shorter than
    ``min_length`` are discarded; if nothing survives, the trimmed text is
    returned as a single clause.
    """
    stripped = (text or "").strip()
    if not stripped:
        return []

    clauses = []
    for sentence in split_sentences(stripped):
        parts = _CONTRASTIVE.split(sentence) if split_contrastive else [sentence]
        for part in parts:
            part = part.strip()
            if len(part) >= min_length:
                clauses.append(part)

    return clauses or [stripped]
