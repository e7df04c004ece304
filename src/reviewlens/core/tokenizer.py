"""Tokenizer and light normalizer for review text."""

import re
from typing import Iterable, List, Optional

from .constants import SignalConstants
from .lexicon import STOP_WORDS

_APOSTROPHES = re.compile(r"[‘’ʼ`]")
_POSSESSIVE = re.compile(r"'s\b")
_NEGATED = re.compile(r"'t\b")
_NON_ALNUM = re.compile(r"[^\w\s]|_")

_SIBILANT_ES = ("ses", "xes", "zes", "ches", "shes")
_KEEP_DOUBLE = set("lsz")


def clean_text(text: str) -> str:
    """Lowercase, drop possessives, collapse contractions, blank out punctuation."""
    s = _APOSTROPHES.sub("'", (text or "").lower())
    s = _POSSESSIVE.sub("", s)
    s = _NEGATED.sub("t", s)
    return _NON_ALNUM.sub(" ", s)


def _has_vowel(word: str) -> bool:
    return any(c in "aeiouy" for c in word)


def _undouble(word: str) -> str:
    if len(word) > 3 and word[-1] == word[-2] and word[-1] not in _KEEP_DOUBLE and word[-1] not in "aeiou":
        return word[:-1]
    return word


def _stem_once(w: str) -> str:
    if len(w) < SignalConstants.STEM_MIN_LENGTH:
        return w
    if w.endswith("ies") and len(w) > 4:
        return w[:-3] + "y"
    if w.endswith("sses"):
        return w[:-2]
    if w.endswith(_SIBILANT_ES) and len(w) > 4:
        return w[:-2]
    if w.endswith("s") and not w.endswith(("ss", "us", "is")):
        return w[:-1]
    if w.endswith("ing") and len(w) > 5 and _has_vowel(w[:-3]):
        return _undouble(w[:-3])
    if w.endswith("ed") and not w.endswith("eed") and len(w) > 4 and _has_vowel(w[:-2]):
        return _undouble(w[:-2])
    if w.endswith("ly") and not w.endswith("ily") and len(w) > 4:
        return w[:-2]
    return w


def stem(word: str) -> str:
    """Suffix-stripping stemmer, applied until the word stops changing.

    Rule based with no dictionary, so false merges ("news" -> "new") are
    possible. Every rule shortens the word, so the loop terminates and the
    result is a fixed point: stem(stem(w)) == stem(w).
    """
    w = word.lower()
    while True:
        nxt = _stem_once(w)
        if nxt == w:
            return w
        w = nxt


def _keep(token: str, stop_words) -> bool:
    return len(token) >= SignalConstants.MIN_TOKEN_LENGTH and token not in stop_words


def normalize(text: str, stop_words: Optional[Iterable[str]] = None) -> List[str]:
    """Turn raw text into an ordered list of topic tokens.

    Stop-words and short tokens are removed both before and after stemming so
    that a stem that collapses onto a stop-word ("products" -> "product") is
    dropped too. Re-normalizing the joined output gives the same tokens.
    """
    stops = STOP_WORDS if stop_words is None else frozenset(stop_words)
    tokens = []
    for raw in clean_text(text).split():
        if not _keep(raw, stops):
            continue
        stemmed = stem(raw)
        if _keep(stemmed, stops):
            tokens.append(stemmed)
    return tokens
