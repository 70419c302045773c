"""
Text Normalization & Similarity

Turns raw answers into a comparable canonical form and measures how close
two canonical strings are. Everything here is a pure function of its
arguments; the table-backed checks (synonyms, plurals, variation groups)
live on ReferenceData.
"""

import re

from nltk.metrics.distance import edit_distance as _nltk_edit_distance

PARTIAL_MATCH_MIN_LENGTH = 4

_PUNCTUATION_RE = re.compile(r'[^\w\s]')
_WHITESPACE_RE = re.compile(r'\s+')
_LISTENING_SYMBOLS = ('$', '£', '€', '%')


def normalize_for_reading(text: str) -> str:
    """Trim, lowercase, drop punctuation and collapse whitespace runs."""
    if not text:
        return ""

    text = text.strip().lower()
    text = _PUNCTUATION_RE.sub('', text)
    text = _WHITESPACE_RE.sub(' ', text)
    # Removing punctuation can expose edge spaces ("- a" -> " a")
    return text.strip()


def normalize_for_listening(text: str) -> str:
    """
    Reading normalization preceded by removal of currency and percent signs.

    Listening answers are written down while the audio plays, so format
    noise around numbers is tolerated.
    """
    if not text:
        return ""

    text = text.strip().lower()
    for symbol in _LISTENING_SYMBOLS:
        text = text.replace(symbol, '')
    return normalize_for_reading(text)


def edit_distance(first: str, second: str) -> int:
    """
    Unrestricted Damerau-Levenshtein distance.

    Insert, delete and substitute cost one edit each. Swapping two letters
    ("recieve") also costs one, even when other edits fall between them, so
    "ca" to "abc" is 2 where plain Levenshtein gives 3.
    """
    return _nltk_edit_distance(first, second, transpositions=True)


def similarity(first: str, second: str) -> float:
    """
    Edit-distance similarity in [0, 1].

    ``1 - distance / max(len(first), len(second))``; two empty strings are
    identical.
    """
    max_len = max(len(first), len(second))
    if max_len == 0:
        return 1.0
    return 1.0 - edit_distance(first, second) / max_len


def is_partial_match(first: str, second: str,
                     min_length: int = PARTIAL_MATCH_MIN_LENGTH) -> bool:
    """Both strings are at least ``min_length`` long and one contains the other."""
    if len(first) < min_length or len(second) < min_length:
        return False
    return first in second or second in first
