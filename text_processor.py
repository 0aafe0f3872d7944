"""
Text processing utilities for readability and keyword analysis
"""
import re
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

_SUFFIX_PATTERN = re.compile(r"(?:[^laeiouy]es|[^laeiouy]ed|[^laeiouy]e)$")
_LEADING_Y_PATTERN = re.compile(r"^y")
_VOWEL_GROUP_PATTERN = re.compile(r"[aeiouy]{1,2}")
_SENTENCE_END_PATTERN = re.compile(r"[.!?]+")
_TOKEN_SPLIT_PATTERN = re.compile(r"[^a-z0-9]+")

def count_syllables(word: str) -> int:
    """
    Estimate syllables in a single word.

    Words of three letters or fewer count as one. Otherwise a trailing
    consonant+es/ed/e is dropped (so "able" keeps its final syllable), a
    leading "y" is dropped, and runs of one or two vowels are counted.
    """
    word = word.lower().strip()

    if len(word) <= 3:
        return 1

    word = _SUFFIX_PATTERN.sub("", word)
    word = _LEADING_Y_PATTERN.sub("", word)

    matches = _VOWEL_GROUP_PATTERN.findall(word)
    return len(matches) if matches else 1

def count_words(text: str) -> int:
    if not text or not text.strip():
        return 0
    return len(text.split())

def count_sentences(text: str) -> int:
    """Count runs of sentence-ending punctuation; at least one for non-empty text"""
    if not text or not text.strip():
        return 0

    sentences = _SENTENCE_END_PATTERN.findall(text)
    return len(sentences) if sentences else 1

def count_total_syllables(text: str) -> int:
    if not text or not text.strip():
        return 0
    return sum(count_syllables(word) for word in text.split())

def clean_text(text: str) -> str:
    """Collapse all whitespace runs to single spaces"""
    if not text:
        return ""
    return " ".join(text.split())

def count_characters(text: str, include_spaces: bool = True) -> int:
    if not text:
        return 0
    if include_spaces:
        return len(text)
    return len("".join(text.split()))

def tokenize(text: str, min_length: int = 1) -> List[str]:
    """Lowercase and split on anything that is not [a-z0-9]"""
    if not text or not text.strip():
        return []

    return [word for word in _TOKEN_SPLIT_PATTERN.split(text.lower()) if len(word) >= min_length]

def generate_ngrams(words: List[str], n: int) -> List[str]:
    if len(words) < n:
        return []
    return [" ".join(words[i:i + n]) for i in range(len(words) - n + 1)]

def calculate_word_frequency(words: List[str]) -> Dict[str, int]:
    """Phrase -> count, in first-seen order"""
    return dict(Counter(words))

def round_half_up(value: float, decimals: int = 0) -> float:
    """Round with halves going away from zero (62.5 -> 63, 0.125 -> 0.13)"""
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))

def calculate_percentage(part: int, total: int, decimals: int = 2) -> float:
    if total == 0:
        return 0.0
    percentage = round_half_up((part / total) * 100, decimals)
    return max(0.0, min(100.0, percentage))

def truncate(text: str, max_length: int) -> str:
    if not text or len(text) <= max_length:
        return text
    return text[:max_length - 3] + "..."
