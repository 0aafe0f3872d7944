"""
Keyword density analysis over 1-, 2- and 3-word phrases
"""
import logging
from typing import List, Sequence, Tuple

from config import AnalyzerConfig, config
from models import KeywordDensity
from text_processor import calculate_percentage, calculate_word_frequency, generate_ngrams, tokenize

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset([
    'a', 'an', 'and', 'are', 'as', 'at', 'be', 'by', 'for', 'from',
    'has', 'he', 'in', 'is', 'it', 'its', 'of', 'on', 'that', 'the',
    'to', 'was', 'will', 'with', 'we', 'you', 'your', 'this', 'they',
    'or', 'but', 'not', 'can', 'may', 'if', 'their', 'which', 'more',
    'about', 'such', 'been', 'were', 'would', 'there', 'than', 'into',
    'so', 'up', 'out', 'when', 'only', 'no', 'all', 'do', 'does',
    'did', 'what', 'who', 'whom', 'whose', 'where', 'why', 'how',
    'our', 'his', 'her', 'my', 'am', 'have', 'had', 'being', 'having',
    'one', 'two', 'three', 'four', 'five',
    'some', 'any', 'each', 'every', 'either', 'neither', 'both',
    'other', 'another', 'these', 'those', 'i', 'me', 'him',
])

NGRAM_SIZES = (1, 2, 3)

class KeywordAnalyzer:
    """Counts recurring phrases in page text"""

    def __init__(self, analyzer_config: AnalyzerConfig = None, stop_words: Sequence[str] = None):
        self.config = analyzer_config or config
        self.stop_words = frozenset(stop_words) if stop_words is not None else STOP_WORDS

    def filter_tokens(self, text: str) -> List[str]:
        """Tokenize and drop stop words.

        N-grams are built from this filtered stream, so two words separated
        only by stop words in the source become adjacent here.
        """
        words = tokenize(text, self.config.keyword_min_word_length)
        return [word for word in words if word not in self.stop_words]

    def analyze(self, text: str) -> Tuple[KeywordDensity, ...]:
        """Keyword densities for every n-gram size, 1-grams first"""
        if not text or not text.strip():
            return ()

        filtered_words = self.filter_tokens(text)
        total_words = len(filtered_words)
        if total_words == 0:
            return ()

        keywords = []
        for n in NGRAM_SIZES:
            keywords.extend(self._analyze_ngram(filtered_words, n, total_words))

        logger.debug(f"Found {len(keywords)} keyword phrases in {total_words} filtered tokens")
        return tuple(keywords)

    def _analyze_ngram(self, words: List[str], n: int, total_words: int) -> List[KeywordDensity]:
        ngrams = generate_ngrams(words, n)
        if not ngrams:
            return []

        base = total_words if n == 1 else len(ngrams)
        keywords = [
            KeywordDensity(
                phrase=phrase,
                count=count,
                percentage=calculate_percentage(count, base),
                n_gram=n,
            )
            for phrase, count in calculate_word_frequency(ngrams).items()
            if count >= self.config.keyword_min_occurrences
        ]

        # sorted() is stable, so ties keep first-seen order
        keywords = sorted(keywords, key=lambda k: k.count, reverse=True)
        return keywords[:self.config.keyword_max_results]

def analyze_keywords(text: str, analyzer_config: AnalyzerConfig = None) -> Tuple[KeywordDensity, ...]:
    return KeywordAnalyzer(analyzer_config).analyze(text)

def get_top_keywords(keywords: Sequence[KeywordDensity], limit: int = 10) -> List[KeywordDensity]:
    return sorted(keywords, key=lambda k: k.count, reverse=True)[:limit]

def filter_keywords_by_ngram(keywords: Sequence[KeywordDensity], n_gram: int) -> List[KeywordDensity]:
    return [k for k in keywords if k.n_gram == n_gram]

def has_keyword_stuffing(keywords: Sequence[KeywordDensity], max_density: float = None) -> bool:
    """True if any single word exceeds the stuffing threshold"""
    if max_density is None:
        max_density = config.keyword_max_density
    return any(k.n_gram == 1 and k.percentage > max_density for k in keywords)

def get_optimal_keywords(keywords: Sequence[KeywordDensity], min_density: float = None,
                         max_density: float = None) -> List[KeywordDensity]:
    if min_density is None:
        min_density = config.keyword_optimal_min_density
    if max_density is None:
        max_density = config.keyword_optimal_max_density
    return [k for k in keywords if k.n_gram == 1 and min_density <= k.percentage <= max_density]

def count_unique_keywords(keywords: Sequence[KeywordDensity]) -> int:
    return len({k.phrase for k in keywords})
