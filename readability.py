"""
Readability scoring using the Flesch Reading Ease formula
"""
import logging

from models import ReadabilityScore, ReadabilityStatistics
from text_processor import count_sentences, count_total_syllables, count_words, round_half_up

logger = logging.getLogger(__name__)

# (minimum score, grade level, interpretation); first match wins
GRADE_LEVELS = (
    (90, "5th grade", "Very Easy to read. Easily understood by an average 11-year-old student."),
    (80, "6th grade", "Easy to read. Conversational English for consumers."),
    (70, "7th grade", "Fairly Easy to read."),
    (60, "8th-9th grade", "Plain English. Easily understood by 13- to 15-year-old students."),
    (50, "10th-12th grade", "Fairly Difficult to read."),
    (30, "College level", "Difficult to read."),
    (0, "College graduate", "Very Difficult to read. Best understood by university graduates."),
)

RATINGS = (
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
    (0, "Very Difficult"),
)

def get_grade_level(score: float) -> str:
    for threshold, grade, _ in GRADE_LEVELS:
        if score >= threshold:
            return grade
    return GRADE_LEVELS[-1][1]

def get_interpretation(score: float) -> str:
    for threshold, _, interpretation in GRADE_LEVELS:
        if score >= threshold:
            return interpretation
    return GRADE_LEVELS[-1][2]

def get_readability_rating(score: float) -> str:
    """Short label (Very Easy ... Very Difficult) for a Flesch score"""
    for threshold, rating in RATINGS:
        if score >= threshold:
            return rating
    return RATINGS[-1][1]

def calculate_flesch_score(words: int, sentences: int, syllables: int) -> float:
    """Raw, unclamped Flesch Reading Ease"""
    return 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)

def calculate_readability(text: str) -> ReadabilityScore:
    """Compute the Flesch Reading Ease score and its bucketed labels"""
    if not text or not text.strip():
        return ReadabilityScore(
            flesch_score=0.0,
            grade_level="N/A",
            interpretation="No text content found",
            statistics=ReadabilityStatistics(),
        )

    sentences = count_sentences(text)
    words = count_words(text)
    syllables = count_total_syllables(text)

    if sentences == 0 or words == 0:
        return ReadabilityScore(
            flesch_score=0.0,
            grade_level="N/A",
            interpretation="Insufficient text for analysis",
            statistics=ReadabilityStatistics(sentences=sentences, words=words, syllables=syllables),
        )

    avg_words_per_sentence = words / sentences
    avg_syllables_per_word = syllables / words

    score = calculate_flesch_score(words, sentences, syllables)
    clamped = max(0.0, min(100.0, score))
    logger.debug(f"Flesch score {score:.2f} from {words} words, {sentences} sentences, {syllables} syllables")

    return ReadabilityScore(
        flesch_score=round_half_up(clamped, 1),
        grade_level=get_grade_level(clamped),
        interpretation=get_interpretation(clamped),
        statistics=ReadabilityStatistics(
            sentences=sentences,
            words=words,
            syllables=syllables,
            avg_words_per_sentence=round_half_up(avg_words_per_sentence, 1),
            avg_syllables_per_word=round_half_up(avg_syllables_per_word, 2),
        ),
    )
