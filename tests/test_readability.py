"""
Tests for Flesch readability scoring
"""
import pytest

from readability import (
    calculate_flesch_score, calculate_readability, get_grade_level, get_interpretation,
    get_readability_rating
)
from text_processor import round_half_up


class TestCalculateReadability:
    """Tests for calculate_readability"""

    def test_empty_text(self):
        result = calculate_readability("")
        assert result.flesch_score == 0
        assert result.grade_level == "N/A"
        assert result.interpretation == "No text content found"
        assert result.statistics.words == 0
        assert result.statistics.sentences == 0

    def test_whitespace_only_text(self):
        assert calculate_readability("   \n ").interpretation == "No text content found"

    def test_pangram(self):
        result = calculate_readability("The quick brown fox jumps over the lazy dog.")

        assert result.statistics.sentences == 1
        assert result.statistics.words == 9
        assert result.statistics.syllables == 11
        assert result.statistics.avg_words_per_sentence == 9.0
        assert result.statistics.avg_syllables_per_word == 1.22

        expected = 206.835 - 1.015 * (9 / 1) - 84.6 * (11 / 9)
        assert result.flesch_score == pytest.approx(round_half_up(expected, 1))
        assert result.grade_level == "5th grade"
        assert result.interpretation.startswith("Very Easy")

    def test_score_clamped_at_zero(self):
        result = calculate_readability(
            "Antidisestablishmentarianism incomprehensibilities internationalization characteristically"
        )
        assert result.flesch_score == 0
        assert result.grade_level == "College graduate"

    def test_score_clamped_at_hundred(self):
        result = calculate_readability("Go. Run. Sit. Eat. Win.")
        assert result.flesch_score == 100
        assert result.grade_level == "5th grade"

    @pytest.mark.parametrize("text", [
        "A",
        "Hello world",
        "This sentence has no end punctuation but quite a lot of words in it anyway",
        "Photosynthesis necessitates chlorophyll. Mitochondria synthesize adenosine triphosphate!",
        "... !!! ???",
        "1234 5678 9012.",
    ])
    def test_score_always_within_bounds(self, text):
        score = calculate_readability(text).flesch_score
        assert 0 <= score <= 100

    def test_raw_formula(self):
        assert calculate_flesch_score(10, 1, 10) == pytest.approx(206.835 - 10.15 - 84.6)


class TestBuckets:
    """Tests for grade and rating buckets"""

    @pytest.mark.parametrize("score, grade", [
        (100, "5th grade"),
        (90, "5th grade"),
        (89.9, "6th grade"),
        (80, "6th grade"),
        (70, "7th grade"),
        (60, "8th-9th grade"),
        (50, "10th-12th grade"),
        (30, "College level"),
        (29.9, "College graduate"),
        (0, "College graduate"),
    ])
    def test_grade_level(self, score, grade):
        assert get_grade_level(score) == grade

    def test_interpretation(self):
        assert get_interpretation(65) == "Plain English. Easily understood by 13- to 15-year-old students."
        assert get_interpretation(10).startswith("Very Difficult")

    @pytest.mark.parametrize("score, rating", [
        (95, "Very Easy"),
        (85, "Easy"),
        (75, "Fairly Easy"),
        (65, "Standard"),
        (55, "Fairly Difficult"),
        (35, "Difficult"),
        (5, "Very Difficult"),
    ])
    def test_readability_rating(self, score, rating):
        assert get_readability_rating(score) == rating
