"""
Tests for the password Strength Scoring Engine.

Expected scores are worked out by hand from the scoring rules so the
suite doubles as a regression fixture: any change to a weight, threshold
or feedback string shows up here.
"""

import pytest

from gsecure.passwords.models import Rating, ScoreResult
from gsecure.passwords.strength import (
    EMPTY_FEEDBACK,
    GOOD_FEEDBACK,
    generate_feedback,
    get_rating,
    score_password,
)

TOO_SHORT = "Password is too short (aim for 12+ characters)"
LONGER = "Consider using a longer password"
ADD_LOWER = "Add lowercase letters"
ADD_UPPER = "Add uppercase letters"
ADD_NUMBERS = "Add numbers"
ADD_SPECIAL = "Add special characters (!@#$%^&*)"
SEQUENTIAL = "Avoid sequential characters (abc, 123, etc.)"
REPEATING = "Avoid repeating characters"
COMMON = "Avoid common words or patterns"


# ===================================================================
# Invalid input fallback
# ===================================================================

class TestInvalidInput:
    def test_empty_string(self):
        result = score_password("")
        assert result == ScoreResult(score=0, rating=Rating.WEAK, feedback=(EMPTY_FEEDBACK,))

    @pytest.mark.parametrize("value", [None, 12345, b"bytes", ["list"]])
    def test_non_string(self, value):
        result = score_password(value)
        assert result.score == 0
        assert result.rating == Rating.WEAK
        assert result.feedback == (EMPTY_FEEDBACK,)

    def test_to_dict(self):
        assert score_password("").to_dict() == {
            "score": 0,
            "rating": "Weak",
            "feedback": [EMPTY_FEEDBACK],
        }


# ===================================================================
# Worked examples
# ===================================================================

class TestScores:
    def test_common_word(self):
        # 12 (length 8) + 7.5 (lower) - 15 (common) = 4.5 -> rounds up to 5
        result = score_password("password")
        assert result.score == 5
        assert result.rating == Rating.WEAK
        assert result.feedback == (LONGER, ADD_UPPER, ADD_NUMBERS, ADD_SPECIAL, COMMON)

    def test_common_word_is_case_insensitive(self):
        result = score_password("PASSWORD")
        assert result.score == 5
        assert COMMON in result.feedback
        assert ADD_LOWER in result.feedback

    def test_short_sequence(self):
        # 4.5 + 7.5 - 5 = 7
        result = score_password("abc")
        assert result.score == 7
        assert result.feedback == (TOO_SHORT, ADD_UPPER, ADD_NUMBERS, ADD_SPECIAL, SEQUENTIAL)

    def test_repeated_characters(self):
        # "aaa" is a repeat, not a sequence: 4.5 + 7.5 - 10 = 2
        result = score_password("aaa")
        assert result.score == 2
        assert result.feedback == (TOO_SHORT, ADD_UPPER, ADD_NUMBERS, ADD_SPECIAL, REPEATING)

    def test_all_penalties_stack(self):
        # 21.5 + 30 - (5 + 5 + 10 + 15) + 20 * (1 - 10/15 + 1/15) = 24.5 -> 25
        result = score_password("xyz789qqqAdmin!")
        assert result.score == 25
        assert result.rating == Rating.WEAK
        assert result.feedback == (SEQUENTIAL, REPEATING, COMMON)

    def test_sequential_feedback_listed_once(self):
        result = score_password("abc123")
        assert result.feedback.count(SEQUENTIAL) == 1

    def test_whitespace_is_not_special(self):
        # 24.5 (length 21) + 7.5 = 32
        result = score_password("correct horse battery")
        assert result.score == 32
        assert result.feedback == (ADD_UPPER, ADD_NUMBERS, ADD_SPECIAL)

    def test_medium_length_mixed(self):
        # 18 + 30 + 20 * (1 - 5/11 + 1/11) = 60.73 -> 61
        result = score_password("Summer2024!")
        assert result.score == 61
        assert result.rating == Rating.STRONG
        assert result.feedback == (LONGER,)

    def test_strong(self):
        # 21 + 30 + 20 * (1 - 4/14 + 3/14) = 69.57 -> 70
        result = score_password("Xk9#mP2$vL7@qR")
        assert result.score == 70
        assert result.rating == Rating.STRONG
        assert result.feedback == (GOOD_FEEDBACK,)

    def test_very_strong(self):
        # 30 + 30 + 20 (perfectly even classes) = 80
        result = score_password("Xk9#mP2$vL7@qR4&" * 2)
        assert result.score == 80
        assert result.rating == Rating.VERY_STRONG
        assert result.to_dict()["rating"] == "Very Strong"

    def test_score_never_exceeds_100(self):
        result = score_password("Xk9#mP2$vL7@qR4&" * 8)
        assert 0 <= result.score <= 100

    def test_deterministic(self):
        samples = ["", "password", "Xk9#mP2$vL7@qR", "correct horse battery", "ÄÖÜ-ß"]
        for sample in samples:
            assert score_password(sample) == score_password(sample)

    def test_feedback_is_distinct(self):
        for sample in ["abcabc", "aaabbbccc", "password123456qwerty"]:
            feedback = score_password(sample).feedback
            assert len(feedback) == len(set(feedback))


# ===================================================================
# Rating thresholds
# ===================================================================

class TestRating:
    @pytest.mark.parametrize("score,rating", [
        (0, Rating.WEAK),
        (39, Rating.WEAK),
        (40, Rating.MEDIUM),
        (59, Rating.MEDIUM),
        (60, Rating.STRONG),
        (79, Rating.STRONG),
        (80, Rating.VERY_STRONG),
        (100, Rating.VERY_STRONG),
    ])
    def test_boundaries(self, score, rating):
        assert get_rating(score) == rating

    def test_rating_is_str_enum(self):
        assert Rating.MEDIUM == "Medium"


# ===================================================================
# Standalone feedback helper
# ===================================================================

class TestGenerateFeedback:
    def test_short_lowercase(self):
        assert generate_feedback("abc") == [
            "Consider using a longer password (12+ characters)",
            ADD_UPPER,
            ADD_NUMBERS,
            ADD_SPECIAL,
        ]

    def test_strong_password_has_no_feedback(self):
        assert generate_feedback("Xk9#mP2$vL7@qR") == []

    def test_empty(self):
        assert generate_feedback("") == [EMPTY_FEEDBACK]
