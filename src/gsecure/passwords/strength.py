# G-Secure: Passwords - Strength Scoring Engine
#
# Deterministic heuristic scorer:
#   length (<=30) + character classes (<=30)
#   - pattern penalties (capped at 40)
#   + distribution bonus (<=20, only with all four classes)
# clamped to 0-100 and mapped to a Rating.

import math
import re
from typing import List

from .models import Rating, ScoreResult

EMPTY_FEEDBACK = "Password is empty or invalid"
GOOD_FEEDBACK = "Good password!"

MAX_PATTERN_DEDUCTION = 40

SEQUENCES = ("abcdefghijklmnopqrstuvwxyz", "0123456789")
COMMON_PATTERNS = ("password", "123456", "qwerty", "admin")

SEQUENCE_PENALTY = 5
REPEAT_PENALTY = 10
COMMON_PENALTY = 15

_LOWER_RE = re.compile(r"[a-z]")
_UPPER_RE = re.compile(r"[A-Z]")
_DIGIT_RE = re.compile(r"[0-9]")
# Whitespace is neither alphanumeric nor "special"
_SPECIAL_RE = re.compile(r"[^a-zA-Z0-9\s]")
_REPEAT_RE = re.compile(r"(.)\1{2,}")

# Missing-class feedback, in the order it is reported
_CLASS_FEEDBACK = (
    (_LOWER_RE, "Add lowercase letters"),
    (_UPPER_RE, "Add uppercase letters"),
    (_DIGIT_RE, "Add numbers"),
    (_SPECIAL_RE, "Add special characters (!@#$%^&*)"),
)


def _round_half_up(value: float) -> int:
    # round() would send 4.5 to 4; scores have always rounded .5 upward
    return int(math.floor(value + 0.5))


def _length_points(length: int, feedback: List[str]) -> float:
    if length < 8:
        feedback.append("Password is too short (aim for 12+ characters)")
        return length * 1.5
    if length < 12:
        feedback.append("Consider using a longer password")
        return 12 + (length - 8) * 2
    return 20 + min(10, (length - 12) * 0.5)


def _has_sequence(lowered: str, sequence: str) -> bool:
    for i in range(len(lowered) - 2):
        if lowered[i:i + 3] in sequence:
            return True
    return False


def _pattern_deduction(password: str, feedback: List[str]) -> int:
    """Raw (uncapped) pattern penalty, appending feedback for each hit."""
    lowered = password.lower()
    deduction = 0

    for sequence in SEQUENCES:
        if _has_sequence(lowered, sequence):
            deduction += SEQUENCE_PENALTY
            feedback.append("Avoid sequential characters (abc, 123, etc.)")

    if _REPEAT_RE.search(password):
        deduction += REPEAT_PENALTY
        feedback.append("Avoid repeating characters")

    if any(pattern in lowered for pattern in COMMON_PATTERNS):
        deduction += COMMON_PENALTY
        feedback.append("Avoid common words or patterns")

    return deduction


def _distribution_bonus(password: str) -> float:
    total = len(password)
    fractions = [
        len(pattern.findall(password)) / total
        for pattern in (_LOWER_RE, _UPPER_RE, _DIGIT_RE, _SPECIAL_RE)
    ]
    return 20 * (1 - max(fractions) + min(fractions))


def get_rating(score: float) -> Rating:
    """Map a numeric score to its Rating."""
    return Rating.from_score(score)


def score_password(password) -> ScoreResult:
    """Evaluate password strength.

    Args:
        password: Candidate password. Anything that is not a non-empty
                  ``str`` scores 0 / Weak.

    Returns:
        ScoreResult with an integer score (0-100), a Rating and
        de-duplicated improvement feedback.
    """
    if not password or not isinstance(password, str):
        return ScoreResult(score=0, rating=Rating.WEAK, feedback=(EMPTY_FEEDBACK,))

    feedback: List[str] = []
    score = _length_points(len(password), feedback)

    present = []
    for pattern, missing_message in _CLASS_FEEDBACK:
        if pattern.search(password):
            present.append(True)
            score += 7.5
        else:
            present.append(False)
            feedback.append(missing_message)

    deduction = min(_pattern_deduction(password, feedback), MAX_PATTERN_DEDUCTION)
    score = max(0, score - deduction)

    if all(present):
        score += _distribution_bonus(password)

    final = max(0, min(100, _round_half_up(score)))

    unique_feedback = tuple(dict.fromkeys(feedback))
    return ScoreResult(
        score=final,
        rating=get_rating(final),
        feedback=unique_feedback or (GOOD_FEEDBACK,),
    )


def generate_feedback(password: str) -> List[str]:
    """Standalone improvement suggestions, without scoring.

    Lighter than ``score_password``: only length and missing character
    classes are considered.
    """
    if not password or not isinstance(password, str):
        return [EMPTY_FEEDBACK]

    feedback = []
    if len(password) < 12:
        feedback.append("Consider using a longer password (12+ characters)")
    if not _UPPER_RE.search(password):
        feedback.append("Add uppercase letters")
    if not _LOWER_RE.search(password):
        feedback.append("Add lowercase letters")
    if not _DIGIT_RE.search(password):
        feedback.append("Add numbers")
    if not re.search(r"[^A-Za-z0-9]", password):
        feedback.append("Add special characters (!@#$%^&*)")
    return feedback
