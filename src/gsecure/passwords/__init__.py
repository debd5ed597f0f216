# G-Secure: Passwords Module
#
# Strength scoring, constrained generation and k-anonymity breach lookups.
# Every entry point is stateless and safe to call concurrently.

from .models import (
    Rating,
    ScoreResult,
    GenerationOptions,
    GenerationResult,
    GenerationFailure,
    BreachOutcome,
)
from .strength import score_password, get_rating, generate_feedback
from .generator import PasswordGenerator, generate_password, generate_and_assess
from .breach import BreachChecker, check_breach, check_breach_async

__all__ = [
    # Models
    "Rating",
    "ScoreResult",
    "GenerationOptions",
    "GenerationResult",
    "GenerationFailure",
    "BreachOutcome",
    # Strength
    "score_password",
    "get_rating",
    "generate_feedback",
    # Generation
    "PasswordGenerator",
    "generate_password",
    "generate_and_assess",
    # Breach
    "BreachChecker",
    "check_breach",
    "check_breach_async",
]
