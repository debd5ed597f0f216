# G-Secure - Main Package
#
# Password intelligence and secrets-at-rest core for a personal
# credential vault: strength scoring, constrained generation,
# k-anonymity breach lookups and a keyword-derived cipher.
#
# HTTP routing, sessions and persistence live in the embedding app.

__version__ = "1.0.0"
__author__ = "G-Secure Team"
__description__ = "Password intelligence and keyword cipher core for a credential vault"

from .exceptions import (
    GSecureError,
    ConfigurationError,
    InvalidCipherInput,
    InvalidKeyOrCorruptData,
)
from .passwords import (
    Rating,
    ScoreResult,
    GenerationOptions,
    GenerationResult,
    GenerationFailure,
    BreachOutcome,
    score_password,
    generate_password,
    check_breach,
)
from .vault import encrypt_with_keyword, decrypt_with_keyword

__all__ = [
    "__version__",
    # Errors
    "GSecureError",
    "ConfigurationError",
    "InvalidCipherInput",
    "InvalidKeyOrCorruptData",
    # Passwords
    "Rating",
    "ScoreResult",
    "GenerationOptions",
    "GenerationResult",
    "GenerationFailure",
    "BreachOutcome",
    "score_password",
    "generate_password",
    "check_breach",
    # Vault
    "encrypt_with_keyword",
    "decrypt_with_keyword",
]
