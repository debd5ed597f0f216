# G-Secure: Passwords - Constrained Password Generator
#
# Builds a password of an exact length from the selected character
# classes, with an optional keyword embedded verbatim at a random offset.
#
# Randomness: secrets.randbelow (CSPRNG, no modulo bias).
# Class coverage: one character per selected class (drawn from the
# unfiltered alphabet) overwrites the leading positions of the random
# part. Exclusion filters therefore do not apply to those characters.

import logging
import secrets
from dataclasses import replace
from typing import Callable, List, Optional, Tuple

from .models import GenerationFailure, GenerationOptions, GenerationResult, ScoreResult
from .strength import score_password

logger = logging.getLogger(__name__)

MIN_LENGTH = 15
MAX_LENGTH = 128

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
NUMBERS = "0123456789"
SPECIAL = "!@#$%^&*()-_=+[]{};:,.<>?/|~"

SIMILAR_CHARS = "il1IoO0"
AMBIGUOUS_CHARS = "{}[]()/\\'\"`~,;:.<>"


class PasswordGenerator:
    """Generates passwords from ``GenerationOptions``.

    Usage::

        generator = PasswordGenerator()
        result = generator.generate(GenerationOptions(length=20, keyword="cat"))
        if result.success:
            print(result.password)

    ``randbelow`` must return a uniform int in ``[0, n)``; it defaults to
    ``secrets.randbelow`` and is only replaced in tests.
    """

    def __init__(self, randbelow: Optional[Callable[[int], int]] = None):
        self._randbelow = randbelow or secrets.randbelow

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(options: GenerationOptions) -> Optional[GenerationResult]:
        """Return a failed result for the first violated rule, else None."""
        length = options.length
        keyword = options.keyword or ""
        length_is_int = isinstance(length, int) and not isinstance(length, bool)

        if keyword and length_is_int and len(keyword) >= length:
            return GenerationResult.failed(
                GenerationFailure.KEYWORD_TOO_LONG,
                "Keyword is too long for the specified password length",
            )

        if not length_is_int or length < MIN_LENGTH or length > MAX_LENGTH:
            return GenerationResult.failed(
                GenerationFailure.INVALID_LENGTH,
                f"Password length must be between {MIN_LENGTH} and {MAX_LENGTH} characters",
            )

        if options.class_count == 0:
            return GenerationResult.failed(
                GenerationFailure.NO_CHAR_TYPES,
                "At least one character type must be selected",
            )

        return None

    # ------------------------------------------------------------------
    # Character pools
    # ------------------------------------------------------------------

    @staticmethod
    def _selected_alphabets(options: GenerationOptions) -> List[str]:
        alphabets = []
        if options.include_lowercase:
            alphabets.append(LOWERCASE)
        if options.include_uppercase:
            alphabets.append(UPPERCASE)
        if options.include_numbers:
            alphabets.append(NUMBERS)
        if options.include_special:
            alphabets.append(SPECIAL)
        return alphabets

    @staticmethod
    def build_pool(options: GenerationOptions) -> str:
        """Union of the selected alphabets minus the requested exclusions."""
        pool = "".join(PasswordGenerator._selected_alphabets(options))
        if options.exclude_similar:
            pool = "".join(c for c in pool if c not in SIMILAR_CHARS)
        if options.exclude_ambiguous:
            pool = "".join(c for c in pool if c not in AMBIGUOUS_CHARS)
        return pool

    def _choice(self, alphabet: str) -> str:
        return alphabet[self._randbelow(len(alphabet))]

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(self, options: Optional[GenerationOptions] = None) -> GenerationResult:
        """Generate a password, or a failed result explaining why not.

        Never raises: unexpected errors become ``GENERATION_FAILED``.
        """
        options = options or GenerationOptions()

        try:
            failure = self._validate(options)
            if failure is not None:
                logger.info("Password generation rejected: %s", failure.reason.value)
                return failure

            pool = self.build_pool(options)
            if not pool:
                logger.info("Password generation rejected: %s",
                            GenerationFailure.EMPTY_CHAR_POOL.value)
                return GenerationResult.failed(
                    GenerationFailure.EMPTY_CHAR_POOL,
                    "Character exclusions too restrictive - no valid characters available",
                )

            keyword = options.keyword or ""
            remaining = options.length - len(keyword)

            variable = [self._choice(pool) for _ in range(remaining)]

            coverage = [self._choice(alphabet) for alphabet in self._selected_alphabets(options)]
            for i in range(min(len(coverage), remaining)):
                variable[i] = coverage[i]

            position = self._randbelow(remaining + 1) if remaining > 0 else 0
            password = "".join(variable[:position]) + keyword + "".join(variable[position:])

            return GenerationResult.ok(password)

        except Exception as exc:
            logger.error("Password generation failed: %s", type(exc).__name__)
            return GenerationResult.failed(
                GenerationFailure.GENERATION_FAILED,
                f"Failed to generate password: {exc}",
            )


_default_generator = PasswordGenerator()


def generate_password(options: Optional[GenerationOptions] = None, **overrides) -> GenerationResult:
    """Generate a password with the module's CSPRNG-backed generator.

    Keyword arguments build or override ``GenerationOptions`` fields::

        generate_password(length=24, keyword="blue", include_special=False)

    An unknown field name gives a ``GENERATION_FAILED`` result, like any
    other unexpected error.
    """
    if overrides:
        try:
            options = replace(options or GenerationOptions(), **overrides)
        except TypeError as exc:
            logger.error("Password generation failed: %s", type(exc).__name__)
            return GenerationResult.failed(
                GenerationFailure.GENERATION_FAILED,
                f"Failed to generate password: {exc}",
            )
    return _default_generator.generate(options)


def generate_and_assess(
    options: Optional[GenerationOptions] = None,
) -> Tuple[GenerationResult, Optional[ScoreResult]]:
    """Generate a password and score it.

    Returns:
        (result, strength) where strength is None when generation failed.
    """
    result = generate_password(options)
    if not result.success:
        return result, None
    return result, score_password(result.password)
