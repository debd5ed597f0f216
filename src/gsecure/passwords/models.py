# G-Secure: Passwords Module - Result and Option Models
#
# Structured values returned by the strength scorer, the password
# generator and the breach checker. All are created fresh per call and
# hold no reference to the evaluated password.

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class Rating(str, Enum):
    """Qualitative strength category derived from a 0-100 score."""

    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"
    VERY_STRONG = "Very Strong"

    @classmethod
    def from_score(cls, score: float) -> "Rating":
        """Map a numeric score to a rating (<40, <60, <80, else)."""
        if score < 40:
            return cls.WEAK
        if score < 60:
            return cls.MEDIUM
        if score < 80:
            return cls.STRONG
        return cls.VERY_STRONG


@dataclass(frozen=True)
class ScoreResult:
    """Outcome of a strength evaluation."""

    score: int
    rating: Rating
    feedback: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "rating": self.rating.value,
            "feedback": list(self.feedback),
        }


class GenerationFailure(str, Enum):
    """Reason codes for a rejected generation request."""

    KEYWORD_TOO_LONG = "KEYWORD_TOO_LONG"
    INVALID_LENGTH = "INVALID_LENGTH"
    NO_CHAR_TYPES = "NO_CHAR_TYPES"
    EMPTY_CHAR_POOL = "EMPTY_CHAR_POOL"
    GENERATION_FAILED = "GENERATION_FAILED"


# camelCase keys accepted by GenerationOptions.from_dict
_OPTION_ALIASES = {
    "plength": "length",
    "includeLowercase": "include_lowercase",
    "includeUppercase": "include_uppercase",
    "includeNumbers": "include_numbers",
    "includeSpecial": "include_special",
    "excludeSimilar": "exclude_similar",
    "excludeAmbiguous": "exclude_ambiguous",
}


@dataclass
class GenerationOptions:
    """User preferences for password generation.

    Values are not checked here; ``generate_password`` validates them and
    reports problems as a failed ``GenerationResult``.
    """

    length: int = 16
    keyword: str = ""
    include_lowercase: bool = True
    include_uppercase: bool = True
    include_numbers: bool = True
    include_special: bool = True
    exclude_similar: bool = False
    exclude_ambiguous: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationOptions":
        """Build options from a request body.

        Accepts snake_case field names and the camelCase names used by
        the web client. Unknown keys are ignored; ``None`` values fall back
        to the defaults.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name in known and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    @property
    def class_count(self) -> int:
        return sum((
            bool(self.include_lowercase),
            bool(self.include_uppercase),
            bool(self.include_numbers),
            bool(self.include_special),
        ))


@dataclass(frozen=True)
class GenerationResult:
    """Either a generated password or a typed failure."""

    success: bool
    password: Optional[str] = None
    reason: Optional[GenerationFailure] = None
    message: str = ""

    @classmethod
    def ok(cls, password: str) -> "GenerationResult":
        return cls(success=True, password=password)

    @classmethod
    def failed(cls, reason: GenerationFailure, message: str) -> "GenerationResult":
        return cls(success=False, reason=reason, message=message)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "password": self.password}
        return {
            "success": False,
            "message": self.message,
            "code": self.reason.value if self.reason else None,
        }


@dataclass(frozen=True)
class BreachOutcome:
    """Result of a k-anonymity breach lookup.

    ``count`` is the number of times the password appears in the corpus
    (0 = not found). ``count is None`` means the lookup could not be
    completed; that is never the same as "not found".
    """

    count: Optional[int] = field(default=None)

    @classmethod
    def found(cls, count: int) -> "BreachOutcome":
        if count < 0:
            raise ValueError("breach count cannot be negative")
        return cls(count=count)

    @classmethod
    def unavailable(cls) -> "BreachOutcome":
        return cls(count=None)

    @property
    def available(self) -> bool:
        return self.count is not None

    @property
    def compromised(self) -> Optional[bool]:
        """True if breached, False if not found, None if unverifiable."""
        if self.count is None:
            return None
        return self.count > 0

    def to_dict(self) -> Dict[str, Any]:
        if self.count is None:
            return {"available": False}
        result: Dict[str, Any] = {"available": True, "compromised": self.count > 0}
        if self.count > 0:
            result["count"] = self.count
        return result
