# G-Secure: Passwords - Breach Checker (k-anonymity range lookup)
#
# Pwned Passwords range API:
#   - GET {base_url}/{first 5 hex chars of SHA-1}
#   - Body: newline-separated "SUFFIX:COUNT" rows for every hash sharing
#     the prefix
#   - Only the 5-char prefix leaves the process
#
# One request per check: no retries, no caching (breach status changes).
# Any failure maps to BreachOutcome.unavailable(), never to a count of 0.

import hashlib
import logging
from typing import Dict, Optional, Tuple

import httpx

from ..config import (
    DEFAULT_BREACH_API_URL,
    DEFAULT_BREACH_TIMEOUT_SEC,
    DEFAULT_BREACH_USER_AGENT,
    Settings,
)
from .models import BreachOutcome

logger = logging.getLogger(__name__)

PREFIX_LENGTH = 5


class MalformedRangeResponse(ValueError):
    """Raised when a range response body cannot be parsed."""


def hash_prefix_suffix(password: str) -> Tuple[str, str]:
    """Split the uppercase SHA-1 hex digest into (5-char prefix, 35-char suffix)."""
    digest = hashlib.sha1(password.encode("utf-8")).hexdigest().upper()
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]


def parse_range_body(body: str, suffix: str) -> int:
    """Find ``suffix`` in a range response body.

    Returns:
        The breach count for the suffix, or 0 when it is not listed.

    Raises:
        MalformedRangeResponse: A non-blank row is not ``SUFFIX:COUNT``.
    """
    match = 0
    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue
        row_suffix, sep, raw_count = line.partition(":")
        if not sep:
            raise MalformedRangeResponse("range row without ':' separator")
        raw_count = raw_count.strip()
        # int() alone would also take "+5", "5_000" and non-ASCII digits
        if not (raw_count.isascii() and raw_count.isdigit()):
            raise MalformedRangeResponse("range row with non-integer count")
        count = int(raw_count)
        if row_suffix.strip() == suffix:
            match = count
    return match


class BreachChecker:
    """Checks passwords against a remote breach corpus by hash prefix.

    Usage::

        checker = BreachChecker()
        checker.configure(user_agent="my-app/1.0", timeout=5)
        outcome = checker.check("hunter2")
        if not outcome.available:
            ...  # could not verify
        elif outcome.compromised:
            ...  # outcome.count breaches
    """

    def __init__(self):
        self._base_url: str = DEFAULT_BREACH_API_URL
        self._user_agent: str = DEFAULT_BREACH_USER_AGENT
        self._timeout: float = DEFAULT_BREACH_TIMEOUT_SEC
        self._add_padding: bool = False
        self._async_transport: Optional[httpx.AsyncBaseTransport] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "BreachChecker":
        checker = cls()
        checker.configure(
            base_url=settings.breach_api_url,
            user_agent=settings.breach_user_agent,
            timeout=settings.breach_timeout,
            add_padding=settings.breach_add_padding,
        )
        return checker

    def configure(self, **kwargs) -> None:
        """Configure the checker.

        Keyword Args:
            base_url: Range endpoint base URL (prefix is appended as a path segment).
            user_agent: Client identifier sent as the User-Agent header.
            timeout: Request timeout in seconds.
            add_padding: Ask the service to pad responses with dummy rows.
            transport: httpx async transport for ``check_async`` (tests).
        """
        self._base_url = kwargs.get("base_url", DEFAULT_BREACH_API_URL).rstrip("/")
        self._user_agent = kwargs.get("user_agent", DEFAULT_BREACH_USER_AGENT)
        self._timeout = float(kwargs.get("timeout", DEFAULT_BREACH_TIMEOUT_SEC))
        self._add_padding = bool(kwargs.get("add_padding", False))
        self._async_transport = kwargs.get("transport")

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    def _build_headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": self._user_agent,
            "Accept": "text/plain",
        }
        if self._add_padding:
            headers["Add-Padding"] = "true"
        return headers

    def _range_url(self, prefix: str) -> str:
        return f"{self._base_url}/{prefix}"

    @staticmethod
    def _interpret(resp: httpx.Response, suffix: str) -> BreachOutcome:
        if not 200 <= resp.status_code < 300:
            logger.warning("Breach lookup returned HTTP %d", resp.status_code)
            return BreachOutcome.unavailable()
        try:
            count = parse_range_body(resp.text, suffix)
        except MalformedRangeResponse as exc:
            logger.warning("Breach lookup response malformed: %s", exc)
            return BreachOutcome.unavailable()
        logger.debug("Breach lookup complete (compromised=%s)", count > 0)
        return BreachOutcome.found(count)

    @staticmethod
    def _split(password) -> Optional[Tuple[str, str]]:
        if not password or not isinstance(password, str):
            logger.warning("Invalid password provided to breach check")
            return None
        try:
            return hash_prefix_suffix(password)
        except UnicodeEncodeError:
            # lone surrogates from undecodable argv/stdin bytes
            logger.warning("Invalid password provided to breach check")
            return None

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def check(self, password: str) -> BreachOutcome:
        """Blocking lookup, bounded by the configured timeout."""
        parts = self._split(password)
        if parts is None:
            return BreachOutcome.unavailable()
        prefix, suffix = parts

        try:
            resp = httpx.get(
                self._range_url(prefix),
                headers=self._build_headers(),
                timeout=self._timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Breach lookup failed: %s", type(exc).__name__)
            return BreachOutcome.unavailable()

        return self._interpret(resp, suffix)

    async def check_async(self, password: str) -> BreachOutcome:
        """Non-blocking lookup.

        Cancellation of the awaiting task propagates as
        ``asyncio.CancelledError``; it is not turned into an outcome.
        """
        parts = self._split(password)
        if parts is None:
            return BreachOutcome.unavailable()
        prefix, suffix = parts

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._async_transport,
            ) as client:
                resp = await client.get(
                    self._range_url(prefix),
                    headers=self._build_headers(),
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("Breach lookup failed: %s", type(exc).__name__)
            return BreachOutcome.unavailable()

        return self._interpret(resp, suffix)


def check_breach(password: str, settings: Optional[Settings] = None) -> BreachOutcome:
    """Check one password with a checker built from ``settings`` (or defaults)."""
    checker = BreachChecker.from_settings(settings) if settings else BreachChecker()
    return checker.check(password)


async def check_breach_async(password: str, settings: Optional[Settings] = None) -> BreachOutcome:
    """Async counterpart of ``check_breach``."""
    checker = BreachChecker.from_settings(settings) if settings else BreachChecker()
    return await checker.check_async(password)
