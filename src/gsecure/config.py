# G-Secure: Runtime Settings
#
# Settings come from GSECURE_* environment variables. An optional .env
# file in the working directory is loaded first (python-dotenv); values
# already present in the environment win.
#
# Cipher parameters are format constants (see vault/encryption.py) and
# are deliberately absent here.

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigurationError

DEFAULT_BREACH_API_URL = "https://api.pwnedpasswords.com/range"
DEFAULT_BREACH_USER_AGENT = "G-secure/v1.0.0"
DEFAULT_BREACH_TIMEOUT_SEC = 10.0
DEFAULT_LOG_LEVEL = "INFO"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for the G-Secure core."""

    breach_api_url: str = DEFAULT_BREACH_API_URL
    breach_user_agent: str = DEFAULT_BREACH_USER_AGENT
    breach_timeout: float = DEFAULT_BREACH_TIMEOUT_SEC
    breach_add_padding: bool = False
    log_level: str = DEFAULT_LOG_LEVEL
    log_json: bool = False


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def _parse_timeout(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {raw!r}")
    return value


def _parse_log_level(name: str, raw: str) -> str:
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"{name} is not a logging level: {raw!r}")
    return level


def load_settings(
    environ: Optional[Mapping[str, str]] = None,
    dotenv_path: Optional[str] = None,
) -> Settings:
    """Build Settings from the environment.

    Args:
        environ: Mapping to read instead of ``os.environ``. When given,
                 no .env file is loaded (keeps tests hermetic).
        dotenv_path: Explicit .env path; defaults to the nearest .env at or
                     above the working directory.

    Raises:
        ConfigurationError: A variable is set but cannot be parsed.
    """
    if environ is None:
        load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True), override=False)
        environ = os.environ

    def get(name: str, default: str) -> str:
        return environ.get(name, default)

    return Settings(
        breach_api_url=get("GSECURE_BREACH_API_URL", DEFAULT_BREACH_API_URL).rstrip("/"),
        breach_user_agent=get("GSECURE_BREACH_USER_AGENT", DEFAULT_BREACH_USER_AGENT),
        breach_timeout=_parse_timeout(
            "GSECURE_BREACH_TIMEOUT",
            get("GSECURE_BREACH_TIMEOUT", str(DEFAULT_BREACH_TIMEOUT_SEC)),
        ),
        breach_add_padding=_parse_bool(
            "GSECURE_BREACH_ADD_PADDING", get("GSECURE_BREACH_ADD_PADDING", "false")
        ),
        log_level=_parse_log_level(
            "GSECURE_LOG_LEVEL", get("GSECURE_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        ),
        log_json=_parse_bool("GSECURE_LOG_JSON", get("GSECURE_LOG_JSON", "false")),
    )
