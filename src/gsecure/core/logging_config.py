# G-Secure: Logging Setup
#
# Library modules log through stdlib ``logging.getLogger(__name__)``.
# configure_logging() routes those records through structlog processors
# so the embedding application gets either console or JSON output.
#
# Never pass passwords, keywords, hashes or decrypted plaintext to a logger.

import logging
import sys
from typing import Optional, TextIO

import structlog

_HANDLER_NAME = "gsecure"


def _shared_processors():
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def configure_logging(
    level: str = "INFO",
    json_logs: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Handler:
    """Install a structlog-formatted handler on the ``gsecure`` logger.

    Calling this again replaces the previously installed handler, so the
    CLI and tests can reconfigure freely.

    Args:
        level: Logging level name (e.g. "INFO", "DEBUG").
        json_logs: Render JSON lines instead of the console format.
        stream: Output stream (default: stderr).

    Returns:
        The installed handler.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=_shared_processors() + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger("gsecure")
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level.upper())
    package_logger.propagate = False

    return handler
