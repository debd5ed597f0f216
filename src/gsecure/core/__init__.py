# G-Secure: Core Module - Shared Utilities
#
# Logging setup shared by the CLI and embedding applications.

from .logging_config import configure_logging

__all__ = ["configure_logging"]
