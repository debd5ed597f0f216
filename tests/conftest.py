"""
Shared pytest fixtures for the G-Secure test suite.

Autouse fixtures below isolate tests from the developer's machine:
  - GSECURE_* environment variables -> removed  (defaults apply)
  - Working directory               -> tmp_path (no stray .env is loaded)
  - "gsecure" logger handlers       -> restored after each test
"""

import logging
import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path, monkeypatch):
    """Drop GSECURE_* variables and run each test from an empty directory.

    Without this, a ``.env`` file or exported variable on the developer's
    machine (e.g. a custom breach API URL) would leak into config tests.
    """
    for name in list(os.environ):
        if name.startswith("GSECURE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """Undo handlers installed by configure_logging() during a test."""
    package_logger = logging.getLogger("gsecure")
    old_handlers = list(package_logger.handlers)
    old_level = package_logger.level
    old_propagate = package_logger.propagate

    yield

    package_logger.handlers = old_handlers
    package_logger.setLevel(old_level)
    package_logger.propagate = old_propagate


class SequenceRandom:
    """Deterministic stand-in for ``secrets.randbelow``.

    Returns values from ``values`` in order (wrapped into range), then
    ``default`` once exhausted. Records every bound it was asked for.
    """

    def __init__(self, values=(), default=0):
        self._values = list(values)
        self._default = default
        self.calls = []

    def __call__(self, n):
        self.calls.append(n)
        if self._values:
            return self._values.pop(0) % n
        return self._default % n


@pytest.fixture
def zero_random():
    """randbelow replacement that always returns 0."""
    return SequenceRandom()


@pytest.fixture
def sequence_random():
    """Factory for SequenceRandom instances."""
    return SequenceRandom
