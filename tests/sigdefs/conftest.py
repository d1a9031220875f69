"""Shared fixtures for the sigdefs test suite."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def restore_sigdefs_logger() -> Iterator[None]:
    """Put the package logger back the way it was after a test."""
    logger = logging.getLogger("sigdefs")
    handlers, level = list(logger.handlers), logger.level
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
