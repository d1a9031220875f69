"""
Core error types and helpers for sigdefs.

Design intent:
- Lean on built-in exception classes for ergonomics (ValueError/TypeError/etc.).
- Provide machine-readable error codes via a single lightweight base error that
  can be used as an exception cause for structured handling.

Contract:
- Public raiser helpers raise built-in exceptions and chain a SigdefsError as
  the cause, carrying an ErrorCode.
- Callers that want structured handling can catch built-ins and inspect
  `exc.__cause__` for a SigdefsError (and its `code`).
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from pathlib import Path


class ErrorCode(StrEnum):
    """Machine-readable classification for sigdefs failures."""

    INVALID_SOURCE = "invalid_source"
    SOURCE_NOT_FOUND = "source_not_found"
    INVALID_PARAMETERS = "invalid_parameters"
    INVALID_CONFIG = "invalid_config"
    UNSUPPORTED_FEATURE = "unsupported_feature"


class SigdefsError(Exception):
    """Lightweight, structured error carrying an ErrorCode.

    Not raised directly by the core APIs. Helpers below raise built-in
    exceptions and set a SigdefsError as the exception cause
    (`raise X from SigdefsError(...)`).
    """

    def __init__(self, message: str, *, code: ErrorCode | None = None) -> None:
        """
        Initialize SigdefsError.

        Args:
            message: Human-readable error message.
            code: Optional ErrorCode classifying the error.
        """
        super().__init__(message)
        self.code: ErrorCode | None = code


# -----------------------------------------------------------------------------
# Standardized message prefixes
# -----------------------------------------------------------------------------

_INVALID_SOURCE_PREFIX: Final[str] = "Invalid sigdefs source."
_INVALID_PARAMS_PREFIX: Final[str] = "Invalid parameters for sigdefs."
_INVALID_CONFIG_PREFIX: Final[str] = "Invalid sigdefs configuration."
_UNSUPPORTED_PREFIX: Final[str] = "Unsupported sigdefs feature."


# -----------------------------------------------------------------------------
# Raiser helpers (raise built-ins; chain SigdefsError with code)
# -----------------------------------------------------------------------------


def raise_invalid_source(*, detail: str) -> None:
    """Raise a standardized source error.

    Raises:
        ValueError: Always, chained from SigdefsError(code=INVALID_SOURCE).
    """
    msg = f"{_INVALID_SOURCE_PREFIX} Detail: {detail}"
    raise ValueError(msg) from SigdefsError(msg, code=ErrorCode.INVALID_SOURCE)


def raise_source_not_found(*, path: Path | str) -> None:
    """Raise a standardized missing-source error.

    Raises:
        FileNotFoundError: Always, chained from SigdefsError(code=SOURCE_NOT_FOUND).
    """
    msg = f"sigdefs source not found: {str(path)!r}."
    raise FileNotFoundError(msg) from SigdefsError(
        msg, code=ErrorCode.SOURCE_NOT_FOUND
    )


def raise_parameter_error(*, detail: str) -> None:
    """Raise a standardized parameter/type error.

    Raises:
        TypeError: Always, chained from SigdefsError(code=INVALID_PARAMETERS).
    """
    msg = f"{_INVALID_PARAMS_PREFIX} {detail}"
    raise TypeError(msg) from SigdefsError(msg, code=ErrorCode.INVALID_PARAMETERS)


def raise_invalid_config(
    *,
    missing: list[str] | None = None,
    detail: str | None = None,
) -> None:
    """Raise a standardized configuration error.

    Raises:
        ValueError: Always, chained from SigdefsError(code=INVALID_CONFIG).
    """
    parts: list[str] = [_INVALID_CONFIG_PREFIX]
    if missing:
        parts.append(f"Missing required field(s): {sorted(set(missing))}.")
    if detail:
        parts.append(f"Detail: {detail}")
    msg = " ".join(parts)

    raise ValueError(msg) from SigdefsError(msg, code=ErrorCode.INVALID_CONFIG)


def raise_unsupported_feature(*, feature: str, detail: str | None = None) -> None:
    """Raise a standardized unsupported feature error.

    Raises:
        NotImplementedError: Chained from SigdefsError(code=UNSUPPORTED_FEATURE).
    """
    msg = f"{_UNSUPPORTED_PREFIX} Feature '{feature}' is not supported."
    if detail:
        msg = f"{msg} Detail: {detail}"
    raise NotImplementedError(msg) from SigdefsError(
        msg, code=ErrorCode.UNSUPPORTED_FEATURE
    )
