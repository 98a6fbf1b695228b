"""Structured errors for bracketdown.

The parser itself never raises for malformed markup; these errors cover
the outer layers (configuration, page conversion, CLI).
"""

from __future__ import annotations

import json
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stable error codes for --json-errors output."""

    CONFIG_ERROR = "CONFIG_ERROR"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    FILE_WRITE_ERROR = "FILE_WRITE_ERROR"
    MISSING_TITLE = "MISSING_TITLE"
    DUPLICATE_TITLE = "DUPLICATE_TITLE"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class BracketdownError(Exception):
    """Base error carrying a code and optional details."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": str(self.code), "message": self.message}
        if self.details:
            data["details"] = self.details
        return data

    def to_json(self) -> str:
        return json.dumps({"error": self.to_dict()}, default=str)


class ConfigurationError(BracketdownError):
    """Raised when configuration is missing or malformed."""

    code = ErrorCode.CONFIG_ERROR


class ConversionError(BracketdownError):
    """Raised when a page cannot be read, parsed, or written."""

    code = ErrorCode.FILE_READ_ERROR


def format_error_json(code: str, message: str, details: dict[str, Any] | None = None) -> str:
    """Format an arbitrary error as the same JSON shape BracketdownError emits."""
    error: dict[str, Any] = {"code": str(code), "message": message}
    if details:
        error["details"] = details
    return json.dumps({"error": error}, default=str)
