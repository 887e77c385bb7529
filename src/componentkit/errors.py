"""Typed errors raised while loading the component registry.

Only the loader raises these. Resolution and schema validation report
problems as data instead.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    INVALID_FORMAT = "INVALID_FORMAT"  # document is not valid JSON
    NOT_FOUND = "NOT_FOUND"  # document does not exist
    INVALID_PROJECT = "INVALID_PROJECT"  # document parses but fails the schema


class ComponentKitError(Exception):
    """Registry failure carrying a machine-readable code and a hint for the user."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        suggestion: str = "",
        recoverable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = recoverable

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "recoverable": self.recoverable,
        }
