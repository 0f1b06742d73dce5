"""
Exceptions raised by errtree itself.

These are distinct from `errtree.tree.Error`, which is the value type callers
build to describe their own failures. The classes here report misuse of the
library (bad configuration, a second conflicting settings install).

Each class carries:
- code: String identifier for the error type
- message: Human-readable description
- context: Dict containing additional contextual information
"""
from __future__ import annotations
from typing import Any


class ErrtreeError(Exception):
    """Base exception for errors raised by the library."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "ERRTREE_ERROR",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context) if context else {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to structured dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": dict(self.context),
        }


class ConfigurationError(ErrtreeError):
    """Missing, invalid or conflicting configuration."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "CONFIGURATION_ERROR",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)
