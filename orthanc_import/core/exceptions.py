"""Exception hierarchy for orthanc-import.

Provides typed exceptions for different failure modes with clear error messages.
"""

from __future__ import annotations

from typing import Any


class OrthancImportError(Exception):
    """Base exception for all orthanc-import errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(OrthancImportError):
    """Error in configuration (missing, invalid, or malformed)."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(OrthancImportError):
    """Input validation failed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
    ):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class InvalidURLError(ValidationError):
    """Invalid URL format."""

    def __init__(self, url: str, reason: str = ""):
        msg = f"Invalid URL: {url}"
        if reason:
            msg = f"{msg} - {reason}"
        super().__init__(msg, field="url", value=url)
        self.url = url
        self.reason = reason


class PathValidationError(ValidationError):
    """Path validation failed."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid path: {path} - {reason}", field="path", value=path)
        self.path = path
        self.reason = reason


# =============================================================================
# Runtime Errors
# =============================================================================


class HistoryError(OrthancImportError):
    """Upload history could not be loaded or appended to."""

    def __init__(self, message: str, history_path: str | None = None):
        details = {"history": history_path} if history_path else {}
        super().__init__(message, details)
        self.history_path = history_path


class QueueClosedError(OrthancImportError):
    """An item was pushed onto a queue that was already closed."""

    def __init__(self, name: str):
        super().__init__(f"Queue is closed: {name}", {"queue": name})
        self.name = name
