"""Exception hierarchy for trustnet.

All errors raised by the library derive from TrustNetException and carry
a human readable message plus a ``details`` dict for structured reporting.
"""

from __future__ import annotations

from typing import Any


class TrustNetException(Exception):
    """Base exception for all trustnet errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TrustNetException):
    """A trust assignment (or other input) failed validation."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        index: int | None = None,
    ):
        details: dict[str, Any] = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = value
        if index is not None:
            details["index"] = index
        super().__init__(message, details)
        self.field = field
        self.value = value
        self.index = index


class ConfigException(TrustNetException):
    """Invalid engine configuration."""

    def __init__(self, message: str, setting: str | None = None, value: Any = None):
        details: dict[str, Any] = {}
        if setting is not None:
            details["setting"] = setting
        if value is not None:
            details["value"] = value
        super().__init__(message, details)
        self.setting = setting


class AreaNotFoundError(TrustNetException):
    """No engine is registered under the requested area name."""

    def __init__(self, area: str):
        super().__init__(f"Trust area not found: {area}", {"area": area})
        self.area = area
