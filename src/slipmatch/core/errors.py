#!/usr/bin/env python3
"""
slipmatch Error Types

Specific error types carrying enough context to log and report a failure.
"""

from typing import Any


class SlipmatchError(Exception):
    """Base exception with structured error info."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ConfigurationError(SlipmatchError):
    """A required setting is missing or invalid."""


class SourceError(SlipmatchError):
    """The notification source could not be read or fetched."""


class InvalidRecordError(SlipmatchError):
    """A notification line could not be turned into a record."""

    def __init__(self, message: str, line: str):
        super().__init__(message, context={"line": line})
        self.line = line


class PocketsmithError(SlipmatchError):
    """A PocketSmith API call failed (transport, auth or validation)."""

    def __init__(self, message: str, status_code: int | None = None, response_text: str | None = None):
        super().__init__(message, context={"status_code": status_code})
        self.status_code = status_code
        self.response_text = response_text

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"
