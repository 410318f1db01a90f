"""Exception types raised by the tool operations."""

from __future__ import annotations


class ToolError(Exception):
    """Base class for errors raised while handling a tool call."""


class MissingFieldError(ToolError, ValueError):
    """A required argument was absent from the tool call."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field} is required")


class UnknownToolError(ToolError, LookupError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ConfigurationError(ToolError):
    """A setting needed by the operation is missing."""


class CredentialsError(ConfigurationError):
    """The service-account credential could not be decoded."""


def error_message(exc: BaseException) -> str:
    """Message reported to callers for a failed call."""
    return str(exc) or type(exc).__name__
