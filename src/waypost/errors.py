"""Waypost exception hierarchy.

Shared across the compiler, route table, guard, and HTTP client so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class WaypostError(Exception):
    """Base for all waypost-specific errors."""


class ConfigurationError(WaypostError):
    """Raised when the application shell is misconfigured or misused.

    Typically raised by ``App.startup()`` when called more than once.
    """


class MenuFormatError(WaypostError, ValueError):
    """The menu tree payload does not have the expected shape."""


class NotFound(WaypostError):  # noqa: N818 — conventional name for routing misses
    """No registered route matches a path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(detail)
        self.detail = detail


@dataclass(frozen=True, slots=True)
class ApiError(WaypostError):
    """A failed API call.

    ``code`` carries the envelope code when the server answered with an
    error envelope; ``status`` carries the HTTP status for transport-level
    failures. Either may be ``None``.
    """

    message: str
    code: int | None = None
    status: int | None = None

    def __str__(self) -> str:
        if self.code is not None:
            return f"{self.code}: {self.message}"
        if self.status is not None:
            return f"HTTP {self.status}: {self.message}"
        return self.message


class Unauthorized(ApiError):  # noqa: N818 — mirrors the HTTP status name
    """HTTP 401, or the reserved unauthorized envelope code."""
