"""Custom exception hierarchy for lbcli.

All exceptions that cross layer boundaries must inherit from
:class:`LinkboxError`.  Raw third-party exceptions (e.g. from httpx or
the filesystem) must NEVER propagate beyond the infrastructure layer;
they must be caught and re-raised as a typed subclass defined here.

Expected request outcomes (rejected credentials, missing authorization,
server-side failures) are *not* exceptions: they travel as
:class:`~lbcli.core.results.Err` values.  Only :class:`AuthFailedError`
turns such a value into an exception, and only when a caller asks for
it via ``unwrap()``.

Hierarchy
---------
LinkboxError
├── TransportError
├── DecodeError
├── StorageError
├── AuthFailedError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lbcli.core.results import AuthError


class LinkboxError(Exception):
    """Base exception for all lbcli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Network / wire --------------------------------------------------------

class TransportError(LinkboxError):
    """Raised when the server cannot be reached or the exchange breaks down."""


class DecodeError(LinkboxError):
    """Raised when a response body is not the JSON shape we expect."""


# --- Local state -----------------------------------------------------------

class StorageError(LinkboxError):
    """Raised when the credential file cannot be read, written or removed."""


class ConfigurationError(LinkboxError):
    """Raised when an environment setting holds an unusable value."""


# --- Request outcomes ------------------------------------------------------

class AuthFailedError(LinkboxError):
    """Raised by ``Err.unwrap()`` to surface an :class:`AuthError` value."""

    def __init__(self, error: AuthError) -> None:
        super().__init__(error.message, hint=error.hint)
        self.error: AuthError = error


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(LinkboxError):
    """Raised when a required runtime dependency is not available."""
