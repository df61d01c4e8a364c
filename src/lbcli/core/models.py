"""Domain models for lbcli.

All models are **frozen** dataclasses: immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and must remain pure across the entire lifecycle.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Session:
    """A server base URL paired with the bearer token issued by it."""

    base_url: str
    """Server root without a trailing slash (e.g. ``https://example.com``)."""

    token: str | None = None
    """Bearer token, or ``None`` before a successful login."""

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def with_token(self, token: str) -> Session:
        return replace(self, token=token)


# ---------------------------------------------------------------------------
# Links
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Link:
    """A bookmarked URL as stored by the server."""

    id: int
    """Server-assigned identifier, unique within one server."""

    url: str
    """The bookmarked address."""

    note: str
    """Free-text note attached to the bookmark."""


@dataclass(frozen=True, slots=True)
class PartialLink:
    """The fields a client supplies when creating a :class:`Link`."""

    url: str
    note: str


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

DISCOVERY_MARKER: str = "box"
"""Value of ``link`` that identifies a compatible server."""


@dataclass(frozen=True, slots=True)
class DiscoveryResponse:
    """Body of the unauthenticated discovery endpoint."""

    link: str

    @property
    def is_compatible(self) -> bool:
        return self.link == DISCOVERY_MARKER
