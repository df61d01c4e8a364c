"""Protocols (interfaces) consumed by the CLI layer.

These define the contracts that infrastructure adapters must satisfy.
Command handlers depend ONLY on these protocols; never on concrete
implementations, so that tests can hand them in-memory doubles.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from lbcli.core.models import Link, Session
from lbcli.core.results import Result


class LinkApi(Protocol):
    """Contract for an authenticated session against one Linkbox server.

    Expected failures come back as :class:`~lbcli.core.results.Err`.
    Implementations raise only :class:`~lbcli.exceptions.LinkboxError`
    subclasses for transport and decoding failures.
    """

    @property
    def base_url(self) -> str: ...

    @property
    def token(self) -> str | None: ...

    @property
    def session(self) -> Session: ...

    def login(self, username: str, password: str) -> Result[None]: ...

    def list_links(self) -> Result[list[Link]]: ...

    def fetch_link(self, link_id: int) -> Result[Link | None]: ...

    def create_link(self, url: str, note: str) -> Result[int]: ...

    def delete_link(self, link_id: int) -> Result[None]: ...

    def close(self) -> None: ...


class CredentialStore(Protocol):
    """Contract for the single-slot session store.

    Raises
    ------
    StorageError
        From any method, when the backing file cannot be used.
    """

    @property
    def path(self) -> Path: ...

    def exists(self) -> bool: ...

    def load_session(self) -> Session | None: ...

    def load(self) -> LinkApi | None:
        """Return a client for the stored session, or ``None`` if absent."""
        ...  # pragma: no cover

    def save(self, client: LinkApi) -> bool:
        """Persist *client*'s session; ``False`` when it holds no token."""
        ...  # pragma: no cover

    def remove(self) -> None: ...
