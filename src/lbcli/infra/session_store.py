"""Single-slot credential file holding the current session.

The file is JSON of the shape ``{"base_url": str, "jwt": str}`` and is
the only place lbcli touches the filesystem.  There is no locking;
concurrent invocations racing on the file is an accepted limitation of
a single-user interactive tool.

Rules
-----
* An unauthenticated client never writes (and so never clears) the file.
* A malformed file is an error, never treated as "no session".
* Every ``OSError`` is re-raised as :class:`~lbcli.exceptions.StorageError`.
"""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path

from lbcli.config import default_store_path
from lbcli.core.models import Session
from lbcli.core.payloads import session_from_record, session_to_record
from lbcli.core.protocols import LinkApi
from lbcli.exceptions import DecodeError, StorageError
from lbcli.infra.api_client import LinkboxClient
from lbcli.utils.logging import get_logger

logger = get_logger(__name__)

ClientFactory = Callable[[Session], LinkApi]


class SessionStore:
    """Reads, writes and removes the stored session.

    Parameters
    ----------
    path:
        Location of the credential file.  Defaults to ``~/.lbcli.json``.
    client_factory:
        Builds a client from a loaded :class:`Session`.  Defaults to
        :meth:`LinkboxClient.from_session`.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self._path: Path = path if path is not None else default_store_path()
        self._client_factory: ClientFactory = client_factory or LinkboxClient.from_session

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def load_session(self) -> Session | None:
        """Return the stored :class:`Session`, or ``None`` if there is none.

        Raises
        ------
        StorageError
            When the file exists but cannot be read or decoded.
        """
        if not self._path.exists():
            logger.debug("no stored session", path=str(self._path))
            return None
        try:
            text = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise _malformed(self._path, exc) from exc
        except OSError as exc:
            raise StorageError(f"Could not read {self._path}: {exc}") from exc
        try:
            session = session_from_record(json.loads(text))
        except (ValueError, DecodeError) as exc:
            raise _malformed(self._path, exc) from exc
        logger.debug("loaded stored session", path=str(self._path), base_url=session.base_url)
        return session

    def load(self) -> LinkApi | None:
        """Return a client for the stored session, or ``None``."""
        session = self.load_session()
        if session is None:
            return None
        return self._client_factory(session)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def save(self, client: LinkApi) -> bool:
        """Persist *client*'s session, creating or truncating the file.

        Returns ``False`` without touching the file when *client* holds
        no token.
        """
        session = client.session
        if session.token is None:
            logger.debug("not saving unauthenticated session", path=str(self._path))
            return False

        payload = json.dumps(session_to_record(session))
        try:
            fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
        except OSError as exc:
            raise StorageError(f"Could not write {self._path}: {exc}") from exc

        logger.debug("saved session", path=str(self._path), base_url=session.base_url)
        return True

    def remove(self) -> None:
        """Delete the credential file.

        Raises
        ------
        StorageError
            When there is no file to delete, or deletion fails.
        """
        try:
            self._path.unlink()
        except FileNotFoundError as exc:
            raise StorageError(
                f"No stored session at {self._path}.",
                hint="You are not logged in.",
            ) from exc
        except OSError as exc:
            raise StorageError(f"Could not remove {self._path}: {exc}") from exc
        logger.debug("removed stored session", path=str(self._path))


def _malformed(path: Path, exc: Exception) -> StorageError:
    return StorageError(
        f"Stored session at {path} is malformed: {exc}",
        hint=f"Delete {path} and log in again.",
    )
