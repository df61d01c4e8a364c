"""Infrastructure layer: external system integration.

This layer wraps all interaction with the Linkbox server (via httpx)
and with the local credential file.  Every raw third-party or OS
exception must be caught here and re-raised as a
:class:`~lbcli.exceptions.LinkboxError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the CLI layer.
"""

from lbcli.infra.api_client import USER_AGENT, LinkboxClient, normalize_base_url
from lbcli.infra.session_store import SessionStore

__all__: list[str] = [
    "USER_AGENT",
    "LinkboxClient",
    "SessionStore",
    "normalize_base_url",
]
