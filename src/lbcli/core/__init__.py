"""Core layer: domain models, result values and wire-format mapping.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from lbcli.core.models import DiscoveryResponse, Link, PartialLink, Session
from lbcli.core.protocols import CredentialStore, LinkApi
from lbcli.core.results import (
    AuthError,
    AuthErrorKind,
    Err,
    Ok,
    Operation,
    Result,
    classify_failure,
    is_success,
)

__all__: list[str] = [
    "AuthError",
    "AuthErrorKind",
    "CredentialStore",
    "DiscoveryResponse",
    "Err",
    "Link",
    "LinkApi",
    "Ok",
    "Operation",
    "PartialLink",
    "Result",
    "Session",
    "classify_failure",
    "is_success",
]
