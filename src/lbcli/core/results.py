"""Result values and HTTP status classification.

Expected failures of a request (rejected credentials, missing or refused
authorization, a failed write) are returned as :class:`Err` values rather
than raised.  The mapping from an HTTP status code to one of those
failures lives in exactly one place: :func:`classify_failure`.

Guarantees
----------
* Pure: no I/O and no dependency on the HTTP library.
* Every operation has exactly one failure kind for non-success statuses;
  the only status handled outside this module is the 404 of a link
  lookup, which is an absent result rather than a failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, NoReturn, TypeVar, Union

from lbcli.exceptions import AuthFailedError

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Operations and failure kinds
# ---------------------------------------------------------------------------

class Operation(str, Enum):
    """Server operations, valued by the label used in messages and logs."""

    DISCOVER = "discover"
    SIGNIN = "signin"
    LIST_LINKS = "list links"
    GET_LINK = "get link"
    CREATE_LINK = "create link"
    DELETE_LINK = "delete link"


class AuthErrorKind(str, Enum):
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_AUTHORIZED = "not_authorized"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True, slots=True)
class AuthError:
    """An expected, user-facing failure of one operation."""

    kind: AuthErrorKind
    operation: Operation
    status_code: int | None = None
    """HTTP status for ``SERVER_ERROR``; ``None`` when no request was sent."""

    @classmethod
    def invalid_credentials(cls, operation: Operation) -> AuthError:
        return cls(AuthErrorKind.INVALID_CREDENTIALS, operation)

    @classmethod
    def not_authorized(cls, operation: Operation) -> AuthError:
        return cls(AuthErrorKind.NOT_AUTHORIZED, operation)

    @classmethod
    def server_error(cls, operation: Operation, status_code: int) -> AuthError:
        return cls(AuthErrorKind.SERVER_ERROR, operation, status_code)

    @property
    def message(self) -> str:
        if self.kind is AuthErrorKind.INVALID_CREDENTIALS:
            return "invalid credentials"
        if self.kind is AuthErrorKind.NOT_AUTHORIZED:
            return f"not authorized to {self.operation.value}"
        return f"server error: {self.status_code}"

    @property
    def hint(self) -> str | None:
        if self.kind is AuthErrorKind.INVALID_CREDENTIALS:
            return "Check your username and password and try again."
        if self.kind is AuthErrorKind.NOT_AUTHORIZED:
            return "Your session may have expired. Run 'lbcli logout' then 'lbcli login'."
        return None

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Result sum type
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    error: AuthError

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise :class:`~lbcli.exceptions.AuthFailedError` for this failure."""
        raise AuthFailedError(self.error)


Result = Union[Ok[T], Err]


# ---------------------------------------------------------------------------
# Status classification
# ---------------------------------------------------------------------------

_FAILURE_KINDS: dict[Operation, AuthErrorKind] = {
    Operation.SIGNIN: AuthErrorKind.INVALID_CREDENTIALS,
    Operation.LIST_LINKS: AuthErrorKind.NOT_AUTHORIZED,
    Operation.GET_LINK: AuthErrorKind.NOT_AUTHORIZED,
    Operation.CREATE_LINK: AuthErrorKind.SERVER_ERROR,
    Operation.DELETE_LINK: AuthErrorKind.SERVER_ERROR,
}


def is_success(status_code: int) -> bool:
    """Return ``True`` for any 2xx status."""
    return 200 <= status_code < 300


def classify_failure(operation: Operation, status_code: int) -> AuthError:
    """Map a non-success *status_code* of *operation* to its :class:`AuthError`.

    Raises
    ------
    ValueError
        If *operation* has no failure mapping (discovery never fails, it
        answers ``False``).
    """
    try:
        kind = _FAILURE_KINDS[operation]
    except KeyError:
        raise ValueError(f"No failure mapping for operation {operation.value!r}") from None
    if kind is AuthErrorKind.SERVER_ERROR:
        return AuthError.server_error(operation, status_code)
    return AuthError(kind, operation)
