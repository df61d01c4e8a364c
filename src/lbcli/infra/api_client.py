"""httpx backed client for the Linkbox HTTP API.

This module is the **only** place in the codebase that imports ``httpx``.
All httpx exceptions are caught here and re-raised as typed
:class:`~lbcli.exceptions.LinkboxError` subclasses; nothing raw escapes
the infrastructure boundary.

Expected failures (rejected credentials, refused authorization, failed
writes) are returned as :class:`~lbcli.core.results.Err` values, never
raised.
"""

from __future__ import annotations

from collections.abc import Callable
from types import TracebackType
from typing import Any, TypeVar

import httpx

from lbcli.core.models import Link, PartialLink, Session
from lbcli.core.payloads import (
    create_link_body,
    parse_discovery,
    parse_jwt,
    parse_link_envelope,
    parse_link_list,
    signin_body,
)
from lbcli.core.results import (
    AuthError,
    Err,
    Ok,
    Operation,
    Result,
    classify_failure,
    is_success,
)
from lbcli.exceptions import DecodeError, TransportError
from lbcli.utils.logging import get_logger
from lbcli.version import SOURCE_URL, __version__

logger = get_logger(__name__)

T = TypeVar("T")

USER_AGENT: str = f"lbcli/{__version__} ({SOURCE_URL})"

DISCOVER_PATH: str = "/api/v1/_lb-discover"
SIGNIN_PATH: str = "/api/v1/signin"
LINKS_PATH: str = "/api/v1/links"


def normalize_base_url(base_url: str) -> str:
    """Strip exactly one trailing ``/`` from *base_url*."""
    if base_url.endswith("/"):
        return base_url[:-1]
    return base_url


def _build_http_client(
    timeout: float | None,
    transport: httpx.BaseTransport | None,
) -> httpx.Client:
    kwargs: dict[str, Any] = {"headers": {"User-Agent": USER_AGENT}}
    if timeout is not None:
        kwargs["timeout"] = timeout
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.Client(**kwargs)


class LinkboxClient:
    """Session-backed client for one Linkbox server.

    Usage::

        with LinkboxClient("https://links.example.com/") as client:
            client.login("alice", "s3cret").unwrap()
            links = client.list_links().unwrap()

    Parameters
    ----------
    base_url:
        Server root; a single trailing ``/`` is removed.
    timeout:
        Request timeout in seconds.  ``None`` keeps httpx's default.
    transport:
        Optional httpx transport, e.g. :class:`httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._session: Session = Session(base_url=normalize_base_url(base_url))
        self._http: httpx.Client = _build_http_client(timeout, transport)

    @classmethod
    def from_session(
        cls,
        session: Session,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> LinkboxClient:
        client = cls(session.base_url, timeout=timeout, transport=transport)
        if session.token is not None:
            client.attach_token(session.token)
        return client

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    @staticmethod
    def is_valid_instance(
        base_url: str,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> bool:
        """Return whether *base_url* hosts a compatible Linkbox server.

        Any non-2xx discovery status answers ``False``.

        Raises
        ------
        TransportError
            When the server cannot be reached at all.
        DecodeError
            When a 2xx discovery body is not ``{"link": str}``.
        """
        url = normalize_base_url(base_url) + DISCOVER_PATH
        with _build_http_client(timeout, transport) as http:
            response = _send(http, "GET", url, Operation.DISCOVER)
        if not is_success(response.status_code):
            return False
        return _decode(response, parse_discovery).is_compatible

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    @property
    def base_url(self) -> str:
        return self._session.base_url

    @property
    def token(self) -> str | None:
        return self._session.token

    @property
    def session(self) -> Session:
        return self._session

    def attach_token(self, token: str) -> LinkboxClient:
        """Set the bearer token and return ``self``.  No network call."""
        self._session = self._session.with_token(token)
        return self

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> Result[None]:
        """Exchange credentials for a token and keep it in memory.

        The token is not persisted; that is the caller's job.
        """
        response = self._request(
            "POST",
            SIGNIN_PATH,
            Operation.SIGNIN,
            json=signin_body(username, password),
            authorized=False,
        )
        if not is_success(response.status_code):
            return Err(classify_failure(Operation.SIGNIN, response.status_code))
        self.attach_token(_decode(response, parse_jwt))
        logger.debug("signed in", base_url=self.base_url)
        return Ok(None)

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def list_links(self) -> Result[list[Link]]:
        operation = Operation.LIST_LINKS
        if self.token is None:
            return Err(AuthError.not_authorized(operation))
        response = self._request("GET", LINKS_PATH, operation)
        if not is_success(response.status_code):
            return Err(classify_failure(operation, response.status_code))
        return Ok(_decode(response, parse_link_list))

    def fetch_link(self, link_id: int) -> Result[Link | None]:
        """Fetch one link; a 404 is ``Ok(None)`` rather than a failure."""
        operation = Operation.GET_LINK
        if self.token is None:
            return Err(AuthError.not_authorized(operation))
        response = self._request("GET", f"{LINKS_PATH}/{link_id}", operation)
        if response.status_code == httpx.codes.NOT_FOUND:
            return Ok(None)
        if not is_success(response.status_code):
            return Err(classify_failure(operation, response.status_code))
        return Ok(_decode(response, parse_link_envelope))

    def create_link(self, url: str, note: str) -> Result[int]:
        """Create a link and return its server-assigned id."""
        operation = Operation.CREATE_LINK
        if self.token is None:
            return Err(AuthError.not_authorized(operation))
        response = self._request(
            "POST",
            LINKS_PATH,
            operation,
            json=create_link_body(PartialLink(url=url, note=note)),
        )
        if not is_success(response.status_code):
            return Err(classify_failure(operation, response.status_code))
        return Ok(_decode(response, parse_link_envelope).id)

    def delete_link(self, link_id: int) -> Result[None]:
        operation = Operation.DELETE_LINK
        if self.token is None:
            return Err(AuthError.not_authorized(operation))
        response = self._request("DELETE", f"{LINKS_PATH}/{link_id}", operation)
        if not is_success(response.status_code):
            return Err(classify_failure(operation, response.status_code))
        return Ok(None)

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        operation: Operation,
        *,
        json: Any = None,
        authorized: bool = True,
    ) -> httpx.Response:
        headers: dict[str, str] = {}
        if authorized and self.token is not None:
            headers["Authorization"] = f"Bearer {self.token}"
        return _send(
            self._http,
            method,
            self.base_url + path,
            operation,
            json=json,
            headers=headers,
        )

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._http.close()

    def __enter__(self) -> LinkboxClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinkboxClient):
            return NotImplemented
        return self._session == other._session

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"LinkboxClient(base_url={self.base_url!r}, "
            f"authenticated={self._session.is_authenticated})"
        )


# ---------------------------------------------------------------------------
# Module-level helpers (shared with the static discovery call)
# ---------------------------------------------------------------------------

def _send(
    http: httpx.Client,
    method: str,
    url: str,
    operation: Operation,
    *,
    json: Any = None,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    """Perform one request, mapping httpx failures to :class:`TransportError`."""
    logger.debug("api request", operation=operation.value, method=method, url=url)
    try:
        response = http.request(method, url, json=json, headers=headers)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.debug("api request failed", operation=operation.value, error=str(exc))
        raise TransportError(
            f"Could not {operation.value}: {exc}",
            hint="Check the server address and your network connection.",
        ) from exc
    logger.debug(
        "api response",
        operation=operation.value,
        method=method,
        url=url,
        status_code=response.status_code,
    )
    return response


def _decode(response: httpx.Response, parser: Callable[[Any], T]) -> T:
    """Decode *response* as JSON and hand it to *parser*."""
    try:
        raw = response.json()
    except ValueError as exc:
        raise DecodeError(
            f"Server returned a body that is not valid JSON (HTTP {response.status_code}).",
        ) from exc
    return parser(raw)
