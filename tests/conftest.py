"""Shared pytest fixtures and configuration for the lbcli test suite.

Guidelines
----------
* No internet access in any test; HTTP is served by
  :class:`httpx.MockTransport` through :class:`FakeServer`.
* The credential file always lives under ``tmp_path``.
* Tests must not depend on OS state (home directory, environment).
"""

from __future__ import annotations

import json
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import Any

import httpx
import pytest

from lbcli.cli.commands import CommandContext
from lbcli.config import ENV_LOG_LEVEL, ENV_STORE_PATH, ENV_TIMEOUT, Settings
from lbcli.infra.api_client import LinkboxClient
from lbcli.infra.session_store import SessionStore

BASE_URL = "https://example.com"

Handler = Callable[[httpx.Request], httpx.Response]


class FakeServer:
    """Route table in front of :class:`httpx.MockTransport`.

    Every request that reaches the transport is recorded in
    :attr:`requests`, so "no network call" is ``requests == []``.
    Unrouted requests fail the test loudly.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def route(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        *,
        json_body: Any = None,
        content: bytes | None = None,
    ) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            if json_body is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=json_body)

        self.routes[(method, path)] = handler

    def route_handler(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            raise AssertionError(f"unexpected request: {request.method} {request.url}")
        return self.routes[key](request)

    @property
    def last_request(self) -> httpx.Request:
        assert self.requests, "no request was made"
        return self.requests[-1]

    @staticmethod
    def json_of(request: httpx.Request) -> Any:
        return json.loads(request.content)


@pytest.fixture()
def server() -> FakeServer:
    return FakeServer()


@pytest.fixture()
def client(server: FakeServer) -> LinkboxClient:
    return LinkboxClient(BASE_URL, transport=server.transport)


@pytest.fixture()
def authed_client(client: LinkboxClient) -> LinkboxClient:
    return client.attach_token("abc")


@pytest.fixture()
def store_path(tmp_path: Path) -> Path:
    return tmp_path / ".lbcli.json"


@pytest.fixture()
def store(store_path: Path, server: FakeServer) -> SessionStore:
    return SessionStore(
        store_path,
        client_factory=partial(LinkboxClient.from_session, transport=server.transport),
    )


@pytest.fixture()
def cli_context(store_path: Path, store: SessionStore, server: FakeServer) -> CommandContext:
    return CommandContext(
        settings=Settings(store_path=store_path),
        store=store,
        client_factory=partial(LinkboxClient, transport=server.transport),
        instance_probe=partial(LinkboxClient.is_valid_instance, transport=server.transport),
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (ENV_STORE_PATH, ENV_TIMEOUT, ENV_LOG_LEVEL):
        monkeypatch.delenv(name, raising=False)


def write_session(path: Path, base_url: str = BASE_URL, jwt: str = "abc") -> None:
    path.write_text(json.dumps({"base_url": base_url, "jwt": jwt}), encoding="utf-8")


def link_json(link_id: int, url: str = "https://python.org", note: str = "docs") -> dict[str, Any]:
    return {"id": link_id, "url": url, "note": note}
