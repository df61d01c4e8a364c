"""JSON payload builders and parsers for the Linkbox HTTP API.

Raw decoded JSON (``Any``) goes in, domain models come out.  Shape
mismatches raise :class:`~lbcli.exceptions.DecodeError`; nothing here
performs I/O.
"""

from __future__ import annotations

from typing import Any

from lbcli.core.models import DiscoveryResponse, Link, PartialLink, Session
from lbcli.exceptions import DecodeError


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

def signin_body(username: str, password: str) -> dict[str, str]:
    return {"username": username, "password": password}


def create_link_body(link: PartialLink) -> dict[str, dict[str, str]]:
    return {"link": {"url": link.url, "note": link.note}}


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _require_object(raw: Any, what: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise DecodeError(f"Expected a JSON object for {what}, got {type(raw).__name__}.")
    return raw


def _require_str(obj: dict[str, Any], key: str, what: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise DecodeError(f"Field {key!r} of {what} must be a string.")
    return value


def _require_int(obj: dict[str, Any], key: str, what: str) -> int:
    value = obj.get(key)
    # bool is an int subclass; JSON true/false is not an id.
    if not isinstance(value, int) or isinstance(value, bool):
        raise DecodeError(f"Field {key!r} of {what} must be an integer.")
    return value


# ---------------------------------------------------------------------------
# Response bodies
# ---------------------------------------------------------------------------

def parse_discovery(raw: Any) -> DiscoveryResponse:
    obj = _require_object(raw, "discovery response")
    return DiscoveryResponse(link=_require_str(obj, "link", "discovery response"))


def parse_jwt(raw: Any) -> str:
    obj = _require_object(raw, "signin response")
    return _require_str(obj, "jwt", "signin response")


def parse_link(raw: Any) -> Link:
    obj = _require_object(raw, "link")
    return Link(
        id=_require_int(obj, "id", "link"),
        url=_require_str(obj, "url", "link"),
        note=_require_str(obj, "note", "link"),
    )


def parse_link_envelope(raw: Any) -> Link:
    """Parse ``{"data": Link}``."""
    obj = _require_object(raw, "link response")
    if "data" not in obj:
        raise DecodeError("Link response has no 'data' field.")
    return parse_link(obj["data"])


def parse_link_list(raw: Any) -> list[Link]:
    """Parse ``{"data": [Link, ...]}``, keeping server order."""
    obj = _require_object(raw, "link list response")
    data = obj.get("data")
    if not isinstance(data, list):
        raise DecodeError("Field 'data' of link list response must be an array.")
    return [parse_link(entry) for entry in data]


# ---------------------------------------------------------------------------
# Stored session
# ---------------------------------------------------------------------------

def session_to_record(session: Session) -> dict[str, str]:
    """Serialise an authenticated session to the credential-file shape."""
    if session.token is None:
        raise ValueError("Only an authenticated session can be stored.")
    return {"base_url": session.base_url, "jwt": session.token}


def session_from_record(raw: Any) -> Session:
    obj = _require_object(raw, "stored session")
    return Session(
        base_url=_require_str(obj, "base_url", "stored session"),
        token=_require_str(obj, "jwt", "stored session"),
    )
