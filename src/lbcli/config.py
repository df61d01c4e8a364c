"""Runtime settings read from the environment.

==================== ======================= ==========================
Variable             Meaning                 Default
==================== ======================= ==========================
``LBCLI_STORE_PATH`` credential file         ``~/.lbcli.json``
``LBCLI_TIMEOUT``    HTTP timeout, seconds   httpx default
``LBCLI_LOG_LEVEL``  log level               ``WARNING``
==================== ======================= ==========================
"""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from lbcli.exceptions import ConfigurationError, StorageError
from lbcli.utils.logging import VALID_LEVELS

STORE_FILENAME: str = ".lbcli.json"

ENV_STORE_PATH: str = "LBCLI_STORE_PATH"
ENV_TIMEOUT: str = "LBCLI_TIMEOUT"
ENV_LOG_LEVEL: str = "LBCLI_LOG_LEVEL"


def default_store_path() -> Path:
    """Return ``<home>/.lbcli.json``.

    Raises
    ------
    StorageError
        If the user has no resolvable home directory.
    """
    try:
        home = Path.home()
    except RuntimeError as exc:
        raise StorageError(
            "User does not appear to have a home directory.",
            hint=f"Set {ENV_STORE_PATH} to choose where the session is stored.",
        ) from exc
    return home / STORE_FILENAME


@dataclass(frozen=True, slots=True)
class Settings:
    store_path: Path
    timeout: float | None = None
    """Seconds; ``None`` keeps the HTTP transport's own default."""
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (default: :data:`os.environ`).

        Raises
        ------
        ConfigurationError
            When ``LBCLI_TIMEOUT`` or ``LBCLI_LOG_LEVEL`` is unusable.
        StorageError
            When no store path is configured and there is no home directory.
        """
        env = os.environ if environ is None else environ

        raw_path = env.get(ENV_STORE_PATH, "").strip()
        store_path = Path(raw_path).expanduser() if raw_path else default_store_path()

        return cls(
            store_path=store_path,
            timeout=_parse_timeout(env.get(ENV_TIMEOUT, "").strip()),
            log_level=_parse_log_level(env.get(ENV_LOG_LEVEL, "").strip()),
        )


def _parse_timeout(raw: str) -> float | None:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(
            f"{ENV_TIMEOUT} must be a number of seconds, got {raw!r}.",
        ) from None
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{ENV_TIMEOUT} must be a positive finite number, got {raw!r}.")
    return value


def _parse_log_level(raw: str) -> str:
    if not raw:
        return "WARNING"
    level = raw.upper()
    if level not in VALID_LEVELS:
        raise ConfigurationError(
            f"{ENV_LOG_LEVEL} must be one of {', '.join(sorted(VALID_LEVELS))}, got {raw!r}.",
        )
    return level
