"""``lbcli doctor``: environment and session diagnostics command.

Gathers system information and renders a Rich table summarising the
runtime environment, the credential file, and whether the stored server
still answers discovery.

This module lives in the CLI layer; it may import from ``infra``
and ``core``, and it renders via Rich.  No business logic resides
here; it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from importlib.metadata import PackageNotFoundError, version

from rich.markup import escape
from rich.table import Table

from lbcli.cli import exit_codes
from lbcli.cli.commands import CommandContext
from lbcli.cli.console import console
from lbcli.core.models import Session
from lbcli.exceptions import LinkboxError
from lbcli.version import __version__

Check = tuple[str, str, str]
"""(label, value, status); status carries Rich markup."""

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _lbcli_version_check() -> Check:
    return "lbcli", __version__, _OK


def _python_version_check() -> Check:
    """Return (label, value, status) for the Python version row."""
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", platform.python_version(), status


def _package_version_check(distribution: str) -> Check:
    try:
        return distribution, version(distribution), _OK
    except PackageNotFoundError:
        return distribution, "NOT INSTALLED", _FAIL


def _os_check() -> Check:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, _OK


def _store_check(ctx: CommandContext) -> Check:
    return "Store", escape(str(ctx.store.path)), _OK


def _session_check(ctx: CommandContext) -> tuple[Check, Session | None]:
    """Describe the credential file and return the session it holds."""
    try:
        session = ctx.store.load_session()
    except LinkboxError:
        return ("Session", "unreadable", _FAIL), None
    if session is None:
        return ("Session", "not logged in", _WARN), None
    return ("Session", escape(session.base_url), _OK), session


def _server_check(ctx: CommandContext, session: Session) -> Check:
    base_url = escape(session.base_url)
    try:
        compatible = ctx.instance_probe(session.base_url)
    except LinkboxError as exc:
        return "Server", f"{base_url} ({escape(str(exc))})", _FAIL
    if not compatible:
        return "Server", f"{base_url} (not a linkbox instance)", _FAIL
    return "Server", base_url, _OK


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(ctx: CommandContext) -> int:
    """Execute all diagnostic checks and render a Rich summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.  A missing session
        is only a warning.
    """
    session_row, session = _session_check(ctx)
    checks: list[Check] = [
        _lbcli_version_check(),
        _python_version_check(),
        _package_version_check("httpx"),
        _os_check(),
        _store_check(ctx),
        session_row,
    ]
    if session is not None:
        checks.append(_server_check(ctx, session))

    table = Table(
        title="lbcli doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=10)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=6)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if any("FAIL" in status for _, _, status in checks):
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
