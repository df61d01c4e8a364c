"""CLI application entry point and command routing for lbcli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~lbcli.exceptions.LinkboxError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here; all work is delegated to the command
  handlers, which in turn use the infrastructure layer.
* ``print()`` is forbidden outside the CLI layer; Rich console is used
  exclusively.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from functools import partial

from rich.markup import escape

from lbcli.cli import commands, exit_codes
from lbcli.cli.commands import CommandContext
from lbcli.cli.console import console
from lbcli.config import Settings
from lbcli.exceptions import AuthFailedError, LinkboxError
from lbcli.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser and its sub-subparsers."""
    parser = argparse.ArgumentParser(
        prog="lbcli",
        description="Command-line client for a Linkbox link-bookmarking server.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log requests and session handling to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    login = subparsers.add_parser("login", help="Log in to a Linkbox server.")
    login.add_argument("server", help="Base URL of the server, e.g. https://links.example.com")

    logout = subparsers.add_parser("logout", help="Forget the stored session.")
    logout.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation.")

    subparsers.add_parser("list", help="List all links.")

    get = subparsers.add_parser("get", help="Show one link.")
    get.add_argument("id", type=int, help="Link id.")

    create = subparsers.add_parser("create", help="Create a link.")
    create.add_argument("url", help="URL to bookmark.")
    create.add_argument("note", help="Note attached to the link.")

    delete = subparsers.add_parser("delete", help="Delete a link.")
    delete.add_argument("id", type=int, help="Link id.")
    delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation.")

    subparsers.add_parser("doctor", help="Check the environment and the stored session.")
    return parser


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def _build_context(settings: Settings) -> CommandContext:
    """Wire the httpx client and the credential file into a context."""
    from lbcli.infra.api_client import LinkboxClient
    from lbcli.infra.session_store import SessionStore

    store = SessionStore(
        settings.store_path,
        client_factory=partial(LinkboxClient.from_session, timeout=settings.timeout),
    )
    return CommandContext(
        settings=settings,
        store=store,
        client_factory=partial(LinkboxClient, timeout=settings.timeout),
        instance_probe=partial(LinkboxClient.is_valid_instance, timeout=settings.timeout),
    )


def _dispatch(args: argparse.Namespace, ctx: CommandContext) -> int:
    command: str = args.command
    if command == "login":
        return commands.run_login(ctx, args.server)
    if command == "logout":
        return commands.run_logout(ctx, assume_yes=args.yes)
    if command == "list":
        return commands.run_list(ctx)
    if command == "get":
        return commands.run_get(ctx, args.id)
    if command == "create":
        return commands.run_create(ctx, args.url, args.note)
    if command == "delete":
        return commands.run_delete(ctx, args.id, assume_yes=args.yes)
    if command == "doctor":
        from lbcli.cli.doctor import run_doctor

        return run_doctor(ctx)
    raise AssertionError(f"unhandled command: {command}")  # pragma: no cover


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the lbcli CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    from lbcli.utils.logging import configure_logging

    settings = Settings.from_env()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    return _dispatch(args, _build_context(settings))


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def _print_error(exc: LinkboxError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    if exc.hint:
        console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except AuthFailedError as exc:
        _print_error(exc)
        sys.exit(exit_codes.AUTH_ERROR)
    except LinkboxError as exc:
        _print_error(exc)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
