"""Command handlers for ``lbcli``.

Each handler receives a :class:`CommandContext`, performs at most one
server operation, and returns an exit code.  Expected server failures
come back from the client as ``Err`` values and are turned into
:class:`~lbcli.exceptions.AuthFailedError` via ``unwrap()`` so that the
error boundary in :mod:`lbcli.cli.app` renders them.

No business logic lives here; only session bookkeeping, prompting and
printing.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import closing
from dataclasses import dataclass

from rich.markup import escape

from lbcli.cli import exit_codes
from lbcli.cli.console import console, output
from lbcli.cli.prompts import ask_credentials, confirm
from lbcli.cli.render import print_link, print_links
from lbcli.config import Settings
from lbcli.core.protocols import CredentialStore, LinkApi


@dataclass(frozen=True, slots=True)
class CommandContext:
    """Collaborators shared by every command handler."""

    settings: Settings
    store: CredentialStore
    client_factory: Callable[[str], LinkApi]
    """Builds an unauthenticated client for a server base URL."""
    instance_probe: Callable[[str], bool]
    """Answers whether a base URL hosts a compatible server."""


def _not_logged_in() -> int:
    console.print("[yellow]You are not logged in![/yellow]")
    return exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# Session commands
# ---------------------------------------------------------------------------

def run_login(ctx: CommandContext, server: str) -> int:
    """Verify *server*, prompt for credentials, sign in and persist."""
    if ctx.store.exists():
        console.print("[yellow]You are already logged in![/yellow]")
        return exit_codes.GENERAL_ERROR

    if not ctx.instance_probe(server):
        console.print(f"[red]Not a linkbox instance at: {escape(server)}![/red]")
        return exit_codes.GENERAL_ERROR

    username, password = ask_credentials()
    with closing(ctx.client_factory(server)) as client:
        client.login(username, password).unwrap()
        ctx.store.save(client)

    output.print("You are now logged in!")
    return exit_codes.SUCCESS


def run_logout(ctx: CommandContext, *, assume_yes: bool = False) -> int:
    if not ctx.store.exists():
        return _not_logged_in()

    if not assume_yes and not confirm("Are you sure you want to log out?"):
        console.print("[dim]Cancelled.[/dim]")
        return exit_codes.SUCCESS

    ctx.store.remove()
    output.print("You are now logged out!")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Link commands
# ---------------------------------------------------------------------------

def run_list(ctx: CommandContext) -> int:
    client = ctx.store.load()
    if client is None:
        return _not_logged_in()

    with closing(client):
        links = client.list_links().unwrap()

    if print_links(links) == 0:
        console.print("[dim]No links yet.[/dim]")
    return exit_codes.SUCCESS


def run_get(ctx: CommandContext, link_id: int) -> int:
    client = ctx.store.load()
    if client is None:
        return _not_logged_in()

    with closing(client):
        link = client.fetch_link(link_id).unwrap()

    if link is None:
        console.print(f"[red]Link with id {link_id} not found![/red]")
        return exit_codes.GENERAL_ERROR

    print_link(link)
    return exit_codes.SUCCESS


def run_create(ctx: CommandContext, url: str, note: str) -> int:
    client = ctx.store.load()
    if client is None:
        return _not_logged_in()

    with closing(client):
        new_id = client.create_link(url, note).unwrap()

    output.print(f"Created link with id: {new_id}!")
    return exit_codes.SUCCESS


def run_delete(ctx: CommandContext, link_id: int, *, assume_yes: bool = False) -> int:
    """Show the link, confirm, then delete it."""
    client = ctx.store.load()
    if client is None:
        return _not_logged_in()

    with closing(client):
        link = client.fetch_link(link_id).unwrap()
        if link is None:
            console.print("[red]No link with that id exists![/red]")
            return exit_codes.GENERAL_ERROR

        print_link(link)
        if not assume_yes and not confirm("Are you sure you want to delete this link?"):
            console.print("[dim]Cancelled.[/dim]")
            return exit_codes.SUCCESS

        client.delete_link(link_id).unwrap()

    output.print(f"Deleted link with id: {link_id}!")
    return exit_codes.SUCCESS
