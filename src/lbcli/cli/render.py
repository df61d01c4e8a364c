"""Presentation of links on stdout."""

from __future__ import annotations

from collections.abc import Iterable

from rich.markup import escape

from lbcli.cli.console import output
from lbcli.core.models import Link


def format_link(link: Link) -> str:
    """Render *link* as ``"<id>: <url>"`` with the note indented below."""
    return f"{link.id}: {link.url}\n\t{link.note}"


def print_link(link: Link) -> None:
    output.print(escape(format_link(link)))


def print_links(links: Iterable[Link]) -> int:
    """Print every link in the given order and return how many there were."""
    count = 0
    for link in links:
        print_link(link)
        count += 1
    return count
