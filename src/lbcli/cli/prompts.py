"""Interactive prompts: credentials and yes/no confirmations.

questionary is imported lazily so that ``--help`` and ``--version``
keep working on a machine where it is missing.  ``unsafe_ask`` is used
throughout so that Ctrl+C surfaces as ``KeyboardInterrupt`` and reaches
the CLI error boundary.
"""

from __future__ import annotations

from typing import Any

from lbcli.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def ask_credentials() -> tuple[str, str]:
    """Prompt for a username, then a masked password.

    Raises
    ------
    KeyboardInterrupt
        If the user aborts either prompt.
    """
    questionary = _import_questionary()
    username: str = questionary.text("Enter username:").unsafe_ask()
    password: str = questionary.password("Enter password:").unsafe_ask()
    return username, password


def confirm(question: str) -> bool:
    """Ask a yes/no *question*; Enter alone answers yes."""
    questionary = _import_questionary()
    return bool(questionary.confirm(question, default=True).unsafe_ask())
