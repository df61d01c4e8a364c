"""Allow ``python -m lbcli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m lbcli`` behaves identically to the ``lbcli`` console
script.
"""

from __future__ import annotations

from lbcli.cli.app import cli

if __name__ == "__main__":
    cli()
