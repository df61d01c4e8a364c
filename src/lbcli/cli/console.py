"""Rich consoles shared by the CLI layer.

``output`` carries command results (stdout) so they can be piped;
``console`` carries errors, warnings and diagnostics (stderr).  Both
resolve their stream at write time, which keeps pytest's ``capsys``
working.
"""

from __future__ import annotations

from rich.console import Console

output = Console(highlight=False, emoji=False, soft_wrap=True)
"""Results and success messages: stdout."""

console = Console(stderr=True, highlight=False, emoji=False)
"""Errors, warnings and diagnostics: stderr."""
