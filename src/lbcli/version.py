"""Single source of truth for the package version."""

from __future__ import annotations

__version__: str = "0.1.0"

SOURCE_URL: str = "https://github.com/ashisbored/linkbox-cli"
"""Project home advertised in the outbound ``User-Agent`` header."""
