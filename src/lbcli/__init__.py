"""lbcli: command-line client for a Linkbox link-bookmarking server.

Built on httpx with a strict layered architecture.
"""

from lbcli.version import __version__

__all__: list[str] = ["__version__"]
