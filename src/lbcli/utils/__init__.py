"""Shared utilities: cross-cutting concerns such as logging.

Rules
-----
* No business logic.
* No network or credential-file I/O.
* Importable by any layer.
"""
