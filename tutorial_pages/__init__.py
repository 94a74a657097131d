"""Render literate tutorial sources into pages and serve them on demand.

This package exposes the CLI entry points used by the ``tutorial`` console
script to serve a tutorial root over HTTP or export it to static HTML.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from tutorial_pages import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
