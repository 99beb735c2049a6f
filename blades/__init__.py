"""Render user-authored metadata through logic-less page templates.

The package adapts arbitrary parsed values (front matter and site config)
to the rendering contract a mustache-style template engine drives, and ships
the thin build pipeline and CLI that put it to use.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from blades import main
>>> main()  # doctest: +SKIP
>>> callable(main)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
