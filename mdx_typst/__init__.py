"""Build a PDF from Mintlify MDX documentation via Typst.

This package exposes the CLI entry point used by ``mdx-typst`` and the
programmatic converter for single documents.

Exports
-------
- ``app``: Cyclopts application for the ``mdx-typst`` command.
- ``main``: Convenience function that invokes the Cyclopts app.
- ``convert_mdx``: Convert one MDX body into Typst markup.

Examples
--------
>>> from mdx_typst import convert_mdx
>>> convert_mdx("Costs $5 via me@example.com")
'Costs \\\\$5 via me\\\\@example.com'
"""

from __future__ import annotations

from .cli import app, main
from .converter import convert_mdx

__all__ = ["app", "convert_mdx", "main"]
