"""Cyclopts CLI entrypoint for building PDF documentation from Mintlify MDX.

The ``mdx-typst`` console script reads a Mintlify docs directory (the
``docs.json`` navigation plus its ``.mdx`` pages), writes one assembled Typst
source file, and compiles it into a PDF with the ``typst`` binary. Options can
also be supplied through ``INPUT_``-prefixed environment variables so the
command runs unchanged as a CI action step.

Examples
--------
Build the PDF for the default ``docs`` directory:

>>> from mdx_typst.cli import main
>>> main([])  # doctest: +SKIP

Write only the Typst source for another docs tree:

>>> main(["../product-docs", "--no-compile"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG_PATH, DEFAULT_DOCS_DIR
from .builder import BuildResult, PdfBuilder
from .compiler import TypstCompiler
from .config import BookConfigError, load_book_config
from .errors import DocsBuildError

logger = logging.getLogger(__name__)

app = App(
    name="mdx-typst",
    config=cyclopts.config.Env("INPUT_", command=False),  # type: ignore[unknown-argument]
    result_action="return_value",
)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def run_build(
    source_dir: Path,
    *,
    config_path: Path | None = None,
    output_dir: Path | None = None,
    compile_pdf: bool = True,
    typst: str = "typst",
) -> BuildResult:
    """Load configuration, run the builder, and report written files.

    A ``config_path`` of ``None`` uses the default ``config/book.yaml`` when
    it exists and the built-in defaults otherwise.
    """
    if config_path is None and DEFAULT_CONFIG_PATH.exists():
        config_path = DEFAULT_CONFIG_PATH
    book = load_book_config(config_path)
    if output_dir is not None:
        book.output_dir = output_dir
    builder = PdfBuilder(book, compiler=TypstCompiler(typst))
    result = builder.build(source_dir, compile_pdf=compile_pdf)
    print(
        f"converted {result.document_count} files in {len(result.sections)} sections"
    )
    for path in result.written:
        print(f"wrote {_format_path(path)}")
    return result


@app.default
def build(
    source_dir: typ.Annotated[
        Path, Parameter(help="Mintlify docs directory containing docs.json")
    ] = DEFAULT_DOCS_DIR,
    *,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to book config YAML", env_var="INPUT_CONFIG")
    ] = None,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    compile_pdf: typ.Annotated[
        bool,
        Parameter(
            name=["--compile"],
            negative=["--no-compile"],
            help="Compile the PDF after writing the Typst source",
        ),
    ] = True,
    typst: typ.Annotated[
        str, Parameter(help="Typst executable name or path", env_var="INPUT_TYPST")
    ] = "typst",
) -> int:
    """Build the PDF documentation bundle.

    Parameters
    ----------
    source_dir : Path, optional
        Docs directory; defaults to the ``docs`` sibling of the tool checkout.
    config : Path or None, optional
        Book configuration file (overridable via ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Directory for the ``.typ`` source and the PDF.
    compile_pdf : bool, optional
        Run ``typst compile`` after writing the source.
    typst : str, optional
        Typst executable.

    Returns
    -------
    int
        ``0`` on success, ``1`` when the build fails.
    """
    try:
        run_build(
            source_dir,
            config_path=config,
            output_dir=output_dir,
            compile_pdf=compile_pdf,
            typst=typst,
        )
    except (DocsBuildError, BookConfigError, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Invoke the Cyclopts application that powers the ``mdx-typst`` command.

    Parameters
    ----------
    argv : list[str] or None, optional
        Arguments to parse; ``None`` reads ``sys.argv``.

    Returns
    -------
    int
        Process exit status.
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    result = app(argv)
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    sys.exit(main())
