"""Build pipeline: validate, enumerate, convert, write, and compile.

Every source file is read before any conversion starts, and the assembled
``.typ`` file is written before the compiler runs so a failed compile leaves
it on disk for inspection.
"""

from __future__ import annotations

import dataclasses as dc
import logging
from pathlib import Path

from .assembler import TypstAssembler
from .compiler import TypstCompiler
from .config import BookConfig
from .errors import SourceDirNotFound
from .navigation import Section, SectionLoader
from .paths import AssetResolver, common_root

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class BuildResult:
    """Paths and content produced by one build."""

    typst_path: Path
    pdf_path: Path | None
    sections: list[Section]

    @property
    def document_count(self) -> int:
        return sum(len(section.documents) for section in self.sections)

    @property
    def written(self) -> list[Path]:
        return [path for path in (self.typst_path, self.pdf_path) if path is not None]


class PdfBuilder:
    """Turn a Mintlify docs directory into an assembled Typst file and PDF."""

    def __init__(
        self,
        config: BookConfig | None = None,
        *,
        compiler: TypstCompiler | None = None,
    ) -> None:
        self.config = config or BookConfig()
        self.compiler = compiler or TypstCompiler()

    def resolver(self, source_root: Path) -> AssetResolver:
        """Return the resolver whose root holds the output, template, and docs."""
        tool_root = common_root(
            self.config.output_dir.resolve(), self.config.template_path.resolve().parent
        )
        return AssetResolver(tool_root=tool_root, docs_root=source_root)

    def build(self, source_dir: Path, *, compile_pdf: bool = True) -> BuildResult:
        """Run the full pipeline for ``source_dir``.

        Parameters
        ----------
        source_dir : Path
            Directory holding the navigation descriptor and MDX sources.
        compile_pdf : bool, optional
            When ``False`` only the Typst source is written.

        Returns
        -------
        BuildResult
            The written paths and the sections that were assembled.

        Raises
        ------
        SourceDirNotFound
            If ``source_dir`` is not a directory.
        DescriptorNotFound, DescriptorInvalid
            If the navigation descriptor is missing or malformed.
        CompileFailure
            If the Typst compiler fails.
        """
        source_root = source_dir.resolve()
        if not source_root.is_dir():
            raise SourceDirNotFound(source_dir)

        sections = SectionLoader(self.config).load(source_root)
        count = sum(len(section.documents) for section in sections)
        logger.info("found %d sections with %d files", len(sections), count)

        assets = self.resolver(source_root)
        source = TypstAssembler(self.config, assets=assets).assemble(sections)

        output_dir = self.config.output_dir.resolve()
        output_dir.mkdir(parents=True, exist_ok=True)
        typst_path = output_dir / self.config.typst_name
        typst_path.write_text(source, encoding="utf-8")
        logger.info("saved Typst source to %s", typst_path)

        pdf_path: Path | None = None
        if compile_pdf:
            pdf_path = self.compiler.compile(
                typst_path, output_dir / self.config.pdf_name, root=Path(assets.root)
            )
        return BuildResult(typst_path=typst_path, pdf_path=pdf_path, sections=sections)


__all__ = ["BuildResult", "PdfBuilder"]
