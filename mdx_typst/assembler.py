"""Assemble converted sections into one Typst source document.

The assembled file imports the bundled Typst template, applies its
``docs-book`` show rule with the configured cover metadata, and then emits a
``section-break`` divider per section followed by every document as a
labelled level-one heading and its converted body.
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .config import BookConfig
from .converter import RenderContext, TypstRenderer
from .converter.escaping import escape_markup, typst_string

if typ.TYPE_CHECKING:
    from .navigation import Section
    from .paths import AssetResolver

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True)
class RenderedDocument:
    """A document's heading data and converted Typst body."""

    title: str
    label: str
    body: str


@dc.dataclass(slots=True)
class RenderedSection:
    """Section divider data with its rendered documents."""

    number: str
    title: str
    description: str
    style: str
    documents: list[RenderedDocument]


class TypstAssembler:
    """Render sections into the assembled Typst document."""

    def __init__(
        self,
        config: BookConfig | None = None,
        *,
        assets: AssetResolver | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the assembler and its Jinja environment."""
        self.config = config or BookConfig()
        self.assets = assets
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["typst_str"] = typst_string
        self.env.filters["typst_markup"] = escape_markup
        self.template = self.env.get_template("document.typ.jinja")

    def template_import(self) -> str:
        """Return the path the assembled document uses to import the template.

        With an asset resolver the path is absolute below the compiler root;
        without one the template's filesystem path is used as is.
        """
        if self.assets is None:
            return self.config.template_path.as_posix()
        return self.assets.import_path(self.config.template_path)

    def assemble(self, sections: list[Section]) -> str:
        """Convert every document in ``sections`` and render the full source.

        Parameters
        ----------
        sections : list[Section]
            Sections in reading order, each holding its documents.

        Returns
        -------
        str
            Typst source text ending with a newline.
        """
        labels = frozenset(
            document.label for section in sections for document in section.documents
        )
        renderer = TypstRenderer(RenderContext(assets=self.assets, known_labels=labels))
        rendered: list[RenderedSection] = []
        for section in sections:
            documents: list[RenderedDocument] = []
            for document in section.documents:
                logger.debug("converting %s", document.path)
                documents.append(
                    RenderedDocument(
                        title=document.title,
                        label=document.label,
                        body=renderer.convert(document.body),
                    )
                )
            rendered.append(
                RenderedSection(
                    number=section.number,
                    title=section.title,
                    description=section.description,
                    style=section.style,
                    documents=documents,
                )
            )
        source = self.template.render(
            config=self.config,
            sections=rendered,
            template_import=self.template_import(),
        )
        if not source.endswith("\n"):
            source += "\n"
        return source


__all__ = ["RenderedDocument", "RenderedSection", "TypstAssembler"]
