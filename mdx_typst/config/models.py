"""Typed dataclasses describing the PDF book configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from mdx_typst._constants import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TEMPLATE_PATH,
    DESCRIPTOR_NAMES,
    SOURCE_EXTENSION,
    TYPST_SOURCE_NAME,
)

SECTION_STYLES = ("dark", "light")


class BookConfigError(ValueError):
    """Raised when the book configuration is invalid."""


@dc.dataclass(slots=True)
class BookConfig:
    """Settings for one assembled documentation book.

    Attributes
    ----------
    title, subtitle, version : str
        Cover metadata passed to the template's ``docs-book`` show rule.
    tab : str or None
        Navigation tab to build; ``None`` selects the first tab.
    descriptor_names : tuple[str, ...]
        Descriptor filenames tried in order inside the source directory.
    source_extension : str
        Extension appended to navigation page references.
    output_dir : Path
        Directory receiving the assembled ``.typ`` and the PDF.
    output_name : str
        Stem shared by the ``.typ`` source and the PDF.
    template_path : Path
        Typst template imported by the assembled document.
    section_style : str
        Divider page style, one of :data:`SECTION_STYLES`.
    section_descriptions : dict[str, str]
        Divider text keyed by navigation group name.
    default_description : str
        Format string (``{title}``) used for groups without a description.
    """

    title: str = "Documentation"
    subtitle: str = ""
    version: str = ""
    tab: str | None = None
    descriptor_names: tuple[str, ...] = DESCRIPTOR_NAMES
    source_extension: str = SOURCE_EXTENSION
    output_dir: Path = DEFAULT_OUTPUT_DIR
    output_name: str = Path(TYPST_SOURCE_NAME).stem
    template_path: Path = DEFAULT_TEMPLATE_PATH
    section_style: str = "dark"
    section_descriptions: dict[str, str] = dc.field(default_factory=dict)
    default_description: str = "Content for {title}."

    @property
    def typst_name(self) -> str:
        return f"{self.output_name}.typ"

    @property
    def pdf_name(self) -> str:
        return f"{self.output_name}.pdf"

    def describe(self, group: str) -> str:
        """Return the divider description for navigation group ``group``."""
        if group in self.section_descriptions:
            return self.section_descriptions[group]
        return self.default_description.replace("{title}", group)


__all__ = ["SECTION_STYLES", "BookConfig", "BookConfigError"]
