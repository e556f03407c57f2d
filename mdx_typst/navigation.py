"""Enumerate documentation sections from a Mintlify navigation descriptor.

The descriptor (``docs.json`` or the legacy ``mint.json``) lists navigation
groups in reading order. Each group becomes a numbered :class:`Section`, and
each page reference becomes a :class:`Document` read from its MDX source.
Pages whose source is missing are skipped with a warning, and groups left
without documents are dropped.

Examples
--------
>>> from mdx_typst.navigation import parse_frontmatter
>>> parse_frontmatter('---\\ntitle: "Intro"\\n---\\nBody')
({'title': 'Intro'}, 'Body')
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ

import msgspec
import msgspec.json as msgspec_json

from .config import SECTION_STYLES, BookConfig
from .converter import document_label
from .errors import DescriptorInvalid, DescriptorNotFound, SourceFileMissing

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"\A---\n(?P<block>.*?)\n---\n?", re.DOTALL)


class NavGroup(msgspec.Struct):
    """Navigation group; pages are references or nested groups."""

    group: str
    pages: list[str | NavGroup] = []


class NavTab(msgspec.Struct):
    tab: str = ""
    groups: list[NavGroup] = []


class Navigation(msgspec.Struct):
    tabs: list[NavTab] = []
    groups: list[NavGroup] = []


class Descriptor(msgspec.Struct):
    """The subset of ``docs.json`` needed to enumerate sections."""

    navigation: Navigation | list[NavGroup] | None = None

    def groups(self, tab: str | None = None) -> list[NavGroup]:
        """Return the navigation groups of ``tab`` (default: the first tab).

        Raises
        ------
        DescriptorInvalid
            If ``tab`` names a tab the descriptor does not define.
        """
        match self.navigation:
            case None:
                return []
            case list():
                return self.navigation
            case Navigation(tabs=tabs) if tabs:
                if tab is None:
                    return tabs[0].groups
                for candidate in tabs:
                    if candidate.tab == tab:
                        return candidate.groups
                msg = f"Navigation tab {tab!r} not found."
                raise DescriptorInvalid(msg)
            case Navigation(groups=groups):
                return groups
        return []


def flatten_pages(group: NavGroup) -> list[str]:
    """Return the page references of ``group`` with nested groups inlined."""
    pages: list[str] = []
    for page in group.pages:
        match page:
            case str():
                pages.append(page)
            case NavGroup():
                pages.extend(flatten_pages(page))
    return pages


def find_descriptor(source_root: Path, names: tuple[str, ...]) -> Path:
    """Return the first descriptor file in ``source_root`` named in ``names``.

    Raises
    ------
    DescriptorNotFound
        If none of ``names`` exists.
    """
    for name in names:
        candidate = source_root / name
        if candidate.is_file():
            return candidate
    raise DescriptorNotFound(source_root, names)


def load_descriptor(path: Path) -> Descriptor:
    """Decode a navigation descriptor file.

    Raises
    ------
    DescriptorInvalid
        If the file is not valid JSON or does not match the expected shape.
    """
    try:
        return msgspec_json.decode(path.read_bytes(), type=Descriptor)
    except msgspec.DecodeError as exc:
        msg = f"Invalid navigation descriptor {path}: {exc}"
        raise DescriptorInvalid(msg) from exc


def parse_frontmatter(content: str) -> tuple[dict[str, str], str]:
    """Split ``content`` into front matter values and the remaining body.

    The front matter is a ``---`` fenced block of ``key: value`` lines at the
    very start of the file; values wrapped in matching quotes are unquoted.
    Content without such a block is returned unchanged with no metadata.
    """
    content = content.replace("\r\n", "\n")
    match = FRONTMATTER_PATTERN.match(content)
    if match is None:
        return {}, content
    metadata: dict[str, str] = {}
    for line in match.group("block").split("\n"):
        key, sep, value = line.partition(":")
        if not sep or not key.strip():
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        metadata[key.strip()] = value
    return metadata, content[match.end() :]


@dc.dataclass(slots=True)
class Document:
    """One MDX page ready for conversion.

    Attributes
    ----------
    path : str
        Source path relative to the docs root, including the extension.
    body : str
        MDX text after the front matter.
    metadata : dict[str, str]
        Front matter values.
    """

    path: str
    body: str
    metadata: dict[str, str] = dc.field(default_factory=dict)

    @property
    def title(self) -> str:
        stem, _, _ = self.path.rpartition(".")
        return self.metadata.get("title") or stem or self.path

    @property
    def label(self) -> str:
        """Cross-reference label, e.g. ``welcome-start-guide``."""
        return document_label(self.path.rpartition(".")[0] or self.path)


@dc.dataclass(slots=True)
class Section:
    """A numbered navigation group and its readable documents."""

    number: str
    title: str
    description: str
    style: str = SECTION_STYLES[0]
    documents: list[Document] = dc.field(default_factory=list)


def read_document(source_root: Path, page_path: str) -> Document:
    """Read ``page_path`` below ``source_root`` and split its front matter.

    Raises
    ------
    SourceFileMissing
        If the file does not exist.
    """
    full_path = source_root / page_path
    if not full_path.is_file():
        raise SourceFileMissing(full_path)
    metadata, body = parse_frontmatter(full_path.read_text(encoding="utf-8"))
    return Document(path=page_path, body=body, metadata=metadata)


class SectionLoader:
    """Build :class:`Section` objects for the configured navigation tab."""

    def __init__(self, config: BookConfig | None = None) -> None:
        self.config = config or BookConfig()

    def load(self, source_root: Path) -> list[Section]:
        """Locate, decode, and read every section below ``source_root``.

        Raises
        ------
        DescriptorNotFound
            If no descriptor exists in ``source_root``.
        DescriptorInvalid
            If the descriptor cannot be decoded or lacks the configured tab.
        """
        descriptor_path = find_descriptor(source_root, self.config.descriptor_names)
        descriptor = load_descriptor(descriptor_path)
        groups = descriptor.groups(self.config.tab)
        return self.build_sections(source_root, groups)

    def build_sections(self, source_root: Path, groups: list[NavGroup]) -> list[Section]:
        """Read each group's pages and number the non-empty groups."""
        sections: list[Section] = []
        for index, group in enumerate(groups, start=1):
            documents = self._read_group(source_root, group)
            if not documents:
                logger.info("skipping empty section %s", group.group)
                continue
            sections.append(
                Section(
                    number=f"{index:02d}",
                    title=group.group,
                    description=self.config.describe(group.group),
                    style=self.config.section_style,
                    documents=documents,
                )
            )
        return sections

    def _read_group(self, source_root: Path, group: NavGroup) -> list[Document]:
        documents: list[Document] = []
        for page in flatten_pages(group):
            page_path = f"{page.strip('/')}{self.config.source_extension}"
            try:
                documents.append(read_document(source_root, page_path))
            except SourceFileMissing:
                logger.warning("File not found: %s", page_path)
        return documents


__all__ = [
    "Descriptor",
    "Document",
    "NavGroup",
    "NavTab",
    "Navigation",
    "Section",
    "SectionLoader",
    "find_descriptor",
    "flatten_pages",
    "load_descriptor",
    "parse_frontmatter",
    "read_document",
]
