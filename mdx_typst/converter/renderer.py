"""Render tokenized MDX nodes into Typst markup.

The renderer walks the node tree once. Every node type has exactly one
rendering rule: prose leaves are escaped, code, links, and images are emitted
in their final Typst form, and elements are delegated to the component
table. Rendered output is never scanned again.

Example
-------
>>> from mdx_typst.converter.renderer import TypstRenderer
>>> TypstRenderer().convert("## Setup\\n\\nRun **now**.")
'== Setup\\n\\nRun #strong[now].'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from urllib.parse import urlsplit

from . import inline
from .components import render_component
from .escaping import escape_markup
from .nodes import (
    Blank,
    CodeBlock,
    Element,
    Emph,
    Heading,
    Image,
    InlineCode,
    Link,
    ListItem,
    Node,
    Paragraph,
    Rule,
    Strong,
    StrongEmph,
    Table,
    Text,
)
from .tokenizer import tokenize, tokenize_inline

if typ.TYPE_CHECKING:
    from mdx_typst.paths import AssetResolver


@dc.dataclass(slots=True, frozen=True)
class RenderContext:
    """Read-only data shared by every document in one build.

    Attributes
    ----------
    assets : AssetResolver or None
        Resolver used to root image paths; ``None`` leaves paths untouched.
    known_labels : frozenset[str]
        Labels of every document in the assembled output, used to decide
        whether a card can link to its destination.
    """

    assets: AssetResolver | None = None
    known_labels: frozenset[str] = frozenset()


@dc.dataclass(slots=True, frozen=True)
class _InlineMode:
    links: bool = True
    emphasis: bool = True
    figures: bool = True


_DEFAULT_MODE = _InlineMode()
_CARD_MODE = _InlineMode(links=False)
_PLAIN_MODE = _InlineMode(links=False, emphasis=False, figures=False)


def document_label(path: str) -> str:
    """Return the cross-reference label for a docs path or page reference.

    >>> document_label("/welcome/start-guide.mdx")
    'welcome-start-guide'
    """
    stem = path.strip("/")
    if stem.endswith(".mdx"):
        stem = stem[: -len(".mdx")]
    return stem.replace("/", "-")


class TypstRenderer:
    """Convert MDX text into Typst markup for a single document."""

    def __init__(self, context: RenderContext | None = None) -> None:
        self.context = context or RenderContext()

    def convert(self, text: str) -> str:
        """Tokenize and render ``text``, returning trimmed Typst markup."""
        return self.render_blocks(tokenize(text))

    # Block level

    def render_blocks(self, nodes: list[Node], *, links: bool = True) -> str:
        """Render block nodes, separating standalone blocks by one blank line.

        Blank runs of any length collapse to a single blank line, and no
        blank lines are emitted at the start or end.
        """
        mode = _DEFAULT_MODE if links else _CARD_MODE
        lines: list[str] = []
        pending_break = False
        for node in nodes:
            if isinstance(node, Blank):
                pending_break = True
                continue
            text, standalone = self._render_block(node, mode)
            if not text.strip():
                # A removed block still ends the preceding paragraph.
                pending_break = pending_break or standalone
                continue
            if lines and (pending_break or standalone):
                lines.append("")
            lines.append(text)
            pending_break = standalone
        return "\n".join(lines)

    def render_children(self, element: Element, *, links: bool = True) -> str:
        """Render an element's children in the form they were parsed."""
        if element.block:
            return self.render_blocks(element.children, links=links)
        mode = _DEFAULT_MODE if links else _CARD_MODE
        return self.render_inline(element.children, mode)

    def _render_block(self, node: Node, mode: _InlineMode) -> tuple[str, bool]:
        match node:
            case Paragraph(children=children):
                standalone = all(
                    isinstance(child, Image)
                    or (isinstance(child, Text) and not child.text.strip())
                    for child in children
                )
                return self.render_inline(children, mode), standalone
            case Heading(level=level, children=children):
                return inline.heading(level, self.render_inline(children, mode)), True
            case ListItem(indent=indent, ordered=ordered, children=children):
                body = self.render_inline(children, mode)
                return inline.list_item(indent, ordered=ordered, body=body), False
            case Rule():
                return inline.RULE_MARKUP, True
            case CodeBlock(language=language, code=code):
                return inline.code_block(language, code), True
            case Table():
                return self._render_table(node), True
            case Element():
                return render_component(self, node), True
            case _:
                return self.render_inline([node], mode), False

    def _render_table(self, table: Table) -> str:
        width = len(table.header)
        lines = ["#table(", f"  columns: {width},", f"  align: (left,) * {width},"]
        for cell in table.header:
            lines.append(f"  [#strong[{self.render_inline(cell, _PLAIN_MODE)}]],")
        for row in table.rows:
            cells = (row + [[] for _ in range(width)])[:width]
            for index, cell in enumerate(cells):
                text = self.render_inline(cell, _PLAIN_MODE)
                lines.append(f"  [#strong[{text}]]," if index == 0 else f"  [{text}],")
        lines.append(")")
        return "\n".join(lines)

    # Inline level

    def render_inline(self, nodes: list[Node], mode: _InlineMode = _DEFAULT_MODE) -> str:
        """Render inline nodes into one string of Typst markup."""
        parts: list[str] = []
        for node in nodes:
            text = self._render_inline_node(node, mode)
            if not text:
                continue
            parts.append(inline.detach(parts[-1], text) if parts else text)
        return "".join(parts)

    def _render_inline_node(self, node: Node, mode: _InlineMode) -> str:
        match node:
            case Text(text=text):
                return escape_markup(text)
            case InlineCode(code=code):
                return inline.inline_code(code)
            case Strong(children=children):
                body = self.render_inline(children, mode)
                return inline.strong(body) if mode.emphasis else body
            case Emph(children=children):
                body = self.render_inline(children, mode)
                return inline.emph(body) if mode.emphasis else body
            case StrongEmph(children=children):
                body = self.render_inline(children, mode)
                return inline.strong_emph(body) if mode.emphasis else body
            case Link():
                return self._render_link(node, mode)
            case Image():
                return self._render_image(node, mode)
            case Element():
                return render_component(self, node)
            case _:
                return ""

    def _render_link(self, node: Link, mode: _InlineMode) -> str:
        body = self.render_inline(tokenize_inline(node.text), _PLAIN_MODE)
        if not mode.links:
            return body
        kind = inline.classify_url(node.url)
        if kind is inline.LinkKind.INTERNAL:
            return inline.strong(body)
        return inline.link(node.url, body)

    def _render_image(self, node: Image, mode: _InlineMode) -> str:
        caption = escape_markup(node.alt)
        if not mode.figures:
            return caption
        if inline.is_remote(node.src):
            if not mode.links:
                return caption or escape_markup(node.src)
            return inline.link(node.src, caption or escape_markup(node.src))
        assets = self.context.assets
        path = assets.resolve(node.src) if assets else node.src
        return inline.figure(path, caption)

    # Helpers used by component renderers

    def resolve_label(self, href: str | None) -> str | None:
        """Return the document label ``href`` points at, if it was assembled."""
        if not href or inline.classify_url(href) is not inline.LinkKind.INTERNAL:
            return None
        label = document_label(urlsplit(href).path)
        return label if label in self.context.known_labels else None

    def plain_text(self, nodes: list[Node]) -> str:
        """Return the unescaped text content of inline nodes."""
        parts: list[str] = []
        for node in nodes:
            match node:
                case Text(text=text):
                    parts.append(text)
                case InlineCode(code=code):
                    parts.append(code)
                case Link(text=text):
                    parts.append(text)
                case Image(alt=alt):
                    parts.append(alt)
                case Strong(children=children) | Emph(children=children) | StrongEmph(
                    children=children
                ):
                    parts.append(self.plain_text(children))
                case Element(children=children):
                    parts.append(self.plain_text(children))
        return "".join(parts)


def convert_mdx(text: str, context: RenderContext | None = None) -> str:
    """Convert one MDX document body into Typst markup.

    Parameters
    ----------
    text : str
        MDX body text (front matter already removed).
    context : RenderContext, optional
        Shared build data; defaults to an empty context.

    Returns
    -------
    str
        Typst markup with no leading or trailing blank lines.
    """
    return TypstRenderer(context).convert(text)


__all__ = ["RenderContext", "TypstRenderer", "convert_mdx", "document_label"]
