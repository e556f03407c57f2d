"""Node types produced by the MDX tokenizer and consumed by the renderer.

Block nodes describe whole source lines or multi-line constructs; inline nodes
describe spans within a line. Code nodes keep their source text unchanged,
and link and image destinations never reach the prose escaper.
"""

from __future__ import annotations

import dataclasses as dc


@dc.dataclass(slots=True)
class Node:
    """Base class for every tokenized node."""


# Inline nodes


@dc.dataclass(slots=True)
class Text(Node):
    """Plain prose that is escaped before it is emitted."""

    text: str


@dc.dataclass(slots=True)
class InlineCode(Node):
    """Backtick code span."""

    code: str


@dc.dataclass(slots=True)
class Link(Node):
    """``[text](url)`` reference.

    Attributes
    ----------
    text : str
        Raw display text as written between the brackets.
    url : str
        Destination exactly as written between the parentheses.
    """

    text: str
    url: str


@dc.dataclass(slots=True)
class Image(Node):
    """``![alt](src)`` reference."""

    alt: str
    src: str


@dc.dataclass(slots=True)
class Strong(Node):
    """Double-delimiter emphasis."""

    children: list[Node]


@dc.dataclass(slots=True)
class Emph(Node):
    """Single-delimiter emphasis."""

    children: list[Node]


@dc.dataclass(slots=True)
class StrongEmph(Node):
    """Triple-delimiter emphasis (bold and italic)."""

    children: list[Node]


# Block nodes


@dc.dataclass(slots=True)
class Paragraph(Node):
    """A single line of prose made of inline nodes."""

    children: list[Node]


@dc.dataclass(slots=True)
class Heading(Node):
    """ATX heading with a depth between 1 and 4."""

    level: int
    children: list[Node]


@dc.dataclass(slots=True)
class ListItem(Node):
    """Bullet or numbered list entry.

    Attributes
    ----------
    indent : int
        Number of leading whitespace characters before the marker.
    ordered : bool
        ``True`` for ``1.`` style markers.
    children : list[Node]
        Inline content after the marker.
    """

    indent: int
    ordered: bool
    children: list[Node]


@dc.dataclass(slots=True)
class Rule(Node):
    """Horizontal rule line."""


@dc.dataclass(slots=True)
class Blank(Node):
    """A run of one or more blank lines."""


@dc.dataclass(slots=True)
class CodeBlock(Node):
    """Fenced code block."""

    language: str
    code: str


@dc.dataclass(slots=True)
class Table(Node):
    """Pipe table with a header row and zero or more body rows."""

    header: list[list[Node]]
    rows: list[list[list[Node]]]


@dc.dataclass(slots=True)
class Element(Node):
    """JSX-style tagged element such as ``<Note>`` or ``<kbd>``.

    Attributes
    ----------
    name : str
        Tag name exactly as written.
    attrs : dict[str, str]
        Attribute values; ``{...}`` expressions are unwrapped and bare
        attributes map to ``"true"``.
    children : list[Node]
        Block children for block elements, inline children otherwise.
    block : bool
        Whether the element was opened at the start of a line.
    """

    name: str
    attrs: dict[str, str]
    children: list[Node]
    block: bool = True

    def find(self, name: str) -> list[Element]:
        """Return direct child elements whose tag matches ``name``."""
        return [
            child
            for child in self.children
            if isinstance(child, Element) and child.name == name
        ]


__all__ = [
    "Blank",
    "CodeBlock",
    "Element",
    "Emph",
    "Heading",
    "Image",
    "InlineCode",
    "Link",
    "ListItem",
    "Node",
    "Paragraph",
    "Rule",
    "Strong",
    "StrongEmph",
    "Table",
    "Text",
]
