"""Typst constructs for Markdown headings, lists, links, images, and code.

These helpers build target markup from already-escaped content. Anything
without a URL scheme is treated as pointing inside the documentation set.
"""

from __future__ import annotations

import enum
import functools
import re
from urllib.parse import urlsplit

from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .escaping import typst_string

HEADING_MARKERS = {1: "=", 2: "==", 3: "===", 4: "===="}
LIST_INDENT = 2
RULE_MARKUP = '#line(length: 100%, stroke: 0.5pt + rgb("#e5e7eb"))'
REMOTE_SCHEMES = ("http", "https")
# Text that would extend a preceding embedded expression into a field access
# or a call.
_EXPRESSION_CONTINUATION = re.compile(r"\.[A-Za-z_]|\(")


class LinkKind(enum.Enum):
    """How a Markdown link destination is rendered."""

    INTERNAL = "internal"
    MAIL = "mail"
    EXTERNAL = "external"


def classify_url(url: str) -> LinkKind:
    """Return the rendering class for a link destination.

    Anchors (``#x``), site-absolute paths (``/x``), and relative paths
    (``./x``, ``x.md``) have no scheme and are internal; ``mailto:`` links
    are mail links; everything else is external.
    """
    scheme = urlsplit(url).scheme.lower()
    if url.startswith(("/", "#")) or not scheme:
        return LinkKind.INTERNAL
    if scheme == "mailto":
        return LinkKind.MAIL
    return LinkKind.EXTERNAL


def heading(level: int, body: str) -> str:
    """Return a Typst heading of depth ``level``."""
    return f"{HEADING_MARKERS[level]} {body}"


def list_item(indent: int, *, ordered: bool, body: str) -> str:
    """Return a list entry nested ``indent // LIST_INDENT`` levels deep."""
    level = indent // LIST_INDENT
    marker = "+" if ordered else "-"
    return f"{' ' * (LIST_INDENT * level)}{marker} {body}"


def strong(body: str) -> str:
    """Return bold content.

    The function form is used instead of ``*`` markers, which Typst only
    honours at word boundaries.
    """
    return f"#strong[{body}]"


def emph(body: str) -> str:
    return f"#emph[{body}]"


def strong_emph(body: str) -> str:
    return strong(emph(body))


def detach(previous: str, text: str) -> str:
    """Return ``text`` escaped so it cannot continue ``previous`` as code.

    >>> detach("#strong[config]", ".yaml")
    '\\\\.yaml'
    >>> detach("#strong[end]", ". Next")
    '. Next'
    """
    if previous.startswith("#") and _EXPRESSION_CONTINUATION.match(text):
        return f"\\{text}"
    return text


def link(url: str, body: str) -> str:
    """Return a live Typst link."""
    return f"#link({typst_string(url)})[{body}]"


def is_remote(src: str) -> bool:
    return urlsplit(src).scheme.lower() in REMOTE_SCHEMES


def figure(path: str, caption: str) -> str:
    """Return a full-width figure; an empty caption is omitted."""
    lines = ["#figure(", f"  image({typst_string(path)}, width: 100%),"]
    if caption:
        lines.append(f"  caption: [{caption}],")
    lines.append(")")
    return "\n".join(lines)


def inline_code(code: str) -> str:
    """Return inline raw text, falling back to ``#raw`` for backticks."""
    if "`" in code:
        return f"#raw({typst_string(code)})"
    return f"`{code}`"


def code_block(language: str, code: str) -> str:
    """Return a fenced raw block long enough to contain ``code``."""
    longest = 0
    run = 0
    for char in code:
        run = run + 1 if char == "`" else 0
        longest = max(longest, run)
    fence = "`" * max(3, longest + 1)
    label = canonical_language(language)
    return f"{fence}{label}\n{code}\n{fence}"


@functools.lru_cache(maxsize=128)
def canonical_language(label: str) -> str:
    """Return Pygments' primary alias for ``label`` or ``label`` unchanged.

    Parameters
    ----------
    label : str
        Language label from a code fence, e.g. ``"js"`` or ``"sh"``.

    Returns
    -------
    str
        Canonical lexer alias (``"javascript"``, ``"bash"``) when Pygments
        knows the label; otherwise the original label, which Typst renders
        as plain raw text.
    """
    if not label:
        return ""
    try:
        lexer = get_lexer_by_name(label.lower())
    except ClassNotFound:
        return label
    return lexer.aliases[0] if lexer.aliases else label


__all__ = [
    "HEADING_MARKERS",
    "LIST_INDENT",
    "RULE_MARKUP",
    "LinkKind",
    "canonical_language",
    "classify_url",
    "code_block",
    "detach",
    "emph",
    "figure",
    "heading",
    "inline_code",
    "is_remote",
    "link",
    "list_item",
    "strong",
    "strong_emph",
]
