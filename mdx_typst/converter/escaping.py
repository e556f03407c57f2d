r"""Escape prose and string values for Typst markup.

Only text leaves reach :func:`escape_markup`; code, links, and images carry
their own rendering rules and never pass through it.

Examples
--------
>>> from mdx_typst.converter.escaping import escape_markup, typst_string
>>> escape_markup("Mail me@example.com for #1 at $5")
'Mail me\\@example.com for \\#1 at \\$5'
>>> escape_markup("see [1] // later")
'see \\[1\\] \\/\\/ later'
>>> typst_string('Say "hi"')
'"Say \\"hi\\""'
"""

from __future__ import annotations

import re

# ``#`` introduces Typst code, ``@`` a reference, and ``$`` math mode. The
# remaining entries are markup delimiters whose Markdown meaning has already
# been consumed by the tokenizer, so any left in prose are literal. Comment
# openers come first so they win over the single characters.
MARKUP_ESCAPES: dict[str, str] = {
    "//": "\\/\\/",
    "/*": "\\/\\*",
    "\\": "\\\\",
    "#": "\\#",
    "@": "\\@",
    "$": "\\$",
    "*": "\\*",
    "_": "\\_",
    "`": "\\`",
    "<": "\\<",
    "~": "\\~",
    "[": "\\[",
    "]": "\\]",
}
_MARKUP_PATTERN = re.compile("|".join(re.escape(token) for token in MARKUP_ESCAPES))


def escape_markup(text: str) -> str:
    """Return ``text`` with every Typst-significant character escaped."""
    return _MARKUP_PATTERN.sub(lambda match: MARKUP_ESCAPES[match.group(0)], text)


def typst_string(value: str) -> str:
    """Quote ``value`` as a Typst string literal."""
    flattened = " ".join(value.split("\n"))
    escaped = flattened.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


__all__ = ["MARKUP_ESCAPES", "escape_markup", "typst_string"]
