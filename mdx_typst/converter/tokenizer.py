r"""Scan MDX source into a tree of block and inline nodes.

The tokenizer makes one pass over the text. Fenced code, inline code, links,
and images become verbatim leaf nodes, so nothing downstream ever sees their
literal characters. JSX-style elements become :class:`Element` nodes whose
children are tokenized recursively.

Example
-------
>>> from mdx_typst.converter.tokenizer import tokenize
>>> nodes = tokenize("## Intro\nBody with `code`")
>>> [type(node).__name__ for node in nodes]
['Heading', 'Paragraph']
"""

from __future__ import annotations

import re
import textwrap

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

FENCE_OPEN_PATTERN = re.compile(r"^(?P<indent>[ \t]*)(?P<fence>`{3,}|~{3,})(?P<info>[^\n]*)$")
FENCED_BLOCK_PATTERN = re.compile(
    r"^[ \t]*(`{3,}|~{3,})[^\n]*\n.*?^[ \t]*\1[ \t]*$", re.MULTILINE | re.DOTALL
)
HEADING_PATTERN = re.compile(r"^(#{1,4})[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
RULE_PATTERN = re.compile(r"^[ \t]{0,3}(?:(?:-[ \t]*){3,}|(?:\*[ \t]*){3,}|(?:_[ \t]*){3,})$")
LIST_PATTERN = re.compile(
    r"^(?P<indent>[ \t]*)(?:(?P<bullet>[-*+])|\d+[.)])[ \t]+(?P<text>\S.*)$"
)
ESM_PATTERN = re.compile(
    r"^(?:import\s+(?:.+\s+from\s+)?['\"][^'\"]+['\"];?"
    r"|export\s+(?:const|let|var|function|default)\b.*)\s*$"
)
TABLE_ROW_PATTERN = re.compile(r"^[ \t]*\|.*\|[ \t]*$")
TABLE_SEPARATOR_PATTERN = re.compile(r"^[ \t]*\|(?:[ \t]*:?-+:?[ \t]*\|)+[ \t]*$")
CELL_SPLIT_PATTERN = re.compile(r"(?<!\\)\|")

_ATTR = (
    r"[A-Za-z_:][\w:.-]*"
    r"(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|\{(?:[^{}]|\{[^{}]*\})*\}))?"
)
OPEN_TAG_PATTERN = re.compile(
    rf"<(?P<name>[A-Za-z][\w.]*)(?P<attrs>(?:\s+{_ATTR})*)\s*(?P<closed>/?)>"
)
CLOSE_TAG_PATTERN = re.compile(r"</(?P<name>[A-Za-z][\w.]*)\s*>")
ATTR_PATTERN = re.compile(
    r"(?P<key>[A-Za-z_:][\w:.-]*)"
    r"(?:\s*=\s*(?:\"(?P<dq>[^\"]*)\"|'(?P<sq>[^']*)'"
    r"|\{(?P<expr>(?:[^{}]|\{[^{}]*\})*)\}))?"
)
JSX_COMMENT_PATTERN = re.compile(r"\{/\*.*?\*/\}", re.DOTALL)
HTML_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)

INLINE_CODE_PATTERN = re.compile(r"(?P<ticks>`+)(?P<code>.+?)(?<!`)(?P=ticks)(?!`)")
IMAGE_PATTERN = re.compile(r"!\[(?P<alt>[^\]]*)\]\((?P<src>[^)\s]+)(?:\s+\"[^\"]*\")?\)")
LINK_PATTERN = re.compile(
    r"\[(?P<text>(?:!\[[^\]]*\]\([^)]*\)|[^\]])+)\]"
    r"\((?P<url>[^)\s]+)(?:\s+\"[^\"]*\")?\)"
)
STRONG_EMPH_PATTERN = re.compile(r"(\*\*\*|___)(?=\S)(?P<inner>.+?)(?<=\S)\1")
STRONG_PATTERN = re.compile(r"(\*\*|__)(?=\S)(?P<inner>.+?)(?<=\S)\1")
EMPH_PATTERN = re.compile(r"\*(?=[^\s*])(?P<inner>[^*\n]+?)(?<=\S)\*")
UNDERSCORE_EMPH_PATTERN = re.compile(r"_(?=[^\s_])(?P<inner>[^_\n]+?)(?<=\S)_(?!\w)")

# Tags known to the HTML vocabulary are treated as markup; any other
# lowercase ``<word>`` is literal text such as a ``<placeholder>``.
HTML_TAGS = frozenset(
    {
        "a", "abbr", "b", "br", "center", "code", "details", "div", "em",
        "figcaption", "figure", "hr", "i", "iframe", "img", "kbd", "p",
        "picture", "small", "source", "span", "strong", "sub", "summary",
        "sup", "u", "video",
    }
)  # fmt: skip
# Elements rendered inline even when they open a line.
INLINE_TAGS = frozenset({"a", "b", "code", "em", "i", "kbd", "small", "span",
                         "strong", "sub", "sup", "Tooltip", "u"})  # fmt: skip
ESCAPABLE = frozenset("\\`*_{}[]()<>#+-.!|@$~")


def is_component(name: str) -> bool:
    """Return whether ``name`` is a JSX component or a known HTML tag."""
    return name[:1].isupper() or name.lower() in HTML_TAGS


def parse_attributes(raw: str) -> dict[str, str]:
    """Parse a JSX attribute string into a mapping of plain strings.

    ``{...}`` expressions are unwrapped (and quoted string expressions
    unquoted); attributes without a value map to ``"true"``.
    """
    attrs: dict[str, str] = {}
    for match in ATTR_PATTERN.finditer(raw):
        key = match.group("key")
        if match.group("dq") is not None:
            value = match.group("dq")
        elif match.group("sq") is not None:
            value = match.group("sq")
        elif match.group("expr") is not None:
            value = match.group("expr").strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'`":
                value = value[1:-1]
        else:
            value = "true"
        attrs[key] = value
    return attrs


def _fence_spans(text: str, start: int) -> list[tuple[int, int]]:
    return [
        (match.start(), match.end())
        for match in FENCED_BLOCK_PATTERN.finditer(text, start)
    ]


def find_closing_tag(text: str, name: str, start: int) -> re.Match[str] | None:
    """Return the closing tag balancing an element opened before ``start``.

    Nested elements with the same name are counted, and tags inside fenced
    code blocks are ignored. ``None`` means the element is never closed.
    """
    scan = re.compile(rf"<(/?){re.escape(name)}(?![\w.])")
    fences = _fence_spans(text, start) if "`" in text or "~" in text else []
    depth = 1
    for candidate in scan.finditer(text, start):
        pos = candidate.start()
        if any(begin <= pos < end for begin, end in fences):
            continue
        if candidate.group(1):
            closing = CLOSE_TAG_PATTERN.match(text, pos)
            if closing is None:
                continue
            depth -= 1
            if depth == 0:
                return closing
            continue
        opening = OPEN_TAG_PATTERN.match(text, pos)
        if opening is not None and not opening.group("closed"):
            depth += 1
    return None


def _dedent(text: str) -> str:
    """Dedent element content, ignoring text that shares the opening line."""
    head, sep, rest = text.partition("\n")
    if not sep:
        return text.strip()
    return f"{head.strip()}\n{textwrap.dedent(rest)}"


def _line_end(text: str, pos: int) -> int:
    end = text.find("\n", pos)
    return len(text) if end == -1 else end


def _next_line(text: str, pos: int) -> int:
    return min(_line_end(text, pos) + 1, len(text))


def tokenize(text: str) -> list[Node]:
    """Tokenize MDX body text into block nodes.

    Parameters
    ----------
    text : str
        Document body without front matter.

    Returns
    -------
    list[Node]
        Block-level nodes in document order.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return _BlockScanner(text).scan()


class _BlockScanner:
    """Line-oriented scanner producing block nodes for one text fragment."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.nodes: list[Node] = []

    def scan(self) -> list[Node]:
        while self.pos < len(self.text):
            end = _line_end(self.text, self.pos)
            line = self.text[self.pos : end]
            stripped = line.strip()
            if not stripped:
                self._blank()
            elif fence := FENCE_OPEN_PATTERN.match(line):
                self._code_block(fence)
            elif stripped.startswith("{/*") and self._jsx_comment():
                continue
            elif stripped.startswith("<!--") and self._html_comment():
                continue
            elif stripped.startswith("<") and self._element():
                continue
            elif self._table():
                continue
            elif ESM_PATTERN.match(line):
                self.pos = _next_line(self.text, self.pos)
            elif match := HEADING_PATTERN.match(line):
                self.nodes.append(
                    Heading(level=len(match.group(1)), children=tokenize_inline(match.group(2)))
                )
                self.pos = _next_line(self.text, self.pos)
            elif RULE_PATTERN.match(line):
                self.nodes.append(Rule())
                self.pos = _next_line(self.text, self.pos)
            elif match := LIST_PATTERN.match(line):
                self.nodes.append(
                    ListItem(
                        indent=len(match.group("indent").expandtabs(2)),
                        ordered=match.group("bullet") is None,
                        children=tokenize_inline(match.group("text").rstrip()),
                    )
                )
                self.pos = _next_line(self.text, self.pos)
            else:
                self.nodes.append(Paragraph(children=tokenize_inline(line.rstrip())))
                self.pos = _next_line(self.text, self.pos)
        return self.nodes

    def _blank(self) -> None:
        """Consume a run of blank lines as one node."""
        while self.pos < len(self.text):
            end = _line_end(self.text, self.pos)
            if self.text[self.pos : end].strip():
                break
            self.pos = _next_line(self.text, self.pos)
            if end == len(self.text):
                break
        if not (self.nodes and isinstance(self.nodes[-1], Blank)):
            self.nodes.append(Blank())

    def _code_block(self, opening: re.Match[str]) -> None:
        indent = len(opening.group("indent"))
        fence = opening.group("fence")
        info = opening.group("info").strip()
        language = re.split(r"[\s,{]", info, maxsplit=1)[0] if info else ""
        closing = re.compile(rf"^[ \t]*{re.escape(fence[0])}{{{len(fence)},}}[ \t]*$")

        body: list[str] = []
        self.pos = _next_line(self.text, self.pos)
        while self.pos < len(self.text):
            end = _line_end(self.text, self.pos)
            current = self.text[self.pos : end]
            self.pos = _next_line(self.text, self.pos)
            if closing.match(current):
                break
            body.append(_strip_indent(current, indent))
        code = "\n".join(body).strip("\n")
        self.nodes.append(CodeBlock(language=language, code=code))

    def _jsx_comment(self) -> bool:
        start = self.text.index("{/*", self.pos)
        match = JSX_COMMENT_PATTERN.match(self.text, start)
        return self._skip_comment(match)

    def _html_comment(self) -> bool:
        start = self.text.index("<!--", self.pos)
        match = HTML_COMMENT_PATTERN.match(self.text, start)
        return self._skip_comment(match)

    def _skip_comment(self, match: re.Match[str] | None) -> bool:
        if match is None:
            return False
        rest_end = _line_end(self.text, match.end())
        if self.text[match.end() : rest_end].strip():
            self.pos = match.end()
        else:
            self.pos = _next_line(self.text, match.end())
        return True

    def _element(self) -> bool:
        """Consume a block-level element starting on the current line."""
        start = self.text.index("<", self.pos)
        opening = OPEN_TAG_PATTERN.match(self.text, start)
        stray = CLOSE_TAG_PATTERN.match(self.text, start)
        if stray is not None and is_component(stray.group("name")):
            self._resume_after(stray.end())
            return True
        if opening is None:
            return False
        name = opening.group("name")
        if name in INLINE_TAGS or not is_component(name):
            return False
        attrs = parse_attributes(opening.group("attrs"))
        if opening.group("closed"):
            self.nodes.append(Element(name=name, attrs=attrs, children=[]))
            self._resume_after(opening.end())
            return True

        closing = find_closing_tag(self.text, name, opening.end())
        if closing is None:
            # Unterminated: drop the marker and keep the content.
            self._resume_after(opening.end())
            return True
        inner = self.text[opening.end() : closing.start()]
        trailing = self.text[closing.end() : _line_end(self.text, closing.end())]
        if "\n" not in inner and trailing.strip():
            return False
        children = _BlockScanner(_dedent(inner)).scan()
        self.nodes.append(Element(name=name, attrs=attrs, children=children))
        self._resume_after(closing.end())
        return True

    def _resume_after(self, pos: int) -> None:
        """Continue scanning at ``pos`` or at the next line if only blanks remain."""
        end = _line_end(self.text, pos)
        if self.text[pos:end].strip():
            self.pos = pos
        else:
            self.pos = _next_line(self.text, pos)

    def _table(self) -> bool:
        """Consume a pipe table starting on the current line."""
        lines: list[str] = []
        pos = self.pos
        while pos < len(self.text):
            end = _line_end(self.text, pos)
            lines.append(self.text[pos:end])
            pos = _next_line(self.text, pos)
            if len(lines) == 2:
                break
        if (
            len(lines) < 2
            or not TABLE_ROW_PATTERN.match(lines[0])
            or not TABLE_SEPARATOR_PATTERN.match(lines[1])
        ):
            return False

        header = [tokenize_inline(cell) for cell in _split_row(lines[0])]
        rows: list[list[list[Node]]] = []
        while pos < len(self.text):
            end = _line_end(self.text, pos)
            line = self.text[pos:end]
            if not TABLE_ROW_PATTERN.match(line):
                break
            rows.append([tokenize_inline(cell) for cell in _split_row(line)])
            pos = _next_line(self.text, pos)
        self.nodes.append(Table(header=header, rows=rows))
        self.pos = pos
        return True


def _strip_indent(line: str, width: int) -> str:
    """Remove up to ``width`` leading spaces from ``line``."""
    removable = len(line) - len(line.lstrip(" "))
    return line[min(width, removable) :]


def _split_row(line: str) -> list[str]:
    cells = CELL_SPLIT_PATTERN.split(line.strip())[1:-1]
    return [cell.strip().replace("\\|", "|") for cell in cells]


def tokenize_inline(text: str) -> list[Node]:
    """Tokenize one line (or a short fragment) into inline nodes.

    Recognition order at each position is inline code, image, link, tag,
    emphasis; everything else accumulates as :class:`Text`.
    """
    return _InlineScanner(text).scan()


class _InlineScanner:
    """Character scanner producing inline nodes for one fragment."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0
        self.nodes: list[Node] = []
        self.buffer: list[str] = []

    def scan(self) -> list[Node]:
        handlers = {
            "`": self._code,
            "!": self._image,
            "[": self._link,
            "<": self._tag,
            "{": self._comment,
            "*": self._emphasis,
            "_": self._underscore,
            "\\": self._escape,
        }
        while self.pos < len(self.text):
            char = self.text[self.pos]
            handler = handlers.get(char)
            if handler is None or not handler():
                self.buffer.append(char)
                self.pos += 1
        self._flush()
        return self.nodes

    def _flush(self) -> None:
        if self.buffer:
            self.nodes.append(Text("".join(self.buffer)))
            self.buffer = []

    def _emit(self, node: Node | None, end: int) -> bool:
        self._flush()
        if node is not None:
            self.nodes.append(node)
        self.pos = end
        return True

    def _code(self) -> bool:
        match = INLINE_CODE_PATTERN.match(self.text, self.pos)
        if match is None:
            return False
        code = match.group("code")
        if len(code) > 2 and code.startswith(" ") and code.endswith(" "):
            code = code[1:-1]
        return self._emit(InlineCode(code), match.end())

    def _image(self) -> bool:
        match = IMAGE_PATTERN.match(self.text, self.pos)
        if match is None:
            return False
        return self._emit(Image(alt=match.group("alt"), src=match.group("src")), match.end())

    def _link(self) -> bool:
        match = LINK_PATTERN.match(self.text, self.pos)
        if match is None:
            return False
        return self._emit(Link(text=match.group("text"), url=match.group("url")), match.end())

    def _tag(self) -> bool:
        comment = HTML_COMMENT_PATTERN.match(self.text, self.pos)
        if comment is not None:
            return self._emit(None, comment.end())
        closing = CLOSE_TAG_PATTERN.match(self.text, self.pos)
        if closing is not None:
            if not is_component(closing.group("name")):
                return False
            return self._emit(None, closing.end())
        opening = OPEN_TAG_PATTERN.match(self.text, self.pos)
        if opening is None or not is_component(opening.group("name")):
            return False
        name = opening.group("name")
        attrs = parse_attributes(opening.group("attrs"))
        if opening.group("closed"):
            return self._emit(
                Element(name=name, attrs=attrs, children=[], block=False), opening.end()
            )
        end = find_closing_tag(self.text, name, opening.end())
        if end is None:
            return self._emit(None, opening.end())
        inner = self.text[opening.end() : end.start()]
        element = Element(
            name=name, attrs=attrs, children=tokenize_inline(inner), block=False
        )
        return self._emit(element, end.end())

    def _comment(self) -> bool:
        match = JSX_COMMENT_PATTERN.match(self.text, self.pos)
        if match is None:
            return False
        return self._emit(None, match.end())

    def _emphasis(self) -> bool:
        for pattern, node_type in (
            (STRONG_EMPH_PATTERN, StrongEmph),
            (STRONG_PATTERN, Strong),
            (EMPH_PATTERN, Emph),
        ):
            match = pattern.match(self.text, self.pos)
            if match is not None:
                children = tokenize_inline(match.group("inner"))
                return self._emit(node_type(children), match.end())
        return False

    def _underscore(self) -> bool:
        # Intraword underscores (snake_case) are literal text.
        if self.pos > 0 and self.text[self.pos - 1].isalnum():
            return False
        for pattern, node_type in (
            (STRONG_EMPH_PATTERN, StrongEmph),
            (STRONG_PATTERN, Strong),
            (UNDERSCORE_EMPH_PATTERN, Emph),
        ):
            match = pattern.match(self.text, self.pos)
            if match is not None and match.group(0).startswith("_"):
                children = tokenize_inline(match.group("inner"))
                return self._emit(node_type(children), match.end())
        return False

    def _escape(self) -> bool:
        following = self.text[self.pos + 1 : self.pos + 2]
        if not following or following not in ESCAPABLE:
            return False
        self.buffer.append(following)
        self.pos += 2
        return True


__all__ = [
    "find_closing_tag",
    "is_component",
    "parse_attributes",
    "tokenize",
    "tokenize_inline",
]
