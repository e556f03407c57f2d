"""Tests for converting single MDX documents into Typst markup.

These tests drive :func:`mdx_typst.converter.convert_mdx` with small MDX
fragments and compare the exact Typst output. They cover headings, emphasis,
lists, tables, the three link classes, images, escaping of Typst
metacharacters in prose, and verbatim passage of code.
"""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from mdx_typst.converter import RenderContext, convert_mdx
from mdx_typst.paths import AssetResolver


@pytest.fixture
def docs_context() -> RenderContext:
    """Return a context whose docs tree sits beside the tool checkout."""
    assets = AssetResolver(PurePosixPath("/work/tool"), PurePosixPath("/work/docs"))
    return RenderContext(assets=assets, known_labels=frozenset({"welcome-start"}))


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("# One", "= One"),
        ("## Two", "== Two"),
        ("### Three", "=== Three"),
        ("#### Four", "==== Four"),
        ("##### Five", "\\#\\#\\#\\#\\# Five"),
    ],
)
def test_heading_depths(source: str, expected: str) -> None:
    assert convert_mdx(source) == expected


def test_headings_are_separated_by_blank_lines() -> None:
    assert convert_mdx("# A\n## B\nText") == "= A\n\n== B\n\nText"


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("**bold**", "#strong[bold]"),
        ("*italic*", "#emph[italic]"),
        ("***both***", "#strong[#emph[both]]"),
        ("**a *b* c**", "#strong[a #emph[b] c]"),
        ("**a*b*c**", "#strong[a#emph[b]c]"),
        ("__bold__ and _it_", "#strong[bold] and #emph[it]"),
        ("Use **API**s here", "Use #strong[API]s here"),
        ("*italic*word", "#emph[italic]word"),
        ("**See [Home](/start) now**", "#strong[See #strong[Home] now]"),
        ("2 * 3", "2 \\* 3"),
        ("snake_case_name", "snake\\_case\\_name"),
    ],
)
def test_emphasis(source: str, expected: str) -> None:
    assert convert_mdx(source) == expected


def test_text_after_function_markup_is_not_code() -> None:
    source = "Edit **config**.yaml, call *f*(x), or [read](/a).Then stop at **this**."
    assert convert_mdx(source) == (
        "Edit #strong[config]\\.yaml, call #emph[f]\\(x), or #strong[read]\\.Then "
        "stop at #strong[this]."
    )


def test_lists_nest_by_indent() -> None:
    source = "- first\n  - nested\n* star\n1. numbered\n2) also"
    assert convert_mdx(source) == "- first\n  - nested\n- star\n+ numbered\n+ also"


def test_horizontal_rule() -> None:
    assert convert_mdx("Above\n\n---\n\nBelow") == (
        'Above\n\n#line(length: 100%, stroke: 0.5pt + rgb("#e5e7eb"))\n\nBelow'
    )


def test_table_bolds_header_and_first_column() -> None:
    source = "| Name | Value |\n|---|:---:|\n| a | 1 |\n| b | 2 |\n| c | 3 |"
    assert convert_mdx(source) == "\n".join(
        [
            "#table(",
            "  columns: 2,",
            "  align: (left,) * 2,",
            "  [#strong[Name]],",
            "  [#strong[Value]],",
            "  [#strong[a]],",
            "  [1],",
            "  [#strong[b]],",
            "  [2],",
            "  [#strong[c]],",
            "  [3],",
            ")",
        ]
    )


def test_table_cells_drop_markup_and_pad_rows() -> None:
    source = (
        "| Key | Notes |\n"
        "| --- | --- |\n"
        "| **x** | see [docs](https://d.io) for $5 |\n"
        "| y |\n"
        "| `a\\|b` | z | extra |"
    )
    lines = convert_mdx(source).splitlines()
    assert lines[5:] == [
        "  [#strong[x]],",
        "  [see docs for \\$5],",
        "  [#strong[y]],",
        "  [],",
        "  [#strong[`a|b`]],",
        "  [z],",
        ")",
    ]


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("[Home](/start)", "#strong[Home]"),
        ("[Section](#install)", "#strong[Section]"),
        ("[Sibling](./other.mdx)", "#strong[Sibling]"),
        ("[Mail](mailto:a@b.com)", '#link("mailto:a@b.com")[Mail]'),
        ("[a@b.com](mailto:a@b.com)", '#link("mailto:a@b.com")[a\\@b.com]'),
        ("[Site](https://example.com)", '#link("https://example.com")[Site]'),
        ("[**Bold** site](https://example.com)", '#link("https://example.com")[Bold site]'),
    ],
)
def test_link_classes(source: str, expected: str) -> None:
    assert convert_mdx(source) == expected


def test_link_url_is_not_escaped() -> None:
    result = convert_mdx("See [the_docs](https://x.io/a_b#c$d).")
    assert result == 'See #link("https://x.io/a_b#c$d")[the\\_docs].'


def test_image_is_resolved_below_compiler_root(docs_context: RenderContext) -> None:
    result = convert_mdx("Intro\n![Diagram](/images/d.png)", docs_context)
    assert result == "\n".join(
        [
            "Intro",
            "",
            "#figure(",
            '  image("/docs/images/d.png", width: 100%),',
            "  caption: [Diagram],",
            ")",
        ]
    )


def test_image_without_alt_omits_caption(docs_context: RenderContext) -> None:
    result = convert_mdx("![](images/x.png)", docs_context)
    assert result == '#figure(\n  image("/docs/images/x.png", width: 100%),\n)'


def test_remote_image_becomes_link() -> None:
    assert convert_mdx("![Logo](https://cdn.io/l.png)") == '#link("https://cdn.io/l.png")[Logo]'


def test_prose_metacharacters_are_escaped() -> None:
    result = convert_mdx("Costs $5, issue #12, ping @team")
    assert result == 'Costs \\$5, issue \\#12, ping \\@team'


def test_at_sign_before_parenthesis_stays_text() -> None:
    assert convert_mdx("Email @(handle) here") == "Email \\@(handle) here"


def test_literal_brackets_and_comment_openers_are_escaped() -> None:
    assert convert_mdx("Use [x] or a//b") == "Use \\[x\\] or a\\/\\/b"


def test_fenced_code_passes_through_verbatim() -> None:
    source = "Before\n```js\nconst tag = '#@$ <Note> **x**';\n```\nAfter"
    assert convert_mdx(source) == (
        "Before\n\n```javascript\nconst tag = '#@$ <Note> **x**';\n```\n\nAfter"
    )


def test_fence_language_extra_labels_are_dropped() -> None:
    assert convert_mdx("```rust,no_run\nfn main() {}\n```") == "```rust\nfn main() {}\n```"


def test_unknown_fence_language_is_kept() -> None:
    result = convert_mdx("```no-such-language\nx\n```")
    assert result == "```no-such-language\nx\n```"


def test_code_containing_fences_gets_longer_fence() -> None:
    source = "````markdown\n```py\nx\n```\n````"
    assert convert_mdx(source) == "````markdown\n```py\nx\n```\n````"


def test_unterminated_fence_runs_to_end() -> None:
    assert convert_mdx("```\nleft open\n# not a heading") == "```\nleft open\n# not a heading\n```"


def test_inline_code_is_not_escaped() -> None:
    assert convert_mdx("Run `make #all $X` now") == "Run `make #all $X` now"


def test_inline_code_with_backtick_uses_raw() -> None:
    assert convert_mdx("Use `` a`b `` here") == 'Use #raw("a`b") here'


def test_blank_runs_collapse_and_ends_are_trimmed() -> None:
    assert convert_mdx("\n\nFirst\n\n\n\nSecond\n\n\n") == "First\n\nSecond"


def test_mdx_only_syntax_is_removed() -> None:
    source = (
        "import Diagram from '/snippets/diagram.mdx'\n"
        "export const meta = { x: 1 }\n"
        "\n"
        "{/* editor note */}\n"
        "Visible {/* hidden */} text\n"
        "<!-- html note -->"
    )
    assert convert_mdx(source) == "Visible  text"


def test_placeholder_tags_stay_literal() -> None:
    assert convert_mdx("Replace <your-key> here") == "Replace \\<your-key> here"
