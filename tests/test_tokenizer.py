"""Tests for the MDX tokenizer's node tree."""

from __future__ import annotations

from mdx_typst.converter.nodes import (
    Blank,
    CodeBlock,
    Element,
    Emph,
    Heading,
    InlineCode,
    Link,
    Paragraph,
    Strong,
    Table,
    Text,
)
from mdx_typst.converter.tokenizer import (
    find_closing_tag,
    is_component,
    parse_attributes,
    tokenize,
    tokenize_inline,
)


def test_parse_attributes_handles_quotes_expressions_and_flags() -> None:
    attrs = parse_attributes(' title="A b" icon=\'star\' cols={2} label={"x"} defaultOpen')
    assert attrs == {
        "title": "A b",
        "icon": "star",
        "cols": "2",
        "label": "x",
        "defaultOpen": "true",
    }


def test_is_component_distinguishes_placeholders() -> None:
    assert is_component("Note")
    assert is_component("kbd")
    assert not is_component("placeholder")


def test_find_closing_tag_balances_nested_elements() -> None:
    text = "<Tab>a<Tab>b</Tab>c</Tab>tail"
    closing = find_closing_tag(text, "Tab", len("<Tab>"))
    assert closing is not None, "expected the outer closing tag to be found"
    assert text[closing.end() :] == "tail"


def test_find_closing_tag_ignores_tags_in_fences() -> None:
    text = "<Note>\n```html\n</Note>\n```\n</Note>"
    closing = find_closing_tag(text, "Note", len("<Note>"))
    assert closing is not None, "expected a closing tag outside the fence"
    assert closing.start() == text.rindex("</Note>")


def test_find_closing_tag_returns_none_when_unterminated() -> None:
    assert find_closing_tag("<Note>open", "Note", len("<Note>")) is None


def test_code_inside_element_is_a_code_leaf() -> None:
    nodes = tokenize("<Note>\n```md\n**not bold** </Note>\n```\n</Note>")
    assert len(nodes) == 1
    element = nodes[0]
    assert isinstance(element, Element)
    assert element.children == [
        Blank(),
        CodeBlock(language="md", code="**not bold** </Note>"),
    ]


def test_block_sequence() -> None:
    nodes = tokenize("## Title\n\n\nSome `code` here\n| a |\n|---|\n| 1 |")
    assert [type(node) for node in nodes] == [Heading, Blank, Paragraph, Table]
    paragraph = nodes[2]
    assert isinstance(paragraph, Paragraph)
    assert paragraph.children == [Text("Some "), InlineCode("code"), Text(" here")]


def test_inline_code_wins_over_links_and_emphasis() -> None:
    assert tokenize_inline("`[x](y) **z**`") == [InlineCode("[x](y) **z**")]


def test_nested_emphasis_is_a_tree() -> None:
    assert tokenize_inline("**a *b* c**") == [
        Strong([Text("a "), Emph([Text("b")]), Text(" c")])
    ]


def test_link_keeps_raw_text_and_url() -> None:
    assert tokenize_inline("[**x**](https://a.io/b_c)") == [
        Link(text="**x**", url="https://a.io/b_c")
    ]


def test_backslash_escapes_produce_literal_text() -> None:
    assert tokenize_inline("\\*not emphasis\\*") == [Text("*not emphasis*")]


def test_inline_element_children() -> None:
    nodes = tokenize_inline("a <kbd>Ctrl</kbd> b")
    assert nodes == [
        Text("a "),
        Element(name="kbd", attrs={}, children=[Text("Ctrl")], block=False),
        Text(" b"),
    ]
