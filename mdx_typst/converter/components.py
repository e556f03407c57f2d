"""Map Mintlify components onto Typst template functions.

Each renderer receives the active :class:`~mdx_typst.converter.renderer.TypstRenderer`
and the :class:`~mdx_typst.converter.nodes.Element` to convert, and returns
Typst markup. :data:`COMPONENT_RENDERERS` is the fixed lookup table; tags
without an entry fall back to :func:`unwrap`, which keeps the content and
drops the tag markers.
"""

from __future__ import annotations

import functools
import typing as typ

from .escaping import escape_markup, typst_string
from .inline import inline_code, strong

if typ.TYPE_CHECKING:
    from .nodes import Element
    from .renderer import TypstRenderer

    ComponentRenderer = typ.Callable[[TypstRenderer, Element], str]

CALLOUT_STYLES: dict[str, str] = {
    "note": "note",
    "info": "note",
    "tip": "tip",
    "check": "tip",
    "success": "tip",
    "warning": "caution",
    "caution": "caution",
    "danger": "danger",
    "error": "danger",
}
DEFAULT_CALLOUT_STYLE = "tip"
DEFAULT_CARD_ICON = "circle"
DEFAULT_GRID_COLUMNS = 2


def unwrap(renderer: TypstRenderer, element: Element) -> str:
    """Render the element's children in place of the element."""
    return renderer.render_children(element)


def remove(renderer: TypstRenderer, element: Element) -> str:  # noqa: ARG001
    """Drop the element and everything inside it."""
    return ""


def _callout_block(style: str, title: str, body: str) -> str:
    return f"#{style}(title: {typst_string(title)})[\n{body}\n]"


def callout(renderer: TypstRenderer, element: Element) -> str:
    """Render ``<Callout type="...">`` using the style for its type.

    Unknown or missing types use the lowest severity style; the title is the
    capitalised type name.
    """
    kind = element.attrs.get("type", "").strip()
    style = CALLOUT_STYLES.get(kind.lower(), DEFAULT_CALLOUT_STYLE)
    title = element.attrs.get("title") or kind.capitalize() or style.capitalize()
    return _callout_block(style, title, renderer.render_children(element))


def callout_alias(renderer: TypstRenderer, element: Element, *, style: str) -> str:
    """Render shorthand callouts such as ``<Note>`` or ``<Warning>``."""
    title = element.attrs.get("title") or element.name.capitalize()
    return _callout_block(style, title, renderer.render_children(element))


def _grid_columns(raw: str | None) -> int:
    try:
        value = int(raw or DEFAULT_GRID_COLUMNS)
    except ValueError:
        return DEFAULT_GRID_COLUMNS
    return max(value, 1)


def columns(renderer: TypstRenderer, element: Element) -> str:
    """Render ``<Columns>`` of ``<Card>`` children as a card grid.

    Cards whose ``href`` does not resolve to a document in the assembled
    output are emitted without a link. Columns without cards are unwrapped.
    """
    cards = element.find("Card")
    if not cards:
        return unwrap(renderer, element)
    entries: list[str] = []
    for card in cards:
        icon = card.attrs.get("icon") or DEFAULT_CARD_ICON
        title = card.attrs.get("title", "")
        body = renderer.render_children(card, links=False)
        fields = [typst_string(icon), typst_string(title), f"[{body}]"]
        label = renderer.resolve_label(card.attrs.get("href"))
        if label:
            fields.append(typst_string(label))
        entries.append(f"  ({', '.join(fields)}),")
    cols = _grid_columns(element.attrs.get("cols"))
    return "\n".join([f"#card-grid(cols: {cols},", *entries, ")"])


def card(renderer: TypstRenderer, element: Element) -> str:
    """Render a standalone ``<Card>`` as a titled block."""
    title = element.attrs.get("title", "")
    body = renderer.render_children(element, links=False)
    return f"#card(title: {typst_string(title)})[\n{body}\n]"


def _titled(title: str, body: str, separator: str) -> str:
    if not title:
        return body
    heading = strong(escape_markup(title))
    return f"{heading}{separator}{body}" if body else heading


def steps(renderer: TypstRenderer, element: Element) -> str:
    """Render ``<Steps>`` as a numbered ``#steps`` sequence."""
    children = element.find("Step")
    if not children:
        return unwrap(renderer, element)
    entries: list[str] = []
    separator = "\n\n"
    for child in children:
        title = child.attrs.get("title", "").strip()
        body = renderer.render_children(child)
        entries.append(f"  [{_titled(title, body, separator)}],")
    return "\n".join(["#steps(", *entries, ")"])


def step(renderer: TypstRenderer, element: Element) -> str:
    """Render a ``<Step>`` outside ``<Steps>`` as a bold title and body."""
    return _titled(element.attrs.get("title", ""), renderer.render_children(element), "\n")


def accordion(renderer: TypstRenderer, element: Element) -> str:
    """Render an ``<Accordion>`` expanded: bold title, blank line, body."""
    return _titled(element.attrs.get("title", ""), renderer.render_children(element), "\n\n")


def tabs(renderer: TypstRenderer, element: Element) -> str:
    """Render every ``<Tab>`` as a labelled block, all visible."""
    children = element.find("Tab")
    if not children:
        return unwrap(renderer, element)
    blocks: list[str] = []
    for tab in children:
        title = tab.attrs.get("title", "")
        body = renderer.render_children(tab)
        blocks.append(_titled(f"{title}:", body, "\n") if title else body)
    return "\n\n".join(blocks)


def update(renderer: TypstRenderer, element: Element) -> str:
    """Render a changelog ``<Update>``: label, optional description, body."""
    label = element.attrs.get("label", "")
    description = element.attrs.get("description", "")
    body = renderer.render_children(element)
    head = strong(escape_markup(label)) if label else ""
    if description:
        head = f"{head} - {escape_markup(description)}".strip()
    if not head:
        return body
    return f"{head}\n\n{body}" if body else head


def kbd(renderer: TypstRenderer, element: Element) -> str:
    """Render ``<kbd>`` as inline raw text."""
    return inline_code(renderer.plain_text(element.children))


COMPONENT_RENDERERS: dict[str, ComponentRenderer] = {
    "Callout": callout,
    "Note": functools.partial(callout_alias, style="note"),
    "Info": functools.partial(callout_alias, style="note"),
    "Tip": functools.partial(callout_alias, style="tip"),
    "Check": functools.partial(callout_alias, style="tip"),
    "Warning": functools.partial(callout_alias, style="caution"),
    "Danger": functools.partial(callout_alias, style="danger"),
    "Error": functools.partial(callout_alias, style="danger"),
    "Columns": columns,
    "Card": card,
    "CardGroup": unwrap,
    "Steps": steps,
    "Step": step,
    "Accordion": accordion,
    "AccordionGroup": unwrap,
    "Tabs": tabs,
    "Update": update,
    "Frame": unwrap,
    "img": remove,
    "Image": remove,
    "Icon": remove,
    "kbd": kbd,
}


def render_component(renderer: TypstRenderer, element: Element) -> str:
    """Render ``element`` with its table entry or the unwrap fallback."""
    handler = COMPONENT_RENDERERS.get(element.name, unwrap)
    return handler(renderer, element)


__all__ = [
    "CALLOUT_STYLES",
    "COMPONENT_RENDERERS",
    "DEFAULT_CALLOUT_STYLE",
    "render_component",
    "unwrap",
]
