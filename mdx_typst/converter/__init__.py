"""Convert Mintlify MDX document bodies into Typst markup.

The converter tokenizes a document into block and inline nodes, then renders
each node with its own rule. Fenced code, inline code, links, and images are
verbatim leaves whose literal text never reaches the prose escaper, and
JSX-style components are mapped onto functions provided by the bundled Typst
template.

Examples
--------
>>> from mdx_typst.converter import convert_mdx
>>> print(convert_mdx("# Title\\n\\n<Note>Read **this**.</Note>"))
= Title
<BLANKLINE>
#note(title: "Note")[
Read #strong[this].
]
"""

from .renderer import RenderContext, TypstRenderer, convert_mdx, document_label

__all__ = ["RenderContext", "TypstRenderer", "convert_mdx", "document_label"]
