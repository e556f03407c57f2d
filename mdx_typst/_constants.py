"""Common literal values used across mdx_typst.

These constants keep filenames and defaults centralized so the CLI, builder,
and tests can import the same values without drifting. Intended for internal
use within the mdx_typst package.

Examples
--------
>>> from mdx_typst import _constants
>>> _constants.SOURCE_EXTENSION
'.mdx'
>>> _constants.DESCRIPTOR_NAMES[0]
'docs.json'
"""

from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parent
TOOL_ROOT = PACKAGE_ROOT.parent

SOURCE_EXTENSION = ".mdx"
DESCRIPTOR_NAMES = ("docs.json", "mint.json")
DEFAULT_CONFIG_PATH = TOOL_ROOT / "config" / "book.yaml"
DEFAULT_DOCS_DIR = TOOL_ROOT.parent / "docs"
DEFAULT_OUTPUT_DIR = TOOL_ROOT / "output"
DEFAULT_TEMPLATE_PATH = PACKAGE_ROOT / "typst" / "template.typ"
TYPST_SOURCE_NAME = "documentation.typ"
