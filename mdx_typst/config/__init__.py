"""Load the optional ``book.yaml`` describing the assembled PDF.

The configuration supplies the cover metadata, the navigation tab to build,
section descriptions, and the output locations. Every field has a default,
so a missing file yields :class:`BookConfig` defaults.

Examples
--------
>>> from mdx_typst.config import load_book_config
>>> load_book_config(None).title
'Documentation'
"""

from .loader import load_book_config
from .models import SECTION_STYLES, BookConfig, BookConfigError

__all__ = ["SECTION_STYLES", "BookConfig", "BookConfigError", "load_book_config"]
