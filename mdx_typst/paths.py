"""Resolve the shared Typst ``--root`` for the tool and the docs tree.

Typst only reads files below its root directory. The template lives next to
this tool and the images live in the docs tree, so the root is the deepest
directory containing both, and docs-absolute asset paths (``/images/x.png``)
are prefixed with the docs directory's position below that root.

Examples
--------
>>> from pathlib import PurePosixPath
>>> from mdx_typst.paths import AssetResolver
>>> resolver = AssetResolver(PurePosixPath("/work/tool"), PurePosixPath("/work/docs"))
>>> str(resolver.root), resolver.prefix
('/work', '/docs')
>>> resolver.resolve("/images/x.png")
'/docs/images/x.png'
"""

from __future__ import annotations

import dataclasses as dc
from pathlib import PurePath, PurePosixPath


def common_root(first: PurePath, second: PurePath) -> PurePath:
    """Return the longest shared leading segment sequence of two paths.

    Both paths are expected to be absolute. When they share nothing beyond
    the anchor the result is the filesystem root.
    """
    shared: list[str] = []
    for left, right in zip(first.parts, second.parts, strict=False):
        if left != right:
            break
        shared.append(left)
    if not shared:
        return type(first)(first.anchor or "/")
    return type(first)(*shared)


@dc.dataclass(slots=True, frozen=True)
class AssetResolver:
    """Map docs-relative asset references onto the shared compiler root.

    Attributes
    ----------
    tool_root : PurePath
        Directory holding the tool, its template, and build output.
    docs_root : PurePath
        Directory holding the MDX sources and their assets.
    """

    tool_root: PurePath
    docs_root: PurePath

    @property
    def root(self) -> PurePath:
        """Shared ancestor passed to ``typst compile --root``."""
        return common_root(self.tool_root, self.docs_root)

    @property
    def prefix(self) -> str:
        """Position of the docs tree below :attr:`root` (``""`` at the root)."""
        relative = PurePosixPath(*self.docs_root.relative_to(self.root).parts)
        if str(relative) == ".":
            return ""
        return f"/{relative}"

    def resolve(self, reference: str) -> str:
        """Return ``reference`` rooted at the shared root.

        References are treated as docs-absolute; a missing leading slash is
        added before the docs prefix is prepended.
        """
        path = reference if reference.startswith("/") else f"/{reference}"
        return f"{self.prefix}{path}"

    def import_path(self, path: PurePath) -> str:
        """Return ``path`` (a file below :attr:`root`) as a root-absolute path."""
        relative = PurePosixPath(*path.relative_to(self.root).parts)
        return f"/{relative}"


__all__ = ["AssetResolver", "common_root"]
