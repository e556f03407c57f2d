"""Exception types raised while building the PDF documentation bundle."""

from __future__ import annotations

from pathlib import Path


class DocsBuildError(RuntimeError):
    """Base class for failures that abort a documentation build."""


class SourceDirNotFound(DocsBuildError):
    """Raised when the MDX source directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Docs directory not found: {path}")


class DescriptorNotFound(DocsBuildError):
    """Raised when no navigation descriptor exists in the source directory."""

    def __init__(self, path: Path, names: tuple[str, ...]) -> None:
        self.path = path
        self.names = names
        expected = " or ".join(names)
        super().__init__(f"{expected} not found in: {path}")


class DescriptorInvalid(DocsBuildError):
    """Raised when the navigation descriptor cannot be decoded."""


class SourceFileMissing(DocsBuildError):
    """Raised when a page listed in the navigation has no source file.

    The section loader treats this as recoverable: the page is skipped and a
    warning is logged.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class CompileFailure(DocsBuildError):
    """Raised when the Typst compiler exits unsuccessfully."""

    def __init__(self, message: str, *, output: str = "") -> None:
        self.output = output
        text = f"{message}\n{output.strip()}" if output.strip() else message
        super().__init__(text)


__all__ = [
    "CompileFailure",
    "DescriptorInvalid",
    "DescriptorNotFound",
    "DocsBuildError",
    "SourceDirNotFound",
    "SourceFileMissing",
]
