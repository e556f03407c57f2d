"""Tests for loading the book configuration YAML."""

from __future__ import annotations

import typing as typ

import pytest

from mdx_typst._constants import DEFAULT_OUTPUT_DIR
from mdx_typst.config import BookConfig, BookConfigError, load_book_config

if typ.TYPE_CHECKING:
    from pathlib import Path


def _config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "book.yaml"
    path.write_text(text.strip() + "\n", encoding="utf-8")
    return path


def test_defaults_without_file() -> None:
    config = load_book_config(None)
    assert config == BookConfig()
    assert config.output_dir == DEFAULT_OUTPUT_DIR
    assert config.typst_name == "documentation.typ"
    assert config.pdf_name == "documentation.pdf"


def test_values_are_loaded(tmp_path: Path) -> None:
    path = _config(
        tmp_path,
        """
title: Product Docs
subtitle: Guide
version: 2.0
tab: Guides
descriptor_names: mint.json
output_dir: out
output_name: product
section_style: light
default_description: "About {title}"
section_descriptions:
  Account: Billing and profile.
""",
    )
    config = load_book_config(path)
    assert config.title == "Product Docs"
    assert config.version == "2.0"
    assert config.tab == "Guides"
    assert config.descriptor_names == ("mint.json",)
    assert config.output_dir == (tmp_path / "out").resolve()
    assert config.pdf_name == "product.pdf"
    assert config.section_style == "light"
    assert config.describe("Account") == "Billing and profile."
    assert config.describe("Other") == "About Other"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_book_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("- a\n- b", "must be a mapping"),
        ("section_style: neon", "Unknown section_style"),
        ("title: [1, 2]", "'title' must be a string"),
        ("section_descriptions: [a]", "section_descriptions"),
        ("descriptor_names: []", "descriptor_names"),
        ("title: 'unclosed", "not valid YAML"),
    ],
)
def test_invalid_values(tmp_path: Path, text: str, message: str) -> None:
    with pytest.raises(BookConfigError, match=message):
        load_book_config(_config(tmp_path, text))
