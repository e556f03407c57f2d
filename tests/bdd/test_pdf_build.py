"""Behaviour tests for building the assembled Typst source from a docs tree.

These pytest-bdd scenarios build a small Mintlify docs directory with
``PdfBuilder`` and inspect the assembled ``.typ`` file. The feature file
``pdf_build.feature`` drives the scenarios; the Typst compiler is replaced by
a failing ``subprocess.run`` stub so no external binary is required.
"""

from __future__ import annotations

import json
import subprocess
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, scenarios, then, when

from mdx_typst.builder import PdfBuilder
from mdx_typst.config import BookConfig
from mdx_typst.errors import CompileFailure

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "pdf_build.feature"
scenarios(FEATURE_FILE)


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


@given("a Mintlify docs tree with a missing page")
def given_docs_tree(tmp_path: Path, scenario_state: dict[str, object]) -> None:
    root = tmp_path / "docs"
    (root / "start").mkdir(parents=True)
    (root / "help").mkdir()
    navigation = {
        "navigation": {
            "groups": [
                {"group": "Getting started", "pages": ["start/welcome", "start/cards"]},
                {"group": "Archive", "pages": ["old/gone"]},
                {"group": "Help", "pages": ["help/faq"]},
            ]
        }
    }
    (root / "docs.json").write_text(json.dumps(navigation), encoding="utf-8")
    (root / "start" / "welcome.mdx").write_text(
        "---\ntitle: Welcome\n---\nHello **reader**.\n", encoding="utf-8"
    )
    (root / "start" / "cards.mdx").write_text(
        '<Columns cols={2}>\n  <Card title="FAQ" href="/help/faq">\n    Answers\n  </Card>\n</Columns>\n',
        encoding="utf-8",
    )
    (root / "help" / "faq.mdx").write_text(
        "---\ntitle: FAQ\n---\n<Accordion title=\"Why?\">\nBecause.\n</Accordion>\n",
        encoding="utf-8",
    )
    scenario_state["docs"] = root
    scenario_state["config"] = BookConfig(title="Sample", output_dir=tmp_path / "out")


@given("the typst compiler fails")
def given_compiler_fails(mocker: typ.Any) -> None:
    mocker.patch("mdx_typst.compiler.shutil.which", return_value="/usr/bin/typst")
    error = subprocess.CalledProcessError(1, ["typst"], stderr="error: file not found")
    mocker.patch("mdx_typst.compiler.subprocess.run", side_effect=error)


@when("I build the book without compiling")
def when_build_without_compile(scenario_state: dict[str, object]) -> None:
    builder = PdfBuilder(typ.cast("BookConfig", scenario_state["config"]))
    result = builder.build(typ.cast("Path", scenario_state["docs"]), compile_pdf=False)
    scenario_state["source"] = result.typst_path.read_text(encoding="utf-8")


@when("I build the book")
def when_build(scenario_state: dict[str, object]) -> None:
    builder = PdfBuilder(typ.cast("BookConfig", scenario_state["config"]))
    try:
        builder.build(typ.cast("Path", scenario_state["docs"]))
    except CompileFailure as exc:
        scenario_state["error"] = exc


@then("the Typst source has a section break for each readable group")
def then_section_breaks(scenario_state: dict[str, object]) -> None:
    source = typ.cast("str", scenario_state["source"])
    assert source.count("#section-break(") == 2, "expected the empty group to be dropped"
    assert '  number: "01",\n  title: "Getting started",' in source
    assert '  number: "03",\n  title: "Help",' in source
    assert "Archive" not in source


@then("each document heading carries its label")
def then_heading_labels(scenario_state: dict[str, object]) -> None:
    source = typ.cast("str", scenario_state["source"])
    for heading in (
        "= Welcome <start-welcome>",
        "= start/cards <start-cards>",
        "= FAQ <help-faq>",
    ):
        assert heading in source, f"expected heading {heading!r} in assembled source"
    assert "Hello #strong[reader]." in source
    assert "#strong[Why?]\n\nBecause." in source


@then("the card linking to another page keeps its label")
def then_card_label(scenario_state: dict[str, object]) -> None:
    source = typ.cast("str", scenario_state["source"])
    assert '("circle", "FAQ", [Answers], "help-faq")' in source


@then("the build reports a compile failure")
def then_compile_failure(scenario_state: dict[str, object]) -> None:
    error = scenario_state.get("error")
    assert isinstance(error, CompileFailure), "expected a CompileFailure"
    assert "file not found" in str(error)


@then("the Typst source is left on disk")
def then_source_on_disk(scenario_state: dict[str, object]) -> None:
    config = typ.cast("BookConfig", scenario_state["config"])
    assert (config.output_dir / config.typst_name).exists()
