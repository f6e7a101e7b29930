"""Behaviour tests for assembling materials into views.

The scenarios in ``material_assembly.feature`` build a minimal pattern library
in a temporary directory, run a full assembly, and inspect the written HTML
with BeautifulSoup.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from bs4 import BeautifulSoup
from pytest_bdd import given, parsers, scenarios, then, when

from pattern_assembly import assemble

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "material_assembly.feature"
)
scenarios(FEATURE_FILE)

LAYOUT = "<html><body>{% body %}</body></html>\n"


@pytest.fixture
def scenario_state() -> dict[str, object]:
    """Return a mutable dict used to share scenario state across BDD steps."""
    return {}


def _write(root: Path, relative: str, text: str) -> None:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def _root(scenario_state: dict[str, object]) -> Path:
    root = scenario_state["root"]
    assert isinstance(root, Path)
    return root


@given(parsers.parse('a pattern library with a button material labelled "{label}"'))
def given_library(
    label: str,
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    scenario_state: dict[str, object],
) -> None:
    """Write a layout and a single button material."""
    monkeypatch.chdir(tmp_path)
    _write(tmp_path, "src/views/layouts/default.html", LAYOUT)
    _write(
        tmp_path,
        "src/materials/components/01-button.html",
        f"---\nlabel: {label}\n---\n<button>{{{{ label }}}}</button>\n",
    )
    scenario_state["root"] = tmp_path


@given(parsers.parse('a view that defines its own label "{label}"'))
def given_view_with_label(label: str, scenario_state: dict[str, object]) -> None:
    """Write a view that renders the button and its own label."""
    root = _root(scenario_state)
    _write(
        root,
        "src/views/index.html",
        f"---\nlabel: {label}\n---\n"
        '<div id="material">{{ material("button") }}</div>\n'
        '<p id="own">{{ label }}</p>\n',
    )
    scenario_state["page"] = root / "dist/index.html"


@given(parsers.parse('a view with dest "{dest}" and dest-copy "{copy}"'))
def given_view_with_destinations(
    dest: str, copy: str, scenario_state: dict[str, object]
) -> None:
    """Write a collection view that overrides its output locations."""
    _write(
        _root(scenario_state),
        "src/views/pages/view.html",
        f"---\ndest: {dest}\ndest-copy: {copy}\n---\n"
        '<div>{{ material("button") }}</div>\n',
    )


@when("I assemble the library")
def when_assemble(scenario_state: dict[str, object]) -> None:
    """Run a full assembly with the default options."""
    scenario_state["written"] = assemble()


def _page(scenario_state: dict[str, object]) -> BeautifulSoup:
    page = scenario_state["page"]
    assert isinstance(page, Path)
    return BeautifulSoup(page.read_text(encoding="utf-8"), "html.parser")


@then(parsers.parse('the rendered material reads "{text}"'))
def then_material_reads(text: str, scenario_state: dict[str, object]) -> None:
    """The material is rendered from its own front matter."""
    button = _page(scenario_state).select_one("#material button")
    assert button is not None, "expected the material's button in the view"
    assert button.get_text(strip=True) == text


@then(parsers.parse("the view's own label reads \"{text}\""))
def then_own_label_reads(text: str, scenario_state: dict[str, object]) -> None:
    """The view keeps its own value for the shared field name."""
    own = _page(scenario_state).select_one("#own")
    assert own is not None
    assert own.get_text(strip=True) == text


@then(parsers.parse('"{first}" and "{second}" hold identical HTML'))
def then_identical(first: str, second: str, scenario_state: dict[str, object]) -> None:
    """Both destinations receive the same bytes."""
    root = _root(scenario_state)
    assert (root / first).read_bytes() == (root / second).read_bytes()
    assert "Click" in (root / first).read_text(encoding="utf-8")


@then(parsers.parse('nothing is written to "{relative}"'))
def then_not_written(relative: str, scenario_state: dict[str, object]) -> None:
    """A ``dest`` override replaces the default output path."""
    assert not (_root(scenario_state) / relative).exists()

