"""Tests for placing material files into collections and sub-collections."""

from __future__ import annotations

import typing as typ
from pathlib import Path

import pytest

from pattern_assembly.classifier import Classification, CollectionClassifier

if typ.TYPE_CHECKING:
    from conftest import WriteTree

PATTERNS = ["src/materials/**/*"]


@pytest.fixture
def material_tree(write_tree: WriteTree) -> None:
    """Write top-level, nested, and deeply nested materials."""
    write_tree(
        {
            "src/materials/components/01-button.html": "",
            "src/materials/components/forms/input.html": "",
            "src/materials/structures/header.html": "",
            "src/materials/layouts/grid/columns/three.html": "",
        }
    )


@pytest.mark.usefixtures("material_tree")
def test_top_level_directories_are_discovered() -> None:
    """Directories directly below the base directory are top-level."""
    classifier = CollectionClassifier.from_patterns(PATTERNS)
    assert classifier.top_level == {"components", "structures", "layouts"}


@pytest.mark.usefixtures("material_tree")
@pytest.mark.parametrize(
    ("path", "expected"),
    [
        (
            "src/materials/components/01-button.html",
            Classification("components", "materials", is_sub_collection=False),
        ),
        (
            "src/materials/components/forms/input.html",
            Classification("forms", "components", is_sub_collection=True),
        ),
        (
            "src/materials/layouts/grid/columns/three.html",
            Classification("columns", "grid", is_sub_collection=False),
        ),
    ],
)
def test_classify(path: str, expected: Classification) -> None:
    """Files map to their parent directory, nested one level at most."""
    classifier = CollectionClassifier.from_patterns(PATTERNS)
    assert classifier.classify(Path(path)) == expected


def test_sub_collection_base_is_the_parent() -> None:
    """Sub-collection files hang off their top-level parent node."""
    classifier = CollectionClassifier({"components"})
    placement = classifier.classify(Path("x/components/buttons/primary.html"))
    assert placement.is_sub_collection
    assert placement.base == "components"


def test_ordering_prefixes_are_kept_in_collection_names() -> None:
    """Collection names keep their ordering so tree keys sort by it."""
    classifier = CollectionClassifier({"01-atoms"})
    placement = classifier.classify(Path("src/materials/01-atoms/02 forms/input.html"))
    assert placement == Classification("02-forms", "01-atoms", is_sub_collection=True)


@pytest.mark.usefixtures("material_tree")
def test_classification_is_repeatable() -> None:
    """Classifying the same tree twice yields identical placements."""
    paths = [
        Path("src/materials/components/01-button.html"),
        Path("src/materials/components/forms/input.html"),
    ]
    first = CollectionClassifier.from_patterns(PATTERNS)
    second = CollectionClassifier.from_patterns(PATTERNS)
    assert [first.classify(p) for p in paths] == [second.classify(p) for p in paths]
