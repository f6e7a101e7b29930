"""Index materials, pages, docs, layouts, and data files from the source tree.

Materials are indexed into a two-level tree of collections and
sub-collections::

    {
        "components": CollectionNode(
            name="Components",
            items={
                "button": Material(...),
                "02-forms": CollectionNode(
                    name="Forms",
                    items={"02-forms.input": Material(...)},
                ),
            },
        ),
    }

Every node's items are sorted: entries with a numeric ``order`` front-matter
field come first in ascending order, the rest follow alphabetically by key.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from ._constants import BLOCK_FLAG_FIELD, ORDER_FIELD
from .classifier import Classification, CollectionClassifier
from .front_matter import FrontMatter, read_data_file, read_front_matter
from .matcher import match_files
from .models import CollectionNode, Doc, Material, PageEntry, Tree
from .naming import dir_name, get_name, namespace_id, to_title_case

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .matcher import Patterns

MarkdownRender = typ.Callable[[str], str]


@dc.dataclass(slots=True)
class MaterialIndex:
    """Result of indexing one material source.

    Attributes
    ----------
    tree : Tree
        Sorted collection tree keyed by top-level collection.
    data : dict[str, dict[str, Any]]
        Each material's front matter keyed by its namespaced id.
    materials : list[Material]
        Materials in discovery order, used for partial registration.
    """

    tree: Tree
    data: dict[str, dict[str, typ.Any]]
    materials: list[Material]


def _stub_nodes(tree: Tree, placement: Classification) -> None:
    """Ensure the top-level node (and sub-collection node) for a file exists."""
    base = placement.base
    if base not in tree:
        tree[base] = CollectionNode(name=to_title_case(dir_name(base)))
    if placement.is_sub_collection:
        items = tree[base].items
        if placement.collection not in items:
            items[placement.collection] = CollectionNode(
                name=to_title_case(dir_name(placement.collection))
            )


def _build_material(
    path: Path,
    placement: Classification,
    matter: FrontMatter,
    render_markdown: MarkdownRender,
) -> Material:
    leaf = get_name(path)
    if placement.is_sub_collection:
        material_id = f"{dir_name(placement.collection)}.{leaf}"
        key = f"{placement.collection}.{leaf}"
        name = to_title_case(material_id.split(".", 1)[1])
    else:
        material_id = key = leaf
        name = to_title_case(material_id)
    notes = matter.notes
    return Material(
        id=material_id,
        key=key,
        name=name,
        notes=render_markdown(notes) if notes else "",
        data=matter.local_data,
        content=matter.content,
    )


def index_materials(patterns: Patterns, render_markdown: MarkdownRender) -> MaterialIndex:
    """Build the collection tree and namespaced data for a material source.

    Parameters
    ----------
    patterns : str or sequence of str
        Glob patterns matching the material files.
    render_markdown : callable
        Converts a material's ``notes`` markdown into HTML.

    Returns
    -------
    MaterialIndex
        The sorted tree, the flat namespaced data mapping, and the materials
        in discovery order.

    Raises
    ------
    FrontMatterError
        If any material's front matter is malformed.
    """
    classifier = CollectionClassifier.from_patterns(patterns)
    placements = [(path, classifier.classify(path)) for path in match_files(patterns)]

    tree: Tree = {}
    for _path, placement in placements:
        _stub_nodes(tree, placement)

    data: dict[str, dict[str, typ.Any]] = {}
    materials: list[Material] = []
    for path, placement in placements:
        material = _build_material(
            path, placement, read_front_matter(path), render_markdown
        )
        node = tree[placement.base]
        if placement.is_sub_collection:
            node = node.items[placement.collection]
        node.items[material.key] = material
        data[namespace_id(material.id)] = dict(material.data)
        materials.append(material)

    return MaterialIndex(tree=sort_items(tree), data=data, materials=materials)


def _explicit_order(item: object) -> float | None:
    """Return the numeric ``order`` field of an entry, if it declares one."""
    data = getattr(item, "data", None)
    if not isinstance(data, dict):
        return None
    value = data.get(ORDER_FIELD)
    match value:
        case bool():
            return None
        case int() | float():
            return float(value)
        case str():
            try:
                return float(value)
            except ValueError:
                return None
        case _:
            return None


def sort_items(items: typ.Mapping[str, typ.Any]) -> dict[str, typ.Any]:
    """Return ``items`` sorted by explicit order, then key, at every level."""

    def _sort_key(entry: tuple[str, typ.Any]) -> tuple[int, float, str]:
        key, item = entry
        order = _explicit_order(item)
        if order is None:
            return (1, 0.0, key)
        return (0, order, key)

    ordered: dict[str, typ.Any] = {}
    for key, item in sorted(items.items(), key=_sort_key):
        if isinstance(item, CollectionNode):
            item = CollectionNode(name=item.name, items=sort_items(item.items))
        ordered[key] = item
    return ordered


def page_collection(path: Path, root_key: str) -> str:
    """Return the collection directory of a page, or ``""`` at the root."""
    dirname = path.parent.name
    return "" if dirname == root_key else dirname


def index_pages(
    patterns: Patterns, root_key: str, *, is_block: bool = False
) -> Tree:
    """Index views or material-block pages that live in a collection directory.

    Pages whose parent directory is named ``root_key`` are not part of any
    collection and are left out of the tree; they are still rendered.
    """
    tree: Tree = {}
    for path in match_files(patterns):
        collection = page_collection(path, root_key)
        if not collection:
            continue
        data = read_front_matter(path).local_data
        if is_block:
            data[BLOCK_FLAG_FIELD] = True
        page_id = get_name(path, preserve_ordering=True)
        if collection not in tree:
            tree[collection] = CollectionNode(name=to_title_case(collection))
        tree[collection].items[page_id] = PageEntry(
            name=to_title_case(page_id), data=data
        )
    return tree


def index_docs(patterns: Patterns, render_markdown: MarkdownRender) -> dict[str, Doc]:
    """Render every markdown doc, keyed by its name."""
    docs: dict[str, Doc] = {}
    for path in match_files(patterns):
        doc_id = get_name(path)
        docs[doc_id] = Doc(
            name=to_title_case(doc_id),
            content=render_markdown(path.read_text(encoding="utf-8")),
        )
    return docs


def read_layouts(patterns: Patterns) -> dict[str, str]:
    """Return the raw text of every layout, keyed by its name."""
    return {get_name(path): path.read_text(encoding="utf-8") for path in match_files(patterns)}


def read_data(patterns: Patterns) -> dict[str, typ.Any]:
    """Return every parsed data document, keyed by its name."""
    return {get_name(path): read_data_file(path) for path in match_files(patterns)}


__all__ = [
    "MaterialIndex",
    "index_docs",
    "index_materials",
    "index_pages",
    "page_collection",
    "read_data",
    "read_layouts",
    "sort_items",
]
