"""Shared dataclasses describing indexed sources and the assembly state."""

from __future__ import annotations

import dataclasses as dc
import typing as typ


@dc.dataclass(slots=True, frozen=True)
class Material:
    """A markup fragment indexed from the materials tree.

    Attributes
    ----------
    id : str
        Dotted identifier (``sub-collection.item`` or ``item``) without
        ordering prefixes; also the partial name.
    key : str
        Tree lookup key; ordering kept in the sub-collection segment.
    name : str
        Display title derived from ``id``.
    notes : str
        Rendered HTML of the ``notes`` front-matter field.
    data : dict[str, Any]
        Front matter without ``notes``.
    content : str
        Trimmed fragment source, before namespacing.
    """

    id: str
    key: str
    name: str
    notes: str
    data: dict[str, typ.Any]
    content: str


@dc.dataclass(slots=True, frozen=True)
class PageEntry:
    """Index entry for a view or material-block page."""

    name: str
    data: dict[str, typ.Any]


@dc.dataclass(slots=True, frozen=True)
class Doc:
    """A rendered markdown documentation file."""

    name: str
    content: str


@dc.dataclass(slots=True)
class CollectionNode:
    """A collection or sub-collection in an index tree."""

    name: str
    items: dict[str, typ.Any] = dc.field(default_factory=dict)


Tree = dict[str, CollectionNode]


@dc.dataclass(slots=True, frozen=True)
class AssemblyState:
    """Everything read from the source tree for one assembly run.

    Built once by :meth:`~pattern_assembly.assembler.Assembler.setup` and
    read-only while pages render.
    """

    layouts: dict[str, str] = dc.field(default_factory=dict)
    data: dict[str, typ.Any] = dc.field(default_factory=dict)
    material_partials: Tree = dc.field(default_factory=dict)
    materials: Tree = dc.field(default_factory=dict)
    material_blocks: Tree = dc.field(default_factory=dict)
    material_data: dict[str, dict[str, typ.Any]] = dc.field(default_factory=dict)
    views: Tree = dc.field(default_factory=dict)
    docs: dict[str, Doc] = dc.field(default_factory=dict)


__all__ = ["AssemblyState", "CollectionNode", "Doc", "Material", "PageEntry", "Tree"]
