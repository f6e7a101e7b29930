"""Merge global, material, and page data into one rendering context."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from .config import CollectionKeys
    from .models import AssemblyState


class ContextBuilder:
    """Build the context passed to every page and material render.

    Later sources override earlier ones: page front matter, data files,
    namespaced material data, the collection trees under their configured
    keys, and finally the per-call ``extra`` mapping.
    """

    def __init__(self, state: AssemblyState, keys: CollectionKeys) -> None:
        self.state = state
        self.keys = keys

    def collections(self) -> dict[str, typ.Any]:
        """Return the collection trees keyed by their configured names."""
        return {
            self.keys.materials: self.state.materials,
            self.keys.material_blocks: self.state.material_blocks,
            self.keys.material_partials: self.state.material_partials,
            self.keys.views: self.state.views,
            self.keys.docs: self.state.docs,
        }

    def build(
        self,
        page_data: typ.Mapping[str, typ.Any] | None = None,
        extra: typ.Mapping[str, typ.Any] | None = None,
    ) -> dict[str, typ.Any]:
        """Return a fresh context; ``None`` inputs count as empty."""
        context: dict[str, typ.Any] = {}
        context.update(page_data or {})
        context.update(self.state.data)
        context.update(self.state.material_data)
        context.update(self.collections())
        context.update(extra or {})
        return context


__all__ = ["ContextBuilder"]
