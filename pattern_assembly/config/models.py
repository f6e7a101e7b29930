"""Typed dataclasses describing assembly configuration structures."""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path


def _patterns(*values: str) -> typ.Callable[[], list[str]]:
    return lambda: list(values)


@dc.dataclass(slots=True)
class CollectionKeys:
    """Names under which the collection trees are exposed to templates."""

    materials: str = "materials"
    material_blocks: str = "materialblocks"
    material_partials: str = "materialpartials"
    views: str = "views"
    docs: str = "docs"

    @property
    def material_helper(self) -> str:
        """Return the helper name, the singular form of the materials key."""
        key = self.materials
        if key.endswith("s") and len(key) > 1:
            return key[:-1]
        return key


@dc.dataclass(slots=True)
class BeautifierOptions:
    """Indentation settings for the HTML formatter."""

    indent_size: int = 1
    indent_char: str = "\t"
    indent_with_tabs: bool = True

    @property
    def indent(self) -> str:
        """Return the string used for one level of indentation."""
        char = "\t" if self.indent_with_tabs else self.indent_char
        return char * max(self.indent_size, 0)


@dc.dataclass(slots=True)
class AssemblyOptions:
    """A fully resolved assembly configuration.

    Attributes
    ----------
    layout : str
        Id of the layout used when a view does not name one.
    blocks_layout : str
        Id of the layout used for material-block pages.
    layouts, layout_includes, views, materials, material_blocks,
    material_partials, data, docs : list[str]
        Glob patterns for each input category; ``!`` prefixes exclude.
    keys : CollectionKeys
        Context names for the collection trees.
    dest : Path
        Output directory.
    beautifier : BeautifierOptions
        Formatter indentation options.
    pygments_style : str
        Pygments style used when highlighting code in notes and docs.
    on_error : callable or None
        Called with any failure; makes failures non-fatal.
    log_errors : bool
        Log failures instead of exiting when no callback is set.
    helpers : dict[str, callable]
        Extra template globals registered before parsing.
    """

    layout: str = "default"
    blocks_layout: str = "blocks"
    layouts: list[str] = dc.field(default_factory=_patterns("src/views/layouts/*"))
    layout_includes: list[str] = dc.field(
        default_factory=_patterns("src/views/layouts/includes/*")
    )
    views: list[str] = dc.field(
        default_factory=_patterns("src/views/**/*", "!src/views/layouts/**")
    )
    materials: list[str] = dc.field(default_factory=_patterns("src/materials/**/*"))
    material_blocks: list[str] = dc.field(
        default_factory=_patterns("src/material-blocks/**/*")
    )
    material_partials: list[str] = dc.field(
        default_factory=_patterns("src/materials/**/*", "src/material-blocks/**/*")
    )
    data: list[str] = dc.field(default_factory=_patterns("src/data/**/*.{json,yml}"))
    docs: list[str] = dc.field(default_factory=_patterns("src/docs/**/*.md"))
    keys: CollectionKeys = dc.field(default_factory=CollectionKeys)
    dest: Path = Path("dist")
    beautifier: BeautifierOptions = dc.field(default_factory=BeautifierOptions)
    pygments_style: str = "monokai"
    on_error: typ.Callable[[BaseException], object] | None = None
    log_errors: bool = False
    helpers: dict[str, typ.Callable[..., typ.Any]] = dc.field(default_factory=dict)


__all__ = ["AssemblyOptions", "BeautifierOptions", "CollectionKeys"]
