"""Compose views and material-block pages into layouts and write them out.

For every page the compositor resolves its layout, inserts the page body at
the layout's body marker, compiles the result, renders it with the merged
context, pretty-prints the HTML, and writes it to each destination:

* ``<dest>/<collection>/<file>.html`` by default;
* the ``dest`` front-matter path instead, when present;
* additionally the ``dest-copy`` front-matter path, with identical bytes.

Material-block pages show a single fragment in isolation. Their body is
rendered once on its own first and exposed as ``block_markup`` so the blocks
layout can display the live fragment next to its markup.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from pathlib import Path

from pattern_assembly._constants import (
    BASEURL_FIELD,
    BLOCK_MARKUP_FIELD,
    COLLECTION_BASEURL,
    DEST_COPY_FIELD,
    DEST_FIELD,
    LAYOUT_FIELD,
    NAME_FIELD,
    OUTPUT_SUFFIX,
)
from pattern_assembly.errors import LayoutNotFoundError
from pattern_assembly.front_matter import FrontMatter, read_front_matter
from pattern_assembly.indexer import page_collection
from pattern_assembly.namespacer import compile_source
from pattern_assembly.naming import to_title_case

from .layout import wrap_page

if typ.TYPE_CHECKING:
    from jinja2 import Environment

    from pattern_assembly.config import AssemblyOptions
    from pattern_assembly.context import ContextBuilder
    from pattern_assembly.models import AssemblyState

    from .formatter import HtmlPrettifier


@dc.dataclass(slots=True, frozen=True)
class PageSource:
    """A view or material-block file queued for rendering.

    Attributes
    ----------
    path : Path
        Source file.
    collection : str
        Collection directory name, or ``""`` for pages at the root.
    is_block : bool
        ``True`` for material-block pages.
    matter : FrontMatter
        Parsed front matter and body.
    """

    path: Path
    collection: str
    is_block: bool
    matter: FrontMatter

    @classmethod
    def read(cls, path: Path, *, root_key: str, is_block: bool = False) -> PageSource:
        """Read ``path`` and determine its collection from ``root_key``."""
        return cls(
            path=path,
            collection=page_collection(path, root_key),
            is_block=is_block,
            matter=read_front_matter(path),
        )


class PageCompositor:
    """Render pages into their layouts and write the results to disk."""

    def __init__(
        self,
        environment: Environment,
        state: AssemblyState,
        options: AssemblyOptions,
        context_builder: ContextBuilder,
        prettifier: HtmlPrettifier,
    ) -> None:
        """Initialize the compositor.

        Parameters
        ----------
        environment : Environment
            Jinja environment with helpers and the partial registry.
        state : AssemblyState
            Layouts and indexed sources for the current run.
        options : AssemblyOptions
            Default layouts and the output directory.
        context_builder : ContextBuilder
            Builds the per-page rendering context.
        prettifier : HtmlPrettifier
            Formats the rendered HTML before it is written.
        """
        self.environment = environment
        self.state = state
        self.options = options
        self.context_builder = context_builder
        self.prettifier = prettifier

    def resolve_layout(self, page: PageSource) -> str:
        """Return the layout source for ``page``.

        Raises
        ------
        LayoutNotFoundError
            If the requested layout was not among the parsed layouts.
        """
        if page.is_block:
            layout_id = self.options.blocks_layout
        else:
            layout_id = page.matter.data.get(LAYOUT_FIELD) or self.options.layout
        try:
            return self.state.layouts[str(layout_id)]
        except KeyError as exc:
            known = ", ".join(sorted(self.state.layouts)) or "none"
            msg = f"Layout '{layout_id}' for {page.path} not found. Known layouts: {known}"
            raise LayoutNotFoundError(msg) from exc

    def page_data(self, page: PageSource) -> dict[str, typ.Any]:
        """Return the page's front matter plus the derived page fields."""
        data = dict(page.matter.data)
        if page.collection:
            data.setdefault(BASEURL_FIELD, COLLECTION_BASEURL)
        if page.is_block:
            if not data.get(NAME_FIELD):
                data[NAME_FIELD] = to_title_case(page.path.stem)
            block = compile_source(
                self.environment, page.matter.content, name=str(page.path)
            )
            data[BLOCK_MARKUP_FIELD] = block.render(data)
        return data

    def render(self, page: PageSource) -> str:
        """Render ``page`` inside its layout and return formatted HTML."""
        data = self.page_data(page)
        source = wrap_page(page.matter.content, self.resolve_layout(page))
        template = compile_source(
            self.environment, source, name=str(page.path), filename=str(page.path)
        )
        html = template.render(self.context_builder.build(data))
        return self.prettifier(html)

    def destinations(self, page: PageSource) -> list[Path]:
        """Return the output path and, if requested, the copy path."""
        data = page.matter.data
        override = data.get(DEST_FIELD)
        if override:
            target = Path(str(override))
        else:
            target = self.options.dest / page.collection / page.path.name
        targets = [target.with_suffix(OUTPUT_SUFFIX)]
        copy = data.get(DEST_COPY_FIELD)
        if copy:
            targets.append(Path(str(copy)))
        return targets

    def write(self, page: PageSource) -> list[Path]:
        """Render ``page`` once and write it to every destination."""
        html = self.render(page)
        written: list[Path] = []
        for target in self.destinations(page):
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(html, encoding="utf-8")
            written.append(target)
        return written


__all__ = ["PageCompositor", "PageSource"]
