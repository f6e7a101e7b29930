"""Orchestrate reading the source tree and rendering every page.

An assembly run has two phases. :meth:`Assembler.setup` reads layouts, data,
materials, pages, and docs into an immutable :class:`AssemblyState` and
registers partials with a fresh Jinja environment. :meth:`Assembler.assemble`
then renders each view and material-block file into its layout and writes the
output. :meth:`Assembler.run` wraps both in the configured error policy.

Example
-------
>>> from pattern_assembly.assembler import assemble
>>> from pattern_assembly.config import AssemblyOptions
>>> assemble(AssemblyOptions(dest=Path("public")))  # doctest: +SKIP
[PosixPath('public/index.html'), ...]
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from jinja2 import ChainableUndefined, Environment

from .config import AssemblyOptions
from .context import ContextBuilder
from .errors import handle_error
from .generator import (
    BodyMarkerExtension,
    HtmlPrettifier,
    MarkdownRenderer,
    PageCompositor,
    PageSource,
)
from .helpers import register_helpers
from .indexer import index_docs, index_materials, index_pages, read_data, read_layouts
from .matcher import match_files
from .models import AssemblyState
from .namespacer import PartialRegistry
from .naming import get_name

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .helpers import MaterialHelper

logger = logging.getLogger(__name__)


@dc.dataclass(slots=True, frozen=True)
class Assembly:
    """The result of setup, passed explicitly to the rendering phase.

    Attributes
    ----------
    state : AssemblyState
        Everything read from the source tree.
    environment : Environment
        Jinja environment holding helpers and the partial registry.
    registry : PartialRegistry
        Compiled partials keyed by id.
    context_builder : ContextBuilder
        Builds per-page contexts from ``state``.
    """

    state: AssemblyState
    environment: Environment
    registry: PartialRegistry
    context_builder: ContextBuilder


class Assembler:
    """Build a pattern library from materials, views, layouts, and data."""

    def __init__(self, options: AssemblyOptions | None = None) -> None:
        self.options = options or AssemblyOptions()
        self.markdown = MarkdownRenderer(self.options.pygments_style)
        self.prettifier = HtmlPrettifier(self.options.beautifier)

    def _create_environment(self, registry: PartialRegistry) -> Environment:
        return Environment(
            loader=registry,
            autoescape=True,
            undefined=ChainableUndefined,
            extensions=[BodyMarkerExtension],
            cache_size=0,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def setup(self) -> Assembly:
        """Read every source category and register partials.

        Returns
        -------
        Assembly
            A fresh state and environment; nothing is shared with earlier runs.

        Raises
        ------
        AssemblyError
            If a source file has malformed front matter or data.
        TemplateSyntaxError
            If a partial cannot be compiled.
        """
        options = self.options
        registry = PartialRegistry()
        environment = self._create_environment(registry)
        material_helper: MaterialHelper = register_helpers(
            environment, options, registry, self.prettifier
        )

        layouts = read_layouts(options.layouts)
        logger.debug("read %d layouts", len(layouts))
        for path in match_files(options.layout_includes):
            registry.register(environment, get_name(path), path.read_text(encoding="utf-8"))
        data = read_data(options.data)
        logger.debug("read %d data files", len(data))

        partials = index_materials(options.material_partials, self.markdown)
        for material in partials.materials:
            registry.register(
                environment, material.id, material.content, fields=material.data.keys()
            )
        logger.debug("registered %d material partials", len(partials.materials))

        materials = index_materials(options.materials, self.markdown)
        material_data = {**partials.data, **materials.data}
        material_blocks = index_pages(
            options.material_blocks, options.keys.material_blocks, is_block=True
        )
        views = index_pages(options.views, options.keys.views)
        docs = index_docs(options.docs, self.markdown)
        logger.debug("indexed %d views and %d docs", len(views), len(docs))

        state = AssemblyState(
            layouts=layouts,
            data=data,
            material_partials=partials.tree,
            materials=materials.tree,
            material_blocks=material_blocks,
            material_data=material_data,
            views=views,
            docs=docs,
        )
        context_builder = ContextBuilder(state, options.keys)
        material_helper.context_builder = context_builder
        return Assembly(
            state=state,
            environment=environment,
            registry=registry,
            context_builder=context_builder,
        )

    def pages(self) -> list[PageSource]:
        """Return the views followed by the material-block pages to render."""
        keys = self.options.keys
        views = [
            PageSource.read(path, root_key=keys.views)
            for path in match_files(self.options.views)
        ]
        blocks = [
            PageSource.read(path, root_key=keys.material_blocks, is_block=True)
            for path in match_files(self.options.material_blocks)
        ]
        return views + blocks

    def assemble(
        self, assembly: Assembly, written: list[Path] | None = None
    ) -> list[Path]:
        """Render every page and return the written paths in order.

        Paths are appended to ``written`` as each page is written, so a caller
        passing its own list still sees the pages finished before a failure.
        """
        self.options.dest.mkdir(parents=True, exist_ok=True)
        compositor = PageCompositor(
            assembly.environment,
            assembly.state,
            self.options,
            assembly.context_builder,
            self.prettifier,
        )
        written = [] if written is None else written
        for page in self.pages():
            for path in compositor.write(page):
                logger.info("wrote %s", path)
                written.append(path)
        return written

    def run(self) -> list[Path]:
        """Set up and assemble, routing any failure to the error policy.

        Returns
        -------
        list[Path]
            Written paths. When a handled failure stops the run, the pages
            written before it are still listed.
        """
        written: list[Path] = []
        try:
            self.assemble(self.setup(), written)
        except Exception as exc:  # noqa: BLE001 - every failure goes to one policy
            handle_error(exc, self.options)
        return written


def assemble(options: AssemblyOptions | None = None, **overrides: typ.Any) -> list[Path]:
    """Run a complete assembly with ``options`` and keyword overrides."""
    resolved = options or AssemblyOptions()
    if overrides:
        resolved = dc.replace(resolved, **overrides)
    return Assembler(resolved).run()


__all__ = ["Assembler", "Assembly", "assemble"]
