"""Assemble static pattern libraries from materials, views, and layouts.

This package indexes reusable markup fragments ("materials") into a
collection tree, registers each one as a namespaced Jinja partial, merges
data files and front matter into a rendering context, and writes every view
and material-block page into its layout.

Exports
-------
- ``assemble``: Run a complete assembly with the given options.
- ``Assembler``: Two-phase setup/assemble orchestrator.
- ``AssemblyOptions``: Configuration dataclass.
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from pattern_assembly import assemble
>>> assemble(dest=Path("public"))  # doctest: +SKIP
[PosixPath('public/index.html'), ...]
"""

from __future__ import annotations

from .assembler import Assembler, assemble
from .cli import app, main
from .config import AssemblyOptions

__all__ = ["Assembler", "AssemblyOptions", "app", "assemble", "main"]
