"""Load and validate assembly configuration for pattern-library builds.

This subpackage parses an ``assemble.yaml`` file, applies defaults for every
omitted option, and produces the :class:`AssemblyOptions` dataclass the
assembler consumes. The primary entry point is :func:`load_assembly_options`.

Examples
--------
>>> from pathlib import Path
>>> from pattern_assembly.config import load_assembly_options
>>> options = load_assembly_options(Path("assemble.yaml"))  # doctest: +SKIP
>>> options.keys.materials  # doctest: +SKIP
'materials'
"""

from ..errors import AssemblyConfigError
from .loader import load_assembly_options
from .models import AssemblyOptions, BeautifierOptions, CollectionKeys

__all__ = [
    "AssemblyConfigError",
    "AssemblyOptions",
    "BeautifierOptions",
    "CollectionKeys",
    "load_assembly_options",
]
