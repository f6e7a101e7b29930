"""Load assembly configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from ..errors import AssemblyConfigError
from .helpers import (
    PATTERN_FIELDS,
    SCALAR_FIELDS,
    _as_mapping,
    _as_pattern_list,
    _build_beautifier,
    _build_keys,
    _reject_unknown,
)
from .models import AssemblyOptions

KNOWN_FIELDS = (*PATTERN_FIELDS, *SCALAR_FIELDS, "keys", "dest", "beautifier", "log_errors")


def load_assembly_options(path: Path, **overrides: typ.Any) -> AssemblyOptions:
    """Load the YAML configuration describing source patterns and output.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``assemble.yaml``).
    **overrides : Any
        Field values applied on top of the loaded options; used by the CLI
        and for options YAML cannot express such as ``on_error``.

    Returns
    -------
    AssemblyOptions
        Options with defaults applied for every field the file omits.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    AssemblyConfigError
        If the file contains unknown options or values of the wrong shape.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> options = load_assembly_options(Path("assemble.yaml"))  # doctest: +SKIP
    >>> options.dest  # doctest: +SKIP
    PosixPath('dist')
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = {
        str(key).replace("-", "_"): value for key, value in loaded.items()
    }
    _reject_unknown(raw, KNOWN_FIELDS, section="assembly")

    values: dict[str, typ.Any] = {}
    for field in PATTERN_FIELDS:
        if field in raw:
            values[field] = _as_pattern_list(raw[field], field=field)
    for field in SCALAR_FIELDS:
        if field in raw:
            values[field] = str(raw[field])
    if "keys" in raw:
        values["keys"] = _build_keys(_as_mapping(raw["keys"], field="keys"))
    if "beautifier" in raw:
        values["beautifier"] = _build_beautifier(
            _as_mapping(raw["beautifier"], field="beautifier")
        )
    if "dest" in raw:
        values["dest"] = Path(str(raw["dest"]))
    if "log_errors" in raw:
        values["log_errors"] = bool(raw["log_errors"])

    values.update(overrides)
    try:
        return AssemblyOptions(**values)
    except TypeError as exc:
        msg = f"Invalid assembly option override: {exc}"
        raise AssemblyConfigError(msg) from exc


__all__ = ["load_assembly_options"]
