"""Utility helpers shared by the assembly configuration loader."""

from __future__ import annotations

import typing as typ

from ..errors import AssemblyConfigError
from .models import BeautifierOptions, CollectionKeys

PATTERN_FIELDS = (
    "layouts",
    "layout_includes",
    "views",
    "materials",
    "material_blocks",
    "material_partials",
    "data",
    "docs",
)
SCALAR_FIELDS = ("layout", "blocks_layout", "pygments_style")


def _as_pattern_list(value: object, *, field: str) -> list[str]:
    """Normalize a single pattern or a list of patterns into a list."""
    match value:
        case str() as pattern:
            return [pattern]
        case list() | tuple():
            return [str(item) for item in value]
        case _:
            msg = f"'{field}' must be a glob pattern or a list of patterns."
            raise AssemblyConfigError(msg)


def _as_mapping(value: object, *, field: str) -> typ.Mapping[str, typ.Any]:
    """Return ``value`` as a mapping, treating ``None`` as empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        msg = f"'{field}' must be a mapping."
        raise AssemblyConfigError(msg)
    return value


def _reject_unknown(
    payload: typ.Mapping[str, typ.Any], known: typ.Iterable[str], *, section: str
) -> None:
    unknown = sorted(set(payload) - set(known))
    if unknown:
        msg = f"Unknown {section} option(s): {', '.join(unknown)}"
        raise AssemblyConfigError(msg)


def _build_keys(payload: typ.Mapping[str, typ.Any]) -> CollectionKeys:
    """Build CollectionKeys, accepting dashed or underscored option names."""
    normalized = {key.replace("-", "_"): value for key, value in payload.items()}
    base = CollectionKeys()
    _reject_unknown(normalized, CollectionKeys.__dataclass_fields__, section="keys")
    return CollectionKeys(
        materials=str(normalized.get("materials", base.materials)),
        material_blocks=str(normalized.get("material_blocks", base.material_blocks)),
        material_partials=str(
            normalized.get("material_partials", base.material_partials)
        ),
        views=str(normalized.get("views", base.views)),
        docs=str(normalized.get("docs", base.docs)),
    )


def _build_beautifier(payload: typ.Mapping[str, typ.Any]) -> BeautifierOptions:
    """Build BeautifierOptions from the ``beautifier`` mapping."""
    base = BeautifierOptions()
    _reject_unknown(payload, BeautifierOptions.__dataclass_fields__, section="beautifier")
    try:
        indent_size = int(payload.get("indent_size", base.indent_size))
    except (TypeError, ValueError) as exc:
        msg = "'beautifier.indent_size' must be an integer."
        raise AssemblyConfigError(msg) from exc
    return BeautifierOptions(
        indent_size=indent_size,
        indent_char=str(payload.get("indent_char", base.indent_char)),
        indent_with_tabs=bool(payload.get("indent_with_tabs", base.indent_with_tabs)),
    )


__all__ = [
    "PATTERN_FIELDS",
    "SCALAR_FIELDS",
    "_as_mapping",
    "_as_pattern_list",
    "_build_beautifier",
    "_build_keys",
    "_reject_unknown",
]
