r"""Derive identifiers and display names from source file paths.

Materials, views, layouts, and data files are all addressed by names derived
from their filenames. Ordering prefixes (``01-``, ``2.``) let authors control
directory listings without leaking into identifiers.

Example
-------
>>> from pattern_assembly.naming import get_name, to_title_case
>>> get_name("src/materials/components/02-primary button.html")
'primary-button'
>>> get_name("src/materials/components/02-primary.html", preserve_ordering=True)
'02-primary'
>>> to_title_case("primary-button")
'Primary Button'
"""

from __future__ import annotations

import re
from pathlib import PurePath

WHITESPACE_PATTERN = re.compile(r"\s")
ORDERING_PREFIX_PATTERN = re.compile(r"^[0-9.\-]+")
SEGMENT_ORDERING_PATTERN = re.compile(r"(^|\.)(?:\d+[-.])+")
TITLE_SEPARATOR_PATTERN = re.compile(r"[-_]")
WORD_PATTERN = re.compile(r"\w\S*")


def dir_name(name: str, *, preserve_ordering: bool = False) -> str:
    """Normalize a directory name, replacing whitespace with dashes."""
    normalized = WHITESPACE_PATTERN.sub("-", name)
    if preserve_ordering:
        return normalized
    return ORDERING_PREFIX_PATTERN.sub("", normalized)


def get_name(path: str | PurePath, *, preserve_ordering: bool = False) -> str:
    """Return the filename of ``path`` without its extension.

    Parameters
    ----------
    path : str or PurePath
        Path to a source file.
    preserve_ordering : bool, optional
        Keep a leading run of digits, dots, and dashes when ``True``.

    Returns
    -------
    str
        The stem with whitespace replaced by dashes and, unless preserved, the
        ordering prefix removed.
    """
    return dir_name(PurePath(path).stem, preserve_ordering=preserve_ordering)


def to_title_case(text: str) -> str:
    """Convert a dashed or underscored identifier into a display title."""
    spaced = TITLE_SEPARATOR_PATTERN.sub(" ", text)
    return WORD_PATTERN.sub(lambda match: match.group(0).capitalize(), spaced)


def namespace_id(material_id: str) -> str:
    """Return the context key under which a material's data is exposed."""
    return material_id.replace(".", "-")


def strip_ordering(name: str) -> str:
    """Remove ordering prefixes from every dotted segment of ``name``.

    Partials are registered without ordering prefixes, so helper calls such as
    ``material("02-buttons.01-primary")`` resolve to ``buttons.primary``.
    """
    return SEGMENT_ORDERING_PATTERN.sub(r"\1", name)


__all__ = [
    "dir_name",
    "get_name",
    "namespace_id",
    "strip_ordering",
    "to_title_case",
]
