"""Classify material files into top-level collections and sub-collections.

A material's immediate parent directory is its collection. When the
grandparent directory is itself one of the top-level collection directories
(the directories directly below a pattern's base directory), the file belongs
to a sub-collection of that grandparent instead. Deeper nesting collapses onto
this two-level model.

Sub-collection names must not collide with top-level collection names: only
directory basenames are compared, so ``components/buttons`` and a top-level
``buttons`` are indistinguishable.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .matcher import base_directory, match_directories, positive_patterns
from .naming import dir_name

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .matcher import Patterns


@dc.dataclass(slots=True, frozen=True)
class Classification:
    """Where a material file sits in the two-level collection tree.

    Attributes
    ----------
    collection : str
        Name of the file's immediate parent directory.
    parent : str or None
        Name of the grandparent directory, if any.
    is_sub_collection : bool
        ``True`` when ``collection`` is nested inside the top-level
        collection ``parent``.
    """

    collection: str
    parent: str | None
    is_sub_collection: bool

    @property
    def base(self) -> str:
        """Return the key of the top-level node the file belongs under."""
        if self.is_sub_collection and self.parent is not None:
            return self.parent
        return self.collection


class CollectionClassifier:
    """Assign files to collections using the known top-level directories."""

    def __init__(self, top_level: typ.Iterable[str]) -> None:
        self.top_level = frozenset(top_level)

    @classmethod
    def from_patterns(cls, patterns: Patterns) -> CollectionClassifier:
        """Build a classifier by listing the directories below each base dir."""
        names: set[str] = set()
        for pattern in positive_patterns(patterns):
            root = base_directory(pattern)
            for directory in match_directories(f"{root.as_posix()}/*/"):
                names.add(dir_name(directory.name, preserve_ordering=True))
        return cls(names)

    def classify(self, path: Path) -> Classification:
        """Return the collection placement of ``path``."""
        directory = path.parent
        collection = dir_name(directory.name, preserve_ordering=True)
        grandparent = directory.parent.name
        parent = dir_name(grandparent, preserve_ordering=True) if grandparent else None
        return Classification(
            collection=collection,
            parent=parent,
            is_sub_collection=parent is not None and parent in self.top_level,
        )


__all__ = ["Classification", "CollectionClassifier"]
