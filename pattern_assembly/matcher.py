"""Resolve glob patterns into the source files of each input category.

Patterns follow the conventions of front-end build tools: ``**`` spans
directories, ``{a,b}`` expands to alternatives, and a leading ``!`` excludes
anything the positive patterns matched. A trailing ``/`` matches directories
only.
"""

from __future__ import annotations

import fnmatch
import glob
import re
import typing as typ
from pathlib import Path, PurePosixPath

BRACE_PATTERN = re.compile(r"\{([^{}]*)\}")
GLOB_CHARS = frozenset("*?[{")

Patterns = str | typ.Sequence[str]


def as_pattern_list(patterns: Patterns) -> list[str]:
    """Return ``patterns`` as a list, wrapping a single pattern."""
    if isinstance(patterns, str):
        return [patterns]
    return list(patterns)


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives, innermost group first."""
    match = BRACE_PATTERN.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def _normalize(path: str) -> str:
    return Path(path).as_posix()


def _split_patterns(patterns: Patterns) -> tuple[list[str], list[str]]:
    positive: list[str] = []
    negative: list[str] = []
    for pattern in as_pattern_list(patterns):
        if pattern.startswith("!"):
            negative.extend(_normalize(item) for item in expand_braces(pattern[1:]))
        else:
            positive.extend(expand_braces(pattern))
    return positive, negative


def positive_patterns(patterns: Patterns) -> list[str]:
    """Return the brace-expanded, non-negated patterns."""
    return _split_patterns(patterns)[0]


def match_files(patterns: Patterns) -> list[Path]:
    """Return the files matched by ``patterns``.

    Parameters
    ----------
    patterns : str or sequence of str
        Glob patterns relative to the working directory.

    Returns
    -------
    list[Path]
        Files in pattern order, each pattern's matches sorted, without
        duplicates and without anything an ``!`` pattern excludes.
    """
    positive, negative = _split_patterns(patterns)
    seen: set[str] = set()
    files: list[Path] = []
    for pattern in positive:
        for candidate in sorted(glob.glob(pattern, recursive=True)):
            normalized = _normalize(candidate)
            if normalized in seen or not Path(candidate).is_file():
                continue
            if any(fnmatch.fnmatchcase(normalized, rule) for rule in negative):
                continue
            seen.add(normalized)
            files.append(Path(candidate))
    return files


def match_directories(pattern: str) -> list[Path]:
    """Return the directories matched by ``pattern`` (sorted)."""
    directory_pattern = pattern if pattern.endswith("/") else f"{pattern}/"
    return [
        Path(candidate)
        for candidate in sorted(glob.glob(directory_pattern, recursive=True))
        if Path(candidate).is_dir()
    ]


def base_directory(pattern: str) -> Path:
    """Return the longest glob-free directory prefix of ``pattern``.

    >>> base_directory("src/materials/**/*").as_posix()
    'src/materials'
    """
    parts: list[str] = []
    for part in PurePosixPath(pattern.lstrip("!")).parts[:-1]:
        if GLOB_CHARS.intersection(part):
            break
        parts.append(part)
    return Path(*parts) if parts else Path()


__all__ = [
    "as_pattern_list",
    "base_directory",
    "expand_braces",
    "match_directories",
    "match_files",
    "positive_patterns",
]
