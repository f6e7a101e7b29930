r"""Read a source file's YAML metadata header and trimmed body.

Example
-------
>>> from pattern_assembly.front_matter import parse_front_matter
>>> matter = parse_front_matter("---\nlabel: Click\n---\n\n<button>{{ label }}</button>\n")
>>> matter.data, matter.content
({'label': 'Click'}, '<button>{{ label }}</button>')
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ._constants import NOTES_FIELD
from .errors import FrontMatterError

FRONT_MATTER_PATTERN = re.compile(
    r"\A---[ \t]*\r?\n(?:(.*?)\r?\n)?---[ \t]*(?:\r?\n|\Z)", re.DOTALL
)
BLANK_EDGES_PATTERN = re.compile(r"^(\s*(\r?\n|\r))+|(\s*(\r?\n|\r))+$")
BYTE_ORDER_MARK = "\ufeff"


@dc.dataclass(slots=True, frozen=True)
class FrontMatter:
    """Metadata header and body of one source file.

    Attributes
    ----------
    data : dict[str, Any]
        Parsed header mapping; empty when the file has no header.
    content : str
        Body with leading and trailing blank lines removed.
    path : Path or None
        Source file, when read from disk.
    """

    data: dict[str, typ.Any]
    content: str
    path: Path | None = None

    @property
    def notes(self) -> str:
        """Return the raw markdown of the reserved ``notes`` field."""
        value = self.data.get(NOTES_FIELD)
        return str(value) if value else ""

    @property
    def local_data(self) -> dict[str, typ.Any]:
        """Return a copy of the header without the reserved ``notes`` field."""
        return {key: value for key, value in self.data.items() if key != NOTES_FIELD}


def trim_blank_lines(text: str) -> str:
    """Strip blank lines from both ends of ``text``, keeping indentation."""
    return BLANK_EDGES_PATTERN.sub("", text)


def _load_yaml(text: str) -> object:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader.load(text)


def parse_front_matter(text: str, *, path: Path | None = None) -> FrontMatter:
    """Split ``text`` into a metadata mapping and a trimmed body.

    Raises
    ------
    FrontMatterError
        If the header is not valid YAML or does not describe a mapping.
    """
    text = text.removeprefix(BYTE_ORDER_MARK)
    match = FRONT_MATTER_PATTERN.match(text)
    if match is None:
        return FrontMatter(data={}, content=trim_blank_lines(text), path=path)

    label = str(path) if path else "<string>"
    try:
        loaded = _load_yaml(match.group(1) or "")
    except YAMLError as exc:
        msg = f"Malformed front matter in {label}: {exc}"
        raise FrontMatterError(msg) from exc
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        msg = f"Front matter in {label} must be a mapping."
        raise FrontMatterError(msg)
    body = text[match.end() :]
    return FrontMatter(data=dict(loaded), content=trim_blank_lines(body), path=path)


def read_front_matter(path: Path) -> FrontMatter:
    """Read ``path`` as UTF-8 and parse its front matter."""
    return parse_front_matter(path.read_text(encoding="utf-8"), path=path)


def read_data_file(path: Path) -> object:
    """Parse a JSON or YAML data document; YAML 1.2 accepts both."""
    try:
        return _load_yaml(path.read_text(encoding="utf-8"))
    except YAMLError as exc:
        msg = f"Malformed data file {path}: {exc}"
        raise FrontMatterError(msg) from exc


__all__ = [
    "FrontMatter",
    "parse_front_matter",
    "read_data_file",
    "read_front_matter",
    "trim_blank_lines",
]
