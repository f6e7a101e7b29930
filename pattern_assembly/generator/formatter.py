"""Pretty-print rendered HTML with the configured indentation.

Only block structure is re-indented. An element whose children are all
block-level elements (or whitespace) gets one child per line; any element
holding text or phrasing content is written exactly as parsed, so the text a
browser shows never changes::

    <div><p>Hello <b>world</b>!</p></div>

becomes (with one-tab indentation)::

    <div>
        <p>Hello <b>world</b>!</p>
    </div>
"""

from __future__ import annotations

import typing as typ

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.element import NavigableString, PreformattedString, Tag
from bs4.formatter import HTMLFormatter

if typ.TYPE_CHECKING:
    from bs4.element import PageElement

    from pattern_assembly.config import BeautifierOptions

PHRASING_TAGS = frozenset(
    {
        "a", "abbr", "audio", "b", "bdi", "bdo", "br", "button", "canvas",
        "cite", "code", "data", "del", "dfn", "em", "embed", "i", "iframe",
        "img", "input", "ins", "kbd", "label", "map", "mark", "meter",
        "object", "output", "picture", "progress", "q", "ruby", "s", "samp",
        "select", "slot", "small", "span", "strong", "sub", "sup", "svg",
        "template", "textarea", "time", "u", "var", "video", "wbr",
    }
)
PRESERVED_TAGS = frozenset({"pre", "textarea", "script", "style"})


class HtmlPrettifier:
    """Re-indent the block structure of HTML documents and fragments."""

    def __init__(self, options: BeautifierOptions) -> None:
        self.options = options
        self._formatter = HTMLFormatter(
            entity_substitution=EntitySubstitution.substitute_xml,
            indent=options.indent,
        )

    def __call__(self, html: str) -> str:
        return self.prettify(html)

    def prettify(self, html: str) -> str:
        """Return ``html`` re-indented; whitespace-only input returns ``""``."""
        if not html.strip():
            return ""
        soup = BeautifulSoup(html, "html.parser")
        lines: list[str] = []
        for child in soup.contents:
            self._emit(child, 0, lines)
        return "\n".join(lines) + "\n"

    def _emit(self, element: PageElement, depth: int, lines: list[str]) -> None:
        prefix = self.options.indent * depth
        if isinstance(element, PreformattedString):
            lines.append(prefix + element.output_ready(self._formatter))
        elif isinstance(element, NavigableString):
            text = element.output_ready(self._formatter).strip()
            if text:
                lines.append(prefix + text)
        elif isinstance(element, Tag):
            if not _is_block_container(element):
                lines.append(prefix + element.decode(formatter=self._formatter))
                return
            lines.append(prefix + self._open_tag(element))
            for child in element.contents:
                self._emit(child, depth + 1, lines)
            lines.append(f"{prefix}</{element.name}>")

    def _open_tag(self, tag: Tag) -> str:
        parts = [tag.name]
        for key, value in self._formatter.attributes(tag):
            if value is None:
                parts.append(key)
                continue
            if isinstance(value, list):
                value = " ".join(value)
            quoted = EntitySubstitution.quoted_attribute_value(
                self._formatter.attribute_value(str(value))
            )
            parts.append(f"{key}={quoted}")
        return f"<{' '.join(parts)}>"


def _is_block_container(tag: Tag) -> bool:
    """Return ``True`` when every child is a block element, markup, or whitespace."""
    if tag.name in PRESERVED_TAGS or tag.name in PHRASING_TAGS:
        return False
    has_element = False
    for child in tag.contents:
        if isinstance(child, Tag):
            if child.name in PHRASING_TAGS:
                return False
            has_element = True
        elif isinstance(child, PreformattedString):
            continue
        elif isinstance(child, NavigableString) and child.strip():
            return False
    return has_element


__all__ = ["HtmlPrettifier"]
