r"""Insert page content into layouts at the body marker.

Example
-------
>>> from pattern_assembly.generator.layout import wrap_page
>>> wrap_page("<p>Hi</p>", "<main>{% body %}</main>")
'<main><p>Hi</p></main>'
>>> wrap_page("<p>Hi</p>", "<main></main>")
'<main></main>'
"""

from __future__ import annotations

import typing as typ

from jinja2 import nodes
from jinja2.ext import Extension

from pattern_assembly._constants import BODY_MARKER_PATTERN

if typ.TYPE_CHECKING:
    from jinja2.parser import Parser


def wrap_page(page: str, layout: str) -> str:
    """Replace the first body marker in ``layout`` with ``page``.

    Parameters
    ----------
    page : str
        Page source to insert.
    layout : str
        Layout source containing a ``{% body %}`` marker.

    Returns
    -------
    str
        The combined source. A layout without a marker is returned unchanged
        and the page content is dropped.
    """
    if BODY_MARKER_PATTERN.search(layout) is None:
        return layout
    return BODY_MARKER_PATTERN.sub(lambda _match: page, layout, count=1)


class BodyMarkerExtension(Extension):
    """Treat body markers left in a compiled layout as empty output."""

    tags = {"body"}  # noqa: RUF012 - jinja2 extension API

    def parse(self, parser: Parser) -> nodes.Node:
        lineno = next(parser.stream).lineno
        return nodes.Output([], lineno=lineno)


__all__ = ["BodyMarkerExtension", "wrap_page"]
