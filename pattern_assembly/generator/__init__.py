"""Utilities for composing pages into layouts and writing rendered HTML."""

from .formatter import HtmlPrettifier
from .layout import BodyMarkerExtension, wrap_page
from .page_generator import PageCompositor, PageSource
from .renderer import MarkdownRenderer

__all__ = [
    "BodyMarkerExtension",
    "HtmlPrettifier",
    "MarkdownRenderer",
    "PageCompositor",
    "PageSource",
    "wrap_page",
]
