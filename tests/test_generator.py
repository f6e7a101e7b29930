"""Tests for layout wrapping, HTML formatting, and markdown rendering."""

from __future__ import annotations

import pytest
from bs4 import BeautifulSoup
from jinja2 import Environment

from pattern_assembly.config import AssemblyOptions, BeautifierOptions
from pattern_assembly.generator import (
    BodyMarkerExtension,
    HtmlPrettifier,
    MarkdownRenderer,
    wrap_page,
)
from pattern_assembly.helpers import register_helpers
from pattern_assembly.namespacer import PartialRegistry


@pytest.mark.parametrize("marker", ["{% body %}", "{%body%}", "{%   body   %}"])
def test_wrap_page_replaces_marker(marker: str) -> None:
    """Any spacing inside the marker is accepted."""
    assert wrap_page("<p>x</p>", f"<main>{marker}</main>") == "<main><p>x</p></main>"


@pytest.mark.parametrize("page", ["", "<p>x</p>", "{{ title }}"])
def test_wrap_page_without_marker_returns_layout(page: str) -> None:
    """Layouts without a marker are used unchanged."""
    assert wrap_page(page, "<main></main>") == "<main></main>"


def test_wrap_page_replaces_first_marker_only() -> None:
    """Only the first marker receives the page."""
    assert wrap_page("X", "{% body %}|{% body %}") == "X|{% body %}"


def test_wrap_page_inserts_backslashes_literally() -> None:
    """Page text is never treated as a substitution template."""
    assert wrap_page(r"\1 \g<0>", "[{% body %}]") == r"[\1 \g<0>]"


def test_leftover_markers_render_empty() -> None:
    """Markers that survive wrapping compile and produce no output."""
    environment = Environment(extensions=[BodyMarkerExtension])
    assert environment.from_string("a{% body %}b").render() == "ab"


def test_indent_follows_options() -> None:
    """Tabs win over the configured character when enabled."""
    assert BeautifierOptions().indent == "\t"
    assert BeautifierOptions(indent_size=2, indent_with_tabs=False, indent_char=" ").indent == (
        "  "
    )
    assert BeautifierOptions(indent_size=2, indent_with_tabs=True, indent_char=" ").indent == (
        "\t\t"
    )


def test_prettifier_indents_nested_markup() -> None:
    """Nested elements are indented with the configured string."""
    tabs = HtmlPrettifier(BeautifierOptions())
    spaces = HtmlPrettifier(
        BeautifierOptions(indent_size=2, indent_with_tabs=False, indent_char=" ")
    )
    assert "\n\t<p>" in tabs("<div><p>x</p></div>")
    assert "\n  <p>" in spaces("<div><p>x</p></div>")


def test_prettifier_returns_empty_for_blank_input() -> None:
    """Whitespace-only fragments format to nothing."""
    assert HtmlPrettifier(BeautifierOptions())("  \n ") == ""


def test_markdown_labels_code_blocks() -> None:
    """Highlighted fences carry their language for styling."""
    html = MarkdownRenderer()("Intro\n\n```python\nprint(1)\n```\n")
    assert 'data-language="python"' in html
    assert "<p>Intro</p>" in html


def test_markdown_blank_input() -> None:
    """Blank notes render as an empty string."""
    assert MarkdownRenderer()("   ") == ""


def test_markdown_stylesheet_targets_codehilite() -> None:
    """The highlight stylesheet is scoped to code blocks."""
    assert ".codehilite" in MarkdownRenderer("monokai").stylesheet


def test_registered_helpers_format_and_serialize() -> None:
    """``pretty_html`` and ``to_json`` are installed as safe template globals."""
    options = AssemblyOptions(helpers={"shout": str.upper})
    prettifier = HtmlPrettifier(options.beautifier)
    environment = Environment(autoescape=True)
    helper = register_helpers(environment, options, PartialRegistry(), prettifier)
    assert environment.globals["material"] is helper
    rendered = environment.from_string(
        '{{ pretty_html("<div><p>x</p></div>") }}|{{ to_json({"a": 1}) }}|{{ shout("hi") }}'
    ).render()
    pretty, serialized, shouted = rendered.split("|")
    assert "\n\t<p>" in pretty
    assert serialized == '{"a": 1}'
    assert shouted == "HI"


def test_prettifier_keeps_inline_text_intact() -> None:
    """Phrasing content stays on one line so visible text is unchanged."""
    source = (
        "<div><p>Hello <b>world</b>!</p>"
        '<p><span>$</span><span>5</span>, <a href="#">link</a>.</p></div>'
    )
    html = HtmlPrettifier(BeautifierOptions())(source)
    assert "\n\t<p>Hello <b>world</b>!</p>\n" in html
    before = [p.get_text() for p in BeautifulSoup(source, "html.parser").find_all("p")]
    after = [p.get_text() for p in BeautifulSoup(html, "html.parser").find_all("p")]
    assert after == before == ["Hello world!", "$5, link."]


def test_prettifier_keeps_attributes_and_doctype() -> None:
    """Block containers are re-emitted with their attributes."""
    html = HtmlPrettifier(BeautifierOptions())(
        '<!DOCTYPE html><html lang="en"><body class="a b"><main><p>x</p></main></body></html>'
    )
    assert html.splitlines() == [
        "<!DOCTYPE html>",
        '<html lang="en">',
        '\t<body class="a b">',
        "\t\t<main>",
        "\t\t\t<p>x</p>",
        "\t\t</main>",
        "\t</body>",
        "</html>",
    ]
