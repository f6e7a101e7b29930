"""Shared fixtures that build throwaway pattern-library source trees.

Every fixture here works inside ``tmp_path`` and changes the working
directory into it, because glob patterns and output paths resolve relative to
the current directory just as they do for the ``assemble`` CLI.
"""

from __future__ import annotations

import typing as typ

import pytest

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

WriteTree = typ.Callable[[typ.Mapping[str, str]], None]

DEFAULT_LAYOUT = """<!DOCTYPE html>
<html>
<head><title>{{ title }}</title></head>
<body>
<main>{% body %}</main>
</body>
</html>
"""

BLOCKS_LAYOUT = """<div class="block">{% body %}</div>
<pre class="markup">{{ block_markup }}</pre>
<h1 class="block-name">{{ name }}</h1>
"""

SITE_FILES: dict[str, str] = {
    "src/views/layouts/default.html": DEFAULT_LAYOUT,
    "src/views/layouts/blocks.html": BLOCKS_LAYOUT,
    "src/views/layouts/includes/nav.html": "<nav>{{ site.name }}</nav>\n",
    "src/data/site.yml": "name: Pattern Lab\n",
    "src/materials/components/01-button.html": (
        "---\nlabel: Click\nnotes: The primary **action**.\n---\n\n"
        "<button>{{ label }}</button>\n"
    ),
    "src/materials/components/badge.html": "<span>{{ text }}</span>\n",
    "src/materials/components/forms/input.html": (
        '---\nplaceholder: Email\n---\n<input placeholder="{{ placeholder }}">\n'
    ),
    "src/views/index.html": (
        "---\ntitle: Home\nlabel: Override\n---\n"
        '{% include "nav" %}\n'
        '<section id="material">{{ material("button") }}</section>\n'
        '<section id="namespaced">{{ button.label }}</section>\n'
        '<section id="own">{{ label }}</section>\n'
        '<section id="input">{{ material("forms.input") }}</section>\n'
    ),
    "src/views/pages/about.html": (
        "---\ntitle: About\n---\n<p id=\"base\">{{ baseurl }}</p>\n"
    ),
    "src/material-blocks/02-alert.html": (
        '---\ntone: warning\n---\n<div class="alert">{{ tone }}</div>\n'
    ),
}


@pytest.fixture
def site_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return an empty project root and make it the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def write_tree(site_root: Path) -> WriteTree:
    """Return a function writing ``{relative path: text}`` under the root."""

    def _write(files: cabc.Mapping[str, str]) -> None:
        for relative, text in files.items():
            path = site_root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")

    return _write


@pytest.fixture
def site(write_tree: WriteTree, site_root: Path) -> Path:
    """Write the representative pattern library and return its root."""
    write_tree(SITE_FILES)
    return site_root
