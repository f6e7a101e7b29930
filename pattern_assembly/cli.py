"""Cyclopts CLI entrypoint for assembling a pattern library.

The ``assemble`` console script defined here reads an optional YAML
configuration, indexes materials, views, layouts, data, and docs, and writes
the rendered HTML pages. Typical usage is ``assemble build`` from the project
root, or ``assemble build --config assemble.yaml --dest public`` in CI.

Examples
--------
Assemble with the default source layout:

>>> from pattern_assembly.cli import main
>>> main()  # doctest: +SKIP

Assemble into a custom directory, logging failures instead of exiting:

>>> from pattern_assembly.cli import app
>>> app(["build", "--dest", "public", "--log-errors"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .assembler import Assembler
from .config import AssemblyOptions, load_assembly_options

app = App(name="assemble", config=cyclopts.config.Env("ASSEMBLE_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the path as given."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


@app.command(help="Render views and material blocks into HTML pages.")
def build(
    *,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to the assembly config", env_var="ASSEMBLE_CONFIG"),
    ] = None,
    dest: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="ASSEMBLE_DEST"),
    ] = None,
    log_errors: typ.Annotated[
        bool, Parameter(help="Log failures instead of exiting")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Log each assembly phase")] = False,
) -> None:
    """Assemble the pattern library described by ``config``.

    Parameters
    ----------
    config : Path or None, optional
        YAML configuration file; built-in defaults apply when ``None``.
    dest : Path or None, optional
        Output directory overriding the configured ``dest``.
    log_errors : bool, optional
        Log failures and continue instead of exiting with status 1.
    verbose : bool, optional
        Enable debug logging for each assembly phase.

    Returns
    -------
    None
        Writes rendered pages and prints each written path.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format="%(message)s"
    )
    overrides: dict[str, typ.Any] = {}
    if dest is not None:
        overrides["dest"] = dest
    if log_errors:
        overrides["log_errors"] = True

    if config is not None:
        options = load_assembly_options(config, **overrides)
    else:
        options = AssemblyOptions(**overrides)

    for path in Assembler(options).run():
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``assemble`` command."""
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
