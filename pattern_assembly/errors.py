"""Error types and the single error-handling policy for assembly runs."""

from __future__ import annotations

import logging
import sys
import traceback
import typing as typ

from ._constants import ERROR_LABEL

if typ.TYPE_CHECKING:
    from .config import AssemblyOptions

logger = logging.getLogger(__name__)


class AssemblyError(RuntimeError):
    """Raised when a source tree cannot be assembled."""


class FrontMatterError(AssemblyError):
    """Raised when a file's metadata header cannot be parsed."""


class LayoutNotFoundError(AssemblyError):
    """Raised when a page names a layout that was not read."""


class MaterialNotFoundError(AssemblyError):
    """Raised when a template asks for a material that was never registered."""


class AssemblyConfigError(AssemblyError, ValueError):
    """Raised when the assembly configuration is invalid or incomplete."""


def handle_error(exc: BaseException, options: AssemblyOptions) -> None:
    """Route a setup or assembly failure through the configured policy.

    Parameters
    ----------
    exc : BaseException
        The failure raised while reading sources or rendering pages.
    options : AssemblyOptions
        Options providing ``on_error`` and ``log_errors``.

    Raises
    ------
    SystemExit
        When neither an error callback nor error logging is configured.

    Notes
    -----
    A configured ``on_error`` callback takes precedence over logging. Files
    written before the failure are left on disk.
    """
    if callable(options.on_error):
        options.on_error(exc)
        return
    if options.log_errors:
        logger.error("Error (%s): %s", ERROR_LABEL, exc, exc_info=exc)
        return
    print(f"Error ({ERROR_LABEL}): {exc}", file=sys.stderr)
    traceback.print_exception(exc, file=sys.stderr)
    raise SystemExit(1) from exc


__all__ = [
    "AssemblyConfigError",
    "AssemblyError",
    "FrontMatterError",
    "LayoutNotFoundError",
    "MaterialNotFoundError",
    "handle_error",
]
