"""Template helpers exposed to material, view, and layout authors.

``material``
    Render a registered material by name with the merged context, e.g.
    ``{{ material("buttons.primary", {"size": "lg"}, label="Go") }}``. The
    helper's name is the singular of the configured materials key.
``to_json``
    Serialize a value to JSON, e.g. ``{{ to_json(button) }}``.
``pretty_html``
    Re-indent a fragment of HTML with the configured formatter options.
``material_data``
    Look up a material's front matter by dotted id, e.g.
    ``{{ material_data("forms.input").placeholder }}``; dashed namespace keys
    such as ``forms-input`` cannot be written as Jinja expressions.
"""

from __future__ import annotations

import json
import typing as typ

from jinja2 import pass_context
from markupsafe import Markup

from .errors import AssemblyError, MaterialNotFoundError
from .naming import namespace_id, strip_ordering

if typ.TYPE_CHECKING:
    from jinja2 import Environment
    from jinja2.runtime import Context

    from .config import AssemblyOptions
    from .context import ContextBuilder
    from .generator import HtmlPrettifier
    from .namespacer import PartialRegistry


class MaterialHelper:
    """Callable template global rendering materials from the registry.

    The context builder is attached once the source tree is indexed; the
    helper is registered before that so user templates can reference it.
    """

    def __init__(self, registry: PartialRegistry, prettifier: HtmlPrettifier) -> None:
        self.registry = registry
        self.prettifier = prettifier
        self.context_builder: ContextBuilder | None = None

    def __call__(
        self,
        name: str,
        context: typ.Mapping[str, typ.Any] | None = None,
        **extra: typ.Any,
    ) -> Markup:
        """Render material ``name`` and return formatted, safe markup.

        Raises
        ------
        MaterialNotFoundError
            If no partial is registered under the normalized name.
        AssemblyError
            If called before the source tree has been indexed.
        """
        partial_id = strip_ordering(name)
        template = self.registry.get(partial_id)
        if template is None:
            msg = f"Material '{name}' is not registered (looked up '{partial_id}')."
            raise MaterialNotFoundError(msg)
        if self.context_builder is None:
            msg = "Materials cannot be rendered before the source tree is indexed."
            raise AssemblyError(msg)
        html = template.render(self.context_builder.build(context, extra)).lstrip()
        return Markup(self.prettifier(html))


def to_json(value: object) -> Markup:
    """Return ``value`` serialized as JSON markup."""
    return Markup(json.dumps(value, default=_json_default))


@pass_context
def material_data(context: Context, name: str) -> typ.Any:
    """Return the front matter of material ``name`` from the render context."""
    return context.get(namespace_id(strip_ordering(name)), {})


def _json_default(value: object) -> object:
    """Serialize dataclass nodes and other objects for ``to_json``."""
    fields = getattr(value, "__dataclass_fields__", None)
    if fields is not None:
        return {name: getattr(value, name) for name in fields}
    return str(value)


def register_helpers(
    environment: Environment,
    options: AssemblyOptions,
    registry: PartialRegistry,
    prettifier: HtmlPrettifier,
) -> MaterialHelper:
    """Install the built-in and user helpers as template globals.

    Returns
    -------
    MaterialHelper
        The material helper, so the caller can attach the context builder.
    """
    material = MaterialHelper(registry, prettifier)
    environment.globals.update(options.helpers)
    environment.globals["to_json"] = to_json
    environment.globals["pretty_html"] = lambda content: Markup(prettifier(str(content)))
    environment.globals["material_data"] = material_data
    environment.globals[options.keys.material_helper] = material
    return material


__all__ = ["MaterialHelper", "material_data", "register_helpers", "to_json"]
