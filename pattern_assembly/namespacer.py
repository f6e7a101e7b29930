"""Namespace material fields and keep the compiled-partial registry.

Several materials may declare front-matter fields with the same name
(``title``, ``label``). All material data is merged into one rendering
context keyed by each material's namespaced id, so a fragment's own field
references are rewritten before compilation::

    {{ label }}                   ->  {{ <ns>.label }}
    {% for item in items %}       ->  {% for item in <ns>.items %}

where ``<ns>`` is the material id with dots replaced by dashes. The rewrite
happens on the parsed Jinja template tree, so attribute access
(``item.label``) and longer identifiers (``labels``) are never touched. Names
bound inside the fragment (loop targets, ``set``, macro parameters) keep their
local meaning only within the scope that binds them. The source text and front
matter stay unchanged.
"""

from __future__ import annotations

import contextlib
import typing as typ

from jinja2 import BaseLoader, TemplateNotFound, nodes
from jinja2.visitor import NodeTransformer

from .naming import namespace_id

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from jinja2 import Environment, Template


def _bound_names(targets: typ.Iterable[nodes.Node]) -> set[str]:
    """Return the names a target expression (or argument list) binds."""
    names: set[str] = set()
    for target in targets:
        if isinstance(target, nodes.Name):
            names.add(target.name)
        else:
            names.update(name.name for name in target.find_all(nodes.Name))
    return names


class FieldNamespacer(NodeTransformer):
    """Rewrite loads of ``fields`` into lookups under ``namespace``.

    Bindings are tracked per scope while walking the tree in source order: a
    loop target, macro or call-block argument, or ``with`` target shadows a
    field inside its own body only, and ``set`` shadows the loads that follow
    it in the same scope.
    """

    def __init__(self, namespace: str, fields: typ.Iterable[str]) -> None:
        self.namespace = namespace
        self.fields = frozenset(fields)
        self._scopes: list[set[str]] = [set()]

    @contextlib.contextmanager
    def _scope(self, names: typ.Iterable[str] = ()) -> cabc.Iterator[None]:
        self._scopes.append(set(names))
        try:
            yield
        finally:
            self._scopes.pop()

    def _is_shadowed(self, name: str) -> bool:
        return any(name in scope for scope in self._scopes)

    def _visit_all(self, items: list[nodes.Node]) -> list[nodes.Node]:
        return [self.visit(item) for item in items]

    def visit_Name(self, node: nodes.Name) -> nodes.Node:  # noqa: N802 - visitor API
        if node.ctx != "load" or node.name not in self.fields:
            return node
        if self._is_shadowed(node.name):
            return node
        scope = nodes.Getitem(
            nodes.ContextReference(lineno=node.lineno),
            nodes.Const(self.namespace, lineno=node.lineno),
            "load",
            lineno=node.lineno,
        )
        return nodes.Getitem(
            scope, nodes.Const(node.name, lineno=node.lineno), "load", lineno=node.lineno
        )

    def visit_For(self, node: nodes.For) -> nodes.Node:  # noqa: N802 - visitor API
        node.iter = self.visit(node.iter)
        with self._scope({*_bound_names([node.target]), "loop"}):
            if node.test is not None:
                node.test = self.visit(node.test)
            node.body = self._visit_all(node.body)
        node.else_ = self._visit_all(node.else_)
        return node

    def visit_Macro(self, node: nodes.Macro) -> nodes.Node:  # noqa: N802 - visitor API
        node.defaults = self._visit_all(node.defaults)
        with self._scope({*_bound_names(node.args), "varargs", "kwargs"}):
            node.body = self._visit_all(node.body)
        self._scopes[-1].add(node.name)
        return node

    def visit_CallBlock(self, node: nodes.CallBlock) -> nodes.Node:  # noqa: N802 - visitor API
        node.call = self.visit(node.call)
        node.defaults = self._visit_all(node.defaults)
        with self._scope({*_bound_names(node.args), "varargs", "kwargs"}):
            node.body = self._visit_all(node.body)
        return node

    def visit_With(self, node: nodes.With) -> nodes.Node:  # noqa: N802 - visitor API
        node.values = self._visit_all(node.values)
        with self._scope(_bound_names(node.targets)):
            node.body = self._visit_all(node.body)
        return node

    def visit_Block(self, node: nodes.Block) -> nodes.Node:  # noqa: N802 - visitor API
        with self._scope():
            node.body = self._visit_all(node.body)
        return node

    def visit_Assign(self, node: nodes.Assign) -> nodes.Node:  # noqa: N802 - visitor API
        node.node = self.visit(node.node)
        self._scopes[-1].update(_bound_names([node.target]))
        return node

    def visit_AssignBlock(self, node: nodes.AssignBlock) -> nodes.Node:  # noqa: N802 - visitor API
        node.body = self._visit_all(node.body)
        if node.filter is not None:
            node.filter = self.visit(node.filter)
        self._scopes[-1].update(_bound_names([node.target]))
        return node


def namespace_fields(
    environment: Environment,
    source: str,
    material_id: str,
    fields: typ.Iterable[str],
) -> nodes.Template:
    """Parse ``source`` and namespace its references to ``fields``.

    Parameters
    ----------
    environment : Environment
        Jinja environment used to parse the fragment.
    source : str
        Fragment source as written by the author.
    material_id : str
        Dotted material id; its namespaced form becomes the lookup scope.
    fields : iterable of str
        Front-matter field names owned by the material.

    Returns
    -------
    nodes.Template
        The rewritten template tree, ready for ``Environment.compile``.
    """
    tree = environment.parse(source, name=material_id)
    rewritten = FieldNamespacer(namespace_id(material_id), fields).visit(tree)
    rewritten.set_environment(environment)
    return rewritten


def compile_source(
    environment: Environment,
    source: str | nodes.Template,
    name: str | None = None,
    filename: str | None = None,
) -> Template:
    """Compile ``source`` (text or a template tree) into a named template."""
    code = environment.compile(source, name=name, filename=filename)
    return environment.template_class.from_code(
        environment, code, environment.make_globals(None), None
    )


class PartialRegistry(BaseLoader):
    """Compiled partials keyed by id, used as the environment's loader.

    Each partial is compiled exactly once at registration time. Both
    ``{% include "id" %}`` and the ``material`` helper resolve through this
    registry, so includes see the namespaced form of a material.
    """

    def __init__(self) -> None:
        self._sources: dict[str, str] = {}
        self._compiled: dict[str, Template] = {}

    def register(
        self,
        environment: Environment,
        partial_id: str,
        source: str,
        *,
        fields: typ.Iterable[str] = (),
    ) -> Template:
        """Compile and store ``source`` under ``partial_id``.

        Parameters
        ----------
        environment : Environment
            Environment whose loader is this registry.
        partial_id : str
            Name used by includes and the material helper.
        source : str
            Raw partial source.
        fields : iterable of str, optional
            Front-matter fields to namespace; empty registers the source as-is.

        Returns
        -------
        Template
            The compiled partial; a later registration under the same id
            replaces it.
        """
        field_names = list(fields)
        compiled_source: str | nodes.Template = source
        if field_names:
            compiled_source = namespace_fields(environment, source, partial_id, field_names)
        template = compile_source(environment, compiled_source, name=partial_id)
        self._sources[partial_id] = source
        self._compiled[partial_id] = template
        return template

    def get(self, partial_id: str) -> Template | None:
        """Return the compiled partial for ``partial_id`` or ``None``."""
        return self._compiled.get(partial_id)

    def __contains__(self, partial_id: object) -> bool:
        return partial_id in self._compiled

    def get_source(
        self, environment: Environment, template: str
    ) -> tuple[str, str | None, typ.Callable[[], bool] | None]:
        if template not in self._sources:
            raise TemplateNotFound(template)
        return self._sources[template], None, lambda: True

    def load(
        self,
        environment: Environment,
        name: str,
        globals: typ.MutableMapping[str, typ.Any] | None = None,  # noqa: A002 - loader API
    ) -> Template:
        template = self._compiled.get(name)
        if template is None:
            raise TemplateNotFound(name)
        return template

    def list_templates(self) -> list[str]:
        return sorted(self._compiled)


__all__ = [
    "FieldNamespacer",
    "PartialRegistry",
    "compile_source",
    "namespace_fields",
]
