"""Typed AST - list the variables a template reads before rendering it."""

from tessera import parse
from tessera.nodes import Identifier, Member
from tessera.visitor import BaseVisitor


class VariableCollector(BaseVisitor[None]):
    """Collect top-level variable names (not properties, not functions)."""

    def __init__(self) -> None:
        self.names: set[str] = set()
        self._properties: set[int] = set()
        self._loop_vars: set[str] = set()

    def visit_member(self, node: Member) -> None:
        if not node.computed:
            self._properties.add(id(node.prop))

    def visit_for(self, node) -> None:  # type: ignore[no-untyped-def]
        self._loop_vars.add(node.variable.name)

    def visit_identifier(self, node: Identifier) -> None:
        if node.callable or id(node) in self._properties:
            return
        if node.name not in self._loop_vars:
            self.names.add(node.name)


source = """\
<h1>{{ title }}</h1>
{{ if user.admin }}<a href="{{ url('admin') }}">Admin</a>{{ end }}
<ul>
{{ for item of items }}  <li>{{ item.name }}: {{ format(item.price, currency) }}</li>
{{ end }}</ul>
"""

collector = VariableCollector()
collector.visit(parse(source))

print("Template context needs:", ", ".join(sorted(collector.names)))
