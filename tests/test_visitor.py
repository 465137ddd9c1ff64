"""Tests for the AST visitor and transform utilities."""

import pytest

from tessera import parse
from tessera.location import SourceLocation
from tessera.nodes import (
    Binary,
    BooleanLiteral,
    For,
    Grouped,
    Identifier,
    If,
    Member,
    Node,
    NumberLiteral,
    Program,
    StringLiteral,
    Ternary,
    Text,
    This,
    Unary,
)
from tessera.visitor import BaseVisitor, iter_children, transform

LOC = SourceLocation(lineno=1, col_offset=1)


# =============================================================================
# Visitor dispatch tests
# =============================================================================


class NodeCollector(BaseVisitor[None]):
    """Collects all visited node type names."""

    def __init__(self) -> None:
        self.visited: list[str] = []

    def visit_default(self, node: Node) -> None:
        self.visited.append(type(node).__name__)


class NameCollector(BaseVisitor[None]):
    """Collects the variables a template reads."""

    def __init__(self) -> None:
        self.names: set[str] = set()

    def visit_identifier(self, node: Identifier) -> None:
        if not node.callable:
            self.names.add(node.name)


class TestVisitorDispatch:
    """Every node type dispatches to its visit_* method."""

    def test_visit_order_is_source_order(self) -> None:
        collector = NodeCollector()
        collector.visit(parse("{{ if a }}X{{ else if b }}Y{{ end }}"))
        assert collector.visited == [
            "Program",
            "If",
            "Identifier",
            "Text",
            "If",
            "Identifier",
            "Text",
        ]

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("{{ 1 }}", "NumberLiteral"),
            ('{{ "s" }}', "StringLiteral"),
            ("{{ true }}", "BooleanLiteral"),
            ("{{ this }}", "This"),
            ("{{ -x }}", "Unary"),
            ("{{ a * b }}", "Binary"),
            ("{{ a ? b : c }}", "Ternary"),
            ("{{ (a) }}", "Grouped"),
            ("{{ a.b }}", "Member"),
            ("{{ for x of xs }}{{ end }}", "For"),
        ],
    )
    def test_visits_each_node_type(self, source: str, expected: str) -> None:
        collector = NodeCollector()
        collector.visit(parse(source))
        assert expected in collector.visited

    def test_specific_method_overrides_default(self) -> None:
        collector = NameCollector()
        collector.visit(
            parse(
                "{{ for item of items }}{{ format(item.price, digits) }}{{ end }}"
                "{{ if user }}{{ user.name }}{{ else }}{{ guest ? 'a' : other }}{{ end }}"
            )
        )
        assert collector.names == {
            "item",
            "items",
            "price",
            "digits",
            "user",
            "name",
            "guest",
            "other",
        }

    def test_visit_returns_dispatch_result(self) -> None:
        class Namer(BaseVisitor[str]):
            def visit_default(self, node: Node) -> str:
                return type(node).__name__

        assert Namer().visit(Program((Text("x"),))) == "Program"


class TestIterChildren:
    """Direct children in source order."""

    def test_leaves_have_no_children(self) -> None:
        for leaf in (Text("x"), NumberLiteral(1), StringLiteral("s"), BooleanLiteral(True), This()):
            assert list(iter_children(leaf)) == []

    def test_if_with_else_body(self) -> None:
        node = If(Identifier("a"), (Text("x"),), (Text("y"), Text("z")))
        assert list(iter_children(node)) == [
            Identifier("a"),
            Text("x"),
            Text("y"),
            Text("z"),
        ]

    def test_if_with_else_if(self) -> None:
        nested = If(Identifier("b"))
        node = If(Identifier("a"), (), nested)
        assert list(iter_children(node)) == [Identifier("a"), nested]

    def test_call_arguments(self) -> None:
        node = Identifier("f", callable=True, args=(NumberLiteral(1), NumberLiteral(2)))
        assert list(iter_children(node)) == [NumberLiteral(1), NumberLiteral(2)]

    def test_for(self) -> None:
        node = For(Identifier("x"), Identifier("xs"), (Text("t"),))
        assert list(iter_children(node)) == [Identifier("x"), Identifier("xs"), Text("t")]


# =============================================================================
# Transform tests
# =============================================================================


def _fold_addition(node: Node) -> Node:
    match node:
        case Binary("+", NumberLiteral(a), NumberLiteral(b)):
            return NumberLiteral(a + b, location=node.location)
    return node


class TestTransform:
    """Bottom-up immutable rewriting."""

    def test_identity_keeps_structure(self) -> None:
        program = parse("a{{ if x }}{{ y.z[0] }}{{ else }}{{ -w }}{{ end }}")
        assert transform(program, lambda n: n) == program

    def test_constant_folding_is_bottom_up(self) -> None:
        program = parse("{{ 1 + 2 + 3 }}")
        assert transform(program, _fold_addition).children == (NumberLiteral(6),)

    def test_original_untouched(self) -> None:
        program = parse("{{ 1 + 2 }}")
        transform(program, _fold_addition)
        assert isinstance(program.children[0], Binary)

    def test_rewrite_inside_nested_blocks(self) -> None:
        program = parse("{{ for x of xs }}{{ if a }}{{ 1 + 1 }}{{ else if b }}{{ 2 + 2 }}{{ end }}{{ end }}")
        (loop,) = transform(program, _fold_addition).children
        inner = loop.body[0]
        assert inner.body == (NumberLiteral(2),)
        assert inner.else_block.body == (NumberLiteral(4),)

    def test_rewrite_call_args_and_ternary(self) -> None:
        program = parse("{{ f(1 + 1, c ? 2 + 2 : (3 + 3)) }}")
        (call,) = transform(program, _fold_addition).children
        assert call.args == (
            NumberLiteral(2),
            Ternary(Identifier("c"), NumberLiteral(4), Grouped(NumberLiteral(6))),
        )

    def test_rename_identifiers(self) -> None:
        def rename(node: Node) -> Node:
            if isinstance(node, Identifier) and node.name == "old":
                return Identifier("new", node.callable, node.args, location=node.location)
            return node

        program = parse("{{ old.name }}{{ !old }}")
        assert transform(program, rename).children == (
            Member(Identifier("new"), Identifier("name")),
            Unary("!", Identifier("new")),
        )

    def test_locations_preserved(self) -> None:
        program = parse("\n{{ 1 + 2 }}")
        (folded,) = transform(program, _fold_addition).children
        assert folded.location.lineno == 2

    def test_remove_text_nodes(self) -> None:
        program = parse("a{{ x }}b{{ if y }}c{{ else }}d{{ end }}")
        stripped = transform(program, lambda n: None if isinstance(n, Text) else n)
        assert stripped.children == (Identifier("x"), If(Identifier("y"), (), ()))

    def test_remove_call_argument(self) -> None:
        program = parse("{{ f(a, 1, b) }}")
        result = transform(
            program, lambda n: None if isinstance(n, NumberLiteral) else n
        )
        assert result.children == (
            Identifier("f", callable=True, args=(Identifier("a"), Identifier("b"))),
        )

    def test_removing_required_child_raises(self) -> None:
        program = parse("{{ a + 1 }}")
        with pytest.raises(TypeError, match="cannot remove required NumberLiteral from Binary"):
            transform(program, lambda n: None if isinstance(n, NumberLiteral) else n)

    def test_removing_root_raises(self) -> None:
        with pytest.raises(TypeError):
            transform(Program((), location=LOC), lambda n: None)

    def test_root_must_stay_program(self) -> None:
        with pytest.raises(TypeError):
            transform(Program((Text("x"),)), lambda n: Text("y") if isinstance(n, Program) else n)
