"""AST Visitor and Transformer for Tessera.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen ASTs. A renderer is typically a
visitor that evaluates nodes against a data context.

Example (collect every variable a template reads):

    class NameCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.names: set[str] = set()

        def visit_identifier(self, node: Identifier) -> None:
            if not node.callable:
                self.names.add(node.name)

    collector = NameCollector()
    collector.visit(program)

Example (fold constant additions):

    def fold(node: Node) -> Node:
        match node:
            case Binary("+", NumberLiteral(a), NumberLiteral(b)):
                return NumberLiteral(a + b, location=node.location)
        return node

    folded = transform(program, fold)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    is pure and safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable, Iterator

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


class BaseVisitor[T]:
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        for child in iter_children(node):
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Override this for catch-all behavior. Default returns None
        (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    def visit_program(self, node: Program) -> T:
        return self.visit_default(node)

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_number_literal(self, node: NumberLiteral) -> T:
        return self.visit_default(node)

    def visit_string_literal(self, node: StringLiteral) -> T:
        return self.visit_default(node)

    def visit_boolean_literal(self, node: BooleanLiteral) -> T:
        return self.visit_default(node)

    def visit_this(self, node: This) -> T:
        return self.visit_default(node)

    def visit_identifier(self, node: Identifier) -> T:
        return self.visit_default(node)

    def visit_unary(self, node: Unary) -> T:
        return self.visit_default(node)

    def visit_binary(self, node: Binary) -> T:
        return self.visit_default(node)

    def visit_ternary(self, node: Ternary) -> T:
        return self.visit_default(node)

    def visit_grouped(self, node: Grouped) -> T:
        return self.visit_default(node)

    def visit_member(self, node: Member) -> T:
        return self.visit_default(node)

    def visit_if(self, node: If) -> T:
        return self.visit_default(node)

    def visit_for(self, node: For) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Program():
                return self.visit_program(node)
            case Text():
                return self.visit_text(node)
            case NumberLiteral():
                return self.visit_number_literal(node)
            case StringLiteral():
                return self.visit_string_literal(node)
            case BooleanLiteral():
                return self.visit_boolean_literal(node)
            case This():
                return self.visit_this(node)
            case Identifier():
                return self.visit_identifier(node)
            case Unary():
                return self.visit_unary(node)
            case Binary():
                return self.visit_binary(node)
            case Ternary():
                return self.visit_ternary(node)
            case Grouped():
                return self.visit_grouped(node)
            case Member():
                return self.visit_member(node)
            case If():
                return self.visit_if(node)
            case For():
                return self.visit_for(node)
            case _:
                return self.visit_default(node)


def iter_children(node: Node) -> Iterator[Node]:
    """Yield the direct children of node in source order.

    For an If, the else branch follows the body: either its nodes or the
    nested ``else if`` node.
    """
    match node:
        case Program(children=children):
            yield from children
        case Identifier(args=args):
            yield from args
        case Unary(operand=operand):
            yield operand
        case Binary(left=left, right=right):
            yield left
            yield right
        case Ternary(condition=condition, left=left, right=right):
            yield condition
            yield left
            yield right
        case Grouped(expression=expression):
            yield expression
        case Member(obj=obj, prop=prop):
            yield obj
            yield prop
        case If(condition=condition, body=body, else_block=else_block):
            yield condition
            yield from body
            if isinstance(else_block, If):
                yield else_block
            elif else_block is not None:
                yield from else_block
        case For(variable=variable, iterable=iterable, body=body):
            yield variable
            yield iterable
            yield from body
        case _:
            pass  # Leaf nodes: no children


def transform(program: Program, fn: Callable[[Node], Node | None]) -> Program:
    """Apply a function to every node in the AST, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children.

    Return ``None`` from ``fn`` to remove a node from a body (Program
    children, If/For bodies, call arguments). Removing a node that fills a
    required slot (a Binary operand, an If condition, ...) raises TypeError,
    as does removing the root Program.

    Args:
        program: The program to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node.

    Returns:
        A new Program with the transformation applied. The original tree
        is untouched.

    """
    result = _transform_node(program, fn)
    if result is None or not isinstance(result, Program):
        msg = "transform fn must return a Program for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    return fn(_transform_children(node, fn))


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    """Produce a new node with children transformed."""

    def _filtered(children: tuple[Node, ...]) -> tuple[Node, ...]:
        return tuple(
            result for c in children
            if (result := _transform_node(c, fn)) is not None
        )

    def _required(child: Node) -> Node:
        result = _transform_node(child, fn)
        if result is None:
            msg = f"cannot remove required {type(child).__name__} from {type(node).__name__}"
            raise TypeError(msg)
        return result

    changes: dict[str, object] = {}
    match node:
        case Program(children=children):
            changes["children"] = _filtered(children)
        case Identifier(args=args):
            changes["args"] = _filtered(args)
        case Unary(operand=operand):
            changes["operand"] = _required(operand)
        case Binary(left=left, right=right):
            changes["left"] = _required(left)
            changes["right"] = _required(right)
        case Ternary(condition=condition, left=left, right=right):
            changes["condition"] = _required(condition)
            changes["left"] = _required(left)
            changes["right"] = _required(right)
        case Grouped(expression=expression):
            changes["expression"] = _required(expression)
        case Member(obj=obj, prop=prop):
            changes["obj"] = _required(obj)
            changes["prop"] = _required(prop)
        case If(condition=condition, body=body, else_block=else_block):
            changes["condition"] = _required(condition)
            changes["body"] = _filtered(body)
            if isinstance(else_block, If):
                changes["else_block"] = _required(else_block)
            elif else_block is not None:
                changes["else_block"] = _filtered(else_block)
        case For(variable=variable, iterable=iterable, body=body):
            changes["variable"] = _required(variable)
            changes["iterable"] = _required(iterable)
            changes["body"] = _filtered(body)
        case _:
            pass  # Leaf nodes: return as-is

    if any(changes[name] is not getattr(node, name) for name in changes):
        return dataclasses.replace(node, **changes)
    return node
