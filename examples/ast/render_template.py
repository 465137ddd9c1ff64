"""A tiny renderer: evaluate the AST against a data context.

Tessera stops at the AST. This is the kind of evaluator a renderer builds
on top of it: Text is emitted verbatim, everything else is evaluated.
"""

import operator
from collections.abc import Callable
from typing import Any

from tessera import parse
from tessera.nodes import (
    Binary,
    BooleanLiteral,
    Expression,
    For,
    Grouped,
    Identifier,
    If,
    Member,
    NumberLiteral,
    StringLiteral,
    Ternary,
    Text,
    This,
    Unary,
)

BINARY: dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def evaluate(node: Expression, scope: dict[str, Any]) -> Any:
    match node:
        case NumberLiteral(value) | StringLiteral(value) | BooleanLiteral(value):
            return value
        case This():
            return scope
        case Identifier(name, callable=True, args=args):
            return scope[name](*(evaluate(arg, scope) for arg in args))
        case Identifier(name):
            return scope.get(name)
        case Unary("!", operand):
            return not evaluate(operand, scope)
        case Unary("-", operand):
            return -evaluate(operand, scope)
        case Unary(_, operand):
            return +evaluate(operand, scope)
        case Binary("&&", left, right):
            return evaluate(left, scope) and evaluate(right, scope)
        case Binary("||", left, right):
            return evaluate(left, scope) or evaluate(right, scope)
        case Binary(op, left, right):
            return BINARY[op](evaluate(left, scope), evaluate(right, scope))
        case Ternary(condition, left, right):
            return evaluate(left if evaluate(condition, scope) else right, scope)
        case Grouped(inner):
            return evaluate(inner, scope)
        case Member(obj, prop, computed=True):
            return evaluate(obj, scope)[evaluate(prop, scope)]
        case Member(obj, Identifier(name, callable=True, args=args)):
            method = getattr(evaluate(obj, scope), name)
            return method(*(evaluate(arg, scope) for arg in args))
        case Member(obj, Identifier(name)):
            target = evaluate(obj, scope)
            return target[name] if isinstance(target, dict) else getattr(target, name)
    raise TypeError(f"cannot evaluate {type(node).__name__}")


def render(nodes: tuple[Expression, ...], scope: dict[str, Any]) -> str:
    out: list[str] = []
    for node in nodes:
        match node:
            case Text(content):
                out.append(content)
            case If(condition, body, else_block):
                if evaluate(condition, scope):
                    out.append(render(body, scope))
                elif isinstance(else_block, If):
                    out.append(render((else_block,), scope))
                elif else_block is not None:
                    out.append(render(else_block, scope))
            case For(variable, iterable, body):
                for value in evaluate(iterable, scope):
                    out.append(render(body, {**scope, variable.name: value}))
            case _:
                out.append(str(evaluate(node, scope)))
    return "".join(out)


template = parse(
    "Hi {{ user.name.upper() }}!\n"
    "{{ for item of cart }}- {{ item.name }} x{{ item.qty }}"
    " = {{ money(item.qty * item.price) }}\n{{ end }}"
    "{{ if cart.__len__() > 2 }}Bulk order{{ else if cart.__len__() }}Order{{ else }}Empty{{ end }}"
)

print(
    render(
        template.children,
        {
            "user": {"name": "ada"},
            "cart": [
                {"name": "tea", "qty": 2, "price": 3.5},
                {"name": "cake", "qty": 1, "price": 4},
            ],
            "money": lambda amount: f"${amount:.2f}",
        },
    )
)
