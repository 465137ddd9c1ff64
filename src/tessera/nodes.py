"""Typed AST nodes for Tessera.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Every node carries a keyword-only ``location``. Locations are excluded
from equality, so two trees compare equal when their structure matches:

    >>> from tessera import parse
    >>> parse("{{ 1 + 2 }}").children[0] == Binary("+", NumberLiteral(1), NumberLiteral(2))
    True

Node Hierarchy:
Node (base)
├── Program (root returned by tessera.parse)
└── Expression
    ├── Text
    ├── NumberLiteral
    ├── StringLiteral
    ├── BooleanLiteral
    ├── This
    ├── Identifier
    ├── Unary
    ├── Binary
    ├── Ternary
    ├── Grouped
    ├── Member
    ├── If
    └── For

"""

from __future__ import annotations

from dataclasses import dataclass, field

from tessera.location import SourceLocation

_UNKNOWN = SourceLocation.unknown()


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source location for error messages and debugging.

    """

    location: SourceLocation = field(
        default=_UNKNOWN, repr=False, compare=False, kw_only=True
    )


# =============================================================================
# Literal and name nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal template text, emitted verbatim by a renderer."""

    content: str


@dataclass(frozen=True, slots=True)
class NumberLiteral(Node):
    """Numeric literal: ``42`` is an int, ``4.2`` a float."""

    value: int | float


@dataclass(frozen=True, slots=True)
class StringLiteral(Node):
    """String literal with escapes already resolved."""

    value: str


@dataclass(frozen=True, slots=True)
class BooleanLiteral(Node):
    """``true`` or ``false``."""

    value: bool


@dataclass(frozen=True, slots=True)
class This(Node):
    """The ``this`` keyword: the renderer's current context object."""


@dataclass(frozen=True, slots=True)
class Identifier(Node):
    """Variable reference or function call.

    Template: ``name`` or ``format(price, 2)``

    ``args`` is only meaningful when ``callable`` is true. A call with no
    arguments is ``callable=True, args=()``.

    """

    name: str
    callable: bool = False
    args: tuple[Expression, ...] = ()


# =============================================================================
# Operator nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Unary(Node):
    """Prefix operator: ``!``, ``-`` or ``+``."""

    operator: str
    operand: Expression


@dataclass(frozen=True, slots=True)
class Binary(Node):
    """Infix arithmetic, comparison or logical operator.

    ``operator`` is the lexeme: ``+ - * / == != < <= > >= && ||``.

    """

    operator: str
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Ternary(Node):
    """``condition ? left : right``."""

    condition: Expression
    left: Expression
    right: Expression


@dataclass(frozen=True, slots=True)
class Grouped(Node):
    """Parenthesized expression.

    Kept so the explicit grouping survives parsing; a renderer evaluates
    the inner expression unchanged.

    """

    expression: Expression


@dataclass(frozen=True, slots=True)
class Member(Node):
    """Property access.

    Template: ``user.name`` (computed=False, prop is an Identifier) or
    ``items[i + 1]`` (computed=True, prop is any expression).

    """

    obj: Expression
    prop: Expression
    computed: bool = False


# =============================================================================
# Control nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class If(Node):
    """Conditional block.

    Template:
        {{ if a }}...{{ else if b }}...{{ else }}...{{ end }}

    ``else if`` is a nested If stored directly in ``else_block``; a plain
    ``else`` stores its body tuple; no else at all stores None.

    """

    condition: Expression
    body: tuple[Expression, ...] = ()
    else_block: tuple[Expression, ...] | If | None = None


@dataclass(frozen=True, slots=True)
class For(Node):
    """Loop block.

    Template: ``{{ for item of items }}...{{ end }}``

    The renderer binds ``variable`` to each element of ``iterable``.

    """

    variable: Identifier
    iterable: Expression
    body: tuple[Expression, ...] = ()


# =============================================================================
# Root
# =============================================================================


@dataclass(frozen=True, slots=True)
class Program(Node):
    """Root node: the ordered top-level expressions of one template."""

    children: tuple[Expression, ...] = ()


# Type aliases for type hints
type Expression = (
    Text
    | NumberLiteral
    | StringLiteral
    | BooleanLiteral
    | This
    | Identifier
    | Unary
    | Binary
    | Ternary
    | Grouped
    | Member
    | If
    | For
)
