"""Expression parsing: precedence climbing from ternary down to primary.

Levels, loosest first:

    ternary         condition ? left : right    (right-associative)
    boolean         && || == != < <= > >=       (one flat level)
    additive        + -
    multiplicative  * /
    member          a.b  a[b]
    primary         literals, names, calls, (group), !x -x +x

After every complete expression the next token must be an operator,
``,``, ``:``, ``}}``, ``)`` or ``]``. There is no statement separator
inside a code block, so this boundary check is what turns ``{{ a b }}``
into an error instead of two silently adjacent expressions.
"""

from collections.abc import Callable

from tessera.errors import InvalidUnaryError
from tessera.grammar import (
    ADDITIVE_OPERATORS,
    BOOLEAN_OPERATORS,
    BOUNDARY_TOKENS,
    MULTIPLICATIVE_OPERATORS,
    SIGN_OPERATORS,
    UNARY_OPERATORS,
)
from tessera.nodes import (
    Binary,
    BooleanLiteral,
    Expression,
    Grouped,
    Identifier,
    Member,
    NumberLiteral,
    StringLiteral,
    Ternary,
    This,
    Unary,
)
from tessera.tokens import Token, TokenType


class ExpressionParsingMixin:
    """Mixin parsing the expression grammar inside code blocks.

    Required Host Methods (from TokenNavigationMixin):
        _advance, _peek, _check, _check_ahead, _expect, _unexpected, _position_of

    """

    _current: Token | None
    _source_file: str | None

    def _parse_expression(self) -> Expression:
        """Parse any expression (the loosest level)."""
        return self._parse_ternary()

    def _parse_ternary(self) -> Expression:
        condition = self._parse_boolean()
        if not self._check(TokenType.TERNARY):
            return condition

        self._advance()
        # Both branches recurse to the top level, so chains nest to the right
        left = self._parse_expression()
        self._expect(TokenType.COLON)
        right = self._parse_expression()
        self._expect_boundary()
        return Ternary(condition, left, right, location=condition.location)

    def _parse_boolean(self) -> Expression:
        return self._parse_binary_level(BOOLEAN_OPERATORS, self._parse_additive)

    def _parse_additive(self) -> Expression:
        return self._parse_binary_level(ADDITIVE_OPERATORS, self._parse_multiplicative)

    def _parse_multiplicative(self) -> Expression:
        return self._parse_binary_level(MULTIPLICATIVE_OPERATORS, self._parse_member)

    def _parse_binary_level(
        self,
        operators: frozenset[TokenType],
        parse_operand: Callable[[], Expression],
    ) -> Expression:
        """Parse a left-associative chain of one precedence level.

        Args:
            operators: Token types that belong to this level
            parse_operand: Parser for the next tighter level

        Returns:
            The operand alone, or a left-nested Binary chain.
        """
        left = parse_operand()
        while self._current is not None and self._current.type in operators:
            operator = self._advance()
            right = parse_operand()
            left = Binary(operator.value, left, right, location=left.location)
            self._expect_boundary()
        return left

    def _parse_member(self) -> Expression:
        """Parse a primary followed by any ``.name`` / ``[expr]`` accessors."""
        expr = self._parse_primary()

        while self._current is not None and self._current.type in (
            TokenType.DOT,
            TokenType.LEFT_BRACKET,
        ):
            accessor = self._advance()
            if accessor.type is TokenType.LEFT_BRACKET:
                prop = self._parse_expression()
                self._expect(TokenType.RIGHT_BRACKET)
                expr = Member(expr, prop, computed=True, location=expr.location)
            else:
                if not self._check(TokenType.IDENTIFIER):
                    raise self._unexpected()
                prop = self._parse_identifier()
                expr = Member(expr, prop, computed=False, location=expr.location)

        self._expect_boundary()
        return expr

    def _parse_primary(self) -> Expression:
        token = self._current
        if token is None:
            raise self._unexpected()

        match token.type:
            case TokenType.NUMBER:
                self._advance()
                return NumberLiteral(_number_value(token.value), location=token.location)
            case TokenType.STRING:
                self._advance()
                return StringLiteral(token.value, location=token.location)
            case TokenType.TRUE | TokenType.FALSE:
                self._advance()
                return BooleanLiteral(
                    token.type is TokenType.TRUE, location=token.location
                )
            case TokenType.THIS:
                self._advance()
                return This(location=token.location)
            case TokenType.IDENTIFIER:
                return self._parse_identifier()
            case TokenType.LEFT_PAREN:
                return self._parse_group()
            case token_type if token_type in UNARY_OPERATORS:
                return self._parse_unary()
            case _:
                raise self._unexpected()

    def _parse_identifier(self) -> Identifier:
        """Parse a name, or a call when ``(`` follows directly."""
        token = self._advance()
        if not self._check(TokenType.LEFT_PAREN):
            return Identifier(token.value, location=token.location)

        self._advance()
        args: list[Expression] = []
        if not self._check(TokenType.RIGHT_PAREN):
            args.append(self._parse_expression())
            while self._check(TokenType.COMMA):
                self._advance()
                args.append(self._parse_expression())
        self._expect(TokenType.RIGHT_PAREN)
        return Identifier(
            token.value, callable=True, args=tuple(args), location=token.location
        )

    def _parse_group(self) -> Grouped:
        opener = self._advance()
        inner = self._parse_expression()
        self._expect(TokenType.RIGHT_PAREN)
        return Grouped(inner, location=opener.location)

    def _parse_unary(self) -> Unary:
        """Parse ``!x``, ``-x`` or ``+x``.

        Rejects a sign directly followed by another sign (``--x``, ``+-x``)
        and three or more ``!`` in a row. ``-(-x)`` and ``!!x`` are fine.
        """
        operator = self._advance()
        following = self._current

        if following is not None:
            if operator.type in SIGN_OPERATORS and following.type in SIGN_OPERATORS:
                raise self._invalid_unary(
                    f"Unary {operator.value!r} cannot be followed by {following.value!r}"
                )
            if (
                operator.type is TokenType.BANG
                and following.type is TokenType.BANG
                and self._check_ahead(1, TokenType.BANG)
            ):
                raise self._invalid_unary("Redundant negation: use at most '!!'")

        operand = self._parse_member()
        return Unary(operator.value, operand, location=operator.location)

    def _invalid_unary(self, message: str) -> InvalidUnaryError:
        lineno, col = self._position_of(self._current)
        return InvalidUnaryError(message, lineno, col, self._source_file)

    def _expect_boundary(self) -> None:
        """Require an operator, separator or terminator after an expression."""
        token = self._current
        if token is None or token.type not in BOUNDARY_TOKENS:
            raise self._unexpected()


def _number_value(text: str) -> int | float:
    """Convert NUMBER token text to int or float."""
    digits = text.replace("_", "")
    if "." in digits or "e" in digits:
        return float(digits)
    return int(digits)
