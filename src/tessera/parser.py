"""Recursive descent parser producing a typed AST.

Consumes the token list from Lexer and builds typed expression nodes.
Produces immutable (frozen) dataclass nodes.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal
- `ExpressionParsingMixin`: Expressions inside code blocks
- `BlockParsingMixin`: Template structure (text, blocks, if/for)

Thread Safety:
- Parser instances are single-use; all cursor state is per instance
- Parser produces immutable AST (frozen dataclasses)

"""

from __future__ import annotations

from collections.abc import Sequence

from tessera.nodes import Expression
from tessera.parsing import (
    BlockParsingMixin,
    ExpressionParsingMixin,
    TokenNavigationMixin,
)
from tessera.tokens import Token


class Parser(
    TokenNavigationMixin,
    ExpressionParsingMixin,
    BlockParsingMixin,
):
    """Recursive descent parser for Tessera templates.

    Usage:
            >>> from tessera.lexer import Lexer
            >>> parser = Parser(Lexer("Hi {{ name }}!").tokenize())
            >>> parser.parse()
        (Text(content='Hi '), Identifier(name='name', callable=False, args=()), Text(content='!'))

    Errors:
        Raises a ParseError subclass on the first grammar violation;
        nothing is returned for partially valid input.

    """

    __slots__ = (
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        "_source_file",
    )

    def __init__(
        self,
        tokens: Sequence[Token],
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with a token sequence.

        Args:
            tokens: Tokens produced by Lexer.tokenize()
            source_file: Optional template file path for error messages
        """
        self._tokens = tokens
        self._tokens_len = len(tokens)
        self._source_file = source_file
        self._pos = 0
        self._current: Token | None = tokens[0] if tokens else None

    def parse(self) -> tuple[Expression, ...]:
        """Parse tokens into top-level expression nodes.

        Returns:
            Top-level nodes in source order.
        """
        self._pos = 0
        self._current = self._tokens[0] if self._tokens else None
        return tuple(self._parse_template())
