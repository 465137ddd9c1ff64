"""Token navigation utilities for the Tessera parser.

Provides mixin for token stream navigation and error construction.
"""

from collections.abc import Sequence

from tessera.errors import UnexpectedTokenError
from tessera.tokens import Token, TokenType


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _tokens_len: int (cached len(_tokens) for hot loops)
        - _pos: int
        - _current: Token | None
        - _source_file: str | None

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int
    _current: Token | None
    _source_file: str | None

    def _advance(self) -> Token | None:
        """Consume the current token and return it."""
        consumed = self._current
        self._pos += 1
        if self._pos < self._tokens_len:
            self._current = self._tokens[self._pos]
        else:
            self._current = None
        return consumed

    def _peek(self, offset: int = 1) -> Token | None:
        """Peek at token at offset from current position."""
        pos = self._pos + offset
        if 0 <= pos < self._tokens_len:
            return self._tokens[pos]
        return None

    def _check(self, token_type: TokenType) -> bool:
        """Check whether the current token has the given type."""
        return self._current is not None and self._current.type is token_type

    def _check_ahead(self, offset: int, token_type: TokenType) -> bool:
        """Check whether the token at offset has the given type."""
        token = self._peek(offset)
        return token is not None and token.type is token_type

    def _expect(self, token_type: TokenType) -> Token:
        """Consume a token of the given type or raise UnexpectedTokenError."""
        token = self._current
        if token is None or token.type is not token_type:
            raise self._unexpected()
        self._advance()
        return token

    def _position_of(self, token: Token | None) -> tuple[int | None, int | None]:
        """Line and column for an error at token (last token at end of input)."""
        if token is not None:
            return token.lineno, token.col
        if self._tokens_len:
            return self._tokens[-1].lineno, None
        return None, None

    def _unexpected(self) -> UnexpectedTokenError:
        """Build the error for the current token being out of place."""
        token = self._current
        lineno, col = self._position_of(token)
        if token is None:
            message = "Unexpected end of input"
        else:
            message = f"Unexpected token {token.value!r}"
        return UnexpectedTokenError(message, lineno, col, self._source_file)
