"""CODE mode scanner mixin."""

from collections.abc import Iterator

from tessera.errors import UnexpectedCharacterError
from tessera.grammar import (
    BLOCK_CLOSE,
    CODE_WHITESPACE,
    COMMENT_START,
    DIGITS,
    IDENT_START,
    QUOTES,
    SINGLE_CHAR_TOKENS,
    TWO_CHAR_OPERATORS,
)
from tessera.lexer.modes import LexerMode
from tessera.tokens import Token, TokenType


class CodeScannerMixin:
    """Mixin providing CODE mode scanning logic.

    Produces at most one token per call. Whitespace and newlines are
    consumed silently; ``}}`` and comments switch back to TEXT mode.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _lineno: int
    _mode: LexerMode
    _source_file: str | None

    def _save_location(self) -> None:
        """Save current location as the start of the next token."""
        raise NotImplementedError

    def _advance(self) -> str:
        """Advance one character."""
        raise NotImplementedError

    def _commit_to(self, end: int) -> None:
        """Commit position to end."""
        raise NotImplementedError

    def _current_col(self) -> int:
        """Column of current position."""
        raise NotImplementedError

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        """Create token spanning the saved location. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_string(self, quote: str) -> Token:
        """Scan a string literal. Implemented by LiteralScannerMixin."""
        raise NotImplementedError

    def _scan_number(self) -> Token:
        """Scan a number literal. Implemented by LiteralScannerMixin."""
        raise NotImplementedError

    def _scan_identifier(self) -> Token:
        """Scan an identifier or keyword. Implemented by LiteralScannerMixin."""
        raise NotImplementedError

    def _scan_code(self) -> Iterator[Token]:
        """Scan the next token inside a code block.

        Yields:
            Zero tokens for whitespace, otherwise exactly one token.

        Raises:
            UnexpectedCharacterError: If no token rule matches.
        """
        char = self._source[self._pos]

        if char in CODE_WHITESPACE or char == "\n":
            self._advance()
            return

        self._save_location()
        pair = self._source[self._pos : self._pos + 2]

        if pair == BLOCK_CLOSE:
            self._commit_to(self._pos + 2)
            self._mode = LexerMode.TEXT
            yield self._make_token(TokenType.BLOCK_END, BLOCK_CLOSE)
            return

        if pair == COMMENT_START:
            yield from self._scan_comment()
            return

        two_char = TWO_CHAR_OPERATORS.get(pair)
        if two_char is not None:
            self._commit_to(self._pos + 2)
            yield self._make_token(two_char, pair)
            return

        if char in QUOTES:
            yield self._scan_string(char)
        elif char in DIGITS:
            yield self._scan_number()
        elif char in IDENT_START:
            yield self._scan_identifier()
        else:
            token_type = SINGLE_CHAR_TOKENS.get(char)
            if token_type is None:
                raise UnexpectedCharacterError(
                    char, self._lineno, self._current_col(), self._source_file
                )
            self._commit_to(self._pos + 1)
            yield self._make_token(token_type, char)

    def _scan_comment(self) -> Iterator[Token]:
        """Skip a ``//`` comment, which always closes its own block.

        The comment runs through the next ``}`` (and a second ``}`` directly
        after it). A comment that runs to end of input yields nothing.

        Yields:
            BLOCK_END for the brace(s) ending the comment.
        """
        close = self._source.find("}", self._pos + len(COMMENT_START))
        if close == -1:
            self._commit_to(self._source_len)
            return

        self._commit_to(close)
        self._save_location()
        end = close + 1
        if self._source.startswith("}", end):
            end += 1
        self._commit_to(end)
        self._mode = LexerMode.TEXT
        yield self._make_token(TokenType.BLOCK_END, self._source[close:end])
