"""Two-mode lexer with O(n) guaranteed performance.

Walks the source once. TEXT mode copies literal runs with ``str.find``;
CODE mode dispatches on the current character to produce one token at a
time. Position only ever moves forward.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from tessera.grammar import BLOCK_CLOSE
from tessera.lexer.modes import LexerMode
from tessera.lexer.scanners import (
    CodeScannerMixin,
    LiteralScannerMixin,
    TextScannerMixin,
)
from tessera.tokens import Token, TokenType


class Lexer(
    # Literal scanners (strings, numbers, identifiers)
    LiteralScannerMixin,
    # Mode scanners
    TextScannerMixin,
    CodeScannerMixin,
):
    """Two-mode lexer turning template source into tokens.

    Usage:
            >>> tokens = Lexer("{{ a + 1 }}").tokenize()
            >>> [t.type.name for t in tokens]
            ['BLOCK_START', 'IDENTIFIER', 'PLUS', 'NUMBER', 'BLOCK_END']

    Errors:
        Raises UnterminatedStringError or UnexpectedCharacterError on the
        first violation. tokenize() never returns a partial sequence.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source) to avoid repeated calls
        "_pos",
        "_lineno",
        "_line_start",  # Offset of the first character of the current line
        "_mode",
        "_source_file",
        "_last_close",  # Offset of the last "}}" in source (-1 if none)
        "_text_transformer",
        "_extended_numbers",
        "_saved_pos",
        "_saved_lineno",
        "_saved_col",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        *,
        text_transformer: Callable[[str], str] | None = None,
        extended_numbers: bool = False,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Template source text
            source_file: Optional template file path for error messages
            text_transformer: Optional callback applied to literal text chunks
            extended_numbers: Accept exponents and digit separators in numbers
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._line_start = 0
        self._mode = LexerMode.TEXT
        self._source_file = source_file
        self._last_close = source.rfind(BLOCK_CLOSE)
        self._text_transformer = text_transformer
        self._extended_numbers = extended_numbers

        self._saved_pos = 0
        self._saved_lineno = 1
        self._saved_col = 1

    def tokenize(self) -> list[Token]:
        """Tokenize the whole source.

        Returns:
            Every token in source order.

        Complexity: O(n) where n = len(source)
        """
        return list(self._scan())

    def _scan(self) -> Iterator[Token]:
        """Yield tokens until the source is exhausted."""
        source_len = self._source_len
        while self._pos < source_len:
            yield from self._dispatch_mode()

    def _dispatch_mode(self) -> Iterator[Token]:
        """Dispatch to the scanner for the current mode."""
        if self._mode == LexerMode.TEXT:
            yield from self._scan_text()
        else:
            yield from self._scan_code()

    # =========================================================================
    # Navigation helpers
    # =========================================================================

    def _current_col(self) -> int:
        """Column of the current position (1-indexed)."""
        return self._pos - self._line_start + 1

    def _advance(self) -> str:
        """Advance position by one character, tracking lines.

        Returns:
            The consumed character, or empty string at end of input.
        """
        if self._pos >= self._source_len:
            return ""

        char = self._source[self._pos]
        self._pos += 1
        if char == "\n":
            self._lineno += 1
            self._line_start = self._pos
        return char

    def _commit_to(self, end: int) -> None:
        """Move position forward to end, counting skipped newlines.

        Uses C-optimized str.count/rfind instead of a character loop.

        Args:
            end: New position (must be >= current position).
        """
        segment = self._source[self._pos : end]
        newline_count = segment.count("\n")
        if newline_count:
            self._lineno += newline_count
            self._line_start = self._pos + segment.rfind("\n") + 1
        self._pos = end

    # =========================================================================
    # Location tracking
    # =========================================================================

    def _save_location(self) -> None:
        """Save current location as the start of the next token."""
        self._saved_pos = self._pos
        self._saved_lineno = self._lineno
        self._saved_col = self._current_col()

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        """Create a Token spanning from the saved location to the current one.

        Args:
            token_type: The token type.
            value: The token value.

        Returns:
            Token with raw coordinates for lazy location creation.
        """
        return Token(
            type=token_type,
            value=value,
            _lineno=self._saved_lineno,
            _col=self._saved_col,
            _start_offset=self._saved_pos,
            _end_offset=self._pos,
            _end_lineno=self._lineno,
            _end_col=self._current_col(),
            _source_file=self._source_file,
        )
