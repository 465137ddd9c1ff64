"""TEXT mode scanner mixin."""

from collections.abc import Callable, Iterator

from tessera.grammar import BLOCK_OPEN
from tessera.lexer.modes import LexerMode
from tessera.tokens import Token, TokenType


class TextScannerMixin:
    """Mixin providing TEXT mode scanning logic.

    Copies literal text up to the next ``{{`` that has a matching ``}}``
    somewhere after it. An opening pair with no closer anywhere later is
    ordinary text.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _mode: LexerMode
    _last_close: int
    _text_transformer: Callable[[str], str] | None

    def _save_location(self) -> None:
        """Save current location as the start of the next token."""
        raise NotImplementedError

    def _commit_to(self, end: int) -> None:
        """Commit position to end."""
        raise NotImplementedError

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        """Create token spanning the saved location. Implemented by Lexer."""
        raise NotImplementedError

    def _scan_text(self) -> Iterator[Token]:
        """Scan one literal run and, if present, the block opener after it.

        Yields:
            A TEXT token for non-empty literal runs, then BLOCK_START when
            a code block opens (switching to CODE mode).
        """
        self._save_location()
        start = self._pos
        open_at = self._source.find(BLOCK_OPEN, start)

        if open_at == -1 or self._last_close < open_at + len(BLOCK_OPEN):
            # No block can open from here on: the rest is literal text
            self._commit_to(self._source_len)
            yield self._make_text_token(self._source[start:])
            return

        if open_at > start:
            self._commit_to(open_at)
            yield self._make_text_token(self._source[start:open_at])
            self._save_location()

        self._commit_to(open_at + len(BLOCK_OPEN))
        self._mode = LexerMode.CODE
        yield self._make_token(TokenType.BLOCK_START, BLOCK_OPEN)

    def _make_text_token(self, text: str) -> Token:
        """Create a TEXT token, applying the configured transformer."""
        if self._text_transformer is not None:
            text = self._text_transformer(text)
        return self._make_token(TokenType.TEXT, text)
