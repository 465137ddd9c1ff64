"""Literal scanner mixin: strings, numbers, identifiers and keywords."""

from tessera.errors import UnterminatedStringError
from tessera.grammar import (
    DIGITS,
    ESCAPES,
    IDENT_CHARS,
    KEYWORDS,
    MULTILINE_QUOTES,
)
from tessera.tokens import Token, TokenType


class LiteralScannerMixin:
    """Mixin scanning literal tokens inside code blocks.

    Each scanner starts at the current position (the token's first
    character), commits past the literal, and returns its token. Callers
    must have saved the token start location.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _source_file: str | None
    _extended_numbers: bool
    _saved_lineno: int
    _saved_col: int

    def _scan_string(self, quote: str) -> Token:
        """Scan a quoted string, resolving backslash escapes.

        Args:
            quote: The opening delimiter (``"``, ``'`` or backtick)

        Returns:
            STRING token whose value is the escape-resolved content.

        Raises:
            UnterminatedStringError: At end of input, or on a raw newline
                inside a single-line string. Reported at the opening line.
        """
        source = self._source
        source_len = self._source_len
        multiline = quote in MULTILINE_QUOTES
        cursor = self._pos + 1
        chars: list[str] = []

        while True:
            if cursor >= source_len:
                raise self._unterminated_string()

            char = source[cursor]
            if char == quote:
                break

            if char == "\\":
                if cursor + 1 >= source_len:
                    raise self._unterminated_string()
                escaped = source[cursor + 1]
                if escaped == "\n" and not multiline:
                    raise self._unterminated_string()
                chars.append(ESCAPES.get(escaped, escaped))
                cursor += 2
                continue

            if char == "\n" and not multiline:
                raise self._unterminated_string()

            chars.append(char)
            cursor += 1

        self._commit_to(cursor + 1)
        return self._make_token(TokenType.STRING, "".join(chars))

    def _unterminated_string(self) -> UnterminatedStringError:
        return UnterminatedStringError(
            "Unterminated string literal",
            self._saved_lineno,
            self._saved_col,
            self._source_file,
        )

    def _scan_number(self) -> Token:
        """Scan a number literal.

        Digits with at most one ``.``, which is only taken when a digit
        follows it: ``1.5`` is one number, ``1.5.2`` is ``1.5`` ``.`` ``2``
        and ``1.round`` is ``1`` ``.`` ``round``.

        With extended numbers enabled, also accepts a single exponent
        (``2e10``, digit required after ``e``) and ``_`` between two digits.
        """
        source = self._source
        source_len = self._source_len
        extended = self._extended_numbers
        cursor = self._pos
        seen_dot = False
        seen_exp = False

        while cursor < source_len:
            char = source[cursor]
            nxt = source[cursor + 1] if cursor + 1 < source_len else ""

            if char in DIGITS:
                cursor += 1
            elif char == "." and not seen_dot and not seen_exp and nxt in DIGITS:
                seen_dot = True
                cursor += 1
            elif extended and char == "e" and not seen_exp and nxt in DIGITS:
                seen_exp = True
                cursor += 1
            elif extended and char == "_" and source[cursor - 1] in DIGITS and nxt in DIGITS:
                cursor += 1
            else:
                break

        text = source[self._pos : cursor]
        self._commit_to(cursor)
        return self._make_token(TokenType.NUMBER, text)

    def _scan_identifier(self) -> Token:
        """Scan ``[A-Za-z_][A-Za-z0-9_]*`` and classify keywords."""
        source = self._source
        source_len = self._source_len
        cursor = self._pos + 1
        while cursor < source_len and source[cursor] in IDENT_CHARS:
            cursor += 1

        word = source[self._pos : cursor]
        self._commit_to(cursor)
        return self._make_token(KEYWORDS.get(word, TokenType.IDENTIFIER), word)

    def _commit_to(self, end: int) -> None:
        """Commit position to end."""
        raise NotImplementedError

    def _make_token(self, token_type: TokenType, value: str) -> Token:
        """Create token spanning the saved location. Implemented by Lexer."""
        raise NotImplementedError
