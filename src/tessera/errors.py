"""Exception classes for Tessera.

Lexing and parsing are fail-fast: the first violation raises one of the
exceptions below and aborts the whole compilation. Each concrete error
exposes a ``kind`` so callers can match on the discriminated error kind:

    try:
        program = parse(source)
    except TesseraError as err:
        match err.kind:
            case LexErrorKind.UNTERMINATED_STRING:
                ...
"""

from __future__ import annotations

from enum import Enum, auto


class LexErrorKind(Enum):
    """Kinds of lexing failure."""

    UNTERMINATED_STRING = auto()
    UNEXPECTED_CHARACTER = auto()


class ParseErrorKind(Enum):
    """Kinds of parsing failure."""

    UNEXPECTED_TOKEN = auto()
    MALFORMED_FOR_LOOP = auto()
    MISSING_END_BLOCK = auto()
    INVALID_UNARY = auto()


class TesseraError(Exception):
    """Base exception for all Tessera errors.

    Subclass this for specific error categories.
    """

    pass


class SourceError(TesseraError):
    """Error tied to a position in template source."""

    kind: LexErrorKind | ParseErrorKind

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to template file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


# =============================================================================
# Lexer errors
# =============================================================================


class LexError(SourceError):
    """Error while converting source text into tokens."""

    kind: LexErrorKind


class UnterminatedStringError(LexError):
    """A string literal was opened but never closed.

    Raised at end of input, or when a ``"``/``'`` string meets a raw newline.
    """

    kind = LexErrorKind.UNTERMINATED_STRING


class UnexpectedCharacterError(LexError):
    """A character inside a code block matches no token rule."""

    kind = LexErrorKind.UNEXPECTED_CHARACTER

    def __init__(
        self,
        char: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        self.char = char
        super().__init__(
            f"Unexpected character {char!r}", lineno, col_offset, source_file
        )


# =============================================================================
# Parser errors
# =============================================================================


class ParseError(SourceError):
    """Error while building the AST from tokens."""

    kind: ParseErrorKind


class UnexpectedTokenError(ParseError):
    """A token appeared where the grammar does not allow it."""

    kind = ParseErrorKind.UNEXPECTED_TOKEN


class MalformedForLoopError(ParseError):
    """A ``for`` block is not followed by ``identifier of``."""

    kind = ParseErrorKind.MALFORMED_FOR_LOOP


class MissingEndBlockError(ParseError):
    """An ``if``/``for`` block is not closed by ``{{ end }}``."""

    kind = ParseErrorKind.MISSING_END_BLOCK


class InvalidUnaryError(ParseError):
    """Disallowed run of unary operators (``--x``, ``!!!x``)."""

    kind = ParseErrorKind.INVALID_UNARY
