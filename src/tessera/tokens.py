"""Token and TokenType definitions for the Tessera lexer.

The lexer produces a sequence of Token objects that the parser consumes.
Each Token has a type, value, and source location.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.
This avoids allocating SourceLocation objects for tokens whose location
is never accessed (most tokens during parsing).

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tessera.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer.

    Organized by category:
    - Template structure (literal text and code block delimiters)
    - Literals and names
    - Punctuation
    - Operators
    - Keywords

    """

    # Template structure
    TEXT = auto()  # Literal text outside code blocks
    BLOCK_START = auto()  # {{
    BLOCK_END = auto()  # }}

    # Literals and names
    IDENTIFIER = auto()
    NUMBER = auto()
    STRING = auto()

    # Punctuation
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )
    LEFT_BRACKET = auto()  # [
    RIGHT_BRACKET = auto()  # ]
    DOT = auto()  # .
    COMMA = auto()  # ,
    COLON = auto()  # :
    TERNARY = auto()  # ?

    # Operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()
    BANG = auto()  # !
    BANG_EQUAL = auto()  # !=
    EQUAL_EQUAL = auto()  # ==
    GREATER = auto()
    GREATER_EQUAL = auto()
    LESS = auto()
    LESS_EQUAL = auto()
    AND = auto()  # &&
    OR = auto()  # ||

    # Keywords
    IF = auto()
    ELSE = auto()
    FOR = auto()
    OF = auto()
    END = auto()
    TRUE = auto()
    FALSE = auto()
    THIS = auto()


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Tokens are the atomic units passed from lexer to parser.

    Attributes:
        type: The token type (from TokenType enum)
        value: Lexeme for structural tokens, verbatim text for TEXT,
            escape-resolved payload for STRING
        _lineno: Start line number (1-indexed)
        _col: Start column offset (1-indexed)
        _start_offset: Absolute start position in source
        _end_offset: Absolute end position in source
        _end_lineno: End line number (for multi-line tokens)
        _end_col: End column offset
        _source_file: Optional template file path

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.
        The lazy cache uses idempotent write (safe for concurrent access).

    """

    type: TokenType
    value: str
    _lineno: int
    _col: int
    _start_offset: int
    _end_offset: int
    _end_lineno: int | None = None
    _end_col: int | None = None
    _source_file: str | None = None
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from tessera.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            end_lineno=self._end_lineno,
            end_col_offset=self._end_col,
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self._lineno}:{self._col})"

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col


def detokenize(tokens: Iterable[Token]) -> str:
    """Rebuild template source from a token sequence.

    TEXT tokens are emitted verbatim. Code tokens are separated by single
    spaces inside their block, and strings are re-quoted with ``"``.
    Discarded whitespace and comments are not restored, so the result is
    equivalent to (not identical with) the original source.

    Example:
        >>> from tessera import lex
        >>> detokenize(lex("Hi {{name}}!"))
        'Hi {{ name }}!'

    """
    from tessera.grammar import ESCAPES

    unescape = {value: key for key, value in ESCAPES.items()}
    parts: list[str] = []
    for token in tokens:
        match token.type:
            case TokenType.TEXT:
                parts.append(token.value)
            case TokenType.BLOCK_START:
                parts.append("{{")
            case TokenType.BLOCK_END if token.value == "}":
                # only a comment closes a block with one brace
                parts.append(" //}")
            case TokenType.BLOCK_END:
                parts.append(" }}")
            case TokenType.STRING:
                quoted = []
                for char in token.value:
                    if char in unescape:
                        quoted.append("\\" + unescape[char])
                    elif char in ('"', "\\"):
                        quoted.append("\\" + char)
                    else:
                        quoted.append(char)
                parts.append(' "' + "".join(quoted) + '"')
            case _:
                parts.append(" " + token.value)
    return "".join(parts)
