"""Grammar tables for the Tessera lexer and parser.

All sets are frozensets and all maps are plain dicts built once at import:
- O(1) membership testing in the scanning hot loop
- Immutability by convention (never mutated after import)
- Module-level caching (no per-call allocation)

Usage:
    from tessera.grammar import KEYWORDS, TWO_CHAR_OPERATORS

    token_type = KEYWORDS.get(word, TokenType.IDENTIFIER)
"""

from tessera.tokens import TokenType

# =============================================================================
# Lexer tables
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "for": TokenType.FOR,
    "of": TokenType.OF,
    "end": TokenType.END,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "this": TokenType.THIS,
}

# Matched greedily before SINGLE_CHAR_TOKENS
TWO_CHAR_OPERATORS: dict[str, TokenType] = {
    "==": TokenType.EQUAL_EQUAL,
    "!=": TokenType.BANG_EQUAL,
    ">=": TokenType.GREATER_EQUAL,
    "<=": TokenType.LESS_EQUAL,
    "&&": TokenType.AND,
    "||": TokenType.OR,
}

# A lone "&" or "|" is deliberately absent
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "[": TokenType.LEFT_BRACKET,
    "]": TokenType.RIGHT_BRACKET,
    ".": TokenType.DOT,
    ",": TokenType.COMMA,
    ":": TokenType.COLON,
    "?": TokenType.TERNARY,
    "!": TokenType.BANG,
    ">": TokenType.GREATER,
    "<": TokenType.LESS,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
}

# Backslash escapes resolved inside string literals; any other escaped
# character is taken literally.
ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
}

BLOCK_OPEN = "{{"
BLOCK_CLOSE = "}}"
COMMENT_START = "//"

QUOTES: frozenset[str] = frozenset("\"'`")

# Only backtick strings may span lines
MULTILINE_QUOTES: frozenset[str] = frozenset("`")

# Newline is handled separately (it advances the line counter)
CODE_WHITESPACE: frozenset[str] = frozenset(" \t\r")

DIGITS: frozenset[str] = frozenset("0123456789")

IDENT_START: frozenset[str] = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
)

IDENT_CHARS: frozenset[str] = IDENT_START | DIGITS

# =============================================================================
# Parser tables
# =============================================================================

UNARY_OPERATORS: frozenset[TokenType] = frozenset(
    {TokenType.BANG, TokenType.MINUS, TokenType.PLUS}
)

# Unary signs that may not directly follow another sign (rejects --x, +-x)
SIGN_OPERATORS: frozenset[TokenType] = frozenset({TokenType.MINUS, TokenType.PLUS})

MULTIPLICATIVE_OPERATORS: frozenset[TokenType] = frozenset(
    {TokenType.STAR, TokenType.SLASH}
)

ADDITIVE_OPERATORS: frozenset[TokenType] = frozenset({TokenType.PLUS, TokenType.MINUS})

# Single flat precedence level, left-associative
BOOLEAN_OPERATORS: frozenset[TokenType] = frozenset(
    {
        TokenType.AND,
        TokenType.OR,
        TokenType.EQUAL_EQUAL,
        TokenType.BANG_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
    }
)

BINARY_OPERATORS: frozenset[TokenType] = (
    MULTIPLICATIVE_OPERATORS | ADDITIVE_OPERATORS | BOOLEAN_OPERATORS
)

# Tokens allowed to follow a complete expression. Anything else means two
# expressions were written side by side with nothing joining them.
BOUNDARY_TOKENS: frozenset[TokenType] = BINARY_OPERATORS | frozenset(
    {
        TokenType.TERNARY,
        TokenType.COMMA,
        TokenType.COLON,
        TokenType.BLOCK_END,
        TokenType.RIGHT_PAREN,
        TokenType.RIGHT_BRACKET,
    }
)
