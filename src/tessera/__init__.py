"""
Tessera — Template Front End for Python

Turns template source that mixes literal text with ``{{ ... }}`` code blocks
into a typed, immutable AST. Evaluation is left to a renderer built on
:class:`tessera.BaseVisitor`.

Quick Start:
    >>> from tessera import parse
    >>> program = parse("Hi {{ name }}!")
    >>> program.children
    (Text(content='Hi '), Identifier(name='name', callable=False, args=()), Text(content='!'))

    >>> # Or hold a configuration in a Compiler
    >>> from tessera import Compiler
    >>> compiler = Compiler(extended_numbers=True)
    >>> compiler("{{ 1_000 }}").children
    (NumberLiteral(value=1000),)

Control Blocks:
    {{ if user }}Hi {{ user.name }}{{ else }}Hi stranger{{ end }}
    {{ for item of items }}- {{ item }}{{ end }}

Installation:
    pip install tessera              # Zero runtime dependencies
    pip install tessera[test]        # + pytest, hypothesis, pytest-benchmark
"""

from collections.abc import Callable, Iterable

from tessera.cache import DictParseCache, ParseCache, hash_config, hash_content
from tessera.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from tessera.errors import (
    InvalidUnaryError,
    LexError,
    LexErrorKind,
    MalformedForLoopError,
    MissingEndBlockError,
    ParseError,
    ParseErrorKind,
    SourceError,
    TesseraError,
    UnexpectedCharacterError,
    UnexpectedTokenError,
    UnterminatedStringError,
)
from tessera.lexer import Lexer
from tessera.location import SourceLocation
from tessera.nodes import (
    Binary,
    BooleanLiteral,
    Expression,
    For,
    Grouped,
    Identifier,
    If,
    Member,
    Node,
    NumberLiteral,
    Program,
    StringLiteral,
    Ternary,
    Text,
    This,
    Unary,
)
from tessera.parser import Parser
from tessera.serialization import from_dict, from_json, to_dict, to_json
from tessera.tokens import Token, TokenType, detokenize
from tessera.utils.logger import get_logger
from tessera.visitor import BaseVisitor, transform

__version__ = "0.1.0"

logger = get_logger(__name__)


def lex(source: str, *, source_file: str | None = None) -> list[Token]:
    """Tokenize template source using the active ParseConfig.

    Args:
        source: Template source text
        source_file: Optional source file path for error messages

    Returns:
        Every token in source order

    Raises:
        LexError: On an unterminated string or an unexpected character

    Example:
        >>> [t.type.name for t in lex("{{ a && b }}")]
        ['BLOCK_START', 'IDENTIFIER', 'AND', 'IDENTIFIER', 'BLOCK_END']
    """
    config = get_parse_config()
    lexer = Lexer(
        source,
        source_file,
        text_transformer=config.text_transformer,
        extended_numbers=config.extended_numbers,
    )
    return lexer.tokenize()


def parse(
    source: str,
    *,
    source_file: str | None = None,
    cache: ParseCache | None = None,
) -> Program:
    """Parse template source into a typed AST.

    Uses the ParseConfig active in the current context (see
    :func:`parse_config_context` and :class:`Compiler`).

    Args:
        source: Template source text
        source_file: Optional source file path for error messages
        cache: Optional content-addressed parse cache. When provided, checks cache
            before parsing; on miss, parses and stores result. Cache is bypassed
            when config has text_transformer set. For parallel parsing, use a
            thread-safe cache implementation.

    Returns:
        Program AST root node

    Raises:
        LexError: On the first lexical violation
        ParseError: On the first grammar violation

    Example:
        >>> program = parse("{{ 2 + 3 * 4 }}")
        >>> program.children[0].operator
        '+'
        >>> # With parse cache
        >>> from tessera import DictParseCache
        >>> cache = DictParseCache()
        >>> program = parse("Hi {{ name }}", cache=cache)
    """
    return _compile(source, source_file, get_parse_config(), cache)


def _compile(
    source: str,
    source_file: str | None,
    config: ParseConfig,
    cache: ParseCache | None,
) -> Program:
    """Lex, parse and wrap one source under ``config``."""
    config_hash = hash_config(config) if cache is not None else ""
    content_hash = ""
    if cache is not None and config_hash:
        content_hash = hash_content(source)
        cached = cache.get(content_hash, config_hash)
        if cached is not None:
            logger.debug("Parse cache hit for %s", source_file or "<string>")
            return cached

    tokens = Lexer(
        source,
        source_file,
        text_transformer=config.text_transformer,
        extended_numbers=config.extended_numbers,
    ).tokenize()
    children = Parser(tokens, source_file=source_file).parse()

    # Wrap top-level expressions in a Program
    loc = SourceLocation(
        lineno=1,
        col_offset=1,
        offset=0,
        end_offset=len(source),
        source_file=source_file,
    )
    program = Program(children, location=loc)

    if cache is not None and config_hash:
        cache.put(content_hash, config_hash, program)

    logger.debug(
        "Compiled %s: %d tokens, %d top-level nodes",
        source_file or "<string>",
        len(tokens),
        len(children),
    )
    return program


class Compiler:
    """High-level template compiler holding one immutable configuration.

    Usage:
        >>> compiler = Compiler()
        >>> program = compiler("{{ for x of xs }}{{ x }}{{ end }}")
        >>> type(program.children[0]).__name__
        'For'

        >>> # Trim whitespace around every text chunk
        >>> compiler = Compiler(text_transformer=str.strip)
        >>> compiler("  Hi  {{ name }}  ").children[0]
        Text(content='Hi')

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Compiler instances concurrently from different threads.

    """

    __slots__ = ("_config",)

    def __init__(
        self,
        *,
        extended_numbers: bool = False,
        text_transformer: Callable[[str], str] | None = None,
    ) -> None:
        """Initialize compiler.

        Args:
            extended_numbers: Accept exponents (``1e3``) and digit separators
                (``1_000``) in number literals
            text_transformer: Optional callback applied to literal text chunks
        """
        # Build immutable config once (thread-safe, reused across calls)
        self._config = ParseConfig(
            extended_numbers=extended_numbers,
            text_transformer=text_transformer,
        )

    @property
    def config(self) -> ParseConfig:
        """The configuration every compile call runs under."""
        return self._config

    def __call__(self, source: str) -> Program:
        """Compile template source in one call."""
        return self.compile(source)

    def compile(
        self,
        source: str,
        *,
        source_file: str | None = None,
        cache: ParseCache | None = None,
    ) -> Program:
        """Compile template source into AST.

        Args:
            source: Template source text
            source_file: Optional source file path for error messages
            cache: Optional content-addressed parse cache

        Returns:
            Program AST root node

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.
        """
        # Set config for this compile (thread-local via ContextVar)
        set_parse_config(self._config)
        try:
            return _compile(source, source_file, self._config, cache)
        finally:
            # Reset to default (reuses module-level singleton, no allocation)
            reset_parse_config()

    def compile_many(
        self,
        sources: Iterable[str],
        *,
        source_file: str | None = None,
        cache: ParseCache | None = None,
    ) -> list[Program]:
        """Compile several template sources under one config.

        Stops at the first failing source; its error propagates unchanged.

        Args:
            sources: Template source texts
            source_file: Optional source file path for error messages
            cache: Optional content-addressed parse cache

        Returns:
            One Program per source, in order
        """
        set_parse_config(self._config)
        try:
            return [
                _compile(source, source_file, self._config, cache)
                for source in sources
            ]
        finally:
            reset_parse_config()

    def lex(self, source: str, *, source_file: str | None = None) -> list[Token]:
        """Tokenize template source under this compiler's config."""
        set_parse_config(self._config)
        try:
            return lex(source, source_file=source_file)
        finally:
            reset_parse_config()


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "lex",
    "parse",
    "Compiler",
    # Parse cache
    "DictParseCache",
    "ParseCache",
    "hash_config",
    "hash_content",
    # Nodes
    "Node",
    "Expression",
    "Program",
    "Text",
    "NumberLiteral",
    "StringLiteral",
    "BooleanLiteral",
    "This",
    "Identifier",
    "Unary",
    "Binary",
    "Ternary",
    "Grouped",
    "Member",
    "If",
    "For",
    # Errors
    "TesseraError",
    "SourceError",
    "LexError",
    "LexErrorKind",
    "UnterminatedStringError",
    "UnexpectedCharacterError",
    "ParseError",
    "ParseErrorKind",
    "UnexpectedTokenError",
    "MalformedForLoopError",
    "MissingEndBlockError",
    "InvalidUnaryError",
    # Compiler components
    "Lexer",
    "Parser",
    # Visitor + Transform
    "BaseVisitor",
    "transform",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Location
    "SourceLocation",
    # Tokens
    "Token",
    "TokenType",
    "detokenize",
]
