"""Block parsing: literal text, code blocks, and if/for constructs.

Template structure:

    text                                  -> Text
    {{ expression }}                      -> the expression
    {{ }} / {{ // comment }}              -> nothing
    {{ if c }}...[{{ else [if c2] }}...]{{ end }}  -> If
    {{ for x of items }}...{{ end }}      -> For

Block delimiters are consumed here and never appear in node bodies.
"""

from tessera.errors import MalformedForLoopError, MissingEndBlockError
from tessera.nodes import Expression, For, Identifier, If, Text
from tessera.tokens import Token, TokenType

# Keywords that end a body when they open a block
_IF_STOPPERS = frozenset({TokenType.ELSE, TokenType.END})
_END_STOPPERS = frozenset({TokenType.END})
_NO_STOPPERS: frozenset[TokenType] = frozenset()


class BlockParsingMixin:
    """Mixin parsing template-level structure.

    Required Host Methods:
        _advance, _peek, _check, _check_ahead, _expect, _unexpected, _position_of
        (TokenNavigationMixin), _parse_expression (ExpressionParsingMixin)

    """

    _current: Token | None
    _source_file: str | None

    def _parse_template(self) -> list[Expression]:
        """Parse the whole token stream as top-level nodes."""
        return self._parse_nodes(_NO_STOPPERS)

    def _parse_nodes(self, stoppers: frozenset[TokenType]) -> list[Expression]:
        """Parse text and blocks until a stopper block or end of input.

        Stops with the cursor on the ``{{`` of a block whose keyword is in
        stoppers (e.g. ``{{ else }}``), leaving it for the caller.

        Args:
            stoppers: Keywords that end this body

        Returns:
            The body's nodes in source order.
        """
        nodes: list[Expression] = []
        while (token := self._current) is not None:
            if token.type is TokenType.TEXT:
                self._advance()
                nodes.append(Text(token.value, location=token.location))
                continue

            if token.type is not TokenType.BLOCK_START:
                raise self._unexpected()

            keyword = self._peek()
            if keyword is not None and keyword.type in stoppers:
                break

            node = self._parse_block()
            if node is not None:
                nodes.append(node)
        return nodes

    def _parse_block(self) -> Expression | None:
        """Parse one ``{{ ... }}`` block starting at BLOCK_START.

        Returns:
            The block's node, or None for an empty (or comment-only) block.
        """
        opener = self._advance()

        if self._check(TokenType.FOR):
            self._advance()
            return self._parse_for(opener)
        if self._check(TokenType.IF):
            self._advance()
            return self._parse_if(opener)
        if self._check(TokenType.BLOCK_END):
            self._advance()
            return None

        expression = self._parse_expression()
        self._expect(TokenType.BLOCK_END)
        return expression

    def _parse_if(self, opener: Token) -> If:
        """Parse an if block after its ``if`` keyword.

        ``{{ else if ... }}`` recurses into a nested If that owns the rest
        of the chain, including the single closing ``{{ end }}``.
        """
        condition = self._parse_expression()
        self._expect(TokenType.BLOCK_END)
        body = tuple(self._parse_nodes(_IF_STOPPERS))

        else_block: tuple[Expression, ...] | If | None = None
        if self._check(TokenType.BLOCK_START) and self._check_ahead(1, TokenType.ELSE):
            else_opener = self._advance()
            self._advance()
            if self._check(TokenType.IF):
                self._advance()
                else_block = self._parse_if(else_opener)
                return If(condition, body, else_block, location=opener.location)

            self._expect(TokenType.BLOCK_END)
            else_block = tuple(self._parse_nodes(_END_STOPPERS))

        self._expect_end_block()
        return If(condition, body, else_block, location=opener.location)

    def _parse_for(self, opener: Token) -> For:
        """Parse a for block after its ``for`` keyword."""
        variable_token = self._current
        if not (
            variable_token is not None
            and variable_token.type is TokenType.IDENTIFIER
            and self._check_ahead(1, TokenType.OF)
        ):
            lineno, col = self._position_of(variable_token)
            raise MalformedForLoopError(
                "Expected 'for <name> of <iterable>'", lineno, col, self._source_file
            )

        self._advance()
        self._advance()
        variable = Identifier(variable_token.value, location=variable_token.location)
        iterable = self._parse_expression()
        self._expect(TokenType.BLOCK_END)
        body = tuple(self._parse_nodes(_END_STOPPERS))
        self._expect_end_block()
        return For(variable, iterable, body, location=opener.location)

    def _expect_end_block(self) -> None:
        """Consume ``{{ end }}``: BLOCK_START, END, BLOCK_END in that order."""
        expected = (TokenType.BLOCK_START, TokenType.END, TokenType.BLOCK_END)
        for offset, token_type in enumerate(expected):
            token = self._peek(offset)
            if token is None or token.type is not token_type:
                lineno, col = self._position_of(token)
                raise MissingEndBlockError(
                    "Expected '{{ end }}'", lineno, col, self._source_file
                )

        for _ in expected:
            self._advance()
