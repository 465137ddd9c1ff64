"""Parsing subsystem for the Tessera parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Token stream traversal and error construction
- `ExpressionParsingMixin`: Precedence-climbing expression grammar
- `BlockParsingMixin`: Text, code blocks, if/for constructs

Example:
    >>> from tessera.parsing import (
    ...     TokenNavigationMixin,
    ...     ExpressionParsingMixin,
    ...     BlockParsingMixin,
    ... )
    >>> class Parser(TokenNavigationMixin, ExpressionParsingMixin, BlockParsingMixin):
    ...     pass

"""

from tessera.parsing.blocks import BlockParsingMixin
from tessera.parsing.expressions import ExpressionParsingMixin
from tessera.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "TokenNavigationMixin",
    "ExpressionParsingMixin",
    "BlockParsingMixin",
]
