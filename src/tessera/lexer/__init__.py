"""Two-mode lexer for Tessera templates.

The lexer walks the source once, switching between TEXT mode (literal
template text) and CODE mode (expression tokens inside ``{{ ... }}``).

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode
├── core.py              # Lexer class (mixin composition + navigation)
├── modes.py             # LexerMode enum
└── scanners/            # Mode-specific scanners
    ├── text.py          # TEXT mode (literal text, block opening)
    ├── code.py          # CODE mode (operators, names, comments)
    └── literals.py      # String, number, and identifier literals

Usage:
    >>> from tessera.lexer import Lexer
    >>> for token in Lexer("Hi {{ name }}!").tokenize():
    ...     print(token)
Token(TEXT, 'Hi ', 1:1)
Token(BLOCK_START, '{{', 1:4)
Token(IDENTIFIER, 'name', 1:7)
Token(BLOCK_END, '}}', 1:12)
Token(TEXT, '!', 1:14)

"""

from tessera.lexer.core import Lexer
from tessera.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode"]
