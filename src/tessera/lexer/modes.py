"""Lexer operating modes.

This module defines the two-state machine the lexer runs on.
"""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Lexer operating modes.

    The lexer switches between modes on block delimiters:
    - TEXT: Outside code blocks, characters are copied verbatim
    - CODE: Inside ``{{ ... }}``, characters form expression tokens

    """

    TEXT = auto()  # Literal template text
    CODE = auto()  # Inside a code block
