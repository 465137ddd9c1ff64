"""Mode-specific scanners for the Tessera lexer.

Each scanner is a mixin that provides scanning logic for one lexer mode
(TEXT, CODE) or one family of literals.
"""

from __future__ import annotations

from tessera.lexer.scanners.code import CodeScannerMixin
from tessera.lexer.scanners.literals import LiteralScannerMixin
from tessera.lexer.scanners.text import TextScannerMixin

__all__ = [
    "CodeScannerMixin",
    "LiteralScannerMixin",
    "TextScannerMixin",
]
