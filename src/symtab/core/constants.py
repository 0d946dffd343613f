"""
symtab core defaults.

Defines the sentinel key and digit placeholder consumed by templates and the
lexicon layer. This module is zero-IO and uses only the
Python standard library.

Notes:
    - Ids start at 0 and grow by one per new canonical entity.
    - A manager that pre-registers DEFAULT_UNKNOWN_KEY hands it id 0.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_UNKNOWN_KEY",
    "DIGIT_PLACEHOLDER",
]

# Surface form of the sentinel entity returned on lookup misses.
DEFAULT_UNKNOWN_KEY: str = "<UNK>"

# Replacement for each digit when building digit templates ("1984" -> "0000").
DIGIT_PLACEHOLDER: str = "0"
