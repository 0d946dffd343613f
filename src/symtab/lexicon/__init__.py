"""
symtab.lexicon — Word and category symbol tables built on symtab.core.

## Public API
- Word / WordManager — surface forms with a pre-registered ``<UNK>`` sentinel.
- Category / CategoryManager — ``BASE[features]`` categories; lookup also
  matches by content, so feature order does not matter.
- LexiconSettings — configuration (env > TOML > defaults).
- build_vocabulary — frequency-thresholded word table from a token stream.

## Import DAG discipline
- Depends on stdlib, pydantic, structlog, and symtab.core.
- MUST NOT import symtab.io.
"""

from __future__ import annotations

from .builder import build_vocabulary
from .category import Category, CategoryManager, CategoryParseError
from .config import LexiconSettings
from .word import Word, WordManager

__all__ = [
    "Category",
    "CategoryManager",
    "CategoryParseError",
    "LexiconSettings",
    "Word",
    "WordManager",
    "build_vocabulary",
]
