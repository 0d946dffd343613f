"""
symtab — dense-id interning for tokens, categories, and labels.

Equal logical values always resolve to the same small integer id and the same
canonical instance. See ``symtab.core`` for the contracts, ``symtab.lexicon``
for ready-made word/category tables, and ``symtab.io`` for polars exports.
"""

from __future__ import annotations

from .core import (
    AlreadyNumberedError,
    EntityId,
    MissPolicyKind,
    NumberedManager,
    NumberedModel,
    NumberingError,
    OptionReturner,
    PolicyError,
    StringBaseNumberedManager,
    TemplateError,
    UnknownIdError,
    UnkObjectReturner,
    UnkWithTemplateReturner,
    make_policy,
)

__all__ = [
    "AlreadyNumberedError",
    "EntityId",
    "MissPolicyKind",
    "NumberedManager",
    "NumberedModel",
    "NumberingError",
    "OptionReturner",
    "PolicyError",
    "StringBaseNumberedManager",
    "TemplateError",
    "UnkObjectReturner",
    "UnkWithTemplateReturner",
    "UnknownIdError",
    "make_policy",
]

__version__ = "0.1.0"
