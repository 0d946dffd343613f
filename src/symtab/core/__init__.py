"""
Core package for symtab interning contracts (numbered entities, managers, miss policies, templates).

## Contracts (single source of truth)
- Numbered — once-assignable id plus content identity (pydantic NumberedModel base).
- Managers — NumberedManager (dedup table + dense id array) and the text-keyed
  StringBaseNumberedManager.
- Policies — OptionReturner, UnkObjectReturner, UnkWithTemplateReturner for lookup misses.
- Templates — pure text normalizers for the template-fallback policy.
- Errors/Constants/Typing — exception taxonomy, defaults, EntityId.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO and no logging.
- Ids are dense, start at 0, and are never reused.
- Lookup misses are data (policy results), never exceptions.

## Downstream usage
- symtab.lexicon — Word/Category managers, configuration, vocabulary building.
- symtab.io — polars exports of a manager for inspection.

## Examples
```python
from symtab.core import NumberedModel, StringBaseNumberedManager, UnkObjectReturner

class Token(NumberedModel):
    text: str

tokens = StringBaseNumberedManager(lambda s: Token(text=s), UnkObjectReturner(unknown_key="<UNK>"))
tokens.get_or_create("cat").id  # 1 (the sentinel took id 0)
tokens.get("bird") == tokens.unknown()  # True
```
"""

from __future__ import annotations

from .errors import AlreadyNumberedError, NumberingError, PolicyError, TemplateError, UnknownIdError
from .manager import NumberedManager, StringBaseNumberedManager
from .numbered import Numbered, NumberedModel
from .policies import (
    MissPolicy,
    MissPolicyKind,
    OptionReturner,
    UnkObjectReturner,
    UnkWithTemplateReturner,
    make_policy,
    miss_policy_kind_from_value,
)
from .templates import TEMPLATE_EXTRACTORS, template_from_value
from .typing import EntityId

__all__ = [
    "AlreadyNumberedError",
    "EntityId",
    "MissPolicy",
    "MissPolicyKind",
    "Numbered",
    "NumberedManager",
    "NumberedModel",
    "NumberingError",
    "OptionReturner",
    "PolicyError",
    "StringBaseNumberedManager",
    "TEMPLATE_EXTRACTORS",
    "TemplateError",
    "UnkObjectReturner",
    "UnkWithTemplateReturner",
    "UnknownIdError",
    "make_policy",
    "miss_policy_kind_from_value",
    "template_from_value",
]
