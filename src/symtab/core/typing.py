"""
Lightweight typing aliases used across managers, policies, and templates.

This module contains no runtime logic and is zero-IO.

Examples:
    >>> from symtab.core.typing import EntityId
    >>> def next_id(i: EntityId) -> EntityId:
    ...     return EntityId(int(i) + 1)
    >>> next_id(EntityId(0))
    1
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import NewType

__all__ = [
    "EntityId",
    "ContentKey",
    "TemplateExtractor",
]

# Dense id handed out by a manager; equals the entity's index in values().
EntityId = NewType("EntityId", int)

# Pre-id identity view of an entity; what the dedup table is keyed on.
ContentKey = Hashable

TemplateExtractor = Callable[[str], str]
