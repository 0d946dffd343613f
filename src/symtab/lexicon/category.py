"""
Syntactic categories and the category symbol table.

A category is a base label with an unordered feature set, written ``NP`` or
``NP[nom,sg]``. Feature order is not part of identity: ``NP[sg,nom]`` and
``NP[nom,sg]`` are the same category and share one id.

Notes:
    - CategoryManager broadens lookup: a key missing from the text index is
      parsed and matched by content against registered categories.
    - Unparsable keys are lookup misses; only the factory (get_or_create)
      raises CategoryParseError.
"""

from __future__ import annotations

import re

import structlog
from pydantic import field_validator

from symtab.core.errors import NumberingError
from symtab.core.manager import StringBaseNumberedManager
from symtab.core.numbered import NumberedModel
from symtab.core.policies import MissPolicy

__all__ = ["Category", "CategoryManager", "CategoryParseError"]

logger = structlog.get_logger()

_CATEGORY_RE = re.compile(r"^\s*([^\[\],\s]+)\s*(?:\[([^\[\]]*)\])?\s*$")


class CategoryParseError(NumberingError, ValueError):
    """Category text is not ``BASE`` or ``BASE[feature,...]``."""


class Category(NumberedModel):
    """
    Base label plus a sorted, de-duplicated feature tuple.

    Attributes:
        base (str): Category label, e.g. ``NP``.
        features (tuple[str, ...]): Feature names; normalized to sorted unique order.
    """

    base: str
    features: tuple[str, ...] = ()

    @field_validator("base")
    @classmethod
    def _base_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("category base must be non-empty")
        return v

    @field_validator("features")
    @classmethod
    def _features_canonical(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(sorted({f.strip() for f in v if f.strip()}))

    @classmethod
    def parse(cls, text: str) -> Category:
        """
        Parse ``BASE`` or ``BASE[f1,f2,...]``.

        Raises:
            CategoryParseError: If the text does not match the category form.
        """
        match = _CATEGORY_RE.match(text)
        if match is None:
            raise CategoryParseError(f"malformed category: {text!r}")
        base, raw_features = match.group(1), match.group(2)
        features = tuple(raw_features.split(",")) if raw_features else ()
        return cls(base=base, features=features)

    def render(self) -> str:
        if not self.features:
            return self.base
        return f"{self.base}[{','.join(self.features)}]"

    def __str__(self) -> str:
        return self.render()


class CategoryManager(StringBaseNumberedManager[Category, Category | None]):
    """Category table; strict misses by default."""

    def __init__(self, policy: MissPolicy[Category, Category | None] | None = None) -> None:
        super().__init__(policy=policy)

    def create_canonical_instance(self, key: str) -> Category:
        return Category.parse(key)

    def get_or_none(self, key: str) -> Category | None:
        found = super().get_or_none(key)
        if found is not None:
            return found
        try:
            candidate = Category.parse(key)
        except CategoryParseError:
            return None
        found = self.canonical_for(candidate)
        if found is not None:
            logger.debug("category_resolved_by_content", key=key, category=found.render(), id=found.id)
        return found
