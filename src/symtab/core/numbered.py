"""
Numbered capability and the pydantic base model for interned value objects.

A numbered entity carries an id that starts unassigned and is set exactly once,
when a manager turns an unassigned representative into its canonical,
id-bearing form. Identity for de-duplication is the entity's *content*, never
its id.

Responsibilities
- Define the Numbered protocol managers rely on (id, content_key, with_id).
- Provide NumberedModel, a frozen pydantic v2 base whose equality and hash are
  content-based (every field except ``id``).
- Enforce the unassigned -> assigned transition in one place (with_id).

Notes:
    - The id is either unassigned (``None``) or a non-negative int. There is no
      setter; ``with_id`` returns a new instance and refuses to renumber.
    - Domain types whose fields are not hashable should override content_key.

Examples:
    >>> from symtab.core.numbered import NumberedModel
    >>> class Label(NumberedModel):
    ...     name: str
    >>> a = Label(name="x")
    >>> b = a.with_id(4)
    >>> (a.id, b.id, a == b)
    (None, 4, True)
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Any, Protocol, Self, runtime_checkable

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import AlreadyNumberedError
from .typing import EntityId

__all__ = [
    "Numbered",
    "NumberedModel",
]


@runtime_checkable
class Numbered(Protocol):
    """Capability a manager needs from the values it interns."""

    @property
    def id(self) -> EntityId | None: ...

    def content_key(self) -> Hashable: ...

    def with_id(self, new_id: int) -> Self: ...


class NumberedModel(BaseModel):
    """
    Frozen value object with a once-assignable id and content equality.

    Attributes:
        id (EntityId | None): Dense id given by a manager; ``None`` until assigned.

    Notes:
        - ``==`` and ``hash`` ignore ``id``: an unassigned representative equals
          its canonical counterpart.
        - Subclasses declare content fields only; they inherit frozen/forbid config.

    Raises:
        pydantic.ValidationError: If ``id`` is negative.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: EntityId | None = None

    @field_validator("id")
    @classmethod
    def _id_non_negative(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError(f"id must be non-negative, got {v}")
        return v

    @property
    def is_numbered(self) -> bool:
        return self.id is not None

    def content_key(self) -> Hashable:
        """
        Return the pre-id identity of this entity.

        Returns:
            Hashable: ``(type, field values...)`` over every field except ``id``.
        """
        fields = tuple(getattr(self, name) for name in type(self).model_fields if name != "id")
        return (type(self), *fields)

    def with_id(self, new_id: int) -> Self:
        """
        Return a copy of this entity carrying ``new_id``.

        Raises:
            AlreadyNumberedError: If this entity already has an id.
            ValueError: If ``new_id`` is negative.
        """
        if self.id is not None:
            raise AlreadyNumberedError(f"{self!r} already has an id: {self.id}")
        if new_id < 0:
            raise ValueError(f"id must be non-negative, got {new_id}")
        return self.model_copy(update={"id": EntityId(new_id)})

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, NumberedModel):
            return NotImplemented
        return self.content_key() == other.content_key()

    def __hash__(self) -> int:
        return hash(self.content_key())
