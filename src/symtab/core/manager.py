"""
Numbered managers: the interning registries behind every symbol table.

A manager assigns dense ids to content-distinct entities and hands back one
canonical, id-bearing instance per content. Two structures move together:

- dedup table: insertion-ordered ``dict`` from content key to canonical instance;
- objects: append-only ``list`` indexed by id (``objects[i].id == i``).

Responsibilities
- NumberedManager: id assignment (assign_id), lookup by id (apply), iteration,
  and the debug text dump. Lookup by input is left to specializations.
- StringBaseNumberedManager: text-keyed specialization with an auxiliary
  ``str -> id`` index, a factory hook for canonical instances, and a pluggable
  miss policy for ``get``.

Notes:
    - Ids are never reused or renumbered; there is no removal.
    - assign_id validates everything before the first mutation, so a failed
      call leaves the manager unchanged.
    - Not thread-safe. Guard the whole manager with a single lock if shared.

Examples:
    >>> from symtab.core.manager import StringBaseNumberedManager
    >>> from symtab.core.numbered import NumberedModel
    >>> class Token(NumberedModel):
    ...     text: str
    >>> tokens = StringBaseNumberedManager(lambda s: Token(text=s))
    >>> [tokens.get_or_create(s).id for s in ("cat", "dog", "cat")]
    [0, 1, 0]
    >>> tokens.get("bird") is None
    True
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

from .errors import AlreadyNumberedError, NumberingError, PolicyError, UnknownIdError
from .numbered import Numbered
from .policies import MissPolicy, OptionReturner, UnkWithTemplateReturner
from .typing import ContentKey, EntityId

__all__ = [
    "NumberedManager",
    "StringBaseNumberedManager",
]

T = TypeVar("T", bound=Numbered)
I = TypeVar("I")  # noqa: E741
G = TypeVar("G")


def _default_create_with_id(original: Any, new_id: EntityId) -> Any:
    return original.with_id(new_id)


def _default_content_key(obj: Any) -> ContentKey:
    return obj.content_key()


class NumberedManager(ABC, Generic[T, I, G]):
    """
    Generic registry of numbered entities.

    Args:
        create_with_id: Hook building the canonical form of an unassigned entity
            with the given id. Defaults to ``original.with_id(new_id)``.
        content_key: Pre-id identity of an entity. Defaults to
            ``obj.content_key()``.

    Notes:
        Type parameters are the entity type ``T``, the lookup input ``I``, and
        the type ``G`` returned by ``get``.
    """

    def __init__(
        self,
        *,
        create_with_id: Callable[[T, EntityId], T] | None = None,
        content_key: Callable[[T], ContentKey] | None = None,
    ) -> None:
        self._canonical: dict[ContentKey, T] = {}
        self._objects: list[T] = []
        self._create_with_id = create_with_id or _default_create_with_id
        self._content_key = content_key or _default_content_key

    def values(self) -> tuple[T, ...]:
        """All canonical entities in id order."""
        return tuple(self._objects)

    def size(self) -> int:
        return len(self._objects)

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[T]:
        return iter(self._objects)

    def apply(self, i: int) -> T:
        """
        Look up an entity by id.

        Raises:
            UnknownIdError: If ``i`` is not in ``[0, size)``.
        """
        # Lists wrap negative indices; ids never do.
        if i < 0 or i >= len(self._objects):
            raise UnknownIdError(f"id {i} out of range for {type(self).__name__} of size {len(self._objects)}")
        return self._objects[i]

    def __getitem__(self, i: int) -> T:
        return self.apply(i)

    def _new_id(self) -> EntityId:
        return EntityId(len(self._objects))

    def _add_entry(self, key: ContentKey, with_id: T) -> None:
        self._canonical[key] = with_id
        self._objects.append(with_id)

    def assign_id(self, original: T) -> T:
        """
        Return the canonical entity for ``original``, numbering it if new.

        Args:
            original (T): Unassigned entity.

        Returns:
            T: The existing canonical entity when a content-equal one is
            registered; otherwise the newly numbered entity.

        Raises:
            AlreadyNumberedError: If ``original`` already has an id.
            NumberingError: If ``create_with_id`` returns an entity with the
                wrong id or different content.
        """
        if original.id is not None:
            raise AlreadyNumberedError(
                f"object given to assign_id {original!r} already has an id: {original.id}"
            )
        key = self._content_key(original)
        existing = self._canonical.get(key)
        if existing is not None:
            return existing

        new_id = self._new_id()
        with_id = self._create_with_id(original, new_id)
        if with_id.id != new_id:
            raise NumberingError(f"create_with_id returned id {with_id.id}, expected {new_id}")
        if self._content_key(with_id) != key:
            raise NumberingError(f"create_with_id changed the content of {original!r}")
        self._add_entry(key, with_id)
        return with_id

    def canonical_for(self, original: T) -> T | None:
        """Canonical entity content-equal to ``original``, if registered."""
        return self._canonical.get(self._content_key(original))

    @abstractmethod
    def get_or_create(self, item: I) -> T: ...

    @abstractmethod
    def get_or_none(self, item: I) -> T | None: ...

    @abstractmethod
    def get(self, item: I) -> G: ...

    @abstractmethod
    def unknown(self) -> G: ...

    def describe(self) -> str:
        body = "\n".join(f"({i}, {obj!r})" for i, obj in enumerate(self._objects))
        return f"{type(self).__name__} {{{body}}}"

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={len(self._objects)})"


class StringBaseNumberedManager(NumberedManager[T, str, G]):
    """
    Manager keyed by text, for entities with a 1-to-1 text form.

    Args:
        factory (Callable[[str], T] | None): Builds an unassigned canonical
            instance from raw text. Subclasses may override
            create_canonical_instance instead.
        policy (MissPolicy | None): What ``get`` returns on a miss. Defaults to
            OptionReturner. Bound to this manager on construction.
        create_with_id: See NumberedManager.
        content_key: See NumberedManager.

    Notes:
        - "Registered" means present in the text index (get_or_none). Override
          get_or_none to broaden matching without touching assignment.
        - Different texts whose canonical instances are content-equal share an id.
        - The policy is bound inside ``__init__``, and a sentinel key is
          registered there through create_canonical_instance. A subclass whose
          factory reads its own attributes must set them before calling
          ``super().__init__``.
    """

    def __init__(
        self,
        factory: Callable[[str], T] | None = None,
        policy: MissPolicy[T, G] | None = None,
        *,
        create_with_id: Callable[[T, EntityId], T] | None = None,
        content_key: Callable[[T], ContentKey] | None = None,
    ) -> None:
        super().__init__(create_with_id=create_with_id, content_key=content_key)
        self._index: dict[str, EntityId] = {}
        self._factory = factory
        self._policy: MissPolicy[T, G] = policy if policy is not None else OptionReturner()  # type: ignore[assignment]
        self._policy.bind(self)

    @property
    def policy(self) -> MissPolicy[T, G]:
        return self._policy

    def create_canonical_instance(self, key: str) -> T:
        if self._factory is None:
            raise NotImplementedError(
                f"{type(self).__name__} needs a factory or a create_canonical_instance override"
            )
        return self._factory(key)

    def get_or_create(self, key: str) -> T:
        """Return the entity registered under ``key``, registering it if new."""
        i = self._index.get(key)
        if i is not None:
            return self._objects[i]
        obj = self.assign_id(self.create_canonical_instance(key))
        self._index[key] = obj.id
        return obj

    def get_or_none(self, key: str) -> T | None:
        i = self._index.get(key)
        if i is None:
            return None
        return self._objects[i]

    def get(self, key: str) -> G:
        """Look up ``key`` without registering; misses go through the policy."""
        return self._policy.get(key)

    def unknown(self) -> G:
        return self._policy.unknown

    def register_template_for(self, key: str) -> T:
        """
        Register the template of ``key`` so related surface forms resolve.

        Raises:
            PolicyError: If the active policy has no template extractor.
        """
        if not isinstance(self._policy, UnkWithTemplateReturner):
            raise PolicyError(
                f"register_template_for needs a template_fallback policy, got {self._policy.kind.value}"
            )
        return self._policy.register_template_for(key)

    def export_mappings(self) -> dict[str, EntityId]:
        """Copy of the text index in registration order."""
        return dict(self._index)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get_or_none(key) is not None
