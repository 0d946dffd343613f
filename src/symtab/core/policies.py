"""
Miss-handling policies for string-keyed managers.

A policy decides what ``StringBaseNumberedManager.get`` returns when a key was
never registered. Policies are strategy objects handed to the manager at
construction and bound to exactly one manager.

Responsibilities
- Define MissPolicyKind (lower_snake values) and its normalizer.
- Provide the three policies:
    - OptionReturner: strict; a miss yields ``None``.
    - UnkObjectReturner: a miss yields a sentinel entity.
    - UnkWithTemplateReturner: a miss retries once on ``extract_template(key)``
      through the sentinel path, then yields the sentinel.
- Build a policy from configuration values (make_policy).

Notes:
    - A policy reads and registers only through the manager it is bound to.
    - ``get`` never registers anything; only ``get_or_create`` and
      ``register_template_for`` transition a key to registered.
    - The template retry goes through ``UnkObjectReturner.get`` and never back
      through the template policy, so ``extract_template(x) == x`` terminates.

Examples:
    >>> from symtab.core.policies import miss_policy_kind_from_value, MissPolicyKind
    >>> miss_policy_kind_from_value(" Sentinel ") == MissPolicyKind.SENTINEL
    True
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from .errors import PolicyError
from .numbered import Numbered
from .typing import TemplateExtractor

if TYPE_CHECKING:
    from .manager import StringBaseNumberedManager

__all__ = [
    "MissPolicyKind",
    "MissPolicy",
    "OptionReturner",
    "UnkObjectReturner",
    "UnkWithTemplateReturner",
    "miss_policy_kind_from_value",
    "make_policy",
]

T = TypeVar("T", bound=Numbered)
G = TypeVar("G")


class MissPolicyKind(Enum):
    STRICT_OPTIONAL = "strict_optional"
    SENTINEL = "sentinel"
    TEMPLATE_FALLBACK = "template_fallback"


def miss_policy_kind_from_value(value: str | MissPolicyKind) -> MissPolicyKind:
    """
    Normalize a policy name to MissPolicyKind.

    Raises:
        PolicyError: If the value names no policy.
    """
    if isinstance(value, MissPolicyKind):
        return value
    normalized = value.strip().lower().replace("-", "_")
    try:
        return MissPolicyKind(normalized)
    except ValueError as exc:
        allowed = ", ".join(kind.value for kind in MissPolicyKind)
        raise PolicyError(f"unknown miss policy {value!r}; expected one of: {allowed}") from exc


class MissPolicy(ABC, Generic[T, G]):
    """Base strategy: what ``get`` returns for a key, given ``get_or_none``."""

    kind: ClassVar[MissPolicyKind]

    def __init__(self) -> None:
        self._manager: StringBaseNumberedManager[T, G] | None = None

    def _check_bindable(self, manager: StringBaseNumberedManager[T, G]) -> None:
        if self._manager is not None and self._manager is not manager:
            raise PolicyError(f"{type(self).__name__} is already bound to {self._manager!r}")

    def bind(self, manager: StringBaseNumberedManager[T, G]) -> None:
        """
        Attach this policy to its manager.

        Raises:
            PolicyError: If the policy is already bound to another manager.
        """
        self._check_bindable(manager)
        self._manager = manager

    @property
    def manager(self) -> StringBaseNumberedManager[T, G]:
        """
        The manager this policy serves.

        Raises:
            PolicyError: If the policy has not been bound yet.
        """
        if self._manager is None:
            raise PolicyError(f"{type(self).__name__} is not bound to a manager")
        return self._manager

    @property
    @abstractmethod
    def unknown(self) -> G: ...

    @abstractmethod
    def get(self, key: str) -> G: ...


class OptionReturner(MissPolicy[T, T | None]):
    """Strict policy: a miss is ``None`` and the caller handles it."""

    kind = MissPolicyKind.STRICT_OPTIONAL

    @property
    def unknown(self) -> None:
        return None

    def get(self, key: str) -> T | None:
        return self.manager.get_or_none(key)


class UnkObjectReturner(MissPolicy[T, T]):
    """
    Sentinel policy: a miss yields a fixed unknown entity.

    Args:
        unknown (T | None): Explicit sentinel entity (registered or not).
        unknown_key (str | None): Key registered in the manager at bind time;
            its canonical entity becomes the sentinel.

    Raises:
        PolicyError: Unless exactly one of ``unknown``/``unknown_key`` is given.
    """

    kind = MissPolicyKind.SENTINEL

    def __init__(self, unknown: T | None = None, unknown_key: str | None = None) -> None:
        super().__init__()
        if (unknown is None) == (unknown_key is None):
            raise PolicyError(f"{type(self).__name__} needs exactly one of unknown or unknown_key")
        self._unknown = unknown
        self.unknown_key = unknown_key

    def bind(self, manager: StringBaseNumberedManager[T, T]) -> None:
        # The binding is recorded only once the sentinel key is registered.
        self._check_bindable(manager)
        if self.unknown_key is not None and self._unknown is None:
            self._unknown = manager.get_or_create(self.unknown_key)
        super().bind(manager)

    @property
    def unknown(self) -> T:
        if self._unknown is None:
            raise PolicyError(f"{type(self).__name__} is not bound; sentinel key {self.unknown_key!r} unresolved")
        return self._unknown

    def get(self, key: str) -> T:
        found = self.manager.get_or_none(key)
        if found is not None:
            return found
        return self.unknown


class UnkWithTemplateReturner(UnkObjectReturner[T]):
    """
    Template-fallback policy for rare or unseen surface forms.

    On a miss the key is normalized with ``extract_template`` and looked up once
    more through ``UnkObjectReturner.get``; a second miss yields the sentinel.
    """

    kind = MissPolicyKind.TEMPLATE_FALLBACK

    def __init__(
        self,
        extract_template: TemplateExtractor,
        unknown: T | None = None,
        unknown_key: str | None = None,
    ) -> None:
        super().__init__(unknown=unknown, unknown_key=unknown_key)
        self.extract_template = extract_template

    def get(self, key: str) -> T:
        found = self.manager.get_or_none(key)
        if found is not None:
            return found
        return super().get(self.extract_template(key))

    def register_template_for(self, original: str) -> T:
        return self.manager.get_or_create(self.extract_template(original))


def make_policy(
    kind: str | MissPolicyKind,
    *,
    unknown: T | None = None,
    unknown_key: str | None = None,
    extract_template: TemplateExtractor | None = None,
) -> MissPolicy[T, T] | MissPolicy[T, T | None]:
    """
    Build a fresh policy from a kind value.

    Args:
        kind: Policy name or MissPolicyKind.
        unknown: Sentinel entity for sentinel/template policies.
        unknown_key: Sentinel key for sentinel/template policies.
        extract_template: Normalizer, required for ``template_fallback``.

    Returns:
        MissPolicy: Unbound policy instance.

    Raises:
        PolicyError: For unknown kinds, or template_fallback without an extractor.

    Notes:
        ``unknown``/``unknown_key``/``extract_template`` are ignored by
        ``strict_optional``.
    """
    resolved = miss_policy_kind_from_value(kind)
    if resolved is MissPolicyKind.STRICT_OPTIONAL:
        return OptionReturner()
    if resolved is MissPolicyKind.SENTINEL:
        return UnkObjectReturner(unknown=unknown, unknown_key=unknown_key)
    if extract_template is None:
        raise PolicyError("template_fallback policy needs an extract_template function")
    return UnkWithTemplateReturner(extract_template, unknown=unknown, unknown_key=unknown_key)
