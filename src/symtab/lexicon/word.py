"""Word entities and the word symbol table."""

from __future__ import annotations

from symtab.core.constants import DEFAULT_UNKNOWN_KEY
from symtab.core.manager import StringBaseNumberedManager
from symtab.core.numbered import NumberedModel
from symtab.core.policies import MissPolicy, UnkObjectReturner, make_policy
from symtab.core.templates import template_from_value

from .config import LexiconSettings

__all__ = ["Word", "WordManager"]


class Word(NumberedModel):
    """A surface form; two words are the same word when their surfaces match."""

    surface: str

    def __str__(self) -> str:
        return self.surface


class WordManager(StringBaseNumberedManager[Word, Word]):
    """
    Word table with a pre-registered unknown word.

    By default misses resolve to ``<UNK>``, which is registered first and so
    always has id 0 on a fresh manager.
    """

    def __init__(self, policy: MissPolicy[Word, Word] | None = None) -> None:
        super().__init__(policy=policy if policy is not None else UnkObjectReturner(unknown_key=DEFAULT_UNKNOWN_KEY))

    def create_canonical_instance(self, key: str) -> Word:
        return Word(surface=key)

    @classmethod
    def from_settings(cls, settings: LexiconSettings) -> WordManager:
        policy = make_policy(
            settings.miss_policy,
            unknown_key=settings.unknown_key,
            extract_template=template_from_value(settings.template),
        )
        return cls(policy)  # type: ignore[arg-type]
