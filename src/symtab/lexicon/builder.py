"""
Vocabulary building from a token stream.

Counts tokens, gives every frequent token its own id, and either drops rare
tokens (they resolve to the sentinel) or registers their template so related
unseen forms share one entry.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

import structlog

from symtab.core.policies import MissPolicyKind

from .config import LexiconSettings
from .word import WordManager

__all__ = ["build_vocabulary"]

logger = structlog.get_logger()


def build_vocabulary(tokens: Iterable[str], settings: LexiconSettings | None = None) -> WordManager:
    """
    Build a WordManager from ``tokens``.

    Args:
        tokens: Surface forms in corpus order.
        settings: Lexicon settings; loaded with ``LexiconSettings.load()`` when None.

    Returns:
        WordManager: Tokens with ``count >= min_count`` registered in first-seen
        order after the sentinel. With the template_fallback policy, rarer tokens
        have their template registered instead.
    """
    settings = settings or LexiconSettings.load()
    manager = WordManager.from_settings(settings)
    counts = Counter(tokens)
    use_templates = manager.policy.kind is MissPolicyKind.TEMPLATE_FALLBACK

    rare = 0
    for surface, count in counts.items():
        if count >= settings.min_count:
            manager.get_or_create(surface)
            continue
        rare += 1
        if use_templates:
            template = manager.register_template_for(surface)
            logger.debug("template_registered", surface=surface, template=template.surface, id=template.id)

    logger.info(
        "vocabulary_built",
        size=manager.size(),
        distinct_tokens=len(counts),
        rare_tokens=rare,
        miss_policy=manager.policy.kind.value,
        min_count=settings.min_count,
    )
    return manager
