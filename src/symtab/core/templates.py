"""
Template extractors for the template-fallback miss policy.

A template extractor collapses rare surface forms into a coarser canonical text
("Paris1984" -> "paris0000"), so unseen keys can resolve to a registered
template entity instead of the sentinel. Extractors are pure ``str -> str``
functions; the registry maps lower_snake names to them for configuration.

Examples:
    >>> from symtab.core.templates import template_from_value, word_shape
    >>> template_from_value("lower_digits")("Route66")
    'route00'
    >>> word_shape("McDonald's-1984")
    "XxXx'x-d"
"""

from __future__ import annotations

import re
from typing import Final

from .constants import DIGIT_PLACEHOLDER
from .errors import TemplateError
from .typing import TemplateExtractor

__all__ = [
    "identity",
    "lowercase",
    "replace_digits",
    "strip_digits",
    "word_shape",
    "compose",
    "TEMPLATE_EXTRACTORS",
    "template_from_value",
]

_DIGIT_RE = re.compile(r"\d")


def identity(text: str) -> str:
    return text


def lowercase(text: str) -> str:
    return text.lower()


def replace_digits(text: str, placeholder: str = DIGIT_PLACEHOLDER) -> str:
    return _DIGIT_RE.sub(placeholder, text)


def strip_digits(text: str) -> str:
    return _DIGIT_RE.sub("", text)


def _shape_char(ch: str) -> str:
    if ch.isdigit():
        return "d"
    if ch.isupper():
        return "X"
    if ch.islower():
        return "x"
    return ch


def word_shape(text: str) -> str:
    """
    Map characters to shape classes and collapse repeated classes.

    Upper case becomes ``X``, lower case ``x``, digits ``d``; other characters
    are kept. ``"Obama"`` -> ``"Xx"``, ``"B-52"`` -> ``"X-d"``.
    """
    out: list[str] = []
    for ch in text:
        cls = _shape_char(ch)
        if out and out[-1] == cls and cls in ("X", "x", "d"):
            continue
        out.append(cls)
    return "".join(out)


def compose(*extractors: TemplateExtractor) -> TemplateExtractor:
    """Chain extractors left to right."""

    def _composed(text: str) -> str:
        for extract in extractors:
            text = extract(text)
        return text

    return _composed


TEMPLATE_EXTRACTORS: Final[dict[str, TemplateExtractor]] = {
    "identity": identity,
    "lower": lowercase,
    "digits": replace_digits,
    "lower_digits": compose(lowercase, replace_digits),
    "shape": word_shape,
}


def template_from_value(name: str) -> TemplateExtractor:
    """
    Resolve a template extractor by name.

    Raises:
        TemplateError: If no extractor is registered under the normalized name.
    """
    normalized = name.strip().lower().replace("-", "_")
    try:
        return TEMPLATE_EXTRACTORS[normalized]
    except KeyError as exc:
        allowed = ", ".join(sorted(TEMPLATE_EXTRACTORS))
        raise TemplateError(f"unknown template {name!r}; expected one of: {allowed}") from exc
