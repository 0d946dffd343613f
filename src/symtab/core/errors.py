"""
Core exception types raised by id assignment, id lookup, and miss policies.

Provides typed exceptions for core-domain failures:
- NumberingError as the common base (also raised when a create-with-id hook
  breaks its contract).
- AlreadyNumberedError for the assignment precondition (entity already has an id).
- UnknownIdError for id lookups outside ``[0, size)``.
- PolicyError for miss-policy misuse (unknown kind, rebinding, wrong policy).
- TemplateError for unknown template extractor names.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Lookup misses are never errors; they are resolved by the active miss policy.
    - Each error also derives from the matching builtin so callers may catch
      ``ValueError``/``IndexError``/``TypeError`` without importing symtab.

Examples:
    Catch a double registration.

    >>> from symtab.core.errors import AlreadyNumberedError
    >>> try:
    ...     raise AlreadyNumberedError("entity already carries id 3")
    ... except ValueError as e:
    ...     msg = str(e)
    >>> "id 3" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "NumberingError",
    "AlreadyNumberedError",
    "UnknownIdError",
    "PolicyError",
    "TemplateError",
]


class NumberingError(Exception):
    """Base class for symtab failures."""


class AlreadyNumberedError(NumberingError, ValueError):
    """Entity handed to id assignment already carries an id."""


class UnknownIdError(NumberingError, IndexError):
    """Id is not in ``[0, size)`` for the manager it was looked up in."""


class PolicyError(NumberingError, TypeError):
    """Miss policy misuse: unknown kind, missing hook, or bound twice."""


class TemplateError(NumberingError, ValueError):
    """Unknown template extractor name."""
