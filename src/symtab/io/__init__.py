"""
symtab.io — Polars views over symtab managers.

## Public API
- entities_frame — canonical entities as a DataFrame (id + content columns).
- keys_frame — text index as a DataFrame (key, id).

## Import DAG discipline
- Depends only on stdlib, polars, and symtab.core.
"""

from __future__ import annotations

from .frame import entities_frame, keys_frame

__all__ = [
    "entities_frame",
    "keys_frame",
]
