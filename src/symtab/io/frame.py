"""
Polars exports of a manager's contents for inspection and ad-hoc analysis.

Purpose
- entities_frame: one row per canonical entity in id order.
- keys_frame: one row per registered text key (several keys may share an id).

Notes
- These frames are diagnostics, not a persistence format; there is no reader.
- Pydantic entities are dumped in JSON mode, so tuple fields become list columns.
"""

from __future__ import annotations

from typing import Any

import polars as pl

from symtab.core.manager import NumberedManager, StringBaseNumberedManager

__all__ = ["entities_frame", "keys_frame"]


def _entity_row(obj: Any) -> dict[str, Any]:
    if hasattr(obj, "model_dump"):
        return {"id": obj.id, **obj.model_dump(mode="json", exclude={"id"})}
    return {"id": obj.id, "value": str(obj)}


def entities_frame(manager: NumberedManager[Any, Any, Any]) -> pl.DataFrame:
    """
    Materialize the canonical entities of ``manager``.

    Returns:
        pl.DataFrame: ``id`` (Int64) followed by the entity's content fields.
    """
    rows = [_entity_row(obj) for obj in manager.values()]
    if not rows:
        return pl.DataFrame(schema={"id": pl.Int64})
    df = pl.DataFrame(rows, infer_schema_length=None)
    return df.with_columns(pl.col("id").cast(pl.Int64))


def keys_frame(manager: StringBaseNumberedManager[Any, Any]) -> pl.DataFrame:
    """
    Materialize the text index of ``manager`` in registration order.

    Returns:
        pl.DataFrame: ``key`` (Utf8), ``id`` (Int64).
    """
    mappings = manager.export_mappings()
    return pl.DataFrame(
        {"key": list(mappings.keys()), "id": [int(i) for i in mappings.values()]},
        schema={"key": pl.Utf8, "id": pl.Int64},
    )
