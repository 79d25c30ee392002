"""Inclusion-list operators -> $in, $nin."""

from __future__ import annotations

from typing import Any

from docmap_specifications.operators import WhereOperator


def compile_set(field: str, op: str, val: Any) -> dict[str, Any] | None:
    """Compile inclusion operators. Returns None if not a set op.

    An empty list is kept as-is: ``{"$in": []}`` matches no document.
    """
    try:
        where_op = WhereOperator(op)
    except ValueError:
        return None
    if where_op == WhereOperator.INQ:
        return {field: {"$in": val if isinstance(val, list) else [val]}}
    if where_op == WhereOperator.NIN:
        return {field: {"$nin": val if isinstance(val, list) else [val]}}
    return None
