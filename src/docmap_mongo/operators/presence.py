"""Presence checks -> $exists."""

from __future__ import annotations

from typing import Any

from docmap_specifications.operators import WhereOperator


def compile_presence(field: str, op: str, val: Any) -> dict[str, Any] | None:
    """Compile the ``exists`` operator. Returns None for anything else."""
    try:
        where_op = WhereOperator(op)
    except ValueError:
        return None
    if where_op == WhereOperator.EXISTS:
        return {field: {"$exists": bool(val)}}
    return None
