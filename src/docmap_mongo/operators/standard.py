"""Standard comparison operators for MongoDB query compilation."""

from __future__ import annotations

from typing import Any

from docmap_specifications.operators import WhereOperator

from ..exceptions import MongoQueryError

_MONGO_OP_MAP: dict[WhereOperator, str] = {
    WhereOperator.EQ: "$eq",
    WhereOperator.NEQ: "$ne",
    WhereOperator.GT: "$gt",
    WhereOperator.GTE: "$gte",
    WhereOperator.LT: "$lt",
    WhereOperator.LTE: "$lte",
}


def compile_standard(field: str, op: str, val: Any) -> dict[str, Any] | None:
    """Compile comparison operators to MongoDB query fragments."""
    try:
        where_op = WhereOperator(op)
    except ValueError:
        return None

    mongo_op = _MONGO_OP_MAP.get(where_op)
    if mongo_op:
        return {field: {mongo_op: val}}

    if where_op == WhereOperator.BETWEEN:
        lo, hi = _validate_range_operand(val)
        return {field: {"$gte": lo, "$lte": hi}}

    return None


def _validate_range_operand(val: Any) -> tuple[Any, Any]:
    if not isinstance(val, list | tuple) or len(val) != 2:
        raise MongoQueryError("between requires a list of two values")
    return val[0], val[1]
