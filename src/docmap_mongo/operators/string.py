"""Pattern operators -> $regex, $options, $not."""

from __future__ import annotations

import re
from typing import Any

from docmap_specifications.operators import WhereOperator

from ..exceptions import MongoQueryError

_SLASH_REGEX = re.compile(r"^/(?P<pattern>.*)/(?P<flags>[imsx]*)$", re.DOTALL)
_FLAG_BITS: dict[str, int] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


def _split_regexp(val: Any) -> tuple[str, str]:
    """Return ``(pattern, options)`` from a string, ``/pattern/flags`` or re.Pattern."""
    if isinstance(val, re.Pattern):
        options = "".join(f for f, bit in _FLAG_BITS.items() if val.flags & bit)
        return val.pattern, options
    if not isinstance(val, str):
        raise MongoQueryError(f"Pattern operator requires a string, got {val!r}")
    match = _SLASH_REGEX.match(val)
    if match:
        return match.group("pattern"), match.group("flags")
    return val, ""


def _negated(field: str, pattern: str, options: str) -> dict[str, Any]:
    flags = 0
    for flag in options:
        flags |= _FLAG_BITS[flag]
    try:
        return {field: {"$not": re.compile(pattern, flags)}}
    except re.error as e:
        raise MongoQueryError(f"Invalid pattern {pattern!r}: {e}") from e


def compile_string(field: str, op: str, val: Any) -> dict[str, Any] | None:
    """Compile pattern operators to MongoDB $regex. Returns None if not a pattern op."""
    try:
        where_op = WhereOperator(op)
    except ValueError:
        return None
    if where_op not in (
        WhereOperator.LIKE,
        WhereOperator.NLIKE,
        WhereOperator.ILIKE,
        WhereOperator.NILIKE,
        WhereOperator.REGEXP,
    ):
        return None

    pattern, options = _split_regexp(val)
    if where_op in (WhereOperator.ILIKE, WhereOperator.NILIKE) and "i" not in options:
        options += "i"
    if where_op in (WhereOperator.NLIKE, WhereOperator.NILIKE):
        return _negated(field, pattern, options)
    if options:
        return {field: {"$regex": pattern, "$options": options}}
    return {field: {"$regex": pattern}}
