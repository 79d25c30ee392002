"""
Query options for filtering, ordering, pagination, and projection.

``QueryOptions`` wraps a where specification with result-shaping
parameters. The specification defines *what* to match; ``QueryOptions``
defines *how* results are returned.

These options are consumed by the persistence layer, not by the
specification itself. Field names are application property names; the
persistence layer maps the id property to the store's identity field.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .base import BaseSpecification
from .exceptions import WhereParseError
from .parser import WhereParser

_DIRECTIONS = frozenset({"ASC", "DESC"})


@dataclass(frozen=True)
class QueryOptions:
    """
    Immutable container for a parsed filter.

    Attributes:
        specification: The where specification (``None`` = match everything).
        limit: Maximum number of results.
        skip: Number of results to skip.
        order_by: Ordering as ``(property, "ASC" | "DESC")`` pairs.
        fields: Projection as ``{property: include}``; empty means all fields.
    """

    specification: BaseSpecification | None = None
    limit: int | None = None
    skip: int | None = None
    order_by: list[tuple[str, str]] = field(default_factory=list)
    fields: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_filter(
        cls,
        filter_: Mapping[str, Any] | None,
        *,
        parser: WhereParser | None = None,
    ) -> QueryOptions:
        """Build options from a loopback-style filter object.

        Recognised keys: ``where``, ``order``, ``limit``, ``skip`` (or
        ``offset``), ``fields``.
        """
        if not filter_:
            return cls()
        if not isinstance(filter_, Mapping):
            raise WhereParseError("Filter must be an object", path="filter")
        parser = parser or WhereParser()
        skip = filter_.get("skip", filter_.get("offset"))
        return cls(
            specification=parser.parse(filter_.get("where")),
            limit=_non_negative_int(filter_.get("limit"), "limit"),
            skip=_non_negative_int(skip, "skip"),
            order_by=_parse_order(filter_.get("order")),
            fields=_parse_fields(filter_.get("fields")),
        )


def _non_negative_int(value: Any, name: str) -> int | None:
    if value is None:
        return None
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise WhereParseError(f"{name} must be an integer", path=name) from e
    if number < 0:
        raise WhereParseError(f"{name} must not be negative", path=name)
    return number


def _parse_order(raw: Any) -> list[tuple[str, str]]:
    if not raw:
        return []
    items = [raw] if isinstance(raw, str) else list(raw)
    result: list[tuple[str, str]] = []
    for item in items:
        parts = str(item).split()
        if not parts or len(parts) > 2:
            raise WhereParseError(f"Invalid order clause: {item!r}", path="order")
        direction = parts[1].upper() if len(parts) == 2 else "ASC"
        if direction not in _DIRECTIONS:
            raise WhereParseError(f"Invalid order direction: {item!r}", path="order")
        result.append((parts[0], direction))
    return result


def _parse_fields(raw: Any) -> dict[str, bool]:
    if not raw:
        return {}
    if isinstance(raw, str):
        return {raw: True}
    if isinstance(raw, Mapping):
        return {str(k): bool(v) for k, v in raw.items()}
    return dict.fromkeys((str(f) for f in raw), True)
