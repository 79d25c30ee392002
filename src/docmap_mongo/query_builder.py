"""Mongo query builder from where-clause specifications."""

from __future__ import annotations

from typing import Any

from docmap_specifications.operators import VALUE_OPERATORS, WhereOperator

from .codec import IdentifierCodec
from .exceptions import MongoQueryError
from .model import ModelIdSpec
from .operators import (
    compile_presence,
    compile_set,
    compile_standard,
    compile_string,
)

_COMPILERS = [
    compile_standard,
    compile_set,
    compile_string,
    compile_presence,
]


class MongoQueryBuilder:
    """Compiles specifications (via ``to_dict()``) to MongoDB query documents.

    Every leaf is translated against the model's :class:`ModelIdSpec`: the id
    property becomes ``_id`` and literal operands of id-typed properties are
    encoded with :class:`IdentifierCodec`. Encoding failures propagate; a
    clause is never dropped.
    """

    def __init__(self, codec: IdentifierCodec | None = None) -> None:
        self._codec = codec or IdentifierCodec()

    def build_match(self, spec: Any, id_spec: ModelIdSpec) -> dict[str, Any]:
        """Build a filter document from a specification or its dict AST.

        ``None`` and empty dicts mean "match everything".
        """
        if spec is None:
            return {}
        if hasattr(spec, "to_dict"):
            data = spec.to_dict()
        elif isinstance(spec, dict):
            data = spec
        else:
            raise MongoQueryError("spec must be a specification or dict")
        if not data:
            return {}
        return self._compile_node(data, id_spec)

    def _compile_node(self, data: Any, id_spec: ModelIdSpec) -> dict[str, Any]:
        """Recursively compile spec dict to MongoDB filter."""
        if not isinstance(data, dict):
            raise MongoQueryError("Specification node must be a dict")
        op_str = str(data.get("op", "")).lower()
        if op_str in (WhereOperator.AND.value, WhereOperator.OR.value):
            conditions = data.get("conditions", [])
            if not conditions:
                # Empty AND matches everything, empty OR matches nothing.
                if op_str == WhereOperator.AND.value:
                    return {}
                return {"_id": {"$in": []}}
            compiled = [self._compile_node(c, id_spec) for c in conditions]
            return {f"${op_str}": compiled}
        return self._compile_leaf(data, id_spec)

    def _compile_leaf(
        self, data: dict[str, Any], id_spec: ModelIdSpec
    ) -> dict[str, Any]:
        """Compile a single attribute condition to a MongoDB query document."""
        op_str = str(data.get("op", "")).lower()
        attr = data.get("attr")
        if not attr:
            raise MongoQueryError(f"Specification missing 'attr': {data}")
        field = id_spec.store_field(attr)
        val = self._coerce(attr, op_str, data.get("val"), id_spec)
        for compiler in _COMPILERS:
            result = compiler(field, op_str, val)
            if result is not None:
                return result
        raise MongoQueryError(f"Unsupported operator {op_str!r} on {attr!r}")

    def _coerce(self, attr: str, op: str, val: Any, id_spec: ModelIdSpec) -> Any:
        declared = id_spec.type_of(attr)
        if declared is None or op not in VALUE_OPERATORS:
            return val
        ctx = {"model_name": id_spec.model_name, "property_name": attr}
        if isinstance(val, list | tuple | set | frozenset):
            return self._codec.encode_many(val, declared, **ctx)
        return self._codec.encode_for_store(val, declared, **ctx)

    def build_sort(
        self, order_by: list[tuple[str, str]] | None, id_spec: ModelIdSpec
    ) -> list[tuple[str, int]]:
        """Build MongoDB sort tuples from ``[(property, "ASC"|"DESC")]``."""
        if not order_by:
            return []
        return [
            (id_spec.store_field(name), -1 if str(direction).upper() == "DESC" else 1)
            for name, direction in order_by
        ]

    def build_project(
        self, fields: dict[str, bool] | None, id_spec: ModelIdSpec
    ) -> dict[str, int] | None:
        """Build $project stage. None means no projection.

        When any field is included, only included fields are returned (the
        id is kept unless explicitly excluded); otherwise the listed fields
        are excluded.
        """
        if not fields:
            return None
        included = [name for name, keep in fields.items() if keep]
        if included:
            project = {id_spec.store_field(name): 1 for name in included}
            if fields.get(id_spec.id_property) is False:
                project["_id"] = 0
            return project
        return {id_spec.store_field(name): 0 for name in fields}
