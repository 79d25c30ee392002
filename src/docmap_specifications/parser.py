"""Loopback-style where clauses -> specification tree."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .ast import AttributeSpecification
from .base import AndSpecification, BaseSpecification, OrSpecification
from .exceptions import OperatorNotFoundError, WhereParseError
from .operators import FIELD_OPERATORS, WhereOperator

# ``options`` rides alongside pattern operators: {"like": "J%", "options": "i"}
_OPTIONS_KEY = "options"
_CASE_INSENSITIVE: dict[WhereOperator, WhereOperator] = {
    WhereOperator.LIKE: WhereOperator.ILIKE,
    WhereOperator.NLIKE: WhereOperator.NILIKE,
}


class WhereParser:
    """Parse a where clause into :class:`BaseSpecification` nodes.

    Accepted shapes::

        {"name": "John"}                          # implicit eq
        {"seq": {"inq": [1, 2]}}                  # operator object
        {"age": {"gt": 18, "lt": 65}}             # several operators -> AND
        {"or": [{"name": "A"}, {"name": "B"}]}    # logical lists
        {"name": "A", "age": 30}                  # several keys -> AND

    A mapping value whose keys are all non-operators is an equality test
    against that sub-document.
    """

    def parse(self, where: Mapping[str, Any] | None) -> BaseSpecification | None:
        """Return the specification tree, or ``None`` when there is no filter."""
        if where is None:
            return None
        return self._parse_node(where, path="where")

    def _parse_node(self, data: Any, *, path: str) -> BaseSpecification | None:
        if not isinstance(data, Mapping):
            raise WhereParseError(
                f"Expected an object, got {type(data).__name__}", path=path
            )
        clauses: list[BaseSpecification] = []
        for key, value in data.items():
            key_path = f"{path}.{key}"
            if key in (WhereOperator.AND.value, WhereOperator.OR.value):
                logical = self._parse_logical(key, value, path=key_path)
                if logical is not None:
                    clauses.append(logical)
            else:
                clauses.extend(self._parse_field(key, value, path=key_path))
        if not clauses:
            return None
        if len(clauses) == 1:
            return clauses[0]
        return AndSpecification(*clauses)

    def _parse_logical(
        self, op: str, value: Any, *, path: str
    ) -> BaseSpecification | None:
        """AND or OR over the listed clauses.

        An empty clause matches everything: it drops out of an AND and makes
        an OR match everything (``None``). An OR with no clauses at all
        matches nothing.
        """
        if not isinstance(value, list | tuple):
            raise WhereParseError(f"'{op}' requires a list of clauses", path=path)
        children = [
            self._parse_node(item, path=f"{path}[{idx}]")
            for idx, item in enumerate(value)
        ]
        if op == WhereOperator.AND.value:
            return AndSpecification(*(c for c in children if c is not None))
        if any(c is None for c in children):
            return None
        return OrSpecification(*children)

    def _parse_field(
        self, attr: str, value: Any, *, path: str
    ) -> list[BaseSpecification]:
        if not isinstance(value, Mapping) or not value:
            return [AttributeSpecification(attr, WhereOperator.EQ, value)]

        keys = [str(k).lower() for k in value]
        if not any(k in FIELD_OPERATORS for k in keys):
            return [AttributeSpecification(attr, WhereOperator.EQ, dict(value))]

        options = value.get(_OPTIONS_KEY)
        specs: list[BaseSpecification] = []
        for raw_key, operand in value.items():
            key = str(raw_key).lower()
            if key == _OPTIONS_KEY:
                continue
            if key not in FIELD_OPERATORS:
                raise OperatorNotFoundError(key, sorted(FIELD_OPERATORS))
            op = WhereOperator(key)
            op, operand = self._apply_options(op, operand, options)
            specs.append(
                AttributeSpecification(
                    attr, op, self._normalise_operand(op, operand, path=path)
                )
            )
        return specs

    @staticmethod
    def _apply_options(
        op: WhereOperator, operand: Any, options: Any
    ) -> tuple[WhereOperator, Any]:
        if not options or not isinstance(options, str):
            return op, operand
        if "i" in options and op in _CASE_INSENSITIVE:
            return _CASE_INSENSITIVE[op], operand
        if op == WhereOperator.REGEXP and isinstance(operand, str):
            if not operand.startswith("/"):
                return op, f"/{operand}/{options}"
        return op, operand

    @staticmethod
    def _normalise_operand(op: WhereOperator, operand: Any, *, path: str) -> Any:
        if op in (WhereOperator.INQ, WhereOperator.NIN):
            if isinstance(operand, list | tuple | set | frozenset):
                return list(operand)
            return [operand]
        if op == WhereOperator.BETWEEN:
            if not isinstance(operand, list | tuple) or len(operand) != 2:
                raise WhereParseError(
                    "between requires a list of two values", path=path
                )
            return [operand[0], operand[1]]
        if op == WhereOperator.EXISTS:
            return bool(operand)
        return operand
