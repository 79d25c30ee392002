from __future__ import annotations

from typing import Any

from .base import BaseSpecification
from .exceptions import OperatorNotFoundError
from .operators import FIELD_OPERATORS, WhereOperator


class AttributeSpecification(BaseSpecification):
    """
    Specification that checks a single property value.

    The leaf of a where-clause tree: ``attr`` is the application-facing
    property name, never the store's field name. Translation to store field
    names happens in the persistence layer.
    """

    def __init__(self, attr: str, op: WhereOperator | str, val: Any) -> None:
        if isinstance(op, str) and not isinstance(op, WhereOperator):
            if op.lower() not in FIELD_OPERATORS:
                raise OperatorNotFoundError(op, sorted(FIELD_OPERATORS))
            op = WhereOperator(op.lower())
        self.attr = attr
        self.op = op
        self.val = val

    def __repr__(self) -> str:
        return f"AttributeSpecification({self.attr!r}, {self.op.value!r}, {self.val!r})"

    # -- serialisation -------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": self.op.value,
            "attr": self.attr,
            "val": self.val,
        }
