"""
Errors raised while reading where clauses and filters.

Each error carries a machine-readable ``to_dict()`` payload so an HTTP
layer can return it as-is.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import Any

from docmap_core.exceptions import ValidationError


class SpecificationError(ValidationError):
    """A where clause or filter cannot be turned into a specification."""

    code = "SPECIFICATION_ERROR"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": str(self)}


class WhereParseError(SpecificationError):
    """Malformed clause; ``path`` locates it, e.g. ``where.or[1]``."""

    code = "WHERE_PARSE_ERROR"

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update(message=self.message, path=self.path)
        return payload


class OperatorNotFoundError(SpecificationError):
    """
    A clause names an operator outside the supported set.

    ``suggestions`` holds up to three close spellings, best first.
    """

    code = "OPERATOR_NOT_FOUND"

    def __init__(self, operator: str, valid_operators: list[str]) -> None:
        self.operator = operator
        self.valid_operators = sorted(valid_operators)
        self.suggestions = get_close_matches(operator, self.valid_operators, n=3)

        hint = ""
        if self.suggestions:
            hint = f" Did you mean: {', '.join(self.suggestions)}?"
        super().__init__(
            f"Unknown operator: '{operator}'.{hint} "
            f"Valid operators: {', '.join(self.valid_operators)}"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "operator": self.operator,
            "suggestions": self.suggestions,
            "valid_operators": self.valid_operators,
        }
