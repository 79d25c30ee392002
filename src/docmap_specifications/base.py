from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseSpecification(ABC):
    """Base class for where-clause predicates with logic operator support."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Serialise to the ``{op, attr, val}`` / ``{op, conditions}`` AST."""

    def __and__(self, other: BaseSpecification) -> AndSpecification:
        return AndSpecification(self, other)

    def __or__(self, other: BaseSpecification) -> OrSpecification:
        return OrSpecification(self, other)

    def merge(self, other: BaseSpecification) -> AndSpecification:
        """Merge with another specification using logical AND."""
        return AndSpecification(self, other)


class AndSpecification(BaseSpecification):
    """Logical AND composite specification."""

    def __init__(self, *specifications: BaseSpecification) -> None:
        self.specifications = specifications

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "and",
            "conditions": [spec.to_dict() for spec in self.specifications],
        }


class OrSpecification(BaseSpecification):
    """Logical OR composite specification."""

    def __init__(self, *specifications: BaseSpecification) -> None:
        self.specifications = specifications

    def to_dict(self) -> dict[str, Any]:
        return {
            "op": "or",
            "conditions": [spec.to_dict() for spec in self.specifications],
        }
