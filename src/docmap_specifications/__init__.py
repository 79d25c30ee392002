"""docmap-specifications — store-agnostic where-clause trees.

Parses loopback-style ``where`` / filter objects into specification trees
that persistence backends compile to their own query syntax.
"""

from __future__ import annotations

from .ast import AttributeSpecification
from .base import AndSpecification, BaseSpecification, OrSpecification
from .exceptions import OperatorNotFoundError, SpecificationError, WhereParseError
from .operators import WhereOperator
from .parser import WhereParser
from .query_options import QueryOptions

__all__ = [
    "AttributeSpecification",
    "AndSpecification",
    "BaseSpecification",
    "OrSpecification",
    "WhereOperator",
    "WhereParser",
    "QueryOptions",
    # Exceptions
    "SpecificationError",
    "WhereParseError",
    "OperatorNotFoundError",
]
