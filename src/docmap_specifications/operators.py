from enum import Enum


class WhereOperator(str, Enum):
    """Supported where-clause operators (loopback naming)."""

    # Standard comparison
    EQ = "eq"
    NEQ = "neq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    BETWEEN = "between"

    # Inclusion lists
    INQ = "inq"
    NIN = "nin"

    # String patterns
    LIKE = "like"
    NLIKE = "nlike"
    ILIKE = "ilike"
    NILIKE = "nilike"
    REGEXP = "regexp"

    # Presence
    EXISTS = "exists"

    # Logical operators
    AND = "and"
    OR = "or"


LOGICAL_OPERATORS: frozenset[str] = frozenset(
    {WhereOperator.AND.value, WhereOperator.OR.value}
)
FIELD_OPERATORS: frozenset[str] = frozenset(
    m.value for m in WhereOperator if m.value not in LOGICAL_OPERATORS
)

# Operators whose operand is a literal comparable to the stored value
# (and therefore subject to identifier encoding).
VALUE_OPERATORS: frozenset[str] = frozenset(
    {
        WhereOperator.EQ.value,
        WhereOperator.NEQ.value,
        WhereOperator.GT.value,
        WhereOperator.GTE.value,
        WhereOperator.LT.value,
        WhereOperator.LTE.value,
        WhereOperator.BETWEEN.value,
        WhereOperator.INQ.value,
        WhereOperator.NIN.value,
    }
)
