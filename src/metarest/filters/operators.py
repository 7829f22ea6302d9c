from enum import Enum


class FilterOperator(str, Enum):
    """Operators accepted by leaf filters."""

    # Standard comparison
    EQ = "eq"
    NEQ = "neq"
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"

    # String operations
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"
    CONTAINS = "contains"
    DOES_NOT_CONTAIN = "doesnotcontain"

    # Null/Empty checks
    IS_NULL = "isnull"
    IS_NOT_NULL = "isnotnull"
    IS_EMPTY = "isempty"
    IS_NOT_EMPTY = "isnotempty"


class FilterLogic(str, Enum):
    """Logic combining the direct children of a composite filter."""

    AND = "and"
    OR = "or"


STRING_OPERATORS: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.STARTSWITH,
        FilterOperator.ENDSWITH,
        FilterOperator.CONTAINS,
        FilterOperator.DOES_NOT_CONTAIN,
        FilterOperator.IS_EMPTY,
        FilterOperator.IS_NOT_EMPTY,
    }
)

VALUELESS_OPERATORS: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.IS_NULL,
        FilterOperator.IS_NOT_NULL,
        FilterOperator.IS_EMPTY,
        FilterOperator.IS_NOT_EMPTY,
    }
)
