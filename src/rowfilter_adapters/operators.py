from enum import Enum


class ListOperator(str, Enum):
    """How the children of a :class:`PredicateList` are combined."""

    ALL = "all"
    ANY = "any"


class CompareOperator(str, Enum):
    """Comparison applied by family, qualifier and value predicates."""

    LESS = "<"
    LESS_OR_EQUAL = "<="
    EQUAL = "="
    NOT_EQUAL = "!="
    GREATER_OR_EQUAL = ">="
    GREATER = ">"
    NO_OP = "no_op"


# Comparisons expressible as a single half-open range on the wire
RANGE_OPERATORS: frozenset[CompareOperator] = frozenset(
    {
        CompareOperator.LESS,
        CompareOperator.LESS_OR_EQUAL,
        CompareOperator.GREATER,
        CompareOperator.GREATER_OR_EQUAL,
    }
)
