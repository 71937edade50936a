"""
Client-side row predicates.

A predicate tree is built from leaf predicates combined by
:class:`PredicateList` nodes under ALL (conjunction) or ANY (disjunction)
semantics. Lists may nest to any depth.

Example::

    predicate = all_of(
        RowPrefixPredicate(prefix=b"user#"),
        any_of(
            ValuePredicate(operator=CompareOperator.EQUAL, value=b"active"),
            ValuePredicate(operator=CompareOperator.EQUAL, value=b"pending"),
        ),
        KeyOnlyPredicate(),
    )

    # operator form, equivalent to all_of(a, b) / any_of(a, b)
    predicate = RowPrefixPredicate(prefix=b"user#") & KeyOnlyPredicate()

Predicates are immutable; the same instance may appear in several trees.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .operators import CompareOperator, ListOperator


class RowPredicate(BaseModel):
    """Base class for predicates with logic operator support."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[str] = ""

    def __and__(self, other: RowPredicate) -> PredicateList:
        return PredicateList(operator=ListOperator.ALL, children=(self, other))

    def __or__(self, other: RowPredicate) -> PredicateList:
        return PredicateList(operator=ListOperator.ANY, children=(self, other))

    @property
    def label(self) -> str:
        """Short human-readable form used in support diagnostics."""
        args = ", ".join(
            f"{name}={_plain(value)!r}" for name, value in self._fields().items()
        )
        return f"{type(self).__name__}({args})"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, **self._fields()}

    def _fields(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in type(self).model_fields}


def _plain(value: Any) -> Any:
    return value.value if isinstance(value, CompareOperator | ListOperator) else value


class PredicateList(RowPredicate):
    """Ordered list of predicates combined with ALL or ANY semantics."""

    kind: ClassVar[str] = "list"

    operator: ListOperator = ListOperator.ALL
    children: tuple[RowPredicate, ...] = ()

    @property
    def label(self) -> str:
        return (
            f"PredicateList({self.operator.value}, {len(self.children)} children)"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "operator": self.operator.value,
            "children": [child.to_dict() for child in self.children],
        }


def all_of(*children: RowPredicate) -> PredicateList:
    """ALL list over *children*, in the given order."""
    return PredicateList(operator=ListOperator.ALL, children=children)


def any_of(*children: RowPredicate) -> PredicateList:
    """ANY list over *children*, in the given order."""
    return PredicateList(operator=ListOperator.ANY, children=children)


# -- row key ------------------------------------------------------------------


class RowPrefixPredicate(RowPredicate):
    """Row key starts with ``prefix``."""

    kind: ClassVar[str] = "row_prefix"

    prefix: bytes


class RowRegexPredicate(RowPredicate):
    """Row key matches the RE2 ``pattern``."""

    kind: ClassVar[str] = "row_regex"

    pattern: bytes


class PagePredicate(RowPredicate):
    """Return at most ``page_size`` rows."""

    kind: ClassVar[str] = "page"

    page_size: int


class RandomRowPredicate(RowPredicate):
    """Keep each row with probability ``chance``."""

    kind: ClassVar[str] = "random_row"

    chance: float = Field(allow_inf_nan=False)


# -- columns ------------------------------------------------------------------


class FamilyPredicate(RowPredicate):
    kind: ClassVar[str] = "family"

    operator: CompareOperator = CompareOperator.EQUAL
    family: str


class QualifierPredicate(RowPredicate):
    kind: ClassVar[str] = "qualifier"

    operator: CompareOperator = CompareOperator.EQUAL
    qualifier: bytes


class ColumnPrefixPredicate(RowPredicate):
    kind: ClassVar[str] = "column_prefix"

    prefix: bytes


class MultipleColumnPrefixPredicate(RowPredicate):
    """Qualifier starts with any of ``prefixes``."""

    kind: ClassVar[str] = "multiple_column_prefix"

    prefixes: tuple[bytes, ...] = ()


class ColumnRangePredicate(RowPredicate):
    """
    Qualifier lies between ``min_column`` and ``max_column``.

    ``None`` leaves that side of the range open.
    """

    kind: ClassVar[str] = "column_range"

    min_column: bytes | None = None
    min_inclusive: bool = True
    max_column: bytes | None = None
    max_inclusive: bool = False


# -- cells --------------------------------------------------------------------


class ValuePredicate(RowPredicate):
    """Compare each cell value against ``value``."""

    kind: ClassVar[str] = "value"

    operator: CompareOperator = CompareOperator.EQUAL
    value: bytes


class KeyOnlyPredicate(RowPredicate):
    """Return cells without their values."""

    kind: ClassVar[str] = "key_only"


class FirstKeyOnlyPredicate(RowPredicate):
    """Return only the first cell of every row."""

    kind: ClassVar[str] = "first_key_only"


class ColumnCountPredicate(RowPredicate):
    """Return the latest version of the first ``limit`` columns."""

    kind: ClassVar[str] = "column_count"

    limit: int


class TimestampsPredicate(RowPredicate):
    """Keep cells whose timestamp (milliseconds) is one of ``timestamps``."""

    kind: ClassVar[str] = "timestamps"

    timestamps: tuple[int, ...] = ()
