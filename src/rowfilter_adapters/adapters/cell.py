"""Cell adapters: value comparisons, key-only, cell limits and timestamps."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..operators import CompareOperator, ListOperator
from ..predicates import (
    ColumnCountPredicate,
    FirstKeyOnlyPredicate,
    KeyOnlyPredicate,
    TimestampsPredicate,
    ValuePredicate,
)
from ..strategy import LeafFilterAdapter
from ..support import SUPPORTED
from ..utils import millis_in_range, millis_to_micros, quote_regex
from ..wire import (
    BlockAllFilter,
    CellsPerColumnLimitFilter,
    CellsPerRowLimitFilter,
    ChainFilter,
    StripValueTransformer,
    TimestampRangeFilter,
    ValueRangeFilter,
    ValueRegexFilter,
    collapse,
)

if TYPE_CHECKING:
    from ..context import FilterAdapterContext
    from ..support import FilterSupportStatus
    from ..wire import AdaptedFilter


def _value_range(operator: CompareOperator, value: bytes) -> ValueRangeFilter:
    if operator == CompareOperator.LESS:
        return ValueRangeFilter(end_value=value, end_inclusive=False)
    if operator == CompareOperator.LESS_OR_EQUAL:
        return ValueRangeFilter(end_value=value, end_inclusive=True)
    if operator == CompareOperator.GREATER:
        return ValueRangeFilter(start_value=value, start_inclusive=False)
    return ValueRangeFilter(start_value=value, start_inclusive=True)


class ValueAdapter(LeafFilterAdapter[ValuePredicate]):
    @property
    def predicate_type(self) -> type[ValuePredicate]:
        return ValuePredicate

    def is_supported(
        self, _context: FilterAdapterContext, predicate: ValuePredicate
    ) -> FilterSupportStatus:
        if predicate.operator == CompareOperator.NO_OP:
            return self.not_supported(predicate, "no_op comparisons are not supported")
        return SUPPORTED

    def translate(
        self, _context: FilterAdapterContext, predicate: ValuePredicate
    ) -> AdaptedFilter:
        if predicate.operator == CompareOperator.EQUAL:
            return ValueRegexFilter(pattern=quote_regex(predicate.value))
        if predicate.operator == CompareOperator.NOT_EQUAL:
            return collapse(
                ListOperator.ANY,
                [
                    _value_range(CompareOperator.LESS, predicate.value),
                    _value_range(CompareOperator.GREATER, predicate.value),
                ],
            )
        return _value_range(predicate.operator, predicate.value)


class KeyOnlyAdapter(LeafFilterAdapter[KeyOnlyPredicate]):
    @property
    def predicate_type(self) -> type[KeyOnlyPredicate]:
        return KeyOnlyPredicate

    def translate(
        self, _context: FilterAdapterContext, _predicate: KeyOnlyPredicate
    ) -> AdaptedFilter:
        return StripValueTransformer()


class FirstKeyOnlyAdapter(LeafFilterAdapter[FirstKeyOnlyPredicate]):
    @property
    def predicate_type(self) -> type[FirstKeyOnlyPredicate]:
        return FirstKeyOnlyPredicate

    def translate(
        self, _context: FilterAdapterContext, _predicate: FirstKeyOnlyPredicate
    ) -> AdaptedFilter:
        return CellsPerRowLimitFilter(limit=1)


class ColumnCountAdapter(LeafFilterAdapter[ColumnCountPredicate]):
    """Latest version of each column, then the first ``limit`` cells of the row."""

    @property
    def predicate_type(self) -> type[ColumnCountPredicate]:
        return ColumnCountPredicate

    def is_supported(
        self, _context: FilterAdapterContext, predicate: ColumnCountPredicate
    ) -> FilterSupportStatus:
        if predicate.limit < 1:
            return self.not_supported(predicate, "column count must be at least 1")
        return SUPPORTED

    def translate(
        self, _context: FilterAdapterContext, predicate: ColumnCountPredicate
    ) -> AdaptedFilter:
        return ChainFilter(
            filters=(
                CellsPerColumnLimitFilter(limit=1),
                CellsPerRowLimitFilter(limit=predicate.limit),
            )
        )


class TimestampsAdapter(LeafFilterAdapter[TimestampsPredicate]):
    @property
    def predicate_type(self) -> type[TimestampsPredicate]:
        return TimestampsPredicate

    def is_supported(
        self, _context: FilterAdapterContext, predicate: TimestampsPredicate
    ) -> FilterSupportStatus:
        # Each timestamp becomes the range [ts, ts + 1) in microseconds
        for ts in predicate.timestamps:
            if not (millis_in_range(ts) and millis_in_range(ts + 1)):
                return self.not_supported(
                    predicate, f"timestamp {ts}ms is out of range for the wire format"
                )
        return SUPPORTED

    def translate(
        self, _context: FilterAdapterContext, predicate: TimestampsPredicate
    ) -> AdaptedFilter:
        # No timestamps: no cell can match
        if not predicate.timestamps:
            return BlockAllFilter()
        return collapse(
            ListOperator.ANY,
            [
                TimestampRangeFilter(
                    start_micros=millis_to_micros(ts),
                    end_micros=millis_to_micros(ts + 1),
                )
                for ts in predicate.timestamps
            ],
        )
