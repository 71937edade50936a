"""Column adapters: family, qualifier, column prefixes and qualifier ranges."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import FilterAdaptationError
from ..operators import RANGE_OPERATORS, CompareOperator, ListOperator
from ..predicates import (
    ColumnPrefixPredicate,
    ColumnRangePredicate,
    FamilyPredicate,
    MultipleColumnPrefixPredicate,
    QualifierPredicate,
)
from ..strategy import LeafFilterAdapter
from ..support import SUPPORTED
from ..utils import prefix_regex, quote_regex
from ..wire import (
    BlockAllFilter,
    ColumnQualifierRegexFilter,
    ColumnRangeFilter,
    FamilyNameRegexFilter,
    collapse,
)

if TYPE_CHECKING:
    from ..context import FilterAdapterContext
    from ..support import FilterSupportStatus
    from ..wire import AdaptedFilter

_SINGLE_FAMILY_REASON = "qualifier ranges need a scan over exactly one column family"


def _single_family(context: FilterAdapterContext) -> str | None:
    return context.families[0] if len(context.families) == 1 else None


def _require_family(context: FilterAdapterContext, predicate: str) -> str:
    family = _single_family(context)
    if family is None:
        raise FilterAdaptationError(_SINGLE_FAMILY_REASON, predicate=predicate)
    return family


def _qualifier_range(
    family: str, operator: CompareOperator, qualifier: bytes
) -> ColumnRangeFilter:
    if operator == CompareOperator.LESS:
        return ColumnRangeFilter(
            family_name=family, end_qualifier=qualifier, end_inclusive=False
        )
    if operator == CompareOperator.LESS_OR_EQUAL:
        return ColumnRangeFilter(
            family_name=family, end_qualifier=qualifier, end_inclusive=True
        )
    if operator == CompareOperator.GREATER:
        return ColumnRangeFilter(
            family_name=family, start_qualifier=qualifier, start_inclusive=False
        )
    return ColumnRangeFilter(
        family_name=family, start_qualifier=qualifier, start_inclusive=True
    )


class FamilyAdapter(LeafFilterAdapter[FamilyPredicate]):
    @property
    def predicate_type(self) -> type[FamilyPredicate]:
        return FamilyPredicate

    def is_supported(
        self, _context: FilterAdapterContext, predicate: FamilyPredicate
    ) -> FilterSupportStatus:
        if predicate.operator != CompareOperator.EQUAL:
            return self.not_supported(
                predicate,
                f"family comparison '{predicate.operator.value}' is not supported; "
                "only '=' is",
            )
        return SUPPORTED

    def translate(
        self, _context: FilterAdapterContext, predicate: FamilyPredicate
    ) -> AdaptedFilter:
        pattern = quote_regex(predicate.family.encode("utf-8")).decode("utf-8")
        return FamilyNameRegexFilter(pattern=pattern)


class QualifierAdapter(LeafFilterAdapter[QualifierPredicate]):
    """
    ``=`` becomes a qualifier regex. Ordering comparisons and ``!=`` become
    column ranges, which the wire format scopes to one family, so they are
    only supported when the scan reads exactly one family.
    """

    @property
    def predicate_type(self) -> type[QualifierPredicate]:
        return QualifierPredicate

    def is_supported(
        self, context: FilterAdapterContext, predicate: QualifierPredicate
    ) -> FilterSupportStatus:
        if predicate.operator == CompareOperator.NO_OP:
            return self.not_supported(predicate, "no_op comparisons are not supported")
        if predicate.operator == CompareOperator.EQUAL:
            return SUPPORTED
        if _single_family(context) is None:
            return self.not_supported(predicate, _SINGLE_FAMILY_REASON)
        return SUPPORTED

    def translate(
        self, context: FilterAdapterContext, predicate: QualifierPredicate
    ) -> AdaptedFilter:
        if predicate.operator == CompareOperator.EQUAL:
            return ColumnQualifierRegexFilter(pattern=quote_regex(predicate.qualifier))
        family = _require_family(context, predicate.label)
        if predicate.operator in RANGE_OPERATORS:
            return _qualifier_range(family, predicate.operator, predicate.qualifier)
        # NOT_EQUAL: everything before or after the qualifier
        return collapse(
            ListOperator.ANY,
            [
                _qualifier_range(family, CompareOperator.LESS, predicate.qualifier),
                _qualifier_range(family, CompareOperator.GREATER, predicate.qualifier),
            ],
        )


class ColumnPrefixAdapter(LeafFilterAdapter[ColumnPrefixPredicate]):
    @property
    def predicate_type(self) -> type[ColumnPrefixPredicate]:
        return ColumnPrefixPredicate

    def translate(
        self, context: FilterAdapterContext, predicate: ColumnPrefixPredicate
    ) -> AdaptedFilter:
        if not predicate.prefix:
            return self.match_all(context)
        return ColumnQualifierRegexFilter(pattern=prefix_regex(predicate.prefix))


class MultipleColumnPrefixAdapter(LeafFilterAdapter[MultipleColumnPrefixPredicate]):
    @property
    def predicate_type(self) -> type[MultipleColumnPrefixPredicate]:
        return MultipleColumnPrefixPredicate

    def translate(
        self,
        _context: FilterAdapterContext,
        predicate: MultipleColumnPrefixPredicate,
    ) -> AdaptedFilter:
        # No prefixes: no column can match
        if not predicate.prefixes:
            return BlockAllFilter()
        return collapse(
            ListOperator.ANY,
            [
                ColumnQualifierRegexFilter(pattern=prefix_regex(prefix))
                for prefix in predicate.prefixes
            ],
        )


class ColumnRangeAdapter(LeafFilterAdapter[ColumnRangePredicate]):
    @property
    def predicate_type(self) -> type[ColumnRangePredicate]:
        return ColumnRangePredicate

    def is_supported(
        self, context: FilterAdapterContext, predicate: ColumnRangePredicate
    ) -> FilterSupportStatus:
        if _single_family(context) is None:
            return self.not_supported(predicate, _SINGLE_FAMILY_REASON)
        return SUPPORTED

    def translate(
        self, context: FilterAdapterContext, predicate: ColumnRangePredicate
    ) -> AdaptedFilter:
        family = _require_family(context, predicate.label)
        return ColumnRangeFilter(
            family_name=family,
            start_qualifier=predicate.min_column,
            start_inclusive=predicate.min_inclusive,
            end_qualifier=predicate.max_column,
            end_inclusive=predicate.max_inclusive,
        )
