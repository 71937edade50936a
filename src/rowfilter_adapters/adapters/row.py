"""Row-level adapters: row key prefix / regex, page size, random sampling."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..operators import ListOperator
from ..predicates import (
    PagePredicate,
    RandomRowPredicate,
    RowPrefixPredicate,
    RowRegexPredicate,
)
from ..strategy import LeafFilterAdapter
from ..support import SUPPORTED
from ..utils import prefix_regex
from ..wire import (
    ABSENT,
    BlockAllFilter,
    RowKeyRegexFilter,
    RowSampleFilter,
)

if TYPE_CHECKING:
    from ..context import FilterAdapterContext
    from ..support import FilterSupportStatus
    from ..wire import AdaptedFilter


class RowPrefixAdapter(LeafFilterAdapter[RowPrefixPredicate]):
    @property
    def predicate_type(self) -> type[RowPrefixPredicate]:
        return RowPrefixPredicate

    def translate(
        self, context: FilterAdapterContext, predicate: RowPrefixPredicate
    ) -> AdaptedFilter:
        # Every row key starts with the empty prefix
        if not predicate.prefix:
            return self.match_all(context)
        return RowKeyRegexFilter(pattern=prefix_regex(predicate.prefix))


class RowRegexAdapter(LeafFilterAdapter[RowRegexPredicate]):
    @property
    def predicate_type(self) -> type[RowRegexPredicate]:
        return RowRegexPredicate

    def translate(
        self, _context: FilterAdapterContext, predicate: RowRegexPredicate
    ) -> AdaptedFilter:
        return RowKeyRegexFilter(pattern=predicate.pattern)


class PageAdapter(LeafFilterAdapter[PagePredicate]):
    """
    Page size becomes a scan row limit rather than a wire filter.

    A row limit applies to the whole scan, so it only keeps its meaning at
    the top level or as a direct child of a top-level ALL list.
    """

    @property
    def predicate_type(self) -> type[PagePredicate]:
        return PagePredicate

    def is_supported(
        self, context: FilterAdapterContext, predicate: PagePredicate
    ) -> FilterSupportStatus:
        if predicate.page_size < 1:
            return self.not_supported(predicate, "page size must be at least 1")
        lists = context.enclosing_lists
        if not lists:
            return SUPPORTED
        if len(lists) == 1 and lists[0].operator == ListOperator.ALL:
            return SUPPORTED
        return self.not_supported(
            predicate,
            "page predicates are only supported at the top level or directly "
            "inside a top-level ALL list",
        )

    def translate(
        self, context: FilterAdapterContext, predicate: PagePredicate
    ) -> AdaptedFilter:
        context.limit_rows(predicate.page_size)
        return ABSENT


class RandomRowAdapter(LeafFilterAdapter[RandomRowPredicate]):
    @property
    def predicate_type(self) -> type[RandomRowPredicate]:
        return RandomRowPredicate

    def translate(
        self, context: FilterAdapterContext, predicate: RandomRowPredicate
    ) -> AdaptedFilter:
        if predicate.chance >= 1.0:
            return self.match_all(context)
        if predicate.chance <= 0.0:
            return BlockAllFilter()
        return RowSampleFilter(probability=predicate.chance)
