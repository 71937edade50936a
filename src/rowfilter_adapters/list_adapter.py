"""
Adapt a :class:`PredicateList` into a chain or interleave wire filter.

``adapt`` and ``is_supported`` treat unsupported children differently:
``adapt`` silently omits them, exactly like children that contribute
nothing, while ``is_supported`` reports every one of them. A caller that
needs the wire filter to be faithful to the predicate must check support
first (see :func:`~rowfilter_adapters.compiler.check_support`).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .predicates import PredicateList
from .strategy import TypedFilterAdapter
from .support import FilterSupportStatus
from .wire import ABSENT, RowFilter, collapse

if TYPE_CHECKING:
    from .context import FilterAdapterContext
    from .strategy import FilterAdapterRegistry
    from .wire import AdaptedFilter

logger = logging.getLogger("rowfilter.adapters")


class PredicateListAdapter(TypedFilterAdapter[PredicateList]):
    """Adapts ALL lists to chains and ANY lists to interleaves."""

    def __init__(self, sub_filter_adapter: FilterAdapterRegistry) -> None:
        self.sub_filter_adapter = sub_filter_adapter

    @property
    def predicate_type(self) -> type[PredicateList]:
        return PredicateList

    def adapt(
        self, context: FilterAdapterContext, predicate: PredicateList
    ) -> AdaptedFilter:
        with context.begin_list(predicate):
            child_filters = self.collect_child_filters(context, predicate)
        row_filter = collapse(predicate.operator, child_filters)
        logger.debug(
            "Adapted %s to %s",
            predicate.label,
            "no filter" if row_filter is ABSENT else type(row_filter).__name__,
        )
        return row_filter

    def collect_child_filters(
        self, context: FilterAdapterContext, predicate: PredicateList
    ) -> list[RowFilter]:
        result: list[RowFilter] = []
        for child in predicate.children:
            child_filter = self.sub_filter_adapter.adapt_filter(context, child)
            if isinstance(child_filter, RowFilter):
                result.append(child_filter)
        return result

    def is_supported(
        self, context: FilterAdapterContext, predicate: PredicateList
    ) -> FilterSupportStatus:
        if not context.can_enter():
            return FilterSupportStatus.not_supported(
                f"predicate lists nested deeper than {context.max_depth} levels",
                predicate=predicate.label,
            )
        with context.begin_list(predicate):
            unsupported = self.collect_unsupported_statuses(context, predicate)
        return FilterSupportStatus.from_causes(unsupported, predicate=predicate.label)

    def collect_unsupported_statuses(
        self, context: FilterAdapterContext, predicate: PredicateList
    ) -> list[FilterSupportStatus]:
        unsupported: list[FilterSupportStatus] = []
        for position, child in enumerate(predicate.children):
            status = self.sub_filter_adapter.is_supported(context, child)
            if not status:
                unsupported.append(status.at_position(position))
        return unsupported
