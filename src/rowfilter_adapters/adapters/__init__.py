"""
Default predicate adapters and registry.

Usage::

    from rowfilter_adapters.adapters import DEFAULT_REGISTRY

    row_filter = DEFAULT_REGISTRY.adapt_filter(context, predicate)
"""

from __future__ import annotations

from ..list_adapter import PredicateListAdapter
from ..strategy import FilterAdapterRegistry
from .cell import (
    ColumnCountAdapter,
    FirstKeyOnlyAdapter,
    KeyOnlyAdapter,
    TimestampsAdapter,
    ValueAdapter,
)
from .column import (
    ColumnPrefixAdapter,
    ColumnRangeAdapter,
    FamilyAdapter,
    MultipleColumnPrefixAdapter,
    QualifierAdapter,
)
from .row import (
    PageAdapter,
    RandomRowAdapter,
    RowPrefixAdapter,
    RowRegexAdapter,
)


def build_default_registry() -> FilterAdapterRegistry:
    """
    Create a registry with the list adapter and all built-in leaf adapters.

    The list adapter is bound to the registry it is registered in, so nested
    lists are adapted through the same registry.

    Returns:
        FilterAdapterRegistry: A new registry instance.
    """
    registry = FilterAdapterRegistry()
    registry.register(PredicateListAdapter(registry))
    registry.register_all(
        # Row
        RowPrefixAdapter(),
        RowRegexAdapter(),
        PageAdapter(),
        RandomRowAdapter(),
        # Column
        FamilyAdapter(),
        QualifierAdapter(),
        ColumnPrefixAdapter(),
        MultipleColumnPrefixAdapter(),
        ColumnRangeAdapter(),
        # Cell
        ValueAdapter(),
        KeyOnlyAdapter(),
        FirstKeyOnlyAdapter(),
        ColumnCountAdapter(),
        TimestampsAdapter(),
    )
    return registry


DEFAULT_REGISTRY: FilterAdapterRegistry = build_default_registry()

__all__ = [
    "DEFAULT_REGISTRY",
    "build_default_registry",
    "FilterAdapterRegistry",
    "PredicateListAdapter",
]
