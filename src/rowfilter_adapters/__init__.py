from .adapters import DEFAULT_REGISTRY, build_default_registry
from .compiler import (
    CompiledFilter,
    build_row_filter,
    check_support,
    throw_if_unsupported,
)
from .config import DEFAULT_MAX_DEPTH, AdapterConfig
from .context import FilterAdapterContext, ScopeHandle
from .exceptions import (
    FilterAdaptationError,
    FilterDepthExceededError,
    PredicateValidationError,
    RowFilterError,
    ScopeMismatchError,
    UnknownPredicateKindError,
    UnsupportedFilterError,
)
from .factory import PredicateFactory
from .list_adapter import PredicateListAdapter
from .operators import CompareOperator, ListOperator
from .predicates import (
    ColumnCountPredicate,
    ColumnPrefixPredicate,
    ColumnRangePredicate,
    FamilyPredicate,
    FirstKeyOnlyPredicate,
    KeyOnlyPredicate,
    MultipleColumnPrefixPredicate,
    PagePredicate,
    PredicateList,
    QualifierPredicate,
    RandomRowPredicate,
    RowPredicate,
    RowPrefixPredicate,
    RowRegexPredicate,
    TimestampsPredicate,
    ValuePredicate,
    all_of,
    any_of,
)
from .strategy import FilterAdapterRegistry, LeafFilterAdapter, TypedFilterAdapter
from .support import SUPPORTED, FilterSupportStatus
from .wire import (
    ABSENT,
    AdaptedFilter,
    BlockAllFilter,
    CellsPerColumnLimitFilter,
    CellsPerRowLimitFilter,
    ChainFilter,
    ColumnQualifierRegexFilter,
    ColumnRangeFilter,
    FamilyNameRegexFilter,
    InterleaveFilter,
    PassAllFilter,
    RowFilter,
    RowKeyRegexFilter,
    RowSampleFilter,
    StripValueTransformer,
    TimestampRangeFilter,
    ValueRangeFilter,
    ValueRegexFilter,
    collapse,
)

__all__ = [
    # Facade
    "build_row_filter",
    "check_support",
    "throw_if_unsupported",
    "CompiledFilter",
    "AdapterConfig",
    "DEFAULT_MAX_DEPTH",
    # Predicates
    "CompareOperator",
    "ListOperator",
    "RowPredicate",
    "PredicateList",
    "all_of",
    "any_of",
    "RowPrefixPredicate",
    "RowRegexPredicate",
    "PagePredicate",
    "RandomRowPredicate",
    "FamilyPredicate",
    "QualifierPredicate",
    "ColumnPrefixPredicate",
    "MultipleColumnPrefixPredicate",
    "ColumnRangePredicate",
    "ValuePredicate",
    "KeyOnlyPredicate",
    "FirstKeyOnlyPredicate",
    "ColumnCountPredicate",
    "TimestampsPredicate",
    "PredicateFactory",
    # Wire filters
    "ABSENT",
    "AdaptedFilter",
    "RowFilter",
    "ChainFilter",
    "InterleaveFilter",
    "collapse",
    "RowKeyRegexFilter",
    "RowSampleFilter",
    "FamilyNameRegexFilter",
    "ColumnQualifierRegexFilter",
    "ColumnRangeFilter",
    "ValueRegexFilter",
    "ValueRangeFilter",
    "TimestampRangeFilter",
    "CellsPerRowLimitFilter",
    "CellsPerColumnLimitFilter",
    "StripValueTransformer",
    "PassAllFilter",
    "BlockAllFilter",
    # Adaptation / strategy
    "FilterAdapterContext",
    "ScopeHandle",
    "TypedFilterAdapter",
    "LeafFilterAdapter",
    "PredicateListAdapter",
    "FilterAdapterRegistry",
    "DEFAULT_REGISTRY",
    "build_default_registry",
    # Support analysis
    "FilterSupportStatus",
    "SUPPORTED",
    # Exceptions
    "RowFilterError",
    "FilterAdaptationError",
    "FilterDepthExceededError",
    "ScopeMismatchError",
    "UnsupportedFilterError",
    "PredicateValidationError",
    "UnknownPredicateKindError",
]
