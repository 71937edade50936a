"""Tests for the built-in leaf predicate adapters."""

from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from rowfilter_adapters import (
    ABSENT,
    BlockAllFilter,
    CellsPerColumnLimitFilter,
    CellsPerRowLimitFilter,
    ChainFilter,
    ColumnCountPredicate,
    ColumnPrefixPredicate,
    ColumnQualifierRegexFilter,
    ColumnRangeFilter,
    ColumnRangePredicate,
    CompareOperator,
    FamilyNameRegexFilter,
    FamilyPredicate,
    FilterAdaptationError,
    FirstKeyOnlyPredicate,
    InterleaveFilter,
    KeyOnlyPredicate,
    MultipleColumnPrefixPredicate,
    PagePredicate,
    QualifierPredicate,
    RandomRowPredicate,
    RowKeyRegexFilter,
    RowPrefixPredicate,
    RowRegexPredicate,
    RowSampleFilter,
    StripValueTransformer,
    TimestampRangeFilter,
    TimestampsPredicate,
    ValuePredicate,
    ValueRangeFilter,
    ValueRegexFilter,
)
from rowfilter_adapters.adapters.cell import TimestampsAdapter
from rowfilter_adapters.adapters.column import QualifierAdapter
from rowfilter_adapters.utils import millis_to_micros, prefix_regex, quote_regex

# -- regex helpers -----------------------------------------------------------


def test_quote_regex_escapes_metacharacters():
    assert quote_regex(b"a.b*") == b"a\\.b\\*"
    assert quote_regex(b"a_Z9") == b"a_Z9"


def test_quote_regex_nul_and_high_bytes():
    assert quote_regex(b"\x00") == b"\\x00"
    assert quote_regex("é".encode()) == "é".encode()


def test_prefix_regex_matches_any_suffix():
    assert prefix_regex(b"ab") == b"ab\\C*"


def test_millis_to_micros_out_of_range():
    assert millis_to_micros(5) == 5000
    with pytest.raises(FilterAdaptationError, match="out of range"):
        millis_to_micros(2**62)


# -- row ---------------------------------------------------------------------


def test_row_prefix(registry, context):
    result = registry.adapt_filter(context, RowPrefixPredicate(prefix=b"user#"))
    assert result == RowKeyRegexFilter(pattern=b"user\\#\\C*")


def test_empty_row_prefix_is_absent(registry, context):
    assert registry.adapt_filter(context, RowPrefixPredicate(prefix=b"")) is ABSENT


def test_row_regex_is_passed_through(registry, context):
    result = registry.adapt_filter(context, RowRegexPredicate(pattern=b"^r[0-9]+$"))
    assert result == RowKeyRegexFilter(pattern=b"^r[0-9]+$")


@pytest.mark.parametrize("chance", [math.nan, math.inf, -math.inf])
def test_random_row_chance_must_be_finite(chance):
    with pytest.raises(ValidationError, match="finite"):
        RandomRowPredicate(chance=chance)


@pytest.mark.parametrize(
    ("chance", "expected"),
    [
        (0.25, RowSampleFilter(probability=0.25)),
        (0.0, BlockAllFilter()),
        (1.0, ABSENT),
    ],
)
def test_random_row(registry, context, chance, expected):
    result = registry.adapt_filter(context, RandomRowPredicate(chance=chance))
    assert result == expected


def test_page_sets_row_limit(registry, context):
    assert registry.adapt_filter(context, PagePredicate(page_size=5)) is ABSENT
    assert context.row_limit == 5


def test_page_size_below_one_is_unsupported(registry, context):
    status = registry.is_supported(context, PagePredicate(page_size=0))
    assert status.reason == "page size must be at least 1"


# -- columns -----------------------------------------------------------------


def test_family_equal(registry, context):
    result = registry.adapt_filter(context, FamilyPredicate(family="cf.1"))
    assert result == FamilyNameRegexFilter(pattern="cf\\.1")


def test_family_other_comparisons_are_unsupported(registry, context):
    predicate = FamilyPredicate(operator=CompareOperator.LESS, family="cf")

    assert not registry.is_supported(context, predicate)
    assert registry.adapt_filter(context, predicate) is ABSENT


def test_qualifier_equal_needs_no_family(registry, context):
    result = registry.adapt_filter(context, QualifierPredicate(qualifier=b"q"))
    assert result == ColumnQualifierRegexFilter(pattern=b"q")


@pytest.mark.parametrize(
    ("operator", "expected"),
    [
        (
            CompareOperator.LESS,
            ColumnRangeFilter(family_name="cf", end_qualifier=b"q"),
        ),
        (
            CompareOperator.LESS_OR_EQUAL,
            ColumnRangeFilter(
                family_name="cf", end_qualifier=b"q", end_inclusive=True
            ),
        ),
        (
            CompareOperator.GREATER,
            ColumnRangeFilter(
                family_name="cf", start_qualifier=b"q", start_inclusive=False
            ),
        ),
        (
            CompareOperator.GREATER_OR_EQUAL,
            ColumnRangeFilter(family_name="cf", start_qualifier=b"q"),
        ),
    ],
)
def test_qualifier_ranges(registry, single_family_context, operator, expected):
    predicate = QualifierPredicate(operator=operator, qualifier=b"q")
    assert registry.adapt_filter(single_family_context, predicate) == expected


def test_qualifier_not_equal_is_interleave_of_two_ranges(
    registry, single_family_context
):
    predicate = QualifierPredicate(operator=CompareOperator.NOT_EQUAL, qualifier=b"q")

    assert registry.adapt_filter(single_family_context, predicate) == InterleaveFilter(
        filters=(
            ColumnRangeFilter(family_name="cf", end_qualifier=b"q"),
            ColumnRangeFilter(
                family_name="cf", start_qualifier=b"q", start_inclusive=False
            ),
        )
    )


def test_qualifier_range_without_family_is_omitted(registry, context):
    predicate = QualifierPredicate(operator=CompareOperator.LESS, qualifier=b"q")
    assert registry.adapt_filter(context, predicate) is ABSENT


def test_qualifier_translate_without_family_raises(context):
    predicate = QualifierPredicate(operator=CompareOperator.LESS, qualifier=b"q")
    with pytest.raises(FilterAdaptationError, match="exactly one column family"):
        QualifierAdapter().translate(context, predicate)


def test_column_prefix(registry, context):
    result = registry.adapt_filter(context, ColumnPrefixPredicate(prefix=b"ab"))
    assert result == ColumnQualifierRegexFilter(pattern=b"ab\\C*")


def test_empty_column_prefix_is_absent(registry, context):
    assert registry.adapt_filter(context, ColumnPrefixPredicate(prefix=b"")) is ABSENT


def test_multiple_column_prefixes(registry, context):
    predicate = MultipleColumnPrefixPredicate(prefixes=(b"a", b"b"))
    assert registry.adapt_filter(context, predicate) == InterleaveFilter(
        filters=(
            ColumnQualifierRegexFilter(pattern=b"a\\C*"),
            ColumnQualifierRegexFilter(pattern=b"b\\C*"),
        )
    )


def test_single_column_prefix_is_unwrapped(registry, context):
    predicate = MultipleColumnPrefixPredicate(prefixes=(b"a",))
    result = registry.adapt_filter(context, predicate)
    assert result == ColumnQualifierRegexFilter(pattern=b"a\\C*")


def test_no_column_prefixes_blocks_all(registry, context):
    predicate = MultipleColumnPrefixPredicate(prefixes=())
    assert registry.adapt_filter(context, predicate) == BlockAllFilter()


def test_column_range(registry, single_family_context):
    predicate = ColumnRangePredicate(
        min_column=b"a", min_inclusive=False, max_column=b"m", max_inclusive=True
    )
    assert registry.adapt_filter(single_family_context, predicate) == (
        ColumnRangeFilter(
            family_name="cf",
            start_qualifier=b"a",
            start_inclusive=False,
            end_qualifier=b"m",
            end_inclusive=True,
        )
    )


def test_column_range_needs_single_family(registry, context):
    status = registry.is_supported(context, ColumnRangePredicate(min_column=b"a"))
    assert "exactly one column family" in status.reason


# -- cells -------------------------------------------------------------------


def test_value_equal_is_quoted_regex(registry, context):
    result = registry.adapt_filter(context, ValuePredicate(value=b"a.b"))
    assert result == ValueRegexFilter(pattern=b"a\\.b")


@pytest.mark.parametrize(
    ("operator", "expected"),
    [
        (CompareOperator.LESS, ValueRangeFilter(end_value=b"5")),
        (
            CompareOperator.LESS_OR_EQUAL,
            ValueRangeFilter(end_value=b"5", end_inclusive=True),
        ),
        (
            CompareOperator.GREATER,
            ValueRangeFilter(start_value=b"5", start_inclusive=False),
        ),
        (CompareOperator.GREATER_OR_EQUAL, ValueRangeFilter(start_value=b"5")),
    ],
)
def test_value_ranges(registry, context, operator, expected):
    predicate = ValuePredicate(operator=operator, value=b"5")
    assert registry.adapt_filter(context, predicate) == expected


def test_value_not_equal(registry, context):
    predicate = ValuePredicate(operator=CompareOperator.NOT_EQUAL, value=b"5")
    assert registry.adapt_filter(context, predicate) == InterleaveFilter(
        filters=(
            ValueRangeFilter(end_value=b"5"),
            ValueRangeFilter(start_value=b"5", start_inclusive=False),
        )
    )


def test_key_only(registry, context):
    result = registry.adapt_filter(context, KeyOnlyPredicate())
    assert result == StripValueTransformer()


def test_first_key_only(registry, context):
    result = registry.adapt_filter(context, FirstKeyOnlyPredicate())
    assert result == CellsPerRowLimitFilter(limit=1)


def test_column_count(registry, context):
    result = registry.adapt_filter(context, ColumnCountPredicate(limit=3))
    assert result == ChainFilter(
        filters=(CellsPerColumnLimitFilter(limit=1), CellsPerRowLimitFilter(limit=3))
    )


def test_column_count_below_one_is_unsupported(registry, context):
    predicate = ColumnCountPredicate(limit=0)

    assert not registry.is_supported(context, predicate)
    assert registry.adapt_filter(context, predicate) is ABSENT


def test_single_timestamp(registry, context):
    result = registry.adapt_filter(context, TimestampsPredicate(timestamps=(5,)))
    assert result == TimestampRangeFilter(start_micros=5000, end_micros=6000)


def test_several_timestamps_interleave(registry, context):
    result = registry.adapt_filter(context, TimestampsPredicate(timestamps=(1, 2)))
    assert result == InterleaveFilter(
        filters=(
            TimestampRangeFilter(start_micros=1000, end_micros=2000),
            TimestampRangeFilter(start_micros=2000, end_micros=3000),
        )
    )


def test_no_timestamps_blocks_all(registry, context):
    result = registry.adapt_filter(context, TimestampsPredicate())
    assert result == BlockAllFilter()


@pytest.mark.parametrize("timestamp", [2**62, -(2**62), (2**63 - 1) // 1000])
def test_out_of_range_timestamp_is_unsupported(registry, context, timestamp):
    predicate = TimestampsPredicate(timestamps=(1, timestamp))
    status = registry.is_supported(context, predicate)

    assert not status
    assert status.reason == (
        f"timestamp {timestamp}ms is out of range for the wire format"
    )
    assert registry.adapt_filter(context, predicate) is ABSENT


def test_timestamp_translation_still_checks_range(context):
    predicate = TimestampsPredicate(timestamps=(2**62,))
    with pytest.raises(FilterAdaptationError, match="out of range"):
        TimestampsAdapter().translate(context, predicate)
