"""
Storage engine wire filters.

The wire format composes filters with exactly two operators:

* :class:`ChainFilter` -- sequential AND, each filter sees the output of the
  previous one.
* :class:`InterleaveFilter` -- parallel OR, the outputs of all filters are
  merged.

Both require at least two filters; a degenerate composite is rejected at
construction time. Producers go through :func:`collapse`, which never builds
one: no filters collapse to :data:`ABSENT`, a single filter is returned
unwrapped.

:data:`ABSENT` means "no constraint" and is deliberately not a
:class:`RowFilter` (and not ``None``), so "contributes nothing" can never be
confused with a translated filter. Compare with ``is``.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Any, Final, TypeAlias

from pydantic import BaseModel, ConfigDict, field_validator

from .operators import ListOperator


class Absent:
    """Sentinel for a predicate that contributes no wire filter.

    This is a singleton - use the ABSENT instance, not the class directly.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<ABSENT>"

    def __bool__(self) -> bool:
        return False


ABSENT: Final[Absent] = Absent()


class RowFilter(BaseModel):
    """
    Abstract base class for all wire filters.

    Pydantic models are built on ``ABCMeta``, so a subclass that does not
    implement ``to_dict`` cannot be instantiated.
    """

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Render the filter in the wire format's JSON shape."""
        ...


AdaptedFilter: TypeAlias = "RowFilter | Absent"


# -- composition --------------------------------------------------------------


def _require_two(filters: tuple[RowFilter, ...]) -> tuple[RowFilter, ...]:
    if len(filters) < 2:
        raise ValueError(
            f"composite wire filters need at least 2 filters, got {len(filters)}"
        )
    return filters


class ChainFilter(RowFilter):
    """Sequential AND of two or more filters."""

    filters: tuple[RowFilter, ...]

    @field_validator("filters")
    @classmethod
    def _check_arity(cls, filters: tuple[RowFilter, ...]) -> tuple[RowFilter, ...]:
        return _require_two(filters)

    def to_dict(self) -> dict[str, Any]:
        return {"chain": {"filters": [f.to_dict() for f in self.filters]}}


class InterleaveFilter(RowFilter):
    """Parallel OR of two or more filters."""

    filters: tuple[RowFilter, ...]

    @field_validator("filters")
    @classmethod
    def _check_arity(cls, filters: tuple[RowFilter, ...]) -> tuple[RowFilter, ...]:
        return _require_two(filters)

    def to_dict(self) -> dict[str, Any]:
        return {"interleave": {"filters": [f.to_dict() for f in self.filters]}}


def collapse(operator: ListOperator, filters: Sequence[RowFilter]) -> AdaptedFilter:
    """
    Combine *filters* under *operator* with the minimal wire arity.

    * no filters -> :data:`ABSENT`
    * one filter -> that filter, unwrapped
    * otherwise  -> :class:`ChainFilter` for ALL, :class:`InterleaveFilter`
      for ANY, in the given order
    """
    if not filters:
        return ABSENT
    if len(filters) == 1:
        return filters[0]
    if operator == ListOperator.ALL:
        return ChainFilter(filters=tuple(filters))
    return InterleaveFilter(filters=tuple(filters))


# -- row key ------------------------------------------------------------------


class RowKeyRegexFilter(RowFilter):
    pattern: bytes

    def to_dict(self) -> dict[str, Any]:
        return {"row_key_regex_filter": self.pattern}


class RowSampleFilter(RowFilter):
    probability: float

    def to_dict(self) -> dict[str, Any]:
        return {"row_sample_filter": self.probability}


# -- columns ------------------------------------------------------------------


class FamilyNameRegexFilter(RowFilter):
    pattern: str

    def to_dict(self) -> dict[str, Any]:
        return {"family_name_regex_filter": self.pattern}


class ColumnQualifierRegexFilter(RowFilter):
    pattern: bytes

    def to_dict(self) -> dict[str, Any]:
        return {"column_qualifier_regex_filter": self.pattern}


class ColumnRangeFilter(RowFilter):
    """Qualifier range within one column family; ``None`` bounds are open."""

    family_name: str
    start_qualifier: bytes | None = None
    start_inclusive: bool = True
    end_qualifier: bytes | None = None
    end_inclusive: bool = False

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"family_name": self.family_name}
        start, end = self.start_qualifier, self.end_qualifier
        if start is not None:
            body[_bound("start_qualifier", self.start_inclusive)] = start
        if end is not None:
            body[_bound("end_qualifier", self.end_inclusive)] = end
        return {"column_range_filter": body}


def _bound(name: str, inclusive: bool) -> str:
    return f"{name}_closed" if inclusive else f"{name}_open"


# -- cells --------------------------------------------------------------------


class ValueRegexFilter(RowFilter):
    pattern: bytes

    def to_dict(self) -> dict[str, Any]:
        return {"value_regex_filter": self.pattern}


class ValueRangeFilter(RowFilter):
    """Cell value range; ``None`` bounds are open."""

    start_value: bytes | None = None
    start_inclusive: bool = True
    end_value: bytes | None = None
    end_inclusive: bool = False

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {}
        if self.start_value is not None:
            body[_bound("start_value", self.start_inclusive)] = self.start_value
        if self.end_value is not None:
            body[_bound("end_value", self.end_inclusive)] = self.end_value
        return {"value_range_filter": body}


class TimestampRangeFilter(RowFilter):
    """Half-open ``[start_micros, end_micros)`` timestamp range."""

    start_micros: int
    end_micros: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp_range_filter": {
                "start_timestamp_micros": self.start_micros,
                "end_timestamp_micros": self.end_micros,
            }
        }


class CellsPerRowLimitFilter(RowFilter):
    limit: int

    def to_dict(self) -> dict[str, Any]:
        return {"cells_per_row_limit_filter": self.limit}


class CellsPerColumnLimitFilter(RowFilter):
    limit: int

    def to_dict(self) -> dict[str, Any]:
        return {"cells_per_column_limit_filter": self.limit}


class StripValueTransformer(RowFilter):
    def to_dict(self) -> dict[str, Any]:
        return {"strip_value_transformer": True}


class PassAllFilter(RowFilter):
    """Matches every cell. Stands in for an always-true leaf inside ANY."""

    def to_dict(self) -> dict[str, Any]:
        return {"pass_all_filter": True}


class BlockAllFilter(RowFilter):
    def to_dict(self) -> dict[str, Any]:
        return {"block_all_filter": True}
