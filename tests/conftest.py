"""Shared fixtures for row filter adapter tests."""

from __future__ import annotations

from typing import ClassVar

import pytest

from rowfilter_adapters import (
    FilterAdaptationError,
    FilterAdapterContext,
    LeafFilterAdapter,
    RowPredicate,
    build_default_registry,
)


class CustomPredicate(RowPredicate):
    """Predicate type no built-in adapter knows about."""

    kind: ClassVar[str] = "custom"

    name: str = "custom"


class ExplodingAdapter(LeafFilterAdapter[CustomPredicate]):
    """Adapter whose translation always fails."""

    @property
    def predicate_type(self) -> type[CustomPredicate]:
        return CustomPredicate

    def translate(self, context, predicate):
        raise FilterAdaptationError("boom", predicate=predicate.label)


@pytest.fixture
def registry():
    """Fresh default registry, safe to mutate in a test."""
    return build_default_registry()


@pytest.fixture
def context() -> FilterAdapterContext:
    return FilterAdapterContext()


@pytest.fixture
def single_family_context() -> FilterAdapterContext:
    """Context for a scan over the single family ``cf``."""
    return FilterAdapterContext(families=("cf",))
