"""Adapter configuration."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True, slots=True)
class AdapterConfig:
    """Configuration for building row filters.

    Attributes:
        max_depth: Deepest allowed nesting of predicate lists. Deeper trees
            fail adaptation and are reported as unsupported by analysis.
        strict: If True, ``build_row_filter`` analyses the predicate first
            and raises instead of silently omitting unsupported predicates.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    strict: bool = False

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")
