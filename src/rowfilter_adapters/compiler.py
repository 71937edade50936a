"""
Build a wire row filter from a predicate tree.

Top-level entry points wrapping a :class:`FilterAdapterRegistry`. Each call
gets a fresh :class:`FilterAdapterContext`, so the functions are safe to call
concurrently with a shared registry.

Strict mode
-----------
``adapt`` omits unsupported predicates, which widens the result set. With
``AdapterConfig(strict=True)`` (or by calling :func:`throw_if_unsupported`
first) the predicate is analysed before adaptation and an
:class:`UnsupportedFilterError` is raised instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .adapters import DEFAULT_REGISTRY
from .config import AdapterConfig
from .context import FilterAdapterContext
from .exceptions import UnsupportedFilterError
from .wire import ABSENT, RowFilter

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .predicates import RowPredicate
    from .strategy import FilterAdapterRegistry
    from .support import FilterSupportStatus
    from .wire import AdaptedFilter

logger = logging.getLogger("rowfilter.compiler")

_DEFAULT_CONFIG = AdapterConfig()


@dataclass(frozen=True)
class CompiledFilter:
    """Result of :func:`build_row_filter`.

    Attributes:
        row_filter: Wire filter, or ``ABSENT`` when the predicate places no
            constraint on the cells returned.
        row_limit: Maximum number of rows for the scan, from a page
            predicate. ``None`` means unlimited.
    """

    row_filter: AdaptedFilter
    row_limit: int | None = None

    @property
    def has_filter(self) -> bool:
        return isinstance(self.row_filter, RowFilter)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filter": (
                self.row_filter.to_dict()
                if isinstance(self.row_filter, RowFilter)
                else None
            ),
            "row_limit": self.row_limit,
        }


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_row_filter(
    predicate: RowPredicate,
    *,
    registry: FilterAdapterRegistry | None = None,
    config: AdapterConfig | None = None,
    families: Sequence[str] = (),
) -> CompiledFilter:
    """
    Adapt *predicate* into a wire filter and scan hints.

    Args:
        predicate: Root of the predicate tree.
        registry: Optional custom adapter registry. Falls back to
            ``DEFAULT_REGISTRY``.
        config: Optional :class:`AdapterConfig`.
        families: Column families the scan reads. Qualifier ranges need
            exactly one.

    Raises:
        UnsupportedFilterError: In strict mode, if any part of the predicate
            is unsupported.
        FilterAdaptationError: If a supported predicate cannot be converted.
    """
    reg = registry or DEFAULT_REGISTRY
    cfg = config or _DEFAULT_CONFIG

    if cfg.strict:
        throw_if_unsupported(predicate, registry=reg, config=cfg, families=families)

    context = _new_context(cfg, families)
    row_filter = reg.adapt_filter(context, predicate)
    compiled = CompiledFilter(row_filter=row_filter, row_limit=context.row_limit)
    logger.debug(
        "Built row filter for %s: %s (row limit %s)",
        predicate.label,
        "no filter" if row_filter is ABSENT else type(row_filter).__name__,
        compiled.row_limit,
    )
    return compiled


def check_support(
    predicate: RowPredicate,
    *,
    registry: FilterAdapterRegistry | None = None,
    config: AdapterConfig | None = None,
    families: Sequence[str] = (),
) -> FilterSupportStatus:
    """Analyse *predicate* without building anything. Never raises for
    unsupported input."""
    reg = registry or DEFAULT_REGISTRY
    context = _new_context(config or _DEFAULT_CONFIG, families)
    return reg.is_supported(context, predicate)


def throw_if_unsupported(
    predicate: RowPredicate,
    *,
    registry: FilterAdapterRegistry | None = None,
    config: AdapterConfig | None = None,
    families: Sequence[str] = (),
) -> None:
    """
    Raises:
        UnsupportedFilterError: Carrying the full status tree if any part of
            *predicate* is unsupported.
    """
    status = check_support(
        predicate, registry=registry, config=config, families=families
    )
    if not status:
        logger.info("Rejecting unsupported predicate %s", predicate.label)
        raise UnsupportedFilterError(status)


def _new_context(
    config: AdapterConfig, families: Sequence[str]
) -> FilterAdapterContext:
    return FilterAdapterContext(families=families, max_depth=config.max_depth)
