"""
Predicate adaptation strategy.

Provides the ``TypedFilterAdapter`` interface, the ``LeafFilterAdapter``
template for leaf predicates, and a registry that maps a predicate type to
its adapter. The registry is the single entry point for every predicate,
lists included: :class:`~rowfilter_adapters.list_adapter.PredicateListAdapter`
is registered like any other adapter and calls back into the registry for
its children.

New predicate kinds are added by subclassing ``LeafFilterAdapter`` and
registering via ``register()``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .exceptions import UnsupportedFilterError
from .operators import ListOperator
from .predicates import RowPredicate
from .support import SUPPORTED, FilterSupportStatus
from .wire import ABSENT, PassAllFilter

if TYPE_CHECKING:
    from .context import FilterAdapterContext
    from .wire import AdaptedFilter

logger = logging.getLogger("rowfilter.registry")

P = TypeVar("P", bound=RowPredicate)


class TypedFilterAdapter(ABC, Generic[P]):
    """
    Strategy interface for adapting one predicate type.

    ``adapt`` returns a wire filter or :data:`~rowfilter_adapters.wire.ABSENT`
    and raises :class:`~rowfilter_adapters.exceptions.FilterAdaptationError`
    on hard failures. ``is_supported`` never raises for unsupported input.
    """

    @property
    @abstractmethod
    def predicate_type(self) -> type[P]:
        """The predicate class this strategy handles."""
        ...

    @abstractmethod
    def adapt(self, context: FilterAdapterContext, predicate: P) -> AdaptedFilter:
        ...

    @abstractmethod
    def is_supported(
        self, context: FilterAdapterContext, predicate: P
    ) -> FilterSupportStatus:
        ...


class LeafFilterAdapter(TypedFilterAdapter[P]):
    """
    Base for leaf predicates.

    ``adapt`` omits (returns ``ABSENT`` for) predicates that ``is_supported``
    rejects, and otherwise delegates to ``translate``. Subclasses override
    ``is_supported`` only when some values of their predicate have no wire
    equivalent.
    """

    def adapt(self, context: FilterAdapterContext, predicate: P) -> AdaptedFilter:
        status = self.is_supported(context, predicate)
        if not status:
            logger.debug("Omitting unsupported %s: %s", predicate.label, status.reason)
            return ABSENT
        return self.translate(context, predicate)

    def is_supported(
        self, context: FilterAdapterContext, predicate: P
    ) -> FilterSupportStatus:
        return SUPPORTED

    @abstractmethod
    def translate(
        self, context: FilterAdapterContext, predicate: P
    ) -> AdaptedFilter:
        """Build the wire form of a supported predicate."""
        ...

    def not_supported(self, predicate: P, reason: str) -> FilterSupportStatus:
        return FilterSupportStatus.not_supported(reason, predicate=predicate.label)

    def match_all(self, context: FilterAdapterContext) -> AdaptedFilter:
        """
        Wire form of a leaf that matches every row.

        Dropping it is only sound where it would be AND-ed with its siblings,
        so directly inside an ANY list it becomes :class:`PassAllFilter`.
        """
        current = context.current_list
        if current is not None and current.operator == ListOperator.ANY:
            return PassAllFilter()
        return ABSENT


class FilterAdapterRegistry:
    """
    Registry of ``TypedFilterAdapter`` instances keyed by predicate type.

    Usage::

        registry = FilterAdapterRegistry()
        registry.register(ValueAdapter())

        row_filter = registry.adapt_filter(context, predicate)

    A populated registry is only read during adaptation and may be shared
    between threads.
    """

    def __init__(self) -> None:
        self._adapters: dict[type[RowPredicate], TypedFilterAdapter[Any]] = {}

    # -- registration --------------------------------------------------------

    def register(self, adapter: TypedFilterAdapter[P]) -> None:
        """Register an adapter, replacing any adapter for the same type."""
        self._adapters[adapter.predicate_type] = adapter

    def register_all(self, *adapters: TypedFilterAdapter[Any]) -> None:
        for adapter in adapters:
            self.register(adapter)

    def unregister(self, predicate_type: type[RowPredicate]) -> None:
        self._adapters.pop(predicate_type, None)

    # -- look-up -------------------------------------------------------------

    def get(
        self, predicate_type: type[RowPredicate]
    ) -> TypedFilterAdapter[Any] | None:
        """
        Return the adapter for *predicate_type* or ``None``.

        Falls back to the nearest registered base class, so subclasses of a
        supported predicate are adapted like their parent.
        """
        for klass in predicate_type.__mro__:
            adapter = self._adapters.get(klass)
            if adapter is not None:
                return adapter
        return None

    def has(self, predicate_type: type[RowPredicate]) -> bool:
        return self.get(predicate_type) is not None

    @property
    def supported_types(self) -> set[type[RowPredicate]]:
        return set(self._adapters.keys())

    # -- dispatch ------------------------------------------------------------

    def adapt_filter(
        self, context: FilterAdapterContext, predicate: RowPredicate
    ) -> AdaptedFilter:
        """
        Adapt one predicate of any kind.

        Predicates without an adapter contribute nothing, the same way an
        unsupported predicate does. Run :meth:`is_supported` first when that
        matters.
        """
        adapter = self.get(type(predicate))
        if adapter is None:
            logger.debug("No adapter for %s; omitting it", type(predicate).__name__)
            return ABSENT
        return adapter.adapt(context, predicate)

    def is_supported(
        self, context: FilterAdapterContext, predicate: RowPredicate
    ) -> FilterSupportStatus:
        adapter = self.get(type(predicate))
        if adapter is None:
            return FilterSupportStatus.unknown_predicate_type(predicate)
        return adapter.is_supported(context, predicate)

    def throw_if_unsupported(
        self, context: FilterAdapterContext, predicate: RowPredicate
    ) -> None:
        """
        Raises:
            UnsupportedFilterError: If any part of *predicate* is unsupported.
        """
        status = self.is_supported(context, predicate)
        if not status:
            raise UnsupportedFilterError(status)
