"""
Per-call traversal context.

One :class:`FilterAdapterContext` is created for each top-level adaptation
or analysis call. Predicate lists enter a scope while their children are
processed, which lets leaf adapters ask where they sit in the tree (a page
predicate, for instance, is only meaningful at the top level).

Scopes are released by :meth:`FilterAdapterContext.begin_list` on every exit
path, including exceptions::

    with context.begin_list(predicate_list):
        for child in predicate_list.children:
            ...
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass

from .config import DEFAULT_MAX_DEPTH
from .exceptions import FilterDepthExceededError, ScopeMismatchError
from .predicates import PredicateList

logger = logging.getLogger("rowfilter.context")


@dataclass(frozen=True, eq=False)
class ScopeHandle:
    """Token returned by ``enter_scope``; identity-compared on exit."""

    predicate_list: PredicateList
    depth: int


class FilterAdapterContext:
    """
    Nesting bookkeeping and scan hints for one adaptation / analysis call.

    Not thread-safe; use one instance per call.
    """

    def __init__(
        self,
        *,
        families: Sequence[str] = (),
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.families: tuple[str, ...] = tuple(families)
        self.max_depth = max_depth
        self._scopes: list[ScopeHandle] = []
        self._row_limit: int | None = None

    # -- scopes --------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Number of predicate lists currently entered."""
        return len(self._scopes)

    @property
    def current_list(self) -> PredicateList | None:
        return self._scopes[-1].predicate_list if self._scopes else None

    @property
    def enclosing_lists(self) -> tuple[PredicateList, ...]:
        """Entered lists, outermost first."""
        return tuple(scope.predicate_list for scope in self._scopes)

    def can_enter(self) -> bool:
        return self.depth < self.max_depth

    def enter_scope(self, predicate_list: PredicateList) -> ScopeHandle:
        if not self.can_enter():
            logger.debug("Rejecting predicate list at depth %d", self.depth + 1)
            raise FilterDepthExceededError(self.depth + 1, self.max_depth)
        handle = ScopeHandle(predicate_list=predicate_list, depth=self.depth + 1)
        self._scopes.append(handle)
        return handle

    def exit_scope(self, handle: ScopeHandle) -> None:
        if not self._scopes or self._scopes[-1] is not handle:
            raise ScopeMismatchError(
                f"Scope at depth {handle.depth} exited while the innermost "
                f"scope is at depth {self.depth}"
            )
        self._scopes.pop()

    @contextmanager
    def begin_list(self, predicate_list: PredicateList) -> Iterator[ScopeHandle]:
        handle = self.enter_scope(predicate_list)
        try:
            yield handle
        finally:
            self.exit_scope(handle)

    # -- scan hints ----------------------------------------------------------

    @property
    def row_limit(self) -> int | None:
        return self._row_limit

    def limit_rows(self, limit: int) -> None:
        """Record a row limit for the scan; the smallest limit wins."""
        if self._row_limit is None or limit < self._row_limit:
            self._row_limit = limit
