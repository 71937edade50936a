"""
Row filter exception hierarchy.

All exceptions inherit from ``RowFilterError`` and provide ``to_dict()``
for API-friendly error responses.

Only :class:`FilterAdaptationError` (and its subclasses) is raised while a
predicate tree is being adapted. An unsupported predicate is reported as a
:class:`~rowfilter_adapters.support.FilterSupportStatus` value; it becomes an
:class:`UnsupportedFilterError` only when a caller explicitly asks for that.
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .support import FilterSupportStatus


class RowFilterError(Exception):
    """Base exception for all row filter errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class FilterAdaptationError(RowFilterError):
    """A predicate could not be converted to its wire form.

    Aborts the whole adaptation call; no partial wire filter is returned.
    """

    def __init__(self, message: str, predicate: str | None = None) -> None:
        self.message = message
        self.predicate = predicate
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FILTER_ADAPTATION_ERROR",
            "message": self.message,
            "predicate": self.predicate,
        }


class FilterDepthExceededError(FilterAdaptationError):
    """Predicate lists are nested deeper than the context allows."""

    def __init__(self, depth: int, max_depth: int) -> None:
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            f"Predicate lists nested {depth} levels deep exceed the maximum "
            f"depth of {max_depth}",
            predicate="PredicateList",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "FILTER_DEPTH_EXCEEDED",
            "message": self.message,
            "depth": self.depth,
            "max_depth": self.max_depth,
        }


class ScopeMismatchError(RowFilterError):
    """A traversal scope was exited out of LIFO order."""


class UnsupportedFilterError(RowFilterError):
    """
    A predicate tree cannot be represented on the wire.

    Carries the full :class:`FilterSupportStatus` so callers can report
    every offending predicate, not just the first one.
    """

    def __init__(self, status: FilterSupportStatus) -> None:
        self.status = status
        super().__init__(
            "Predicate is not supported by the row filter wire format:\n"
            + status.describe()
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNSUPPORTED_FILTER",
            "status": self.status.to_dict(),
        }


class PredicateValidationError(RowFilterError):
    """A dict / JSON predicate representation is malformed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "VALIDATION_ERROR",
            "message": self.message,
            "path": self.path,
        }


class UnknownPredicateKindError(PredicateValidationError):
    """
    Unknown predicate ``kind``.

    Provides fuzzy-matched suggestions for likely intended kinds.
    """

    def __init__(
        self,
        kind: str,
        valid_kinds: list[str],
        path: str | None = None,
    ) -> None:
        self.kind = kind
        self.valid_kinds = valid_kinds
        self.suggestions = get_close_matches(kind, valid_kinds, n=3, cutoff=0.6)

        message = f"Unknown predicate kind: '{kind}'."
        if self.suggestions:
            message += f" Did you mean: {', '.join(self.suggestions)}?"
        message += f" Valid kinds: {', '.join(sorted(valid_kinds))}"
        super().__init__(message, path=path)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "UNKNOWN_PREDICATE_KIND",
            "kind": self.kind,
            "path": self.path,
            "suggestions": self.suggestions,
            "valid_kinds": sorted(self.valid_kinds),
        }
