"""FilterSupportStatus: whether a predicate fits the wire format, and why not."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class FilterSupportStatus:
    """
    Support verdict for a predicate.

    A supported status carries no payload; use :data:`SUPPORTED`. An
    unsupported leaf carries a ``reason``; an unsupported list carries the
    statuses of its unsupported children in ``causes`` (child order), each
    tagged with its ``position`` in the list. The nesting mirrors the
    predicate tree, so the path from the root list to every offending leaf
    can be rebuilt with :meth:`iter_paths`.

    A cause is a copy of the child's own status made with :meth:`at_position`,
    so it compares equal to that status only once ``position`` is cleared::

        replace(status.causes[0], position=None) == child_status

    Usage::

        status = FilterSupportStatus.not_supported("no_op is not supported")
        status = FilterSupportStatus.from_causes([child_a, child_b])
    """

    is_supported: bool
    reason: str | None = None
    predicate: str | None = None
    position: int | None = None
    causes: tuple[FilterSupportStatus, ...] = ()

    # ── Factory methods ──────────────────────────────────────────

    @classmethod
    def supported(cls) -> FilterSupportStatus:
        return SUPPORTED

    @classmethod
    def not_supported(
        cls, reason: str, predicate: str | None = None
    ) -> FilterSupportStatus:
        return cls(is_supported=False, reason=reason, predicate=predicate)

    @classmethod
    def unknown_predicate_type(cls, predicate: object) -> FilterSupportStatus:
        name = type(predicate).__name__
        return cls.not_supported(
            f"Don't know how to adapt predicate type {name}", predicate=name
        )

    @classmethod
    def from_causes(
        cls,
        causes: Sequence[FilterSupportStatus],
        predicate: str | None = None,
    ) -> FilterSupportStatus:
        """Composite verdict; no causes means the composite is supported."""
        if not causes:
            return SUPPORTED
        return cls(
            is_supported=False,
            reason=f"{len(causes)} unsupported child predicate(s)",
            predicate=predicate,
            causes=tuple(causes),
        )

    def at_position(self, position: int) -> FilterSupportStatus:
        """Copy of this status tagged with its index in the parent list."""
        return replace(self, position=position)

    # ── Inspection ───────────────────────────────────────────────

    @property
    def is_composite(self) -> bool:
        return bool(self.causes)

    def iter_paths(self) -> Iterator[tuple[FilterSupportStatus, ...]]:
        """
        Yield one root-to-leaf chain of statuses per unsupported leaf.

        Each chain starts with ``self`` and ends with the leaf status, so
        ``[s.position for s in chain[1:]]`` are the child indices to follow
        from the root list down to the offending predicate.
        """
        if self.is_supported:
            return
        if not self.causes:
            yield (self,)
            return
        for cause in self.causes:
            for path in cause.iter_paths():
                yield (self, *path)

    def leaf_reasons(self) -> list[str]:
        """Reasons of every unsupported leaf, in tree order."""
        return [path[-1].reason or "" for path in self.iter_paths()]

    def describe(self, indent: int = 0) -> str:
        pad = "  " * indent
        where = f"[{self.position}] " if self.position is not None else ""
        if self.is_supported:
            return f"{pad}{where}supported"
        head = f"{pad}{where}{self.predicate or 'predicate'}: {self.reason}"
        lines = [head]
        lines.extend(cause.describe(indent + 1) for cause in self.causes)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"supported": self.is_supported}
        if self.is_supported:
            return data
        data["reason"] = self.reason
        data["predicate"] = self.predicate
        if self.position is not None:
            data["position"] = self.position
        if self.causes:
            data["causes"] = [cause.to_dict() for cause in self.causes]
        return data

    def __bool__(self) -> bool:
        return self.is_supported


SUPPORTED = FilterSupportStatus(is_supported=True)
