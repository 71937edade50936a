"""
Build predicate trees from dict / JSON representations.

The format is the one produced by :meth:`RowPredicate.to_dict`::

    {
        "kind": "list",
        "operator": "all",
        "children": [
            {"kind": "row_prefix", "prefix": "user#"},
            {"kind": "value", "operator": "=", "value": "active"},
        ],
    }

Byte fields accept ``str`` (UTF-8 encoded) as well as ``bytes``.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from .exceptions import PredicateValidationError, UnknownPredicateKindError
from .operators import ListOperator
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
)

_LEAF_KINDS: dict[str, type[RowPredicate]] = {
    cls.kind: cls
    for cls in (
        RowPrefixPredicate,
        RowRegexPredicate,
        PagePredicate,
        RandomRowPredicate,
        FamilyPredicate,
        QualifierPredicate,
        ColumnPrefixPredicate,
        MultipleColumnPrefixPredicate,
        ColumnRangePredicate,
        ValuePredicate,
        KeyOnlyPredicate,
        FirstKeyOnlyPredicate,
        ColumnCountPredicate,
        TimestampsPredicate,
    )
}

_VALID_KINDS: list[str] = [PredicateList.kind, *_LEAF_KINDS]
_VALID_LIST_OPERATORS: frozenset[str] = frozenset(m.value for m in ListOperator)


class PredicateFactory:
    """
    Factory for creating predicate trees from dictionary / JSON representations.

    Supports:
    - ``from_dict(data)`` -- parse a nested dict tree
    - ``from_json(text)`` -- parse a JSON string
    - ``validate(data)``  -- collect every error without constructing
    """

    # ------------------------------------------------------------------ #
    # Public API                                                          #
    # ------------------------------------------------------------------ #

    @staticmethod
    def from_dict(data: dict[str, Any]) -> RowPredicate:
        """
        Create a predicate tree from a dictionary.

        Raises:
            PredicateValidationError: On the first malformed node, with the
                node's path (``<root>.children[1]``).
            UnknownPredicateKindError: If a node's ``kind`` is not known.
        """
        return PredicateFactory._build(data, path="<root>")

    @staticmethod
    def from_json(text: str) -> RowPredicate:
        """Parse a JSON string and build a predicate tree."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise PredicateValidationError(
                f"Invalid JSON: {exc}", path="<root>"
            ) from exc

        if not isinstance(data, dict):
            raise PredicateValidationError(
                "Top-level JSON value must be an object", path="<root>"
            )
        return PredicateFactory.from_dict(data)

    @staticmethod
    def validate(data: Any) -> list[str]:
        """
        Validate a predicate dict and return a list of error messages.

        Returns an empty list when the structure is valid.
        """
        errors: list[str] = []
        PredicateFactory._collect_errors(data, errors, path="<root>")
        return errors

    # ------------------------------------------------------------------ #
    # Internal -- recursive build                                         #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build(data: Any, *, path: str) -> RowPredicate:
        kind = PredicateFactory._kind_of(data, path)
        if kind == PredicateList.kind:
            operator = PredicateFactory._list_operator(data, path)
            children = PredicateFactory._children_of(data, path)
            return PredicateList(
                operator=operator,
                children=tuple(
                    PredicateFactory._build(child, path=f"{path}.children[{idx}]")
                    for idx, child in enumerate(children)
                ),
            )

        cls = _LEAF_KINDS[kind]
        fields = {key: value for key, value in data.items() if key != "kind"}
        unknown = sorted(set(fields) - set(cls.model_fields))
        if unknown:
            raise PredicateValidationError(
                f"Unknown field(s) for '{kind}': {', '.join(unknown)}", path=path
            )
        try:
            return cls.model_validate(fields)
        except ValidationError as exc:
            raise PredicateValidationError(
                _format_validation_error(exc), path=path
            ) from exc

    @staticmethod
    def _kind_of(data: Any, path: str) -> str:
        if not isinstance(data, dict):
            raise PredicateValidationError(
                f"Expected a dict, got {type(data).__name__}", path=path
            )
        kind = data.get("kind")
        if not kind or not isinstance(kind, str):
            raise PredicateValidationError("Missing or empty 'kind' key", path=path)
        if kind != PredicateList.kind and kind not in _LEAF_KINDS:
            raise UnknownPredicateKindError(kind, _VALID_KINDS, path=path)
        return kind

    @staticmethod
    def _list_operator(data: dict[str, Any], path: str) -> ListOperator:
        operator = data.get("operator", ListOperator.ALL.value)
        valid = isinstance(operator, str) and operator.lower() in _VALID_LIST_OPERATORS
        if not valid:
            raise PredicateValidationError(
                f"List operator must be one of "
                f"{', '.join(sorted(_VALID_LIST_OPERATORS))}, got {operator!r}",
                path=path,
            )
        return ListOperator(operator.lower())

    @staticmethod
    def _children_of(data: dict[str, Any], path: str) -> list[Any]:
        children = data.get("children", [])
        if not isinstance(children, list):
            raise PredicateValidationError("'children' must be a list", path=path)
        return children

    # ------------------------------------------------------------------ #
    # Internal -- validation                                              #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _collect_errors(data: Any, errors: list[str], *, path: str) -> None:
        try:
            kind = PredicateFactory._kind_of(data, path)
        except PredicateValidationError as exc:
            errors.append(str(exc))
            return

        if kind != PredicateList.kind:
            try:
                PredicateFactory._build(data, path=path)
            except PredicateValidationError as exc:
                errors.append(str(exc))
            return

        try:
            PredicateFactory._list_operator(data, path)
        except PredicateValidationError as exc:
            errors.append(str(exc))
        try:
            children = PredicateFactory._children_of(data, path)
        except PredicateValidationError as exc:
            errors.append(str(exc))
            return
        for idx, child in enumerate(children):
            PredicateFactory._collect_errors(
                child, errors, path=f"{path}.children[{idx}]"
            )


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(item) for item in error["loc"])
        parts.append(f"{loc}: {error['msg']}" if loc else error["msg"])
    return "; ".join(parts)
