"""Tests for predicate models and combinators."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rowfilter_adapters import (
    CompareOperator,
    KeyOnlyPredicate,
    ListOperator,
    PredicateList,
    RowPrefixPredicate,
    ValuePredicate,
    all_of,
    any_of,
)

A = RowPrefixPredicate(prefix=b"a")
B = KeyOnlyPredicate()


def test_and_or_operators_build_lists():
    assert (A & B) == PredicateList(operator=ListOperator.ALL, children=(A, B))
    assert (A | B) == PredicateList(operator=ListOperator.ANY, children=(A, B))


def test_combinators_preserve_order():
    assert any_of(B, A).children == (B, A)
    assert all_of().children == ()


def test_predicates_are_immutable_and_hashable():
    with pytest.raises(ValidationError):
        A.prefix = b"b"
    assert len({A, RowPrefixPredicate(prefix=b"a")}) == 1


def test_labels():
    assert A.label == "RowPrefixPredicate(prefix=b'a')"
    assert B.label == "KeyOnlyPredicate()"
    assert (
        ValuePredicate(operator=CompareOperator.GREATER, value=b"5").label
        == "ValuePredicate(operator='>', value=b'5')"
    )
    assert any_of(A, B).label == "PredicateList(any, 2 children)"


def test_to_dict():
    assert all_of(A, B).to_dict() == {
        "kind": "list",
        "operator": "all",
        "children": [
            {"kind": "row_prefix", "prefix": b"a"},
            {"kind": "key_only"},
        ],
    }


def test_invalid_operator_rejected():
    with pytest.raises(ValidationError):
        ValuePredicate(operator="~", value=b"x")
