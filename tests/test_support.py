"""Tests for FilterSupportStatus."""

from __future__ import annotations

import pytest

from rowfilter_adapters import SUPPORTED, FilterSupportStatus

LEAF = FilterSupportStatus.not_supported("bad value", predicate="ValuePredicate()")


def test_supported_singleton():
    assert FilterSupportStatus.supported() is SUPPORTED
    assert SUPPORTED
    assert SUPPORTED.to_dict() == {"supported": True}
    assert SUPPORTED.describe() == "supported"


def test_from_causes_without_causes_is_supported():
    assert FilterSupportStatus.from_causes([]) is SUPPORTED


def test_at_position_returns_tagged_copy():
    tagged = LEAF.at_position(3)

    assert tagged.position == 3
    assert LEAF.position is None
    assert tagged.reason == LEAF.reason


def test_status_is_frozen():
    with pytest.raises(AttributeError):
        LEAF.reason = "other"  # type: ignore[misc]


def test_describe_indents_causes():
    inner = FilterSupportStatus.from_causes(
        [LEAF.at_position(0)], predicate="PredicateList(any, 1 children)"
    )
    root = FilterSupportStatus.from_causes(
        [inner.at_position(2)], predicate="PredicateList(all, 3 children)"
    )

    assert root.describe() == (
        "PredicateList(all, 3 children): 1 unsupported child predicate(s)\n"
        "  [2] PredicateList(any, 1 children): 1 unsupported child predicate(s)\n"
        "    [0] ValuePredicate(): bad value"
    )


def test_to_dict_nests_causes():
    root = FilterSupportStatus.from_causes([LEAF.at_position(1)], predicate="L")

    assert root.to_dict() == {
        "supported": False,
        "reason": "1 unsupported child predicate(s)",
        "predicate": "L",
        "causes": [
            {
                "supported": False,
                "reason": "bad value",
                "predicate": "ValuePredicate()",
                "position": 1,
            }
        ],
    }


def test_iter_paths_and_leaf_reasons():
    other = FilterSupportStatus.not_supported("other")
    root = FilterSupportStatus.from_causes(
        [LEAF.at_position(0), other.at_position(4)]
    )

    paths = list(root.iter_paths())
    assert [path[-1].position for path in paths] == [0, 4]
    assert all(path[0] is root for path in paths)
    assert root.leaf_reasons() == ["bad value", "other"]
    assert list(SUPPORTED.iter_paths()) == []


def test_unknown_predicate_type():
    status = FilterSupportStatus.unknown_predicate_type(object())

    assert not status
    assert status.reason == "Don't know how to adapt predicate type object"
    assert status.predicate == "object"
