"""Tests for the JSON value model and the bounded walker."""

import pytest

from themestudio.json_tree import JsonKind, kind_of, children, walk, format_path


class TestKindOf:
    """Test JSON value classification."""

    def test_kinds(self):
        assert kind_of({}) is JsonKind.OBJECT
        assert kind_of([]) is JsonKind.ARRAY
        assert kind_of("x") is JsonKind.STRING
        assert kind_of(1) is JsonKind.NUMBER
        assert kind_of(1.5) is JsonKind.NUMBER
        assert kind_of(None) is JsonKind.NULL

    def test_bool_is_not_number(self):
        assert kind_of(True) is JsonKind.BOOL
        assert kind_of(False) is JsonKind.BOOL

    def test_rejects_non_json(self):
        with pytest.raises(TypeError):
            kind_of(object())

    def test_children(self):
        assert list(children({"a": 1})) == [("a", 1)]
        assert list(children(["x", "y"])) == [(0, "x"), (1, "y")]
        assert list(children("text")) == []
        assert list(children(None)) == []

    def test_children_rejects_non_json(self):
        with pytest.raises(TypeError):
            list(children({1, 2}))


class TestWalk:
    """Test traversal order and the depth limit."""

    def test_pre_order(self):
        doc = {"a": [1, {"b": 2}], "c": 3}
        paths = [v.path for v in walk(doc)]
        assert paths == [(), ("a",), ("a", 0), ("a", 1), ("a", 1, "b"), ("c",)]

    def test_depths(self):
        doc = {"a": {"b": {}}}
        assert [v.depth for v in walk(doc)] == [0, 1, 2]

    def test_depth_limit_stops_subtree_only(self):
        doc = {"a": {"b": {"c": 1}}, "z": 2}
        hits = []
        paths = [v.path for v in walk(doc, max_depth=1, on_limit=hits.append)]
        assert paths == [(), ("a",), ("z",)]
        assert hits == [("a",)]

    def test_empty_container_at_limit_is_not_reported(self):
        hits = []
        list(walk({"a": {}}, max_depth=1, on_limit=hits.append))
        assert hits == []

    def test_deep_nesting_is_bounded(self):
        doc = current = {}
        for _ in range(100):
            current["n"] = {}
            current = current["n"]
        hits = []
        visits = list(walk(doc, max_depth=30, on_limit=hits.append))
        assert max(v.depth for v in visits) == 30
        assert len(hits) == 1

    def test_non_json_value_stops_walk(self):
        with pytest.raises(TypeError):
            list(walk({"a": [object()]}))

    def test_format_path(self):
        assert format_path(()) == "<root>"
        assert format_path(("a", 0, "b")) == "a[0].b"
        assert format_path((2, "x")) == "[2].x"
