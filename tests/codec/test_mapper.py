"""Tests for applying transforms at a path inside a data tree."""

from __future__ import annotations

import copy

import pytest

from scalar_codec.codec.mapper import map_at_path
from tests.conftest import CountingTransform


class TestMapAtPathBasics:
    def test_top_level_value(self):
        upper = CountingTransform()
        assert map_at_path({"simple": "a"}, ["simple"], upper) == {"simple": "A"}
        assert upper.call_count == 1

    def test_nested_value(self):
        data = {"nested": {"name": "a", "other": 1}}
        assert map_at_path(data, ["nested", "name"], str.upper) == {
            "nested": {"name": "A", "other": 1}
        }

    def test_none_root_returned_unchanged(self):
        upper = CountingTransform()
        assert map_at_path(None, ["simple"], upper) is None
        assert upper.call_count == 0

    def test_empty_path_applies_to_root(self):
        assert map_at_path("a", [], str.upper) == "A"
        assert map_at_path(["a", None, "b"], [], str.upper) == ["A", None, "B"]

    def test_missing_key_is_noop(self):
        upper = CountingTransform()
        assert map_at_path({"other": "a"}, ["simple"], upper) == {"other": "a"}
        assert upper.call_count == 0

    def test_non_mapping_along_path_is_noop(self):
        upper = CountingTransform()
        assert map_at_path({"nested": "oops"}, ["nested", "name"], upper) == {"nested": "oops"}
        assert upper.call_count == 0


class TestNullPropagation:
    def test_null_parent_skips_transform(self):
        upper = CountingTransform()
        result = map_at_path({"nestedNullable": None}, ["nestedNullable", "name"], upper)
        assert result == {"nestedNullable": None}
        assert upper.call_count == 0

    def test_null_leaf_skips_transform(self):
        upper = CountingTransform()
        assert map_at_path({"simple": None}, ["simple"], upper) == {"simple": None}
        assert upper.call_count == 0

    def test_null_list_elements_left_alone(self):
        upper = CountingTransform()
        result = map_at_path({"list": ["a", None, "b"]}, ["list"], upper)
        assert result == {"list": ["A", None, "B"]}
        assert upper.calls == ["a", "b"]

    def test_null_objects_inside_list(self):
        upper = CountingTransform()
        data = {"listNested": [{"name": "a"}, None, {"name": "b"}]}
        result = map_at_path(data, ["listNested", "name"], upper)
        assert result == {"listNested": [{"name": "A"}, None, {"name": "B"}]}
        assert upper.call_count == 2


class TestListTransparency:
    def test_list_leaf_maps_each_element(self):
        upper = CountingTransform()
        assert map_at_path({"list": ["a", "a"]}, ["list"], upper) == {"list": ["A", "A"]}
        assert upper.call_count == 2

    def test_list_of_objects(self):
        upper = CountingTransform()
        data = {"listNested": [{"name": "a"}, {"name": "b"}]}
        result = map_at_path(data, ["listNested", "name"], upper)
        assert result == {"listNested": [{"name": "A"}, {"name": "B"}]}
        assert upper.call_count == 2

    def test_nested_lists_at_leaf(self):
        upper = CountingTransform()
        result = map_at_path({"matrix": [["a", "b"], [None, "c"], None]}, ["matrix"], upper)
        assert result == {"matrix": [["A", "B"], [None, "C"], None]}
        assert upper.call_count == 3

    def test_nested_lists_along_path(self):
        data = {"groups": [[{"name": "a"}], [{"name": "b"}, {"name": "c"}]]}
        result = map_at_path(data, ["groups", "name"], str.upper)
        assert result == {"groups": [[{"name": "A"}], [{"name": "B"}, {"name": "C"}]]}

    def test_lists_at_several_levels(self):
        data = {"a": [{"b": [{"c": "x"}, {"c": "y"}]}, {"b": []}]}
        result = map_at_path(data, ["a", "b", "c"], str.upper)
        assert result == {"a": [{"b": [{"c": "X"}, {"c": "Y"}]}, {"b": []}]}


class TestNoMutation:
    def test_input_not_mutated(self):
        data = {"nested": {"name": "a"}, "listNested": [{"name": "b"}], "sibling": {"x": 1}}
        snapshot = copy.deepcopy(data)
        map_at_path(data, ["nested", "name"], str.upper)
        map_at_path(data, ["listNested", "name"], str.upper)
        assert data == snapshot

    def test_siblings_shared_path_copied(self):
        data = {"nested": {"name": "a"}, "sibling": {"x": 1}}
        result = map_at_path(data, ["nested", "name"], str.upper)
        assert result is not data
        assert result["nested"] is not data["nested"]
        assert result["sibling"] is data["sibling"]


class TestComposition:
    def test_successive_calls_compose(self):
        data = {"listNested": [{"name": "a"}, {"name": "b"}]}
        path = ["listNested", "name"]
        twice = map_at_path(map_at_path(data, path, str.upper), path, lambda v: v + "!")
        fused = map_at_path(data, path, lambda v: str.upper(v) + "!")
        assert twice == fused == {"listNested": [{"name": "A!"}, {"name": "B!"}]}


class TestErrors:
    def test_transform_error_propagates(self):
        def boom(value: str) -> str:
            raise ValueError(f"bad value {value}")

        data = {"simple": "a"}
        with pytest.raises(ValueError, match="bad value a"):
            map_at_path(data, ["simple"], boom)
        assert data == {"simple": "a"}
