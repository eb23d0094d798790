"""
Unit tests for the multipart field merger and structure checks.
"""

from json_sample_to_code.pipeline.analyzer import has_consistent_structure, merge_objects
from json_sample_to_code.pipeline.json_ast import JsonInt, JsonParser, JsonString


def objects(*raw):
    parser = JsonParser()
    return [parser.parse(v) for v in raw]


class TestMergeObjects:
    def test_presence_and_nullability(self):
        merged = merge_objects(objects({"id": 1, "name": "A"}, {"id": 2, "name": None}, {"id": 3}))

        assert merged["id"].present_count == 3
        assert merged["id"].total_samples == 3
        assert not merged["id"].nullable_seen
        assert merged["id"].values == [JsonInt(value=1), JsonInt(value=2), JsonInt(value=3)]

        assert merged["name"].present_count == 2
        assert merged["name"].nullable_seen
        assert merged["name"].values == [JsonString(value="A")]

    def test_first_seen_key_order(self):
        merged = merge_objects(objects({"b": 1, "a": 2}, {"c": 3, "a": 4}, {"d": 5, "b": 6}))
        assert list(merged) == ["b", "a", "c", "d"]

    def test_missing_key_is_counted_against_total(self):
        merged = merge_objects(objects({"a": 1}, {"b": 2}))
        assert merged["a"].present_count == 1
        assert merged["b"].present_count == 1
        assert not merged["a"].always_present
        assert merged["a"].total_samples == 2

    def test_empty_input(self):
        assert merge_objects([]) == {}


class TestConsistentStructure:
    def test_single_key_set(self):
        assert has_consistent_structure(objects({"a": 1, "b": 2}, {"a": 3, "b": 4}))

    def test_key_order_does_not_matter(self):
        assert has_consistent_structure(objects({"a": 1, "b": 2}, {"b": 3, "a": 4}))

    def test_value_types_do_not_matter(self):
        assert has_consistent_structure(objects({"a": 1}, {"a": "x"}, {"a": None}))

    def test_two_key_sets(self):
        assert not has_consistent_structure(objects({"a": 1}, {"b": 2}))

    def test_single_object(self):
        assert has_consistent_structure(objects({"a": 1}))
