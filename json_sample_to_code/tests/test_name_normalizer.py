"""
Unit tests for identifier normalization and class naming.
"""

import pytest

from json_sample_to_code.pipeline.analyzer import (
    DEFAULT_ROOT_NAME,
    NameRegistry,
    build_class_name,
    needs_mapping,
    normalize_field_name,
)


@pytest.mark.parametrize(
    "key, expected",
    [
        ("@HowToReach", "howToReach"),
        ("123bad", "bad"),
        ("first_name", "firstName"),
        ("first-name", "firstName"),
        ("first name", "firstName"),
        ("userId", "userId"),
        ("UserId", "userId"),
        ("_id", "id"),
        ("user.name", "userName"),
        ("e-mail@work", "eMailWork"),
        ("1st_place", "stPlace"),
        ("abc123", "abc123"),
    ],
)
def test_normalize_field_name(key, expected):
    assert normalize_field_name(key) == expected


@pytest.mark.parametrize("key", ["---", "", "   ", "@#$", "123", "名前"])
def test_normalize_field_name_drops_unusable_keys(key):
    assert normalize_field_name(key) is None


def test_needs_mapping():
    assert needs_mapping("first_name", "firstName")
    assert not needs_mapping("firstName", "firstName")


@pytest.mark.parametrize(
    "path, expected",
    [
        ("", DEFAULT_ROOT_NAME),
        ("address", "Address"),
        ("address.city", "AddressCity"),
        ("hotelImageList.image", "HotelImageListImage"),
    ],
)
def test_build_class_name(path, expected):
    assert build_class_name(path) == expected


class TestNameRegistry:
    def test_first_claim_keeps_name(self):
        registry = NameRegistry()
        assert registry.claim("Address") == "Address"
        assert "Address" in registry

    def test_collisions_get_numeric_suffix(self):
        registry = NameRegistry()
        assert registry.claim("Address") == "Address"
        assert registry.claim("Address") == "Address2"
        assert registry.claim("Address") == "Address3"

    def test_suffix_skips_taken_names(self):
        registry = NameRegistry()
        registry.claim("Address2")
        registry.claim("Address")
        assert registry.claim("Address") == "Address3"

    def test_collision_is_logged(self, caplog):
        registry = NameRegistry("class name")
        registry.claim("Address")
        with caplog.at_level("WARNING"):
            registry.claim("Address")
        assert "Address2" in caplog.text
