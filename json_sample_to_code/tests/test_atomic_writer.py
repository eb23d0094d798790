#!/usr/bin/env python3
"""
Tests for the atomic writer and generated code validation.
"""

import pytest

from json_sample_to_code.pipeline import AtomicWriter, GeneratedCodeError

VALID_CS = 'namespace A\n{\n    public class B\n    {\n        [JsonProperty("{x")]\n        public int X { get; set; }\n    }\n}\n'


def test_write_creates_parents(tmp_path):
    path = tmp_path / "a" / "b" / "c.py"
    AtomicWriter().write(path, "x = 1\n", "python")
    assert path.read_text() == "x = 1\n"


def test_invalid_python_is_not_written(tmp_path):
    path = tmp_path / "bad.py"
    with pytest.raises(GeneratedCodeError, match="not valid"):
        AtomicWriter().write(path, "class :\n", "python")
    assert not path.exists()


def test_validation_can_be_skipped(tmp_path):
    path = tmp_path / "bad.py"
    AtomicWriter().write(path, "class :\n", "python", validate=False)
    assert path.exists()


def test_csharp_braces_in_strings_are_ignored(tmp_path):
    path = tmp_path / "B.cs"
    AtomicWriter().write(path, VALID_CS, "cs")
    assert path.read_text() == VALID_CS


@pytest.mark.parametrize(
    "content,message",
    [
        ("public class B { }", "namespace"),
        ("namespace A { }", "type definitions"),
        ("namespace A { public class B { }", "unbalanced"),
    ],
)
def test_invalid_csharp(tmp_path, content, message):
    with pytest.raises(GeneratedCodeError, match=message):
        AtomicWriter().write(tmp_path / "B.cs", content, "cs")


def test_custom_validator(tmp_path):
    def reject(content):
        raise GeneratedCodeError("rejected")

    with pytest.raises(GeneratedCodeError, match="rejected"):
        AtomicWriter(validate_python=reject).write(tmp_path / "a.py", "x = 1\n", "python")


def test_write_if_not_exists(tmp_path):
    path = tmp_path / "a.py"
    path.write_text("old")

    with pytest.raises(FileExistsError):
        AtomicWriter().write_if_not_exists(path, "x = 1\n", "python")
    assert path.read_text() == "old"
