#!/usr/bin/env python3
"""
Tests for the pipeline generator and file writing.
"""

import importlib

import pytest

from json_sample_to_code.pipeline import (
    CodeGeneratorConfig,
    EmptyMultipartList,
    ExpectedObjectGotOther,
    InvalidNamespace,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

USER = {"id": 1, "address": {"city": "Paris"}}


class TestPipelineGenerator:
    def test_unknown_language(self):
        with pytest.raises(ValueError, match="not supported"):
            PipelineGenerator("User", USER, "models", language="java")

    def test_invalid_namespace(self):
        with pytest.raises(InvalidNamespace):
            PipelineGenerator("User", USER, "my-models")

    def test_single_mode_requires_object(self):
        with pytest.raises(ExpectedObjectGotOther):
            PipelineGenerator("User", [USER], "models")

    def test_multipart_requires_samples(self):
        with pytest.raises(EmptyMultipartList):
            PipelineGenerator("User", [], "models", multipart=True)

    def test_build_is_cached(self):
        generator = PipelineGenerator("User", USER, "models")
        assert generator.build() is generator.build()

    def test_multipart_build(self):
        generator = PipelineGenerator("User", [{"a": 1}, {"b": 2}], "models", multipart=True)
        ir = generator.build()

        assert ir.multipart
        assert ir.root.field_names == ["a", "b"]

    def test_generation_comment(self):
        generator = PipelineGenerator("User", USER, "models", command_line="json_sample_to_code models user.json")
        comment = generator.generation_comment()

        assert comment.startswith("# Generated by json_sample_to_code")
        assert comment.endswith("# Command: json_sample_to_code models user.json")

    def test_csharp_generation_comment(self):
        generator = PipelineGenerator("User", USER, "Models", language="cs")
        assert generator.generation_comment().startswith("// Generated by json_sample_to_code")

    def test_no_generation_comment(self):
        config = CodeGeneratorConfig(add_generation_comment=False)
        generator = PipelineGenerator("User", USER, "models", config)

        source = generator.generate()["models/user.py"]
        assert "Generated by" not in source
        assert source.startswith("from __future__ import annotations")


class TestWrite:
    def test_write_python(self, tmp_path):
        written = PipelineGenerator("User", USER, "app.models").write(tmp_path)

        assert written == [tmp_path / "app" / "models" / "user.py"]
        assert "class Address:" in written[0].read_text()

    def test_write_csharp(self, tmp_path):
        written = PipelineGenerator("User", USER, "App.Models", language="cs").write(tmp_path)

        assert sorted(p.name for p in written) == ["Address.cs", "User.cs"]
        assert all(p.parent == tmp_path / "App" / "Models" for p in written)

    def test_no_temporary_files_left(self, tmp_path):
        PipelineGenerator("User", USER, "models").write(tmp_path)
        assert [p.name for p in (tmp_path / "models").iterdir()] == ["user.py"]

    def test_existing_file_is_an_error(self, tmp_path):
        target = tmp_path / "models" / "user.py"
        target.parent.mkdir()
        target.write_text("keep me")

        with pytest.raises(FileExistsError, match="--force"):
            PipelineGenerator("User", USER, "models").write(tmp_path)
        assert target.read_text() == "keep me"

    def test_existing_file_stops_all_writes(self, tmp_path):
        existing = tmp_path / "Models" / "User.cs"
        existing.parent.mkdir()
        existing.write_text("keep me")

        with pytest.raises(FileExistsError):
            PipelineGenerator("User", USER, "Models", language="cs").write(tmp_path)
        assert not (tmp_path / "Models" / "Address.cs").exists()

    def test_force_overwrites(self, tmp_path):
        target = tmp_path / "models" / "user.py"
        target.parent.mkdir()
        target.write_text("old")

        config = CodeGeneratorConfig(output=OutputConfig(mode=OutputMode.FORCE))
        PipelineGenerator("User", USER, "models", config).write(tmp_path)

        assert "class User:" in target.read_text()

    def test_non_atomic_write(self, tmp_path):
        config = CodeGeneratorConfig(output=OutputConfig(atomic_write=False))
        written = PipelineGenerator("User", USER, "models", config).write(tmp_path)
        assert written[0].exists()

    def test_generated_module_decodes_json(self, tmp_path, monkeypatch):
        pytest.importorskip("dataclasses_json")
        sample = {"user_id": 1, "tags": ["a"], "home_address": {"zip_code": "1000"}}
        PipelineGenerator("User", sample, "generated_user_dto").write(tmp_path)

        monkeypatch.syspath_prepend(str(tmp_path))
        module = importlib.import_module("generated_user_dto.user")

        user = module.User.from_dict({"user_id": 7, "tags": ["x", "y"], "home_address": {"zip_code": "75001"}})
        assert user.userId == 7
        assert user.tags == ["x", "y"]
        assert user.homeAddress.zipCode == "75001"
        assert user.to_dict() == {"user_id": 7, "tags": ["x", "y"], "home_address": {"zip_code": "75001"}}

    def test_class_named_any_keeps_typing_any(self, tmp_path, monkeypatch):
        pytest.importorskip("dataclasses_json")
        sample = {"any": {"x": 1}, "other": [1, "a"], "m": None}
        PipelineGenerator("Root", sample, "generated_any_dto").write(tmp_path)

        monkeypatch.syspath_prepend(str(tmp_path))
        module = importlib.import_module("generated_any_dto.root")

        root = module.Root.from_dict({"any": {"x": 5}, "other": [2, "b"], "m": 3})
        assert root.any.x == 5
        assert root.other == [2, "b"]
        assert root.m == 3
        assert root.to_dict() == {"any": {"x": 5}, "other": [2, "b"], "m": 3}

    def test_keyword_class_names_are_written(self, tmp_path):
        written = PipelineGenerator("Root", {"none": {"x": 1}}, "pkg").write(tmp_path)
        assert "class None_:" in written[0].read_text()
