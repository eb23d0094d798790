#!/usr/bin/env python3
"""
Tests for the json_sample_to_code command.
"""

import json
from pathlib import Path

from click.testing import CliRunner

from json_sample_to_code.json_sample_to_code import json_sample_to_code

SAMPLES_DIR = Path(__file__).parent / "test_data" / "samples"
HOTEL = str(SAMPLES_DIR / "hotel.json")
USERS = str(SAMPLES_DIR / "users.json")
USERS_JSONL = str(SAMPLES_DIR / "users.jsonl")


def run(args, input=None):
    return CliRunner().invoke(json_sample_to_code, args, input=input)


def test_dry_run_python():
    result = run(["--dry", "-n", "Hotel", "models", HOTEL])

    assert result.exit_code == 0, result.output
    assert result.output.startswith("models/hotel.py\n\n")
    assert "class Hotel:" in result.output
    assert "class HotelImageListImage:" in result.output
    assert "# Command: json_sample_to_code models hotel.json" in result.output


def test_dry_run_csharp():
    result = run(["--dry", "-l", "cs", "-n", "Hotel", "Models", HOTEL])

    assert result.exit_code == 0, result.output
    assert "Models/Hotel.cs\n" in result.output
    assert "Models/Location.cs\n" in result.output
    assert "public class Hotel" in result.output


def test_default_class_name():
    result = run(["--dry", "models"], input='{\n  "a": 1\n}')

    assert result.exit_code == 0, result.output
    assert "class NewDto:" in result.output


def test_stdin_jsonl_is_multipart():
    result = run(["--dry", "-n", "User", "models"], input=Path(USERS_JSONL).read_text())

    assert result.exit_code == 0, result.output
    assert "    nickname: str | None = None\n" in result.output


def test_multipart_array():
    result = run(["--dry", "--multipart", "-n", "User", "models", USERS])

    assert result.exit_code == 0, result.output
    assert "class Address:" in result.output
    assert "--multipart" in result.output


def test_untyped_and_optional():
    result = run(["--dry", "--no-typed", "--optional", "models"], input='{\n  "a": 1\n}')

    assert result.exit_code == 0, result.output
    assert "    a: Any = None\n" in result.output
    assert "--no-typed --optional" in result.output


def test_writes_files(tmp_path):
    result = run(["-n", "Hotel", "-o", str(tmp_path), "app.models", HOTEL])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "app" / "models" / "hotel.py").exists()
    assert "Created" in result.output


def test_existing_file_exit_code(tmp_path):
    args = ["-n", "Hotel", "-o", str(tmp_path), "models", HOTEL]
    assert run(args).exit_code == 0

    result = run(args)
    assert result.exit_code == 5

    result = run(["--force"] + args)
    assert result.exit_code == 0, result.output


def test_config_file(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"add_generation_comment": False, "all_optional": True}))

    result = run(["--dry", "-c", str(config_path), "models"], input='{\n  "a": 1\n}')

    assert result.exit_code == 0, result.output
    assert "Generated by" not in result.output
    assert "    a: int | None = None\n" in result.output


def test_invalid_json_exit_code():
    result = run(["models"], input="{not json")
    assert result.exit_code == 2


def test_array_without_multipart_exit_code():
    result = run(["models", USERS])
    assert result.exit_code == 2


def test_invalid_namespace_exit_code():
    result = run(["my-models", HOTEL])
    assert result.exit_code == 3


def test_empty_multipart_exit_code():
    result = run(["--multipart", "models"], input="[]")
    assert result.exit_code == 4


def test_primitive_multipart_exit_code():
    result = run(["--multipart", "models"], input='[{"a": 1}, 2]')
    assert result.exit_code == 4


def test_unknown_language():
    result = run(["-l", "java", "models", HOTEL])
    assert result.exit_code == 2
    assert "java" in result.output


def test_invalid_utf8_exit_code(tmp_path):
    sample = tmp_path / "latin1.json"
    sample.write_bytes(b'{"a": "\xff\xfe"}')

    result = run(["--dry", "models", str(sample)])

    assert result.exit_code == 2
    assert "not valid UTF-8" in result.output
    assert isinstance(result.exception, SystemExit)


def test_invalid_config_json(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json")

    result = run(["--dry", "-c", str(config_path), "models", HOTEL])

    assert result.exit_code == 2
    assert "--config" in result.output
    assert isinstance(result.exception, SystemExit)


def test_unknown_output_mode_in_config(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"output": {"mode": "sometimes"}}))

    result = run(["--dry", "-c", str(config_path), "models", HOTEL])

    assert result.exit_code == 2
    assert "sometimes" in result.output
    assert isinstance(result.exception, SystemExit)
