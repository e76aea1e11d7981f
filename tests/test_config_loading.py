"""Tests for JSON/YAML config loading helpers."""

from __future__ import annotations

import json

import pytest
import yaml

from pcd_compliance.core import (
    coerce_non_negative_int,
    load_config_mapping,
    validate_allowed_keys,
    validate_required_keys,
)


def test_load_config_mapping_accepts_json(tmp_path) -> None:
    """Loader should parse JSON config objects."""

    path = tmp_path / "shape.json"
    path.write_text(json.dumps({"name": 1, "incoming_message_payload_lengths": [2, 2]}), encoding="utf-8")

    assert load_config_mapping(path) == {"name": 1, "incoming_message_payload_lengths": [2, 2]}


def test_load_config_mapping_accepts_yaml(tmp_path) -> None:
    """Loader should parse YAML config objects."""

    path = tmp_path / "shape.yml"
    path.write_text("name: 1\nincoming_message_payload_lengths: [2, 2]\n", encoding="utf-8")

    assert load_config_mapping(str(path)) == {"name": 1, "incoming_message_payload_lengths": [2, 2]}


def test_load_config_mapping_rejects_unsupported_extension(tmp_path) -> None:
    """Loader should fail fast on unknown config file suffix."""

    path = tmp_path / "shape.toml"
    path.write_text("name = 1\n", encoding="utf-8")

    with pytest.raises(ValueError, match="unsupported config file extension"):
        load_config_mapping(path)


def test_load_config_mapping_requires_mapping_root(tmp_path) -> None:
    """Loader should reject non-mapping top-level config payloads."""

    path = tmp_path / "shape.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")

    with pytest.raises(ValueError, match="config root must be a JSON/YAML object"):
        load_config_mapping(path)


def test_load_config_mapping_surfaces_yaml_errors(tmp_path) -> None:
    """Malformed YAML should raise PyYAML's own error."""

    path = tmp_path / "shape.yaml"
    path.write_text("name: [1, 2\n", encoding="utf-8")

    with pytest.raises(yaml.YAMLError):
        load_config_mapping(path)


def test_key_validation_reports_sorted_keys() -> None:
    """Unknown and missing keys should be listed in the error message."""

    with pytest.raises(ValueError, match=r"predicate has unknown keys: \['b', 'z'\]"):
        validate_allowed_keys({"a": 1, "z": 2, "b": 3}, field_name="predicate", allowed_keys=("a",))
    with pytest.raises(ValueError, match=r"predicate is missing required keys: \['b'\]"):
        validate_required_keys({"a": 1}, field_name="predicate", required_keys=("a", "b"))


def test_coerce_non_negative_int() -> None:
    """Only plain non-negative integers pass."""

    assert coerce_non_negative_int(3, field_name="x") == 3
    for bad in (-1, 2.0, True, "3"):
        with pytest.raises(ValueError, match="x must be"):
            coerce_non_negative_int(bad, field_name="x")
