"""Tests for config-file loading and option parsing."""

import json
from pathlib import Path

import pytest

from source_dependency.config import (
    build_config,
    load_config_file,
    parse_depth,
    parse_options,
    parse_path_mapping,
)
from source_dependency.models import ConfigError


def _write(tmp_path, values):
    path = tmp_path / "sd.json"
    path.write_text(json.dumps(values))
    return path


def test_camel_and_snake_case_keys(tmp_path):
    path = _write(tmp_path, {
        "target": "src",
        "excludeExternal": True,
        "result_filters": ["-test"],
        "depth": 2,
    })
    values = load_config_file(path)
    assert values == {
        "target": Path("src"),
        "exclude_external": True,
        "result_filters": ["-test"],
        "depth": "2",
    }


def test_unknown_key_rejected(tmp_path):
    with pytest.raises(ConfigError):
        load_config_file(_write(tmp_path, {"colour": "red"}))


def test_invalid_json(tmp_path):
    path = tmp_path / "sd.json"
    path.write_text("{")
    with pytest.raises(ConfigError):
        load_config_file(path)


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config_file(tmp_path / "nope.json")


def test_overrides_win_over_file():
    config = build_config(
        {"language": "java", "prefix": "com.", "result_filters": ["a"]},
        language="python",
        prefix=None,
        result_filters=(),
    )
    assert config.language == "python"
    assert config.prefix == "com."
    assert config.result_filters == ["a"]


def test_defaults():
    config = build_config()
    assert config.language == "typescript"
    assert config.exclude_well_known_folders is True
    assert config.output_format == "plain"


def test_parse_depth():
    assert parse_depth("") == (0, 0)
    assert parse_depth("2") == (2, 0)
    assert parse_depth("2, 1") == (2, 1)
    for bad in ("x", "1,2,3", "-1"):
        with pytest.raises(ConfigError):
            parse_depth(bad)


def test_parse_path_mapping():
    resolve = parse_path_mapping(["@app/=src/", "~/=./"])
    assert resolve("@app/util") == "src/util"
    assert resolve("~/x") == "./x"
    assert resolve("lodash") is None
    with pytest.raises(ConfigError):
        parse_path_mapping(["no-equals-sign"])


def test_parse_options():
    assert parse_options(["lock_file=true", "level=3", "name=web", "dev"]) == {
        "lock_file": True,
        "level": 3,
        "name": "web",
        "dev": True,
    }
    with pytest.raises(ConfigError):
        parse_options(["=1"])
