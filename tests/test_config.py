import json

import pytest

from schema_generate.codegen.core.config import (
    ConfigError,
    GeneratorConfig,
    clean_package_name,
    load_config,
)


def test_defaults():
    config = load_config("go")
    assert config.package_name == "main"
    assert config.header_tool == "schema-generate"
    assert config.add_comments is True
    assert config.sort_additional_properties is True
    assert config.custom == {}


def test_unknown_keys_go_to_custom():
    config = load_config("go", custom_config={"package_name": "x", "type_imports": {"a": "b"}})
    assert config.package_name == "x"
    assert config.custom == {"type_imports": {"a": "b"}}


def test_file_then_overrides(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"package_name": "fromfile", "add_comments": False}))

    config = load_config("go", custom_config={"package_name": "cli"}, config_file=path)
    assert config.package_name == "cli"
    assert config.add_comments is False


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config("go", config_file=tmp_path / "missing.json")


def test_non_json_suffix(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("package_name: x")
    with pytest.raises(ConfigError, match="must be JSON"):
        load_config("go", config_file=path)


def test_invalid_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError, match="Invalid JSON"):
        load_config("go", config_file=path)


def test_non_object_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError, match="JSON object"):
        load_config("go", config_file=path)


def test_clean_package_name():
    assert clean_package_name("my-pkg.v1") == "mypkgv1"
