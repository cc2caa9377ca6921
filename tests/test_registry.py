import pytest

from schema_generate.codegen import GeneratorConfig
from schema_generate.codegen.core.generator import CodeGenerator
from schema_generate.codegen.languages.go import GoGenerator
from schema_generate.codegen.registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    get_registry,
    is_language_supported,
    list_supported_languages,
    register_generator,
)


class DummyGenerator(CodeGenerator):
    @property
    def language_name(self):
        return "dummy"

    @property
    def file_extension(self):
        return ".txt"

    def generate(self, model):
        return ""


@pytest.fixture
def registry():
    registry = GeneratorRegistry()
    registry.register("go", GoGenerator, aliases=["golang"])
    return registry


def test_global_registry_has_go():
    assert list_supported_languages() == ["go"]
    assert is_language_supported("Go")
    assert is_language_supported("golang")
    assert not is_language_supported("cobol")


def test_alias_resolves(registry):
    assert registry.resolve_language("GOLANG") == "go"
    assert registry.get_generator_class("golang") is GoGenerator


def test_unknown_language(registry):
    with pytest.raises(RegistryError, match="Available: go"):
        registry.resolve_language("cobol")


def test_register_rejects_non_generators(registry):
    with pytest.raises(RegistryError):
        registry.register("bad", object)


def test_alias_conflicts(registry):
    with pytest.raises(RegistryError, match="conflicts"):
        registry.register("dummy", DummyGenerator, aliases=["go"])
    with pytest.raises(RegistryError, match="already points"):
        registry.register("other", DummyGenerator, aliases=["golang"])


def test_unregister_drops_aliases(registry):
    registry.unregister("go")
    assert registry.list_languages() == []
    assert not registry.is_supported("golang")


def test_create_generator_from_dict_and_config(registry):
    generator = registry.create_generator("go", {"package_name": "api"})
    assert generator.config.package_name == "api"

    config = GeneratorConfig(package_name="direct")
    assert registry.create_generator("go", config).config is config


def test_create_generator_from_file(registry, tmp_path):
    path = tmp_path / "go.json"
    path.write_text('{"package_name": "filed"}')
    assert registry.create_generator("go", str(path)).config.package_name == "filed"


def test_create_generator_config_errors(registry, tmp_path):
    with pytest.raises(RegistryError, match="Failed to create"):
        registry.create_generator("go", tmp_path / "missing.json")
    with pytest.raises(RegistryError, match="Invalid config type"):
        registry.create_generator("go", 42)


def test_language_info():
    info = get_language_info("golang")
    assert info["name"] == "go"
    assert info["class"] == "GoGenerator"
    assert info["file_extension"] == ".go"
    assert info["aliases"] == ["golang"]


def test_get_generator():
    assert isinstance(get_generator("go"), GoGenerator)


def test_register_generator_in_global_registry():
    register_generator("dummy", DummyGenerator, aliases=["dum"])
    try:
        assert is_language_supported("dum")
        assert get_language_info("dummy")["file_extension"] == ".txt"
    finally:
        get_registry().unregister("dummy")
    assert not is_language_supported("dum")
