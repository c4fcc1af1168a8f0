"""
Unit tests for the configuration system.
"""

import json

import pytest

from idlgen.utils.config import (
    GenerationConfig,
    IdlgenConfig,
    TemplateConfig,
    get_config,
    load_config,
    set_config,
    validate_generation_config,
)
from idlgen.utils.exceptions import ConfigError


class TestDefaults:
    """Test configuration defaults."""

    def test_defaults_without_file(self, tmp_path):
        config = IdlgenConfig(str(tmp_path / "missing.json"))
        assert config.generation == GenerationConfig()
        assert config.template == TemplateConfig()
        assert config.generation.package_name == "gen"
        assert config.generation.blank_lines_between_decls
        assert not config.generation.sort_by_kind
        assert not config.generation.group_methods
        assert config.logging.level == "INFO"

    def test_global_config(self):
        config = get_config()
        assert get_config() is config

        replacement = IdlgenConfig()
        set_config(replacement)
        assert get_config() is replacement


class TestLoading:
    """Test loading configuration files."""

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "custom.yml"
        path.write_text(
            "generation:\n"
            "  package_name: models\n"
            "  group_methods: true\n"
            "template:\n"
            "  trim_blocks: false\n"
            "logging:\n"
            "  level: DEBUG\n"
        )
        config = load_config(str(path))
        assert config.generation.package_name == "models"
        assert config.generation.group_methods
        assert not config.template.trim_blocks
        assert config.logging.level == "DEBUG"

    def test_json_file(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"generation": {"blank_lines_between_decls": False}}))
        config = load_config(str(path))
        assert not config.generation.blank_lines_between_decls

    def test_default_location(self, tmp_path):
        (tmp_path / "idlgen.yaml").write_text("generation:\n  package_name: fromcwd\n")
        assert IdlgenConfig().generation.package_name == "fromcwd"

    def test_config_env_variable(self, tmp_path, monkeypatch):
        path = tmp_path / "elsewhere.json"
        path.write_text(json.dumps({"generation": {"package_name": "fromenvfile"}}))
        monkeypatch.setenv("IDLGEN_CONFIG", str(path))
        assert IdlgenConfig().generation.package_name == "fromenvfile"

    def test_environment_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"generation": {"package_name": "models"}}))
        monkeypatch.setenv("IDLGEN_PACKAGE_NAME", "override")
        monkeypatch.setenv("IDLGEN_LOG_LEVEL", "WARNING")

        config = load_config(str(path))
        assert config.generation.package_name == "override"
        assert config.logging.level == "WARNING"

    def test_unreadable_file_uses_defaults(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        assert load_config(str(path)).generation == GenerationConfig()

    def test_empty_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)).generation == GenerationConfig()

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(str(path))

    def test_non_mapping_section(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"generation": ["gen"]}))
        with pytest.raises(ConfigError, match="generation"):
            load_config(str(path))

    def test_invalid_package_name(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"generation": {"package_name": "my-package"}}))
        with pytest.raises(ConfigError) as exc_info:
            load_config(str(path))
        assert exc_info.value.details == {"field": "package_name"}

    @pytest.mark.parametrize("section, key", [
        ("generation", "sort_by_kind"),
        ("template", "trim_blocks"),
        ("logging", "enable_file_logging"),
    ])
    def test_quoted_boolean_rejected(self, tmp_path, section, key):
        path = tmp_path / "quoted.yaml"
        path.write_text(f"{section}:\n  {key}: \"false\"\n")
        with pytest.raises(ConfigError, match="true or false") as exc_info:
            load_config(str(path))
        assert exc_info.value.details == {"field": key}


class TestSaving:
    """Test writing configuration back out."""

    def test_to_dict(self, tmp_path):
        data = IdlgenConfig(str(tmp_path / "missing.json")).to_dict()
        assert data["version"] == "1.0"
        assert data["generation"]["package_name"] == "gen"
        assert set(data) == {"version", "generation", "template", "logging"}

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "saved.json"
        config = IdlgenConfig(str(path))
        config.generation.package_name = "saved"
        config.save_config()

        assert json.loads(path.read_text())["generation"]["package_name"] == "saved"
        assert load_config(str(path)).generation.package_name == "saved"


class TestValidation:
    """Test generation config validation."""

    @pytest.mark.parametrize("name", ["gen", "models", "_private", "v2"])
    def test_valid_names(self, name):
        validate_generation_config(GenerationConfig(package_name=name))

    @pytest.mark.parametrize("name", ["", "2fast", "my-pkg", "func", "_", None])
    def test_invalid_names(self, name):
        with pytest.raises(ConfigError):
            validate_generation_config(GenerationConfig(package_name=name))
