"""
Configuration System for idlgen.

This module provides a small, unified configuration interface for the
code generator: output policy, template environment options and
logging. Configuration can be loaded from a JSON or YAML file and
overridden through environment variables.
"""

import json
import os
from typing import Dict, Any, Optional
from pathlib import Path
from dataclasses import dataclass, asdict

import yaml

from .exceptions import ConfigError
from .logging import get_logger
from .naming import is_identifier

logger = get_logger(__name__)


@dataclass
class GenerationConfig:
    """Output policy for generated Go files."""

    package_name: str = "gen"
    blank_lines_between_decls: bool = True

    # Stable reorderings, off by default so output follows call order
    sort_by_kind: bool = False
    group_methods: bool = False


@dataclass
class TemplateConfig:
    """Jinja2 environment options used when rendering snippets."""

    trim_blocks: bool = True
    lstrip_blocks: bool = True
    keep_trailing_newline: bool = True


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    enable_file_logging: bool = False
    log_file: str = "idlgen.log"


def _flag(data: Dict[str, Any], key: str, default: bool) -> bool:
    """Read a boolean option, rejecting anything but true or false."""
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(
            f"Option '{key}' must be true or false, got {value!r}",
            {'field': key},
        )
    return value


def validate_generation_config(config: GenerationConfig) -> None:
    """Validate a generation configuration."""
    if not isinstance(config.package_name, str) or not is_identifier(config.package_name):
        raise ConfigError(
            f"Package name must be a valid Go identifier: {config.package_name!r}",
            {'field': 'package_name'},
        )
    if config.package_name == "_":
        raise ConfigError("Package name cannot be the blank identifier", {'field': 'package_name'})


class IdlgenConfig:
    """
    Unified configuration manager for idlgen.

    This class manages all configuration options through a single JSON
    or YAML file with a few environment variable overrides.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file. If None, uses default location.
        """
        self.config_file = self._get_config_file_path(config_file)
        self._config_data = self._load_config()

        self.generation = self._create_generation_config()
        self.template = self._create_template_config()
        self.logging = self._create_logging_config()

    def _get_config_file_path(self, config_file: Optional[str]) -> Path:
        """Get the configuration file path."""
        if config_file:
            return Path(config_file)

        env_file = os.getenv("IDLGEN_CONFIG")
        if env_file:
            return Path(env_file)

        # Default location: try YAML first, then JSON
        config_dir = Path.cwd()
        yaml_config = config_dir / "idlgen.yaml"
        json_config = config_dir / "idlgen.json"

        if yaml_config.exists():
            return yaml_config
        else:
            return json_config

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if not self.config_file.exists():
            logger.debug(f"Configuration file {self.config_file} not found, using defaults")
            return {}

        try:
            with open(self.config_file, "r") as f:
                if self.config_file.suffix.lower() in [".yaml", ".yml"]:
                    config_data = yaml.safe_load(f)
                else:
                    config_data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Failed to load configuration: {e}")
            return {}

        if config_data is None:
            return {}
        if not isinstance(config_data, dict):
            raise ConfigError(
                f"Configuration file {self.config_file} must contain a mapping",
                {'type': type(config_data).__name__},
            )

        logger.info(f"Loaded configuration from {self.config_file}")
        return config_data

    def _section(self, name: str) -> Dict[str, Any]:
        data = self._config_data.get(name, {})
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration section '{name}' must be a mapping")
        return data

    def _create_generation_config(self) -> GenerationConfig:
        """Create generation configuration from loaded data."""
        gen_data = self._section("generation")

        package_name = os.getenv("IDLGEN_PACKAGE_NAME") or gen_data.get("package_name", "gen")

        config = GenerationConfig(
            package_name=package_name,
            blank_lines_between_decls=_flag(gen_data, "blank_lines_between_decls", True),
            sort_by_kind=_flag(gen_data, "sort_by_kind", False),
            group_methods=_flag(gen_data, "group_methods", False),
        )
        validate_generation_config(config)
        return config

    def _create_template_config(self) -> TemplateConfig:
        """Create template configuration from loaded data."""
        tmpl_data = self._section("template")

        return TemplateConfig(
            trim_blocks=_flag(tmpl_data, "trim_blocks", True),
            lstrip_blocks=_flag(tmpl_data, "lstrip_blocks", True),
            keep_trailing_newline=_flag(tmpl_data, "keep_trailing_newline", True),
        )

    def _create_logging_config(self) -> LoggingConfig:
        """Create logging configuration from loaded data."""
        log_data = self._section("logging")

        return LoggingConfig(
            level=os.getenv("IDLGEN_LOG_LEVEL") or log_data.get("level", "INFO"),
            enable_file_logging=_flag(log_data, "enable_file_logging", False),
            log_file=log_data.get("log_file", "idlgen.log"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as plain data."""
        return {
            "version": "1.0",
            "generation": asdict(self.generation),
            "template": asdict(self.template),
            "logging": asdict(self.logging),
        }

    def save_config(self) -> None:
        """Save current configuration to file as JSON."""
        with open(self.config_file, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Configuration saved to {self.config_file}")


# Default configuration for drivers that do not build their own
_global_config: Optional[IdlgenConfig] = None


def get_config() -> IdlgenConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = IdlgenConfig()
    return _global_config


def set_config(config: Optional[IdlgenConfig]) -> None:
    """Set (or with None, reset) the global configuration instance."""
    global _global_config
    _global_config = config


def load_config(config_file: str) -> IdlgenConfig:
    """Load configuration from a specific file."""
    return IdlgenConfig(config_file)
