"""
Utils package for idlgen.

This module provides logging, configuration, error types and naming
helpers shared by the code generation engine.
"""

from .exceptions import (
    IdlgenError,
    TemplateSyntaxError,
    TemplateExecutionError,
    GoSyntaxError,
    RenderedSyntaxError,
    FormatError,
    ConfigError,
)
from .logging import setup_logging, get_logger, GeneratorLogger
from .naming import go_case, is_identifier, import_base_name, generate_unique_name
from .config import (
    IdlgenConfig,
    GenerationConfig,
    TemplateConfig,
    LoggingConfig,
    get_config,
    set_config,
    load_config,
)

__all__ = [
    "IdlgenError",
    "TemplateSyntaxError",
    "TemplateExecutionError",
    "GoSyntaxError",
    "RenderedSyntaxError",
    "FormatError",
    "ConfigError",
    "setup_logging",
    "get_logger",
    "GeneratorLogger",
    "go_case",
    "is_identifier",
    "import_base_name",
    "generate_unique_name",
    "IdlgenConfig",
    "GenerationConfig",
    "TemplateConfig",
    "LoggingConfig",
    "get_config",
    "set_config",
    "load_config",
]
