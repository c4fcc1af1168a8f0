"""
idlgen: Go code generation back end for an IDL compiler.

Templates render Go snippets against the type model produced by the IDL
front end; the generator merges their imports and declarations into one
deterministic, formatted Go file.

Usage:
    from idlgen import Generator

    g = Generator()
    g.declare_from_template("type {{ name }} int32", {"name": "myType"})
    with open("types.go", "w") as f:
        g.write(f)
"""

__version__ = "0.1.0"
__author__ = "idlgen Team"

from .codegen import (
    Generator,
    create_generator,
    Importer,
    FieldRequired,
)

from .utils import (
    IdlgenConfig,
    GenerationConfig,
    TemplateConfig,
    get_config,
    load_config,
    IdlgenError,
    TemplateSyntaxError,
    TemplateExecutionError,
    RenderedSyntaxError,
    FormatError,
)

__all__ = [
    "Generator",
    "create_generator",
    "Importer",
    "FieldRequired",
    "IdlgenConfig",
    "GenerationConfig",
    "TemplateConfig",
    "get_config",
    "load_config",
    "IdlgenError",
    "TemplateSyntaxError",
    "TemplateExecutionError",
    "RenderedSyntaxError",
    "FormatError",
]
