"""
Go Code Generation Engine.

Turns Jinja2 template snippets into one deterministic Go source file:

- importer.py: collision-free aliases for imported packages
- typespec.py: type descriptors, definition names and references
- functions.py: functions available inside templates
- renderer.py: renders one template against one data value
- generator.py: parses rendered snippets and assembles the file
- golang/: the minimal Go grammar used for parsing and printing
"""

from .importer import Importer, ImportBinding, ImportOrigin
from .typespec import (
    FieldRequired,
    TypeSpec,
    PrimitiveSpec,
    ListSpec,
    SetSpec,
    MapSpec,
    UserTypeSpec,
    TypedefSpec,
    EnumSpec,
    StructSpec,
    type_decl_name,
    type_reference,
)
from .functions import build_template_functions
from .renderer import TemplateRenderer
from .generator import Generator, create_generator

__all__ = [
    "Importer",
    "ImportBinding",
    "ImportOrigin",
    "FieldRequired",
    "TypeSpec",
    "PrimitiveSpec",
    "ListSpec",
    "SetSpec",
    "MapSpec",
    "UserTypeSpec",
    "TypedefSpec",
    "EnumSpec",
    "StructSpec",
    "type_decl_name",
    "type_reference",
    "build_template_functions",
    "TemplateRenderer",
    "Generator",
    "create_generator",
]
