"""
Template Function Library.

The fixed set of functions available inside every template. All of
them are pure except import, which registers the package with the
importer of the generator that is rendering.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from ..utils.naming import go_case
from .importer import Importer
from .typespec import FieldRequired, type_decl_name, type_reference


def build_template_functions(importer: Importer) -> Dict[str, Callable[..., Any]]:
    """
    Build the template globals bound to one importer.

    Available names:

    go_case(str): the string in exported Go casing. Accepts ALLCAPS,
    snake_case or camelCase.

    import(path): the alias to use for an imported package, registering
    it if needed.

        {% set fmt = import("fmt") %}
        {{ fmt }}.Println("hello world")

    def_name(spec): the name under which a user-declared type is defined.

    type_reference(spec, required): a reference to any type, wrapped in a
    pointer when optional. Required() and Optional() construct the second
    argument; required(flag) converts a boolean.

        {{ type_reference(field.type, required(field.required)) }}
    """
    return {
        "go_case": go_case,
        "import": importer.request,
        "def_name": type_decl_name,
        "type_reference": type_reference,
        "Required": lambda: FieldRequired.REQUIRED,
        "Optional": lambda: FieldRequired.OPTIONAL,
        "required": FieldRequired.from_bool,
    }


# Functions that are also registered as Jinja2 filters
TEMPLATE_FILTERS = {
    "go_case": go_case,
}
