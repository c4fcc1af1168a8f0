"""
Snippet Renderer.

Renders one Jinja2 template against one data value with the template
function library, producing Go source. The rendered text is prefixed
with a package clause so that it parses as a complete file.
"""

from __future__ import annotations

import traceback
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional

from jinja2 import Environment, StrictUndefined
from jinja2 import TemplateSyntaxError as JinjaTemplateSyntaxError

from ..utils.config import TemplateConfig
from ..utils.exceptions import TemplateExecutionError, TemplateSyntaxError
from .functions import TEMPLATE_FILTERS

SNIPPET_PACKAGE = "idlgen"
SNIPPET_HEADER = f"package {SNIPPET_PACKAGE}\n\n"

# Filename Jinja2 gives templates compiled from strings
_TEMPLATE_FILENAME = "<template>"


def _template_lineno(error: BaseException) -> Optional[int]:
    """Innermost template line in the traceback of a rendering error."""
    lineno = None
    for frame in traceback.extract_tb(error.__traceback__):
        if frame.filename == _TEMPLATE_FILENAME:
            lineno = frame.lineno
    return lineno


class TemplateRenderer:
    """Jinja2-based renderer for Go snippets."""

    def __init__(self, config: Optional[TemplateConfig] = None):
        """Initialize the template renderer."""
        config = config or TemplateConfig()
        self._env = Environment(
            undefined=StrictUndefined,
            trim_blocks=config.trim_blocks,
            lstrip_blocks=config.lstrip_blocks,
            keep_trailing_newline=config.keep_trailing_newline,
            autoescape=False,
        )
        self._env.filters.update(TEMPLATE_FILTERS)

    @staticmethod
    def _build_context(data: Any, functions: Dict[str, Callable[..., Any]]) -> Dict[str, Any]:
        context: Dict[str, Any] = {}
        if isinstance(data, Mapping):
            context.update((key, value) for key, value in data.items() if isinstance(key, str))
        context["data"] = data
        context.update(functions)
        return context

    def render(self, template: str, data: Any, functions: Dict[str, Callable[..., Any]]) -> str:
        """
        Render a template string against a data value.

        Raises:
            TemplateSyntaxError: If the template is malformed. Nothing has
                been executed when this is raised.
            TemplateExecutionError: If rendering fails, for instance on a
                field the data does not have or a bad function call.
        """
        if not isinstance(template, str):
            raise TypeError(f"Template must be a string, got {type(template).__name__}")

        try:
            compiled = self._env.from_string(template)
        except JinjaTemplateSyntaxError as e:
            raise TemplateSyntaxError(f"Invalid template: {e.message}", e.lineno) from e

        try:
            body = compiled.render(self._build_context(data, functions))
        except Exception as e:
            raise TemplateExecutionError(
                f"Template execution failed: {e}", _template_lineno(e)
            ) from e

        return SNIPPET_HEADER + body
