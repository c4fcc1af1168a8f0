"""
Declaration Assembler.

The Generator collects Go declarations rendered from templates into a
single output file. Each template call is rendered, parsed, and split
into imports (merged into the generator's importer) and top-level
declarations (appended in order). Writing prepends one import block and
formats the whole file.
"""

from __future__ import annotations

import io
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from ..utils.config import (
    GenerationConfig,
    IdlgenConfig,
    TemplateConfig,
    get_config,
    validate_generation_config,
)
from ..utils.exceptions import (
    FormatError,
    GoSyntaxError,
    RenderedSyntaxError,
    TemplateExecutionError,
    TemplateSyntaxError,
)
from ..utils.logging import GeneratorLogger, setup_logging
from ..utils.naming import import_base_name
from .functions import build_template_functions
from .golang.nodes import DeclKind, Declaration, SourceFile
from .golang.parser import parse_source
from .golang.printer import format_file
from .importer import BLANK_ALIAS, ImportBinding, Importer
from .renderer import TemplateRenderer

_KIND_ORDER = {
    DeclKind.CONST: 0,
    DeclKind.VAR: 1,
    DeclKind.TYPE: 2,
    DeclKind.FUNC: 3,
}


class Generator:
    """
    Tracks code generation state for one Go output file.

    A generator is created by its caller and owns its imports and
    declarations; it is not safe to share between threads. Use one
    generator per output file.
    """

    def __init__(
        self,
        config: Optional[GenerationConfig] = None,
        template_config: Optional[TemplateConfig] = None,
    ):
        self.config = config or GenerationConfig()
        validate_generation_config(self.config)

        self._renderer = TemplateRenderer(template_config)
        self._importer = Importer()
        self._decls: List[Declaration] = []
        self._log = GeneratorLogger(__name__)

    @property
    def declarations(self) -> Tuple[Declaration, ...]:
        """Declarations collected so far, in emission order."""
        return tuple(self._decls)

    @property
    def imports(self) -> Dict[str, ImportBinding]:
        """Import bindings keyed by path."""
        return self._importer.bindings

    def declare_from_template(self, template: str, data: Any = None) -> None:
        """
        Render a template and add its declarations to the output.

        The template is Jinja2 text producing Go code; data is available
        as `data`, and if it is a mapping its keys are also top-level
        variables. For example,

            g.declare_from_template('type {{ name }} int32', {"name": "myType"})

        will generate,

            type myType int32

        Imports written literally in the rendered code are merged into the
        generator's import block; when such an import is given a different
        alias than the one written, qualified references in the same
        snippet are updated to match. The functions listed in
        build_template_functions are available to the template; prefer
        import() over literal imports.

        On any error the generator is left exactly as it was.

        Raises:
            TemplateSyntaxError: The template is malformed.
            TemplateExecutionError: Rendering failed.
            RenderedSyntaxError: The rendered text is not valid Go.
        """
        staged = self._importer.copy()
        functions = build_template_functions(staged)
        requested: Dict[str, str] = {}

        def tracked_import(path):
            alias = staged.request(path)
            requested[alias] = path
            return alias

        functions["import"] = tracked_import

        try:
            source = self._renderer.render(template, data, functions)
        except (TemplateSyntaxError, TemplateExecutionError) as e:
            self._log.log_failure("render", e)
            raise

        try:
            unit = parse_source(source)
        except GoSyntaxError as e:
            self._log.log_failure("parse", e)
            raise RenderedSyntaxError(
                f"Template produced invalid Go code: {e.message}", source, e.lineno
            ) from e

        renames = self._merge_imports(unit, staged, requested, source)

        base = len(self._decls)
        decls = [
            replace(decl.rename_qualifiers(renames), order=base + index)
            for index, decl in enumerate(unit.decls)
        ]

        self._importer = staged
        self._decls.extend(decls)
        self._log.log_declare(len(decls), len(unit.imports))

    def _merge_imports(
        self, unit: SourceFile, staged: Importer, requested: Dict[str, str], source: str
    ) -> Dict[str, str]:
        """
        Merge the literal imports of a snippet into the staged importer.

        Returns the local names written in the snippet that must be
        rewritten to their resolved aliases.
        """
        renames: Dict[str, str] = {}
        literal_paths: Dict[str, str] = {}
        for spec in unit.imports:
            if spec.alias == ".":
                raise RenderedSyntaxError(
                    f"dot import of \"{spec.path}\" is not supported", source, spec.line
                )

            resolved = staged.merge_literal(spec.path, spec.alias)
            if spec.alias == BLANK_ALIAS:
                continue

            local = spec.alias if spec.alias is not None else import_base_name(spec.path)
            if literal_paths.setdefault(local, spec.path) != spec.path:
                # two literal imports share a name; neither can be resolved
                self._log.log_ambiguous_literal(spec.path, local)
                renames.pop(local, None)
                continue
            if resolved == local:
                continue
            if requested.get(local, spec.path) != spec.path:
                self._log.log_ambiguous_literal(spec.path, local)
                continue
            renames[local] = resolved

        return renames

    def _arranged_decls(self) -> List[Declaration]:
        decls = list(self._decls)
        if self.config.sort_by_kind:
            decls.sort(key=lambda decl: _KIND_ORDER[decl.kind])
        if self.config.group_methods:
            decls = _group_methods(decls)
        return decls

    def render(self) -> str:
        """
        Format the complete output file.

        Raises:
            FormatError: If the assembled file cannot be formatted.
        """
        try:
            return format_file(
                self.config.package_name,
                self._importer.final_block(),
                self._arranged_decls(),
                blank_lines_between_decls=self.config.blank_lines_between_decls,
            )
        except (ValueError, TypeError) as e:
            raise FormatError(f"Failed to format generated code: {e}") from e

    def write(self, sink) -> None:
        """
        Write the complete output file to a sink in a single write.

        Text sinks receive a str, anything else receives UTF-8 bytes. If
        formatting fails nothing is written.

        Raises:
            FormatError: If the assembled file cannot be formatted.
        """
        text = self.render()
        data = text.encode("utf-8")
        if isinstance(sink, io.TextIOBase):
            sink.write(text)
        else:
            sink.write(data)
        self._log.log_write(len(data), len(self._decls), len(self._importer))


def _group_methods(decls: List[Declaration]) -> List[Declaration]:
    """Move each method right after the declaration of its receiver type."""
    type_names = {
        name for decl in decls if decl.kind is DeclKind.TYPE for name in decl.names
    }

    methods: Dict[str, List[Declaration]] = {}
    rest = []
    for decl in decls:
        if decl.is_method and decl.receiver in type_names:
            methods.setdefault(decl.receiver, []).append(decl)
        else:
            rest.append(decl)

    grouped = []
    for decl in rest:
        grouped.append(decl)
        if decl.kind is DeclKind.TYPE:
            for name in decl.names:
                grouped.extend(methods.pop(name, []))
    return grouped


def create_generator(config: Optional[IdlgenConfig] = None) -> Generator:
    """
    Create a generator from a full configuration (the global one by default).

    The logging section of the configuration is applied as well.
    """
    config = config or get_config()
    log_file = config.logging.log_file if config.logging.enable_file_logging else None
    setup_logging(config.logging.level, log_file)
    return Generator(config.generation, config.template)
