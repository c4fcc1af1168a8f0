"""
Import Resolver.

Owns the namespace of packages imported by one generated file. Every
distinct import path gets exactly one local alias, and no two paths
share an alias. Collisions are resolved by numeric suffixes in request
order, so resolution always succeeds and is deterministic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from ..utils.logging import GeneratorLogger
from ..utils.naming import generate_unique_name, import_base_name
from .golang.nodes import ImportDecl, ImportSpec

BLANK_ALIAS = "_"


class ImportOrigin(Enum):
    """How an import entered the namespace."""
    PROGRAMMATIC = "programmatic"
    LITERAL = "literal"


@dataclass(frozen=True)
class ImportBinding:
    """An import path and the alias generated code uses for it."""
    path: str
    alias: str
    origin: ImportOrigin


def _check_path(path: str) -> None:
    if not isinstance(path, str):
        raise TypeError(f"Import path must be a string, got {type(path).__name__}")
    if not path or any(ch.isspace() for ch in path) or '"' in path or "\\" in path:
        raise ValueError(f"Invalid import path: {path!r}")


class Importer:
    """
    Collision-free alias table for the imports of one output file.

    The table is local to its owner; use copy() to stage changes that
    may have to be thrown away.
    """

    def __init__(self):
        self._bindings: Dict[str, ImportBinding] = {}
        self._aliases: Dict[str, str] = {}
        self._log = GeneratorLogger(__name__)

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, path: object) -> bool:
        return path in self._bindings

    @property
    def bindings(self) -> Dict[str, ImportBinding]:
        """Bindings keyed by import path."""
        return dict(self._bindings)

    @property
    def aliases(self) -> Dict[str, str]:
        """Import paths keyed by claimed alias (blank imports excluded)."""
        return dict(self._aliases)

    def alias_for(self, path: str) -> Optional[str]:
        binding = self._bindings.get(path)
        return binding.alias if binding is not None else None

    def copy(self) -> Importer:
        clone = Importer()
        clone._bindings = dict(self._bindings)
        clone._aliases = dict(self._aliases)
        return clone

    def request(self, path: str) -> str:
        """
        Register a package that generated code refers to.

        Returns the alias to use in references. Calling it again with the
        same path returns the same alias.
        """
        _check_path(path)

        binding = self._bindings.get(path)
        if binding is not None and binding.alias != BLANK_ALIAS:
            return binding.alias

        alias = self._claim(path, import_base_name(path))
        self._bindings[path] = ImportBinding(path, alias, ImportOrigin.PROGRAMMATIC)
        return alias

    def merge_literal(self, path: str, alias: Optional[str] = None) -> str:
        """
        Absorb an import written literally in rendered code.

        An already registered path keeps its alias. Otherwise the given
        alias (or the default name for the path) is claimed, with the same
        suffixing as request() when it is taken. A blank alias registers
        the path without claiming a name.

        Returns the alias the path is bound to afterwards.
        """
        _check_path(path)

        binding = self._bindings.get(path)
        if binding is not None:
            if binding.alias != BLANK_ALIAS or alias == BLANK_ALIAS:
                return binding.alias
        elif alias == BLANK_ALIAS:
            self._bindings[path] = ImportBinding(path, BLANK_ALIAS, ImportOrigin.LITERAL)
            return BLANK_ALIAS

        wanted = alias if alias is not None else import_base_name(path)
        resolved = self._claim(path, wanted)
        self._bindings[path] = ImportBinding(path, resolved, ImportOrigin.LITERAL)
        return resolved

    def _claim(self, path: str, wanted: str) -> str:
        resolved = generate_unique_name(wanted, set(self._aliases))
        if resolved != wanted:
            self._log.log_alias_collision(path, wanted, resolved)
        self._aliases[resolved] = path
        return resolved

    def final_block(self) -> Optional[ImportDecl]:
        """
        Build the import declaration for the whole file.

        Specs are sorted by path. Returns None if nothing was imported.
        """
        if not self._bindings:
            return None

        specs = tuple(
            ImportSpec(path=path, alias=self._bindings[path].alias)
            for path in sorted(self._bindings)
        )
        return ImportDecl(specs=specs)
