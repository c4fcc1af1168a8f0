"""
Syntax nodes for rendered Go snippets.

Only the top level of a file is modelled: the package clause, import
specs and declarations. A declaration keeps its tokens as-is; the
printer lays them out again when the file is written.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Mapping, Optional, Tuple

from .lexer import Token, TokenKind


class DeclKind(Enum):
    """Kinds of top-level Go declarations."""
    CONST = "const"
    VAR = "var"
    TYPE = "type"
    FUNC = "func"


@dataclass(frozen=True)
class ImportSpec:
    """
    One imported package.

    alias is None when the import names no local alias, "_" for blank
    imports and "." for dot imports.
    """
    path: str
    alias: Optional[str] = None
    line: int = 0


@dataclass(frozen=True)
class ImportDecl:
    """A grouped import declaration."""
    specs: Tuple[ImportSpec, ...]


@dataclass(frozen=True)
class Declaration:
    """A top-level const, var, type or func declaration."""
    kind: DeclKind
    tokens: Tuple[Token, ...]
    names: Tuple[str, ...] = ()
    receiver: Optional[str] = None
    line: int = 0
    order: int = 0

    @property
    def is_method(self) -> bool:
        return self.receiver is not None

    def rename_qualifiers(self, renames: Mapping[str, str]) -> Declaration:
        """
        Rewrite package-qualified references old.X into new.X.

        All renames apply at once, so chains like {"a": "b", "b": "c"} do
        not cascade. Only identifiers directly followed by a selector dot,
        and not themselves preceded by one, are rewritten.
        """
        renames = {old: new for old, new in renames.items() if old != new}
        if not renames:
            return self

        tokens = list(self.tokens)
        changed = False
        for index, token in enumerate(tokens):
            if token.kind is not TokenKind.IDENT or token.value not in renames:
                continue
            if index + 1 >= len(tokens) or tokens[index + 1].value != ".":
                continue
            if index > 0 and tokens[index - 1].value == ".":
                continue
            tokens[index] = replace(token, value=renames[token.value])
            changed = True

        if not changed:
            return self
        return replace(self, tokens=tuple(tokens))


@dataclass(frozen=True)
class SourceFile:
    """A parsed snippet: package clause, imports and declarations."""
    package: str
    imports: Tuple[ImportSpec, ...] = field(default_factory=tuple)
    decls: Tuple[Declaration, ...] = field(default_factory=tuple)
