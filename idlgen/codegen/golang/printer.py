"""
Canonical Go Printer.

Lays out a whole file from the package name, the import block and the
token sequences of the collected declarations. Indentation is derived
from bracket nesting, line breaks follow the rendered text (at most one
blank line), and token spacing is normalized. Where the token stream
cannot tell a unary from a binary operator, or an index from a type, the
rendered text's own choice is kept, collapsed to a single space.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from ...utils.naming import import_base_name, is_identifier, last_path_segment
from .lexer import LITERAL_KINDS, Token, TokenKind
from .nodes import Declaration, ImportDecl, ImportSpec

INDENT = "\t"

_OPENERS = frozenset({"(", "[", "{"})
_CLOSERS = frozenset({")", "]", "}"})
_AMBIGUOUS_OPS = frozenset({"*", "&", "-", "+", "^", "<-"})
_UNARY_OPS = frozenset({"!", "~"})
_BINARY_OPS = frozenset({
    "||", "&&", "==", "!=", "<", "<=", ">", ">=", "|", "/", "%", "<<", ">>", "&^",
    "=", ":=", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<=", ">>=", "&^=",
})
_OUTDENTED_KEYWORDS = frozenset({"case", "default"})


def _ends_operand(token: Token) -> bool:
    if token.kind in LITERAL_KINDS or token.kind is TokenKind.IDENT:
        return True
    return token.kind is TokenKind.OP and token.value in (")", "]", "}", "++", "--")


class _LinePrinter:
    """Turns one declaration's tokens into lines of text."""

    def __init__(self, tokens: Sequence[Token]):
        self._tokens = [
            token for index, token in enumerate(tokens)
            if not self._dropped_semicolon(tokens, index)
        ]
        self._lines: List[str] = []
        self._current: List[str] = []
        # open brackets as (bracket, printed as a spaced block)
        self._stack: List[Tuple[str, bool]] = []
        self._closing: Optional[Tuple[str, bool]] = None
        self._prev: Optional[Token] = None
        self._prev_role: Optional[str] = None
        self._index = 0

    @staticmethod
    def _dropped_semicolon(tokens: Sequence[Token], index: int) -> bool:
        token = tokens[index]
        if token.kind is not TokenKind.SEMICOLON:
            return False
        if token.is_auto_semicolon:
            return True
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        return (
            following is None
            or following.newlines_before > 0
            or following.value in ("}", ")")
        )

    def print(self) -> List[str]:
        for index, token in enumerate(self._tokens):
            self._index = index
            following = self._tokens[index + 1] if index + 1 < len(self._tokens) else None
            self._emit(token, following, first=index == 0)
        self._flush()
        return self._lines

    def _flush(self) -> None:
        if self._current:
            self._lines.append("".join(self._current).rstrip())
            self._current = []

    def _emit(self, token: Token, following: Optional[Token], first: bool) -> None:
        if token.kind is TokenKind.OP and token.value in _CLOSERS:
            if not self._stack:
                raise ValueError(f"unbalanced '{token.value}' at line {token.line}")
            self._closing = self._stack.pop()

        role = self._role(token, following)

        if first or token.newlines_before > 0:
            self._flush()
            if not first and token.newlines_before > 1:
                self._lines.append("")
            depth = len(self._stack)
            if token.kind is TokenKind.KEYWORD and token.value in _OUTDENTED_KEYWORDS and depth:
                depth -= 1
            elif self._prev_role == "binary":
                # expression continued after a trailing operator
                depth += 1
            self._current.append(INDENT * depth)
            spaced = False
        else:
            spaced = self._needs_space(token, role)
            if spaced:
                self._current.append(" ")

        self._current.append(token.value)

        if token.kind is TokenKind.OP and token.value in _OPENERS:
            self._stack.append((token.value, token.value == "{" and self._is_spaced_block(spaced)))
        self._prev = token
        self._prev_role = role

    def _role(self, token: Token, following: Optional[Token]) -> Optional[str]:
        if token.kind is not TokenKind.OP:
            return None
        if token.value in _BINARY_OPS:
            return "binary"
        if token.value in _UNARY_OPS:
            return "unary"
        if token.value not in _AMBIGUOUS_OPS:
            return None

        prev = self._prev
        if prev is not None and prev.kind is TokenKind.KEYWORD and prev.value == "chan" and token.value == "<-":
            return "binary"
        if prev is None or not _ends_operand(prev) or self._prev_role == "unary":
            return "unary"
        spaced_after = following is None or following.newlines_before > 0 or following.space_before
        if token.space_before and spaced_after:
            return "binary"
        return "unary"

    def _needs_space(self, token: Token, role: Optional[str]) -> bool:
        prev = self._prev
        value = token.value
        top = self._stack[-1] if self._stack else None

        if value in (",", ";", "++", "--", ")", "]"):
            return False
        if prev.value in (",", ";"):
            return True
        if value == ":":
            return False
        if prev.value == ":":
            return top is None or top[0] != "["
        if prev.value in ("(", "["):
            return False
        if value == "." or prev.value == ".":
            return False
        if value == "...":
            return token.space_before
        if prev.value == "...":
            return False

        if prev.value == "{":
            return value != "}" and top is not None and top[1]
        if value == "{":
            return self._space_before_brace(token)
        if value == "}":
            return self._closing is not None and self._closing[1]

        if self._prev_role == "unary":
            return False
        if prev.kind is TokenKind.KEYWORD and prev.value == "chan" and value == "<-":
            return False
        if role == "binary" or self._prev_role == "binary":
            return True
        if role == "unary":
            if _ends_operand(prev):
                return token.space_before
            return True

        if value == "(":
            return self._space_before_paren(token)
        if value == "[":
            if prev.kind is TokenKind.KEYWORD:
                return prev.value != "map"
            return token.space_before
        if prev.kind is TokenKind.KEYWORD and prev.value == "map":
            return False
        if prev.value == "]":
            return token.space_before
        return True

    def _space_before_brace(self, token: Token) -> bool:
        prev = self._prev
        if prev.kind is TokenKind.KEYWORD:
            if prev.value in ("struct", "interface"):
                # one-line struct and interface types are written struct{ ... }
                return not self._closes_on_same_line()
            return True
        if prev.value == ")":
            return True
        if prev.kind is TokenKind.IDENT or prev.value in ("]", "}"):
            return token.space_before
        if self._prev_role == "unary":
            return False
        return True

    def _is_spaced_block(self, spaced: bool) -> bool:
        """Whether a '{' closed on its own line keeps spaces inside it."""
        prev = self._prev
        if prev is None:
            return spaced
        if prev.kind is TokenKind.KEYWORD and prev.value in ("struct", "interface"):
            return True
        top = self._stack[-1] if self._stack else None
        if top == ("{", False) and prev.value in ("{", ",", ":"):
            # element of a composite literal
            return False
        return spaced

    def _closes_on_same_line(self) -> bool:
        depth = 0
        for offset, token in enumerate(self._tokens[self._index:]):
            if offset and token.newlines_before > 0:
                return False
            if token.kind is not TokenKind.OP:
                continue
            if token.value in _OPENERS:
                depth += 1
            elif token.value in _CLOSERS:
                depth -= 1
                if depth == 0:
                    return True
        return True

    def _space_before_paren(self, token: Token) -> bool:
        prev = self._prev
        if prev.kind is TokenKind.KEYWORD:
            if prev.value == "func":
                # only a method receiver directly after the leading keyword
                return self._tokens[0] is prev
            return True
        if prev.value == ")":
            return token.space_before
        return False


def format_tokens(tokens: Sequence[Token]) -> List[str]:
    """Lay out a token sequence as lines of Go source (no trailing newlines)."""
    return _LinePrinter(tokens).print()


def format_declaration(decl: Declaration) -> str:
    """Format one top-level declaration."""
    return "\n".join(format_tokens(decl.tokens))


def format_import_spec(spec: ImportSpec) -> str:
    quoted = f'"{spec.path}"'
    # the alias is implied only when the path's last segment is the package name
    implied = last_path_segment(spec.path)
    if spec.alias is None or spec.alias == implied == import_base_name(spec.path):
        return quoted
    return f"{spec.alias} {quoted}"


def format_import_decl(import_decl: ImportDecl) -> str:
    """Format an import block in its grouped form."""
    lines = ["import ("]
    lines.extend(INDENT + format_import_spec(spec) for spec in import_decl.specs)
    lines.append(")")
    return "\n".join(lines)


def format_file(
    package_name: str,
    import_decl: Optional[ImportDecl],
    decls: Iterable[Declaration],
    blank_lines_between_decls: bool = True,
) -> str:
    """
    Format a complete Go file.

    Raises:
        ValueError: If the package name is not a valid identifier or a
            declaration's brackets do not balance.
    """
    if not is_identifier(package_name) or package_name == "_":
        raise ValueError(f"invalid package name: {package_name!r}")

    separator = "\n\n" if blank_lines_between_decls else "\n"
    blocks = []
    if import_decl is not None and import_decl.specs:
        blocks.append(format_import_decl(import_decl))
    body = separator.join(format_declaration(decl) for decl in decls)
    if body:
        blocks.append(body)

    text = f"package {package_name}\n"
    if blocks:
        text += "\n" + "\n\n".join(blocks) + "\n"
    return text
