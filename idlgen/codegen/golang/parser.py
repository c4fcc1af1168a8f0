"""
Top-level Go Parser.

Recognizes just enough of the Go grammar to split a rendered snippet
into its package clause, import specs and top-level declarations.
Declaration bodies are not parsed beyond bracket matching.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from ...utils.exceptions import GoSyntaxError
from .lexer import Token, TokenKind, tokenize
from .nodes import DeclKind, Declaration, ImportSpec, SourceFile

_OPENERS = {"(": ")", "[": "]", "{": "}"}
_CLOSERS = frozenset(_OPENERS.values())
_DECL_KEYWORDS = {kind.value: kind for kind in DeclKind}


def _is_op(token: Token, value: str) -> bool:
    return token.kind is TokenKind.OP and token.value == value


class Parser:
    """Parser over the token list of one Go source file."""

    def __init__(self, tokens: List[Token]):
        self._tokens = tokens
        self._pos = 0

    # -------------------------------------------------------------------------
    # Token helpers
    # -------------------------------------------------------------------------

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _next(self) -> Token:
        token = self._tokens[self._pos]
        if token.kind is not TokenKind.EOF:
            self._pos += 1
        return token

    def _error(self, message: str, token: Optional[Token] = None) -> GoSyntaxError:
        token = token or self._peek()
        return GoSyntaxError(message, token.line, token.column)

    def _expect_kind(self, kind: TokenKind, what: str) -> Token:
        token = self._peek()
        if token.kind is not kind:
            raise self._error(f"expected {what}, found {token.describe()}")
        return self._next()

    def _expect_semicolon(self) -> None:
        token = self._peek()
        if token.kind is TokenKind.SEMICOLON:
            self._next()
        elif token.kind is not TokenKind.EOF:
            raise self._error(f"expected ';', found {token.describe()}")

    # -------------------------------------------------------------------------
    # File structure
    # -------------------------------------------------------------------------

    def parse_file(self) -> SourceFile:
        """Parse a complete source file."""
        token = self._peek()
        if not (token.kind is TokenKind.KEYWORD and token.value == "package"):
            raise self._error(f"expected 'package', found {token.describe()}")
        self._next()
        package = self._expect_kind(TokenKind.IDENT, "package name").value
        self._expect_semicolon()

        imports: List[ImportSpec] = []
        while self._peek().kind is TokenKind.KEYWORD and self._peek().value == "import":
            imports.extend(self._parse_import_decl())

        decls: List[Declaration] = []
        while self._peek().kind is not TokenKind.EOF:
            decls.append(self._parse_decl(order=len(decls)))

        return SourceFile(package=package, imports=tuple(imports), decls=tuple(decls))

    def _parse_import_decl(self) -> List[ImportSpec]:
        self._next()  # import
        specs = []
        if _is_op(self._peek(), "("):
            self._next()
            while not _is_op(self._peek(), ")"):
                specs.append(self._parse_import_spec())
                if _is_op(self._peek(), ")"):
                    break
                self._expect_kind(TokenKind.SEMICOLON, "';' or ')'")
            self._next()
        else:
            specs.append(self._parse_import_spec())
        self._expect_semicolon()
        return specs

    def _parse_import_spec(self) -> ImportSpec:
        token = self._peek()
        alias = None
        if token.kind is TokenKind.IDENT:
            alias = self._next().value
        elif _is_op(token, "."):
            alias = self._next().value

        path_token = self._expect_kind(TokenKind.STRING, "import path")
        path = path_token.value[1:-1]
        if not path or "\\" in path or any(ch.isspace() for ch in path):
            raise self._error(f"invalid import path: {path_token.value}", path_token)
        return ImportSpec(path=path, alias=alias, line=token.line)

    # -------------------------------------------------------------------------
    # Declarations
    # -------------------------------------------------------------------------

    def _parse_decl(self, order: int) -> Declaration:
        start = self._peek()
        if start.kind is TokenKind.KEYWORD and start.value == "import":
            raise self._error("imports must appear before other declarations")
        if start.kind is not TokenKind.KEYWORD or start.value not in _DECL_KEYWORDS:
            raise self._error(f"expected declaration, found {start.describe()}")

        tokens = self._collect_decl_tokens()
        kind = _DECL_KEYWORDS[start.value]
        if kind is DeclKind.FUNC:
            names, receiver = self._check_func_header(tokens)
        else:
            names, receiver = self._check_spec_header(tokens), None

        return Declaration(
            kind=kind,
            tokens=tuple(tokens),
            names=names,
            receiver=receiver,
            line=start.line,
            order=order,
        )

    def _collect_decl_tokens(self) -> List[Token]:
        """Consume tokens up to the semicolon that ends the declaration."""
        tokens: List[Token] = []
        stack: List[Token] = []
        while True:
            token = self._peek()
            if token.kind is TokenKind.EOF:
                if stack:
                    expected = _OPENERS[stack[-1].value]
                    raise self._error(f"unexpected EOF, expected '{expected}'")
                break
            self._next()

            if token.kind is TokenKind.SEMICOLON and not stack:
                break
            if token.kind is TokenKind.OP and token.value in _OPENERS:
                stack.append(token)
            elif token.kind is TokenKind.OP and token.value in _CLOSERS:
                if not stack or _OPENERS[stack[-1].value] != token.value:
                    raise self._error(f"unexpected '{token.value}'", token)
                stack.pop()
            tokens.append(token)

        return tokens

    def _check_spec_header(self, tokens: List[Token]) -> Tuple[str, ...]:
        keyword = tokens[0]
        if len(tokens) < 2:
            raise self._error(f"expected name or '(' after '{keyword.value}'", keyword)

        first = tokens[1]
        if _is_op(first, "("):
            return self._group_names(tokens)
        if first.kind is not TokenKind.IDENT:
            raise self._error(f"expected name or '(' after '{keyword.value}', found {first.describe()}", first)
        if len(tokens) < 3:
            raise self._error(f"incomplete {keyword.value} declaration of '{first.value}'", first)

        names = [first.value]
        index = 2
        while index + 1 < len(tokens) and _is_op(tokens[index], ","):
            if tokens[index + 1].kind is not TokenKind.IDENT:
                break
            names.append(tokens[index + 1].value)
            index += 2
        return tuple(names)

    @staticmethod
    def _group_names(tokens: List[Token]) -> Tuple[str, ...]:
        """Names that start each spec inside a grouped declaration."""
        names = []
        depth = 0
        at_spec_start = False
        for token in tokens[1:]:
            if token.kind is TokenKind.OP and token.value in _OPENERS:
                depth += 1
                at_spec_start = depth == 1
                continue
            if token.kind is TokenKind.OP and token.value in _CLOSERS:
                depth -= 1
                continue
            if depth == 1 and token.kind is TokenKind.SEMICOLON:
                at_spec_start = True
                continue
            if at_spec_start and token.kind is TokenKind.IDENT:
                names.append(token.value)
            at_spec_start = False
        return tuple(names)

    def _check_func_header(self, tokens: List[Token]) -> Tuple[Tuple[str, ...], Optional[str]]:
        keyword = tokens[0]
        receiver = None
        index = 1

        if index < len(tokens) and _is_op(tokens[index], "("):
            close = self._matching(tokens, index)
            receiver = self._receiver_type(tokens[index + 1:close])
            if receiver is None:
                raise self._error("method has no receiver type", tokens[index])
            index = close + 1

        if index >= len(tokens) or tokens[index].kind is not TokenKind.IDENT:
            found = tokens[index].describe() if index < len(tokens) else "end of declaration"
            raise self._error(f"expected function name, found {found}", keyword)
        name = tokens[index].value

        index += 1
        if index < len(tokens) and _is_op(tokens[index], "["):
            index = self._matching(tokens, index) + 1
        if index >= len(tokens) or not _is_op(tokens[index], "("):
            raise self._error(f"expected '(' after function name '{name}'", tokens[index - 1])

        return (name,), receiver

    @staticmethod
    def _matching(tokens: List[Token], index: int) -> int:
        depth = 0
        for position in range(index, len(tokens)):
            token = tokens[position]
            if token.kind is TokenKind.OP and token.value in _OPENERS:
                depth += 1
            elif token.kind is TokenKind.OP and token.value in _CLOSERS:
                depth -= 1
                if depth == 0:
                    return position
        return len(tokens) - 1

    @staticmethod
    def _receiver_type(tokens: List[Token]) -> Optional[str]:
        """Base type name of a method receiver such as (r *T) or (T[K])."""
        depth = 0
        name = None
        for token in tokens:
            if _is_op(token, "["):
                depth += 1
            elif _is_op(token, "]"):
                depth -= 1
            elif depth == 0 and token.kind is TokenKind.IDENT:
                name = token.value
        return name


def parse_source(source: str) -> SourceFile:
    """
    Parse Go source text.

    Raises:
        GoSyntaxError: If the text is not a well-formed file at the level
            of detail this parser checks.
    """
    return Parser(tokenize(source)).parse_file()
