"""
Go Lexer.

Splits rendered Go source into tokens, dropping comments and applying
Go's automatic semicolon insertion. Tokens remember the whitespace that
preceded them so the printer can keep line structure and resolve the
spacing choices the token stream alone cannot decide.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ...utils.exceptions import GoSyntaxError
from ...utils.naming import GO_KEYWORDS


class TokenKind(Enum):
    """Kinds of Go tokens."""
    IDENT = "identifier"
    KEYWORD = "keyword"
    INT = "integer literal"
    FLOAT = "float literal"
    IMAG = "imaginary literal"
    CHAR = "rune literal"
    STRING = "string literal"
    OP = "operator"
    SEMICOLON = "semicolon"
    EOF = "end of file"


LITERAL_KINDS = frozenset({
    TokenKind.INT, TokenKind.FLOAT, TokenKind.IMAG, TokenKind.CHAR, TokenKind.STRING,
})

# Value of semicolons inserted at line ends, as Go's own scanner reports them
AUTO_SEMICOLON = "\n"


@dataclass(frozen=True)
class Token:
    """A single Go token."""
    kind: TokenKind
    value: str
    line: int
    column: int
    space_before: bool = False
    newlines_before: int = 0

    @property
    def is_auto_semicolon(self) -> bool:
        return self.kind is TokenKind.SEMICOLON and self.value == AUTO_SEMICOLON

    def describe(self) -> str:
        """Human readable form for diagnostics."""
        if self.kind is TokenKind.EOF:
            return "EOF"
        if self.is_auto_semicolon:
            return "newline"
        return f"'{self.value}'"


_OPERATORS = sorted([
    "<<=", ">>=", "&^=", "...",
    "&&", "||", "<-", "++", "--", "==", "!=", "<=", ">=", ":=",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<", ">>", "&^",
    "+", "-", "*", "/", "%", "&", "|", "^", "<", ">", "=", "!", "~",
    "(", ")", "[", "]", "{", "}", ",", ";", ".", ":",
], key=len, reverse=True)

_NUMBER = (
    r"(?:0[xX][0-9a-fA-F_]*(?:\.[0-9a-fA-F_]*)?(?:[pP][+-]?[0-9_]+)?"
    r"|0[bB][01_]+"
    r"|0[oO][0-7_]+"
    r"|[0-9][0-9_]*(?:\.[0-9_]*)?(?:[eE][+-]?[0-9_]+)?"
    r"|\.[0-9][0-9_]*(?:[eE][+-]?[0-9_]+)?)i?"
)

_TOKEN_PATTERN = re.compile(
    "|".join([
        r"(?P<ws>[ \t\r\f]+)",
        r"(?P<newline>\n)",
        r"(?P<line_comment>//[^\n]*)",
        r"(?P<block_comment>/\*.*?\*/)",
        r"(?P<open_comment>/\*)",
        r"(?P<raw_string>`[^`]*`)",
        r'(?P<string>"(?:[^"\\\n]|\\.)*")',
        r"(?P<char>'(?:[^'\\\n]|\\[^\n])+')",
        r"(?P<number>" + _NUMBER + r")",
        r"(?P<ident>[^\W\d]\w*)",
        r"(?P<op>" + "|".join(re.escape(op) for op in _OPERATORS) + r")",
    ]),
    re.DOTALL,
)

_SEMICOLON_TRIGGER_KEYWORDS = frozenset({"break", "continue", "fallthrough", "return"})
_SEMICOLON_TRIGGER_OPS = frozenset({"++", "--", ")", "]", "}"})


def _classify_number(text: str) -> TokenKind:
    if text.endswith("i"):
        return TokenKind.IMAG
    lowered = text.lower()
    if lowered.startswith("0x"):
        return TokenKind.FLOAT if ("." in lowered or "p" in lowered) else TokenKind.INT
    if lowered.startswith(("0b", "0o")):
        return TokenKind.INT
    return TokenKind.FLOAT if ("." in lowered or "e" in lowered) else TokenKind.INT


def _triggers_semicolon(token: Optional[Token]) -> bool:
    if token is None:
        return False
    if token.kind in LITERAL_KINDS or token.kind is TokenKind.IDENT:
        return True
    if token.kind is TokenKind.KEYWORD:
        return token.value in _SEMICOLON_TRIGGER_KEYWORDS
    return token.kind is TokenKind.OP and token.value in _SEMICOLON_TRIGGER_OPS


def _unterminated(source: str, pos: int) -> Optional[str]:
    if source.startswith("`", pos):
        return "raw string literal not terminated"
    if source.startswith('"', pos):
        return "string literal not terminated"
    if source.startswith("'", pos):
        return "rune literal not terminated"
    return None


def tokenize(source: str) -> List[Token]:
    """
    Tokenize Go source text.

    Returns the token list terminated by an EOF token. Comments are
    dropped; semicolons are inserted where Go would insert them.

    Raises:
        GoSyntaxError: On unterminated literals or comments and on
            characters that cannot start a token.
    """
    tokens: List[Token] = []
    last: Optional[Token] = None

    pos = 0
    line = 1
    line_start = 0
    pending_space = False
    pending_newlines = 0

    def insert_semicolon(at_line: int, at_column: int) -> None:
        nonlocal last
        if _triggers_semicolon(last):
            last = Token(TokenKind.SEMICOLON, AUTO_SEMICOLON, at_line, at_column)
            tokens.append(last)

    while pos < len(source):
        match = _TOKEN_PATTERN.match(source, pos)
        column = pos - line_start + 1
        if match is None:
            problem = _unterminated(source, pos)
            if problem is None:
                problem = f"illegal character {source[pos]!r}"
            raise GoSyntaxError(problem, line, column)

        group = match.lastgroup
        text = match.group()
        pos = match.end()

        if group == "ws":
            pending_space = True
            continue

        if group == "open_comment":
            raise GoSyntaxError("comment not terminated", line, column)

        if group in ("newline", "block_comment") and "\n" in text:
            insert_semicolon(line, column)
            newline_count = text.count("\n")
            pending_newlines += newline_count
            line += newline_count
            line_start = match.start() + text.rindex("\n") + 1
            pending_space = False
            continue

        if group in ("line_comment", "block_comment"):
            pending_space = True
            continue

        if group == "raw_string":
            kind = TokenKind.STRING
        elif group == "string":
            kind = TokenKind.STRING
        elif group == "char":
            kind = TokenKind.CHAR
        elif group == "number":
            kind = _classify_number(text)
        elif group == "ident":
            kind = TokenKind.KEYWORD if text in GO_KEYWORDS else TokenKind.IDENT
        elif text == ";":
            kind = TokenKind.SEMICOLON
        else:
            kind = TokenKind.OP

        last = Token(kind, text, line, column, pending_space, pending_newlines)
        tokens.append(last)
        pending_space = False
        pending_newlines = 0

        if group == "raw_string" and "\n" in text:
            line += text.count("\n")
            line_start = match.start() + text.rindex("\n") + 1

    insert_semicolon(line, pos - line_start + 1)
    tokens.append(Token(TokenKind.EOF, "", line, pos - line_start + 1, pending_space, pending_newlines))
    return tokens
