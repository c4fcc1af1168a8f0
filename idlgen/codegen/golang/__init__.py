"""
Minimal Go grammar support.

- lexer.py: tokens with Go's semicolon insertion
- nodes.py: import specs, declarations and parsed files
- parser.py: top-level parser for rendered snippets
- printer.py: canonical layout of the assembled file
"""

from .lexer import Token, TokenKind, tokenize
from .nodes import DeclKind, Declaration, ImportDecl, ImportSpec, SourceFile
from .parser import Parser, parse_source
from .printer import format_declaration, format_file, format_import_decl, format_tokens

__all__ = [
    "Token",
    "TokenKind",
    "tokenize",
    "DeclKind",
    "Declaration",
    "ImportDecl",
    "ImportSpec",
    "SourceFile",
    "Parser",
    "parse_source",
    "format_declaration",
    "format_file",
    "format_import_decl",
    "format_tokens",
]
