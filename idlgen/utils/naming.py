"""
Naming Utilities for idlgen.

This module provides the identifier conversions shared by the template
function library and the import resolver: Go-style casing of IDL names
and derivation of package names from import paths.
"""

from __future__ import annotations

import re
from typing import Set


# =============================================================================
# Go Language Names
# =============================================================================

GO_KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type",
    "var",
})

_IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')
_MAJOR_VERSION_PATTERN = re.compile(r'^v[0-9]+$')
_WORD_SEPARATOR_PATTERN = re.compile(r'[^A-Za-z0-9]+')


def is_identifier(name: str) -> bool:
    """Check whether a string is a valid Go identifier (ASCII only)."""
    return bool(_IDENTIFIER_PATTERN.match(name)) and name not in GO_KEYWORDS


# =============================================================================
# Core Naming Utilities
# =============================================================================

def go_case(name: str) -> str:
    """
    Convert an IDL name into an exported Go name.

    The name may be ALLCAPS, snake_case or already camelCase. Words are split
    on underscores (and any other non-alphanumeric character); an all-caps
    word is title-cased, any other word keeps its internal casing and only
    has its first character upper-cased.

        go_case("MY_FIELD") == go_case("my_field") == go_case("myField") == "MyField"

    Applying the function twice gives the same result as applying it once.
    """
    if not isinstance(name, str):
        raise TypeError(f"go_case expects a string, got {type(name).__name__}")

    words = [word for word in _WORD_SEPARATOR_PATTERN.split(name) if word]
    if not words:
        raise ValueError(f"Cannot convert {name!r} to a Go name")

    parts = []
    for word in words:
        if word.isupper():
            parts.append(word.capitalize())
        else:
            parts.append(word[0].upper() + word[1:])

    # single-letter words ("a_b") would otherwise read as one all-caps word
    result = ''.join(parts)
    if result.isupper():
        result = result.capitalize()
    return result


def sanitize_identifier(name: str) -> str:
    """Sanitize a string to be a valid identifier."""
    sanitized = re.sub(r'[^a-zA-Z0-9_]', '_', name)

    if sanitized and sanitized[0].isdigit():
        sanitized = f"_{sanitized}"

    if not sanitized:
        sanitized = "pkg"

    return sanitized


def last_path_segment(path: str) -> str:
    """Return the final '/'-separated segment of an import path."""
    return path.rstrip('/').rsplit('/', 1)[-1]


def import_base_name(path: str) -> str:
    """
    Derive the default local name for an import path.

    A trailing major-version segment is skipped ("github.com/x/foo/v2" gives
    "foo"), anything after the first dot of the segment is dropped
    ("gopkg.in/yaml.v2" gives "yaml"), and the result is made a valid
    identifier.
    """
    segments = [segment for segment in path.split('/') if segment]
    if not segments:
        raise ValueError(f"Invalid import path: {path!r}")

    segment = segments[-1]
    if len(segments) > 1 and _MAJOR_VERSION_PATTERN.match(segment):
        segment = segments[-2]

    segment = segment.split('.', 1)[0]
    return sanitize_identifier(segment)


def generate_unique_name(base_name: str, used_names: Set[str]) -> str:
    """
    Generate a unique name by appending a counter if needed.

    Candidates are tried in order: base_name, base_name2, base_name3, ...
    Go keywords are never returned.
    """
    if base_name not in used_names and base_name not in GO_KEYWORDS:
        return base_name

    counter = 2
    while True:
        candidate = f"{base_name}{counter}"
        if candidate not in used_names:
            return candidate
        counter += 1
