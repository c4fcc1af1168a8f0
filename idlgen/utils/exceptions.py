"""
Custom exception definitions.

This module defines the exception hierarchy for idlgen-specific
errors. Every error here is a build-time diagnostic meant for the
author of a template, not for end users of the generated code.
"""

from typing import Optional


class IdlgenError(Exception):
    """
    Base exception for all idlgen-related errors.

    This is the root exception class for all idlgen-specific
    errors, providing common functionality and error handling.
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        """
        Initialize idlgen error.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


class TemplateSyntaxError(IdlgenError):
    """
    Raised when a template itself is malformed.

    Detected while compiling the template, before any of it runs.
    """

    def __init__(self, message: str, lineno: Optional[int] = None):
        """
        Initialize template syntax error.

        Args:
            message: Error description
            lineno: Line of the template the error was found on
        """
        details = {}
        if lineno is not None:
            details['line'] = lineno

        super().__init__(message, details)
        self.lineno = lineno


class TemplateExecutionError(IdlgenError):
    """
    Raised when a template fails while being rendered.

    Typical causes are a field that the data value does not have, or a
    template function called with the wrong number or type of arguments.
    """

    def __init__(self, message: str, lineno: Optional[int] = None):
        """
        Initialize template execution error.

        Args:
            message: Error description
            lineno: Line of the template that was executing, if known
        """
        details = {}
        if lineno is not None:
            details['line'] = lineno

        super().__init__(message, details)
        self.lineno = lineno


class GoSyntaxError(IdlgenError):
    """
    Raised by the Go lexer and parser.

    The declaration assembler converts this into a RenderedSyntaxError
    carrying an excerpt of the rendered text.
    """

    def __init__(self, message: str, lineno: int, column: int = 0):
        super().__init__(message, {'line': lineno, 'column': column})
        self.lineno = lineno
        self.column = column


class RenderedSyntaxError(IdlgenError):
    """
    Raised when the text produced by a template is not valid Go.

    The template rendered fine; the bug is in the code it produced. The
    excerpt shows the rendered lines around the offending one.
    """

    def __init__(self, message: str, source: str = "", lineno: Optional[int] = None, context: int = 2):
        """
        Initialize rendered syntax error.

        Args:
            message: Error description
            source: The complete rendered text
            lineno: Offending line of the rendered text (1-based)
            context: Number of lines to show around the offending line
        """
        details = {}
        if lineno is not None:
            details['line'] = lineno

        super().__init__(message, details)
        self.source = source
        self.lineno = lineno
        self.excerpt = self._make_excerpt(source, lineno, context)

    @staticmethod
    def _make_excerpt(source: str, lineno: Optional[int], context: int) -> str:
        if not source:
            return ""

        lines = source.split('\n')
        if lineno is None:
            start, end = 0, min(len(lines), 2 * context + 1)
        else:
            start = max(0, lineno - 1 - context)
            end = min(len(lines), lineno + context)

        excerpt = []
        for number in range(start, end):
            marker = '>' if lineno is not None and number + 1 == lineno else ' '
            excerpt.append(f"{marker}{number + 1:4d} | {lines[number]}")
        return '\n'.join(excerpt)

    def __str__(self) -> str:
        text = super().__str__()
        if self.excerpt:
            return f"{text}\n{self.excerpt}"
        return text


class FormatError(IdlgenError):
    """
    Raised when the assembled file cannot be formatted.

    Nothing is written to the sink when this is raised. The underlying
    problem is available as __cause__.
    """


class ConfigError(IdlgenError):
    """Raised for invalid configuration values."""
