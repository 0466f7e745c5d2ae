#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the blackprint library.

This module defines the exception classes raised by the expression
evaluator, the template engine and the markup pipeline.

Exception Hierarchy
-------------------
- BlackPrintError (base exception)

  - ParseError (expression could not be evaluated)
    - TokenizeError (invalid character in an expression)
    - ExpressionSyntaxError (unexpected or missing token)
    - ExpressionTypeError (operand type mismatch, non-indexable value)
    - ExpressionLookupError (missing key, index out of range)

  - TemplateError (template engine failures)
    - TemplateRenderError (render aborted)
      - TemplateStructureError (malformed control tag)
      - ImportResolutionError (fragment import returned nothing)
    - TemplateNotFoundError (unknown template name in a registry)

  - MarkupError (markup pipeline failures)
    - MarkupRenderError (unexpected failure while rendering markup)

  - ConfigurationError (invalid options or configuration files)

Markup input never raises for unknown tags or disallowed attributes; those
degrade to literal text or are filtered out. Only template and expression
errors are expected during normal operation.

"""

from __future__ import annotations

from typing import Any


class BlackPrintError(Exception):
    """Base exception class for all blackprint-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ParseError(BlackPrintError):
    """Exception raised when an expression cannot be evaluated.

    This is the common base class of every failure raised while tokenizing,
    parsing or evaluating an expression, so callers can catch a single type.

    Parameters
    ----------
    message : str
        Description of the failure
    expression : str, optional
        The expression source being processed
    position : int, optional
        Character offset of the offending token in the expression
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        expression: str | None = None,
        position: int | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the parse error with expression details."""
        super().__init__(message, original_error=original_error)
        self.expression = expression
        self.position = position


class TokenizeError(ParseError):
    """Exception raised for an invalid character or sequence in an expression."""


class ExpressionSyntaxError(ParseError):
    """Exception raised for a structurally invalid expression.

    Covers unexpected tokens, missing closing parentheses or brackets,
    a ternary without ``:`` and trailing tokens after a complete expression.
    """


class ExpressionTypeError(ParseError):
    """Exception raised when an operand has the wrong type for an operator.

    Also raised for property access on a value that cannot be indexed.
    """


class ExpressionLookupError(ParseError, LookupError):
    """Exception raised when a mapping key or sequence index does not exist.

    Parameters
    ----------
    message : str
        Description of the failed lookup
    key : Any, optional
        The key or index that could not be resolved
    expression : str, optional
        The expression source being evaluated

    """

    def __init__(self, message: str, key: Any = None, expression: str | None = None):
        """Initialize the lookup error with the missing key."""
        super().__init__(message, expression=expression)
        self.key = key


class TemplateError(BlackPrintError):
    """Base exception for template engine failures."""


class TemplateRenderError(TemplateError):
    """Exception raised when a template render call is aborted.

    Parameters
    ----------
    message : str
        Description of the failure
    tag : str, optional
        Name of the element being processed when the failure occurred
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, tag: str | None = None, original_error: Exception | None = None):
        """Initialize the render error with the offending tag."""
        super().__init__(message, original_error=original_error)
        self.tag = tag


class TemplateStructureError(TemplateRenderError):
    """Exception raised for a malformed control tag.

    Examples include a ``for!`` without ``var``/``of``, a non-iterable
    ``for!`` source, a non-numeric ``limit`` or a ``ref!`` with both or
    neither of ``var`` and ``import``.
    """


class ImportResolutionError(TemplateRenderError):
    """Exception raised when a ``ref!`` import cannot be resolved.

    Parameters
    ----------
    name : str
        The fragment name handed to the import resolver
    message : str, optional
        Custom error message. If not provided, uses default message

    """

    def __init__(self, name: str, message: str | None = None):
        """Initialize the import error."""
        if message is None:
            message = f'<ref!> failed to import template "{name}"'
        super().__init__(message, tag="ref!")
        self.name = name


class TemplateNotFoundError(TemplateError):
    """Exception raised when a registry is asked for an unknown template.

    Parameters
    ----------
    name : str
        The requested template name

    """

    def __init__(self, name: str):
        """Initialize the not-found error."""
        super().__init__(f"Tried to render an unknown template: {name}")
        self.name = name


class MarkupError(BlackPrintError):
    """Base exception for markup pipeline failures."""


class MarkupRenderError(MarkupError):
    """Exception raised when markup rendering fails unexpectedly.

    Malformed or hostile markup never triggers this error; it signals a
    tree built by hand with values the renderer cannot emit.
    """


class ConfigurationError(BlackPrintError):
    """Exception raised for invalid options or configuration files.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    source : str, optional
        Path of the configuration file, if any
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, source: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error with its source."""
        super().__init__(message, original_error=original_error)
        self.source = source
