#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Expression language used for template interpolation and control tags.

The pipeline is tokenize -> recursive-descent parse -> evaluate::

    >>> from blackprint.expression import evaluate_expression
    >>> evaluate_expression("x.y[0] * 2", {"x": {"y": [21]}})
    42.0

Number literals are floats; numbers taken from the context keep their type.
"""

from blackprint.expression.evaluator import ExpressionEvaluator, evaluate_expression
from blackprint.expression.lexer import ExpressionLexer, Token
from blackprint.expression.nodes import (
    Attribute,
    BinaryOp,
    Expression,
    Index,
    Literal,
    Name,
    Not,
    Ternary,
)
from blackprint.expression.parser import ExpressionParser, parse_expression
from blackprint.expression.values import Value, is_truthy, to_display_string, type_name, values_equal

__all__ = [
    "Attribute",
    "BinaryOp",
    "Expression",
    "ExpressionEvaluator",
    "ExpressionLexer",
    "ExpressionParser",
    "Index",
    "Literal",
    "Name",
    "Not",
    "Ternary",
    "Token",
    "Value",
    "evaluate_expression",
    "is_truthy",
    "parse_expression",
    "to_display_string",
    "type_name",
    "values_equal",
]
