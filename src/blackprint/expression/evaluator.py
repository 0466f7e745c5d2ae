#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/expression/evaluator.py
"""Evaluator for parsed expressions.

The evaluator walks an expression AST against a context mapping. Every
operator checks the runtime types of its operands and raises
:class:`~blackprint.exceptions.ExpressionTypeError` on a mismatch; missing
keys and out-of-range indexes raise
:class:`~blackprint.exceptions.ExpressionLookupError`.

Both operands of ``&&`` and ``||`` are always evaluated; the result is the
operand selected by truthiness, not necessarily a boolean.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Callable

from blackprint.constants import LENGTH_PROPERTY
from blackprint.exceptions import ExpressionLookupError, ExpressionTypeError
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
from blackprint.expression.parser import parse_expression
from blackprint.expression.values import (
    Value,
    as_integral_index,
    format_number,
    is_mapping,
    is_number,
    is_sequence,
    is_truthy,
    to_display_string,
    type_name,
    values_equal,
)


class ExpressionEvaluator:
    """Evaluate expression ASTs against a context mapping.

    Parameters
    ----------
    context : Mapping[str, Any]
        Data that names in the expression are resolved against
    source : str, optional
        Expression source, used in error messages

    Examples
    --------
        >>> from blackprint.expression.parser import parse_expression
        >>> ExpressionEvaluator({"a": {"b": 3}, "c": 5}).evaluate(parse_expression("c + a.b * c"))
        20

    """

    def __init__(self, context: Mapping[str, Any], source: str | None = None):
        self.context = context
        self.source = source
        self._binary_handlers: dict[str, Callable[[Any, Any], Value]] = {
            "*": self._multiply,
            "/": self._divide,
            "//": self._floor_divide,
            "%": self._modulo,
            "+": self._add,
            "-": self._subtract,
            "==": values_equal,
            "!=": lambda left, right: not values_equal(left, right),
            "<": lambda left, right: self._compare("<", left, right, lambda a, b: a < b),
            ">": lambda left, right: self._compare(">", left, right, lambda a, b: a > b),
            "<=": lambda left, right: self._compare("<=", left, right, lambda a, b: a <= b),
            ">=": lambda left, right: self._compare(">=", left, right, lambda a, b: a >= b),
            "&&": lambda left, right: right if is_truthy(left) else left,
            "||": lambda left, right: left if is_truthy(left) else right,
        }

    def evaluate(self, expression: Expression) -> Value:
        """Evaluate an expression node.

        Parameters
        ----------
        expression : Expression
            Root of the AST to evaluate

        Returns
        -------
        Value
            The resulting value

        Raises
        ------
        ExpressionTypeError
            If an operand has the wrong type for its operator
        ExpressionLookupError
            If a name, key or index cannot be resolved

        """
        return expression.accept(self)

    def visit_literal(self, node: Literal) -> Value:
        return node.value

    def visit_name(self, node: Name) -> Value:
        if node.name not in self.context:
            raise ExpressionLookupError(
                f"Name '{node.name}' is not defined{self._where()}", key=node.name, expression=self.source
            )
        return self.context[node.name]

    def visit_attribute(self, node: Attribute) -> Value:
        return self._resolve_element(self.evaluate(node.target), node.name)

    def visit_index(self, node: Index) -> Value:
        target = self.evaluate(node.target)
        key = self.evaluate(node.index)

        # null index short-circuits to null instead of failing
        if key is None:
            return None
        if not (is_number(key) or isinstance(key, str)):
            raise self._type_error(f"Index must be a number or string, got {type_name(key)}")
        return self._resolve_element(target, key)

    def visit_not(self, node: Not) -> Value:
        return not is_truthy(self.evaluate(node.operand))

    def visit_binary_op(self, node: BinaryOp) -> Value:
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        return self._binary_handlers[node.operator](left, right)

    def visit_ternary(self, node: Ternary) -> Value:
        if is_truthy(self.evaluate(node.condition)):
            return self.evaluate(node.if_true)
        return self.evaluate(node.if_false)

    def _resolve_element(self, obj: Any, key: Any) -> Value:
        if isinstance(obj, str) or is_sequence(obj):
            if key == LENGTH_PROPERTY:
                return len(obj)
            index = as_integral_index(key)
            if index is None:
                raise self._type_error(
                    f"Strings and arrays only support integer indexes and '{LENGTH_PROPERTY}', not {key!r}"
                )
            if not -len(obj) <= index < len(obj):
                raise ExpressionLookupError(
                    f"Index {index} is out of range for {type_name(obj)} of length {len(obj)}{self._where()}",
                    key=index,
                    expression=self.source,
                )
            return obj[index]

        if is_mapping(obj):
            name = format_number(key) if is_number(key) else key
            if name not in obj:
                raise ExpressionLookupError(
                    f"The object does not have key '{name}'{self._where()}", key=name, expression=self.source
                )
            return obj[name]

        raise self._type_error(f"Cannot access property {key!r} of a {type_name(obj)} value")

    # Operators

    def _multiply(self, left: Any, right: Any) -> Value:
        if is_number(left) and is_number(right):
            return left * right
        if isinstance(left, str) and is_number(right):
            return self._repeat(left, right)
        if is_number(left) and isinstance(right, str):
            return self._repeat(right, left)
        raise self._operand_error("*", left, right)

    def _repeat(self, text: str, count: int | float) -> str:
        if math.isnan(count) or math.isinf(count):
            raise self._type_error(f"Cannot repeat a string {format_number(count)} times")
        return text * max(math.floor(count), 0)

    def _divide(self, left: Any, right: Any) -> Value:
        self._require_numbers("/", left, right)
        if right == 0:
            if left == 0 or math.isnan(left):
                return math.nan
            return math.copysign(math.inf, left) * math.copysign(1.0, right)
        return left / right

    def _floor_divide(self, left: Any, right: Any) -> Value:
        quotient = self._divide(left, right)
        if math.isnan(quotient) or math.isinf(quotient):
            return quotient
        return float(math.floor(quotient))

    def _modulo(self, left: Any, right: Any) -> Value:
        self._require_numbers("%", left, right)
        if right == 0 or math.isinf(left):
            return math.nan
        return math.fmod(left, right)

    def _add(self, left: Any, right: Any) -> Value:
        if is_number(left) and is_number(right):
            return left + right
        if (isinstance(left, str) or is_number(left)) and (isinstance(right, str) or is_number(right)):
            return to_display_string(left) + to_display_string(right)
        raise self._operand_error("+", left, right)

    def _subtract(self, left: Any, right: Any) -> Value:
        self._require_numbers("-", left, right)
        return left - right

    def _compare(self, operator: str, left: Any, right: Any, compare: Callable[[Any, Any], bool]) -> bool:
        self._require_numbers(operator, left, right)
        return compare(left, right)

    # Error helpers

    def _require_numbers(self, operator: str, left: Any, right: Any) -> None:
        if not (is_number(left) and is_number(right)):
            raise self._operand_error(operator, left, right)

    def _operand_error(self, operator: str, left: Any, right: Any) -> ExpressionTypeError:
        return self._type_error(f"Unsupported operand types for {operator}: {type_name(left)} and {type_name(right)}")

    def _type_error(self, message: str) -> ExpressionTypeError:
        return ExpressionTypeError(f"{message}{self._where()}", expression=self.source)

    def _where(self) -> str:
        return f" in expression {self.source!r}" if self.source is not None else ""


def evaluate_expression(expression: str, context: Mapping[str, Any]) -> Value:
    """Tokenize, parse and evaluate an expression against ``context``.

    Parameters
    ----------
    expression : str
        Expression source, e.g. ``"post.tags.length > 0"``
    context : Mapping[str, Any]
        Nested mapping/sequence/primitive data

    Returns
    -------
    Value
        The evaluated value

    Raises
    ------
    ParseError
        If the expression cannot be tokenized, parsed or evaluated

    Examples
    --------
        >>> evaluate_expression('"helloworld"[-1]', {})
        'd'

    """
    return ExpressionEvaluator(context, source=expression).evaluate(parse_expression(expression))
