#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/template/interpolation.py
"""``{{expression}}`` placeholder substitution."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from blackprint.exceptions import TemplateRenderError
from blackprint.expression import evaluate_expression, to_display_string, type_name

# Non-greedy and single-line: "{{a}} and {{b}}" holds two placeholders
PLACEHOLDER_PATTERN = re.compile(r"\{\{(.+?)\}\}")


def interpolate(text: str, context: Mapping[str, Any]) -> str:
    """Replace every ``{{expr}}`` in ``text`` with the display form of its value.

    Parameters
    ----------
    text : str
        Text possibly containing placeholders
    context : Mapping[str, Any]
        Data the expressions are evaluated against

    Returns
    -------
    str
        Interpolated text. ``null`` becomes an empty string and booleans
        become ``"true"``/``"false"``.

    Raises
    ------
    TemplateRenderError
        If an expression evaluates to an array or an object
    ParseError
        If an expression cannot be evaluated

    """

    def replace(match: re.Match[str]) -> str:
        expression = match.group(1)
        value = evaluate_expression(expression, context)
        try:
            return to_display_string(value)
        except TypeError as e:
            raise TemplateRenderError(
                f"Expression {expression} must evaluate to a string, number, or boolean, got {type_name(value)}",
                original_error=e,
            ) from e

    return PLACEHOLDER_PATTERN.sub(replace, text)
