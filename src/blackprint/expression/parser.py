#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/expression/parser.py
"""Recursive-descent parser for the expression language.

Grammar, loosest binding first::

    expression     -> ternary
    ternary        -> or_expr ( "?" ternary ":" ternary )?
    or_expr        -> and_expr ( "||" or_expr )?
    and_expr       -> comparison ( "&&" and_expr )?
    comparison     -> additive ( ( "==" | "!=" | "<" | ">" | "<=" | ">=" ) additive )*
    additive       -> multiplicative ( ( "+" | "-" ) multiplicative )*
    multiplicative -> "!" multiplicative
                    | postfix ( ( "*" | "/" | "//" | "%" ) operand )*
    operand        -> "!" multiplicative | postfix
    postfix        -> primary ( "." NAME | "[" expression "]" )*
    primary        -> "(" expression ")" | NUMBER | STRING | NAME

The names ``true``, ``false`` and ``null`` parse to literals.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List

from blackprint.constants import EXPRESSION_CACHE_SIZE, EXPRESSION_KEYWORDS
from blackprint.exceptions import ExpressionSyntaxError
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

logger = logging.getLogger(__name__)

_COMPARISON_OPERATORS = ("==", "!=", "<=", ">=", "<", ">")
_ADDITIVE_OPERATORS = ("+", "-")
_MULTIPLICATIVE_OPERATORS = ("*", "//", "/", "%")


class ExpressionParser:
    """Parse expression source into an immutable AST.

    A parser instance keeps per-call cursor state and is not reentrant; use
    :func:`parse_expression` for cached, thread-safe parsing.
    """

    def __init__(self) -> None:
        self.lexer = ExpressionLexer()
        self._tokens: List[Token] = []
        self._position = 0
        self._source = ""

    def parse(self, text: str) -> Expression:
        """Parse an expression string.

        Parameters
        ----------
        text : str
            Expression source

        Returns
        -------
        Expression
            Root node of the AST. An empty or blank expression parses to the
            null literal.

        Raises
        ------
        TokenizeError
            If the source contains an invalid character
        ExpressionSyntaxError
            If the token sequence is not a valid expression

        """
        self._source = text
        self._tokens = self.lexer.tokenize(text)
        self._position = 0

        if self._is_at_end():
            return Literal(None)

        result = self._parse_ternary()

        if not self._is_at_end():
            raise self._error(f"Unexpected token '{self._current_token().value}'")

        return result

    def _parse_ternary(self) -> Expression:
        condition = self._parse_or()
        if not self._check("OP", "?"):
            return condition

        position = self._advance().position
        if_true = self._parse_ternary()
        self._expect("OP", ":", "Expected ':' in conditional expression")
        if_false = self._parse_ternary()
        return Ternary(condition, if_true, if_false, position=position)

    def _parse_or(self) -> Expression:
        left = self._parse_and()
        if self._check("OP", "||"):
            position = self._advance().position
            return BinaryOp("||", left, self._parse_or(), position=position)
        return left

    def _parse_and(self) -> Expression:
        left = self._parse_comparison()
        if self._check("OP", "&&"):
            position = self._advance().position
            return BinaryOp("&&", left, self._parse_and(), position=position)
        return left

    def _parse_comparison(self) -> Expression:
        left = self._parse_additive()
        while self._check_any("OP", _COMPARISON_OPERATORS):
            token = self._advance()
            left = BinaryOp(token.value, left, self._parse_additive(), position=token.position)
        return left

    def _parse_additive(self) -> Expression:
        left = self._parse_multiplicative()
        while self._check_any("OP", _ADDITIVE_OPERATORS):
            token = self._advance()
            left = BinaryOp(token.value, left, self._parse_multiplicative(), position=token.position)
        return left

    def _parse_multiplicative(self) -> Expression:
        # `!` negates the whole multiplicative term that follows it
        if self._check("OP", "!"):
            position = self._advance().position
            return Not(self._parse_multiplicative(), position=position)

        left = self._parse_postfix()
        while self._check_any("OP", _MULTIPLICATIVE_OPERATORS):
            token = self._advance()
            right = self._parse_multiplicative() if self._check("OP", "!") else self._parse_postfix()
            left = BinaryOp(token.value, left, right, position=token.position)
        return left

    def _parse_postfix(self) -> Expression:
        value = self._parse_primary()

        while True:
            if self._check("OP", "."):
                position = self._advance().position
                name = self._expect_type("NAME", "Expected property name after '.'")
                value = Attribute(value, name.value, position=position)
            elif self._check("BRACKET", "["):
                position = self._advance().position
                index = self._parse_ternary()
                self._expect("BRACKET", "]", "Expected ']' after index expression")
                value = Index(value, index, position=position)
            else:
                return value

    def _parse_primary(self) -> Expression:
        token = self._current_token()

        if self._check("PAREN", "("):
            self._advance()
            inner = self._parse_ternary()
            self._expect("PAREN", ")", "Expected ')' after grouped expression")
            return inner

        if token.type == "NAME":
            self._advance()
            if token.value in EXPRESSION_KEYWORDS:
                return Literal(EXPRESSION_KEYWORDS[token.value], position=token.position)
            return Name(token.value, position=token.position)

        if token.type in ("NUMBER", "STRING"):
            self._advance()
            return Literal(token.value, position=token.position)

        if token.type == "EOF":
            raise self._error("Unexpected end of expression")
        raise self._error(f"Unexpected token '{token.value}'")

    # Token helpers

    def _current_token(self) -> Token:
        return self._tokens[min(self._position, len(self._tokens) - 1)]

    def _is_at_end(self) -> bool:
        return self._current_token().type == "EOF"

    def _advance(self) -> Token:
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _check(self, token_type: str, value: str) -> bool:
        token = self._current_token()
        return token.type == token_type and token.value == value

    def _check_any(self, token_type: str, values: tuple[str, ...]) -> bool:
        token = self._current_token()
        return token.type == token_type and token.value in values

    def _expect(self, token_type: str, value: str, message: str) -> Token:
        if not self._check(token_type, value):
            raise self._error(message)
        return self._advance()

    def _expect_type(self, token_type: str, message: str) -> Token:
        if self._current_token().type != token_type:
            raise self._error(message)
        return self._advance()

    def _error(self, message: str) -> ExpressionSyntaxError:
        position = self._current_token().position
        return ExpressionSyntaxError(
            f"{message} at position {position} in expression {self._source!r}",
            expression=self._source,
            position=position,
        )


@lru_cache(maxsize=EXPRESSION_CACHE_SIZE)
def parse_expression(text: str) -> Expression:
    """Parse ``text`` with a fresh parser, memoising the resulting AST.

    Parameters
    ----------
    text : str
        Expression source

    Returns
    -------
    Expression
        Immutable AST, shared between callers passing the same source

    """
    logger.debug("Parsing expression %r", text)
    return ExpressionParser().parse(text)
