#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/expression/lexer.py
"""Tokenizer for the expression language.

The lexer performs a single left-to-right regex scan. At every position the
token specifications are tried in priority order: quoted strings,
identifiers, numbers, two-character operators, then single characters. A
``+`` or ``-`` directly followed by digits is folded into the number literal
only where an operand is expected, so ``1-1`` is a subtraction while
``-1 * 2`` starts with a negative literal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List

from blackprint.constants import TokenType
from blackprint.exceptions import TokenizeError

# Token types after which the next token is an operator rather than an operand
_OPERAND_END_TYPES = frozenset({"NUMBER", "STRING", "NAME"})
_OPERAND_END_VALUES = frozenset({")", "]"})


@dataclass(frozen=True)
class Token:
    """A single expression token.

    Attributes
    ----------
    type : str
        One of ``NUMBER``, ``STRING``, ``NAME``, ``OP``, ``PAREN``,
        ``BRACKET`` or ``EOF``
    value : Any
        Float for numbers, unquoted text for strings, source text otherwise
    position : int
        Offset of the token in the expression source

    """

    type: TokenType
    value: Any
    position: int

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r}, pos={self.position})"


class ExpressionLexer:
    """Split an expression string into tokens.

    Examples
    --------
        >>> [t.value for t in ExpressionLexer().tokenize("a.b * 2")]
        ['a', '.', 'b', '*', 2.0, '']

    """

    # (regex_pattern, token_type); None marks ignored input
    TOKEN_SPECS: List[tuple[str, str | None]] = [
        (r"\s+", None),
        (r'"[^"]*"|\'[^\']*\'', "STRING"),
        (r"[a-zA-Z_][a-zA-Z_0-9]*", "NAME"),
        (r"\d+\.?\d*|\.\d+", "NUMBER"),
        (r"==|!=|<=|>=|&&|\|\||//", "OP"),
        (r"[!<>\-.+/*%?:]", "OP"),
        (r"[()]", "PAREN"),
        (r"[\[\]]", "BRACKET"),
    ]

    SIGNED_NUMBER = re.compile(r"[+-](?:\d+\.?\d*|\.\d+)")

    def __init__(self) -> None:
        self._compiled_patterns = [(re.compile(pattern), token_type) for pattern, token_type in self.TOKEN_SPECS]

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize an expression.

        Parameters
        ----------
        text : str
            Expression source

        Returns
        -------
        list of Token
            Tokens in source order, terminated by an ``EOF`` token

        Raises
        ------
        TokenizeError
            If a character does not start any valid token (including an
            unterminated string literal)

        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            if self._expects_operand(tokens):
                signed = self.SIGNED_NUMBER.match(text, position)
                if signed:
                    tokens.append(Token("NUMBER", float(signed.group(0)), position))
                    position = signed.end()
                    continue

            for pattern, token_type in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue
                if token_type is not None:
                    tokens.append(self._make_token(token_type, match.group(0), position))
                position = match.end()
                break
            else:
                raise TokenizeError(
                    f"Unexpected character '{text[position]}' at position {position}",
                    expression=text,
                    position=position,
                )

        tokens.append(Token("EOF", "", position))
        return tokens

    @staticmethod
    def _make_token(token_type: str, raw: str, position: int) -> Token:
        if token_type == "NUMBER":
            return Token("NUMBER", float(raw), position)
        if token_type == "STRING":
            return Token("STRING", raw[1:-1], position)
        return Token(token_type, raw, position)  # type: ignore[arg-type]

    @staticmethod
    def _expects_operand(tokens: List[Token]) -> bool:
        if not tokens:
            return True
        last = tokens[-1]
        return last.type not in _OPERAND_END_TYPES and last.value not in _OPERAND_END_VALUES
