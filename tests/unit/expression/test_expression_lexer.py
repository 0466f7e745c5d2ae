#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/expression/test_expression_lexer.py
"""Unit tests for ExpressionLexer.

Tests cover:
- Token types and values
- Signed number folding where an operand is expected
- Two-character operators
- Invalid characters and unterminated strings

"""

import pytest

from blackprint.exceptions import ParseError, TokenizeError
from blackprint.expression import ExpressionLexer


def _values(text):
    return [token.value for token in ExpressionLexer().tokenize(text)]


def _types(text):
    return [token.type for token in ExpressionLexer().tokenize(text)]


@pytest.mark.unit
class TestTokenTypes:
    """Test the tokens produced for each kind of input."""

    def test_empty_expression_is_only_eof(self):
        """Test that an empty expression yields a single EOF token."""
        tokens = ExpressionLexer().tokenize("")
        assert len(tokens) == 1
        assert tokens[0].type == "EOF"

    def test_property_access(self):
        """Test a name followed by a property access and a number."""
        assert _values("a.b * 2") == ["a", ".", "b", "*", 2.0, ""]
        assert _types("a.b * 2") == ["NAME", "OP", "NAME", "OP", "NUMBER", "EOF"]

    def test_numbers_are_floats(self):
        """Test that number literals are converted to floats."""
        assert _values("12 3.5 .25") == [12.0, 3.5, 0.25, ""]

    def test_strings_are_unquoted(self):
        """Test that both quote styles produce the unquoted text."""
        assert _values("\"double\" 'single'") == ["double", "single", ""]
        assert _types("\"a\" 'b'")[:2] == ["STRING", "STRING"]

    def test_string_may_contain_other_quote(self):
        """Test that a string may contain the other quote character."""
        assert _values("\"it's\"") == ["it's", ""]

    def test_backslash_is_not_an_escape(self):
        """Test that a string runs to the next matching quote, keeping backslashes."""
        assert _values(r'"a\nb"') == [r"a\nb", ""]
        assert _values(r"'c:\dir\' + 'x'") == ["c:\\dir\\", "+", "x", ""]

    def test_two_character_operators(self):
        """Test that two-character operators are single tokens."""
        assert _values("a == b != c <= d >= e && f || g // h")[1::2] == [
            "==",
            "!=",
            "<=",
            ">=",
            "&&",
            "||",
            "//",
            "",
        ]

    def test_brackets_and_parentheses(self):
        """Test bracket and parenthesis token types."""
        assert _types("(e[0])") == ["PAREN", "NAME", "BRACKET", "NUMBER", "BRACKET", "PAREN", "EOF"]

    def test_token_positions(self):
        """Test that tokens record their offset in the source."""
        tokens = ExpressionLexer().tokenize("ab + cd")
        assert [token.position for token in tokens] == [0, 3, 5, 7]


@pytest.mark.unit
class TestSignedNumbers:
    """Test folding of a leading sign into number literals."""

    def test_subtraction_without_spaces(self):
        """Test that a minus after an operand is an operator."""
        assert _values("1-1") == [1.0, "-", 1.0, ""]

    def test_negative_literal_at_start(self):
        """Test that a leading minus starts a negative literal."""
        assert _values("-1 * 2") == [-1.0, "*", 2.0, ""]

    def test_negative_index(self):
        """Test that a minus after an opening bracket is part of the literal."""
        assert _values('"helloworld"[-1]') == ["helloworld", "[", -1.0, "]", ""]

    def test_negative_after_operator(self):
        """Test that a minus after another operator is part of the literal."""
        assert _values("2 - -1") == [2.0, "-", -1.0, ""]

    def test_minus_after_closing_bracket(self):
        """Test that a minus after a closing bracket is an operator."""
        assert _values("e[0]-1")[-3:] == ["-", 1.0, ""]


@pytest.mark.unit
class TestTokenizeErrors:
    """Test invalid expression sources."""

    def test_invalid_character(self):
        """Test that an unknown character raises TokenizeError with its position."""
        with pytest.raises(TokenizeError) as exc_info:
            ExpressionLexer().tokenize("a # b")

        assert exc_info.value.position == 2
        assert exc_info.value.expression == "a # b"

    def test_unterminated_string(self):
        """Test that an unterminated string literal is rejected."""
        with pytest.raises(TokenizeError):
            ExpressionLexer().tokenize('"abc')

    def test_tokenize_error_is_parse_error(self):
        """Test that tokenize errors can be caught as ParseError."""
        with pytest.raises(ParseError):
            ExpressionLexer().tokenize("@")
