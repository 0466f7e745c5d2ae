#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the blackprint library.

This module centralizes the literal types, magic strings and default
configuration values shared by the expression evaluator, the template
engine and the markup pipeline.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Expression Language - Keywords and display strings
3. Template Engine - Control tags and parser defaults
4. Markup Language - Indentation, formatters and dictionary defaults
5. Command Line - Exit codes
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "html5lib", "lxml"]
TokenType = Literal["NUMBER", "STRING", "NAME", "OP", "PAREN", "BRACKET", "EOF"]

# =============================================================================
# Expression Language
# =============================================================================

EXPRESSION_KEYWORDS: dict[str, object] = {"true": True, "false": False, "null": None}

# Computed property available on strings and sequences
LENGTH_PROPERTY = "length"

DISPLAY_TRUE = "true"
DISPLAY_FALSE = "false"
DISPLAY_NAN = "NaN"
DISPLAY_INFINITY = "Infinity"

# Size of the parsed-expression cache shared by all templates
EXPRESSION_CACHE_SIZE = 1024

# =============================================================================
# Template Engine
# =============================================================================

FOR_TAG = "for!"
IF_TAG = "if!"
REF_TAG = "ref!"

# Interpolated attribute values (or names) equal to one of these are removed
DROPPED_ATTRIBUTE_VALUES = frozenset({"", "false"})

DEFAULT_TEMPLATE_HTML_PARSER: HtmlParser = "html5lib"
DEFAULT_FRAGMENT_HTML_PARSER: HtmlParser = "html.parser"
DEFAULT_DOCTYPE = "<!DOCTYPE html>"
DEFAULT_TEMPLATE_SUFFIX = ".bp.html"

# =============================================================================
# Markup Language
# =============================================================================

DEFAULT_MARKUP_INDENT_WIDTH = 4
DEFAULT_REGULARIZE_TARGET = "p"
DEFAULT_BLOCK_SEPARATOR = "\n"

# (tag name, opener, closer); earlier entries win when openers start at the same index
DEFAULT_SPECIAL_FORMATTERS: tuple[tuple[str, str, str], ...] = (
    ("strong", "**", "**"),
    ("del", "~~", "~~"),
    ("em", "*", "*"),
    ("code", "`", "`"),
)

# URL scheme security
DANGEROUS_SCHEMES = {
    "javascript:",
    "vbscript:",
    "data:text/html",
    "data:text/javascript",
    "data:application/javascript",
    "data:application/x-javascript",
}

# Attributes whose values are followed or loaded by the browser as URLs
URL_ATTRIBUTES = frozenset(
    {"href", "src", "action", "formaction", "poster", "cite", "background", "longdesc", "xlink:href"}
)

# Characters browsers ignore inside a URL scheme, usable to hide a dangerous one
DANGEROUS_NULL_LIKE_CHARS = [
    "\x00",  # NULL
    "\t",
    "\n",
    "\r",
    "\ufeff",  # BOM/Zero Width No-Break Space
    "\u200b",  # Zero Width Space
    "\u200c",  # Zero Width Non-Joiner
    "\u200d",  # Zero Width Joiner
    "\u2060",  # Word Joiner
]

# =============================================================================
# Command Line
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7
