#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/options/markup.py
"""Configuration options for the markup parser and renderer."""

from __future__ import annotations

from dataclasses import dataclass, field

from blackprint.constants import (
    DEFAULT_BLOCK_SEPARATOR,
    DEFAULT_MARKUP_INDENT_WIDTH,
    DEFAULT_SPECIAL_FORMATTERS,
)
from blackprint.exceptions import ConfigurationError
from blackprint.options.base import CloneFrozenMixin


@dataclass(frozen=True)
class SpecialFormatter:
    """A symmetric inline formatter such as ``**bold**``.

    Parameters
    ----------
    name : str
        Markup tag created for the formatted span (e.g. ``"strong"``)
    opener : str
        Delimiter that opens the span
    closer : str
        Delimiter that closes the span

    """

    name: str
    opener: str
    closer: str


def _default_formatters() -> tuple[SpecialFormatter, ...]:
    return tuple(SpecialFormatter(name, opener, closer) for name, opener, closer in DEFAULT_SPECIAL_FORMATTERS)


@dataclass(frozen=True)
class MarkupParserOptions(CloneFrozenMixin):
    """Configuration options for :class:`~blackprint.markup.MarkupParser`.

    Parameters
    ----------
    indent_width : int, default 4
        Number of spaces making up one block indentation level.
    special_formatters : tuple of SpecialFormatter
        Inline formatters recognised in text lines. When two openers start
        at the same index, the one listed first wins, so longer delimiters
        sharing a prefix (``**`` and ``*``) must be listed first.

    """

    indent_width: int = field(
        default=DEFAULT_MARKUP_INDENT_WIDTH,
        metadata={"help": "Spaces per block indentation level", "type": int},
    )
    special_formatters: tuple[SpecialFormatter, ...] = field(
        default_factory=_default_formatters,
        metadata={"help": "Symmetric inline formatters such as **bold**"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ConfigurationError
            If the indentation width is not positive or a formatter has an
            empty delimiter.

        """
        if self.indent_width <= 0:
            raise ConfigurationError(f"indent_width must be positive, got {self.indent_width}")
        for formatter in self.special_formatters:
            if not formatter.opener or not formatter.closer:
                raise ConfigurationError(f"Special formatter '{formatter.name}' needs a non-empty opener and closer")


@dataclass(frozen=True)
class MarkupRendererOptions(CloneFrozenMixin):
    """Configuration options for :class:`~blackprint.markup.MarkupRenderer`.

    Parameters
    ----------
    block_separator : str, default "\\n"
        String inserted between top-level nodes of a rendered tree.

    """

    block_separator: str = field(
        default=DEFAULT_BLOCK_SEPARATOR,
        metadata={"help": "Separator between top-level rendered nodes"},
    )
