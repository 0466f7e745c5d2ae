#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Frozen option objects for blackprint components."""

from blackprint.options.base import CloneFrozenMixin
from blackprint.options.markup import MarkupParserOptions, MarkupRendererOptions, SpecialFormatter
from blackprint.options.template import TemplateOptions

__all__ = [
    "CloneFrozenMixin",
    "MarkupParserOptions",
    "MarkupRendererOptions",
    "SpecialFormatter",
    "TemplateOptions",
]
