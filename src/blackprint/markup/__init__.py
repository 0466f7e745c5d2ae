#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Lightweight markup language for user-authored content.

Markup text is parsed into a tree of :class:`MarkupNode` objects, filtered
against a :class:`TagDictionary` whitelist and rendered to escaped HTML::

    >>> from blackprint.markup import markup_to_html
    >>> markup_to_html("[h1] Hello\\n**bold** <text>")
    '<h1>Hello</h1>\\n<p><strong>bold</strong> &lt;text&gt;</p>'

Unknown tags and disallowed attributes never raise; they degrade to literal
text or are removed.
"""

from __future__ import annotations

from typing import Optional

from blackprint.markup.defaults import default_tag_dictionary
from blackprint.markup.dictionary import (
    TagDefinition,
    TagDictConfig,
    TagDictionary,
    TagTranslation,
    block_tag,
    inline_tag,
)
from blackprint.markup.inline import BlockTagMatch, MarkupInlineParser
from blackprint.markup.nodes import MarkupNode, MarkupSubTree, MarkupTree
from blackprint.markup.parser import MarkupParser
from blackprint.markup.renderer import MarkupRenderer
from blackprint.options.markup import MarkupParserOptions, MarkupRendererOptions


def parse_markup(
    text: str,
    dictionary: Optional[TagDictionary] = None,
    options: Optional[MarkupParserOptions] = None,
) -> MarkupTree:
    """Parse and sanitize markup text (with the default dictionary if none is given)."""
    return MarkupParser(dictionary or default_tag_dictionary, options).parse(text)


def sanitize(tree: MarkupTree, dictionary: Optional[TagDictionary] = None) -> MarkupTree:
    """Sanitize ``tree`` in place and return it."""
    (dictionary or default_tag_dictionary).sanitize(tree)
    return tree


def render_markup(
    tree: MarkupTree,
    dictionary: Optional[TagDictionary] = None,
    options: Optional[MarkupRendererOptions] = None,
) -> str:
    """Render a sanitized markup tree to HTML."""
    return MarkupRenderer(dictionary or default_tag_dictionary, options).render_tree(tree)


def markup_to_html(
    text: str,
    dictionary: Optional[TagDictionary] = None,
    parser_options: Optional[MarkupParserOptions] = None,
    renderer_options: Optional[MarkupRendererOptions] = None,
) -> str:
    """Parse, sanitize and render markup text in one call.

    Parameters
    ----------
    text : str
        Markup source
    dictionary : TagDictionary, optional
        Tag whitelist; defaults to :data:`default_tag_dictionary`
    parser_options : MarkupParserOptions, optional
        Parser options
    renderer_options : MarkupRendererOptions, optional
        Renderer options

    Returns
    -------
    str
        HTML fragment

    """
    dictionary = dictionary or default_tag_dictionary
    tree = parse_markup(text, dictionary, parser_options)
    return render_markup(tree, dictionary, renderer_options)


__all__ = [
    "BlockTagMatch",
    "MarkupInlineParser",
    "MarkupNode",
    "MarkupParser",
    "MarkupRenderer",
    "MarkupSubTree",
    "MarkupTree",
    "TagDefinition",
    "TagDictConfig",
    "TagDictionary",
    "TagTranslation",
    "block_tag",
    "default_tag_dictionary",
    "inline_tag",
    "markup_to_html",
    "parse_markup",
    "render_markup",
    "sanitize",
]
