#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/markup/renderer.py
"""HTML rendering of markup trees.

Every text child is HTML-escaped (including quotes), as is every attribute
value. Tag names come from the tag dictionary and attribute names from the
parser's restricted name grammar, so both are emitted as-is. Every element
gets an explicit closing tag.
"""

from __future__ import annotations

import logging
from html import escape
from typing import Iterable, Optional, Union

from blackprint.exceptions import MarkupRenderError
from blackprint.markup.dictionary import TagDictionary
from blackprint.markup.nodes import MarkupNode
from blackprint.options.markup import MarkupRendererOptions

logger = logging.getLogger(__name__)


class MarkupRenderer:
    """Render sanitized markup trees to HTML strings.

    Parameters
    ----------
    dictionary : TagDictionary
        Dictionary providing the HTML element of each tag
    options : MarkupRendererOptions, optional
        Rendering options

    Examples
    --------
        >>> from blackprint.markup import MarkupNode, default_tag_dictionary
        >>> MarkupRenderer(default_tag_dictionary).render_tree([MarkupNode("p", children=["a < b"], block=True)])
        '<p>a &lt; b</p>'

    """

    def __init__(self, dictionary: TagDictionary, options: Optional[MarkupRendererOptions] = None):
        self.dictionary = dictionary
        self.options = options or MarkupRendererOptions()

    def render_tree(self, tree: Iterable[Union[MarkupNode, str]]) -> str:
        """Render top-level nodes, joined by the configured block separator.

        Raises
        ------
        MarkupRenderError
            If the tree is malformed, e.g. holds a non-string attribute value

        """
        try:
            return self.options.block_separator.join(self.render_node(node) for node in tree)
        except (AttributeError, TypeError) as e:
            raise MarkupRenderError(f"Failed to render markup tree: {e}", original_error=e) from e

    def render_node(self, node: Union[MarkupNode, str]) -> str:
        """Render one node and its descendants.

        Nodes whose tag has no HTML translation render as an empty string.
        """
        if isinstance(node, str):
            return escape(node, quote=True)

        elem = self.dictionary.get_html_tag(node.tag, node.block)
        if elem is None:
            logger.debug("No HTML element for %s tag '%s'; skipping", "block" if node.block else "inline", node.tag)
            return ""

        attributes = "".join(f' {name}="{escape(value, quote=True)}"' for name, value in node.attributes.items())
        children = "".join(self.render_node(child) for child in node.children)
        return f"<{elem}{attributes}>{children}</{elem}>"
