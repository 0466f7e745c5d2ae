#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/markup/nodes.py
"""Node structure for parsed markup.

A markup tree is a list of :class:`MarkupNode` objects; a node's children
are nodes or plain strings. Strings are raw text and are only escaped when
the tree is rendered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union


@dataclass
class MarkupNode:
    """A block-level or inline markup element.

    Parameters
    ----------
    tag : str
        Normalized tag name, possibly parent-qualified (``"figure>caption"``)
    attributes : dict of str to str
        Attribute values; ``class`` holds a space-separated class list
    params : list of str
        Bare positional tokens, mapped to attributes during sanitization
    children : list of MarkupNode or str
        Child nodes and text
    block : bool
        True for block-level nodes, False for inline nodes

    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    params: list[str] = field(default_factory=list)
    children: list[Union[MarkupNode, str]] = field(default_factory=list)
    block: bool = False


MarkupSubTree = List[Union[MarkupNode, str]]
MarkupTree = List[MarkupNode]
