#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/markup/parser.py
"""Block markup parser.

Markup is line based. A line starting with ``[tag attrs]`` opens a block;
the lines indented one level deeper below it are its children. Any other
line is text, parsed for inline markup. Example::

    [h1] Title
    Some *text* with a [a "/about": link].

    [blockquote]
        Quoted text
        [p .class1] A quoted paragraph

Loose text lines at the top level (and inside blocks whose translation sets
``regularize``) are grouped into paragraphs of the dictionary's regularize
target, split by blank lines and by blocks.

The parsed tree is sanitized against the tag dictionary before it is
returned.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from blackprint.markup.dictionary import TagDictionary
from blackprint.markup.inline import MarkupInlineParser
from blackprint.markup.nodes import MarkupNode, MarkupSubTree, MarkupTree
from blackprint.options.markup import MarkupParserOptions

logger = logging.getLogger(__name__)


@dataclass
class _TextLine:
    children: MarkupSubTree


class _BlankLine:
    pass


_BLANK = _BlankLine()

_Entry = Union[MarkupNode, _TextLine, _BlankLine]


class MarkupParser:
    """Parse markup text into a sanitized :data:`MarkupTree`.

    Parameters
    ----------
    dictionary : TagDictionary
        Tags accepted by the parser and the rules used to sanitize them
    options : MarkupParserOptions, optional
        Indentation width and special formatters

    Examples
    --------
        >>> from blackprint.markup import default_tag_dictionary
        >>> MarkupParser(default_tag_dictionary).parse("[h1] Hi")
        [MarkupNode(tag='h1', attributes={}, params=[], children=['Hi'], block=True)]

    """

    def __init__(self, dictionary: TagDictionary, options: Optional[MarkupParserOptions] = None):
        self.dictionary = dictionary
        self.options = options or MarkupParserOptions()
        self.inline_parser = MarkupInlineParser(dictionary, self.options)
        self._lines: List[str] = []
        self._index = 0
        self._level = 0

    def parse(self, text: str) -> MarkupTree:
        """Parse markup text.

        Parameters
        ----------
        text : str
            Markup source. ``\\r\\n`` and ``\\r`` line endings are accepted.

        Returns
        -------
        MarkupTree
            Block nodes; loose text is wrapped in paragraphs

        """
        self._lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
        self._index = 0
        self._level = 0

        entries = self._parse_children(None)
        tree = self._regularize(self._trim_blank_lines(entries), None)
        self.dictionary.sanitize(tree)
        logger.debug("Parsed markup into %d top-level blocks", len(tree))
        return tree

    def _parse_children(self, parent_tag: Optional[str]) -> List[_Entry]:
        """Consume the lines belonging to ``parent_tag`` (the top level if None)."""
        entries: List[_Entry] = []
        no_children = parent_tag is not None and self.dictionary.should_have_no_children(parent_tag)
        plain_text = parent_tag is not None and self.dictionary.should_plain_text(parent_tag)

        while self._index < len(self._lines):
            raw_line = self._lines[self._index]
            if raw_line.strip() == "":
                entries.append(_BLANK)
                self._index += 1
                continue

            line = self._trim_indent(raw_line)
            if line is None:
                break
            line = line.rstrip()
            self._index += 1

            if no_children:
                continue

            block = None if plain_text else self._parse_block(line, parent_tag)
            if block is not None:
                entries.append(block)
            elif plain_text:
                entries.append(_TextLine([line]))
            else:
                entries.append(_TextLine(self.inline_parser.parse(line, parent_tag, insert_eol=True)))

        return entries

    def _parse_block(self, line: str, parent_tag: Optional[str]) -> Optional[MarkupNode]:
        if not line.startswith("["):
            return None
        match = self.inline_parser.parse_block_tag(line, parent_tag)
        if match.errored or match.tag is None:
            return None

        tag = match.tag
        plain_text = self.dictionary.should_plain_text(tag)
        entries: List[_Entry] = []
        trailing_text = match.trailing_text.rstrip()
        if trailing_text:
            if plain_text:
                entries.append(_TextLine([trailing_text]))
            else:
                entries.append(_TextLine(self.inline_parser.parse(trailing_text, tag, insert_eol=True)))

        self._level += 1
        entries.extend(self._parse_children(tag))
        self._level -= 1

        entries = self._trim_blank_lines(entries)
        if self.dictionary.should_regularize_children(tag):
            children: MarkupSubTree = list(self._regularize(entries, tag))
        else:
            children = self._join_lines(entries)

        return MarkupNode(tag, attributes=match.attributes, params=match.params, children=children, block=True)

    def _trim_indent(self, line: str) -> Optional[str]:
        """Strip the current block's indentation, or None if ``line`` is indented less."""
        prefix = " " * (self.options.indent_width * self._level)
        if not line.startswith(prefix):
            return None
        return line[len(prefix) :]

    @staticmethod
    def _trim_blank_lines(entries: List[_Entry]) -> List[_Entry]:
        while entries and entries[-1] is _BLANK:
            entries.pop()
        return entries

    def _join_lines(self, entries: List[_Entry]) -> MarkupSubTree:
        """Flatten entries into children, ending every line but the last with a line break."""
        children: MarkupSubTree = []
        last = len(entries) - 1
        for position, entry in enumerate(entries):
            if entry is _BLANK:
                children.append("\n")
            elif isinstance(entry, _TextLine):
                children.extend(self._line_children(entry, eol=position != last))
            else:
                children.append(entry)
        return children

    @staticmethod
    def _line_children(line: _TextLine, eol: bool) -> MarkupSubTree:
        children = list(line.children)
        if eol:
            children[-1] = children[-1] + "\n"
        elif children and children[-1] == "":
            children.pop()
        return children

    def _regularize(self, entries: List[_Entry], parent_tag: Optional[str]) -> MarkupTree:
        """Group consecutive text lines into paragraphs of the regularize target."""
        tree: MarkupTree = []
        paragraph: List[_Entry] = []

        def flush() -> None:
            if paragraph:
                children = self._join_lines(paragraph)
                tree.append(MarkupNode(self.dictionary.regularize_target, children=children, block=True))
                paragraph.clear()

        for entry in entries:
            if isinstance(entry, MarkupNode):
                flush()
                tree.append(entry)
            elif entry is _BLANK:
                flush()
            else:
                paragraph.append(entry)
        flush()

        if parent_tag is not None:
            logger.debug("Regularized children of '%s' into %d blocks", parent_tag, len(tree))
        return tree
