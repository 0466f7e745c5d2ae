#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/markup/inline.py
"""Inline markup parser.

Parses a single line of text into strings and inline :class:`MarkupNode`
objects. Three kinds of landmark are recognised:

- explicit tags ``[tag attrs: body]`` (or ``[tag attrs]`` with no body)
- special formatters such as ``**bold**`` and ``` `code` ```
- the closer of the innermost open tag

The parser also reads the attribute list of a block tag line for
:class:`~blackprint.markup.parser.MarkupParser`, sharing the attribute
grammar with inline tags.

Malformed or unknown tags never raise: the source text they consumed is
emitted back as literal text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from blackprint.markup.dictionary import TagDictionary
from blackprint.markup.nodes import MarkupNode, MarkupSubTree
from blackprint.options.markup import MarkupParserOptions, SpecialFormatter

logger = logging.getLogger(__name__)

_INLINE_TAG_START = re.compile(r"\[([a-zA-Z][a-zA-Z0-9]*)")
_INLINE_TAG_SEPARATOR = re.compile(r"\s*:\s?")
_INLINE_TAG_SELF_CLOSE = re.compile(r"\s*\]")
_INLINE_TAG_END = "]"

BLOCK_TAG_START = re.compile(r"\[([a-zA-Z][a-zA-Z0-9]*)")
BLOCK_TAG_END = re.compile(r"\s*\]\s?")

_CLASS_SIGN = re.compile(r"\s*\.")
_EQUALS_SIGN = re.compile(r"\s*=")
_QUOTE = re.compile(r"\s*([\"'])")
_WORD = re.compile(r"\s*([a-zA-Z0-9\-_.]*)")


@dataclass
class TagAttributes:
    """Attribute list read from the head of a tag.

    ``terminator`` is the index of the pattern that ended the list, or None
    when the list was malformed (``errored``). ``original_text`` is the raw
    source consumed while reading it.
    """

    attributes: dict[str, str] = field(default_factory=dict)
    params: list[str] = field(default_factory=list)
    errored: bool = False
    terminator: Optional[int] = None
    original_text: str = ""


@dataclass
class BlockTagMatch:
    """Result of reading a block tag line.

    Parameters
    ----------
    tag : str or None
        Normalized tag name, or None if the line does not start with a tag
        known to the dictionary
    attributes : dict of str to str
        Attributes given in the tag head
    params : list of str
        Positional params given in the tag head
    trailing_text : str
        Text following the closing bracket
    errored : bool
        True when the line must be treated as plain text

    """

    tag: Optional[str]
    attributes: dict[str, str] = field(default_factory=dict)
    params: list[str] = field(default_factory=list)
    trailing_text: str = ""
    errored: bool = False


@dataclass
class _Landmark:
    kind: str
    index: int
    length: int
    tag: str = ""
    closer: str = ""


class MarkupInlineParser:
    """Parse inline markup within one line.

    Parameters
    ----------
    dictionary : TagDictionary
        Dictionary used to resolve tag names
    options : MarkupParserOptions, optional
        Supplies the special formatters

    Notes
    -----
    A parser instance holds per-line state and is not reentrant.

    """

    def __init__(self, dictionary: TagDictionary, options: Optional[MarkupParserOptions] = None):
        self.dictionary = dictionary
        self.options = options or MarkupParserOptions()
        self._formatters: Sequence[SpecialFormatter] = self.options.special_formatters
        self._init("", None)

    def _init(self, text: str, parent_tag: Optional[str]) -> None:
        self._text = text
        self._nodes: MarkupSubTree = []
        self._stack: List[tuple[MarkupNode, str]] = []
        self._parent_tag = parent_tag
        self._skip_until_closer = False
        self._consumed: Optional[List[str]] = None

    def parse(self, text: str, parent_tag: Optional[str] = None, insert_eol: bool = False) -> MarkupSubTree:
        """Parse one line of inline markup.

        Parameters
        ----------
        text : str
            Line of text, without its line break
        parent_tag : str, optional
            Normalized tag of the enclosing block, used for parent-qualified
            tag lookup
        insert_eol : bool, default False
            Guarantee the result ends with a string, appending ``""`` when the
            line ends with a node, so a line break can be attached to it

        Returns
        -------
        MarkupSubTree
            Strings and inline nodes, adjacent strings merged

        """
        if text == "":
            return [""]

        self._init(text, parent_tag)
        while self._text:
            self._process_landmark()

        nodes = self._nodes
        if insert_eol and (not nodes or not isinstance(nodes[-1], str)):
            nodes.append("")
        return nodes

    def parse_block_tag(self, text: str, parent_tag: Optional[str] = None) -> BlockTagMatch:
        """Read the ``[tag attrs]`` head of a block tag line.

        Parameters
        ----------
        text : str
            Line of text with its indentation removed
        parent_tag : str, optional
            Normalized tag of the enclosing block

        Returns
        -------
        BlockTagMatch
            The tag, its attributes and the trailing text. ``errored`` is set
            when the line does not start with a well-formed tag known to the
            dictionary.

        """
        self._init(text, parent_tag)
        tag = self._consume_match(BLOCK_TAG_START)
        if tag is None:
            return BlockTagMatch(tag=None, trailing_text=text, errored=True)

        head = self._parse_tag_attributes((BLOCK_TAG_END,))
        normalized = self.dictionary.normalize_block_tag(tag, parent_tag)
        if normalized is None:
            logger.debug("Unknown block tag '%s' treated as text", tag)

        return BlockTagMatch(
            tag=normalized,
            attributes=head.attributes,
            params=head.params,
            trailing_text=self._text,
            errored=head.errored or normalized is None,
        )

    # Landmarks

    def _process_landmark(self) -> None:
        closing = self._find_closing_tag()
        if self._skip_until_closer:
            candidates = [closing]
        else:
            candidates = [closing, self._find_special_opener(), self._find_opening_tag()]

        found = [landmark for landmark in candidates if landmark is not None]
        if not found:
            if self._skip_until_closer:
                logger.warning("Unterminated plain-text tag '%s'; using the rest of the line", self._stack[-1][0].tag)
            self._add_child(self._consume(len(self._text)))
            return

        # min() keeps the first of equally near landmarks: closer, special, explicit tag
        nearest = min(found, key=lambda landmark: landmark.index)
        self._add_child(self._consume(nearest.index))

        if nearest.kind == "closing":
            self._consume(nearest.length)
            self._end_tag()
        elif nearest.kind == "special":
            opener = self._consume(nearest.length)
            if not self._start_tag(MarkupNode(nearest.tag), nearest.closer):
                self._add_child(opener)
        else:
            self._consumed = []
            self._consume(nearest.length)
            head = self._parse_tag_attributes((_INLINE_TAG_SEPARATOR, _INLINE_TAG_SELF_CLOSE))
            node = MarkupNode(nearest.tag, attributes=head.attributes, params=head.params)
            ok = not head.errored and self._start_tag(node, nearest.closer, self_closing=head.terminator == 1)
            if not ok:
                self._add_child(head.original_text)

    def _find_closing_tag(self) -> Optional[_Landmark]:
        if not self._stack:
            return None
        closer = self._stack[-1][1]
        index = self._text.find(closer)
        if index == -1:
            return None
        return _Landmark("closing", index, len(closer))

    def _find_special_opener(self) -> Optional[_Landmark]:
        nearest: Optional[_Landmark] = None
        for formatter in self._formatters:
            index = self._text.find(formatter.opener)
            if index != -1 and (nearest is None or index < nearest.index):
                nearest = _Landmark("special", index, len(formatter.opener), formatter.name, formatter.closer)
        return nearest

    def _find_opening_tag(self) -> Optional[_Landmark]:
        match = _INLINE_TAG_START.search(self._text)
        if match is None:
            return None
        return _Landmark("opening", match.start(), len(match.group(0)), match.group(1), _INLINE_TAG_END)

    # Tag heads

    def _parse_tag_attributes(self, terminators: Sequence[re.Pattern[str]]) -> TagAttributes:
        """Read attributes until one of ``terminators`` matches.

        Grammar of one entry: ``"string"`` or ``'string'`` (param), ``.word``
        (class), ``key=value`` (attribute, value quoted or bare), ``word``
        (param). Anything else marks the head as errored.
        """
        if self._consumed is None:
            self._consumed = []
        head = TagAttributes()

        while head.terminator is None:
            for position, pattern in enumerate(terminators):
                if self._consume_match(pattern) is not None:
                    head.terminator = position
                    break
            else:
                string = self._try_parse_string()
                is_class = False
                if string is None:
                    is_class = self._consume_match(_CLASS_SIGN) is not None
                    key = self._try_parse_word()
                else:
                    key = string

                if not key:
                    head.errored = True
                    break

                if is_class:
                    classes = head.attributes.get("class")
                    head.attributes["class"] = f"{classes} {key}" if classes else key
                elif self._consume_match(_EQUALS_SIGN) is not None:
                    value = self._try_parse_string()
                    if value is None:
                        value = self._try_parse_word()
                    head.attributes[key] = value or ""
                else:
                    head.params.append(key)

        head.original_text = "".join(self._consumed)
        self._consumed = None
        return head

    def _try_parse_string(self) -> Optional[str]:
        quote = _QUOTE.match(self._text)
        if quote is None:
            return None

        end = self._text.find(quote.group(1), quote.end())
        if end == -1:
            return None

        value = self._text[quote.end() : end]
        self._consume(end + 1)
        return value

    def _try_parse_word(self) -> Optional[str]:
        word = self._consume_match(_WORD)
        return word or None

    def _consume_match(self, pattern: re.Pattern[str]) -> Optional[str]:
        match = pattern.match(self._text)
        if match is None:
            return None
        self._consume(match.end())
        if pattern.groups and match.group(1) is not None:
            return match.group(1)
        return match.group(0)

    def _consume(self, length: int) -> str:
        consumed, self._text = self._text[:length], self._text[length:]
        if self._consumed is not None:
            self._consumed.append(consumed)
        return consumed

    # Tree building

    def _current_parent(self) -> Optional[str]:
        if self._stack:
            return self._stack[-1][0].tag
        return self._parent_tag

    def _start_tag(self, node: MarkupNode, closer: str, self_closing: bool = False) -> bool:
        tag = self.dictionary.normalize_inline_tag(node.tag, self._current_parent())
        if tag is None:
            logger.debug("Unknown inline tag '%s' treated as text", node.tag)
            return False

        node.tag = tag
        self._add_child(node)
        if not self_closing:
            self._stack.append((node, closer))
            if self.dictionary.should_plain_text(tag, block=False):
                self._skip_until_closer = True
        return True

    def _end_tag(self) -> None:
        self._stack.pop()
        self._skip_until_closer = False

    def _add_child(self, child: Union[MarkupNode, str]) -> None:
        if child == "":
            return
        children = self._stack[-1][0].children if self._stack else self._nodes
        if isinstance(child, str) and children and isinstance(children[-1], str):
            children[-1] += child
        else:
            children.append(child)
