#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/options/template.py
"""Configuration options for the template engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from blackprint.constants import (
    DEFAULT_DOCTYPE,
    DEFAULT_FRAGMENT_HTML_PARSER,
    DEFAULT_TEMPLATE_HTML_PARSER,
    DEFAULT_TEMPLATE_SUFFIX,
    HtmlParser,
)
from blackprint.exceptions import ConfigurationError
from blackprint.options.base import CloneFrozenMixin

_KNOWN_PARSERS = ("html.parser", "html5lib", "lxml")


@dataclass(frozen=True)
class TemplateOptions(CloneFrozenMixin):
    """Configuration options for :class:`~blackprint.template.BlackPrintTemplate`.

    Parameters
    ----------
    html_parser : {"html.parser", "html5lib", "lxml"}, default "html5lib"
        BeautifulSoup tree builder used to parse the template document.
        ``html5lib`` builds a full ``<html><head><body>`` document the way a
        browser does; ``html.parser`` keeps the source structure as written.
    fragment_parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        Tree builder used for HTML inserted by ``<ref!>`` tags. Fragments must
        not be wrapped in a document, so a non-document builder is expected.
    doctype : str, default "<!DOCTYPE html>"
        Doctype line emitted before the rendered document.
    template_suffix : str, default ".bp.html"
        File suffix recognised by :meth:`TemplateRegistry.load_directory`.

    """

    html_parser: HtmlParser = field(
        default=DEFAULT_TEMPLATE_HTML_PARSER,
        metadata={"help": "BeautifulSoup parser used for template documents", "choices": list(_KNOWN_PARSERS)},
    )
    fragment_parser: HtmlParser = field(
        default=DEFAULT_FRAGMENT_HTML_PARSER,
        metadata={"help": "BeautifulSoup parser used for <ref!> fragments", "choices": list(_KNOWN_PARSERS)},
    )
    doctype: str = field(
        default=DEFAULT_DOCTYPE,
        metadata={"help": "Doctype line emitted before the rendered document"},
    )
    template_suffix: str = field(
        default=DEFAULT_TEMPLATE_SUFFIX,
        metadata={"help": "File suffix of templates loaded from a directory"},
    )

    def __post_init__(self) -> None:
        """Validate parser names.

        Raises
        ------
        ConfigurationError
            If a parser name is not one of the supported BeautifulSoup builders.

        """
        for name in (self.html_parser, self.fragment_parser):
            if name not in _KNOWN_PARSERS:
                raise ConfigurationError(f"Unsupported HTML parser '{name}', expected one of {_KNOWN_PARSERS}")
        if not self.template_suffix:
            raise ConfigurationError("template_suffix must not be empty")
