"""blackprint - HTML templates and a safe markup language for a personal blog.

blackprint has two independent pipelines that share one design: tokenize,
parse with a recursive-descent parser, then evaluate or render a tree.

Templates
---------
HTML documents with ``{{expression}}`` placeholders and three control tags,
``<for!>``, ``<if!>`` and ``<ref!>``. Templates are trusted, author-written
content; any error aborts the render.

Markup
------
A line-based markup language for user-written posts and comments. Its tags
are checked against a whitelist (the tag dictionary) and all text is escaped
on output. Markup is untrusted content: malformed input never raises.

Examples
--------
Render markup:

    >>> from blackprint import markup_to_html
    >>> markup_to_html("[h2] News\\nHello *world*")
    '<h2>News</h2>\\n<p>Hello <em>world</em></p>'

Render a template:

    >>> import asyncio
    >>> from blackprint import parse_template
    >>> template = parse_template('<for! var="i" of="3">{{i}}</for!>')
    >>> "<body>012</body>" in asyncio.run(template.render({}))
    True

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "blackprint requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from blackprint.api import (  # noqa: E402
    evaluate,
    markup_file_to_html,
    markup_to_html,
    parse_markup,
    parse_template,
    render_markup,
    render_template,
    render_template_file,
    sanitize,
)
from blackprint.exceptions import (  # noqa: E402
    BlackPrintError,
    ConfigurationError,
    MarkupError,
    ParseError,
    TemplateError,
    TemplateRenderError,
)
from blackprint.markup import MarkupNode, TagDictionary, default_tag_dictionary  # noqa: E402
from blackprint.options import (  # noqa: E402
    MarkupParserOptions,
    MarkupRendererOptions,
    TemplateOptions,
)
from blackprint.template import BlackPrintTemplate, TemplateRegistry  # noqa: E402

__all__ = [
    "__version__",
    "BlackPrintError",
    "BlackPrintTemplate",
    "ConfigurationError",
    "MarkupError",
    "MarkupNode",
    "MarkupParserOptions",
    "MarkupRendererOptions",
    "ParseError",
    "TagDictionary",
    "TemplateError",
    "TemplateOptions",
    "TemplateRegistry",
    "TemplateRenderError",
    "default_tag_dictionary",
    "evaluate",
    "markup_file_to_html",
    "markup_to_html",
    "parse_markup",
    "parse_template",
    "render_markup",
    "render_template",
    "render_template_file",
    "sanitize",
]
