#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/api.py
"""Public entry points for expressions, templates and markup."""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

from blackprint.expression import Value, evaluate_expression
from blackprint.markup import (
    default_tag_dictionary,
    markup_to_html,
    parse_markup,
    render_markup,
    sanitize,
)
from blackprint.markup.dictionary import TagDictionary
from blackprint.options.markup import MarkupParserOptions, MarkupRendererOptions
from blackprint.options.template import TemplateOptions
from blackprint.template import TemplateRegistry, parse_template, render_template

logger = logging.getLogger(__name__)


def evaluate(expression: str, context: Optional[Mapping[str, Any]] = None) -> Value:
    """Evaluate an expression against ``context``.

    Examples
    --------
        >>> evaluate('post.tags.length > 0 ? "tagged" : "untagged"', {"post": {"tags": ["a"]}})
        'tagged'

    """
    return evaluate_expression(expression, context or {})


def markup_file_to_html(
    path: Union[str, Path],
    dictionary: Optional[TagDictionary] = None,
    parser_options: Optional[MarkupParserOptions] = None,
    renderer_options: Optional[MarkupRendererOptions] = None,
) -> str:
    """Read a UTF-8 markup file and render it to HTML.

    Raises
    ------
    OSError
        If the file cannot be read

    """
    text = Path(path).read_text(encoding="utf-8")
    logger.debug("Rendering markup file %s", path)
    return markup_to_html(text, dictionary or default_tag_dictionary, parser_options, renderer_options)


async def render_template_file(
    path: Union[str, Path],
    data: Optional[Mapping[str, Any]] = None,
    template_dir: Union[str, Path, None] = None,
    options: Optional[TemplateOptions] = None,
) -> str:
    """Render a template file, resolving imports from ``template_dir``.

    Parameters
    ----------
    path : str or Path
        Template file
    data : Mapping, optional
        Render data
    template_dir : str or Path, optional
        Directory of templates that ``<ref! import="name">`` may refer to;
        the directory of ``path`` when omitted
    options : TemplateOptions, optional
        Template options

    Returns
    -------
    str
        Rendered HTML document

    Raises
    ------
    OSError
        If a template file cannot be read
    TemplateError
        If rendering fails

    """
    path = Path(path)
    registry = TemplateRegistry(options=options)
    registry.load_directory(template_dir if template_dir is not None else path.parent)

    suffix = registry.options.template_suffix
    name = path.name[: -len(suffix)] if path.name.endswith(suffix) else path.name
    registry.register(name, path.read_text(encoding="utf-8"))
    return await registry.render(name, data)


__all__ = [
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
