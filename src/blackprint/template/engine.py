#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/template/engine.py
"""BlackPrint HTML template engine.

A template is an HTML document parsed once with BeautifulSoup. Rendering
walks the parsed tree against a data mapping and builds a fresh output tree:

- text nodes have their ``{{expr}}`` placeholders interpolated
- ``<for! var="x" of="expr" [reversed] [limit="expr"]>`` repeats its children
  once per item, with ``x`` bound to the item
- ``<if! cond="expr" [is-empty] [not]>`` keeps or drops its children
- ``<ref! var="expr">`` or ``<ref! import="name">`` inserts an HTML fragment,
  which is itself rendered with the current data
- every other element is copied with interpolated attribute values and names

Control tags never appear in the output; each is replaced by the nodes it
produces. The parsed tree is never modified, so one template can serve any
number of concurrent renders.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any, Awaitable, Callable, List, Optional

from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, NavigableString, PageElement, ProcessingInstruction, Tag
from bs4.exceptions import FeatureNotFound

from blackprint.constants import DROPPED_ATTRIBUTE_VALUES, FOR_TAG, IF_TAG, REF_TAG
from blackprint.exceptions import (
    ConfigurationError,
    ImportResolutionError,
    TemplateRenderError,
    TemplateStructureError,
)
from blackprint.expression import evaluate_expression, type_name
from blackprint.expression.values import is_number, is_sequence
from blackprint.options.template import TemplateOptions
from blackprint.template.interpolation import interpolate

logger = logging.getLogger(__name__)

ImportFunc = Callable[[str], Awaitable[Optional[str]]]

# Strings copied to the output without interpolation
_VERBATIM_STRINGS = (Comment, CData, Declaration, ProcessingInstruction)


async def import_nothing(name: str) -> Optional[str]:
    """Import resolver used when none is given: every import is unresolved."""
    return None


def _parse_html(source: str, parser: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(source, parser, multi_valued_attributes=None)
    except FeatureNotFound as e:
        raise ConfigurationError(
            f"HTML parser '{parser}' is not available; install it or choose another parser", original_error=e
        ) from e


class BlackPrintTemplate:
    """A parsed, reusable HTML template.

    Parameters
    ----------
    source : str
        Template HTML
    import_func : callable, optional
        ``async (name) -> str | None`` resolving ``<ref! import="name">``
        fragments. Returning None aborts the render.
    options : TemplateOptions, optional
        Parser and output options

    Examples
    --------
        >>> import asyncio
        >>> template = BlackPrintTemplate("<h1>{{greeting + name}}</h1>")
        >>> html = asyncio.run(template.render({"greeting": "Hello, ", "name": "world"}))
        >>> "<h1>Hello, world</h1>" in html
        True

    """

    def __init__(
        self,
        source: str,
        import_func: Optional[ImportFunc] = None,
        options: Optional[TemplateOptions] = None,
    ):
        self.source = source
        self.import_func = import_func or import_nothing
        self.options = options or TemplateOptions()
        self._document = _parse_html(source, self.options.html_parser)
        logger.debug("Parsed template (%d characters) with %s", len(source), self.options.html_parser)

    async def render(self, data: Mapping[str, Any]) -> str:
        """Render the template against ``data``.

        Parameters
        ----------
        data : Mapping[str, Any]
            Values available to expressions in the template

        Returns
        -------
        str
            The doctype line followed by the rendered ``<html>`` element

        Raises
        ------
        TemplateRenderError
            If a control tag is malformed or an import fails
        ParseError
            If an expression cannot be evaluated

        """
        output = _parse_html("", "html.parser")
        for node in await self._render_children(self._document, dict(data), output):
            output.append(node)

        root = output.find("html", recursive=False)
        body = str(root) if root is not None else output.decode()
        return f"{self.options.doctype}\n{body}"

    async def _render_children(self, parent: Tag, scope: dict[str, Any], output: BeautifulSoup) -> List[PageElement]:
        rendered: List[PageElement] = []
        for child in parent.children:
            rendered.extend(await self._render_node(child, scope, output))
        return rendered

    async def _render_node(self, node: PageElement, scope: dict[str, Any], output: BeautifulSoup) -> List[PageElement]:
        if isinstance(node, Doctype):
            return []
        if isinstance(node, _VERBATIM_STRINGS):
            return [type(node)(str(node))]
        if isinstance(node, NavigableString):
            return [type(node)(interpolate(str(node), scope))]
        if not isinstance(node, Tag):
            return []

        name = node.name.lower()
        if name == FOR_TAG:
            return await self._render_for(node, scope, output)
        if name == IF_TAG:
            return await self._render_if(node, scope, output)
        if name == REF_TAG:
            return await self._render_ref(node, scope, output)
        return [await self._render_element(node, scope, output)]

    async def _render_element(self, element: Tag, scope: dict[str, Any], output: BeautifulSoup) -> Tag:
        attributes = _interpolate_attributes(element.attrs, scope)
        copy = output.new_tag(element.name, namespace=element.namespace, nsprefix=element.prefix, attrs=attributes)
        for child in await self._render_children(element, scope, output):
            copy.append(child)
        return copy

    async def _render_for(self, element: Tag, scope: dict[str, Any], output: BeautifulSoup) -> List[PageElement]:
        variable = element.get("var")
        source = element.get("of")
        if variable is None or source is None:
            raise TemplateStructureError("<for!> tag must have var and of attributes", tag=FOR_TAG)

        items = evaluate_expression(source, scope)
        if is_number(items):
            if not math.isfinite(items):
                raise TemplateStructureError(f'<for! of="{source}"> returned a non-finite count', tag=FOR_TAG)
            items = list(range(max(math.floor(items), 0)))
        if not is_sequence(items):
            raise TemplateStructureError(f'<for! of="{source}"> returned a non-iterable value', tag=FOR_TAG)
        if "reversed" in element.attrs:
            items = list(reversed(items))

        limit: float = math.inf
        limit_source = element.get("limit")
        if limit_source is not None:
            limit = evaluate_expression(limit_source, scope)
            if not is_number(limit):
                raise TemplateStructureError(
                    f'<for!> tag\'s limit attribute "{limit_source}" must evaluate to a number', tag=FOR_TAG
                )

        rendered: List[PageElement] = []
        for item in items:
            if limit <= 0:
                break
            limit -= 1
            rendered.extend(await self._render_children(element, {**scope, variable: item}, output))
        return rendered

    async def _render_if(self, element: Tag, scope: dict[str, Any], output: BeautifulSoup) -> List[PageElement]:
        condition = element.get("cond")
        if condition is None:
            raise TemplateStructureError("<if!> tag must have a cond attribute", tag=IF_TAG)

        value = evaluate_expression(condition, scope)
        if "is-empty" in element.attrs:
            if value is not None and not is_sequence(value):
                raise TemplateStructureError(
                    f"<if!> tag's is-empty attribute can only be used with arrays, got {type_name(value)}", tag=IF_TAG
                )
            keep = value is None or len(value) == 0
        else:
            keep = value is not None and value is not False

        if "not" in element.attrs:
            keep = not keep
        if not keep:
            return []
        return await self._render_children(element, scope, output)

    async def _render_ref(self, element: Tag, scope: dict[str, Any], output: BeautifulSoup) -> List[PageElement]:
        """Insert an HTML string from the data (``var``) or an imported template.

        The inserted HTML is rendered as template source with the current
        scope: its control tags run and its ``{{ }}`` placeholders are
        evaluated, so only trusted HTML belongs in ``var``. Rendered user
        markup is escaped but can still hold placeholders: a user-written
        ``{{ nope }}`` aborts the whole page with
        :class:`~blackprint.exceptions.ExpressionLookupError`, and
        ``{{ site.secret }}`` reads page data.
        """
        variable = element.get("var")
        name = element.get("import")
        if (variable is None) == (name is None):
            raise TemplateStructureError("<ref!> tag must have only one of either var or import attribute", tag=REF_TAG)

        if variable is not None:
            fragment = evaluate_expression(variable, scope)
            if not isinstance(fragment, str):
                raise TemplateRenderError(
                    f'<ref!> tag\'s var attribute "{variable}" must evaluate to a string, but got {type_name(fragment)}',
                    tag=REF_TAG,
                )
        else:
            logger.debug("Importing template fragment %r", name)
            fragment = await self.import_func(name)
            if fragment is None:
                raise ImportResolutionError(name)

        return await self._render_children(_parse_html(fragment, self.options.fragment_parser), scope, output)


def _interpolate_attributes(attributes: Mapping[str, Any], scope: Mapping[str, Any]) -> dict[str, str]:
    """Interpolate attribute values, then names.

    An interpolated value or name that comes out as ``""`` or ``"false"``
    removes the attribute, so ``<input checked="{{done}}">`` only keeps
    ``checked`` when ``done`` is true. Values or names without placeholders
    are kept even when empty.
    """
    values: dict[str, str] = {}
    for name, value in attributes.items():
        value = value if isinstance(value, str) else " ".join(value)
        interpolated = interpolate(value, scope)
        if interpolated != value and interpolated in DROPPED_ATTRIBUTE_VALUES:
            continue
        values[name] = interpolated

    renamed: dict[str, str] = {}
    for name, value in values.items():
        interpolated = interpolate(name, scope)
        if interpolated == name:
            renamed[name] = value
        elif interpolated not in DROPPED_ATTRIBUTE_VALUES:
            renamed[interpolated] = value
    return renamed
