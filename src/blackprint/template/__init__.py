#  Copyright (c) 2025 Tom Villani, Ph.D.
"""HTML template engine with ``for!``, ``if!`` and ``ref!`` control tags."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from blackprint.options.template import TemplateOptions
from blackprint.template.engine import BlackPrintTemplate, ImportFunc, import_nothing
from blackprint.template.interpolation import PLACEHOLDER_PATTERN, interpolate
from blackprint.template.registry import TemplateRegistry


def parse_template(
    source: str,
    import_func: Optional[ImportFunc] = None,
    options: Optional[TemplateOptions] = None,
) -> BlackPrintTemplate:
    """Parse template HTML into a reusable :class:`BlackPrintTemplate`."""
    return BlackPrintTemplate(source, import_func=import_func, options=options)


async def render_template(template: BlackPrintTemplate, data: Mapping[str, Any]) -> str:
    """Render a parsed template against ``data``."""
    return await template.render(data)


__all__ = [
    "BlackPrintTemplate",
    "ImportFunc",
    "PLACEHOLDER_PATTERN",
    "TemplateRegistry",
    "import_nothing",
    "interpolate",
    "parse_template",
    "render_template",
]
