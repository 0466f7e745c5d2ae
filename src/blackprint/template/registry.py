#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/template/registry.py
"""Named template collection with cross-template imports."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Optional, Union

from blackprint.exceptions import TemplateNotFoundError
from blackprint.options.template import TemplateOptions
from blackprint.template.engine import BlackPrintTemplate

logger = logging.getLogger(__name__)


class TemplateRegistry:
    """Templates registered by name, able to import each other.

    Every registered template resolves ``<ref! import="name">`` to the source
    of the template registered as ``name``; unknown names are unresolved and
    abort the render.

    Parameters
    ----------
    base_data : Mapping[str, Any], optional
        Data merged under the data of every render call, such as site-wide
        configuration
    options : TemplateOptions, optional
        Options applied to every registered template

    Examples
    --------
        >>> import asyncio
        >>> registry = TemplateRegistry(base_data={"site": {"name": "Blog"}})
        >>> _ = registry.register("title", "<title>{{site.name}}</title>")
        >>> _ = registry.register("page", '<ref! import="title"></ref!>')
        >>> "<title>Blog</title>" in asyncio.run(registry.render("page"))
        True

    """

    def __init__(self, base_data: Optional[Mapping[str, Any]] = None, options: Optional[TemplateOptions] = None):
        self.base_data = dict(base_data or {})
        self.options = options or TemplateOptions()
        self._templates: dict[str, BlackPrintTemplate] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def register(self, name: str, source: str) -> BlackPrintTemplate:
        """Parse ``source`` and register it as ``name``, replacing any previous template."""
        template = BlackPrintTemplate(source, import_func=self.resolve, options=self.options)
        self._templates[name] = template
        logger.debug("Registered template %r", name)
        return template

    def load_directory(self, path: Union[str, Path], suffix: Optional[str] = None) -> List[str]:
        """Register every file in ``path`` ending with ``suffix``.

        Parameters
        ----------
        path : str or Path
            Directory containing template files
        suffix : str, optional
            File suffix, ``options.template_suffix`` by default. It is
            stripped from the file name to form the template name, so
            ``post.bp.html`` registers ``post``.

        Returns
        -------
        list of str
            Names registered, sorted

        Raises
        ------
        OSError
            If the directory or a template file cannot be read

        """
        suffix = suffix or self.options.template_suffix
        names = []
        for file in sorted(Path(path).iterdir()):
            if not file.is_file() or not file.name.endswith(suffix):
                continue
            name = file.name[: -len(suffix)]
            self.register(name, file.read_text(encoding="utf-8"))
            names.append(name)
        logger.info("Loaded %d templates from %s", len(names), path)
        return names

    def get(self, name: str) -> BlackPrintTemplate:
        """Return the template registered as ``name``.

        Raises
        ------
        TemplateNotFoundError
            If no such template is registered

        """
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None

    def names(self) -> List[str]:
        return sorted(self._templates)

    def source(self, name: str) -> str:
        return self.get(name).source

    async def resolve(self, name: str) -> Optional[str]:
        """Import resolver handed to registered templates."""
        template = self._templates.get(name)
        if template is None:
            logger.debug("Import of unknown template %r", name)
            return None
        return template.source

    async def render(self, name: str, data: Optional[Mapping[str, Any]] = None) -> str:
        """Render template ``name`` with ``data`` layered over the base data."""
        return await self.get(name).render({**self.base_data, **(data or {})})
