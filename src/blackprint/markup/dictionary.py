#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/markup/dictionary.py
"""Tag dictionary: the whitelist that drives markup parsing and sanitization.

A :class:`TagDictionary` maps markup tag names to HTML translations. A tag
may have a block translation, an inline translation, or both. Names may be
parent-qualified (``"figure>caption"``), in which case the qualified entry is
preferred when the tag appears directly inside the named parent.

Lookups never raise for unknown tags: the normalizing methods return
``None`` and the parsers degrade the tag to literal text.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Optional, Union

from blackprint.constants import DEFAULT_REGULARIZE_TARGET, URL_ATTRIBUTES
from blackprint.exceptions import ConfigurationError
from blackprint.markup.nodes import MarkupNode
from blackprint.options.base import CloneFrozenMixin
from blackprint.utils.security import is_url_safe

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_case(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _unique(values: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class TagTranslation:
    """How one markup tag slot (block or inline) is translated to HTML.

    Parameters
    ----------
    elem : str
        HTML element name
    plain_text : bool, default False
        Children are raw text; no nested markup is parsed
    regularize : bool, default False
        Loose text lines inside the block are grouped into paragraphs
    no_content : bool, default False
        The node never has children
    default_attributes : Mapping[str, str]
        Attributes filled in when absent or empty
    allowed_attributes : tuple of str
        Attributes kept by sanitization besides the global ones
    params_to_attribute : tuple of str
        Attribute name for each positional param, in order
    default_classes : tuple of str
        Classes always present on the node
    allowed_classes : tuple of str
        Classes kept by sanitization besides the global ones
    allow_any_classes : bool, default False
        Keep every class

    """

    elem: str
    plain_text: bool = False
    regularize: bool = False
    no_content: bool = False
    default_attributes: Mapping[str, str] = field(default_factory=dict)
    allowed_attributes: tuple[str, ...] = ()
    params_to_attribute: tuple[str, ...] = ()
    default_classes: tuple[str, ...] = ()
    allowed_classes: tuple[str, ...] = ()
    allow_any_classes: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_attributes", MappingProxyType(dict(self.default_attributes)))
        for name in ("allowed_attributes", "params_to_attribute", "default_classes", "allowed_classes"):
            value = getattr(self, name)
            if isinstance(value, str):
                raise ConfigurationError(f"TagTranslation.{name} must be a list of strings, not a string")
            object.__setattr__(self, name, tuple(value))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TagTranslation:
        """Build a translation from plain data with snake_case or camelCase keys.

        Raises
        ------
        ConfigurationError
            If ``elem`` is missing or an unknown key is present

        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name not in known:
                raise ConfigurationError(f"Unknown tag translation option '{key}'")
            kwargs[name] = value
        if "elem" not in kwargs:
            raise ConfigurationError("Tag translation requires an 'elem'")
        return cls(**kwargs)


@dataclass(frozen=True)
class TagDefinition:
    """A named tag with optional block and inline translations."""

    name: str
    block: Optional[TagTranslation] = None
    inline: Optional[TagTranslation] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name.replace(" ", ""))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TagDefinition:
        """Build a definition from ``{"name": ..., "block": {...}, "inline": {...}}``."""
        if "name" not in data:
            raise ConfigurationError("Tag definition requires a 'name'")
        unknown = set(data) - {"name", "block", "inline"}
        if unknown:
            raise ConfigurationError(f"Unknown keys in tag definition '{data['name']}': {sorted(unknown)}")
        block = data.get("block")
        inline = data.get("inline")
        return cls(
            name=str(data["name"]),
            block=TagTranslation.from_mapping(block) if block is not None else None,
            inline=TagTranslation.from_mapping(inline) if inline is not None else None,
        )


def block_tag(name: str, elem: Optional[str] = None, **options: Any) -> TagDefinition:
    """Define a block tag translated to ``elem`` (defaults to ``name``)."""
    return TagDefinition(name, block=TagTranslation(elem or name.replace(" ", ""), **options))


def inline_tag(name: str, elem: Optional[str] = None, **options: Any) -> TagDefinition:
    """Define an inline tag translated to ``elem`` (defaults to ``name``)."""
    return TagDefinition(name, inline=TagTranslation(elem or name.replace(" ", ""), **options))


@dataclass(frozen=True)
class TagDictConfig(CloneFrozenMixin):
    """Dictionary-wide sanitization settings.

    Boolean and string fields default to ``None`` meaning "not set", so that
    :meth:`merged` can tell explicit settings from defaults.

    Parameters
    ----------
    global_allowed_attributes : tuple of str
        Attributes allowed on every tag
    global_allowed_classes : tuple of str
        Classes allowed on every tag
    global_allow_any_classes : bool, optional
        Keep every class on every tag
    regularize_target : str, optional
        Block tag used for paragraphs of loose text (``"p"`` when unset)
    unsafely_allow_any_tags : bool, optional
        Accept tags missing from the dictionary and emit them verbatim
    unsafely_skip_sanitization : bool, optional
        Leave parsed nodes exactly as written

    """

    global_allowed_attributes: tuple[str, ...] = ()
    global_allowed_classes: tuple[str, ...] = ()
    global_allow_any_classes: Optional[bool] = None
    regularize_target: Optional[str] = None
    unsafely_allow_any_tags: Optional[bool] = None
    unsafely_skip_sanitization: Optional[bool] = None

    def __post_init__(self) -> None:
        for name in ("global_allowed_attributes", "global_allowed_classes"):
            value = getattr(self, name)
            if isinstance(value, str):
                raise ConfigurationError(f"{name} must be a list of strings, not a string")
            object.__setattr__(self, name, tuple(value))

    def merged(self, other: Optional[TagDictConfig]) -> TagDictConfig:
        """Overlay the explicitly set fields of ``other``, unioning allow-lists."""
        if other is None:
            return self
        overrides = {
            f.name: getattr(other, f.name)
            for f in fields(self)
            if getattr(other, f.name) is not None and not f.name.startswith("global_allowed_")
        }
        return self.create_updated(
            global_allowed_attributes=_unique((*other.global_allowed_attributes, *self.global_allowed_attributes)),
            global_allowed_classes=_unique((*other.global_allowed_classes, *self.global_allowed_classes)),
            **overrides,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TagDictConfig:
        """Build a config from plain data with snake_case or camelCase keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _snake_case(key)
            if name not in known:
                raise ConfigurationError(f"Unknown tag dictionary option '{key}'")
            kwargs[name] = value
        return cls(**kwargs)


class TagDictionary:
    """Whitelist of markup tags and their HTML translations.

    Parameters
    ----------
    tags : iterable of TagDefinition
        Tag definitions. Definitions sharing a name are merged slot by slot,
        later definitions replacing earlier block or inline translations.
    config : TagDictConfig, optional
        Dictionary-wide settings

    Examples
    --------
        >>> dictionary = TagDictionary([block_tag("p"), inline_tag("b", "strong")])
        >>> dictionary.normalize_inline_tag("b")
        'b'
        >>> dictionary.get_html_tag("b", block=False)
        'strong'

    """

    def __init__(self, tags: Iterable[TagDefinition] = (), config: Optional[TagDictConfig] = None):
        self._config = config or TagDictConfig()
        self._tags: dict[str, TagDefinition] = {}
        for tag in tags:
            existing = self._tags.get(tag.name)
            if existing is None:
                self._tags[tag.name] = tag
            else:
                self._tags[tag.name] = TagDefinition(
                    tag.name,
                    block=tag.block or existing.block,
                    inline=tag.inline or existing.inline,
                )
        logger.debug("Built tag dictionary with %d tags", len(self._tags))

    @property
    def config(self) -> TagDictConfig:
        return self._config

    @property
    def tags(self) -> Mapping[str, TagDefinition]:
        return MappingProxyType(self._tags)

    @property
    def regularize_target(self) -> str:
        return self._config.regularize_target or DEFAULT_REGULARIZE_TARGET

    @property
    def allows_any_tags(self) -> bool:
        return bool(self._config.unsafely_allow_any_tags)

    def extend(self, tags: Iterable[TagDefinition] = (), config: Optional[TagDictConfig] = None) -> TagDictionary:
        """Return a new dictionary with ``tags`` and ``config`` layered over this one."""
        return TagDictionary([*self._tags.values(), *tags], self._config.merged(config))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional[TagDictionary] = None) -> TagDictionary:
        """Build a dictionary from plain data, as loaded from a config file.

        Parameters
        ----------
        data : Mapping
            ``{"config": {...}, "tags": [{"name": ..., "block": {...}, "inline": {...}}]}``
        base : TagDictionary, optional
            Dictionary to extend instead of starting from an empty one

        Raises
        ------
        ConfigurationError
            If the data does not describe a valid dictionary

        """
        if not isinstance(data, Mapping):
            raise ConfigurationError("Tag dictionary data must be a mapping")
        unknown = set(data) - {"config", "tags"}
        if unknown:
            raise ConfigurationError(f"Unknown keys in tag dictionary: {sorted(unknown)}")

        raw_tags = data.get("tags") or []
        if not isinstance(raw_tags, list):
            raise ConfigurationError("'tags' must be a list of tag definitions")
        try:
            tags = [TagDefinition.from_mapping(entry) for entry in raw_tags]
            config = TagDictConfig.from_mapping(data.get("config") or {})
        except (AttributeError, TypeError) as e:
            raise ConfigurationError(f"Invalid tag dictionary data: {e}", original_error=e) from e

        if base is not None:
            return base.extend(tags, config)
        return cls(tags, config)

    # Lookups

    def normalize_block_tag(self, tag: str, parent: Optional[str] = None) -> Optional[str]:
        """Return the dictionary key for block ``tag`` inside ``parent``, or None if unknown."""
        return self._normalize(tag, parent, block=True)

    def normalize_inline_tag(self, tag: str, parent: Optional[str] = None) -> Optional[str]:
        """Return the dictionary key for inline ``tag`` inside ``parent``, or None if unknown."""
        return self._normalize(tag, parent, block=False)

    def _normalize(self, tag: str, parent: Optional[str], block: bool) -> Optional[str]:
        tag = tag.split(">")[-1]
        if parent:
            qualified = f"{parent.split('>')[-1]}>{tag}"
            if self.translation(qualified, block) is not None:
                return qualified
        if self.translation(tag, block) is not None:
            return tag
        return tag if self.allows_any_tags else None

    def translation(self, tag: str, block: bool) -> Optional[TagTranslation]:
        """Return the block or inline translation stored under an already normalized ``tag``."""
        definition = self._tags.get(tag)
        if definition is None:
            return None
        return definition.block if block else definition.inline

    def block_exists(self, tag: str, parent: Optional[str] = None) -> bool:
        return self.normalize_block_tag(tag, parent) is not None

    def inline_exists(self, tag: str, parent: Optional[str] = None) -> bool:
        return self.normalize_inline_tag(tag, parent) is not None

    def should_regularize_children(self, tag: str) -> bool:
        translation = self.translation(tag, block=True)
        return translation is not None and translation.regularize

    def should_plain_text(self, tag: str, block: bool = True) -> bool:
        translation = self.translation(tag, block)
        return translation is not None and translation.plain_text

    def should_have_no_children(self, tag: str) -> bool:
        translation = self.translation(tag, block=True)
        return translation is not None and translation.no_content

    def get_html_tag(self, tag: str, block: bool) -> Optional[str]:
        """Return the HTML element for a normalized tag, or None if it has no translation."""
        translation = self.translation(tag, block)
        if translation is None:
            return tag if self.allows_any_tags else None
        return translation.elem

    # Sanitization

    def sanitize(self, tree: Iterable[Union[MarkupNode, str]]) -> None:
        """Sanitize every node of ``tree`` in place."""
        for node in tree:
            self.sanitize_node(node)

    def sanitize_node(self, node: Union[MarkupNode, str]) -> None:
        """Filter a node and its descendants against the dictionary, in place.

        Disallowed attributes and classes are removed, defaults applied and
        params converted to attributes. A node whose tag has no translation
        for its kind becomes a block of the regularize target. Applying this
        twice gives the same result as applying it once.

        URL attributes (``href``, ``src``, ...) whose scheme can run script,
        such as ``javascript:`` or ``data:text/html``, are removed.
        """
        if self._config.unsafely_skip_sanitization or isinstance(node, str):
            return

        translation = self.translation(node.tag, node.block)
        if translation is None:
            if self.allows_any_tags:
                self._sanitize_attributes(node, ())
                self._sanitize_classes(node, ())
                self._sanitize_urls(node)
                node.params = []
                self.sanitize(node.children)
                return

            logger.debug("Coercing untranslatable %s tag '%s'", "block" if node.block else "inline", node.tag)
            node.tag = self.regularize_target
            node.block = True
            translation = self.translation(node.tag, block=True)
            if translation is None:
                node.attributes = {}
                node.params = []
                self.sanitize(node.children)
                return

        # Attributes produced from params and default classes stay valid on a second pass
        self._sanitize_attributes(node, (*translation.allowed_attributes, *translation.params_to_attribute))
        self._sanitize_classes(
            node, (*translation.allowed_classes, *translation.default_classes), translation.allow_any_classes
        )

        for name, value in zip(translation.params_to_attribute, node.params):
            if name:
                node.attributes[name] = value
        node.params = []
        self._sanitize_urls(node)

        for name, value in translation.default_attributes.items():
            if not node.attributes.get(name):
                node.attributes[name] = value

        if translation.default_classes:
            existing = node.attributes.get("class", "").split()
            node.attributes["class"] = " ".join(_unique((*translation.default_classes, *existing)))

        if translation.no_content:
            node.children = []
        if translation.plain_text:
            node.children = [child for child in node.children if isinstance(child, str)]

        self.sanitize(node.children)

    def _sanitize_attributes(self, node: MarkupNode, allowed: Iterable[str]) -> None:
        allowed_set = {*allowed, *self._config.global_allowed_attributes, "class"}
        for name in [name for name in node.attributes if name not in allowed_set]:
            logger.debug("Dropping attribute '%s' from tag '%s'", name, node.tag)
            del node.attributes[name]

    def _sanitize_classes(self, node: MarkupNode, allowed: Iterable[str], allow_any: bool = False) -> None:
        allow_any = allow_any or bool(self._config.global_allow_any_classes)
        allowed_set = {*allowed, *self._config.global_allowed_classes}

        if not node.attributes.get("class"):
            node.attributes.pop("class", None)
            return

        kept = _unique(name for name in node.attributes["class"].split() if allow_any or name in allowed_set)
        if kept:
            node.attributes["class"] = " ".join(kept)
        else:
            del node.attributes["class"]

    def _sanitize_urls(self, node: MarkupNode) -> None:
        for name in [name for name in node.attributes if name.lower() in URL_ATTRIBUTES]:
            if not is_url_safe(node.attributes[name]):
                logger.debug("Dropping attribute '%s' with a dangerous URL from tag '%s'", name, node.tag)
                del node.attributes[name]
