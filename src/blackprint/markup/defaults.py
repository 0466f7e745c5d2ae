#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/markup/defaults.py
"""The tag dictionary used when no other dictionary is supplied."""

from __future__ import annotations

from blackprint.constants import DEFAULT_REGULARIZE_TARGET
from blackprint.markup.dictionary import TagDictConfig, TagDictionary, block_tag, inline_tag

_IMAGE_ATTRIBUTES = ("alt", "width", "height")

default_tag_dictionary = TagDictionary(
    [
        block_tag("p"),
        block_tag("h1"),
        block_tag("h2"),
        block_tag("h3"),
        block_tag("h4"),
        block_tag("h5"),
        block_tag("h6"),
        inline_tag("strong"),
        inline_tag("b", "strong"),
        inline_tag("em"),
        inline_tag("i", "em"),
        inline_tag("del"),
        inline_tag("small"),
        inline_tag("cite"),
        inline_tag("a", allowed_attributes=("title",), params_to_attribute=("href",)),
        inline_tag(
            "img",
            allowed_attributes=_IMAGE_ATTRIBUTES,
            params_to_attribute=("src",),
            no_content=True,
            default_classes=("img-inline",),
        ),
        block_tag("img", allowed_attributes=_IMAGE_ATTRIBUTES, params_to_attribute=("src",), no_content=True),
        inline_tag("br", no_content=True),
        block_tag("section", regularize=True),
        block_tag("aside", regularize=True),
        block_tag("figure"),
        block_tag("figure > caption", "figcaption"),
        block_tag("figcaption"),
        block_tag("blockquote"),
        block_tag("code", "pre", plain_text=True, params_to_attribute=("lang",)),
        inline_tag("code", plain_text=True, params_to_attribute=("lang",)),
        block_tag("math", plain_text=True),
        inline_tag("math", plain_text=True),
    ],
    TagDictConfig(regularize_target=DEFAULT_REGULARIZE_TARGET),
)
