#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/markup/test_markup_renderer.py
"""Unit tests for MarkupRenderer.

Tests cover:
- Rendering flat and nested trees
- Preservation of line breaks in text
- Escaping of text and attribute values
- Element names from the dictionary
- Renderer options and errors

"""

import pytest

from blackprint.exceptions import MarkupRenderError
from blackprint.markup import MarkupNode, MarkupRenderer, markup_to_html, render_markup
from blackprint.options import MarkupRendererOptions


def blk(tag, children, attributes=None):
    return MarkupNode(tag, attributes=attributes or {}, children=children, block=True)


def inline(tag, children, attributes=None):
    return MarkupNode(tag, attributes=attributes or {}, children=children, block=False)


@pytest.mark.unit
class TestTreeRendering:
    """Test rendering of whole trees."""

    def test_render_simple_tree(self, dictionary):
        """Test a flat list of blocks."""
        tree = [blk("p", ["hello"]), blk("h1", ["world"]), blk("p", ["foo"])]
        html = MarkupRenderer(dictionary).render_tree(tree)
        assert html.replace("\n", "") == "<p>hello</p><h1>world</h1><p>foo</p>"

    def test_render_tree_with_newlines(self, dictionary):
        """Test that line breaks inside text are preserved."""
        tree = [blk("p", ["hello\n", inline("strong", ["hello"]), "world\n", "\n", "foo"])]
        html = MarkupRenderer(dictionary).render_tree(tree)
        assert html.replace(" ", "") == "<p>hello\n<strong>hello</strong>world\n\nfoo</p>"

    def test_render_nested_tree(self, dictionary):
        """Test nested blocks with trailing text."""
        tree = [blk("blockquote", [blk("blockquote", [blk("p", ["nest1"]), "nest2"]), "nest3"])]
        html = MarkupRenderer(dictionary).render_tree(tree)
        assert html.replace("\n", "") == "<blockquote><blockquote><p>nest1</p>nest2</blockquote>nest3</blockquote>"

    def test_block_separator_option(self, dictionary):
        """Test a custom separator between top-level nodes."""
        renderer = MarkupRenderer(dictionary, MarkupRendererOptions(block_separator=""))
        assert renderer.render_tree([blk("p", ["a"]), blk("p", ["b"])]) == "<p>a</p><p>b</p>"

    def test_empty_tree(self, dictionary):
        """Test that an empty tree renders to an empty string."""
        assert MarkupRenderer(dictionary).render_tree([]) == ""


@pytest.mark.unit
class TestElements:
    """Test element names and attributes."""

    def test_aliased_tags(self, dictionary):
        """Test tags whose HTML element differs from the tag name."""
        renderer = MarkupRenderer(dictionary)
        assert renderer.render_node(inline("b", ["x"])) == "<strong>x</strong>"
        assert renderer.render_node(blk("code", ["x"], {"lang": "lua"})) == '<pre lang="lua">x</pre>'
        assert renderer.render_node(blk("figure>caption", ["c"])) == "<figcaption>c</figcaption>"

    def test_void_element_gets_closing_tag(self, dictionary):
        """Test that empty elements are always closed explicitly."""
        node = blk("img", [], {"src": "/a.png"})
        assert MarkupRenderer(dictionary).render_node(node) == '<img src="/a.png"></img>'

    def test_unknown_tag_renders_nothing(self, dictionary):
        """Test that a node with no HTML translation is skipped."""
        assert MarkupRenderer(dictionary).render_node(blk("script", ["alert(1)"])) == ""

    def test_wildcard_renders_tag_name(self, wildcard_dictionary):
        """Test that a wildcard dictionary emits tags by name."""
        assert MarkupRenderer(wildcard_dictionary).render_node(blk("custom", ["x"])) == "<custom>x</custom>"


@pytest.mark.unit
@pytest.mark.security
class TestEscaping:
    """Test escaping of untrusted content."""

    def test_text_is_escaped(self, dictionary):
        """Test that markup characters in text are escaped."""
        html = MarkupRenderer(dictionary).render_node(blk("p", ["<script>alert('x')</script> & \""]))
        assert html == "<p>&lt;script&gt;alert(&#x27;x&#x27;)&lt;/script&gt; &amp; &quot;</p>"

    def test_attribute_values_are_escaped(self, dictionary):
        """Test that quotes cannot break out of an attribute value."""
        node = inline("a", ["x"], {"href": '" onmouseover="evil()'})
        html = MarkupRenderer(dictionary).render_node(node)
        assert html == '<a href="&quot; onmouseover=&quot;evil()">x</a>'

    def test_script_block_from_markup(self):
        """Test that an unknown script tag is rendered as escaped text."""
        assert markup_to_html("[script] doEvil()") == "<p>[script] doEvil()</p>"

    @pytest.mark.parametrize(
        "text,expected",
        [
            ('[a "javascript:alert(1)": click]', "<p><a>click</a></p>"),
            ('[a href="javascript:alert(1)": click]', "<p><a>click</a></p>"),
            ('[a "VBScript:msgbox(1)": click]', "<p><a>click</a></p>"),
            ('[img "javascript:alert(1)"]', "<img></img>"),
            ('[img "data:text/html,<b>x</b>"]', "<img></img>"),
        ],
    )
    def test_script_urls_are_removed(self, text, expected):
        """Test that links and images cannot carry script URLs."""
        assert markup_to_html(text) == expected

    def test_safe_link_is_kept(self):
        """Test that an ordinary link keeps its target."""
        assert markup_to_html('[a "https://example.com/?a=1&b=2": site]') == (
            '<p><a href="https://example.com/?a=1&amp;b=2">site</a></p>'
        )

    def test_html_in_markup_is_escaped(self):
        """Test that raw HTML in markup text is escaped."""
        assert markup_to_html('<img src=x onerror="evil()">') == (
            "<p>&lt;img src=x onerror=&quot;evil()&quot;&gt;</p>"
        )


@pytest.mark.unit
class TestErrors:
    """Test failures on malformed trees."""

    def test_non_string_attribute_value(self, dictionary):
        """Test that an invalid attribute value raises MarkupRenderError."""
        with pytest.raises(MarkupRenderError):
            render_markup([blk("p", ["x"], {"w": 1})], dictionary)

    def test_invalid_child(self, dictionary):
        """Test that a child that is neither a node nor a string raises MarkupRenderError."""
        with pytest.raises(MarkupRenderError):
            render_markup([blk("p", [42])], dictionary)
