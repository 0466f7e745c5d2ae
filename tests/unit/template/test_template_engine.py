#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/template/test_template_engine.py
"""Unit tests for BlackPrintTemplate.

Tests cover:
- Text and attribute interpolation
- for!, if! and ref! control tags
- Escaping of interpolated values
- Structural errors in control tags
- Parser options and template reuse

"""

import asyncio
import re

import pytest

from blackprint.exceptions import (
    ConfigurationError,
    ExpressionLookupError,
    ImportResolutionError,
    ParseError,
    TemplateRenderError,
    TemplateStructureError,
)
from blackprint.options import TemplateOptions
from blackprint.template import BlackPrintTemplate, parse_template, render_template


def render(source, data=None, **kwargs):
    return asyncio.run(BlackPrintTemplate(source, **kwargs).render(data or {}))


def body_of(source, data=None, **kwargs):
    html = render(source, data, **kwargs).replace("\n", "")
    html = re.sub(r"^<!DOCTYPE html><html>[ \n]*<head></head>[ \n]*", "", html)
    html = re.sub(r"</html>[ \n]*$", "", html)
    html = re.sub(r"^<body>[ \n]*", "", html)
    html = re.sub(r"</body>$", "", html)
    return html.strip()


@pytest.mark.unit
class TestInterpolation:
    """Test placeholders in text and attributes."""

    def test_empty_template(self):
        """Test that an empty template renders an empty document."""
        assert body_of("") == ""

    def test_text_placeholder(self):
        """Test a placeholder in text."""
        assert body_of("Hello, {{world}}!", {"world": 1}) == "Hello, 1!"

    def test_placeholder_in_element(self):
        """Test an expression inside an element."""
        assert body_of("<h1>{{hello + name}}!</h1>", {"hello": "Hello, ", "name": "world"}) == "<h1>Hello, world!</h1>"

    def test_document_structure(self):
        """Test the doctype line and document root."""
        assert render("<p>x</p>") == "<!DOCTYPE html>\n<html><head></head><body><p>x</p></body></html>"

    def test_interpolated_values_are_escaped(self):
        """Test that interpolated text cannot inject markup."""
        assert body_of("<p>{{v}}</p>", {"v": "<script>x</script> & co"}) == (
            "<p>&lt;script&gt;x&lt;/script&gt; &amp; co</p>"
        )

    def test_null_and_booleans(self):
        """Test the display form of null and booleans."""
        assert body_of("[{{n}}|{{t}}|{{f}}]", {"n": None, "t": True, "f": False}) == "[|true|false]"

    def test_array_placeholder_is_an_error(self):
        """Test that interpolating an array aborts the render."""
        with pytest.raises(TemplateRenderError):
            render("{{items}}", {"items": [1, 2]})

    def test_missing_name_aborts_render(self):
        """Test that an unknown name raises a lookup error."""
        with pytest.raises(ExpressionLookupError):
            render("<p>{{missing}}</p>")

    def test_attribute_value(self):
        """Test interpolation of an attribute value."""
        assert body_of('<a href="/post/{{id}}">x</a>', {"id": 7}) == '<a href="/post/7">x</a>'

    def test_attribute_dropped_when_false_or_empty(self):
        """Test that attributes interpolating to false or the empty string are removed."""
        source = '<input checked="{{done}}" class="{{cls}}" value="">'
        assert body_of(source, {"done": False, "cls": ""}) == '<input value=""/>'
        assert body_of(source, {"done": True, "cls": "big"}) == '<input checked="true" class="big" value=""/>'

    def test_attribute_name(self):
        """Test interpolation of attribute names."""
        source = '<div {{attr}}="1">x</div>'
        assert body_of(source, {"attr": "data-x"}) == '<div data-x="1">x</div>'
        assert body_of(source, {"attr": False}) == "<div>x</div>"

    def test_comments_are_verbatim(self):
        """Test that comments are copied without interpolation."""
        assert body_of("<p>{{x}}</p><!-- {{x}} -->", {"x": 1}) == "<p>1</p><!-- {{x}} -->"

    def test_source_doctype_is_replaced(self):
        """Test that a doctype in the source is not duplicated."""
        html = render("<!DOCTYPE html><p>x</p>")
        assert html.count("<!DOCTYPE") == 1


@pytest.mark.unit
class TestForTag:
    """Test the for! control tag."""

    def test_count(self):
        """Test iterating over a number."""
        assert body_of('<for! var="i" of="3">{{i}}</for!>') == "012"

    def test_reversed(self):
        """Test the reversed flag."""
        assert body_of('<for! var="i" of="3" reversed>{{i}}</for!>') == "210"

    def test_limit(self):
        """Test the limit attribute."""
        assert body_of('<for! var="i" of="3" limit="2">{{i}}</for!>') == "01"
        assert body_of('<for! var="i" of="3" limit="0">{{i}}</for!>') == ""

    def test_array(self):
        """Test iterating over an array of objects."""
        source = '<ul><for! var="p" of="posts"><li>{{p.title}}</li></for!></ul>'
        data = {"posts": [{"title": "A"}, {"title": "B"}]}
        assert body_of(source, data) == "<ul><li>A</li><li>B</li></ul>"

    def test_loop_variable_is_scoped(self):
        """Test that the loop variable shadows data only inside the loop."""
        source = '<for! var="x" of="items">{{x}}</for!>{{x}}'
        assert body_of(source, {"items": ["a", "b"], "x": "outer"}) == "abouter"

    def test_fractional_count_is_floored(self):
        """Test that a fractional count is rounded down."""
        assert body_of('<for! var="i" of="2.9">{{i}}</for!>') == "01"

    @pytest.mark.parametrize(
        "source",
        [
            '<for! of="3">x</for!>',
            '<for! var="i">x</for!>',
            '<for! var="i" of="name">x</for!>',
            '<for! var="i" of="3" limit="name">x</for!>',
        ],
    )
    def test_structure_errors(self, source):
        """Test malformed for! tags."""
        with pytest.raises(TemplateStructureError):
            render(source, {"name": "text"})


@pytest.mark.unit
class TestIfTag:
    """Test the if! control tag."""

    @pytest.mark.parametrize("value,expected", [(True, "Hello!"), (False, ""), (None, "")])
    def test_condition(self, value, expected):
        """Test truthy and falsy conditions."""
        assert body_of("<if! cond=cc>Hello!</if!>", {"cc": value}) == expected

    @pytest.mark.parametrize("value,expected", [([1], ""), (None, "Hello!"), ([], "Hello!")])
    def test_is_empty(self, value, expected):
        """Test the is-empty flag."""
        assert body_of("<if! cond=cc is-empty>Hello!</if!>", {"cc": value}) == expected

    def test_expression_condition(self):
        """Test a condition with operators."""
        assert body_of('<if! cond="1 + 1 == 2">Hello!</if!>') == "Hello!"
        assert body_of('<if! cond="1 + 1 == 3">Hello!</if!>') == ""

    def test_zero_and_empty_string_are_kept(self):
        """Test that only null and false hide the children."""
        assert body_of("<if! cond=v>shown</if!>", {"v": 0}) == "shown"
        assert body_of("<if! cond=v>shown</if!>", {"v": ""}) == "shown"

    def test_not(self):
        """Test the not flag, alone and with is-empty."""
        assert body_of("<if! cond=v not>shown</if!>", {"v": False}) == "shown"
        assert body_of("<if! cond=v is-empty not>shown</if!>", {"v": [1]}) == "shown"

    def test_missing_condition(self):
        """Test that cond is required."""
        with pytest.raises(TemplateStructureError):
            render("<if!>x</if!>")

    def test_is_empty_requires_array(self):
        """Test that is-empty rejects non-array values."""
        with pytest.raises(TemplateStructureError):
            render("<if! cond=v is-empty>x</if!>", {"v": "text"})


@pytest.mark.unit
class TestRefTag:
    """Test the ref! control tag."""

    def test_var_fragment_is_rendered(self):
        """Test that an HTML fragment from data is parsed and rendered."""
        data = {"fragment": "<b>{{name}}</b>", "name": "Ann"}
        assert body_of('<ref! var="fragment"></ref!>', data) == "<b>Ann</b>"

    def test_var_must_be_string(self):
        """Test that a non-string fragment aborts the render."""
        with pytest.raises(TemplateRenderError):
            render('<ref! var="n"></ref!>', {"n": 1})

    def test_import(self):
        """Test importing a fragment through the import function."""

        async def import_func(name):
            return {"header": "<header>{{title}}</header>"}.get(name)

        assert body_of('<ref! import="header"></ref!>', {"title": "T"}, import_func=import_func) == (
            "<header>T</header>"
        )

    def test_unresolved_import(self):
        """Test that an import resolving to None aborts the render."""
        with pytest.raises(ImportResolutionError) as exc_info:
            render('<ref! import="nothing"></ref!>')

        assert exc_info.value.name == "nothing"

    @pytest.mark.parametrize("source", ["<ref!></ref!>", '<ref! var="a" import="b"></ref!>'])
    def test_exactly_one_source(self, source):
        """Test that ref! needs exactly one of var and import."""
        with pytest.raises(TemplateStructureError):
            render(source, {"a": "x"})


@pytest.mark.unit
class TestTemplateOptions:
    """Test parser options and reuse."""

    def test_html_parser_keeps_structure(self):
        """Test that the html.parser builder does not add a document wrapper."""
        options = TemplateOptions(html_parser="html.parser")
        assert render("<p>{{x}}</p>", {"x": 1}, options=options) == "<!DOCTYPE html>\n<p>1</p>"

    def test_custom_doctype(self):
        """Test the doctype option."""
        options = TemplateOptions(doctype="<!doctype html>")
        assert render("", options=options).startswith("<!doctype html>\n")

    def test_unsupported_parser(self):
        """Test that unknown parser names are rejected."""
        with pytest.raises(ConfigurationError):
            TemplateOptions(html_parser="regex")

    def test_template_is_reusable(self):
        """Test that concurrent renders of one template do not interfere."""
        template = parse_template('<for! var="i" of="n">{{label}}{{i}}</for!>')

        async def render_both():
            return await asyncio.gather(
                render_template(template, {"n": 2, "label": "a"}),
                render_template(template, {"n": 3, "label": "b"}),
            )

        first, second = asyncio.run(render_both())
        assert "<body>a0a1</body>" in first
        assert "<body>b0b1b2</body>" in second
        assert template.source == '<for! var="i" of="n">{{label}}{{i}}</for!>'

    def test_parse_errors_are_catchable(self):
        """Test that expression syntax errors surface as ParseError."""
        with pytest.raises(ParseError):
            render("{{1 +}}")
