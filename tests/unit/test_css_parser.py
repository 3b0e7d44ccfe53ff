"""Tests for the stylesheet parser."""

import re

import pytest


class TestParseStylesheet:
    def test_sample(self, stylesheet_css):
        from stylegen.core.css_parser import parse_stylesheet
        from stylegen.core.ir import ColorValue, ThemeMeta, VarRef

        sheet = parse_stylesheet(stylesheet_css)

        assert sheet.meta == ThemeMeta(author="Jane Doe", icon_set="light")
        assert [v.property for v in sheet.variables] == ["--bg", "--fg"]
        assert sheet.variables[0].value == ColorValue(red=0x20, green=0x20, blue=0x20)

        tabs, window = sheet.rules
        assert tabs.path == ["tabs"]
        assert [d.property for d in tabs.declarations] == ["divider"]
        assert [n.path for n in tabs.nested] == [["regular"], ["selected"]]
        assert tabs.nested[0].declarations[0].value == VarRef(name="--bg", line=14, column=21)
        assert window.path == ["window"]

    def test_selector_chains(self):
        from stylegen.core.css_parser import parse_stylesheet

        sheet = parse_stylesheet(".a.b { c: red } .a > .b d { c: red } #x .y { c: red }")
        assert [r.path for r in sheet.rules] == [["a", "b"], ["a", "b", "d"], ["x", "y"]]

    def test_nest_with_compound_target(self):
        from stylegen.core.css_parser import parse_stylesheet

        sheet = parse_stylesheet(".r { @nest a.b { c: red } }")
        assert sheet.rules[0].nested[0].path == ["a", "b"]

    def test_plain_root_declarations(self):
        from stylegen.core.css_parser import parse_stylesheet

        sheet = parse_stylesheet(":root { --x: red; background: blue }")
        assert [v.property for v in sheet.variables] == ["--x"]
        assert sheet.rules[0].path == []
        assert sheet.rules[0].declarations[0].property == "background"

    def test_custom_property_outside_root_ignored(self, caplog):
        import logging

        from stylegen.core.css_parser import parse_stylesheet

        with caplog.at_level(logging.WARNING):
            sheet = parse_stylesheet(".a { --x: red; b: blue }")

        assert [d.property for d in sheet.rules[0].declarations] == ["b"]
        assert sheet.variables == []
        assert "--x" in caplog.text

    def test_meta_is_optional(self):
        from stylegen.core.css_parser import parse_stylesheet

        assert parse_stylesheet(".a { b: red }").meta is None

    def test_custom_keywords(self):
        from stylegen.core.css_parser import StylesheetSettings, parse_stylesheet

        settings = StylesheetSettings(root_selector="html", nest_keyword="chatterino-nest", meta_keyword="chatterino")
        sheet = parse_stylesheet(
            "@chatterino { author: me; iconset: dark }\n"
            "html { --x: red }\n"
            ".a { @chatterino-nest b { c: var(--x) } }",
            settings,
        )
        assert sheet.meta.author == "me"
        assert sheet.meta.icon_set == "dark"
        assert [v.property for v in sheet.variables] == ["--x"]
        assert sheet.rules[0].nested[0].path == ["b"]

    def test_comments_and_empty_declarations(self):
        from stylegen.core.css_parser import parse_stylesheet

        sheet = parse_stylesheet("/* c */ .a { ;; b: red;; /* d */ }")
        assert len(sheet.rules[0].declarations) == 1


class TestParseErrors:
    @pytest.mark.parametrize(
        ("text", "message"),
        [
            (".a:hover { b: red }", "Unsupported selector"),
            (".a, .b { c: red }", "Unsupported selector"),
            ("@media screen { }", "Invalid @-rule"),
            (".a { @media x { } }", "Invalid @-rule"),
            (".a { b red }", "Expected ':'"),
            (".a { b: red", "Unexpected end of input"),
            (".a { b: }", "Missing value"),
            (".a { @nest { } }", "Expected a target"),
            (":root { @nest a { } }", "aren't allowed"),
            ("@meta { colour: x }", "Unexpected 'colour'"),
            ("@meta { author: rgb(1, 2, 3) }", "Expected a string"),
            (".a { b: var(--x, red) }", "Expected var(--name)"),
            (".a { b: var(x) }", "Expected var(--name)"),
            (". { b: red }", "Expected a class name"),
        ],
    )
    def test_errors(self, text, message):
        from stylegen.core.css_parser import parse_stylesheet
        from stylegen.core.errors import ParseError

        with pytest.raises(ParseError, match=re.escape(message)):
            parse_stylesheet(text)

    def test_duplicate_root(self):
        from stylegen.core.css_parser import parse_stylesheet
        from stylegen.core.errors import ParseError

        with pytest.raises(ParseError, match="duplicate :root"):
            parse_stylesheet(":root { --a: red }\n:root { --b: red }")

    def test_duplicate_meta(self):
        from stylegen.core.css_parser import parse_stylesheet
        from stylegen.core.errors import ParseError

        with pytest.raises(ParseError, match="duplicate @meta"):
            parse_stylesheet("@meta { author: a }\n@meta { author: b }")

    def test_invalid_color_has_location(self):
        from stylegen.core.css_parser import parse_stylesheet
        from stylegen.core.errors import InvalidColorLiteral

        with pytest.raises(InvalidColorLiteral) as exc_info:
            parse_stylesheet(".a {\n  b: 12px;\n}", source="Dark.css")

        assert exc_info.value.value == "12px"
        context = exc_info.value.context
        assert (context.line, context.column) == (2, 6)
        assert "Dark.css:2:6" in str(exc_info.value)

    def test_variable_must_be_color(self):
        from stylegen.core.css_parser import parse_stylesheet
        from stylegen.core.errors import InvalidVariableValue

        with pytest.raises(InvalidVariableValue) as exc_info:
            parse_stylesheet(":root { --size: 12px }")
        assert exc_info.value.name == "--size"
