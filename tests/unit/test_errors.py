"""Tests for error formatting."""

from pathlib import Path


class TestErrorContext:
    def test_location_only(self):
        from stylegen.core.errors import ErrorContext

        assert ErrorContext(file=Path("Dark.css"), line=3, column=7).format() == "Dark.css:3:7"
        assert ErrorContext(file=None, line=1, column=1).format() == "<input>:1:1"

    def test_snippet_with_marker(self):
        from stylegen.core.errors import make_context

        text = ".a {\n  b: 12px;\n}\n"
        context = make_context("Dark.css", 2, 6, text)
        assert context.format() == (
            "Dark.css:2:6\n"
            "   1 | .a {\n"
            "   2 |   b: 12px;\n"
            "            ^^^"
        )

    def test_no_location_no_context(self):
        from stylegen.core.errors import make_context

        assert make_context("Dark.css", 0, 0) is None

    def test_message_includes_context(self):
        from stylegen.core.errors import make_parse_error

        error = make_parse_error("Unexpected '}'", "Dark.css", 1, 1, "}")
        assert str(error).startswith("Dark.css:1:1\n")
        assert str(error).endswith("Unexpected '}'")
        assert error.message == "Unexpected '}'"


class TestBindErrors:
    def test_paths_listed(self):
        from stylegen.core.errors import BindError, IncompleteTheme, MissingDefault

        error = IncompleteTheme(["a.b", "c"])
        assert isinstance(error, BindError)
        assert error.paths == ["a.b", "c"]
        assert "(2)" in str(error)
        assert "  - a.b" in str(error)
        assert MissingDefault(["x"]).paths == ["x"]
