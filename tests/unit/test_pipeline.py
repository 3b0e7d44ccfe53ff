"""Tests for file-level generation."""

from pathlib import Path

import pytest


class TestGenerateCode:
    def test_writes_header_and_source(self, tmp_path: Path, layout_file: Path, stylesheet_file: Path):
        from stylegen.pipeline import generate_code

        out = tmp_path / "out" / "nested"
        result = generate_code(layout_file, stylesheet_file, out)

        assert result.files_created == [out / "GeneratedTheme.hpp", out / "GeneratedTheme.cpp"]
        assert "class GeneratedTheme" in (out / "GeneratedTheme.hpp").read_text()
        assert "QColor(30, 144, 255, 255)" in (out / "GeneratedTheme.cpp").read_text()

    def test_timestamp_and_class_name(self, tmp_path: Path, layout_file: Path, stylesheet_file: Path):
        from stylegen.core.config import CodeConfig, StylegenConfig
        from stylegen.pipeline import generate_code

        config = StylegenConfig(code=CodeConfig(class_name="DarkTheme"))
        result = generate_code(layout_file, stylesheet_file, tmp_path, timestamp=True, config=config)

        assert [p.name for p in result.files_created] == ["DarkTheme.hpp", "DarkTheme.cpp", "DarkTheme.timestamp"]
        assert (tmp_path / "DarkTheme.timestamp").read_text() == ""
        assert '#include "DarkTheme.hpp"' in (tmp_path / "DarkTheme.cpp").read_text()

    def test_default_style_must_cover_layout(self, tmp_path: Path, layout_file: Path):
        from stylegen.core.errors import MissingDefault
        from stylegen.pipeline import generate_code

        style = tmp_path / "partial.css"
        style.write_text(".window { background: red }")
        with pytest.raises(MissingDefault):
            generate_code(layout_file, style, tmp_path / "out")
        assert not (tmp_path / "out").exists()

    def test_unused_default_style_paths_warned(self, tmp_path: Path, layout_file: Path, stylesheet_css: str):
        from stylegen.pipeline import generate_code

        style = tmp_path / "Default.css"
        style.write_text(stylesheet_css + "\n.extra { unused: red }\n")
        result = generate_code(layout_file, style, tmp_path / "out")

        assert result.warnings == ["'extra.unused' is defined in the stylesheet but not used by the layout"]


class TestGenerateTheme:
    def test_c2theme(self, tmp_path: Path, stylesheet_file: Path):
        from stylegen.pipeline import generate_theme

        result = generate_theme(stylesheet_file, tmp_path / "themes", timestamp=True)

        assert [p.name for p in result.files_created] == ["Dark.c2theme", "Dark.timestamp"]
        content = (tmp_path / "themes" / "Dark.c2theme").read_text()
        assert content.startswith("@meta\nauthor=Jane Doe\niconset=light\n@colors\n")

    def test_json(self, tmp_path: Path, stylesheet_file: Path):
        from stylegen.pipeline import ThemeFormat, generate_theme

        result = generate_theme(stylesheet_file, tmp_path, fmt=ThemeFormat.JSON)
        assert result.files_created == [tmp_path / "Dark.json"]

    def test_layout_restricts_and_validates(self, tmp_path: Path, layout_file: Path):
        from stylegen.pipeline import generate_theme

        style = tmp_path / "Extra.css"
        style.write_text(
            ".tabs { divider: red; @nest regular { background: red; text: red } "
            "@nest selected { background: red; text: red } } "
            ".window { background: red } .unused { x: red }"
        )
        result = generate_theme(style, tmp_path / "out", layout_path=layout_file)

        content = (tmp_path / "out" / "Extra.c2theme").read_text()
        assert "unused.x" not in content
        assert "window.background=#ffff0000" in content
        assert len(result.warnings) == 1

    def test_layout_incomplete(self, tmp_path: Path, layout_file: Path):
        from stylegen.core.errors import IncompleteTheme
        from stylegen.pipeline import generate_theme

        style = tmp_path / "Partial.css"
        style.write_text(".window { background: red }")
        with pytest.raises(IncompleteTheme):
            generate_theme(style, tmp_path, layout_path=layout_file)


class TestCheckStylesheets:
    def test_reports(self, tmp_path: Path, layout_file: Path, stylesheet_file: Path):
        from stylegen.pipeline import check_stylesheets

        reports = check_stylesheets(layout_file, [stylesheet_file])
        assert len(reports) == 1
        assert reports[0].leaf_count == 6
        assert reports[0].unused_paths == []
        assert not any(tmp_path.glob("*.c2theme"))

    def test_write_failure(self, tmp_path: Path, stylesheet_file: Path):
        from stylegen.core.errors import StylegenIOError
        from stylegen.pipeline import generate_theme

        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(StylegenIOError):
            generate_theme(stylesheet_file, blocker / "out")
