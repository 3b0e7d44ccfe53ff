"""Tests for dotted path normalization."""

import pytest


class TestNormalizeSegment:
    @pytest.mark.parametrize(
        "segment",
        ["textColor", "text_color", "text-color", "TEXT-COLOR", "textcolor"],
    )
    def test_spellings_normalize_to_same_key(self, segment):
        from stylegen.core.paths import normalize_segment

        assert normalize_segment(segment) == "textcolor"

    def test_digits_kept(self):
        from stylegen.core.paths import normalize_segment

        assert normalize_segment("tab_2") == "tab2"


class TestCombinePath:
    def test_empty_prefix(self):
        from stylegen.core.paths import combine_path

        assert combine_path("", "Tabs") == "tabs"

    def test_appends_normalized_segment(self):
        from stylegen.core.paths import combine_path

        assert combine_path("tabs", "divider-color") == "tabs.dividercolor"

    def test_join_path(self):
        from stylegen.core.paths import join_path

        assert join_path(["Split", "input_bg", "hover"]) == "split.inputbg.hover"
        assert join_path([]) == ""


class TestPascalCase:
    def test_underscores_and_dashes(self):
        from stylegen.core.paths import to_pascal_case

        assert to_pascal_case("split_input") == "SplitInput"
        assert to_pascal_case("tab-bar") == "TabBar"

    def test_keeps_inner_capitals(self):
        from stylegen.core.paths import to_pascal_case

        assert to_pascal_case("scrollBar") == "ScrollBar"
