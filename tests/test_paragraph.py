"""Tests for ParagraphStyle."""

from __future__ import annotations

from markrun.paragraph import LineBreakMode, ParagraphStyle, TextAlignment, TextTab


class TestParagraphStyle:
    """Immutable layout adjustments."""

    def test_with_spacing(self) -> None:
        style = ParagraphStyle().with_spacing(4, 12)
        assert style.paragraph_spacing_before == 4
        assert style.paragraph_spacing == 12

    def test_indented_by_shifts_indents_and_tabs(self) -> None:
        style = ParagraphStyle(
            head_indent=10,
            first_line_head_indent=2,
            tab_stops=(TextTab(10), TextTab(40, TextAlignment.RIGHT)),
        )
        shifted = style.indented_by(16)
        assert shifted.head_indent == 26
        assert shifted.first_line_head_indent == 18
        assert shifted.tab_stops == (TextTab(26), TextTab(56, TextAlignment.RIGHT))

    def test_indented_by_leaves_original_untouched(self) -> None:
        style = ParagraphStyle(head_indent=10)
        style.indented_by(5)
        assert style.head_indent == 10

    def test_with_tab_stop_offset(self) -> None:
        style = ParagraphStyle(tab_stops=(TextTab(1), TextTab(2))).with_tab_stop_offset(38)
        assert style.tab_stops == (TextTab(38),)
        assert style.head_indent == 38

    def test_with_line_break_mode(self) -> None:
        style = ParagraphStyle().with_line_break_mode(LineBreakMode.TRUNCATING_TAIL)
        assert style.line_break_mode is LineBreakMode.TRUNCATING_TAIL
        assert ParagraphStyle().line_break_mode is LineBreakMode.WORD_WRAPPING

    def test_equal_styles_compare_equal(self) -> None:
        assert ParagraphStyle().with_spacing(8, 8) == ParagraphStyle(8, 8)
