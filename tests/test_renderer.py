"""Tests for AttributedRenderer."""

from __future__ import annotations

from dataclasses import replace

import pytest

from markrun.attributed import AttributedString, AttributeKey, TextRange
from markrun.fonts import GRAY, Font, FontTraits, FontWeight
from markrun.kinds import MarkdownKind
from markrun.nodes import (
    BlockQuote,
    CodeBlock,
    CodeSpan,
    CustomBlock,
    Document,
    Emphasis,
    Heading,
    HtmlInline,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Ordered,
    Paragraph,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
    Unordered,
)
from markrun.paragraph import ParagraphStyle, TextTab
from markrun.renderers.attributed import AttributedRenderer, render_attributed
from markrun.renderers.protocol import ASTRenderer
from markrun.style import RenderStyle


def para(*children) -> Paragraph:
    return Paragraph(children=children)


def doc(*children) -> Document:
    return Document(children=children)


def ordered(count: int, start: int = 1) -> List:
    list_type = Ordered(start=start)
    items = tuple(ListItem(children=(para(Text("x")),), prefix=list_type.prefix(i)) for i in range(count))
    return List(items=items, list_type=list_type)


def bullets(*items: tuple) -> List:
    return List(
        items=tuple(ListItem(children=children, prefix="•") for children in items),
        list_type=Unordered(),
    )


def render(node, style: RenderStyle) -> AttributedString:
    result = AttributedRenderer(style).render(node)
    assert result is not None
    return result


def paragraph_style_at(text: AttributedString, index: int) -> ParagraphStyle:
    return text.attribute(AttributeKey.PARAGRAPH_STYLE, index)[0]


def kind_at(text: AttributedString, index: int) -> MarkdownKind:
    return text.attribute(AttributeKey.MARKDOWN, index)[0]


class TestDocument:
    """Recursion, ordering and empty input."""

    def test_empty_document_renders_empty(self, style: RenderStyle) -> None:
        result = render(doc(), style)
        assert result.string == ""
        assert len(result) == 0

    def test_children_keep_order(self, style: RenderStyle) -> None:
        result = render(doc(para(Text("one")), para(Text("two")), para(Text("three"))), style)
        assert result.string == "one\ntwo\nthree\n"

    def test_thematic_break_contributes_nothing(self, style: RenderStyle) -> None:
        result = render(doc(para(Text("a")), ThematicBreak(), para(Text("b"))), style)
        assert result.string == "a\nb\n"

    def test_bare_nodes_without_text(self, style: RenderStyle) -> None:
        renderer = AttributedRenderer(style)
        assert renderer.render(ThematicBreak()) is None
        assert renderer.render(ListItem(children=(para(Text("x")),), prefix="•")) is None

    def test_renderer_conforms_to_protocol(self, style: RenderStyle) -> None:
        renderer: ASTRenderer = AttributedRenderer(style)
        assert renderer.render(Text("x")) is not None

    def test_default_style(self) -> None:
        assert AttributedRenderer().style == RenderStyle()
        assert render_attributed(para(Text("Hi"))).string == "Hi\n"


class TestParagraphsAndText:
    """Plain text styling."""

    def test_text_gets_default_attributes(self, style: RenderStyle) -> None:
        result = render(para(Text("Hi")), style)
        attributes, span = result.attributes_at(0)
        assert attributes == style.default_attributes
        assert span == TextRange(0, 2)

    def test_paragraph_break_carries_paragraph_bundle(self, style: RenderStyle) -> None:
        result = render(para(Text("Hi")), style)
        attributes, _ = result.attributes_at(2)
        assert attributes == {
            AttributeKey.MARKDOWN: MarkdownKind.NONE,
            AttributeKey.PARAGRAPH_STYLE: style.base_paragraph_style,
        }

    def test_breaks_are_bare_newlines(self, style: RenderStyle) -> None:
        result = render(para(Text("a"), SoftBreak(), Text("b"), LineBreak(), Text("c")), style)
        assert result.string == "a\nb\nc\n"
        assert render(SoftBreak(), style).attributes_at(0)[0] == {}


class TestEmphasis:
    """Font transforms compose."""

    def test_emphasis_italicizes(self, style: RenderStyle) -> None:
        result = render(para(Emphasis(children=(Text("it"),))), style)
        assert result.attribute(AttributeKey.FONT, 0)[0] == style.base_font.italic
        assert kind_at(result, 0) == MarkdownKind.ITALIC

    def test_strong_inside_emphasis_is_bold_italic(self, style: RenderStyle) -> None:
        node = para(Emphasis(children=(Text("a "), Strong(children=(Text("b"),)))))
        result = render(node, style)
        font = result.attribute(AttributeKey.FONT, 2)[0]
        assert font.is_bold
        assert font.is_italic
        assert font.size == style.base_font.size
        assert kind_at(result, 2) == MarkdownKind.BOLD | MarkdownKind.ITALIC
        assert result.ranges_containing(MarkdownKind.ITALIC) == [TextRange(0, 3)]
        assert result.ranges_of(MarkdownKind.BOLD | MarkdownKind.ITALIC) == [TextRange(2, 1)]

    def test_strong_code_keeps_code_font_and_color(self, style: RenderStyle) -> None:
        result = render(para(Strong(children=(CodeSpan("x"),))), style)
        assert result.attribute(AttributeKey.FONT, 0)[0] == style.code_font.bold
        assert result.attribute(AttributeKey.FOREGROUND_COLOR, 0)[0] == style.code_color
        assert kind_at(result, 0) == MarkdownKind.CODE | MarkdownKind.BOLD

    def test_bold_color_applies_when_configured(self, style: RenderStyle) -> None:
        colored = replace(style, bold_color=GRAY)
        result = render(para(Strong(children=(Text("x"),))), colored)
        assert result.attribute(AttributeKey.FOREGROUND_COLOR, 0)[0] == GRAY


class TestHeadings:
    """Heading size, bolding and trailing break."""

    def test_h1(self, style: RenderStyle) -> None:
        result = render(Heading(children=(Text("Title"),), level=1), style)
        assert result.string == "Title\n"
        assert result.attribute(AttributeKey.FONT, 0)[0] == Font("System", 27, FontTraits.BOLD)
        assert result.ranges_of(MarkdownKind.H1) == [TextRange(0, 5)]
        assert result.attribute(AttributeKey.PARAGRAPH_STYLE, 0)[0] == style.header_paragraph_style

    def test_heading_break_has_no_attributes(self, style: RenderStyle) -> None:
        result = render(Heading(children=(Text("Title"),), level=2), style)
        assert result.attributes_at(5)[0] == {}

    def test_deep_levels_style_as_h3(self, style: RenderStyle) -> None:
        result = render(Heading(children=(Text("Deep"),), level=5), style)
        assert result.attribute(AttributeKey.FONT, 0)[0].size == style.h3_size
        assert kind_at(result, 0) == MarkdownKind.H3

    def test_italic_heading_keeps_italic(self, style: RenderStyle) -> None:
        result = render(Heading(children=(Emphasis(children=(Text("x"),)),), level=2), style)
        font = result.attribute(AttributeKey.FONT, 0)[0]
        assert font == Font("System", 24, FontTraits.BOLD | FontTraits.ITALIC)
        assert kind_at(result, 0) == MarkdownKind.H2 | MarkdownKind.ITALIC


class TestCodeAndQuotes:
    """Code-like blocks and block quotes."""

    @pytest.mark.parametrize("node", [CodeBlock("let x\n"), CustomBlock("let x\n"), HtmlInline("let x\n")])
    def test_literal_with_code_bundle(self, style: RenderStyle, node) -> None:
        result = render(node, style)
        assert result.string == "let x\n"
        assert list(result.runs()) == [("let x\n", dict(style.code_attributes))]

    def test_quote_tags_and_indents(self, style: RenderStyle) -> None:
        result = render(BlockQuote(children=(para(Text("q")),)), style)
        assert result.ranges_of(MarkdownKind.QUOTE) == [TextRange(0, 2)]
        assert result.attribute(AttributeKey.FOREGROUND_COLOR, 0)[0] == style.quote_color
        assert paragraph_style_at(result, 0) == style.quote_paragraph_style

    def test_image_renders_alt_text_only(self, style: RenderStyle) -> None:
        result = render(para(Image(children=(Text("alt"),), url="https://example.com/a.png")), style)
        assert result.string == "alt\n"
        assert result.attribute_ranges(AttributeKey.LINK) == []


class TestLinks:
    """Link styling and fallback."""

    def test_valid_link_overwrites_inner_styling(self, style: RenderStyle) -> None:
        node = para(Link(children=(Strong(children=(Text("click"),)),), url="https://example.com"))
        result = render(node, style)
        assert result.attribute(AttributeKey.LINK, 0) == ("https://example.com", TextRange(0, 5))
        assert result.ranges_of(MarkdownKind.LINK) == [TextRange(0, 5)]
        assert result.attribute(AttributeKey.FONT, 0)[0] == style.base_font

    def test_unparseable_url_leaves_content_plain(self, style: RenderStyle) -> None:
        result = render(para(Link(children=(Text("click"),), url="not a url")), style)
        assert result.string == "click\n"
        assert result.attribute_ranges(AttributeKey.LINK) == []

    def test_any_parseable_scheme_is_styled_by_default(self, style: RenderStyle) -> None:
        result = render(Link(children=(Text("click"),), url="bad://url"), style)
        assert result.attribute(AttributeKey.LINK, 0)[0] == "bad://url"

    def test_invalid_link_falls_back_to_literal(self, style: RenderStyle) -> None:
        strict = replace(style, render_only_valid_links=True)
        result = render(para(Link(children=(Text("click"),), url="bad://url")), strict)
        assert result.string == "[click](bad://url)\n"
        assert result.attribute_ranges(AttributeKey.LINK) == []
        assert result.attributes_at(0)[0] == strict.default_attributes

    def test_missing_url_falls_back_with_empty_target(self, style: RenderStyle) -> None:
        strict = replace(style, render_only_valid_links=True)
        assert render(Link(children=(Text("click"),)), strict).string == "[click]()"

    def test_detected_url_is_normalized(self, style: RenderStyle) -> None:
        strict = replace(style, render_only_valid_links=True)
        result = render(Link(children=(Text("site"),), url="www.example.com"), strict)
        assert result.attribute(AttributeKey.LINK, 0)[0] == "http://www.example.com"
        assert kind_at(result, 0) == MarkdownKind.LINK

    def test_strict_mode_keeps_paren_terminated_target(self, style: RenderStyle) -> None:
        strict = replace(style, render_only_valid_links=True)
        url = "https://en.wikipedia.org/wiki/Python_(programming_language)"
        result = render(Link(children=(Text("wiki"),), url=url), strict)
        assert result.string == "wiki"
        assert result.attribute(AttributeKey.LINK, 0) == (url, TextRange(0, 4))

    def test_injected_capabilities(self, style: RenderStyle) -> None:
        strict = replace(
            style,
            render_only_valid_links=True,
            detect_url=lambda raw: f"app://{raw}",
            can_open_url=lambda url: url.startswith("app://"),
        )
        result = render(Link(children=(Text("open"),), url="settings"), strict)
        assert result.attribute(AttributeKey.LINK, 0)[0] == "app://settings"

    def test_fallback_is_logged(self, style: RenderStyle, caplog: pytest.LogCaptureFixture) -> None:
        strict = replace(style, render_only_valid_links=True)
        with caplog.at_level("DEBUG", logger="markrun"):
            render(Link(children=(Text("click"),), url="bad://url"), strict)
        assert "bad://url" in caplog.text


class TestListGeometry:
    """Prefix column and tab stop layout."""

    def test_item_text_and_tagging(self, style: RenderStyle) -> None:
        result = render(ordered(2), style)
        assert result.string == "1.\tx\n2.\tx\n"
        assert result.ranges_of(MarkdownKind.O_LIST) == [TextRange(0, 10)]

    def test_prefix_uses_light_prefix_font(self, style: RenderStyle) -> None:
        result = render(ordered(1), style)
        font = result.attribute(AttributeKey.FONT, 0)[0]
        assert font.weight is FontWeight.LIGHT
        assert result.attribute(AttributeKey.FONT, 3)[0] == style.base_font

    def test_short_prefixes_use_minimum_margin(self, style: RenderStyle) -> None:
        result = render(ordered(11), style)
        first = paragraph_style_at(result, 0)
        eleventh = paragraph_style_at(result, result.string.index("11.\t"))
        # min width of "99." is 30, rule is 30 + 8
        assert first == ParagraphStyle(
            paragraph_spacing=style.list_item_spacing,
            head_indent=38,
            first_line_head_indent=10,
            tab_stops=(TextTab(38),),
        )
        assert eleventh.first_line_head_indent == 0
        assert eleventh.head_indent == 38

    def test_last_item_governs_margin(self, style: RenderStyle) -> None:
        result = render(ordered(100), style)
        first = paragraph_style_at(result, 0)
        last = paragraph_style_at(result, result.string.index("100.\t"))
        assert first.tab_stops == (TextTab(48),)
        assert first.head_indent == 48
        assert first.first_line_head_indent == 20
        assert last.first_line_head_indent == 0

    def test_start_number_counts(self, style: RenderStyle) -> None:
        result = render(ordered(2, start=99), style)
        assert result.string.startswith("99.\tx\n100.\t")
        assert paragraph_style_at(result, 0).head_indent == 48

    def test_bullet_correction(self, style: RenderStyle) -> None:
        result = render(bullets((para(Text("a")),)), style)
        paragraph = paragraph_style_at(result, 0)
        # margin 30 minus bullet width minus period width
        assert paragraph.first_line_head_indent == 10
        assert paragraph.head_indent == 38
        assert result.ranges_of(MarkdownKind.U_LIST) == [TextRange(0, 4)]

    def test_list_indentation_shifts_items(self, style: RenderStyle) -> None:
        indented = replace(style, list_indentation=5)
        paragraph = paragraph_style_at(render(bullets((para(Text("a")),)), indented), 0)
        assert paragraph.head_indent == 43
        assert paragraph.first_line_head_indent == 15
        assert paragraph.tab_stops == (TextTab(43),)

    def test_empty_list_and_item(self, style: RenderStyle) -> None:
        assert render(List(items=(), list_type=Ordered()), style).string == ""
        result = render(bullets(()), style)
        assert result.string == "•\t"
        assert result.ranges_of(MarkdownKind.U_LIST) == [TextRange(0, 2)]

    def test_item_content_keeps_inline_kinds(self, style: RenderStyle) -> None:
        result = render(bullets((para(Emphasis(children=(Text("a"),))),)), style)
        assert kind_at(result, 2) == MarkdownKind.ITALIC | MarkdownKind.U_LIST


class TestNestedLists:
    """Nested list layout is preserved and shifted."""

    def test_nested_list_shifted_by_rule(self, style: RenderStyle) -> None:
        inner = bullets((para(Text("b")),))
        outer = bullets((para(Text("a")), inner))
        result = render(outer, style)
        assert result.string == "•\ta\n•\tb\n"

        outer_style = paragraph_style_at(result, 2)
        inner_style = paragraph_style_at(result, 6)
        assert outer_style.head_indent == 38
        assert outer_style.first_line_head_indent == 10
        assert inner_style.head_indent == 76
        assert inner_style.first_line_head_indent == 48
        assert inner_style.tab_stops == (TextTab(76),)

    def test_nested_shift_is_rule_with_list_indentation(self, style: RenderStyle) -> None:
        indented = replace(style, list_indentation=5)
        inner = bullets((para(Text("b")),))
        standalone = paragraph_style_at(render(inner, indented), 2)
        result = render(bullets((para(Text("a")), inner)), indented)

        assert paragraph_style_at(result, 2).head_indent == 43
        nested = paragraph_style_at(result, 6)
        assert nested.head_indent == standalone.head_indent + 38 == 81
        assert nested.first_line_head_indent == standalone.first_line_head_indent + 38 == 53
        assert nested.tab_stops == (TextTab(81),)

    def test_each_level_shifts_once(self, style: RenderStyle) -> None:
        innermost = bullets((para(Text("c")),))
        middle = bullets((para(Text("b")), innermost))
        outer = bullets((para(Text("a")), middle))
        result = render(outer, style)
        assert result.string == "•\ta\n•\tb\n•\tc\n"

        assert paragraph_style_at(result, 2).head_indent == 38
        assert paragraph_style_at(result, 6).head_indent == 76
        deepest = paragraph_style_at(result, 10)
        assert deepest.head_indent == 114
        assert deepest.first_line_head_indent == 86

    def test_nested_ordered_in_unordered_kinds(self, style: RenderStyle) -> None:
        inner = ordered(1)
        outer = bullets((para(Text("a")), inner))
        result = render(outer, style)
        b_index = result.string.index("1.\t")
        assert kind_at(result, b_index + 3) == MarkdownKind.O_LIST | MarkdownKind.U_LIST
        assert kind_at(result, 2) == MarkdownKind.U_LIST

    def test_nested_list_keeps_own_margin(self, style: RenderStyle) -> None:
        inner = ordered(100)
        outer = bullets((para(Text("a")), inner))
        result = render(outer, style)
        inner_first = paragraph_style_at(result, result.string.index("1.\tx"))
        assert inner_first.head_indent == 48 + 38
        assert inner_first.first_line_head_indent == 20 + 38
