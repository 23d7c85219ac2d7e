"""Tests for the top-level API."""

from __future__ import annotations

import threading

import pytest

from markrun import (
    AttributedString,
    AttributeKey,
    Markdown,
    MarkdownKind,
    NestingDepthError,
    RenderStyle,
    TextRange,
    parse,
    render_markdown,
)
from markrun.nodes import Document, Heading


class TestRenderMarkdown:
    """Source to attributed text in one call."""

    def test_empty_source(self) -> None:
        result = render_markdown("")
        assert isinstance(result, AttributedString)
        assert result.string == ""

    def test_heading_with_strong(self) -> None:
        result = render_markdown("# Hello **World**")
        assert result.string == "Hello World\n"
        assert result.ranges_containing(MarkdownKind.BOLD) == [TextRange(6, 5)]
        assert result.ranges_containing(MarkdownKind.H1) == [TextRange(0, 11)]

    def test_mixed_document(self) -> None:
        result = render_markdown("Intro\n\n1. one\n2. two\n\n> quoted\n\n```\ncode\n```")
        assert result.string == "Intro\n1.\tone\n2.\ttwo\nquoted\ncode\n"
        assert result.ranges_containing(MarkdownKind.O_LIST) == [TextRange(6, 14)]
        assert result.ranges_containing(MarkdownKind.QUOTE) == [TextRange(20, 7)]
        assert result.ranges_of(MarkdownKind.CODE) == [TextRange(27, 5)]

    def test_link_target(self) -> None:
        result = render_markdown("see [docs](https://example.com/docs)")
        assert result.attribute(AttributeKey.LINK, 4) == ("https://example.com/docs", TextRange(4, 4))

    def test_strict_links_fall_back(self) -> None:
        result = render_markdown("[click](bad://url)", RenderStyle(render_only_valid_links=True))
        assert result.string == "[click](bad://url)\n"

    def test_depth_ceiling(self) -> None:
        with pytest.raises(NestingDepthError):
            render_markdown("> " * 30 + "deep", max_depth=10)


class TestParse:
    """Typed AST access."""

    def test_parse_returns_document(self) -> None:
        doc = parse("# Hello")
        assert isinstance(doc, Document)
        assert isinstance(doc.children[0], Heading)
        assert doc.children[0].level == 1


class TestMarkdown:
    """The reusable processor."""

    def test_call_renders(self) -> None:
        md = Markdown()
        assert md("Hello *world*").string == "Hello world\n"

    def test_custom_style(self) -> None:
        md = Markdown(style=RenderStyle(h1_size=32))
        assert md.style.h1_size == 32
        assert md("# Big").attribute(AttributeKey.FONT, 0)[0].size == 32

    def test_render_parsed_document(self) -> None:
        md = Markdown()
        assert md.render(md.parse("text")).string == "text\n"

    def test_max_depth(self) -> None:
        md = Markdown(max_depth=4)
        with pytest.raises(NestingDepthError):
            md.parse("> > > > > deep")

    def test_shared_across_threads(self) -> None:
        md = Markdown()
        source = "- a\n  - b\n- c\n\n1. x\n2. y"
        expected = md(source)
        results: list[AttributedString] = []
        lock = threading.Lock()

        def work() -> None:
            result = md(source)
            with lock:
                results.append(result)

        threads = [threading.Thread(target=work) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(results) == 8
        assert all(result == expected for result in results)
