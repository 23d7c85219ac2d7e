"""Attributed-text renderer for markrun.

Walks the typed AST depth-first and produces an AttributedString. Every
node renders its children first, then lays its own attribute bundle (from
markrun.style.attributes_for) over the whole range, then applies its
post-processing step: font transforms, trailing line breaks, link styling
or list geometry.

Lists:
Every item of one list shares one marker column, sized for the widest of
"99." and the last item's marker. Item content starts at a left tab stop
after that column. Nested lists keep their own layout, shifted right by
the enclosing item's tab stop.

Thread Safety:
The renderer holds only an immutable RenderStyle. Each render() call builds
fresh buffers, so one renderer may be shared across threads.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from markrun.attributed import AttributedString, AttributeKey, TextRange, join, unify_ranges
from markrun.kinds import MarkdownKind
from markrun.links import parse_url
from markrun.nodes import (
    Block,
    BlockQuote,
    CodeBlock,
    CodeSpan,
    CustomBlock,
    CustomInline,
    Document,
    Emphasis,
    Heading,
    HtmlBlock,
    HtmlInline,
    Image,
    Inline,
    LineBreak,
    Link,
    List,
    ListItem,
    ListType,
    Paragraph,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
    Unordered,
)
from markrun.paragraph import ParagraphStyle
from markrun.style import RenderStyle, attributes_for
from markrun.utils.logger import get_logger

logger = get_logger(__name__)


class AttributedRenderer:
    """Render AST nodes to AttributedString.

    Usage:
        >>> from markrun.builder import build_document
        >>> from markrun.parsing import parse
        >>> renderer = AttributedRenderer(RenderStyle())
        >>> renderer.render(build_document(parse("Hello *world*"))).string
        'Hello world\\n'

    """

    __slots__ = ("_style",)

    def __init__(self, style: RenderStyle | None = None) -> None:
        self._style = style if style is not None else RenderStyle()

    @property
    def style(self) -> RenderStyle:
        return self._style

    def render(self, node: Block | Inline) -> AttributedString | None:
        """Render ``node`` and its subtree.

        Returns None for nodes that contribute no text (thematic breaks and
        list items met outside their list).
        """
        style = self._style
        match node:
            case Document():
                return self._render_children(node.children)

            case BlockQuote():
                result = self._render_children(node.children)
                result.add_attributes(attributes_for(node, style))
                return result

            case List():
                return self._render_list(node)

            case ListItem():
                return None

            case CodeBlock() | HtmlBlock() | CustomBlock() | CodeSpan() | HtmlInline():
                return AttributedString(node.text, attributes_for(node, style))

            case CustomInline() | Text():
                return AttributedString(node.text, attributes_for(node, style))

            case Paragraph():
                result = self._render_children(node.children)
                bundle = attributes_for(node, style)
                result.add_attributes(bundle)
                result.append_break(bundle)
                return result

            case Heading():
                result = self._render_children(node.children)
                result.bolden(style.header_size(node.level))
                result.add_attributes(attributes_for(node, style))
                result.append_break()
                return result

            case ThematicBreak():
                return None

            case SoftBreak() | LineBreak():
                return AttributedString("\n")

            case Emphasis():
                result = self._render_children(node.children)
                result.add_attributes(attributes_for(node, style))
                result.italicize()
                return result

            case Strong():
                result = self._render_children(node.children)
                result.add_attributes(attributes_for(node, style))
                result.bolden()
                return result

            case Link():
                return self._render_link(node)

            case Image():
                return self._render_children(node.children)

            case _:
                raise TypeError(f"Not a markdown node: {node!r}")

    def _render_children(self, children: Iterable[Block | Inline]) -> AttributedString:
        return join(self.render(child) for child in children)

    # =========================================================================
    # Links
    # =========================================================================

    def _render_link(self, node: Link) -> AttributedString:
        style = self._style
        content = self._render_children(node.children)

        if not style.render_only_valid_links:
            url = parse_url(node.url)
            if url is not None:
                self._style_link(content, url)
            return content

        raw = node.url or ""
        detected = style.detect_url(raw) if raw else None
        if detected is not None and style.can_open_url(detected):
            self._style_link(content, detected)
            return content

        logger.debug("Rendering link %r as literal text", raw)
        return AttributedString(f"[{content.string}]({raw})", style.default_attributes)

    def _style_link(self, content: AttributedString, url: str) -> None:
        # Links replace any inner styling, including kinds
        content.set_attributes(self._style.default_attributes)
        content.set_attribute(AttributeKey.MARKDOWN, MarkdownKind.LINK)
        content.set_attribute(AttributeKey.LINK, url)

    # =========================================================================
    # Lists
    # =========================================================================

    def _render_list(self, node: List) -> AttributedString:
        if not node.items:
            return AttributedString()
        style = self._style
        prefix_margin_width = max(
            style.min_list_prefix_width,
            style.width_of_list_prefix(node.items[-1].prefix),
        )
        rule = prefix_margin_width + style.list_item_prefix_spacing
        logger.debug(
            "List of %d items: prefix margin %.2f, tab stop %.2f",
            len(node.items),
            prefix_margin_width,
            rule,
        )
        return join(
            self._render_list_item(item, node.list_type, prefix_margin_width)
            for item in node.items
        )

    def _render_list_item(
        self, item: ListItem, list_type: ListType, prefix_margin_width: float
    ) -> AttributedString:
        style = self._style
        result = AttributedString(f"{item.prefix}\t", style.list_prefix_attributes)
        result.append(self._render_children(item.children))

        paragraph_style = self._item_paragraph_style(item.prefix, list_type, prefix_margin_width)
        rule = prefix_margin_width + style.list_item_prefix_spacing

        # Nested lists already carry their own layout; keep it, shifted by one rule
        nested = unify_ranges(
            result.ranges_containing(MarkdownKind.O_LIST) + result.ranges_containing(MarkdownKind.U_LIST)
        )
        captured: list[tuple[ParagraphStyle, TextRange]] = [
            (value, span)
            for nested_range in nested
            for value, span in result.attribute_ranges(AttributeKey.PARAGRAPH_STYLE, nested_range)
        ]

        result.add_markdown_kind(list_type.markdown_kind)
        result.set_attribute(AttributeKey.PARAGRAPH_STYLE, paragraph_style)
        for value, span in captured:
            result.set_attribute(AttributeKey.PARAGRAPH_STYLE, value.indented_by(rule), span)
        return result

    def _item_paragraph_style(
        self, prefix: str, list_type: ListType, prefix_margin_width: float
    ) -> ParagraphStyle:
        style = self._style
        first_line_indent = prefix_margin_width - style.width_of_list_prefix(prefix)
        if isinstance(list_type, Unordered):
            # Bullets sit where the number would, not where its period would
            first_line_indent -= style.width_of_list_prefix(".")
        base = style.list_paragraph_style(prefix_margin_width)
        return replace(base, first_line_head_indent=first_line_indent).indented_by(
            style.list_indentation
        )


def render_attributed(node: Block | Inline, style: RenderStyle | None = None) -> AttributedString | None:
    """Render an AST node with ``style`` (default RenderStyle()).

    Example:
        >>> from markrun.nodes import Paragraph, Text
        >>> render_attributed(Paragraph((Text("Hi"),))).string
        'Hi\\n'

    """
    return AttributedRenderer(style).render(node)


__all__ = ["AttributedRenderer", "render_attributed"]
