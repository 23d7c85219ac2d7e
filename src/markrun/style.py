"""Render style configuration and the style resolver.

RenderStyle is an immutable configuration value. It holds the base font,
colors and paragraph layout, per-kind overrides, the list geometry settings
and the capabilities the renderer calls out to (text measurement, link
detection, link openability). There is no process-wide default instance:
construct one, or derive variants with ``dataclasses.replace``.

attributes_for() is the style resolver: a pure function from a node's own
kind to the attribute bundle the renderer applies over the node's range.

Usage:
    >>> style = RenderStyle(h1_size=32, render_only_valid_links=True)
    >>> style.header_size(1)
    32

    >>> style = RenderStyle.from_dict({"code_color": "#336699", "unknown": 1})
    >>> style.code_color
    Color(red=0.2, green=0.4, blue=0.6, alpha=1.0)

Thread Safety:
RenderStyle is frozen. The lazily computed minimum list prefix width is
guarded by a per-instance lock, so one style can be shared by concurrent
renders.

"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields
from typing import Any

from markrun.attributed import AttributeKey, Attributes
from markrun.fonts import (
    BLACK,
    DARK_GRAY,
    GRAY,
    Color,
    EstimatedFontMetrics,
    Font,
    FontMetrics,
    FontTraits,
    FontWeight,
)
from markrun.kinds import MarkdownKind, header_kind
from markrun.links import can_open_link, detect_link
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
    Ordered,
    Paragraph,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
)
from markrun.paragraph import ParagraphStyle

# Widest ordered prefix the list column always reserves room for
MIN_PREFIX_SAMPLE = "99."


def _spaced(top: float, bottom: float) -> ParagraphStyle:
    return ParagraphStyle().with_spacing(top, bottom)


@dataclass(frozen=True)
class RenderStyle:
    """Immutable render configuration.

    Attributes:
        base_font: Font of plain text
        base_color: Color of plain text, and fallback for unset colors
        base_paragraph_style: Layout of plain paragraphs
        bold_color: Color of strong text (None keeps the existing color)
        italic_color: Color of emphasized text (None keeps the existing color)
        code_font: Font of code spans and code/html/custom blocks
        code_color: Color of code (None falls back to base_color)
        header_paragraph_style: Layout of headings
        h1_color, h2_color, h3_color: Heading colors (None falls back to base_color)
        h1_size, h2_size, h3_size: Heading point sizes
        quote_color: Color of block quotes (None falls back to base_color)
        quote_paragraph_style: Layout of block quotes (None falls back to base)
        list_indentation: Indent of lists from the leading margin
        list_item_prefix_spacing: Space between a list marker and its content
        list_item_prefix_color: Color of list markers (None falls back to base_color)
        list_item_spacing: Space below each list item
        render_only_valid_links: Only style links that are detected and openable;
            render the rest as literal ``[text](url)``
        metrics: Text measurement capability
        detect_url: Finds a URL in raw link text
        can_open_url: Reports whether a URL can be opened

    """

    base_font: Font = Font("System", 17)
    base_color: Color = BLACK
    base_paragraph_style: ParagraphStyle = field(default_factory=lambda: _spaced(8, 8))

    bold_color: Color | None = None
    italic_color: Color | None = None

    code_font: Font = Font("Menlo", 17, FontTraits.MONOSPACE)
    code_color: Color | None = DARK_GRAY

    header_paragraph_style: ParagraphStyle = field(default_factory=lambda: _spaced(8, 8))
    h1_color: Color | None = None
    h1_size: float = 27
    h2_color: Color | None = None
    h2_size: float = 24
    h3_color: Color | None = None
    h3_size: float = 20

    quote_color: Color | None = GRAY
    quote_paragraph_style: ParagraphStyle | None = field(
        default_factory=lambda: ParagraphStyle().indented_by(24)
    )

    list_indentation: float = 0
    list_item_prefix_spacing: float = 8
    list_item_prefix_color: Color | None = None
    list_item_spacing: float = 8

    render_only_valid_links: bool = False

    metrics: FontMetrics = field(default_factory=EstimatedFontMetrics, compare=False)
    detect_url: Callable[[str], str | None] = field(default=detect_link, compare=False)
    can_open_url: Callable[[str], bool] = field(default=can_open_link, compare=False)

    _min_list_prefix_width: float | None = field(
        default=None, init=False, repr=False, compare=False
    )
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> RenderStyle:
        """Create a RenderStyle from a plain mapping.

        Useful when settings come from YAML/JSON. Unknown keys are ignored.
        Colors may be given as ``#rrggbb`` strings and fonts as mappings of
        Font fields.

        Raises:
            ValueError: If a color string is malformed

        """
        valid = {f.name for f in fields(cls) if f.init}
        values: dict[str, Any] = {}
        for key, value in config.items():
            if key not in valid:
                continue
            if isinstance(value, str) and (key.endswith("_color") or key == "base_color"):
                value = Color.from_hex(value)
            elif isinstance(value, Mapping) and key.endswith("_font"):
                value = _font_from_mapping(value)
            values[key] = value
        return cls(**values)

    # =========================================================================
    # Derived values
    # =========================================================================

    @property
    def list_prefix_font(self) -> Font:
        """Light monospaced-digit variant of the base font."""
        return Font(self.base_font.family, self.base_font.size, weight=FontWeight.LIGHT)

    @property
    def min_list_prefix_width(self) -> float:
        """Column width that always fits a two-digit ordered prefix.

        Computed once per style instance.
        """
        cached = self._min_list_prefix_width
        if cached is not None:
            return cached
        with self._lock:
            if self._min_list_prefix_width is None:
                object.__setattr__(
                    self, "_min_list_prefix_width", self.width_of_list_prefix(MIN_PREFIX_SAMPLE)
                )
            return self._min_list_prefix_width  # type: ignore[return-value]

    def width_of_list_prefix(self, prefix: str) -> float:
        """Width of ``prefix`` set in the list prefix font."""
        return self.metrics.width(prefix, self.list_prefix_font)

    def header_size(self, level: int) -> float:
        if level == 1:
            return self.h1_size
        if level == 2:
            return self.h2_size
        return self.h3_size

    def header_size_for(self, kind: MarkdownKind) -> float | None:
        """Heading size for an exact H1/H2/H3 kind, else None."""
        match kind:
            case MarkdownKind.H1:
                return self.h1_size
            case MarkdownKind.H2:
                return self.h2_size
            case MarkdownKind.H3:
                return self.h3_size
            case _:
                return None

    def header_color_for(self, kind: MarkdownKind) -> Color | None:
        """Configured heading color for an exact H1/H2/H3 kind, else None."""
        match kind:
            case MarkdownKind.H1:
                return self.h1_color
            case MarkdownKind.H2:
                return self.h2_color
            case MarkdownKind.H3:
                return self.h3_color
            case _:
                return None

    def list_paragraph_style(self, prefix_margin_width: float) -> ParagraphStyle:
        """Layout shared by every item of a list whose markers fit ``prefix_margin_width``.

        Item content hangs at one left tab stop placed after the marker
        column and the prefix spacing.
        """
        rule = prefix_margin_width + self.list_item_prefix_spacing
        return ParagraphStyle(paragraph_spacing=self.list_item_spacing).with_tab_stop_offset(rule)

    # =========================================================================
    # Attribute bundles
    # =========================================================================

    @property
    def default_attributes(self) -> Attributes:
        return {
            AttributeKey.MARKDOWN: MarkdownKind.NONE,
            AttributeKey.FONT: self.base_font,
            AttributeKey.FOREGROUND_COLOR: self.base_color,
            AttributeKey.PARAGRAPH_STYLE: self.base_paragraph_style,
        }

    @property
    def paragraph_attributes(self) -> Attributes:
        return {
            AttributeKey.MARKDOWN: MarkdownKind.NONE,
            AttributeKey.PARAGRAPH_STYLE: self.base_paragraph_style,
        }

    @property
    def bold_attributes(self) -> Attributes:
        return _with_color({AttributeKey.MARKDOWN: MarkdownKind.BOLD}, self.bold_color)

    @property
    def italic_attributes(self) -> Attributes:
        return _with_color({AttributeKey.MARKDOWN: MarkdownKind.ITALIC}, self.italic_color)

    @property
    def code_attributes(self) -> Attributes:
        return {
            AttributeKey.MARKDOWN: MarkdownKind.CODE,
            AttributeKey.FONT: self.code_font,
            AttributeKey.FOREGROUND_COLOR: self.code_color or self.base_color,
        }

    @property
    def quote_attributes(self) -> Attributes:
        return {
            AttributeKey.MARKDOWN: MarkdownKind.QUOTE,
            AttributeKey.FOREGROUND_COLOR: self.quote_color or self.base_color,
            AttributeKey.PARAGRAPH_STYLE: self.quote_paragraph_style or self.base_paragraph_style,
        }

    @property
    def list_prefix_attributes(self) -> Attributes:
        return {
            AttributeKey.FONT: self.list_prefix_font,
            AttributeKey.FOREGROUND_COLOR: self.list_item_prefix_color or self.base_color,
        }

    @property
    def o_list_attributes(self) -> Attributes:
        return {AttributeKey.MARKDOWN: MarkdownKind.O_LIST}

    @property
    def u_list_attributes(self) -> Attributes:
        return {AttributeKey.MARKDOWN: MarkdownKind.U_LIST}

    def heading_attributes(self, level: int) -> Attributes:
        kind = header_kind(level)
        return {
            AttributeKey.MARKDOWN: kind,
            AttributeKey.FOREGROUND_COLOR: self.header_color_for(kind) or self.base_color,
            AttributeKey.PARAGRAPH_STYLE: self.header_paragraph_style,
        }


def _with_color(attributes: dict[AttributeKey, Any], color: Color | None) -> Attributes:
    if color is not None:
        attributes[AttributeKey.FOREGROUND_COLOR] = color
    return attributes


def _font_from_mapping(value: Mapping[str, Any]) -> Font:
    traits = FontTraits.NONE
    for name in value.get("traits", ()):
        traits |= FontTraits[name.upper()]
    weight = FontWeight(value.get("weight", FontWeight.REGULAR.value))
    return Font(value["family"], value["size"], traits, weight)


def attributes_for(node: Block | Inline, style: RenderStyle) -> Attributes | None:
    """Return the attribute bundle a node applies over its own range.

    Depends only on the node's kind (and heading level or list type), never
    on its ancestors. Returns None for nodes that contribute no attributes
    of their own.

    Bold, italic and heading fonts are not part of the bundles: those are
    font transforms that compose with whatever font already occupies the
    range (see AttributedString.bolden and italicize).
    """
    match node:
        case Document() | ListItem() | ThematicBreak() | Image() | Link() | SoftBreak() | LineBreak():
            return None
        case Text() | CustomInline():
            return style.default_attributes
        case CodeSpan() | HtmlInline() | CodeBlock() | HtmlBlock() | CustomBlock():
            return style.code_attributes
        case Emphasis():
            return style.italic_attributes
        case Strong():
            return style.bold_attributes
        case BlockQuote():
            return style.quote_attributes
        case List(list_type=Ordered()):
            return style.o_list_attributes
        case List():
            return style.u_list_attributes
        case Heading():
            return style.heading_attributes(node.level)
        case Paragraph():
            return style.paragraph_attributes
        case _:
            raise TypeError(f"Not a markdown node: {node!r}")


__all__ = ["MIN_PREFIX_SAMPLE", "RenderStyle", "attributes_for"]
