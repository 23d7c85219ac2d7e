"""Typed AST nodes for markrun.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements over the closed Block/Inline unions

Node Hierarchy:
Node (base)
├── Block (block-level elements)
│   ├── Document
│   ├── BlockQuote
│   ├── List
│   ├── ListItem
│   ├── CodeBlock
│   ├── HtmlBlock
│   ├── CustomBlock
│   ├── Paragraph
│   ├── Heading
│   └── ThematicBreak
└── Inline (inline elements)
    ├── Text
    ├── SoftBreak
    ├── LineBreak
    ├── CodeSpan
    ├── HtmlInline
    ├── CustomInline
    ├── Emphasis
    ├── Strong
    ├── Link
    └── Image

Nodes are built once by markrun.builder and never mutated. Each node is
owned by exactly one parent through a tuple of children.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from markrun.kinds import MarkdownKind

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes."""


# =============================================================================
# List Types
# =============================================================================


@dataclass(frozen=True, slots=True)
class Ordered:
    """Numbered list starting at ``start``."""

    start: int = 1

    def prefix(self, item_index: int) -> str:
        """Return the marker for the item at the zero-based index."""
        return f"{self.start + item_index}."

    @property
    def markdown_kind(self) -> MarkdownKind:
        return MarkdownKind.O_LIST

    def __str__(self) -> str:
        return f"Ordered: Start: {self.start}"


@dataclass(frozen=True, slots=True)
class Unordered:
    """Bulleted list."""

    def prefix(self, item_index: int) -> str:
        """Return the marker for the item at the zero-based index."""
        return "•"

    @property
    def markdown_kind(self) -> MarkdownKind:
        return MarkdownKind.U_LIST

    def __str__(self) -> str:
        return "Unordered"


ListType: TypeAlias = Ordered | Unordered


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text content."""

    text: str


@dataclass(frozen=True, slots=True)
class SoftBreak(Node):
    """Soft line break (single newline in paragraph)."""


@dataclass(frozen=True, slots=True)
class LineBreak(Node):
    """Hard line break.

    Markdown: ``\\`` at end of line or two trailing spaces

    """


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code.

    Markdown: `code`

    """

    text: str


@dataclass(frozen=True, slots=True)
class HtmlInline(Node):
    """Inline raw HTML, rendered as code."""

    text: str


@dataclass(frozen=True, slots=True)
class CustomInline(Node):
    """Inline content from a parser extension."""

    text: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Emphasized (italic) text.

    Markdown: *text* or _text_

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Strong (bold) text.

    Markdown: **text** or __text__

    """

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [text](url "title")

    """

    children: tuple[Inline, ...]
    title: str | None = None
    url: str | None = None


@dataclass(frozen=True, slots=True)
class Image(Node):
    """Image. Only its alt text (the children) is rendered.

    Markdown: ![alt](url "title")

    """

    children: tuple[Inline, ...]
    title: str | None = None
    url: str | None = None


Inline: TypeAlias = (
    Text
    | SoftBreak
    | LineBreak
    | CodeSpan
    | HtmlInline
    | CustomInline
    | Emphasis
    | Strong
    | Link
    | Image
)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root document node."""

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Block quote.

    Markdown: > quoted text

    """

    children: tuple[Block, ...]


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item with its marker already computed.

    The prefix is bound by the parent list at construction time, since an
    item has no valid rendering outside its list.

    """

    children: tuple[Block, ...]
    prefix: str


@dataclass(frozen=True, slots=True)
class List(Node):
    """Ordered or unordered list."""

    items: tuple[ListItem, ...]
    list_type: ListType


@dataclass(frozen=True, slots=True)
class CodeBlock(Node):
    """Fenced or indented code block."""

    text: str


@dataclass(frozen=True, slots=True)
class HtmlBlock(Node):
    """Raw HTML block, rendered as code."""

    text: str


@dataclass(frozen=True, slots=True)
class CustomBlock(Node):
    """Block content from a parser extension, rendered as code."""

    text: str


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """Paragraph block."""

    children: tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX or setext heading.

    Levels above 3 keep their value but are styled as level 3.

    """

    children: tuple[Inline, ...]
    level: int


@dataclass(frozen=True, slots=True)
class ThematicBreak(Node):
    """Thematic break (horizontal rule). Renders no text."""


Block: TypeAlias = (
    Document
    | BlockQuote
    | List
    | ListItem
    | CodeBlock
    | HtmlBlock
    | CustomBlock
    | Paragraph
    | Heading
    | ThematicBreak
)
