"""
markrun — Markdown to attributed text

Renders a Markdown document into an AttributedString: text runs carrying
fonts, colors, paragraph layout and link targets, plus markdown-kind flags
(bold, italic, code, heading level, list, quote, link) that consumers use
for hit-testing and semantic queries.

Quick Start:
    >>> from markrun import render_markdown
    >>> text = render_markdown("# Hello **World**")
    >>> text.string
    'Hello World\\n'
    >>> text.ranges_containing(MarkdownKind.BOLD)
    [TextRange(location=6, length=5)]

    >>> # Or use the high-level Markdown class
    >>> from markrun import Markdown, RenderStyle
    >>> md = Markdown(style=RenderStyle(h1_size=32))
    >>> text = md("1. one\\n2. two")

Bring Your Own Parser:
    Any CommonMark parser can feed markrun by producing a ParseNode tree:
    >>> from markrun import build_document, render_attributed
    >>> render_attributed(build_document(my_parse_tree))

Installation:
    pip install markrun              # markdown-it-py is the only dependency
"""

from markrun.attributed import AttributedString, AttributeKey, Attributes, TextRange, join, unify_ranges
from markrun.builder import TreeBuilder, build_block, build_document, build_inline
from markrun.description import describe
from markrun.errors import (
    ASTConstructionError,
    MarkrunError,
    NestingDepthError,
    OrphanListItemError,
    ParseTreeError,
    UnknownNodeTypeError,
)
from markrun.fonts import Color, EstimatedFontMetrics, Font, FontMetrics, FontTraits, FontWeight
from markrun.kinds import MarkdownKind
from markrun.links import can_open_link, detect_link, parse_url
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
    Ordered,
    Paragraph,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
    Unordered,
)
from markrun.paragraph import LineBreakMode, ParagraphStyle, TextAlignment, TextTab
from markrun.parse_tree import ListKind, NodeType, ParseNode
from markrun.parsing import create_parser, from_syntax_tree
from markrun.parsing import parse as parse_to_tree
from markrun.renderers.attributed import AttributedRenderer, render_attributed
from markrun.renderers.protocol import ASTRenderer
from markrun.style import RenderStyle, attributes_for

__version__ = "0.1.0"


def parse(source: str, *, max_depth: int | None = None) -> Document:
    """Parse Markdown source into a typed AST.

    Args:
        source: Markdown source text
        max_depth: Optional nesting ceiling for the AST conversion

    Returns:
        Document AST root node

    Raises:
        ParseTreeError: If the parser produced an unsupported node type
        ASTConstructionError: If the tree violates the node contract

    Example:
        >>> doc = parse("# Hello")
        >>> doc.children[0].level
        1

    """
    return build_document(parse_to_tree(source), max_depth=max_depth)


def render_markdown(
    source: str,
    style: RenderStyle | None = None,
    *,
    max_depth: int | None = None,
) -> AttributedString:
    """Parse and render Markdown source to an AttributedString.

    Args:
        source: Markdown source text
        style: Render configuration (default RenderStyle())
        max_depth: Optional nesting ceiling for the AST conversion

    Returns:
        The styled text; empty for an empty document

    """
    return render_attributed(parse(source, max_depth=max_depth), style) or AttributedString()


class Markdown:
    """High-level Markdown to attributed text processor.

    Usage:
        >>> md = Markdown()
        >>> md("Hello *world*").string
        'Hello world\\n'

        >>> # Access the AST
        >>> doc = md.parse("# Heading")
        >>> print(doc.children[0].level)
        1

    Thread Safety:
        Holds only an immutable style and a stateless renderer. Safe to
        share across threads.

    """

    __slots__ = ("_max_depth", "_renderer")

    def __init__(self, *, style: RenderStyle | None = None, max_depth: int | None = None) -> None:
        self._renderer = AttributedRenderer(style)
        self._max_depth = max_depth

    @property
    def style(self) -> RenderStyle:
        return self._renderer.style

    def __call__(self, source: str) -> AttributedString:
        """Parse and render Markdown source."""
        return self.render(self.parse(source))

    def parse(self, source: str) -> Document:
        """Parse Markdown source into a typed AST."""
        return parse(source, max_depth=self._max_depth)

    def render(self, doc: Document) -> AttributedString:
        """Render a Document AST."""
        return self._renderer.render(doc) or AttributedString()


__all__ = [
    # Errors
    "ASTConstructionError",
    "MarkrunError",
    "NestingDepthError",
    "OrphanListItemError",
    "ParseTreeError",
    "UnknownNodeTypeError",
    # Rendering
    "ASTRenderer",
    "AttributedRenderer",
    "Markdown",
    "RenderStyle",
    "attributes_for",
    "render_attributed",
    "render_markdown",
    # Attributed text
    "AttributeKey",
    "AttributedString",
    "Attributes",
    "MarkdownKind",
    "TextRange",
    "join",
    "unify_ranges",
    # Typography
    "Color",
    "EstimatedFontMetrics",
    "Font",
    "FontMetrics",
    "FontTraits",
    "FontWeight",
    "LineBreakMode",
    "ParagraphStyle",
    "TextAlignment",
    "TextTab",
    # Links
    "can_open_link",
    "detect_link",
    "parse_url",
    # Parsing
    "ListKind",
    "NodeType",
    "ParseNode",
    "TreeBuilder",
    "build_block",
    "build_document",
    "build_inline",
    "from_syntax_tree",
    "parse",
    "parse_to_tree",
    "create_parser",
    # Nodes
    "Block",
    "BlockQuote",
    "CodeBlock",
    "CodeSpan",
    "CustomBlock",
    "CustomInline",
    "Document",
    "Emphasis",
    "Heading",
    "HtmlBlock",
    "HtmlInline",
    "Image",
    "Inline",
    "LineBreak",
    "Link",
    "List",
    "ListItem",
    "ListType",
    "Ordered",
    "Paragraph",
    "SoftBreak",
    "Strong",
    "Text",
    "ThematicBreak",
    "Unordered",
    # Diagnostics
    "describe",
    "__version__",
]
