"""Generic parse tree produced by a CommonMark parser.

This is the contract between markrun and whichever CommonMark parser sits in
front of it. The vocabulary mirrors cmark's node types: every node has a
type tag, optional literal text and ordered children; list nodes also carry
their kind and start index.

Thread Safety:
ParseNode is frozen (immutable) and safe to share across threads.

Example:
    >>> tree = ParseNode(
    ...     NodeType.DOCUMENT,
    ...     children=(
    ...         ParseNode(NodeType.PARAGRAPH, children=(
    ...             ParseNode(NodeType.TEXT, literal="Hello"),
    ...         )),
    ...     ),
    ... )
    >>> tree.children[0].children[0].literal
    'Hello'

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NodeType(Enum):
    """Closed vocabulary of parse node types.

    Block types come first, inline types second, matching cmark's ordering.

    """

    # Block nodes
    DOCUMENT = "document"
    BLOCK_QUOTE = "block_quote"
    LIST = "list"
    ITEM = "item"
    CODE_BLOCK = "code_block"
    HTML_BLOCK = "html_block"
    CUSTOM_BLOCK = "custom_block"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    THEMATIC_BREAK = "thematic_break"

    # Inline nodes
    TEXT = "text"
    SOFTBREAK = "softbreak"
    LINEBREAK = "linebreak"
    CODE = "code"
    HTML_INLINE = "html_inline"
    CUSTOM_INLINE = "custom_inline"
    EMPH = "emph"
    STRONG = "strong"
    LINK = "link"
    IMAGE = "image"


class ListKind(Enum):
    """Kind of a list node."""

    BULLET = "bullet"
    ORDERED = "ordered"


@dataclass(frozen=True, slots=True)
class ParseNode:
    """One node of the generic parse tree.

    Attributes:
        type: Node type tag
        literal: Literal text for leaf nodes (text, code, html, custom)
        children: Ordered child nodes
        list_kind: Bullet or ordered (list nodes only)
        list_start: First number of an ordered list
        heading_level: Heading level 1-6 (heading nodes only)
        url: Destination of links and images
        title: Title of links and images

    """

    type: NodeType
    literal: str | None = None
    children: tuple[ParseNode, ...] = ()
    list_kind: ListKind | None = None
    list_start: int = 1
    heading_level: int = 0
    url: str | None = None
    title: str | None = None


__all__ = ["ListKind", "NodeType", "ParseNode"]
