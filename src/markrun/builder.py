"""Build typed AST nodes from a generic parse tree.

Converts ParseNode trees into the closed Block/Inline unions of
markrun.nodes. The parser's node vocabulary is a closed contract, so an
unknown type tag is a fatal ASTConstructionError instead of a skipped node.

Lists are special-cased: their items are converted here, with each item's
marker computed from the list type and the item's index. A list item met
anywhere else is an OrphanListItemError.

Example:
    >>> from markrun.parse_tree import ParseNode, NodeType
    >>> tree = ParseNode(NodeType.DOCUMENT, children=(
    ...     ParseNode(NodeType.PARAGRAPH, children=(
    ...         ParseNode(NodeType.TEXT, literal="Hi"),
    ...     )),
    ... ))
    >>> build_document(tree)
    Document(children=(Paragraph(children=(Text(text='Hi'),)),))

Thread Safety:
All functions are pure. Safe to call from any thread.

"""

from markrun.errors import NestingDepthError, OrphanListItemError, UnknownNodeTypeError
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
from markrun.parse_tree import ListKind, NodeType, ParseNode


def list_type_for(node: ParseNode) -> ListType:
    """Return the list type described by a list node's metadata."""
    if node.list_kind is ListKind.ORDERED:
        return Ordered(start=node.list_start)
    return Unordered()


class TreeBuilder:
    """Depth-first converter from ParseNode to Block/Inline.

    Args:
        max_depth: Optional nesting ceiling. Trees deeper than this raise
            NestingDepthError before any recursion limit is reached.

    """

    __slots__ = ("_max_depth",)

    def __init__(self, *, max_depth: int | None = None) -> None:
        self._max_depth = max_depth

    def build_document(self, node: ParseNode) -> Document:
        """Build the root Document. A non-document root is wrapped."""
        block = self.build_block(node)
        if isinstance(block, Document):
            return block
        return Document(children=(block,))

    def build_block(self, node: ParseNode, depth: int = 0) -> Block:
        """Convert a block-level parse node."""
        self._check_depth(depth)
        match node.type:
            case NodeType.DOCUMENT:
                return Document(children=self._blocks(node, depth))
            case NodeType.BLOCK_QUOTE:
                return BlockQuote(children=self._blocks(node, depth))
            case NodeType.LIST:
                return self._build_list(node, depth)
            case NodeType.ITEM:
                raise OrphanListItemError()
            case NodeType.CODE_BLOCK:
                return CodeBlock(text=node.literal or "")
            case NodeType.HTML_BLOCK:
                return HtmlBlock(text=node.literal or "")
            case NodeType.CUSTOM_BLOCK:
                return CustomBlock(text=node.literal or "")
            case NodeType.PARAGRAPH:
                return Paragraph(children=self._inlines(node, depth))
            case NodeType.HEADING:
                return Heading(children=self._inlines(node, depth), level=node.heading_level)
            case NodeType.THEMATIC_BREAK:
                return ThematicBreak()
            case _:
                raise UnknownNodeTypeError(node.type, "block")

    def build_inline(self, node: ParseNode, depth: int = 0) -> Inline:
        """Convert an inline-level parse node."""
        self._check_depth(depth)
        match node.type:
            case NodeType.TEXT:
                return Text(text=node.literal or "")
            case NodeType.SOFTBREAK:
                return SoftBreak()
            case NodeType.LINEBREAK:
                return LineBreak()
            case NodeType.CODE:
                return CodeSpan(text=node.literal or "")
            case NodeType.HTML_INLINE:
                return HtmlInline(text=node.literal or "")
            case NodeType.CUSTOM_INLINE:
                return CustomInline(text=node.literal or "")
            case NodeType.EMPH:
                return Emphasis(children=self._inlines(node, depth))
            case NodeType.STRONG:
                return Strong(children=self._inlines(node, depth))
            case NodeType.LINK:
                return Link(children=self._inlines(node, depth), title=node.title, url=node.url)
            case NodeType.IMAGE:
                return Image(children=self._inlines(node, depth), title=node.title, url=node.url)
            case _:
                raise UnknownNodeTypeError(node.type, "inline")

    def _build_list(self, node: ParseNode, depth: int) -> List:
        """Convert a list, binding each item's prefix before recursing."""
        list_type = list_type_for(node)
        items: list[ListItem] = []
        for index, item in enumerate(node.children):
            if item.type is not NodeType.ITEM:
                raise UnknownNodeTypeError(item.type, "list item")
            self._check_depth(depth + 1)
            children = tuple(self.build_block(child, depth + 2) for child in item.children)
            items.append(ListItem(children=children, prefix=list_type.prefix(index)))
        return List(items=tuple(items), list_type=list_type)

    def _blocks(self, node: ParseNode, depth: int) -> tuple[Block, ...]:
        return tuple(self.build_block(child, depth + 1) for child in node.children)

    def _inlines(self, node: ParseNode, depth: int) -> tuple[Inline, ...]:
        return tuple(self.build_inline(child, depth + 1) for child in node.children)

    def _check_depth(self, depth: int) -> None:
        if self._max_depth is not None and depth > self._max_depth:
            raise NestingDepthError(self._max_depth)


def build_document(node: ParseNode, *, max_depth: int | None = None) -> Document:
    """Build a Document from the root of a parse tree.

    Args:
        node: Parse tree root (normally a DOCUMENT node)
        max_depth: Optional nesting ceiling

    Returns:
        Document AST root

    Raises:
        ASTConstructionError: On unknown node types, orphan list items or
            trees deeper than max_depth

    """
    return TreeBuilder(max_depth=max_depth).build_document(node)


def build_block(node: ParseNode, *, max_depth: int | None = None) -> Block:
    """Convert a single block-level parse node (and its subtree)."""
    return TreeBuilder(max_depth=max_depth).build_block(node)


def build_inline(node: ParseNode, *, max_depth: int | None = None) -> Inline:
    """Convert a single inline-level parse node (and its subtree)."""
    return TreeBuilder(max_depth=max_depth).build_inline(node)


__all__ = ["TreeBuilder", "build_block", "build_document", "build_inline", "list_type_for"]
