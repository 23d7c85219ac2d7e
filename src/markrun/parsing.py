"""CommonMark parsing via markdown-it-py.

Adapts markdown-it-py's SyntaxTreeNode tree to the generic ParseNode tree
that markrun.builder consumes. markdown-it wraps the inline content of
paragraphs and headings in an ``inline`` node; the adapter flattens it so
inline nodes become direct children, as in cmark.

Example:
    >>> tree = parse("# Title")
    >>> tree.children[0].type, tree.children[0].heading_level
    (<NodeType.HEADING: 'heading'>, 1)

"""

from __future__ import annotations

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from markrun.errors import ParseTreeError
from markrun.parse_tree import ListKind, NodeType, ParseNode

# markdown-it node types that map one-to-one and carry no metadata
_CONTAINER_TYPES: dict[str, NodeType] = {
    "root": NodeType.DOCUMENT,
    "blockquote": NodeType.BLOCK_QUOTE,
    "list_item": NodeType.ITEM,
    "paragraph": NodeType.PARAGRAPH,
    "em": NodeType.EMPH,
    "strong": NodeType.STRONG,
}

_LITERAL_TYPES: dict[str, NodeType] = {
    "code_block": NodeType.CODE_BLOCK,
    "fence": NodeType.CODE_BLOCK,
    "html_block": NodeType.HTML_BLOCK,
    "text": NodeType.TEXT,
    "code_inline": NodeType.CODE,
    "html_inline": NodeType.HTML_INLINE,
}

_EMPTY_TYPES: dict[str, NodeType] = {
    "hr": NodeType.THEMATIC_BREAK,
    "softbreak": NodeType.SOFTBREAK,
    "hardbreak": NodeType.LINEBREAK,
}


def create_parser() -> MarkdownIt:
    """Return a strict CommonMark markdown-it parser."""
    return MarkdownIt("commonmark")


def _children(node: SyntaxTreeNode) -> tuple[ParseNode, ...]:
    converted: list[ParseNode] = []
    for child in node.children:
        if child.type == "inline":
            converted.extend(_children(child))
        else:
            converted.append(from_syntax_tree(child))
    return tuple(converted)


def _optional_attr(node: SyntaxTreeNode, name: str) -> str | None:
    value = node.attrs.get(name)
    return None if value is None else str(value)


def from_syntax_tree(node: SyntaxTreeNode) -> ParseNode:
    """Convert a markdown-it SyntaxTreeNode (and its subtree) to a ParseNode.

    Raises:
        ParseTreeError: If the tree contains a node type markrun has no
            counterpart for (e.g. from a plugin such as tables)

    """
    node_type = node.type
    if node_type in _CONTAINER_TYPES:
        return ParseNode(_CONTAINER_TYPES[node_type], children=_children(node))
    if node_type in _LITERAL_TYPES:
        return ParseNode(_LITERAL_TYPES[node_type], literal=node.content)
    if node_type in _EMPTY_TYPES:
        return ParseNode(_EMPTY_TYPES[node_type])

    match node_type:
        case "bullet_list":
            return ParseNode(NodeType.LIST, children=_children(node), list_kind=ListKind.BULLET)
        case "ordered_list":
            start = int(node.attrs.get("start", 1))
            return ParseNode(
                NodeType.LIST,
                children=_children(node),
                list_kind=ListKind.ORDERED,
                list_start=start,
            )
        case "heading":
            return ParseNode(
                NodeType.HEADING,
                children=_children(node),
                heading_level=int(node.tag[1:]),
            )
        case "link":
            return ParseNode(
                NodeType.LINK,
                children=_children(node),
                url=_optional_attr(node, "href"),
                title=_optional_attr(node, "title"),
            )
        case "image":
            # Alt text arrives as the image's inline children
            return ParseNode(
                NodeType.IMAGE,
                children=_children(node),
                url=_optional_attr(node, "src"),
                title=_optional_attr(node, "title"),
            )
        case _:
            raise ParseTreeError(node_type)


def parse(source: str, *, md: MarkdownIt | None = None) -> ParseNode:
    """Parse Markdown source into a generic parse tree.

    Args:
        source: Markdown text
        md: Parser to use (default: CommonMark preset). Plugins whose node
            types markrun does not know will make conversion fail.

    Returns:
        DOCUMENT ParseNode

    Raises:
        ParseTreeError: On node types outside the supported vocabulary

    """
    parser = md if md is not None else create_parser()
    return from_syntax_tree(SyntaxTreeNode(parser.parse(source)))


__all__ = ["create_parser", "from_syntax_tree", "parse"]
