"""Human-readable dump of a markrun AST.

Each node prints on its own newline-terminated line, indented with one tab
per depth level.
Container nodes end with `` ->`` and are followed by their children.

Example:
    >>> from markrun.nodes import Document, Paragraph, Text
    >>> print(describe(Document((Paragraph((Text("Hi"),)),))), end="")
    DOCUMENT ->
    	PARAGRAPH ->
    		TEXT: Hi

"""

from __future__ import annotations

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
    Paragraph,
    SoftBreak,
    Strong,
    Text,
    ThematicBreak,
)


def _label(node: Block | Inline) -> str:
    match node:
        case Document():
            return "DOCUMENT ->"
        case BlockQuote():
            return "BLOCK QUOTE ->"
        case List():
            return f"LIST: {node.list_type} ->"
        case ListItem():
            return f"ITEM: Prefix: {node.prefix} ->"
        case CodeBlock():
            return f"CODE BLOCK: {node.text}"
        case HtmlBlock():
            return f"HTML BLOCK: {node.text}"
        case CustomBlock():
            return f"CUSTOM BLOCK: {node.text}"
        case Paragraph():
            return "PARAGRAPH ->"
        case Heading():
            return f"H{node.level} HEADING ->"
        case ThematicBreak():
            return "THEMATIC BREAK ->"
        case Text():
            return f"TEXT: {node.text}"
        case SoftBreak():
            return "SOFT BREAK"
        case LineBreak():
            return "LINE BREAK"
        case CodeSpan():
            return f"CODE: {node.text}"
        case HtmlInline():
            return f"HTML: {node.text}"
        case CustomInline():
            return f"CUSTOM INLINE: {node.text}"
        case Emphasis():
            return "EMPHASIS ->"
        case Strong():
            return "STRONG ->"
        case Link():
            return f"LINK: Title: {node.title or 'none'}, URL: {node.url or 'none'} ->"
        case Image():
            return f"IMAGE: Title: {node.title or 'none'}, URL: {node.url or 'none'} ->"
        case _:
            raise TypeError(f"Not a markdown node: {node!r}")


def _children(node: Block | Inline) -> tuple[Block | Inline, ...]:
    match node:
        case List():
            return node.items
        case (
            Document()
            | BlockQuote()
            | ListItem()
            | Paragraph()
            | Heading()
            | Emphasis()
            | Strong()
            | Link()
            | Image()
        ):
            return node.children
        case _:
            return ()


def describe(node: Block | Inline, indent: int = 0) -> str:
    """Return the tree rooted at ``node`` as tab-indented, newline-terminated lines."""
    lines: list[str] = []
    stack: list[tuple[Block | Inline, int]] = [(node, indent)]
    while stack:
        current, depth = stack.pop()
        lines.append("\t" * depth + _label(current))
        stack.extend((child, depth + 1) for child in reversed(_children(current)))
    return "".join(f"{line}\n" for line in lines)


__all__ = ["describe"]
