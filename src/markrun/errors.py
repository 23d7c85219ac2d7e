"""Exception classes for markrun.

Provides standardized exceptions for error handling throughout markrun.

Only contract violations are raised. An invalid or unopenable link target is
not an error: the renderer degrades it to literal text instead.
"""

from __future__ import annotations


class MarkrunError(Exception):
    """Base exception for all markrun errors.

    Subclass this for specific error categories.
    """

    pass


class ASTConstructionError(MarkrunError):
    """Error while converting a parse tree into Block/Inline nodes.

    Indicates the parser collaborator broke its node vocabulary contract.
    Construction is aborted rather than silently dropping content.
    """

    pass


class UnknownNodeTypeError(ASTConstructionError):
    """A parse node's type tag has no Block or Inline counterpart."""

    def __init__(self, node_type: object, context: str) -> None:
        """Initialize unknown node error.

        Args:
            node_type: The offending type tag
            context: Where it was met ("block" or "inline")
        """
        self.node_type = node_type
        self.context = context
        super().__init__(f"Unknown {context} node: {node_type}")


class OrphanListItemError(ASTConstructionError):
    """A list item node appeared outside its parent list."""

    def __init__(self) -> None:
        super().__init__("List item nodes can only be built by their parent list")


class NestingDepthError(ASTConstructionError):
    """The parse tree nests deeper than the configured ceiling."""

    def __init__(self, max_depth: int) -> None:
        """Initialize nesting depth error.

        Args:
            max_depth: The ceiling that was exceeded
        """
        self.max_depth = max_depth
        super().__init__(f"Parse tree exceeds maximum nesting depth of {max_depth}")


class ParseTreeError(MarkrunError):
    """Error while adapting a third-party parse tree.

    Raised when the CommonMark parser produces a node type outside the
    generic parse tree vocabulary.
    """

    def __init__(self, node_type: str) -> None:
        self.node_type = node_type
        super().__init__(f"Unsupported parser node type: {node_type!r}")
