"""ASTRenderer protocol — stable interface for AST renderers.

Any renderer that implements ``render(node) -> AttributedString | None``
conforms to this protocol. The built-in ``AttributedRenderer`` is the
reference implementation.

Example:
    from markrun.renderers.protocol import ASTRenderer

    def render_page(renderer: ASTRenderer, doc: Document) -> AttributedString:
        return renderer.render(doc) or AttributedString()

"""

from typing import Protocol

from markrun.attributed import AttributedString
from markrun.nodes import Block, Inline


class ASTRenderer(Protocol):
    """Protocol for AST renderers.

    Implementations accept any Block or Inline node and return the styled
    text it contributes, or None when it contributes nothing.

    """

    def render(self, node: Block | Inline) -> AttributedString | None:
        """Render a node and its subtree.

        Args:
            node: The AST node to render.

        Returns:
            Styled text, or None for nodes that produce no text.

        """
        ...
