"""markrun renderers.

Renderers convert typed AST nodes into styled text.

Available Renderers:
- AttributedRenderer: Renders AST to an AttributedString using a RenderStyle

Thread Safety:
Renderers hold only an immutable RenderStyle and build a fresh buffer per
render() call. Safe for concurrent use from multiple threads.

"""

from markrun.renderers.attributed import AttributedRenderer, render_attributed
from markrun.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "AttributedRenderer", "render_attributed"]
