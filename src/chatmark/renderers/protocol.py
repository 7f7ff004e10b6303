"""ASTRenderer protocol — stable interface for tree renderers.

Any renderer that implements ``render(node) -> str`` conforms to this protocol.
The built-in ``MarkdownRenderer`` is the reference implementation.

Example:
    from chatmark.renderers.protocol import ASTRenderer

    def render_reply(renderer: ASTRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from chatmark.nodes import Node


class ASTRenderer(Protocol):
    """Protocol for tree renderers."""

    def render(self, node: Node) -> str:
        """Render a Document, ElementCollection or Element to a string."""
        ...
