"""Extract plain text from chatmark nodes.

Flattens a tree depth-first: Plain text and verbatim code content are kept in
order, every delimiter is discarded. Spoiler content is kept unless
explicitly dropped. Used for search and indexing of chat messages.

Example:
    >>> from chatmark import parse
    >>> from chatmark.text import extract_text
    >>> extract_text(parse("**bold** and _it_"))
    'bold and it'
"""

from chatmark.nodes import Node
from chatmark.renderers.markdown import MarkdownRenderer
from chatmark.renderers.options import PLAIN_OPTIONS, RenderOptions

_PLAIN_RENDERER = MarkdownRenderer(PLAIN_OPTIONS)
_PLAIN_NO_SPOILER_RENDERER = MarkdownRenderer(
    RenderOptions(omit_format=True, omit_spoiler=True)
)


def extract_text(node: Node, *, omit_spoiler: bool = False) -> str:
    """Extract plain text from any node.

    Args:
        node: Document, ElementCollection or Element.
        omit_spoiler: Drop the content of spoilers instead of keeping it.

    Returns:
        Concatenated text of the node and its descendants.

    """
    renderer = _PLAIN_NO_SPOILER_RENDERER if omit_spoiler else _PLAIN_RENDERER
    return renderer.render(node)
