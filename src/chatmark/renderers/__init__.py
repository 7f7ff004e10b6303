"""chatmark renderers.

Renderers turn document trees back into text.

Available Renderers:
- MarkdownRenderer: chat markdown, optionally stripped of formatting
  and/or spoilers (see RenderOptions)

Thread Safety:
Renderers hold only immutable options and use a StringBuilder local to each
render() call. Safe for concurrent use from multiple threads.

"""

from chatmark.renderers.markdown import MarkdownRenderer
from chatmark.renderers.options import RenderOptions
from chatmark.renderers.protocol import ASTRenderer

__all__ = ["ASTRenderer", "MarkdownRenderer", "RenderOptions"]
