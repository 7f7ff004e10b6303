"""Markdown renderer — turns a chatmark tree back into message text.

With default options, rendering a parsed canonical message reproduces it
byte for byte. ``omit_format`` strips every delimiter; ``omit_spoiler`` drops
spoiler content entirely.

The tree is walked with an explicit work stack instead of recursion, so trees
built directly (which have no nesting bound) render at any depth.

Example:
    >>> from chatmark import parse
    >>> from chatmark.renderers import MarkdownRenderer, RenderOptions
    >>> doc = parse("**bold** and ||secret||")
    >>> MarkdownRenderer().render(doc)
    '**bold** and ||secret||'
    >>> MarkdownRenderer(RenderOptions(omit_format=True, omit_spoiler=True)).render(doc)
    'bold and '

"""

from chatmark.nodes import (
    BlockQuote,
    Bold,
    Document,
    ElementCollection,
    ItalicsStar,
    ItalicsUnderscore,
    MultiLineCode,
    Node,
    OneLineCode,
    Plain,
    Spoiler,
    Strikethrough,
    Underline,
)
from chatmark.parsing.delimiters import (
    BLOCK_QUOTE_PREFIX,
    MULTI_LINE_CODE_FENCE,
    ONE_LINE_CODE_DELIMITER,
    STYLED_DELIMITERS,
)
from chatmark.renderers.options import DEFAULT_OPTIONS, RenderOptions
from chatmark.stringbuilder import StringBuilder


class _EndQuote:
    """Work-stack marker: the children of a block quote are done."""

    __slots__ = ()


_END_QUOTE = _EndQuote()


def quote_lines(text: str) -> str:
    """Prefix every line of ``text`` with ``"> "``.

    A trailing line break yields a final, empty quoted line.
    """
    return "\n".join(BLOCK_QUOTE_PREFIX + line for line in text.split("\n"))


class MarkdownRenderer:
    """Render a Document, ElementCollection or Element to chat markdown."""

    __slots__ = ("_options",)

    def __init__(self, options: RenderOptions | None = None) -> None:
        self._options = options if options is not None else DEFAULT_OPTIONS

    @property
    def options(self) -> RenderOptions:
        return self._options

    def render(self, node: Node) -> str:
        """Render ``node`` and everything below it."""
        omit_format = self._options.omit_format
        omit_spoiler = self._options.omit_spoiler

        # Block quotes render their children into a fresh builder, then
        # quote the result into the enclosing one.
        builders: list[StringBuilder] = [StringBuilder()]
        stack: list[Node | str | _EndQuote] = [node]

        while stack:
            item = stack.pop()

            if isinstance(item, str):
                builders[-1].append(item)
                continue
            if isinstance(item, _EndQuote):
                quoted = quote_lines(builders.pop().build())
                builders[-1].append(quoted)
                continue

            match item:
                case Plain():
                    builders[-1].append(item.content)
                case OneLineCode():
                    if omit_format:
                        builders[-1].append(item.content)
                    else:
                        builders[-1].append(ONE_LINE_CODE_DELIMITER).append(
                            item.content
                        ).append(ONE_LINE_CODE_DELIMITER)
                case MultiLineCode():
                    if omit_format:
                        builders[-1].append(item.content)
                    else:
                        builders[-1].append(MULTI_LINE_CODE_FENCE).append(
                            item.language or ""
                        ).append(item.content).append(MULTI_LINE_CODE_FENCE)
                case Spoiler() if omit_spoiler:
                    pass
                case BlockQuote():
                    if omit_format:
                        stack.append(item.children)
                    else:
                        stack.append(_END_QUOTE)
                        stack.append(item.children)
                        builders.append(StringBuilder())
                case (
                    ItalicsStar()
                    | ItalicsUnderscore()
                    | Bold()
                    | Underline()
                    | Strikethrough()
                    | Spoiler()
                ):
                    if omit_format:
                        stack.append(item.children)
                    else:
                        delimiter = STYLED_DELIMITERS[type(item)]
                        stack.append(delimiter)
                        stack.append(item.children)
                        stack.append(delimiter)
                case ElementCollection():
                    stack.extend(reversed(item.elements))
                case Document():
                    stack.append(item.children)
                case _:
                    raise TypeError(f"Cannot render {type(item).__name__}")

        return builders[0].build()
