"""Typed document tree for chatmark.

All nodes are frozen dataclasses with slots for:
- Structural equality: two trees are equal when their shapes and text match
- Immutability: safe sharing across threads
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── Document             root, owns one ElementCollection
├── ElementCollection    ordered sequence of elements
└── Element (union)
    ├── Plain            raw text leaf
    ├── ItalicsStar      *text*
    ├── ItalicsUnderscore _text_
    ├── Bold             **text**
    ├── Underline        __text__
    ├── Strikethrough    ~~text~~
    ├── Spoiler          ||text||
    ├── OneLineCode      `code` (verbatim leaf)
    ├── MultiLineCode    ```lang\\ncode``` (verbatim leaf)
    └── BlockQuote       > text (never produced by the parser)

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from chatmark.renderers.options import RenderOptions

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all tree nodes.

    Rendering helpers live here so that a Document, an ElementCollection and
    a single Element can all be rendered the same way.

    """

    def child_nodes(self) -> tuple[Node, ...]:
        """Direct children of this node, in document order."""
        children = getattr(self, "children", None)
        return (children,) if children is not None else ()

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants depth-first, in document order."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.child_nodes()))

    def render_markdown(self, options: RenderOptions | None = None) -> str:
        """Render back to chat markdown.

        Args:
            options: Render options (defaults keep all delimiters and spoilers)

        Returns:
            Markdown text

        """
        from chatmark.renderers.markdown import MarkdownRenderer

        return MarkdownRenderer(options).render(self)

    def render_plain(self) -> str:
        """Render with every delimiter stripped, keeping spoiler text."""
        from chatmark.text import extract_text

        return extract_text(self)

    def __str__(self) -> str:
        return self.render_markdown()


# =============================================================================
# Collections
# =============================================================================


@dataclass(frozen=True, slots=True)
class ElementCollection(Node):
    """Ordered sequence of elements.

    Concatenation order is rendering order. Parsed collections are never empty
    except for the content of a Document parsed from empty input.

    """

    elements: tuple[Element, ...] = ()

    def child_nodes(self) -> tuple[Node, ...]:
        return self.elements

    def __iter__(self) -> Iterator[Element]:
        return iter(self.elements)

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, index: int) -> Element:
        return self.elements[index]


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node.

    Owns exactly one ElementCollection.

    """

    children: ElementCollection = ElementCollection()

    def to_plain_text(self) -> str:
        """Plain text of the whole document (alias of render_plain)."""
        return self.render_plain()


# =============================================================================
# Leaf Elements
# =============================================================================


@dataclass(frozen=True, slots=True)
class Plain(Node):
    """Unstyled text, rendered as-is in every mode."""

    content: str


@dataclass(frozen=True, slots=True)
class OneLineCode(Node):
    """Inline code.

    Markdown: `code`

    Content is stored verbatim, delimiters inside it are never parsed.

    """

    content: str


@dataclass(frozen=True, slots=True)
class MultiLineCode(Node):
    """Fenced code block.

    Markdown: ```lang\\ncode```

    When a language tag is present the content starts with the line break
    that followed the tag.

    """

    content: str
    language: str | None = None


# =============================================================================
# Styled Elements
# =============================================================================


@dataclass(frozen=True, slots=True)
class ItalicsStar(Node):
    """Italics written with stars.

    Markdown: *text*

    """

    children: ElementCollection


@dataclass(frozen=True, slots=True)
class ItalicsUnderscore(Node):
    """Italics written with underscores.

    Markdown: _text_

    """

    children: ElementCollection


@dataclass(frozen=True, slots=True)
class Bold(Node):
    """Bold text.

    Markdown: **text**

    """

    children: ElementCollection


@dataclass(frozen=True, slots=True)
class Underline(Node):
    """Underlined text.

    Markdown: __text__

    """

    children: ElementCollection


@dataclass(frozen=True, slots=True)
class Strikethrough(Node):
    """Struck-through text.

    Markdown: ~~text~~

    """

    children: ElementCollection


@dataclass(frozen=True, slots=True)
class Spoiler(Node):
    """Hidden text, revealed on click by chat clients.

    Markdown: ||text||

    """

    children: ElementCollection


@dataclass(frozen=True, slots=True)
class BlockQuote(Node):
    """Block quote.

    Markdown: > text (every line prefixed)

    Representable and renderable, but the parser never produces it:
    ``> `` in a message is plain text.

    """

    children: ElementCollection


# Type alias for the closed set of elements
Element: TypeAlias = (
    Plain
    | ItalicsStar
    | ItalicsUnderscore
    | Bold
    | Underline
    | Strikethrough
    | Spoiler
    | OneLineCode
    | MultiLineCode
    | BlockQuote
)

ELEMENT_TYPES: tuple[type[Node], ...] = (
    Plain,
    ItalicsStar,
    ItalicsUnderscore,
    Bold,
    Underline,
    Strikethrough,
    Spoiler,
    OneLineCode,
    MultiLineCode,
    BlockQuote,
)
