"""
chatmark — Parser and serializer for chat-message markdown

Converts messages written in the inline markdown dialect used by chat clients
(``*italics*``, ``_italics_``, ``**bold**``, ``__underline__``,
``~~strikethrough~~``, ``||spoiler||``, `` `code` `` and fenced code blocks)
into an immutable document tree, and renders trees back to text.

Parsing is total: every string parses, nothing raises, all input is consumed.
Rendering a parsed canonical message reproduces it exactly.

Quick Start:
    >>> from chatmark import parse
    >>> doc = parse("__*nested* styles__")
    >>> doc.render_markdown()
    '__*nested* styles__'
    >>> doc.render_plain()
    'nested styles'

    >>> from chatmark import RenderOptions, render
    >>> render(parse("a ||secret||"), RenderOptions(omit_spoiler=True))
    'a '

Building trees by hand:
    >>> from chatmark.builder import bold, document, plain
    >>> str(document([bold("bold"), plain(" text")]))
    '**bold** text'
"""

from chatmark.cache import DictParseCache, ParseCache, hash_config, hash_content
from chatmark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from chatmark.errors import (
    ChatmarkError,
    ConfigError,
    DeserializationError,
    NodeConstructionError,
)
from chatmark.nodes import (
    BlockQuote,
    Bold,
    Document,
    Element,
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
from chatmark.parser import Parser
from chatmark.renderers.markdown import MarkdownRenderer
from chatmark.renderers.options import RenderOptions
from chatmark.renderers.protocol import ASTRenderer
from chatmark.serialization import from_dict, from_json, to_dict, to_json
from chatmark.text import extract_text
from chatmark.utils.logger import get_logger
from chatmark.visitor import BaseVisitor, transform

__version__ = "0.1.0"

logger = get_logger(__name__)


def parse(
    source: str,
    *,
    max_nesting_depth: int | None = None,
    cache: ParseCache | None = None,
) -> Document:
    """Parse a chat message into a Document.

    Never raises for string input and always consumes the whole message.

    Args:
        source: Message text
        max_nesting_depth: Override the active config's nesting bound for
            this call (uses the ContextVar config if None)
        cache: Optional content-addressed parse cache. When provided, checks
            the cache before parsing; on miss, parses and stores the result.

    Returns:
        Document root node

    Example:
        >>> parse("**")
        Document(children=ElementCollection(elements=(Plain(content='**'),)))
    """
    config = get_parse_config()
    if max_nesting_depth is not None:
        config = ParseConfig(max_nesting_depth=max_nesting_depth)

    if cache is None:
        return Parser(source, config).parse()

    content_hash = hash_content(source)
    config_hash = hash_config(config)
    cached = cache.get(content_hash, config_hash)
    if cached is not None:
        logger.debug("Parse cache hit for %s", content_hash[:12])
        return cached

    doc = Parser(source, config).parse()
    cache.put(content_hash, config_hash, doc)
    return doc


def render(node: Node, options: RenderOptions | None = None) -> str:
    """Render a Document, ElementCollection or Element to chat markdown.

    Args:
        node: Tree to render
        options: Render options (defaults keep every delimiter and spoiler)

    Returns:
        Markdown text
    """
    return MarkdownRenderer(options).render(node)


def render_plain(node: Node) -> str:
    """Render a tree as plain text: every delimiter stripped, spoilers kept."""
    return extract_text(node)


__all__ = [  # noqa: RUF022
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    "render_plain",
    "extract_text",
    # Nodes
    "Node",
    "Document",
    "ElementCollection",
    "Element",
    "Plain",
    "ItalicsStar",
    "ItalicsUnderscore",
    "Bold",
    "Underline",
    "Strikethrough",
    "Spoiler",
    "OneLineCode",
    "MultiLineCode",
    "BlockQuote",
    # Parser / renderer components
    "Parser",
    "MarkdownRenderer",
    "RenderOptions",
    "ASTRenderer",
    # Visitor + Transform
    "BaseVisitor",
    "transform",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Parse cache
    "DictParseCache",
    "ParseCache",
    "hash_config",
    "hash_content",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Errors
    "ChatmarkError",
    "ConfigError",
    "DeserializationError",
    "NodeConstructionError",
]
