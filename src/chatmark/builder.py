"""Helper functions to build chatmark trees in fewer lines.

One function per element kind. Composite helpers accept a ``str`` (wrapped
in a single Plain), one element, an ElementCollection or any iterable of
elements. No validation beyond types: empty content is allowed here even
though the parser never produces it.

Example:
    >>> from chatmark.builder import bold, document, plain
    >>> doc = document([bold("bold"), plain(" text")])
    >>> doc.render_markdown()
    '**bold** text'

"""

from collections.abc import Iterable
from typing import TypeAlias

from chatmark.errors import NodeConstructionError
from chatmark.nodes import (
    ELEMENT_TYPES,
    BlockQuote,
    Bold,
    Document,
    Element,
    ElementCollection,
    ItalicsStar,
    ItalicsUnderscore,
    MultiLineCode,
    OneLineCode,
    Plain,
    Spoiler,
    Strikethrough,
    Underline,
)

Content: TypeAlias = str | Element | ElementCollection | Iterable[Element]


def collection(content: Content, *, helper: str = "collection") -> ElementCollection:
    """Coerce builder content into an ElementCollection."""
    if isinstance(content, ElementCollection):
        return content
    if isinstance(content, str):
        return ElementCollection((Plain(content),))
    if isinstance(content, ELEMENT_TYPES):
        return ElementCollection((content,))  # type: ignore[arg-type]
    if isinstance(content, Iterable):
        elements = tuple(content)
        for element in elements:
            if not isinstance(element, ELEMENT_TYPES):
                raise NodeConstructionError(helper, element)
        return ElementCollection(elements)  # type: ignore[arg-type]
    raise NodeConstructionError(helper, content)


def document(content: Content = ()) -> Document:
    return Document(children=collection(content, helper="document"))


def plain(content: str) -> Plain:
    if not isinstance(content, str):
        raise NodeConstructionError("plain", content)
    return Plain(content)


def italics_star(content: Content) -> ItalicsStar:
    return ItalicsStar(children=collection(content, helper="italics_star"))


def italics_underscore(content: Content) -> ItalicsUnderscore:
    return ItalicsUnderscore(children=collection(content, helper="italics_underscore"))


def bold(content: Content) -> Bold:
    return Bold(children=collection(content, helper="bold"))


def underline(content: Content) -> Underline:
    return Underline(children=collection(content, helper="underline"))


def strikethrough(content: Content) -> Strikethrough:
    return Strikethrough(children=collection(content, helper="strikethrough"))


def spoiler(content: Content) -> Spoiler:
    return Spoiler(children=collection(content, helper="spoiler"))


def block_quote(content: Content) -> BlockQuote:
    return BlockQuote(children=collection(content, helper="block_quote"))


def one_line_code(content: str) -> OneLineCode:
    if not isinstance(content, str):
        raise NodeConstructionError("one_line_code", content)
    return OneLineCode(content)


def multi_line_code(content: str, language: str | None = None) -> MultiLineCode:
    if not isinstance(content, str):
        raise NodeConstructionError("multi_line_code", content)
    return MultiLineCode(content=content, language=language)


__all__ = [
    "block_quote",
    "bold",
    "collection",
    "document",
    "italics_star",
    "italics_underscore",
    "multi_line_code",
    "one_line_code",
    "plain",
    "spoiler",
    "strikethrough",
    "underline",
]
