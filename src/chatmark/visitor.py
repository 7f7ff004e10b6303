"""Tree visitor and transformer for chatmark.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen trees.

Example: collect every code snippet in a message:

    class CodeCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.snippets: list[str] = []

        def visit_one_line_code(self, node: OneLineCode) -> None:
            self.snippets.append(node.content)

    collector = CodeCollector()
    collector.visit(doc)

Example: drop spoilers before quoting a message:

    def drop_spoilers(node: Node) -> Node | None:
        return None if isinstance(node, Spoiler) else node

    safe = transform(doc, drop_spoilers)

ElementCollections are walked through transparently: visitors and transform
functions see Documents and Elements only.

Thread Safety:
    Visitors may accumulate mutable state; create one per thread. The
    transform function is pure and safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable
from typing import Generic, TypeVar

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


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children.

        Descendants are visited in document order with an explicit stack, so
        hand-built trees of any depth can be visited. Returns the result of
        the ``visit_*`` call for ``node`` itself.
        """
        result = self._dispatch(node)
        stack = list(reversed(_child_elements(node)))
        while stack:
            element = stack.pop()
            self._dispatch(element)
            stack.extend(reversed(_child_elements(element)))
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_plain(self, node: Plain) -> T:
        return self.visit_default(node)

    def visit_italics_star(self, node: ItalicsStar) -> T:
        return self.visit_default(node)

    def visit_italics_underscore(self, node: ItalicsUnderscore) -> T:
        return self.visit_default(node)

    def visit_bold(self, node: Bold) -> T:
        return self.visit_default(node)

    def visit_underline(self, node: Underline) -> T:
        return self.visit_default(node)

    def visit_strikethrough(self, node: Strikethrough) -> T:
        return self.visit_default(node)

    def visit_spoiler(self, node: Spoiler) -> T:
        return self.visit_default(node)

    def visit_one_line_code(self, node: OneLineCode) -> T:
        return self.visit_default(node)

    def visit_multi_line_code(self, node: MultiLineCode) -> T:
        return self.visit_default(node)

    def visit_block_quote(self, node: BlockQuote) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Plain():
                return self.visit_plain(node)
            case ItalicsStar():
                return self.visit_italics_star(node)
            case ItalicsUnderscore():
                return self.visit_italics_underscore(node)
            case Bold():
                return self.visit_bold(node)
            case Underline():
                return self.visit_underline(node)
            case Strikethrough():
                return self.visit_strikethrough(node)
            case Spoiler():
                return self.visit_spoiler(node)
            case OneLineCode():
                return self.visit_one_line_code(node)
            case MultiLineCode():
                return self.visit_multi_line_code(node)
            case BlockQuote():
                return self.visit_block_quote(node)
            case _:
                return self.visit_default(node)


def _child_elements(node: Node) -> tuple[Node, ...]:
    """Elements directly below ``node``, looking through its collection."""
    match node:
        case ElementCollection(elements=elements):
            return elements
        case Plain() | OneLineCode() | MultiLineCode():
            return ()
    children = getattr(node, "children", None)
    if isinstance(children, ElementCollection):
        return children.elements
    return ()


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every element in the tree, returning a new tree.

    ``fn`` is called bottom-up: children are transformed first, then the
    parent is transformed with its new children. Nodes whose children come
    back unchanged are reused as-is.

    Return ``None`` from ``fn`` to remove an element. The root Document cannot
    be removed; returning None (or a non-Document) for it raises TypeError.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Document with the transformation applied.

    """
    # Each open composite node collects its transformed children here
    collected: list[list[Node]] = [[]]
    stack: list[tuple[Node, bool]] = [(doc, False)]

    while stack:
        node, expanded = stack.pop()
        elements = _child_elements(node)

        if not expanded and elements:
            stack.append((node, True))
            collected.append([])
            stack.extend((element, False) for element in reversed(elements))
            continue

        if expanded:
            new_elements = tuple(collected.pop())
            # Unchanged children come back as the same objects
            if len(new_elements) != len(elements) or any(
                new is not old for new, old in zip(new_elements, elements, strict=True)
            ):
                node = dataclasses.replace(node, children=ElementCollection(new_elements))  # type: ignore[type-var]

        result = fn(node)
        if result is not None:
            collected[-1].append(result)

    root = collected[0]
    if len(root) != 1 or not isinstance(root[0], Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return root[0]
