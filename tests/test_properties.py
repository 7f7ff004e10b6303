"""Property-based tests for the chatmark parser using Hypothesis.

These tests verify invariants that hold for any input:
1. Parsing never crashes and always returns a Document
2. Rendering a parsed document reproduces the input exactly
3. Canonical trees survive a render/parse round trip

Property-based testing finds edge cases that example-based tests miss.
"""

import string

from hypothesis import given, settings
from hypothesis import strategies as st

from chatmark import Document, parse, render, render_plain
from chatmark.nodes import (
    Bold,
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
from chatmark.parsing.delimiters import STYLED_DELIMITERS

# Text built mostly from delimiter characters exercises every matcher
delimiter_heavy = st.text(alphabet="*_~|`> \nab", max_size=40)

# Plain words never contain a delimiter character
words = st.text(alphabet=string.ascii_letters + string.digits + " ", min_size=1, max_size=8)
languages = st.text(alphabet=string.ascii_letters + string.digits, min_size=1, max_size=6)

STYLED_TYPES = tuple(STYLED_DELIMITERS)


@st.composite
def code_elements(draw):  # type: ignore[no-untyped-def]
    kind = draw(st.sampled_from(["inline", "block", "block_with_language"]))
    content = draw(words)
    if kind == "inline":
        return OneLineCode(content)
    if kind == "block":
        return MultiLineCode(content)
    return MultiLineCode("\n" + content, draw(languages))


@st.composite
def elements(draw, ancestors: frozenset[str] = frozenset(), depth: int = 0):  # type: ignore[no-untyped-def]
    """A special element that renders back to itself.

    A styled element may only nest inside ancestors whose delimiter does not
    occur in its own delimiter, otherwise the ancestor would close early.
    """
    allowed = [
        node_type
        for node_type in STYLED_TYPES
        if not any(a in STYLED_DELIMITERS[node_type] for a in ancestors)
    ]
    if depth >= 3 or not allowed or draw(st.booleans()):
        return draw(code_elements())

    node_type = draw(st.sampled_from(allowed))
    delimiter = STYLED_DELIMITERS[node_type]
    children = draw(collections(ancestors | {delimiter}, depth + 1))
    return node_type(children)


@st.composite
def collections(draw, ancestors: frozenset[str] = frozenset(), depth: int = 0):  # type: ignore[no-untyped-def]
    """Words alternating with special elements, starting and ending with a word."""
    specials = draw(st.lists(elements(ancestors, depth), max_size=3))
    items = [Plain(draw(words))]
    for special in specials:
        items.append(special)
        items.append(Plain(draw(words)))
    return ElementCollection(tuple(items))


documents = collections().map(Document)


class TestParserTotality:
    """parse() accepts every string."""

    @given(source=st.text())
    @settings(max_examples=200)
    def test_any_text_parses(self, source: str) -> None:
        assert isinstance(parse(source), Document)

    @given(source=st.text())
    @settings(max_examples=200)
    def test_render_reproduces_any_text(self, source: str) -> None:
        assert render(parse(source)) == source

    @given(source=delimiter_heavy)
    @settings(max_examples=300)
    def test_render_reproduces_delimiter_heavy_text(self, source: str) -> None:
        assert render(parse(source)) == source

    @given(source=delimiter_heavy)
    @settings(max_examples=200)
    def test_parse_is_deterministic(self, source: str) -> None:
        assert parse(source) == parse(source)

    @given(source=delimiter_heavy)
    @settings(max_examples=200)
    def test_plain_text_never_longer(self, source: str) -> None:
        assert len(render_plain(parse(source))) <= len(source)


class TestParsedTreeShape:
    """Structural invariants of parsed trees."""

    @given(source=delimiter_heavy)
    @settings(max_examples=200)
    def test_no_empty_leaves_or_spans(self, source: str) -> None:
        for node in parse(source).walk():
            if isinstance(node, Plain | OneLineCode | MultiLineCode):
                assert node.content
            elif isinstance(node, STYLED_TYPES):
                assert len(node.children) > 0

    @given(source=delimiter_heavy)
    @settings(max_examples=200)
    def test_no_adjacent_plain_leaves(self, source: str) -> None:
        for node in parse(source).walk():
            if isinstance(node, ElementCollection):
                for left, right in zip(node.elements, node.elements[1:], strict=False):
                    assert not (isinstance(left, Plain) and isinstance(right, Plain))


class TestRoundTrip:
    """Canonical trees render to text that parses back to the same tree."""

    @given(doc=documents)
    @settings(max_examples=300)
    def test_build_render_parse(self, doc: Document) -> None:
        assert parse(render(doc)) == doc

    @given(doc=documents)
    @settings(max_examples=100)
    def test_plain_rendering_matches_reparsed(self, doc: Document) -> None:
        assert render_plain(parse(render(doc))) == render_plain(doc)


def test_styled_types_cover_every_delimited_kind() -> None:
    assert set(STYLED_TYPES) == {
        Bold,
        ItalicsStar,
        ItalicsUnderscore,
        Spoiler,
        Strikethrough,
        Underline,
    }
