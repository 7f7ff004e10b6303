"""Total recursive-descent parser producing a chatmark Document.

Every input string parses: each position is resolved by a special matcher
tried in priority order, or by the plain-text fallback, which always
consumes at least one character. The whole input is always consumed.

Architecture:
- `SpanMatchingMixin`: one matcher per special element (code, bold, ...)
- `Parser`: collection loop, plain-text fallback and nesting bound

Thread Safety:
- Parser instances are single-use and not thread-safe. Create one per parse.
- Configuration is read from ContextVar (thread-local).
- The resulting tree is immutable and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Callable

from chatmark.config import ParseConfig, get_parse_config
from chatmark.nodes import Document, Element, ElementCollection, Plain
from chatmark.parsing import SpanMatchingMixin
from chatmark.parsing.delimiters import TRIGGER_PATTERN
from chatmark.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(SpanMatchingMixin):
    """Recursive descent parser for chat markdown.

    Usage:
        >>> Parser("this **is** markdown").parse()
        Document(children=ElementCollection(elements=(Plain(content='this '), ...)))

    Nested content is parsed in place: matchers pass ``(start, end)`` bounds
    of the original string instead of slicing it, and every search is
    bounded by ``end`` so nested spans behave exactly like sub-slices.

    Nesting is bounded by ``ParseConfig.max_nesting_depth``. Content nested
    deeper than the bound is kept as one Plain leaf holding its raw text, so
    rendering the tree still reproduces the input.

    """

    __slots__ = (
        "_source",
        "_config",
        "_matchers",
        "_truncated",
    )

    def __init__(self, source: str, config: ParseConfig | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: Message text
            config: Parse configuration (defaults to the active ContextVar config)

        """
        self._source = source
        self._config = config if config is not None else get_parse_config()
        self._truncated = False
        # Priority order matters, see chatmark.parsing.delimiters
        self._matchers: tuple[Callable[[int, int, int], tuple[Element, int] | None], ...] = (
            self._match_multi_line_code,
            self._match_one_line_code,
            self._match_bold,
            self._match_underline,
            self._match_italics_star,
            self._match_italics_underscore,
            self._match_strikethrough,
            self._match_spoiler,
        )

    def parse(self) -> Document:
        """Parse the whole source into a Document."""
        children = self._parse_collection(0, len(self._source), 0)
        if self._truncated:
            logger.warning(
                "Nesting deeper than %d levels kept as plain text",
                self._config.max_nesting_depth,
            )
        return Document(children=children)

    def _parse_collection(self, start: int, end: int, depth: int) -> ElementCollection:
        """Parse ``source[start:end]`` into elements until exhausted."""
        if depth >= self._config.max_nesting_depth:
            return self._raw_collection(start, end)

        elements: list[Element] = []
        pos = start
        while pos < end:
            element, pos = self._parse_element(pos, end, depth)
            elements.append(element)
        return ElementCollection(tuple(elements))

    def _parse_element(self, pos: int, end: int, depth: int) -> tuple[Element, int]:
        """Parse one element at ``pos``; always advances on non-empty input."""
        for matcher in self._matchers:
            result = matcher(pos, end, depth)
            if result is not None:
                return result

        run_end = self._plain_run_end(pos, end)
        return Plain(self._source[pos:run_end]), run_end

    def _plain_run_end(self, pos: int, end: int) -> int:
        """End of the longest plain run starting at ``pos``.

        The character at ``pos`` is already known not to open a special
        element. Only positions holding a trigger character are probed.
        """
        search_from = pos + 1
        while search_from < end:
            found = TRIGGER_PATTERN.search(self._source, search_from, end)
            if found is None:
                return end
            candidate = found.start()
            if self._opens_span(candidate, end):
                return candidate
            search_from = candidate + 1
        return end

    def _raw_collection(self, start: int, end: int) -> ElementCollection:
        """Keep over-deep content as a single Plain leaf."""
        if start >= end:
            return ElementCollection()
        if self._plain_run_end(start, end) < end or self._opens_span(start, end):
            self._truncated = True
        return ElementCollection((Plain(self._source[start:end]),))
