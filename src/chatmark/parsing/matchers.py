"""Span matchers for the chatmark parser.

Every matcher is tried at a fixed position and either succeeds with
``(element, next_pos)`` or returns ``None`` ("did not match"). Matchers never
raise; the plain-text fallback in the parser always succeeds.

All matchers share one success condition: the exact opening delimiter at
``pos`` and a leftmost closing delimiter before ``end`` with a non-empty span
in between. Nested content never makes a match fail, which lets the plain
text scanner probe positions cheaply with ``_opens_span``.

Thread Safety:
Matchers only read host attributes set for a single parse.

"""

from typing import TypeAlias

from chatmark.nodes import (
    Bold,
    Element,
    ElementCollection,
    ItalicsStar,
    ItalicsUnderscore,
    MultiLineCode,
    Node,
    OneLineCode,
    Spoiler,
    Strikethrough,
    Underline,
)
from chatmark.parsing.delimiters import (
    BOLD_DELIMITER,
    ITALICS_STAR_DELIMITER,
    ITALICS_UNDERSCORE_DELIMITER,
    LANGUAGE_TAG_PATTERN,
    MULTI_LINE_CODE_FENCE,
    ONE_LINE_CODE_DELIMITER,
    PRIORITY_DELIMITERS,
    SPOILER_DELIMITER,
    STRIKETHROUGH_DELIMITER,
    UNDERLINE_DELIMITER,
)

MatchResult: TypeAlias = tuple[Element, int] | None


class SpanMatchingMixin:
    """Delimited span matchers.

    Required Host Attributes:
        - _source: str

    Required Host Methods:
        - _parse_collection(start, end, depth) -> ElementCollection

    """

    __slots__ = ()

    def _find_close(self, delimiter: str, pos: int, end: int) -> int:
        """Return the start of the closing delimiter, or -1 when nothing matches.

        Fails when ``delimiter`` does not open at ``pos``, has no later
        occurrence before ``end``, or the span between the two is empty.
        """
        source = self._source
        if not source.startswith(delimiter, pos, end):
            return -1
        inner_start = pos + len(delimiter)
        close = source.find(delimiter, inner_start, end)
        if close == inner_start:
            return -1
        return close

    def _opens_span(self, pos: int, end: int) -> bool:
        """True when any special matcher would succeed at ``pos``."""
        return any(
            self._find_close(delimiter, pos, end) != -1
            for delimiter in PRIORITY_DELIMITERS
        )

    # -- Verbatim matchers ------------------------------------------------------

    def _match_multi_line_code(self, pos: int, end: int, depth: int) -> MatchResult:
        close = self._find_close(MULTI_LINE_CODE_FENCE, pos, end)
        if close == -1:
            return None
        inner_start = pos + len(MULTI_LINE_CODE_FENCE)
        language = None
        tag = LANGUAGE_TAG_PATTERN.match(self._source, inner_start, close)
        if tag is not None:
            language = tag.group()
            inner_start = tag.end()
        node = MultiLineCode(content=self._source[inner_start:close], language=language)
        return node, close + len(MULTI_LINE_CODE_FENCE)

    def _match_one_line_code(self, pos: int, end: int, depth: int) -> MatchResult:
        close = self._find_close(ONE_LINE_CODE_DELIMITER, pos, end)
        if close == -1:
            return None
        inner_start = pos + len(ONE_LINE_CODE_DELIMITER)
        node = OneLineCode(content=self._source[inner_start:close])
        return node, close + len(ONE_LINE_CODE_DELIMITER)

    # -- Styled matchers --------------------------------------------------------

    def _match_styled(
        self,
        delimiter: str,
        node_type: type[Node],
        pos: int,
        end: int,
        depth: int,
    ) -> MatchResult:
        """Match a recursively parsed span and build its child collection."""
        close = self._find_close(delimiter, pos, end)
        if close == -1:
            return None
        children: ElementCollection = self._parse_collection(
            pos + len(delimiter), close, depth + 1
        )
        return node_type(children=children), close + len(delimiter)  # type: ignore[call-arg]

    def _match_bold(self, pos: int, end: int, depth: int) -> MatchResult:
        return self._match_styled(BOLD_DELIMITER, Bold, pos, end, depth)

    def _match_underline(self, pos: int, end: int, depth: int) -> MatchResult:
        return self._match_styled(UNDERLINE_DELIMITER, Underline, pos, end, depth)

    def _match_italics_star(self, pos: int, end: int, depth: int) -> MatchResult:
        return self._match_styled(ITALICS_STAR_DELIMITER, ItalicsStar, pos, end, depth)

    def _match_italics_underscore(self, pos: int, end: int, depth: int) -> MatchResult:
        return self._match_styled(
            ITALICS_UNDERSCORE_DELIMITER, ItalicsUnderscore, pos, end, depth
        )

    def _match_strikethrough(self, pos: int, end: int, depth: int) -> MatchResult:
        return self._match_styled(
            STRIKETHROUGH_DELIMITER, Strikethrough, pos, end, depth
        )

    def _match_spoiler(self, pos: int, end: int, depth: int) -> MatchResult:
        return self._match_styled(SPOILER_DELIMITER, Spoiler, pos, end, depth)
