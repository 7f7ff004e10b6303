"""Delimiter table for the chat markdown dialect.

Single source of truth for the parser (priority order, trigger characters,
language tags) and the renderer (delimiter per styled node).

Priority:
    Code fences come first so delimiter characters inside code are never
    reinterpreted. Double-character delimiters come before their
    single-character counterparts so ``**x**`` is not read as two empty
    italics spans.
"""

import re

from chatmark.nodes import (
    Bold,
    ItalicsStar,
    ItalicsUnderscore,
    Node,
    Spoiler,
    Strikethrough,
    Underline,
)

MULTI_LINE_CODE_FENCE = "```"
ONE_LINE_CODE_DELIMITER = "`"
BOLD_DELIMITER = "**"
UNDERLINE_DELIMITER = "__"
ITALICS_STAR_DELIMITER = "*"
ITALICS_UNDERSCORE_DELIMITER = "_"
STRIKETHROUGH_DELIMITER = "~~"
SPOILER_DELIMITER = "||"

BLOCK_QUOTE_PREFIX = "> "

# Every special matcher, in the order they are tried at one position
PRIORITY_DELIMITERS: tuple[str, ...] = (
    MULTI_LINE_CODE_FENCE,
    ONE_LINE_CODE_DELIMITER,
    BOLD_DELIMITER,
    UNDERLINE_DELIMITER,
    ITALICS_STAR_DELIMITER,
    ITALICS_UNDERSCORE_DELIMITER,
    STRIKETHROUGH_DELIMITER,
    SPOILER_DELIMITER,
)

# Styled (recursively parsed) node types and their delimiters
STYLED_DELIMITERS: dict[type[Node], str] = {
    Bold: BOLD_DELIMITER,
    Underline: UNDERLINE_DELIMITER,
    ItalicsStar: ITALICS_STAR_DELIMITER,
    ItalicsUnderscore: ITALICS_UNDERSCORE_DELIMITER,
    Strikethrough: STRIKETHROUGH_DELIMITER,
    Spoiler: SPOILER_DELIMITER,
}

# Characters that can start a special element
TRIGGER_CHARS: frozenset[str] = frozenset(d[0] for d in PRIORITY_DELIMITERS)
TRIGGER_PATTERN = re.compile("[" + re.escape("".join(sorted(TRIGGER_CHARS))) + "]")

# ASCII alphanumeric run directly followed by a line feed
LANGUAGE_TAG_PATTERN = re.compile(r"[0-9A-Za-z]+(?=\n)")
