"""StringBuilder for O(n) string accumulation.

Appends to a list, joins once at the end. The markdown renderer keeps one
builder per open block quote.

Thread Safety:
StringBuilder instances are local to each render() call.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
        >>> sb = StringBuilder()
        >>> sb.append("**").append("bold").append("**").build()
        '**bold**'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append ``s`` (empty strings are skipped) and return self for chaining."""
        if s:
            self._parts.append(s)
        return self

    def build(self) -> str:
        return "".join(self._parts)
