"""Parsing building blocks for chatmark.

- delimiters: delimiter table, priority order and trigger characters
- matchers: SpanMatchingMixin with one matcher per special element

"""

from chatmark.parsing.matchers import SpanMatchingMixin

__all__ = ["SpanMatchingMixin"]
