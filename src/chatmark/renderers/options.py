"""Render options for chatmark renderers."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RenderOptions:
    """Immutable render options, passed explicitly to every render call.

    Attributes:
        omit_format: Strip all delimiters, emitting only the underlying text
        omit_spoiler: Render spoiler content as empty output

    """

    omit_format: bool = False
    omit_spoiler: bool = False


DEFAULT_OPTIONS = RenderOptions()
PLAIN_OPTIONS = RenderOptions(omit_format=True)
