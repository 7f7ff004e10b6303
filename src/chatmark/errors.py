"""Exception classes for chatmark.

Parsing and rendering are total and never raise. These exceptions cover the
remaining edges of the library: building trees by hand, loading serialized
trees, and configuration.
"""

from __future__ import annotations


class ChatmarkError(Exception):
    """Base exception for all chatmark errors.

    Subclass this for specific error categories.
    """

    pass


class NodeConstructionError(ChatmarkError, TypeError):
    """A builder helper received content it cannot turn into elements."""

    def __init__(self, helper: str, value: object) -> None:
        """Initialize construction error.

        Args:
            helper: Name of the builder helper that was called
            value: The offending argument
        """
        self.helper = helper
        self.value = value
        super().__init__(
            f"{helper}() expects str, an element, an ElementCollection or an "
            f"iterable of elements, got {type(value).__name__}"
        )


class DeserializationError(ChatmarkError, ValueError):
    """Serialized data does not describe a valid chatmark tree."""

    pass


class ConfigError(ChatmarkError, ValueError):
    """Invalid parse configuration value."""

    def __init__(self, option: str, message: str) -> None:
        self.option = option
        super().__init__(f"Invalid config option '{option}': {message}")
