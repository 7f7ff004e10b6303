"""ContextVar-based parse configuration for chatmark.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is read by the parser when a parse starts.

Render options are deliberately not part of this module: the same tree may be
rendered under different options concurrently, so they are always passed
explicitly to each render call.

Usage:
    from chatmark.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(max_nesting_depth=8)):
        doc = Parser(source).parse()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from chatmark.errors import ConfigError

DEFAULT_MAX_NESTING_DEPTH = 64


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Attributes:
        max_nesting_depth: Deepest delimiter nesting turned into styled
            nodes. A span that would nest deeper is kept as a single Plain
            leaf holding its raw text.

    """

    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH

    def __post_init__(self) -> None:
        if isinstance(self.max_nesting_depth, bool) or not isinstance(
            self.max_nesting_depth, int
        ):
            raise ConfigError("max_nesting_depth", "must be an integer")
        if self.max_nesting_depth < 1:
            raise ConfigError("max_nesting_depth", "must be at least 1")

    @classmethod
    def from_dict(cls, config_dict: dict) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Only includes keys that are valid ParseConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> ParseConfig.from_dict({"max_nesting_depth": 8, "other": 1})
            ParseConfig(max_nesting_depth=8)

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "chatmark_parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Only affects the current thread's context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(max_nesting_depth=2)):
        ...     doc = parse("**__~~deep~~__**")

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_MAX_NESTING_DEPTH",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
