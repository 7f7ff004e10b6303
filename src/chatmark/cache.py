"""Parse cache for chatmark, keyed by message text and parse config.

Chat bots see the same text many times: edited messages, quotes, reposts,
bot commands. ``parse(text, cache=...)`` looks the text up by
``(hash_content(text), hash_config(config))`` before parsing. Documents are
immutable, so one cached tree can be handed to every caller.

Example:
    >>> from chatmark import parse, DictParseCache
    >>> cache = DictParseCache(max_entries=10_000)
    >>> doc1 = parse("**hi**", cache=cache)
    >>> doc2 = parse("**hi**", cache=cache)
    >>> doc1 is doc2
    True
"""

from __future__ import annotations

from collections import OrderedDict
from threading import RLock
from typing import TYPE_CHECKING, Protocol, TypeAlias

from chatmark.utils.hashing import hash_str
from chatmark.utils.logger import get_logger

if TYPE_CHECKING:
    from chatmark.config import ParseConfig
    from chatmark.nodes import Document

logger = get_logger(__name__)

CacheKey: TypeAlias = tuple[str, str]


class ParseCache(Protocol):
    """Anything ``parse(..., cache=...)`` can read from and write to."""

    def get(self, content_hash: str, config_hash: str) -> Document | None: ...

    def put(self, content_hash: str, config_hash: str, doc: Document) -> None: ...


class DictParseCache:
    """In-memory parse cache with optional LRU eviction.

    Args:
        max_entries: Keep at most this many documents, evicting the least
            recently used one first. ``None`` keeps everything, which suits
            one-shot batch jobs but not long-running bots.

    Safe to share between threads: reads and writes hold a lock.
    """

    __slots__ = ("_data", "_lock", "_max_entries")

    def __init__(self, max_entries: int | None = None) -> None:
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._data: OrderedDict[CacheKey, Document] = OrderedDict()
        self._lock = RLock()
        self._max_entries = max_entries

    def get(self, content_hash: str, config_hash: str) -> Document | None:
        key = (content_hash, config_hash)
        with self._lock:
            doc = self._data.get(key)
            if doc is not None:
                self._data.move_to_end(key)
            return doc

    def put(self, content_hash: str, config_hash: str, doc: Document) -> None:
        key = (content_hash, config_hash)
        with self._lock:
            self._data[key] = doc
            self._data.move_to_end(key)
            if self._max_entries is not None and len(self._data) > self._max_entries:
                (evicted, _), _ = self._data.popitem(last=False)
                logger.debug("Evicted cached parse %s", evicted[:12])

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


def hash_content(source: str) -> str:
    """Cache key half for the message text. Accepts any str."""
    return hash_str(source)


def hash_config(config: ParseConfig) -> str:
    """Cache key half for the config: the same text under a different
    nesting bound parses differently."""
    return hash_str(f"max_nesting_depth={config.max_nesting_depth}")


__all__ = [
    "DictParseCache",
    "ParseCache",
    "hash_config",
    "hash_content",
]
