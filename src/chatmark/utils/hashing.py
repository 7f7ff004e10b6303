"""Hashing helpers for parse cache keys."""

import hashlib


def hash_str(content: str) -> str:
    """SHA-256 hex digest of ``content``.

    Lone surrogates (text decoded with ``surrogateescape``) are hashed as
    their code units instead of raising, so every str has a key.

    Example:
        >>> hash_str("hello world")[:16]
        'b94d27b9934d3e08'
    """
    return hashlib.sha256(content.encode("utf-8", errors="surrogatepass")).hexdigest()
