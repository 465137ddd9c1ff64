"""Content-addressed parse cache for Tessera.

Provides (content_hash, config_hash) -> Program caching so unchanged
templates are not re-lexed and re-parsed. Useful for renderers that compile
the same template source many times (per request, per page).

Thread Safety:
    DictParseCache is not thread-safe. For parallel compilation, use a cache
    implementation with internal locking (e.g. threading.Lock around get/put).

Example:
    >>> from tessera import parse, DictParseCache
    >>> cache = DictParseCache()
    >>> program1 = parse("Hi {{ name }}", cache=cache)
    >>> program2 = parse("Hi {{ name }}", cache=cache)  # Cache hit, no re-parse
    >>> program1 is program2
    True
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from tessera.utils.hashing import hash_str

if TYPE_CHECKING:
    from tessera.config import ParseConfig
    from tessera.nodes import Program


class ParseCache(Protocol):
    """Protocol for content-addressed parse caches.

    Cache key is (content_hash, config_hash). Cached value is Program (AST).
    Program is immutable, safe to share across threads.
    """

    def get(self, content_hash: str, config_hash: str) -> Program | None:
        """Return cached Program if present, else None."""
        ...

    def put(self, content_hash: str, config_hash: str, program: Program) -> None:
        """Store Program in cache."""
        ...


class DictParseCache:
    """In-memory parse cache using a dict.

    Not thread-safe. For parallel compilation, wrap with a lock or use a
    thread-safe implementation.
    """

    __slots__ = ("_data",)

    def __init__(self) -> None:
        self._data: dict[tuple[str, str], Program] = {}

    def __len__(self) -> int:
        return len(self._data)

    def get(self, content_hash: str, config_hash: str) -> Program | None:
        """Return cached Program if present, else None."""
        return self._data.get((content_hash, config_hash))

    def put(self, content_hash: str, config_hash: str, program: Program) -> None:
        """Store Program in cache."""
        self._data[(content_hash, config_hash)] = program

    def clear(self) -> None:
        """Drop every cached Program."""
        self._data.clear()


def hash_content(source: str) -> str:
    """Compute SHA256 hash of source for cache key.

    Args:
        source: Template source text

    Returns:
        Hex digest of SHA256 hash
    """
    return hash_str(source)


def hash_config(config: ParseConfig) -> str:
    """Compute hash of ParseConfig for cache key.

    When text_transformer is set, returns empty string to disable caching
    (a callback cannot be hashed by behavior).

    Args:
        config: ParseConfig to hash

    Returns:
        Hex digest of config hash, or "" if cache should be bypassed
    """
    if config.text_transformer is not None:
        return ""
    parts = (f"extended_numbers={config.extended_numbers}",)
    return hash_str("|".join(parts))


__all__ = [
    "DictParseCache",
    "ParseCache",
    "hash_config",
    "hash_content",
]
