"""Hashing utilities for Tessera.

Provides standardized hashing for cache keys and content fingerprinting.

Example:
    >>> from tessera.utils.hashing import hash_str
    >>> hash_str("hello world")
    'b94d27b9934d3e08a52e52d7da7dabfac484efe37a5380ee9088f7ace2efcde9'
"""

import hashlib


def hash_str(content: str) -> str:
    """Return the SHA-256 hex digest of UTF-8 encoded content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
