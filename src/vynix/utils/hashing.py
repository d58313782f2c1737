"""Content hashing utilities."""

import hashlib


def hash_content(content: str, length: int = 64) -> str:
    """Hash string content using SHA256.

    Args:
        content: String content to hash.
        length: Length of hash to return (max 64).

    Returns:
        Hex digest truncated to specified length.
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()[:length]


def short_key(key: str, length: int = 16) -> str:
    """Shorten a cache key for log output."""
    return f"{key[:length]}..."
