"""Cache key construction for the Coursier cache."""

import time
from dataclasses import dataclass
from typing import List, Optional

KEY_PREFIX = "coursier-cache-"


@dataclass(frozen=True)
class CacheKey:
    """A primary cache key and its ordered restore keys."""

    primary: str
    restore_keys: List[str]


def now_millis() -> int:
    """Current wall-clock time in milliseconds."""
    return int(time.time() * 1000)


def build_cache_key(hash_value: str, timestamp: Optional[int] = None) -> CacheKey:
    """
    Build the cache key for a dependency hash.

    The primary key embeds a timestamp, so it is unique per save and an
    exact match on restore only happens within the same run. Restores from
    earlier runs go through the restore keys.

    Example:
        >>> key = build_cache_key("abc", timestamp=1700000000000)
        >>> key.primary
        'coursier-cache-abc-1700000000000'
        >>> key.restore_keys
        ['coursier-cache-abc', 'coursier-cache-']
    """
    if timestamp is None:
        timestamp = now_millis()

    return CacheKey(
        primary=f"{KEY_PREFIX}{hash_value}-{timestamp}",
        restore_keys=[f"{KEY_PREFIX}{hash_value}", KEY_PREFIX],
    )
