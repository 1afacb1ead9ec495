"""
Coursier cache persistence for coursierkit.

This package keeps Coursier's download cache between CI runs.

Modules:
    keys: Primary and restore key construction
    result: CacheResult outcome type
    store: CacheStore interface and the directory-backed LocalCacheStore
    manager: Restore/save operations that never fail the run
"""

from .keys import CacheKey, build_cache_key
from .manager import CoursierCacheManager, restore_cache, save_cache
from .result import CacheResult
from .store import CacheStore, LocalCacheStore

__all__ = [
    "CacheKey",
    "CacheResult",
    "CacheStore",
    "CoursierCacheManager",
    "LocalCacheStore",
    "build_cache_key",
    "restore_cache",
    "save_cache",
]
