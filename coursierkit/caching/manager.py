"""
Restoring and saving the Coursier cache.

Caching is an optimization: a cache that cannot be restored or saved must
never fail the run. :class:`CoursierCacheManager` reports failures as
:class:`CacheResult` values, and :func:`restore_cache` / :func:`save_cache`
log them and carry on.

Usage:
    from coursierkit.caching import restore_cache, save_cache

    restore_cache(settings, dependencies_hash)
    ...
    save_cache(settings, dependencies_hash)
"""

import logging
from pathlib import Path
from typing import Optional

from coursierkit.actions import core as actions
from coursierkit.config.settings import CoursierSettings
from coursierkit.caching.keys import build_cache_key
from coursierkit.caching.result import CacheResult
from coursierkit.caching.store import CacheStore, LocalCacheStore

logger = logging.getLogger(__name__)


class CoursierCacheManager:
    """
    Restores and saves the Coursier cache directory through a cache store.

    Attributes:
        store: Backing cache store
        cache_dir: Coursier cache directory (``~/.cache/coursier/v1``)
    """

    def __init__(self, store: CacheStore, cache_dir: Path):
        self.store = store
        self.cache_dir = Path(cache_dir)

    @classmethod
    def from_settings(cls, settings: CoursierSettings) -> "CoursierCacheManager":
        return cls(LocalCacheStore(settings.cache_store_dir), settings.cache_dir)

    def restore(self, hash_value: str) -> CacheResult:
        """Restore the cache for ``hash_value``; never raises."""
        key = build_cache_key(hash_value)
        try:
            matched = self.store.restore(
                [self.cache_dir], key.primary, key.restore_keys
            )
        except Exception as e:
            return CacheResult.failed(str(e))

        if matched is None:
            return CacheResult.missed()
        return CacheResult.restored(matched)

    def save(self, hash_value: str) -> CacheResult:
        """Save the cache for ``hash_value``; never raises."""
        key = build_cache_key(hash_value)
        try:
            self.store.save([self.cache_dir], key.primary)
        except Exception as e:
            return CacheResult.failed(str(e))

        return CacheResult.saved(key.primary)


def restore_cache(
    settings: CoursierSettings,
    hash_value: str,
    manager: Optional[CoursierCacheManager] = None,
) -> CacheResult:
    """
    Try to restore the Coursier cache, if there is one.
    """
    manager = manager or CoursierCacheManager.from_settings(settings)

    with actions.group("Trying to restore Coursier's cache..."):
        result = manager.restore(hash_value)

        if not result.ok:
            logger.debug(result.reason)
            logger.warning("Unable to restore Coursier's cache")
        elif result.hit:
            logger.info("Coursier cache was restored")
        else:
            logger.info("Coursier cache wasn't found")

    return result


def save_cache(
    settings: CoursierSettings,
    hash_value: str,
    manager: Optional[CoursierCacheManager] = None,
) -> CacheResult:
    """
    Try to save the Coursier cache.
    """
    manager = manager or CoursierCacheManager.from_settings(settings)

    with actions.group("Saving Coursier's cache..."):
        result = manager.save(hash_value)

        if result.ok:
            logger.info("Coursier cache has been saved")
        else:
            logger.debug(result.reason)
            logger.warning("Unable to save Coursier's cache")

    return result
