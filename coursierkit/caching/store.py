"""
Cache stores for the Coursier cache.

A cache store maps keys to snapshots of a list of paths. Keys are looked
up the way the GitHub Actions cache does it: an exact match on the primary
key, then each restore key in order (exact match first, then the most
recently saved entry starting with it). Entries are immutable once saved.

Usage:
    from coursierkit.caching.store import LocalCacheStore

    store = LocalCacheStore(Path.home() / ".cache" / "coursierkit" / "store")
    store.save([cache_dir], "coursier-cache-abc-1700000000000")
    matched = store.restore([cache_dir], "coursier-cache-abc-1", ["coursier-cache-abc"])
"""

import logging
import os
import shutil
import tarfile
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from filelock import FileLock, Timeout as LockTimeout

from coursierkit.core.exceptions import CacheError
from coursierkit.core.filesystem import (
    FilesystemError,
    ensure_directory,
    remove_path,
    safe_extract_members,
)

logger = logging.getLogger(__name__)

ARCHIVE_SUFFIX = ".tar.gz"
MAX_KEY_LENGTH = 512


def validate_key(key: str) -> None:
    """
    Check that ``key`` can be used as a cache key.

    Raises:
        CacheError: If the key is empty, too long or contains a separator
    """
    if not key:
        raise CacheError("Cache key cannot be empty")
    if len(key) > MAX_KEY_LENGTH:
        raise CacheError(
            f"Key Validation Error: {key} cannot be larger than {MAX_KEY_LENGTH} characters."
        )
    if "," in key:
        raise CacheError(f"Key Validation Error: {key} cannot contain commas.")
    if "/" in key or "\\" in key or key in (".", ".."):
        raise CacheError(f"Key Validation Error: {key} cannot contain path separators.")


class CacheStore(ABC):
    """Key-value store of path snapshots."""

    @abstractmethod
    def restore(
        self,
        paths: Sequence[Union[str, Path]],
        primary_key: str,
        restore_keys: Sequence[str] = (),
    ) -> Optional[str]:
        """
        Restore ``paths`` from the best matching entry.

        Returns:
            The key of the restored entry, or None on a miss

        Raises:
            CacheError: If the store is unusable or the entry is corrupt
        """
        pass

    @abstractmethod
    def save(self, paths: Sequence[Union[str, Path]], key: str) -> None:
        """
        Save a snapshot of ``paths`` under ``key``.

        Raises:
            CacheError: If the key exists already or nothing can be saved
        """
        pass


class LocalCacheStore(CacheStore):
    """
    Cache store keeping one ``<key>.tar.gz`` archive per entry in a directory.

    Suitable for self-hosted runners with a persistent disk, or a directory
    that is itself carried between runs. Access is serialized with a file
    lock so concurrent jobs on one machine do not corrupt the store.

    Attributes:
        root: Directory holding the archives
        lock_timeout: Seconds to wait for the store lock
    """

    def __init__(self, root: Union[str, Path], lock_timeout: int = 60):
        self.root = Path(root)
        self.lock_timeout = lock_timeout

    def _archive_path(self, key: str) -> Path:
        return self.root / f"{key}{ARCHIVE_SUFFIX}"

    def _lock(self) -> FileLock:
        ensure_directory(self.root)
        return FileLock(self.root / ".store.lock", timeout=self.lock_timeout)

    def keys(self) -> List[str]:
        """Keys of all saved entries, most recently saved first."""
        if not self.root.is_dir():
            return []

        entries: List[Tuple[int, str]] = []
        for archive in self.root.iterdir():
            if archive.name.endswith(ARCHIVE_SUFFIX) and archive.is_file():
                key = archive.name[: -len(ARCHIVE_SUFFIX)]
                entries.append((archive.stat().st_mtime_ns, key))

        entries.sort(reverse=True)
        return [key for _, key in entries]

    def find(self, primary_key: str, restore_keys: Sequence[str] = ()) -> Optional[str]:
        """Return the key of the entry a restore would use, or None."""
        keys = self.keys()

        if primary_key in keys:
            return primary_key

        for candidate in restore_keys:
            if candidate in keys:
                return candidate
            for key in keys:
                if key.startswith(candidate):
                    return key

        return None

    def restore(
        self,
        paths: Sequence[Union[str, Path]],
        primary_key: str,
        restore_keys: Sequence[str] = (),
    ) -> Optional[str]:
        for key in [primary_key, *restore_keys]:
            validate_key(key)

        try:
            with self._lock():
                matched = self.find(primary_key, restore_keys)
                if matched is None:
                    logger.debug(f"No cache entry matches {primary_key}")
                    return None

                logger.debug(f"Restoring cache entry {matched}")
                self._extract(self._archive_path(matched), [Path(p) for p in paths])
                return matched
        except LockTimeout as e:
            raise CacheError(
                f"Could not acquire cache store lock after {self.lock_timeout}s"
            ) from e

    def _extract(self, archive: Path, paths: List[Path]) -> None:
        try:
            with tarfile.open(archive, "r:gz") as tar:
                names = tar.getnames()
                for index, path in enumerate(paths):
                    prefix = str(index)
                    if prefix not in names:
                        continue

                    member = tar.getmember(prefix)
                    if member.isdir():
                        safe_extract_members(tar, prefix, path)
                    elif member.isfile():
                        ensure_directory(path.parent)
                        source = tar.extractfile(member)
                        with source, open(path, "wb") as target:
                            shutil.copyfileobj(source, target)
        except (tarfile.TarError, OSError, FilesystemError) as e:
            raise CacheError(f"Failed to restore cache entry {archive.name}: {e}") from e

    def save(self, paths: Sequence[Union[str, Path]], key: str) -> None:
        validate_key(key)
        paths = [Path(p) for p in paths]

        if not any(p.exists() for p in paths):
            raise CacheError(
                "Path Validation Error: Path(s) specified in the action for caching "
                "do(es) not exist, hence no cache is being saved."
            )

        try:
            with self._lock():
                archive = self._archive_path(key)
                if archive.exists():
                    raise CacheError(
                        f"Unable to reserve cache with key {key}, "
                        "another job may be creating this cache."
                    )

                fd, tmp_name = tempfile.mkstemp(
                    dir=self.root, prefix=".saving-", suffix=ARCHIVE_SUFFIX
                )
                os.close(fd)
                try:
                    with tarfile.open(tmp_name, "w:gz") as tar:
                        for index, path in enumerate(paths):
                            if path.exists():
                                tar.add(path, arcname=str(index))
                    os.replace(tmp_name, archive)
                except (tarfile.TarError, OSError) as e:
                    raise CacheError(f"Failed to save cache entry {key}: {e}") from e
                finally:
                    remove_path(tmp_name)

                logger.debug(f"Saved cache entry {key} ({archive.stat().st_size} bytes)")
        except LockTimeout as e:
            raise CacheError(
                f"Could not acquire cache store lock after {self.lock_timeout}s"
            ) from e
