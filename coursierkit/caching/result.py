"""Outcome of a cache restore or save."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CacheResult:
    """
    Outcome of a cache operation.

    Cache operations never raise; a failed restore or save is reported as
    a result with ``ok=False`` and the reason.
    """

    ok: bool
    key: Optional[str] = None
    hit: bool = False
    reason: Optional[str] = None

    @classmethod
    def restored(cls, key: str) -> "CacheResult":
        return cls(ok=True, key=key, hit=True)

    @classmethod
    def missed(cls) -> "CacheResult":
        return cls(ok=True)

    @classmethod
    def saved(cls, key: str) -> "CacheResult":
        return cls(ok=True, key=key)

    @classmethod
    def failed(cls, reason: str) -> "CacheResult":
        return cls(ok=False, reason=reason)
