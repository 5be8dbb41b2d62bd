from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from lms_admin.app.config import TableConfig

RowT = TypeVar("RowT")
CacheKey = tuple[str, str | None]


@dataclass(frozen=True)
class CachedListing(Generic[RowT]):
    rows: tuple[RowT, ...]
    loaded_at: float


class ListingCache(Generic[RowT]):
    """Row lists fetched per LMS resource, reused until ``ttl_seconds`` pass.

    Entries are keyed by resource name plus an optional scope, the parent id
    of ``ByCourse``/``ByModule`` style listings. Rows are held as a tuple so
    every read hands back a fresh list.
    """

    def __init__(self, ttl_seconds: float = 20.0, now: Callable[[], float] | None = None) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be greater than 0")
        self.ttl_seconds = ttl_seconds
        self._now = now or time.monotonic
        self._entries: dict[CacheKey, CachedListing[RowT]] = {}
        self.hits = 0
        self.misses = 0

    @classmethod
    def from_config(cls, config: TableConfig, now: Callable[[], float] | None = None) -> "ListingCache[RowT]":
        return cls(ttl_seconds=config.cache_ttl_seconds, now=now)

    def rows(self, resource: str, scope: str | None = None) -> list[RowT] | None:
        entry = self._entries.get((resource, scope))
        if entry is None or self._now() - entry.loaded_at >= self.ttl_seconds:
            self._entries.pop((resource, scope), None)
            self.misses += 1
            return None
        self.hits += 1
        return list(entry.rows)

    def store(self, resource: str, rows: Sequence[RowT], scope: str | None = None) -> list[RowT]:
        entry = CachedListing(rows=tuple(rows), loaded_at=self._now())
        self._entries[(resource, scope)] = entry
        return list(entry.rows)

    def get_or_load(
        self,
        resource: str,
        load: Callable[[], Sequence[RowT]],
        scope: str | None = None,
    ) -> list[RowT]:
        cached = self.rows(resource, scope)
        if cached is not None:
            return cached
        return self.store(resource, load(), scope)

    def invalidate(self, resource: str, scope: str | None = None) -> None:
        """Drop one scoped listing, or every listing of ``resource`` when no scope is given."""
        if scope is not None:
            self._entries.pop((resource, scope), None)
            return
        for key in [key for key in self._entries if key[0] == resource]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()
