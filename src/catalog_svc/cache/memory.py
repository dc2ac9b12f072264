"""In-memory cache of compiled explores per project."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

from ..explores.types import AnyExplore


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A cached explore snapshot with metadata."""
    project_uuid: str
    explores: tuple[AnyExplore, ...]
    created_at: float
    ttl_seconds: float | None

    @property
    def is_expired(self) -> bool:
        if self.ttl_seconds is None:
            return False
        return time.time() > self.created_at + self.ttl_seconds

    @property
    def age_seconds(self) -> float:
        return time.time() - self.created_at


@dataclass
class ExploreCache:
    """
    Cache of compiled explore snapshots, keyed by project.

    Snapshots are replaced whole, never mutated. Reads are lock-free;
    writes take an asyncio lock. A TTL of None keeps entries until they
    are replaced or invalidated.
    """
    default_ttl_seconds: float | None = None

    _store: dict[str, CacheEntry] = field(default_factory=dict, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)

    # Stats
    _hits: int = field(default=0, init=False)
    _misses: int = field(default=0, init=False)

    def get(self, project_uuid: str) -> list[AnyExplore] | None:
        """
        Get the explores of a project.

        Returns None if the project was never compiled or its entry expired.
        """
        entry = self._store.get(project_uuid)
        if entry is None or entry.is_expired:
            self._misses += 1
            return None

        self._hits += 1
        return list(entry.explores)

    def get_entry(self, project_uuid: str) -> CacheEntry | None:
        """Get the full cache entry (including metadata)."""
        entry = self._store.get(project_uuid)
        if entry is None or entry.is_expired:
            return None
        return entry

    async def set(
        self,
        project_uuid: str,
        explores: list[AnyExplore],
        ttl_seconds: float | None = None,
    ) -> None:
        """Replace the explore snapshot of a project."""
        entry = CacheEntry(
            project_uuid=project_uuid,
            explores=tuple(explores),
            created_at=time.time(),
            ttl_seconds=ttl_seconds if ttl_seconds is not None else self.default_ttl_seconds,
        )
        async with self._lock:
            self._store[project_uuid] = entry
        logger.debug(f"Cached {len(explores)} explores for project {project_uuid}")

    async def invalidate(self, project_uuid: str) -> bool:
        """Drop a project's snapshot."""
        async with self._lock:
            return self._store.pop(project_uuid, None) is not None

    async def clear(self) -> None:
        async with self._lock:
            self._store.clear()

    @property
    def size(self) -> int:
        return len(self._store)

    @property
    def stats(self) -> dict:
        """Cache statistics."""
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0

        return {
            "projects": self.size,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate_percent": round(hit_rate, 2),
        }
