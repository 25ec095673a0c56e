"""Short-lived per-user cache of project summaries."""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

from project_terminal.models import ProjectSummary

logger = structlog.get_logger()


@dataclass
class _Entry:
    summaries: list[ProjectSummary]
    expires_at: float


class ProjectCache:
    """In-memory TTL cache mapping a user id to their project summaries.

    Only an acceleration path for mention lookups: every hit is re-verified
    against the store by the resolver, so a stale or cleared cache costs an
    extra lookup and never changes a result.

    Entries expire a fixed ``ttl_seconds`` after insertion. When ``max_size``
    users are cached the oldest insertion is evicted.
    """

    def __init__(
        self,
        ttl_seconds: float = 300,
        max_size: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, user_id: str) -> list[ProjectSummary] | None:
        """Return the cached summaries, or None on a miss or expiry."""
        with self._lock:
            entry = self._entries.get(user_id)
            if entry is None:
                self.misses += 1
                logger.debug("Project cache miss", user_id=user_id)
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[user_id]
                self.misses += 1
                logger.debug("Project cache entry expired", user_id=user_id)
                return None
            self.hits += 1
            logger.debug("Project cache hit", user_id=user_id, count=len(entry.summaries))
            return list(entry.summaries)

    def set(self, user_id: str, summaries: list[ProjectSummary]) -> None:
        """Store a freshly computed summary list for a user."""
        with self._lock:
            if user_id not in self._entries and len(self._entries) >= self.max_size:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                logger.info("Project cache evicted oldest entry", user_id=oldest, max_size=self.max_size)
            self._entries.pop(user_id, None)
            self._entries[user_id] = _Entry(list(summaries), self._clock() + self.ttl_seconds)

    def invalidate(self, user_id: str) -> None:
        """Drop a user's entry after their accessible-project set may have changed."""
        with self._lock:
            removed = self._entries.pop(user_id, None)
        if removed is not None:
            logger.info("Project cache invalidated", user_id=user_id)

    def invalidate_project(self, project_id: str) -> int:
        """Drop every user entry that lists ``project_id``.

        Returns:
            Number of user entries removed
        """
        with self._lock:
            affected = [
                user_id
                for user_id, entry in self._entries.items()
                if any(summary.id == project_id for summary in entry.summaries)
            ]
            for user_id in affected:
                del self._entries[user_id]
        if affected:
            logger.info("Project cache invalidated for project", project_id=project_id, users_affected=len(affected))
        return len(affected)

    def cleanup(self) -> int:
        """Remove expired entries. Returns how many were removed."""
        now = self._clock()
        with self._lock:
            expired = [user_id for user_id, entry in self._entries.items() if now >= entry.expires_at]
            for user_id in expired:
                del self._entries[user_id]
        if expired:
            logger.info("Project cache cleanup", entries_removed=len(expired))
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            size = len(self._entries)
            self._entries.clear()
            self.hits = 0
            self.misses = 0
        logger.info("Project cache cleared", entries_cleared=size)

    def stats(self) -> dict[str, Any]:
        with self._lock:
            lookups = self.hits + self.misses
            return {
                "size": len(self._entries),
                "hits": self.hits,
                "misses": self.misses,
                "hit_rate": round(self.hits / lookups * 100, 2) if lookups else 0.0,
                "max_size": self.max_size,
                "ttl_seconds": self.ttl_seconds,
            }
