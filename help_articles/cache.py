"""
In-memory freshness cache for help articles.

Two independent slots are kept: one for the full article list and one
keyed by article id. Every read classifies the entry by age:
- age < STALE_THRESHOLD: fresh hit
- STALE_THRESHOLD <= age < EXPIRY_THRESHOLD: stale hit (still servable)
- age >= EXPIRY_THRESHOLD: expired, the entry is purged by the read
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
import logging
import threading
from typing import Callable, Generic, TypeVar

from .core.types import Article, CacheExpired, CacheHit, CacheMiss, CacheReadOutcome

T = TypeVar("T")

STALE_THRESHOLD = timedelta(hours=24)
EXPIRY_THRESHOLD = timedelta(hours=72)

Clock = Callable[[], datetime]

logger = logging.getLogger("help_articles.cache")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Payload and store time, replaced together as one object."""
    data: T
    stored_at: datetime


@dataclass
class CacheStats:
    """Counters for cache read classifications.

    Attributes:
        hits: Fresh hits
        stale_hits: Hits older than the staleness threshold
        misses: Reads of keys that were never written or already purged
        expired: Reads that found and purged an expired entry
    """
    hits: int = 0
    stale_hits: int = 0
    misses: int = 0
    expired: int = 0


class InMemoryArticleCache:
    """Thread-safe keyed store with staleness and expiry classification.

    All operations take a single lock for the duration of a dictionary
    lookup or swap, so readers never see a half-written entry and
    concurrent writers to the same key resolve to whichever finished last.
    No operation performs I/O.
    """

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._lock = threading.Lock()
        self._articles: dict[str, CacheEntry[Article]] = {}
        self._article_list: CacheEntry[list[Article]] | None = None
        self._stats = CacheStats()

    def read_list(self) -> CacheReadOutcome[list[Article]]:
        with self._lock:
            entry = self._article_list
            if entry is None:
                self._stats.misses += 1
                return CacheMiss()
            now = self._clock()
            if self._is_expired(entry, now):
                self._article_list = None
                self._stats.expired += 1
                logger.debug("Purged expired article list")
                return CacheExpired()
            # Readers get their own list; the stored one stays private to the cache
            return replace(self._hit(entry, now), data=list(entry.data))

    def read_one(self, article_id: str) -> CacheReadOutcome[Article]:
        with self._lock:
            entry = self._articles.get(article_id)
            if entry is None:
                self._stats.misses += 1
                return CacheMiss()
            now = self._clock()
            if self._is_expired(entry, now):
                del self._articles[article_id]
                self._stats.expired += 1
                logger.debug("Purged expired article %s", article_id)
                return CacheExpired()
            return self._hit(entry, now)

    def write_list(self, articles: list[Article]) -> None:
        """Replace the list slot and fan the articles out to the per-id slots.

        Every written entry shares the same store time.
        """
        with self._lock:
            now = self._clock()
            self._article_list = CacheEntry(list(articles), now)
            for article in articles:
                self._articles[article.id] = CacheEntry(article, now)

    def write_one(self, article: Article) -> None:
        """Replace a single per-id slot. The list slot is left untouched."""
        with self._lock:
            self._articles[article.id] = CacheEntry(article, self._clock())

    def clear(self) -> None:
        with self._lock:
            self._articles.clear()
            self._article_list = None

    def stats(self) -> CacheStats:
        """Return a snapshot of the read counters."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                stale_hits=self._stats.stale_hits,
                misses=self._stats.misses,
                expired=self._stats.expired,
            )

    def _hit(self, entry: CacheEntry[T], now: datetime) -> CacheHit[T]:
        is_stale = now - entry.stored_at >= STALE_THRESHOLD
        if is_stale:
            self._stats.stale_hits += 1
        else:
            self._stats.hits += 1
        return CacheHit(data=entry.data, timestamp=entry.stored_at, is_stale=is_stale)

    @staticmethod
    def _is_expired(entry: CacheEntry, now: datetime) -> bool:
        return now - entry.stored_at >= EXPIRY_THRESHOLD
