"""
Fetch orchestration for help articles.

ArticlesRepository combines the freshness cache with an ArticleSource.
Each read is an async generator of outcomes:

1. Loading, always first.
2. Unless force_refresh is set, the cache is consulted:
   - fresh hit: Success(from_cache=True) and the sequence ends
   - stale hit: Success(from_cache=True), then a network refresh
   - miss/expired: straight to the network
3. The network result is written through to the cache and emitted as
   Success(from_cache=False). On failure the error is classified; a
   network-level failure is masked (the sequence ends quietly) when a
   second cache lookup still finds data, otherwise the Error is emitted.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import AsyncIterator, Awaitable, Callable, TypeVar

from .cache import InMemoryArticleCache
from .config import PrefetchConfig
from .core.types import Article, CacheHit, CacheReadOutcome, FetchOutcome, Loading, Success
from .errors import classify_failure
from .fetch.source import ArticleSource
from .logging_utils import log_event

T = TypeVar("T")

LIST_KEY = "articles"


@dataclass
class FetchStats:
    """Statistics collected across reads.

    Attributes:
        cache_hits: Reads answered by a fresh cache entry
        stale_hits: Reads that served stale data before refreshing
        network_success: Successful source fetches
        network_failed: Failed source fetches
        masked_failures: Network failures hidden behind cached data
    """
    cache_hits: int = 0
    stale_hits: int = 0
    network_success: int = 0
    network_failed: int = 0
    masked_failures: int = 0


class ArticlesRepository:
    """Read API over the cache and an article source.

    Reads never hold a lock across the network call; the cache is only
    touched before the fetch (lookup) and after it (write or re-check).
    Concurrent reads are independent and share the cache.
    """

    def __init__(
        self,
        source: ArticleSource,
        cache: InMemoryArticleCache,
        prefetch_cfg: PrefetchConfig | None = None,
        logger: logging.Logger | None = None,
    ):
        self.source = source
        self.cache = cache
        self.prefetch_cfg = prefetch_cfg or PrefetchConfig()
        self.logger = logger or logging.getLogger("help_articles.repository")
        self.stats = FetchStats()

    def observe_list(self, force_refresh: bool = False) -> AsyncIterator[FetchOutcome[list[Article]]]:
        return self._observe(
            LIST_KEY,
            self.cache.read_list,
            self.source.fetch_articles,
            self.cache.write_list,
            force_refresh,
        )

    def observe_one(self, article_id: str, force_refresh: bool = False) -> AsyncIterator[FetchOutcome[Article]]:
        return self._observe(
            f"{LIST_KEY}/{article_id}",
            lambda: self.cache.read_one(article_id),
            lambda: self.source.fetch_article(article_id),
            self.cache.write_one,
            force_refresh,
        )

    async def prefetch(self) -> bool:
        """Refresh the article list for the background scheduler.

        Makes up to ``prefetch_cfg.max_attempts`` attempts and never raises;
        retry cadence beyond this cycle belongs to the caller.
        """
        attempts = max(1, self.prefetch_cfg.max_attempts)
        for attempt in range(1, attempts + 1):
            try:
                articles = await self.source.fetch_articles()
            except Exception as exc:  # noqa: BLE001
                self.stats.network_failed += 1
                log_event(
                    self.logger,
                    "Prefetch attempt failed",
                    level=logging.WARNING,
                    event="prefetch_attempt_failed",
                    attempt=attempt,
                    max_attempts=attempts,
                    error=f"{type(exc).__name__}: {exc}",
                )
                if attempt < attempts and self.prefetch_cfg.backoff_seconds > 0:
                    await asyncio.sleep(self.prefetch_cfg.backoff_seconds * attempt)
                continue

            self.stats.network_success += 1
            self.cache.write_list(articles)
            log_event(
                self.logger,
                "Prefetch succeeded",
                event="prefetch_success",
                attempt=attempt,
                count=len(articles),
            )
            return True

        log_event(
            self.logger,
            "Prefetch gave up",
            level=logging.WARNING,
            event="prefetch_exhausted",
            max_attempts=attempts,
        )
        return False

    def clear(self) -> None:
        self.cache.clear()
        log_event(self.logger, "Cache cleared", event="cache_cleared")

    async def _observe(
        self,
        key: str,
        read_cache: Callable[[], CacheReadOutcome[T]],
        fetch: Callable[[], Awaitable[T]],
        write_cache: Callable[[T], None],
        force_refresh: bool,
    ) -> AsyncIterator[FetchOutcome[T]]:
        yield Loading()

        if not force_refresh:
            cached = read_cache()
            if isinstance(cached, CacheHit) and not cached.is_stale:
                self.stats.cache_hits += 1
                log_event(self.logger, "Cache hit", level=logging.DEBUG, event="cache_hit", key=key)
                yield Success(cached.data, from_cache=True)
                return
            if isinstance(cached, CacheHit):
                self.stats.stale_hits += 1
                log_event(self.logger, "Stale cache hit, refreshing", event="cache_stale", key=key)
                yield Success(cached.data, from_cache=True)
            else:
                log_event(
                    self.logger,
                    "Cache unavailable, fetching",
                    level=logging.DEBUG,
                    event="cache_miss",
                    key=key,
                    outcome=type(cached).__name__,
                )

        log_event(self.logger, "Fetching from network", level=logging.DEBUG, event="fetch_start", key=key)
        try:
            data = await fetch()
        except Exception as exc:  # noqa: BLE001
            self.stats.network_failed += 1
            error = classify_failure(exc)
            # Re-read: a concurrent writer may have filled the slot during the fetch
            if error.is_network_error and isinstance(read_cache(), CacheHit):
                self.stats.masked_failures += 1
                log_event(
                    self.logger,
                    "Network failure masked by cached data",
                    event="failure_masked",
                    key=key,
                    error=f"{type(exc).__name__}: {exc}",
                )
                return
            log_event(
                self.logger,
                "Fetch failed",
                level=logging.WARNING,
                event="fetch_failed",
                key=key,
                error=f"{type(exc).__name__}: {exc}",
                is_network_error=error.is_network_error,
                can_retry=error.can_retry,
                error_code=error.error_code,
            )
            yield error
            return

        self.stats.network_success += 1
        write_cache(data)
        log_event(self.logger, "Fetched from network", event="fetch_success", key=key)
        yield Success(data, from_cache=False)
