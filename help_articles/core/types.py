"""
Core data types for the help-article client.

This module defines the records and tagged outcomes shared by the cache
and the fetch orchestrator:
- Article: A help-center article as served by the API
- CacheHit / CacheMiss / CacheExpired: Result of a cache lookup
- Loading / Success / Error: States emitted by a read sequence
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Article:
    """A single help-center article.

    The cache treats everything except ``id`` as opaque payload.

    Attributes:
        id: Unique article identifier
        title: The article headline
        summary: Short description shown in list views
        body: Full article content (markdown)
        category: Section the article belongs to (e.g., "Billing")
        updated_at: ISO 8601 timestamp of the last edit, author-supplied
    """
    id: str
    title: str
    summary: str
    body: str
    category: str
    updated_at: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Article:
        """Build an Article from the API's JSON representation."""
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            summary=data.get("summary") or "",
            body=data.get("content") or "",
            category=data.get("category") or "",
            updated_at=data.get("updatedAt") or "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "content": self.body,
            "category": self.category,
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class CacheHit(Generic[T]):
    """Cached data that is still servable.

    Attributes:
        data: The cached article or article list
        timestamp: When the entry was stored
        is_stale: True once the entry is older than the staleness threshold
    """
    data: T
    timestamp: datetime
    is_stale: bool


@dataclass(frozen=True)
class CacheMiss:
    """Nothing stored under the key (never written, or already purged)."""


@dataclass(frozen=True)
class CacheExpired:
    """The entry crossed the expiry threshold and was removed by this read."""


CacheReadOutcome = Union[CacheHit[T], CacheMiss, CacheExpired]


@dataclass(frozen=True)
class Loading:
    """Emitted first by every read sequence."""


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T
    from_cache: bool = False


@dataclass(frozen=True)
class Error:
    """A classified failure surfaced to the consumer.

    Attributes:
        message: Human-readable explanation
        is_network_error: True for connectivity-level problems that cached data may mask
        can_retry: Whether retrying the same request could succeed
        error_code: Server-provided code from a structured error body, if any
    """
    message: str
    is_network_error: bool
    can_retry: bool = True
    error_code: str | None = None


FetchOutcome = Union[Loading, Success[T], Error]
