"""
Core domain models.

This package contains data types that are independent of any
specific transport or presentation layer.
"""

from .types import (
    Article,
    CacheExpired,
    CacheHit,
    CacheMiss,
    CacheReadOutcome,
    Error,
    FetchOutcome,
    Loading,
    Success,
)

__all__ = [
    "Article",
    "CacheHit",
    "CacheMiss",
    "CacheExpired",
    "CacheReadOutcome",
    "Loading",
    "Success",
    "Error",
    "FetchOutcome",
]
