"""
Article fetching.

This package defines the abstract article source, its failure
taxonomy, and the httpx-backed implementations.
"""

from .factory import available_sources, create_source
from .http_source import HttpArticleSource
from .mock_api import MockHelpCenterApi
from .source import (
    ArticleSource,
    ErrorBody,
    SourceConnectionError,
    SourceError,
    SourceHTTPError,
    SourcePayloadError,
    SourceTimeoutError,
)

__all__ = [
    "ArticleSource",
    "ErrorBody",
    "SourceError",
    "SourceConnectionError",
    "SourceTimeoutError",
    "SourceHTTPError",
    "SourcePayloadError",
    "HttpArticleSource",
    "MockHelpCenterApi",
    "available_sources",
    "create_source",
]
