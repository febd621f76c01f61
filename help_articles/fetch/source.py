"""Abstract article source and the failures it may raise."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from ..core.types import Article


class ArticleSource(ABC):
    """Capability for fetching articles over the network."""

    @abstractmethod
    async def fetch_articles(self) -> list[Article]:
        """Return the full article list."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_article(self, article_id: str) -> Article:
        """Return a single article by id."""
        raise NotImplementedError


@dataclass(frozen=True)
class ErrorBody:
    """Structured error payload returned by the help-center API.

    Attributes:
        error_code: Machine-readable code (e.g., "RATE_LIMIT_EXCEEDED")
        error_title: Short title
        error_message: Message meant for the user
    """
    error_code: str
    error_title: str
    error_message: str

    @classmethod
    def from_dict(cls, data: Any) -> ErrorBody | None:
        """Parse an error payload, returning None if it is not structured."""
        if not isinstance(data, dict):
            return None
        code = data.get("errorCode")
        message = data.get("errorMessage")
        if not isinstance(code, str) or not isinstance(message, str):
            return None
        return cls(
            error_code=code,
            error_title=str(data.get("errorTitle", "")),
            error_message=message,
        )


class SourceError(Exception):
    """Base class for failures raised by an ArticleSource."""


class SourceConnectionError(SourceError):
    """Host could not be resolved or the connection was refused."""


class SourceTimeoutError(SourceError):
    """The request did not complete within the source's timeout."""


class SourceHTTPError(SourceError):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int, body: ErrorBody | None = None):
        self.status_code = status_code
        self.body = body
        detail = f": {body.error_code}" if body else ""
        super().__init__(f"HTTP {status_code}{detail}")


class SourcePayloadError(SourceError):
    """A success response could not be decoded into articles."""
