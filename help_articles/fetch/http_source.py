"""
Help-center API client using httpx.

Endpoints:
- GET articles       -> {"articles": [...]}
- GET articles/{id}  -> {"article": {...}}

Transport failures and non-2xx responses are translated into the
SourceError taxonomy so callers never handle httpx exceptions directly.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx

from ..core.types import Article
from .source import (
    ArticleSource,
    ErrorBody,
    SourceConnectionError,
    SourceHTTPError,
    SourcePayloadError,
    SourceTimeoutError,
)


class HttpArticleSource(ArticleSource):
    """ArticleSource backed by an httpx.AsyncClient.

    A fresh client is opened per request; the source itself holds no
    connection state and can be shared by concurrent reads.

    Attributes:
        base_url: API root, e.g. "https://mock-api.example.com/"
        timeout: Request timeout in seconds
        user_agent: User-Agent header string
        trust_env: Whether to respect system proxy settings
        transport: Optional custom transport (used for the offline mock API)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        user_agent: str | None = None,
        trust_env: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self.user_agent = user_agent
        self.trust_env = trust_env
        self.transport = transport

    async def fetch_articles(self) -> list[Article]:
        data = await self._get_json("articles")
        items = data.get("articles") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise SourcePayloadError("Response is missing the 'articles' array")
        return [_parse_article(item) for item in items]

    async def fetch_article(self, article_id: str) -> Article:
        data = await self._get_json(f"articles/{quote(article_id, safe='')}")
        item = data.get("article") if isinstance(data, dict) else None
        if not isinstance(item, dict):
            raise SourcePayloadError("Response is missing the 'article' object")
        return _parse_article(item)

    async def _get_json(self, path: str) -> Any:
        headers = {"Accept": "application/json"}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=headers,
                trust_env=self.trust_env,
                transport=self.transport,
            ) as client:
                resp = await client.get(path)
        except httpx.TimeoutException as exc:
            raise SourceTimeoutError(str(exc) or "Request timed out") from exc
        except httpx.NetworkError as exc:
            raise SourceConnectionError(str(exc) or "Connection failed") from exc

        if not resp.is_success:
            raise SourceHTTPError(resp.status_code, _parse_error_body(resp))

        try:
            return resp.json()
        except ValueError as exc:
            raise SourcePayloadError(f"Invalid JSON: {resp.text[:200]}") from exc


def _parse_article(item: Any) -> Article:
    if not isinstance(item, dict) or "id" not in item:
        raise SourcePayloadError(f"Malformed article payload: {item!r}"[:200])
    return Article.from_dict(item)


def _parse_error_body(resp: httpx.Response) -> ErrorBody | None:
    try:
        return ErrorBody.from_dict(resp.json())
    except ValueError:
        return None
