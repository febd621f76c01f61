"""Tests for the offline help-center simulation."""

import asyncio

import pytest

from help_articles.fetch.http_source import HttpArticleSource
from help_articles.fetch.mock_api import (
    RATE_LIMIT_EVERY,
    SERVER_ERROR_EVERY,
    TIMEOUT_EVERY,
    MockHelpCenterApi,
    mock_article,
)
from help_articles.fetch.source import SourceHTTPError, SourceTimeoutError


def _source(api: MockHelpCenterApi) -> HttpArticleSource:
    return HttpArticleSource(
        base_url="https://mock-api.example.com/",
        transport=api.transport(),
        trust_env=False,
    )


def test_list_serves_ten_articles():
    api = MockHelpCenterApi(min_latency=0, max_latency=0)

    articles = asyncio.run(_source(api).fetch_articles())

    assert len(articles) == 10
    assert articles[0].title == "How to Reset Your Password"
    assert articles[0].category == "Account"
    assert articles[4].category == "Getting Started"
    assert api.request_count == 1


def test_detail_for_known_article():
    api = MockHelpCenterApi(min_latency=0, max_latency=0)

    article = asyncio.run(_source(api).fetch_article("3"))

    assert article.title == "Setting Up Two-Factor Authentication"
    assert article.body.startswith("# Setting Up Two-Factor Authentication")


def test_unknown_article_is_structured_not_found():
    api = MockHelpCenterApi(min_latency=0, max_latency=0)

    with pytest.raises(SourceHTTPError) as excinfo:
        asyncio.run(_source(api).fetch_article("404"))

    assert excinfo.value.status_code == 404
    assert excinfo.value.body.error_code == "ARTICLE_NOT_FOUND"


def test_failure_cadence():
    api = MockHelpCenterApi(min_latency=0, max_latency=0)
    source = _source(api)

    api.request_count = TIMEOUT_EVERY - 1
    with pytest.raises(SourceTimeoutError):
        asyncio.run(source.fetch_articles())

    api.request_count = SERVER_ERROR_EVERY - 1
    with pytest.raises(SourceHTTPError) as server_error:
        asyncio.run(source.fetch_articles())
    assert server_error.value.status_code == 500
    assert server_error.value.body is None

    api.request_count = RATE_LIMIT_EVERY - 1
    with pytest.raises(SourceHTTPError) as rate_limited:
        asyncio.run(source.fetch_articles())
    assert rate_limited.value.status_code == 429
    assert rate_limited.value.body.error_code == "RATE_LIMIT_EXCEEDED"


def test_failures_can_be_disabled():
    api = MockHelpCenterApi(min_latency=0, max_latency=0, inject_failures=False)
    api.request_count = TIMEOUT_EVERY - 1

    articles = asyncio.run(_source(api).fetch_articles())

    assert len(articles) == 10


def test_mock_article_for_unlisted_id():
    payload = mock_article("42")

    assert payload["title"] == "Help Article #42"
    assert payload["category"] == "Billing"
