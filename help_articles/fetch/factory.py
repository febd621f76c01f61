"""Source factory and registry for swappable article backends."""

from __future__ import annotations

from typing import Callable

from ..config import SourceConfig
from .http_source import HttpArticleSource
from .mock_api import MockHelpCenterApi
from .source import ArticleSource


SourceBuilder = Callable[[SourceConfig], ArticleSource]


def _build_http(cfg: SourceConfig) -> ArticleSource:
    return HttpArticleSource(
        base_url=cfg.base_url,
        timeout=cfg.timeout_seconds,
        user_agent=cfg.user_agent,
        trust_env=cfg.trust_env,
    )


def _build_mock(cfg: SourceConfig) -> ArticleSource:
    api = MockHelpCenterApi(
        min_latency=cfg.mock_min_latency,
        max_latency=cfg.mock_max_latency,
        inject_failures=cfg.mock_inject_failures,
    )
    return HttpArticleSource(
        base_url=cfg.base_url,
        timeout=cfg.timeout_seconds,
        user_agent=cfg.user_agent,
        trust_env=False,
        transport=api.transport(),
    )


_SOURCE_REGISTRY: dict[str, SourceBuilder] = {
    "http": _build_http,
    "mock": _build_mock,
}


def available_sources() -> list[str]:
    """Return the set of registered source backend names."""
    return sorted(_SOURCE_REGISTRY.keys())


def create_source(cfg: SourceConfig) -> ArticleSource:
    """Build a source instance from runtime config."""
    name = cfg.backend.lower().strip()
    builder = _SOURCE_REGISTRY.get(name)
    if builder is None:
        supported = ", ".join(available_sources())
        raise ValueError(f"Unsupported source backend: {cfg.backend}. Supported: {supported}")
    return builder(cfg)
