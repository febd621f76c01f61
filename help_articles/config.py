"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SourceConfig: Article source backend and HTTP settings
- PrefetchConfig: Background prefetch retry settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container

Cache staleness and expiry thresholds are process-wide constants in
help_articles.cache and are intentionally not configurable here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml


@dataclass
class SourceConfig:
    """Configuration for the article source.

    Attributes:
        backend: "http" for the real API, "mock" for the offline simulation
        base_url: API root URL
        timeout_seconds: HTTP request timeout
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
        mock_min_latency: Lower bound of simulated latency for the mock backend
        mock_max_latency: Upper bound of simulated latency for the mock backend
        mock_inject_failures: Whether the mock backend injects periodic failures
    """

    backend: str = "http"
    base_url: str = "https://mock-api.example.com/"
    timeout_seconds: float = 10.0
    trust_env: bool = True
    user_agent: str = "help-articles/0.1.0"
    mock_min_latency: float = 0.2
    mock_max_latency: float = 0.8
    mock_inject_failures: bool = True


@dataclass
class PrefetchConfig:
    """Configuration for the background prefetch path.

    Attributes:
        max_attempts: Attempts per prefetch cycle before giving up
        backoff_seconds: Linear backoff unit between attempts (0 retries immediately)
    """

    max_attempts: int = 3
    backoff_seconds: float = 0.0


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "help_articles.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    source: SourceConfig = field(default_factory=SourceConfig)
    prefetch: PrefetchConfig = field(default_factory=PrefetchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "source": {
            "backend": cfg.source.backend,
            "base_url": cfg.source.base_url,
            "timeout_seconds": cfg.source.timeout_seconds,
            "trust_env": cfg.source.trust_env,
            "user_agent": cfg.source.user_agent,
            "mock_min_latency": cfg.source.mock_min_latency,
            "mock_max_latency": cfg.source.mock_max_latency,
            "mock_inject_failures": cfg.source.mock_inject_failures,
        },
        "prefetch": {
            "max_attempts": cfg.prefetch.max_attempts,
            "backoff_seconds": cfg.prefetch.backoff_seconds,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        source=SourceConfig(**data["source"]),
        prefetch=PrefetchConfig(**data["prefetch"]),
        logging=LoggingConfig(**data["logging"]),
    )
