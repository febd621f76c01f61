"""
Command-line interface for the help-article client.

Uses Typer to expose the read API (list, show) and the background
prefetch hook. Each read renders its outcome sequence as it arrives.
Supports loading .env files for environment-based configuration.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import AsyncIterator

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from .cache import InMemoryArticleCache
from .config import AppConfig, load_config
from .core.types import Article, Error, FetchOutcome, Loading, Success
from .fetch.factory import create_source
from .logging_utils import setup_logging
from .repository import ArticlesRepository
from .search import filter_articles

try:
    from dotenv import load_dotenv
except Exception:  # noqa: BLE001
    load_dotenv = None

app = typer.Typer(add_completion=False, help="Browse help-center articles.")
console = Console()

_CONFIG_OPTION = typer.Option(None, "--config", "-c", exists=True, help="YAML config file.")
_BACKEND_OPTION = typer.Option(None, "--backend", help="Source backend: http or mock.")
_LOG_LEVEL_OPTION = typer.Option(None, "--log-level", help="Logging level.")
_LOG_DIR_OPTION = typer.Option(None, "--log-dir", help="Directory for the log file.")


@app.command("list")
def list_articles(
    refresh: bool = typer.Option(False, "--refresh", help="Skip the cache and fetch from the network."),
    search: str = typer.Option("", "--search", "-s", help="Filter by title, summary or category."),
    config: Path | None = _CONFIG_OPTION,
    backend: str | None = _BACKEND_OPTION,
    log_level: str | None = _LOG_LEVEL_OPTION,
    log_dir: Path | None = _LOG_DIR_OPTION,
):
    """List help articles."""
    repository = _build_repository(_load(config, backend, log_level, log_dir), log_dir)

    def render(articles: list[Article], from_cache: bool) -> None:
        table = Table(title="Help Articles", caption=_origin(from_cache))
        table.add_column("ID", justify="right")
        table.add_column("Title")
        table.add_column("Category")
        for article in filter_articles(articles, search):
            table.add_row(article.id, article.title, article.category)
        console.print(table)

    ok = asyncio.run(_consume(repository.observe_list(refresh), render, "Loading articles..."))
    if not ok:
        raise typer.Exit(code=1)


@app.command("show")
def show_article(
    article_id: str = typer.Argument(..., help="Article identifier."),
    refresh: bool = typer.Option(False, "--refresh", help="Skip the cache and fetch from the network."),
    config: Path | None = _CONFIG_OPTION,
    backend: str | None = _BACKEND_OPTION,
    log_level: str | None = _LOG_LEVEL_OPTION,
    log_dir: Path | None = _LOG_DIR_OPTION,
):
    """Show a single article."""
    repository = _build_repository(_load(config, backend, log_level, log_dir), log_dir)

    def render(article: Article, from_cache: bool) -> None:
        console.rule(f"{article.title} [dim]({article.category})[/dim]")
        console.print(f"[dim]Updated {article.updated_at} - {_origin(from_cache)}[/dim]")
        console.print(Markdown(article.body))

    ok = asyncio.run(
        _consume(repository.observe_one(article_id, refresh), render, f"Loading article {article_id}...")
    )
    if not ok:
        raise typer.Exit(code=1)


@app.command("prefetch")
def prefetch(
    config: Path | None = _CONFIG_OPTION,
    backend: str | None = _BACKEND_OPTION,
    log_level: str | None = _LOG_LEVEL_OPTION,
    log_dir: Path | None = _LOG_DIR_OPTION,
):
    """Refresh the article list once; exits non-zero so a scheduler can retry."""
    repository = _build_repository(_load(config, backend, log_level, log_dir), log_dir)
    if asyncio.run(repository.prefetch()):
        console.print("Prefetch complete.")
        return
    console.print("[yellow]Prefetch failed; will retry on the next cycle.[/yellow]")
    raise typer.Exit(code=1)


def _load(
    config: Path | None,
    backend: str | None,
    log_level: str | None,
    log_dir: Path | None,
) -> AppConfig:
    # Load environment variables from .env if available
    if load_dotenv is not None:
        load_dotenv()

    cfg = load_config(str(config) if config else None)

    # Override with CLI options
    if backend:
        cfg.source.backend = backend
    if log_level:
        cfg.logging.level = log_level
    if log_dir is not None:
        cfg.logging.file = True
    return cfg


def _build_repository(cfg: AppConfig, log_dir: Path | None) -> ArticlesRepository:
    logger = setup_logging(cfg.logging, log_dir)
    try:
        source = create_source(cfg.source)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--backend") from exc
    return ArticlesRepository(
        source,
        InMemoryArticleCache(),
        prefetch_cfg=cfg.prefetch,
        logger=logger.getChild("repository"),
    )


async def _consume(outcomes: AsyncIterator[FetchOutcome], render, loading_text: str) -> bool:
    """Render outcomes as they arrive; return False if the last one was an error."""
    ok = True
    async for outcome in outcomes:
        if isinstance(outcome, Loading):
            console.print(f"[dim]{loading_text}[/dim]")
        elif isinstance(outcome, Success):
            render(outcome.data, outcome.from_cache)
            ok = True
        elif isinstance(outcome, Error):
            console.print(f"[red]{outcome.message}[/red]")
            if outcome.error_code:
                console.print(f"[dim]Error code: {outcome.error_code}[/dim]")
            if outcome.can_retry:
                console.print("[dim]Run again with --refresh to retry.[/dim]")
            ok = False
    return ok


def _origin(from_cache: bool) -> str:
    return "from cache" if from_cache else "fresh from server"


if __name__ == "__main__":
    app()
