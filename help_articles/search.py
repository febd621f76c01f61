"""Client-side filtering of the article list."""

from __future__ import annotations

from .core.types import Article


def filter_articles(articles: list[Article], query: str) -> list[Article]:
    """Return articles whose title, summary or category contains the query.

    Matching is case-insensitive; a blank query returns every article.
    """
    if not query.strip():
        return list(articles)

    needle = query.lower()
    return [
        article
        for article in articles
        if needle in article.title.lower()
        or needle in article.summary.lower()
        or needle in article.category.lower()
    ]
