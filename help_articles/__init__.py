"""
Help Articles - offline-tolerant help-center client.

This package serves help-center articles through a read-through cache
that classifies entries as fresh, stale or expired, and a fetch
orchestrator that emits progressive Loading / Success / Error states
while masking connectivity failures behind cached data.

Main entry point is the CLI via the `help-articles` command.

Example:
    $ help-articles list --search billing
"""

__all__ = [
    "__version__",
    "Article",
    "ArticlesRepository",
    "InMemoryArticleCache",
    "classify_failure",
    "filter_articles",
]
__version__ = "0.1.0"

from .cache import InMemoryArticleCache
from .core.types import Article
from .errors import classify_failure
from .repository import ArticlesRepository
from .search import filter_articles
