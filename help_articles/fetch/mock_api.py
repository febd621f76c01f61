"""
Offline simulation of the help-center API.

Serves ten canned articles through an httpx.MockTransport and injects
failures on a fixed request cadence so the client's fallback behaviour
can be exercised without a network:
- every 15th request: connect timeout
- every 20th request: bare HTTP 500
- every 25th request: HTTP 429 with a structured error body
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
import random
import threading

import httpx

CATEGORIES = ["Getting Started", "Account", "Billing", "Technical", "Privacy"]

TITLES = {
    "1": "How to Reset Your Password",
    "2": "Understanding Your Dashboard",
    "3": "Setting Up Two-Factor Authentication",
    "4": "Billing Cycle Explained",
    "5": "API Authentication Guide",
    "6": "Managing Team Members",
    "7": "Data Export Options",
    "8": "Privacy Settings Overview",
    "9": "Troubleshooting Connection Issues",
    "10": "Mobile App Installation",
}

TIMEOUT_EVERY = 15
SERVER_ERROR_EVERY = 20
RATE_LIMIT_EVERY = 25

_BODY_TEMPLATE = """# {title}

## Introduction
Welcome to this comprehensive guide. This article will walk you through everything you need to know.

## Step-by-Step Instructions

### Step 1: Prerequisites
Before you begin, make sure you have:
- Valid account credentials
- Admin access (if required)
- Latest app version installed

### Step 2: Main Process
1. Navigate to the settings page
2. Click on the relevant section
3. Follow the on-screen instructions
4. Confirm your changes

### Step 3: Verification
After completing the process:
- Check your email for confirmation
- Test the new configuration
- Contact support if issues persist

## Common Issues

### Issue: Changes not saving
**Solution**: Clear your browser cache and try again.

### Issue: Error message appears
**Solution**: Ensure all required fields are filled correctly.

Last updated: {updated_at}"""


class MockHelpCenterApi:
    """Request handler for httpx.MockTransport.

    The request counter is shared by every client using the same
    transport, so the failure cadence spans the whole process.
    """

    def __init__(
        self,
        min_latency: float = 0.2,
        max_latency: float = 0.8,
        inject_failures: bool = True,
    ):
        self.min_latency = min_latency
        self.max_latency = max_latency
        self.inject_failures = inject_failures
        self.request_count = 0
        self._lock = threading.Lock()

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    async def handle(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.request_count += 1
            count = self.request_count

        if self.max_latency > 0:
            await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

        if self.inject_failures:
            if count % TIMEOUT_EVERY == 0:
                raise httpx.ConnectTimeout("Connection timeout", request=request)
            if count % SERVER_ERROR_EVERY == 0:
                return httpx.Response(500, text="Server error", request=request)
            if count % RATE_LIMIT_EVERY == 0:
                return httpx.Response(
                    429,
                    json={
                        "errorCode": "RATE_LIMIT_EXCEEDED",
                        "errorTitle": "Too Many Requests",
                        "errorMessage": "You have exceeded the rate limit. Please try again in 60 seconds.",
                    },
                    request=request,
                )

        path = request.url.path.rstrip("/")
        if path.endswith("/articles"):
            articles = [mock_article(article_id) for article_id in TITLES]
            return httpx.Response(200, json={"articles": articles}, request=request)

        if "/articles/" in path:
            article_id = path.rsplit("/", 1)[-1]
            if article_id not in TITLES:
                return httpx.Response(
                    404,
                    json={
                        "errorCode": "ARTICLE_NOT_FOUND",
                        "errorTitle": "Not Found",
                        "errorMessage": f"Article {article_id} does not exist.",
                    },
                    request=request,
                )
            return httpx.Response(200, json={"article": mock_article(article_id)}, request=request)

        return httpx.Response(404, text="Not Found", request=request)


def mock_article(article_id: str) -> dict[str, str]:
    """Build the API representation of a canned article."""
    title = TITLES.get(article_id, f"Help Article #{article_id}")
    updated_at = datetime.now(timezone.utc).isoformat()
    index = int(article_id) if article_id.isdigit() else 0
    return {
        "id": article_id,
        "title": title,
        "summary": (
            f"This article covers important information about {title.lower()}. "
            "Learn the key steps and best practices."
        ),
        "content": _BODY_TEMPLATE.format(title=title, updated_at=updated_at),
        "updatedAt": updated_at,
        "category": CATEGORIES[index % len(CATEGORIES)],
    }
