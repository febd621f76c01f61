"""
Failure classification for article reads.

Every exception raised by an ArticleSource is classified exactly once
into an Error outcome tagged with is_network_error and can_retry:

| Condition                            | network | retry          |
|--------------------------------------|---------|----------------|
| Connection refused / name resolution | yes     | yes            |
| Timeout                              | yes     | yes            |
| Structured error body                | no      | unless 404     |
| HTTP 5xx without body                | yes     | yes            |
| HTTP 404 without body                | no      | no             |
| Other HTTP status                    | no      | yes            |
| Anything else                        | no      | yes            |
"""

from __future__ import annotations

from .core.types import Error
from .fetch.source import SourceConnectionError, SourceHTTPError, SourceTimeoutError

NO_CONNECTION_MESSAGE = "No internet connection. Please check your network settings."
TIMEOUT_MESSAGE = "Connection timed out. Please try again."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."
NOT_FOUND_MESSAGE = "Article not found."


def classify_failure(exc: BaseException) -> Error:
    """Map a source failure to an Error outcome."""
    if isinstance(exc, (SourceTimeoutError, TimeoutError)):
        return Error(message=TIMEOUT_MESSAGE, is_network_error=True, can_retry=True)

    if isinstance(exc, (SourceConnectionError, ConnectionError)):
        return Error(message=NO_CONNECTION_MESSAGE, is_network_error=True, can_retry=True)

    if isinstance(exc, SourceHTTPError):
        return _classify_http(exc)

    return Error(
        message=f"An unexpected error occurred: {exc}",
        is_network_error=False,
        can_retry=True,
    )


def _classify_http(exc: SourceHTTPError) -> Error:
    code = exc.status_code
    if exc.body is not None:
        return Error(
            message=exc.body.error_message,
            is_network_error=False,
            can_retry=code != 404,
            error_code=exc.body.error_code,
        )
    if 500 <= code <= 599:
        return Error(message=SERVER_ERROR_MESSAGE, is_network_error=True, can_retry=True)
    if code == 404:
        return Error(message=NOT_FOUND_MESSAGE, is_network_error=False, can_retry=False)
    return Error(
        message=f"An error occurred (HTTP {code})",
        is_network_error=False,
        can_retry=True,
    )
