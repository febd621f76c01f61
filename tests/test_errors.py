"""Tests for source failure classification."""

import pytest

from help_articles.core.types import Error
from help_articles.errors import (
    NO_CONNECTION_MESSAGE,
    NOT_FOUND_MESSAGE,
    SERVER_ERROR_MESSAGE,
    TIMEOUT_MESSAGE,
    classify_failure,
)
from help_articles.fetch.source import (
    ErrorBody,
    SourceConnectionError,
    SourceHTTPError,
    SourcePayloadError,
    SourceTimeoutError,
)


@pytest.mark.parametrize(
    "exc, expected",
    [
        (
            SourceConnectionError("refused"),
            Error(NO_CONNECTION_MESSAGE, is_network_error=True, can_retry=True),
        ),
        (
            ConnectionRefusedError("refused"),
            Error(NO_CONNECTION_MESSAGE, is_network_error=True, can_retry=True),
        ),
        (
            SourceTimeoutError("slow"),
            Error(TIMEOUT_MESSAGE, is_network_error=True, can_retry=True),
        ),
        (
            TimeoutError(),
            Error(TIMEOUT_MESSAGE, is_network_error=True, can_retry=True),
        ),
        (
            SourceHTTPError(500),
            Error(SERVER_ERROR_MESSAGE, is_network_error=True, can_retry=True),
        ),
        (
            SourceHTTPError(599),
            Error(SERVER_ERROR_MESSAGE, is_network_error=True, can_retry=True),
        ),
        (
            SourceHTTPError(404),
            Error(NOT_FOUND_MESSAGE, is_network_error=False, can_retry=False),
        ),
        (
            SourceHTTPError(403),
            Error("An error occurred (HTTP 403)", is_network_error=False, can_retry=True),
        ),
    ],
)
def test_classification_table(exc, expected):
    assert classify_failure(exc) == expected


def test_structured_body_wins_over_status():
    body = ErrorBody("MAINTENANCE", "Down", "We are upgrading, back soon.")
    error = classify_failure(SourceHTTPError(503, body))

    assert error.is_network_error is False
    assert error.can_retry is True
    assert error.error_code == "MAINTENANCE"
    assert error.message == "We are upgrading, back soon."


def test_structured_not_found_is_not_retryable():
    body = ErrorBody("ARTICLE_NOT_FOUND", "Not Found", "Article 9 does not exist.")
    error = classify_failure(SourceHTTPError(404, body))

    assert error.is_network_error is False
    assert error.can_retry is False
    assert error.error_code == "ARTICLE_NOT_FOUND"


def test_unclassified_exception():
    error = classify_failure(SourcePayloadError("bad json"))

    assert error.is_network_error is False
    assert error.can_retry is True
    assert error.error_code is None
    assert error.message == "An unexpected error occurred: bad json"


def test_error_body_requires_code_and_message():
    assert ErrorBody.from_dict({"errorCode": "X"}) is None
    assert ErrorBody.from_dict(["not", "a", "dict"]) is None
    parsed = ErrorBody.from_dict({"errorCode": "X", "errorMessage": "msg"})
    assert parsed == ErrorBody("X", "", "msg")
