# ABOUTME: Exception types raised by the weather service and the user-facing HTTP error classifier.
# ABOUTME: Transport failures stay httpx.HTTPError; describe_http_error maps them to display messages.

import logging

import httpx

from skycast.models import ErrorInfo

logger = logging.getLogger(__name__)

CONNECTIVITY_MESSAGE = "Check your internet connection"
NOT_FOUND_MESSAGE = "Data not found"
RATE_LIMIT_MESSAGE = "Too many requests. Please wait a moment"
SERVER_UNAVAILABLE_MESSAGE = "Server temporarily unavailable"
GENERIC_MESSAGE = "Failed to load data"


def not_found_message(query: str) -> str:
    return f'The city "{query}" was not found. Try again.'


class SkycastError(Exception):
    """Base class for errors raised by skycast itself."""


class CityNotFoundError(SkycastError):
    """Geocoding returned no match for a search term."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(not_found_message(query))


class MalformedResponseError(SkycastError):
    """An upstream payload did not match the expected shape."""


def message_for_status(status: int) -> str:
    """Map an HTTP status (0 for no response at all) to a user-facing message."""
    if status == 0:
        return CONNECTIVITY_MESSAGE
    if status == 404:
        return NOT_FOUND_MESSAGE
    if status == 429:
        return RATE_LIMIT_MESSAGE
    if status >= 500:
        return SERVER_UNAVAILABLE_MESSAGE
    return GENERIC_MESSAGE


def describe_http_error(error: httpx.HTTPError) -> ErrorInfo:
    """Classify an httpx failure. Anything without a response counts as status 0."""
    status = error.response.status_code if isinstance(error, httpx.HTTPStatusError) else 0
    url = None
    try:
        url = str(error.request.url)
    except RuntimeError:
        # httpx raises when the error was constructed without a request
        pass
    logger.error("HTTP error status=%s url=%s: %s", status, url, error)
    return ErrorInfo(status=status, message=message_for_status(status))
