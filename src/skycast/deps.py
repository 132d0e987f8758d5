# ABOUTME: Dependency container and HTTP client factory for skycast.
# ABOUTME: Builds an httpx.AsyncClient whose transport retries transient failures with tenacity.

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic_ai.retries import AsyncTenacityTransport, RetryConfig, wait_retry_after
from tenacity import retry_if_exception, stop_after_attempt

from skycast.config import Settings

RETRYABLE_STATUSES = frozenset({429, 500, 502, 503, 504})


class SkycastDeps(BaseModel):
    """Objects shared by the web layer for the lifetime of the application."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    settings: Settings


def is_transient(error: BaseException) -> bool:
    """Connection problems, timeouts, rate limiting and 5xx responses are worth retrying."""
    if isinstance(error, (httpx.ConnectError, httpx.ReadTimeout)):
        return True
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code in RETRYABLE_STATUSES
    return False


def create_http_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Create an httpx client with tenacity retry on transient HTTP errors.

    Retries with exponential backoff (honouring Retry-After) up to
    settings.retry_attempts, then re-raises the last error. Other 4xx
    responses fail immediately.
    """
    settings = settings or Settings()
    transport = AsyncTenacityTransport(
        RetryConfig(
            retry=retry_if_exception(is_transient),
            wait=wait_retry_after(max_wait=30),
            stop=stop_after_attempt(settings.retry_attempts),
            reraise=True,
        ),
        validate_response=lambda r: r.raise_for_status(),
    )
    return httpx.AsyncClient(transport=transport, timeout=settings.http_timeout)
