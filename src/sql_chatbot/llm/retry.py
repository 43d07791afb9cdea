from __future__ import annotations

from collections.abc import Awaitable, Callable

import httpx
import structlog
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = structlog.get_logger()


def create_post_with_retry(
    max_attempts: int = 1,
    min_wait: int = 1,
    max_wait: int = 5,
) -> Callable[..., Awaitable[httpx.Response]]:
    """Create a retrying wrapper for completion requests.

    Returns an async function that wraps client.post() with exponential backoff
    retry on transport errors (connection refused, timeouts). With the default
    of a single attempt the first failure is raised immediately.
    """

    @retry(
        stop=stop_after_attempt(max(1, max_attempts)),
        wait=wait_exponential(multiplier=1, min=min_wait, max=max_wait),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
        before_sleep=lambda retry_state: logger.warning(
            "llm_retry",
            attempt=retry_state.attempt_number,
            error=str(retry_state.outcome.exception()) if retry_state.outcome else "unknown",
        ),
    )
    async def post_with_retry(
        client: httpx.AsyncClient, url: str, payload: dict
    ) -> httpx.Response:
        return await client.post(url, json=payload)

    return post_with_retry
