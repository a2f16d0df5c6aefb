"""HTTP utilities for fetching documents with retry logic."""

from __future__ import annotations

import asyncio
import logging
from typing import Final

import httpx

from wordsections.config import (
    WORDSECTIONS_FETCH_BACKOFF_S,
    WORDSECTIONS_FETCH_MAX_RETRIES,
    WORDSECTIONS_FETCH_TIMEOUT_S,
    WORDSECTIONS_USER_AGENT,
)
from wordsections.exceptions import DocumentNotFoundError, FetchError, RateLimitError

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES: Final[frozenset[int]] = frozenset({429, 500, 502, 503, 504})

_MAX_REDIRECTS: Final[int] = 5


async def fetch_with_retries(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> bytes:
    """Fetch raw bytes from a URL, retrying transient failures.

    Args:
        url: The URL to fetch.
        client: Optional httpx.AsyncClient for connection pooling. If not
            provided, a new client is created for this request.

    Returns:
        The response body.

    Raises:
        DocumentNotFoundError: If the server answers 404.
        RateLimitError: If the last attempt was still rate limited (429).
        FetchError: If the fetch fails after all retries.
    """
    timeout = httpx.Timeout(WORDSECTIONS_FETCH_TIMEOUT_S)
    headers = {"User-Agent": WORDSECTIONS_USER_AGENT}

    async def do_fetch(http_client: httpx.AsyncClient) -> bytes:
        last_exc: Exception | None = None

        for attempt in range(WORDSECTIONS_FETCH_MAX_RETRIES + 1):
            try:
                response = await http_client.get(url)

                if response.status_code == 404:
                    raise DocumentNotFoundError(f"No document found at {url}")

                if response.status_code in RETRY_STATUS_CODES:
                    error_class = RateLimitError if response.status_code == 429 else FetchError
                    last_exc = error_class(f"HTTP {response.status_code} from {url}")
                else:
                    response.raise_for_status()
                    return response.content
            except (httpx.RequestError, httpx.HTTPStatusError) as exc:
                last_exc = exc

            if attempt < WORDSECTIONS_FETCH_MAX_RETRIES:
                backoff = WORDSECTIONS_FETCH_BACKOFF_S * (2**attempt)
                logger.debug("Retrying %s in %.2fs after: %s", url, backoff, last_exc)
                await asyncio.sleep(backoff)

        if isinstance(last_exc, RateLimitError):
            raise last_exc
        raise FetchError(f"Failed to fetch {url}: {last_exc}") from last_exc

    if client is not None:
        return await do_fetch(client)

    async with httpx.AsyncClient(
        timeout=timeout,
        headers=headers,
        follow_redirects=True,
        max_redirects=_MAX_REDIRECTS,
    ) as new_client:
        return await do_fetch(new_client)
