"""Fetch ``.docx`` packages over HTTP."""

from __future__ import annotations

import logging

import httpx

from wordsections.exceptions import PackageError
from wordsections.http_utils import fetch_with_retries

logger = logging.getLogger(__name__)

_ZIP_SIGNATURE = b"PK\x03\x04"


async def fetch_docx(url: str, *, client: httpx.AsyncClient | None = None) -> bytes:
    """Download a document package.

    Raises:
        DocumentNotFoundError: If the URL answers 404.
        FetchError: If the download fails after retries.
        PackageError: If the response is not a zip-based package.
    """
    data = await fetch_with_retries(url, client=client)
    if not data.startswith(_ZIP_SIGNATURE):
        raise PackageError(f"Response from {url} is not a document package.")
    logger.debug("Fetched %d bytes from %s", len(data), url)
    return data
