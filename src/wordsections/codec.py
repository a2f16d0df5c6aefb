"""Decode and encode WordprocessingML markup parts."""

from __future__ import annotations

from wordsections.exceptions import ParseError

try:
    from bs4 import BeautifulSoup
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise ParseError(
        "BeautifulSoup4 is required for markup parsing (pip install beautifulsoup4 lxml)."
    ) from exc

_PARSER = "xml"


def decode(data: bytes | str) -> BeautifulSoup:
    """Parse a markup part into a mutable tree.

    Raises:
        ParseError: If the input is empty or holds no root element.
    """
    if not data or not data.strip():
        raise ParseError("Cannot decode an empty markup part.")
    if isinstance(data, str):
        data = data.encode("utf-8")
    soup = BeautifulSoup(data, _PARSER)
    if soup.find() is None:
        raise ParseError("Markup part has no root element.")
    return soup


def encode(tree: BeautifulSoup) -> bytes:
    """Serialize a tree back to UTF-8 bytes, XML declaration included."""
    return tree.encode("utf-8")
