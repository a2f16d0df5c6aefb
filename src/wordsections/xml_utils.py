"""Shared WordprocessingML helpers over BeautifulSoup trees."""

from __future__ import annotations

from typing import Mapping

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for markup parsing (pip install beautifulsoup4 lxml)."
    ) from exc


W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
W_PREFIX = "w"


def is_w(node: object, name: str) -> bool:
    """Return True if ``node`` is the WordprocessingML element ``w:<name>``."""
    return isinstance(node, Tag) and node.name == name and node.namespace == W_NS


def element_children(node: Tag) -> list[Tag]:
    """Element children of ``node`` in document order, skipping text nodes."""
    return [child for child in node.children if isinstance(child, Tag)]


def child_w(node: Tag | None, name: str) -> Tag | None:
    """First direct ``w:<name>`` child of ``node``."""
    if node is None:
        return None
    for child in node.children:
        if is_w(child, name):
            return child
    return None


def find_w(node: Tag, name: str) -> Tag | None:
    """First ``w:<name>`` descendant of ``node``."""
    return node.find(lambda tag: is_w(tag, name))


def find_all_w(node: Tag, name: str) -> list[Tag]:
    return node.find_all(lambda tag: is_w(tag, name))


def w_attr(node: Tag | None, name: str) -> str | None:
    """Value of the ``w:<name>`` attribute, if present."""
    if node is None:
        return None
    return node.get(f"{W_PREFIX}:{name}")


def new_w_tag(
    soup: BeautifulSoup, name: str, attrs: Mapping[str, str] | None = None
) -> Tag:
    """Create a detached ``w:<name>`` element.

    Plain attribute names are placed in the ``w`` namespace; names that already
    carry a prefix (``xml:space``) are kept as given.
    """
    prefixed = {
        (key if ":" in key else f"{W_PREFIX}:{key}"): value
        for key, value in (attrs or {}).items()
    }
    return soup.new_tag(name, namespace=W_NS, nsprefix=W_PREFIX, attrs=prefixed)


def ensure_paragraph_properties(soup: BeautifulSoup, paragraph: Tag) -> Tag:
    """Return the paragraph's ``w:pPr``, creating it as the first child if missing."""
    properties = child_w(paragraph, "pPr")
    if properties is None:
        properties = new_w_tag(soup, "pPr")
        paragraph.insert(0, properties)
    return properties


def find_document_body(soup: BeautifulSoup) -> Tag | None:
    """Find the ``w:body`` element of a main document part."""
    document = child_w(soup, "document")
    if document is not None:
        body = child_w(document, "body")
        if body is not None:
            return body
    return find_w(soup, "body")
