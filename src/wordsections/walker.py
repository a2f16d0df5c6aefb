"""Depth-first enumeration of block-level content."""

from __future__ import annotations

from bs4.element import Tag

from wordsections.xml_utils import W_NS, element_children, find_w, is_w

# Elements whose children are block-level content (or rows/cells of it).
_CONTAINERS = frozenset(
    {"tbl", "tr", "tc", "sdt", "sdtContent", "customXml", "ins", "del"}
)


def collect_paragraphs(node: Tag) -> list[Tag]:
    """Return every paragraph at or below ``node`` in document order.

    Tables are walked row by row and cell by cell, nested tables included.
    Paragraphs are not descended into.
    """
    return _collect(node, "p")


def collect_tables(node: Tag) -> list[Tag]:
    """Return the outermost tables at or below ``node`` in document order."""
    return _collect(node, "tbl")


def contains_marker(node: Tag) -> bool:
    """Return True if ``node`` is, or holds at any depth, a boundary marker."""
    return is_w(node, "sectPr") or find_w(node, "sectPr") is not None


def _collect(node: Tag, target: str) -> list[Tag]:
    found: list[Tag] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if is_w(current, target):
            found.append(current)
            continue
        if current is node or _is_container(current):
            stack.extend(reversed(element_children(current)))
    return found


def _is_container(node: Tag) -> bool:
    return node.namespace == W_NS and node.name in _CONTAINERS
