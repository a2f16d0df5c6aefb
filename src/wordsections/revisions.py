"""Tracked-change (revision) markup."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from enum import Enum

from bs4 import BeautifulSoup
from bs4.element import Tag

from wordsections.config import WORDSECTIONS_REVISION_AUTHOR
from wordsections.xml_utils import (
    child_w,
    ensure_paragraph_properties,
    find_all_w,
    new_w_tag,
    w_attr,
)

_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
# Change markers sharing one w:id space.
_REVISION_TAGS = (
    "ins",
    "del",
    "moveFrom",
    "moveTo",
    "moveFromRangeStart",
    "moveToRangeStart",
    "cellIns",
    "cellDel",
    "rPrChange",
    "pPrChange",
    "sectPrChange",
    "tblPrChange",
    "trPrChange",
    "tcPrChange",
)
# Text-bearing elements renamed inside a deletion.
_DELETED_NAMES = {"t": "delText", "instrText": "delInstrText"}


class EditType(str, Enum):
    """Kind of tracked edit."""

    INSERTION = "ins"
    DELETION = "del"


def format_timestamp(timestamp: datetime) -> str:
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    return timestamp.strftime(_DATE_FORMAT)


def next_revision_id(soup: BeautifulSoup) -> int:
    """Return one past the highest revision id already used in ``soup``."""
    highest = -1
    for name in _REVISION_TAGS:
        for node in find_all_w(soup, name):
            value = w_attr(node, "id")
            if value is not None and value.lstrip("-").isdigit():
                highest = max(highest, int(value))
    return highest + 1


class RevisionMarkerBuilder:
    """Wraps nodes in ``w:ins``/``w:del`` revision markers.

    Every marker gets a fresh ``w:id`` from a counter, so one builder should be
    shared by all edits made to the same document.
    """

    def __init__(
        self,
        soup: BeautifulSoup,
        *,
        author: str | None = None,
        start_id: int = 0,
    ) -> None:
        self.soup = soup
        self.author = author or WORDSECTIONS_REVISION_AUTHOR
        self._ids = itertools.count(start_id)

    def marker(self, kind: EditType, timestamp: datetime) -> Tag:
        """Create an empty revision marker of ``kind``."""
        return new_w_tag(
            self.soup,
            EditType(kind).value,
            {
                "id": str(next(self._ids)),
                "author": self.author,
                "date": format_timestamp(timestamp),
            },
        )

    def wrap(self, kind: EditType, timestamp: datetime, node: Tag) -> Tag:
        """Wrap ``node`` in a revision marker and return the marker.

        An attached node is replaced in place by the marker. For deletions the
        wrapped text moves to ``w:delText``.
        """
        wrapper = self.marker(kind, timestamp)
        if node.parent is not None:
            node.wrap(wrapper)
        else:
            wrapper.append(node)
        if EditType(kind) is EditType.DELETION:
            mark_text_deleted(node)
        return wrapper

    def mark_paragraph(self, kind: EditType, timestamp: datetime, paragraph: Tag) -> Tag:
        """Track the paragraph mark itself as inserted or deleted."""
        properties = ensure_paragraph_properties(self.soup, paragraph)
        run_properties = child_w(properties, "rPr")
        if run_properties is None:
            run_properties = new_w_tag(self.soup, "rPr")
            # rPr precedes sectPr and pPrChange inside pPr.
            trailing = child_w(properties, "sectPr") or child_w(properties, "pPrChange")
            if trailing is not None:
                trailing.insert_before(run_properties)
            else:
                properties.append(run_properties)
        marker = self.marker(kind, timestamp)
        run_properties.append(marker)
        return marker


def mark_text_deleted(node: Tag) -> None:
    """Rename text elements at or below ``node`` to their deleted forms."""
    targets = [node] if node.name in _DELETED_NAMES else []
    targets.extend(node.find_all(list(_DELETED_NAMES)))
    for target in targets:
        target.name = _DELETED_NAMES[target.name]
