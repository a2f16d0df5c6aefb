"""Paragraph view over a ``w:p`` element."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from bs4.element import Tag

from wordsections.revisions import EditType, RevisionMarkerBuilder
from wordsections.xml_utils import W_NS, child_w, element_children, is_w

logger = logging.getLogger(__name__)

# Containers whose run children belong to the paragraph's live content.
_RUN_PARENTS = frozenset({"p", "ins", "hyperlink", "smartTag", "fldSimple"})
_TEXT_NAMES = {"t": None, "tab": "\t", "br": "\n", "cr": "\n"}


class Paragraph:
    """A paragraph of the document body or of a table cell.

    Equality is identity of the underlying element: two empty paragraphs are
    still different paragraphs.
    """

    def __init__(self, node: Tag) -> None:
        if not is_w(node, "p"):
            raise TypeError(f"Expected a w:p element, got <{node.name}>")
        self.node = node

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Paragraph):
            return NotImplemented
        return self.node is other.node

    def __hash__(self) -> int:
        return id(self.node)

    def __repr__(self) -> str:
        return f"Paragraph({self.text!r})"

    @property
    def text(self) -> str:
        """Visible text; deleted text is left out.

        Only run content counts, so tab stops declared in ``w:pPr/w:tabs`` do
        not show up as tabs.
        """
        parts: list[str] = []
        for node in self.node.descendants:
            if not isinstance(node, Tag) or node.namespace != W_NS:
                continue
            if node.name not in _TEXT_NAMES or not is_w(node.parent, "r"):
                continue
            if node.find_parent(lambda tag: is_w(tag, "del")) is not None:
                continue
            replacement = _TEXT_NAMES[node.name]
            parts.append(node.get_text() if replacement is None else replacement)
        return "".join(parts)

    @property
    def runs(self) -> list[Tag]:
        """Runs that are not already tracked as deleted."""
        return [
            node
            for node in self.node.find_all(lambda tag: is_w(tag, "r"))
            if node.parent is not None
            and node.parent.namespace == W_NS
            and node.parent.name in _RUN_PARENTS
        ]

    @property
    def properties(self) -> Tag | None:
        return child_w(self.node, "pPr")

    @property
    def section_marker(self) -> Tag | None:
        """The ``w:sectPr`` this paragraph carries, if it closes a section."""
        return child_w(self.properties, "sectPr")

    @property
    def is_deleted(self) -> bool:
        """Whether the paragraph mark is tracked as deleted."""
        return child_w(child_w(self.properties, "rPr"), "del") is not None

    @property
    def is_inserted(self) -> bool:
        """Whether the paragraph mark is tracked as inserted."""
        return child_w(child_w(self.properties, "rPr"), "ins") is not None

    def remove(
        self,
        track_changes: bool = False,
        builder: RevisionMarkerBuilder | None = None,
    ) -> None:
        """Remove the paragraph.

        Untracked removal takes the element out of the tree. Tracked removal
        leaves it in place with its runs and paragraph mark flagged as deleted.
        """
        if not track_changes:
            self.node.extract()
            return
        if builder is None:
            raise ValueError("A revision builder is required to track a removal.")
        if self.is_deleted:
            return
        timestamp = datetime.now(timezone.utc)
        self._delete_runs(builder, timestamp)
        builder.mark_paragraph(EditType.DELETION, timestamp, self.node)

    def clear_content(
        self,
        track_changes: bool = False,
        builder: RevisionMarkerBuilder | None = None,
    ) -> None:
        """Remove the paragraph's content but keep the paragraph and its properties."""
        if not track_changes:
            for child in element_children(self.node):
                if not is_w(child, "pPr"):
                    child.extract()
            return
        if builder is None:
            raise ValueError("A revision builder is required to track a removal.")
        self._delete_runs(builder, datetime.now(timezone.utc))

    def _delete_runs(self, builder: RevisionMarkerBuilder, timestamp: datetime) -> None:
        runs = self.runs
        for run in runs:
            builder.wrap(EditType.DELETION, timestamp, run)
        logger.debug("Tracked deletion of %d runs", len(runs))
