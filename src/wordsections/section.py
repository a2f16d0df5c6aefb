"""Section views over a document body."""

from __future__ import annotations

import copy
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup
from bs4.element import Tag

from wordsections.formatting import apply_formatting
from wordsections.paragraph import Paragraph
from wordsections.resolver import (
    BodyHost,
    ImplicitHost,
    MarkerHost,
    ParagraphHost,
    resolve_host,
    section_elements,
)
from wordsections.revisions import EditType
from wordsections.schemas import Formatting, SectionBreakType, SectionSummary
from wordsections.walker import collect_paragraphs, collect_tables
from wordsections.xml_utils import (
    child_w,
    ensure_paragraph_properties,
    is_w,
    new_w_tag,
    w_attr,
)

if TYPE_CHECKING:
    from wordsections.document import Document

logger = logging.getLogger(__name__)


class Section:
    """A section of the document, identified by the marker that closes it.

    The view stores nothing but the marker (``None`` for the implicit section
    of a document without markers). Membership is recomputed from the live
    tree on every access.
    """

    def __init__(self, document: Document, marker: Tag | None) -> None:
        self.document = document
        self.marker = marker

    def __repr__(self) -> str:
        kind = "implicit" if self.marker is None else self.break_type.value
        return f"Section({kind})"

    def host(self) -> MarkerHost:
        """Resolve where this section's marker is anchored."""
        if self.marker is None:
            return ImplicitHost(body=self.document.body)
        return resolve_host(self.marker)

    def elements(self) -> list[Tag]:
        """Body-level elements belonging to this section."""
        return section_elements(self.host())

    def enumerate_paragraphs(self) -> list[Paragraph]:
        """Paragraphs of the section in document order, table content included.

        Raises:
            StructuralInvariantError: If the marker is detached or misplaced.
        """
        found: list[Paragraph] = []
        for element in self.elements():
            found.extend(Paragraph(node) for node in collect_paragraphs(element))
        return found

    @property
    def paragraphs(self) -> list[Paragraph]:
        return self.enumerate_paragraphs()

    @property
    def tables(self) -> list[Tag]:
        """Outermost tables of the section."""
        found: list[Tag] = []
        for element in self.elements():
            found.extend(collect_tables(element))
        return found

    @property
    def is_final(self) -> bool:
        return isinstance(self.host(), (BodyHost, ImplicitHost))

    @property
    def break_type(self) -> SectionBreakType:
        value = w_attr(child_w(self.marker, "type"), "val")
        try:
            return SectionBreakType(value) if value else SectionBreakType.NEXT_PAGE
        except ValueError:
            logger.warning("Unknown section break type %r; using nextPage", value)
            return SectionBreakType.NEXT_PAGE

    @property
    def page_width(self) -> int | None:
        """Page width in twentieths of a point."""
        return _int_or_none(w_attr(child_w(self.marker, "pgSz"), "w"))

    @property
    def page_height(self) -> int | None:
        """Page height in twentieths of a point."""
        return _int_or_none(w_attr(child_w(self.marker, "pgSz"), "h"))

    @property
    def orientation(self) -> str | None:
        page_size = child_w(self.marker, "pgSz")
        if page_size is None:
            return None
        return w_attr(page_size, "orient") or "portrait"

    def summary(self, index: int) -> SectionSummary:
        return SectionSummary(
            index=index,
            break_type=self.break_type,
            paragraph_count=len(self.paragraphs),
            table_count=len(self.tables),
            page_width=self.page_width,
            page_height=self.page_height,
            orientation=self.orientation,
            is_final=self.is_final,
        )

    def clear(self, track_changes: bool = False) -> None:
        """Remove every paragraph of the section.

        Membership is taken once before anything is removed. A paragraph that
        carries a section marker keeps its properties so no section break is
        lost; only its content goes. Untracked clearing drops body-level tables
        and content controls as a whole, so no table cell is left without a
        paragraph.
        """
        elements = self.elements()
        builder = self.document.revisions if track_changes else None
        count = 0
        for element in elements:
            paragraphs = [Paragraph(node) for node in collect_paragraphs(element)]
            count += len(paragraphs)
            if not track_changes and paragraphs and not is_w(element, "p"):
                element.extract()
                continue
            for paragraph in paragraphs:
                if paragraph.section_marker is not None:
                    paragraph.clear_content(track_changes, builder)
                else:
                    paragraph.remove(track_changes, builder)
        logger.debug("Cleared %d paragraphs (track_changes=%s)", count, track_changes)

    def insert_paragraph(
        self,
        content: str | Paragraph | Tag = "",
        track_changes: bool = False,
        formatting: Formatting | None = None,
        *,
        index: int | None = None,
    ) -> Paragraph:
        """Insert a paragraph into this section.

        ``content`` is either text, built into runs with ``formatting``, or an
        existing paragraph, which is copied without any section marker it
        carries. ``index`` counts the section's paragraphs; the new paragraph
        goes right before the one at that position, or at the end of the
        section when ``index`` is ``None`` or equal to the paragraph count.

        When appending to a section closed by a paragraph, the new paragraph
        goes right after it and takes over the marker, so it becomes the
        section's last paragraph and the next section is untouched. Tracked,
        this is recorded the way a split paragraph is: the old closing
        paragraph's mark is flagged inserted, and the marker stays on the
        original mark. Rejecting the insertion keeps the section break.

        Raises:
            IndexError: If ``index`` falls outside the section.
            ValueError: If ``formatting`` is given with paragraph content.
            StructuralInvariantError: If the marker is detached or misplaced.
        """
        paragraphs = self.paragraphs
        if index is None:
            index = len(paragraphs)
        if not 0 <= index <= len(paragraphs):
            raise IndexError(
                f"Paragraph index {index} is outside the section (0..{len(paragraphs)})."
            )
        node = self._new_paragraph(content, formatting)

        if index < len(paragraphs):
            paragraphs[index].node.insert_before(node)
            if track_changes:
                self._track_insertion(node, node)
            return self.paragraphs[index]

        host = self.host()
        mark = node
        if isinstance(host, ParagraphHost):
            host.paragraph.insert_after(node)
            _attach_marker(self.document.tree, node, host.marker.extract())
            mark = host.paragraph
        elif isinstance(host, BodyHost):
            host.marker.insert_before(node)
        else:
            host.body.append(node)

        if track_changes:
            self._track_insertion(node, mark)

        return self.paragraphs[-1]

    def _new_paragraph(
        self, content: str | Paragraph | Tag, formatting: Formatting | None
    ) -> Tag:
        soup = self.document.tree
        if isinstance(content, (Paragraph, Tag)):
            if formatting is not None:
                raise ValueError("Formatting applies to text content only.")
            source = content if isinstance(content, Paragraph) else Paragraph(content)
            node = copy.copy(source.node)
            marker = child_w(child_w(node, "pPr"), "sectPr")
            if marker is not None:
                marker.extract()
            return node

        node = new_w_tag(soup, "p")
        for run in apply_formatting(content, formatting, soup=soup):
            node.append(run)
        return node

    def _track_insertion(self, node: Tag, mark: Tag) -> None:
        """Wrap the new runs in ``w:ins`` and flag ``mark`` as inserted."""
        builder = self.document.revisions
        timestamp = datetime.now(timezone.utc)
        wrapper: Tag | None = None
        for run in Paragraph(node).runs:
            if is_w(run.parent, "ins"):
                continue
            if wrapper is not None and run.find_previous_sibling(True) is wrapper:
                wrapper.append(run)
            else:
                wrapper = builder.wrap(EditType.INSERTION, timestamp, run)
        if not Paragraph(mark).is_inserted:
            builder.mark_paragraph(EditType.INSERTION, timestamp, mark)


def _attach_marker(soup: BeautifulSoup, paragraph: Tag, marker: Tag) -> None:
    # sectPr sits after rPr and before pPrChange.
    properties = ensure_paragraph_properties(soup, paragraph)
    change = child_w(properties, "pPrChange")
    if change is not None:
        change.insert_before(marker)
    else:
        properties.append(marker)


def _int_or_none(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
