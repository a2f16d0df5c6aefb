"""Document handle: package, markup tree and section views."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import httpx
from bs4 import BeautifulSoup

from wordsections.exceptions import ParseError, StructuralInvariantError
from wordsections.fetch import fetch_docx
from wordsections.package import PackageStore
from wordsections.paragraph import Paragraph
from wordsections.resolver import find_markers, find_stray_markers
from wordsections.revisions import RevisionMarkerBuilder, next_revision_id
from wordsections.schemas import SectionSummary
from wordsections.section import Section
from wordsections.walker import collect_paragraphs
from wordsections.xml_utils import find_document_body

logger = logging.getLogger(__name__)


class Document:
    """An editable WordprocessingML document.

    A document handle is not thread-safe: callers must serialize mutating
    calls (``insert_paragraph``, ``clear``) on the same handle.
    """

    def __init__(self, tree: BeautifulSoup, store: PackageStore | None = None) -> None:
        body = find_document_body(tree)
        if body is None:
            raise ParseError("Markup tree has no w:body element.")
        self.tree = tree
        self.body = body
        self.store = store
        self._revisions: RevisionMarkerBuilder | None = None

    @classmethod
    def load(cls, path: str | Path) -> Document:
        store = PackageStore.open(path)
        logger.debug("Loaded %s (main part %s)", path, store.main_part)
        return cls(store.load(), store)

    @classmethod
    def from_bytes(cls, data: bytes) -> Document:
        store = PackageStore(data)
        return cls(store.load(), store)

    @classmethod
    async def load_async(cls, path: str | Path) -> Document:
        """Load a package from disk in a worker thread."""
        return await asyncio.to_thread(cls.load, path)

    @classmethod
    async def open_remote(
        cls, url: str, *, client: httpx.AsyncClient | None = None
    ) -> Document:
        """Download and open a package."""
        data = await fetch_docx(url, client=client)
        return await asyncio.to_thread(cls.from_bytes, data)

    def save(self, path: str | Path | None = None) -> Path:
        return self._require_store().save(self.tree, path)

    def to_bytes(self) -> bytes:
        return self._require_store().to_bytes(self.tree)

    @property
    def sections(self) -> list[Section]:
        """Sections in document order; a single implicit one when no marker exists.

        Raises:
            StructuralInvariantError: If a marker sits anywhere other than a
                body-level paragraph's properties or the body itself.
        """
        markers = find_markers(self.body)
        stray = find_stray_markers(self.body, markers)
        if stray:
            parent = stray[0].parent
            raise StructuralInvariantError(
                f"Found {len(stray)} section marker(s) outside body-level paragraphs "
                f"(first under <{parent.prefix or ''}:{parent.name}>)."
            )
        if not markers:
            return [Section(self, None)]
        return [Section(self, marker) for marker in markers]

    @property
    def paragraphs(self) -> list[Paragraph]:
        return [Paragraph(node) for node in collect_paragraphs(self.body)]

    @property
    def revisions(self) -> RevisionMarkerBuilder:
        """Revision builder shared by every tracked edit on this document."""
        if self._revisions is None:
            self._revisions = RevisionMarkerBuilder(
                self.tree, start_id=next_revision_id(self.tree)
            )
        return self._revisions

    def summaries(self) -> list[SectionSummary]:
        return [section.summary(index) for index, section in enumerate(self.sections)]

    def _require_store(self) -> PackageStore:
        if self.store is None:
            raise ValueError("Document was not loaded from a package.")
        return self.store
