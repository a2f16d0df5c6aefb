"""wordsections: section-aware editing of WordprocessingML documents."""

from wordsections.document import Document
from wordsections.exceptions import (
    DocumentNotFoundError,
    FetchError,
    PackageError,
    ParseError,
    RateLimitError,
    StructuralInvariantError,
    WordsectionsError,
)
from wordsections.paragraph import Paragraph
from wordsections.revisions import EditType, RevisionMarkerBuilder
from wordsections.schemas import Formatting, SectionBreakType, SectionSummary
from wordsections.section import Section

__all__ = [
    "Document",
    "DocumentNotFoundError",
    "EditType",
    "FetchError",
    "Formatting",
    "PackageError",
    "Paragraph",
    "ParseError",
    "RateLimitError",
    "RevisionMarkerBuilder",
    "Section",
    "SectionBreakType",
    "SectionSummary",
    "StructuralInvariantError",
    "WordsectionsError",
]
