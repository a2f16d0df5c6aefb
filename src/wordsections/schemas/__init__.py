"""Shared schemas for wordsections."""

from wordsections.schemas.formatting import Formatting
from wordsections.schemas.sections import SectionBreakType, SectionSummary

__all__ = ["Formatting", "SectionBreakType", "SectionSummary"]
