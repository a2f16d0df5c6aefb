"""Section summary models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SectionBreakType(str, Enum):
    """How a section starts relative to the previous one."""

    NEXT_PAGE = "nextPage"
    CONTINUOUS = "continuous"
    EVEN_PAGE = "evenPage"
    ODD_PAGE = "oddPage"
    NEXT_COLUMN = "nextColumn"


class SectionSummary(BaseModel):
    """Read-only snapshot of one section."""

    index: int = Field(..., ge=0)
    break_type: SectionBreakType = SectionBreakType.NEXT_PAGE
    paragraph_count: int = Field(..., ge=0)
    table_count: int = Field(..., ge=0)
    page_width: int | None = None
    page_height: int | None = None
    orientation: str | None = None
    is_final: bool = False
