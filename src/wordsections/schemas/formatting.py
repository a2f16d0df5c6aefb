"""Run formatting descriptor."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

_HEX_COLOR_RE = re.compile(r"^[0-9A-F]{6}$")


class Formatting(BaseModel):
    """Character formatting applied to the runs of a new paragraph.

    Attributes:
        bold: Render the text bold.
        italic: Render the text italic.
        underline: Underline style as written to ``w:u`` (e.g. "single").
        strike: Strike the text through.
        caps: Render the text in capitals.
        size: Font size in points; stored in half-points.
        font_family: Font applied to every script range.
        color: Text color as six hex digits, with or without a leading "#".
        highlight: Highlight color name (e.g. "yellow").
        language: Language tag (e.g. "en-US").
    """

    model_config = ConfigDict(frozen=True)

    bold: bool = False
    italic: bool = False
    underline: str | None = None
    strike: bool = False
    caps: bool = False
    size: float | None = Field(default=None, gt=0, le=1638)
    font_family: str | None = None
    color: str | None = None
    highlight: str | None = None
    language: str | None = None

    @field_validator("color")
    @classmethod
    def validate_color(cls, v: str | None) -> str | None:
        """Normalize ``color`` to upper-case hex without "#"."""
        if v is None:
            return None
        value = v.strip().lstrip("#").upper()
        if not _HEX_COLOR_RE.match(value):
            raise ValueError(f"color must be six hex digits, got {v!r}")
        return value

    @property
    def half_points(self) -> int | None:
        if self.size is None:
            return None
        return round(self.size * 2)
