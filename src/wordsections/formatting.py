"""Build formatted runs for new paragraphs."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup
from bs4.element import Tag

from wordsections.schemas import Formatting
from wordsections.xml_utils import new_w_tag

_SPLIT_RE = re.compile(r"(\t|\n)")


def apply_formatting(
    text: str, formatting: Formatting | None = None, *, soup: BeautifulSoup
) -> list[Tag]:
    """Return the ``w:r`` nodes rendering ``text`` with ``formatting``.

    Tabs become ``w:tab`` and newlines ``w:br`` inside a single run. Empty text
    yields no runs.
    """
    if not text:
        return []

    run = new_w_tag(soup, "r")
    properties = build_run_properties(formatting, soup=soup)
    if properties is not None:
        run.append(properties)

    for piece in _SPLIT_RE.split(text):
        if not piece:
            continue
        if piece == "\t":
            run.append(new_w_tag(soup, "tab"))
        elif piece == "\n":
            run.append(new_w_tag(soup, "br"))
        else:
            attrs = {"xml:space": "preserve"} if piece != piece.strip() else None
            node = new_w_tag(soup, "t", attrs)
            node.string = piece
            run.append(node)
    return [run]


def build_run_properties(
    formatting: Formatting | None, *, soup: BeautifulSoup
) -> Tag | None:
    """Translate ``formatting`` into ``w:rPr``, in schema order."""
    if formatting is None:
        return None

    children: list[Tag] = []
    if formatting.font_family:
        family = formatting.font_family
        children.append(
            new_w_tag(
                soup,
                "rFonts",
                {"ascii": family, "hAnsi": family, "cs": family, "eastAsia": family},
            )
        )
    if formatting.bold:
        children.append(new_w_tag(soup, "b"))
    if formatting.italic:
        children.append(new_w_tag(soup, "i"))
    if formatting.caps:
        children.append(new_w_tag(soup, "caps"))
    if formatting.strike:
        children.append(new_w_tag(soup, "strike"))
    if formatting.color:
        children.append(new_w_tag(soup, "color", {"val": formatting.color}))
    if formatting.half_points is not None:
        size = str(formatting.half_points)
        children.append(new_w_tag(soup, "sz", {"val": size}))
        children.append(new_w_tag(soup, "szCs", {"val": size}))
    if formatting.highlight:
        children.append(new_w_tag(soup, "highlight", {"val": formatting.highlight}))
    if formatting.underline:
        children.append(new_w_tag(soup, "u", {"val": formatting.underline}))
    if formatting.language:
        children.append(new_w_tag(soup, "lang", {"val": formatting.language}))

    if not children:
        return None
    properties = new_w_tag(soup, "rPr")
    for child in children:
        properties.append(child)
    return properties
