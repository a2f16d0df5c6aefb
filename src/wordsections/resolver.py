"""Resolve which body-level elements make up a section.

Sections are not nested sub-trees. The body is a flat run of block elements and
each section is closed by a boundary marker (``w:sectPr``) that lives either in
the properties of the section's last paragraph or, for the final section,
directly under the body. A section therefore spans the siblings after the
previous marker's host up to and including its own host paragraph.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from bs4.element import Tag

from wordsections.exceptions import StructuralInvariantError
from wordsections.walker import contains_marker
from wordsections.xml_utils import child_w, element_children, find_all_w, is_w

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ParagraphHost:
    """Marker stored in ``w:p/w:pPr``; the paragraph closes the section."""

    paragraph: Tag
    marker: Tag


@dataclass(frozen=True, eq=False)
class BodyHost:
    """Marker stored directly under ``w:body``; closes the final section."""

    body: Tag
    marker: Tag


@dataclass(frozen=True, eq=False)
class ImplicitHost:
    """The body carries no marker, so one section spans all of it."""

    body: Tag


MarkerHost = ParagraphHost | BodyHost | ImplicitHost


def resolve_host(marker: Tag) -> ParagraphHost | BodyHost:
    """Classify where ``marker`` is anchored.

    Raises:
        StructuralInvariantError: If the marker is detached, or anchored
            anywhere other than a body-level paragraph's properties or the body.
    """
    parent = marker.parent
    if parent is None:
        raise StructuralInvariantError("Section marker is detached from the document tree.")

    if is_w(parent, "body"):
        return BodyHost(body=parent, marker=marker)

    if is_w(parent, "pPr"):
        paragraph = parent.parent
        if not is_w(paragraph, "p"):
            raise StructuralInvariantError(
                "Section marker properties are not attached to a paragraph."
            )
        if not is_w(paragraph.parent, "body"):
            raise StructuralInvariantError(
                "Section marker paragraph is not a direct child of the body."
            )
        return ParagraphHost(paragraph=paragraph, marker=marker)

    raise StructuralInvariantError(
        f"Section marker found under <{parent.prefix or ''}:{parent.name}>; "
        "expected a paragraph's properties or the body."
    )


def section_elements(host: MarkerHost) -> list[Tag]:
    """Return the body-level elements forming the section closed by ``host``.

    The list is recomputed from the live tree on every call.
    """
    if isinstance(host, ImplicitHost):
        return element_children(host.body)

    if isinstance(host, ParagraphHost):
        anchor, container, include_anchor = host.paragraph, host.paragraph.parent, True
    elif isinstance(host, BodyHost):
        anchor, container, include_anchor = host.marker, host.body, False
    else:
        raise TypeError(f"Unknown marker host: {host!r}")

    preceding: list[Tag] = []
    for child in element_children(container):
        if child is anchor:
            break
        preceding.append(child)

    # Drop everything up to and including the previous section's closing host.
    start = 0
    for index in range(len(preceding) - 1, -1, -1):
        if contains_marker(preceding[index]):
            start = index + 1
            break

    elements = preceding[start:]
    if include_anchor:
        elements.append(anchor)
    logger.debug(
        "Resolved section of %d body elements (%s)", len(elements), type(host).__name__
    )
    return elements


def find_markers(body: Tag) -> list[Tag]:
    """Return the section markers of ``body`` in document order."""
    markers: list[Tag] = []
    for child in element_children(body):
        if is_w(child, "p"):
            marker = child_w(child_w(child, "pPr"), "sectPr")
            if marker is not None:
                markers.append(marker)
        elif is_w(child, "sectPr"):
            markers.append(child)
    return markers


def find_stray_markers(body: Tag, markers: list[Tag]) -> list[Tag]:
    """Return markers in ``body`` that do not close any section.

    A ``w:sectPr`` held by a paragraph inside a table cell or content control
    cannot close a section, yet would still cut the sibling run. Copies kept
    as revision history inside another ``w:sectPr`` are not counted.
    """
    known = {id(marker) for marker in markers}
    return [
        node
        for node in find_all_w(body, "sectPr")
        if id(node) not in known
        and node.find_parent(lambda tag: is_w(tag, "sectPr")) is None
    ]
