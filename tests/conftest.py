"""Test setup for wordsections."""

from __future__ import annotations

import io
import sys
import zipfile
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from wordsections.codec import decode  # noqa: E402
from wordsections.document import Document  # noqa: E402

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"

CONTENT_TYPES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    '<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">'
    '<Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>'
    '<Default Extension="xml" ContentType="application/xml"/>'
    '<Override PartName="/word/document.xml" '
    'ContentType="application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/>'
    "</Types>"
)

STYLES = (
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
    f'<w:styles xmlns:w="{W_NS}"><w:style w:styleId="Normal"/></w:styles>'
)


def _root_rels(target: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        '<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">'
        '<Relationship Id="rId1" '
        'Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" '
        f'Target="{target}"/>'
        "</Relationships>"
    )


class DocxXml:
    """Builders for WordprocessingML snippets used across the tests."""

    @staticmethod
    def p(text: str = "", *, marker: str | None = None) -> str:
        properties = f"<w:pPr>{marker}</w:pPr>" if marker is not None else ""
        run = f"<w:r><w:t>{text}</w:t></w:r>" if text else ""
        return f"<w:p>{properties}{run}</w:p>"

    @staticmethod
    def sect(
        break_type: str | None = None,
        width: int | None = None,
        height: int | None = None,
        orient: str | None = None,
    ) -> str:
        children = ""
        if break_type:
            children += f'<w:type w:val="{break_type}"/>'
        if width and height:
            orientation = f' w:orient="{orient}"' if orient else ""
            children += f'<w:pgSz w:w="{width}" w:h="{height}"{orientation}/>'
        return f"<w:sectPr>{children}</w:sectPr>"

    @staticmethod
    def tbl(*rows: list[str]) -> str:
        body = "".join(
            "<w:tr>" + "".join(f"<w:tc><w:tcPr/>{cell}</w:tc>" for cell in row) + "</w:tr>"
            for row in rows
        )
        return f"<w:tbl><w:tblPr/>{body}</w:tbl>"

    @staticmethod
    def document(*blocks: str) -> str:
        return (
            '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
            f'<w:document xmlns:w="{W_NS}"><w:body>{"".join(blocks)}</w:body></w:document>'
        )

    @staticmethod
    def package(
        document_xml: str,
        *,
        main_part: str = "word/document.xml",
        with_rels: bool = True,
    ) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, mode="w") as archive:
            archive.writestr("[Content_Types].xml", CONTENT_TYPES)
            if with_rels:
                archive.writestr("_rels/.rels", _root_rels(main_part))
            archive.writestr(main_part, document_xml)
            archive.writestr("word/styles.xml", STYLES)
        return buffer.getvalue()


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for pytest.

    This allows running integration tests selectively:
        pytest -m integration       # run only integration tests
        pytest -m "not integration" # skip integration tests
    """
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (make real network calls)",
    )


@pytest.fixture
def xml() -> type[DocxXml]:
    """WordprocessingML snippet builders."""
    return DocxXml


@pytest.fixture
def make_document() -> Callable[..., Document]:
    """Build a Document from body-level block snippets."""

    def _make(*blocks: str) -> Document:
        return Document(decode(DocxXml.document(*blocks)))

    return _make


@pytest.fixture
def two_sections(make_document: Callable[..., Document]) -> Document:
    """P1, P2 (closes section 1), a table with a nested table, body-level marker."""
    x = DocxXml
    return make_document(
        x.p("P1"),
        x.p("P2", marker=x.sect(break_type="continuous")),
        x.tbl(
            [x.p("T1"), x.p("T2")],
            [x.tbl([x.p("N1")])],
        ),
        x.sect(width=12240, height=15840),
    )


@pytest.fixture
def three_sections(make_document: Callable[..., Document]) -> Document:
    """Three sections: two paragraph-closed, one closed by the body marker."""
    x = DocxXml
    return make_document(
        x.p("A1"),
        x.p("A2", marker=x.sect()),
        x.tbl([x.p("B1")]),
        x.p("B2"),
        x.p("B3", marker=x.sect(break_type="oddPage")),
        x.p("C1"),
        x.tbl([x.p("C2"), x.tbl([x.p("C3")])]),
        x.p("C4"),
        x.sect(),
    )
