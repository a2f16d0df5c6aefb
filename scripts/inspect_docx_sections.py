"""Inspect the section layout of a .docx document."""

from __future__ import annotations

import argparse
import asyncio
import logging

from wordsections import Document
from wordsections.config import WORDSECTIONS_LOG_LEVEL


def main() -> None:
    parser = argparse.ArgumentParser(description="List the sections of a .docx document.")
    parser.add_argument("--url", help="URL to fetch (e.g. https://example.com/report.docx)")
    parser.add_argument("--file", help="Local .docx file path")
    parser.add_argument("--paragraphs", action="store_true", help="Print paragraph text per section")
    args = parser.parse_args()

    if not args.url and not args.file:
        parser.error("Provide --url or --file")

    logging.basicConfig(level=WORDSECTIONS_LOG_LEVEL)
    document = load_document(url=args.url, file_path=args.file)

    for index, section in enumerate(document.sections):
        summary = section.summary(index)
        size = (
            f"{summary.page_width}x{summary.page_height}"
            if summary.page_width and summary.page_height
            else "-"
        )
        final = " (final)" if summary.is_final else ""
        print(
            f"Section {index}{final}: {summary.break_type.value}, page {size}, "
            f"{summary.paragraph_count} paragraphs, {summary.table_count} tables"
        )
        if args.paragraphs:
            for paragraph in section.paragraphs:
                print(f"    {paragraph.text}")


def load_document(*, url: str | None, file_path: str | None) -> Document:
    if url:
        return asyncio.run(Document.open_remote(url))
    return Document.load(file_path or "")


if __name__ == "__main__":
    main()
