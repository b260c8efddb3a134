"""Searchable PDF output: one page per screenshot with an invisible OCR text layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import pymupdf

from pagescribe.exceptions import NoPagesFoundError
from pagescribe.transcriber import Transcriber
from pagescribe.types import AssemblyReport, PageImage

logger = logging.getLogger(__name__)

TEXT_FONT = "tiro"  # Times-Roman
TEXT_FONT_SIZE = 8
TEXT_LINE_HEIGHT = TEXT_FONT_SIZE * 1.2
TEXT_ORIGIN = (10, 10)
RENDER_MODE_INVISIBLE = 3


def add_page(doc: pymupdf.Document, page_image: PageImage, text: str | None) -> pymupdf.Page:
    """
    Append a page sized to the image (1px = 1pt) with the image as its content.

    Non-blank ``text`` is drawn as one block near the top-left corner with
    render mode 3, so it is searchable but not visible. The overlay is not
    aligned to the words in the image.
    """
    width, height = page_image.size()
    page = doc.new_page(width=width, height=height)
    page.insert_image(page.rect, filename=str(page_image.path))

    if text and text.strip():
        font = pymupdf.Font(TEXT_FONT)
        writer = pymupdf.TextWriter(page.rect)
        x, y = TEXT_ORIGIN
        y += TEXT_FONT_SIZE
        for line in text.splitlines():
            if line.strip():
                writer.append((x, y), line, font=font, fontsize=TEXT_FONT_SIZE)
            y += TEXT_LINE_HEIGHT
        writer.write_text(page, render_mode=RENDER_MODE_INVISIBLE)
    return page


@dataclass
class SearchablePdfWriter:
    """
    Transcribes pages in order and builds a PDF with one page per image.

    With ``incremental`` (the default) the whole document is written to
    ``path`` after every page, so a crash leaves all finished pages on disk.
    """

    path: Path
    transcriber: Transcriber
    model: str | None = None
    incremental: bool = True

    def assemble(self, pages: Iterable[PageImage]) -> AssemblyReport:
        pages = list(pages)
        if not pages:
            raise NoPagesFoundError("No page images to assemble")

        path = Path(self.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        report = AssemblyReport(output_path=path)

        doc = pymupdf.open()
        try:
            for page_image in pages:
                logger.info("Processing %s...", page_image.name)
                report.pages_total += 1
                result = self.transcriber.transcribe(page_image, self.model)
                if not result.ok:
                    report.failed_pages.append(page_image.name)

                count_before = doc.page_count
                try:
                    page = add_page(doc, page_image, result.text)
                except Exception as e:
                    if doc.page_count > count_before:
                        doc.delete_page(doc.page_count - 1)
                    logger.error("Error processing %s for PDF: %s", page_image.name, e)
                    logger.error("  - This page might be missing or incomplete in the PDF.")
                    continue

                report.pages_written += 1
                logger.info(
                    "  - Added page %d (dimensions: %gx%g)",
                    report.pages_written,
                    page.rect.width,
                    page.rect.height,
                )
                if not (result.text and result.text.strip()):
                    logger.info("  - Skipping text layer for %s (OCR failed or returned empty).", page_image.name)

                if self.incremental:
                    self._save(doc, path, report.pages_written)

            if not self.incremental and report.pages_written:
                self._save(doc, path, report.pages_written)
        finally:
            doc.close()

        return report

    @staticmethod
    def _save(doc: pymupdf.Document, path: Path, pages_written: int) -> None:
        try:
            path.write_bytes(doc.tobytes())
            logger.info("  - Saved PDF (%s) with %d page(s).", path, pages_written)
        except OSError as e:
            logger.error("  - Failed to save PDF %s: %s", path, e)
