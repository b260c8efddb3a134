from __future__ import annotations

import os

import pypdfium2 as pdfium

from pagescribe.types import PdfPageInfo


def inspect_pdf(pdf_path: str, *, extract_text: bool = True) -> list[PdfPageInfo]:
    """
    Report page sizes and the extractable text layer of a PDF using PDFium.
    """
    pdf_path = os.path.abspath(pdf_path)
    pdf = pdfium.PdfDocument(pdf_path)
    infos: list[PdfPageInfo] = []

    try:
        for page_index in range(len(pdf)):
            page = pdf.get_page(page_index)
            width, height = page.get_size()

            # Text extraction (best-effort)
            text: str | None = None
            if extract_text:
                try:
                    textpage = page.get_textpage()
                    text = (textpage.get_text_range() or "").strip() or None
                    textpage.close()
                except Exception:
                    text = None

            infos.append(PdfPageInfo(page_index=page_index, width=width, height=height, text=text))
            page.close()
    finally:
        pdf.close()

    return infos
