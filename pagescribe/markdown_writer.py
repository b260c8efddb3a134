"""Markdown output: one transcribed text block per page, appended in order."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from pagescribe.transcriber import Transcriber
from pagescribe.types import AssemblyReport, PageImage

logger = logging.getLogger(__name__)

HEADER = "# Transcription Results\n\n"


def failure_marker(filename: str) -> str:
    return f"\n\n[OCR Warning/Error for {filename}]\n\n"


@dataclass
class MarkdownWriter:
    """
    Transcribes pages in order and appends each result to a markdown file.

    The file is truncated at the start of a run and every page chunk is
    written as soon as it is ready, so a crash keeps all completed pages.
    A page whose OCR failed gets an inline failure marker instead of text.
    """

    path: Path
    transcriber: Transcriber
    model: str | None = None

    def assemble(self, pages: Iterable[PageImage]) -> AssemblyReport:
        path = Path(self.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(HEADER, encoding="utf-8")
        logger.info("Initialized markdown file: %s", path)

        report = AssemblyReport(output_path=path)
        for page in pages:
            report.pages_total += 1
            result = self.transcriber.transcribe(page, self.model)
            if result.ok:
                chunk = f"{result.text}\n\n"
            else:
                chunk = failure_marker(page.name)
                report.failed_pages.append(page.name)

            try:
                with path.open("a", encoding="utf-8") as f:
                    f.write(chunk)
            except OSError as e:
                logger.error("  - Failed to append %s to %s: %s", page.name, path, e)
                report.unsaved_pages.append(page.name)
                continue
            report.pages_written += 1

        logger.info("Markdown generation completed. Results saved to %s", path)
        return report


def preview(path: str | Path, lines: int = 5) -> str:
    """First ``lines`` lines of a written markdown file."""
    content = Path(path).read_text(encoding="utf-8")
    return "\n".join(content.split("\n")[:lines])
