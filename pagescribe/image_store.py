"""Ordered page-image store on disk (``<n>.png`` files)."""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pagescribe.exceptions import ImageDirectoryNotFoundError, NoPagesFoundError
from pagescribe.types import PageImage

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg"}

_LEADING_INT_RE = re.compile(r"^(\d+)")


def sequence_number(filename: str) -> int:
    """Leading integer of a filename, 0 when there is none."""
    m = _LEADING_INT_RE.match(filename)
    return int(m.group(1)) if m else 0


def page_path(directory: str | Path, index: int) -> Path:
    return Path(directory) / f"{index}.png"


def list_pages(directory: str | Path) -> list[PageImage]:
    """
    List page images in ``directory`` ordered by numeric filename prefix.

    ``2.png, 10.png, 1.png`` comes back as 1, 2, 10.
    """
    folder = Path(directory)
    if not folder.is_dir():
        raise ImageDirectoryNotFoundError(f"Screenshots directory not found at {folder}")

    files = [p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS]
    if not files:
        raise NoPagesFoundError(f"No page images found in {folder}")

    pages = [PageImage(sequence_number=sequence_number(p.name), path=p) for p in files]
    pages.sort(key=lambda pg: (pg.sequence_number, pg.name))
    logger.info("Found %d screenshot file(s) in %s", len(pages), folder)
    return pages
