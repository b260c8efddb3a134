from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from PIL import Image
from pydantic import BaseModel, ConfigDict


class PageImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    sequence_number: int
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def size(self) -> tuple[int, int]:
        """Pixel dimensions (width, height) of the stored raster."""
        with Image.open(self.path) as im:
            return im.size


class TranscriptionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    source_sequence_number: int
    source_name: str
    text: str | None = None  # None: OCR failed or returned nothing
    model: str

    @property
    def ok(self) -> bool:
        return self.text is not None


class ClickPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class PdfPageInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    page_index: int
    width: float
    height: float
    text: str | None = None


@dataclass
class AssemblyReport:
    """Outcome of one assembly run."""

    output_path: Path
    pages_total: int = 0
    pages_written: int = 0
    failed_pages: list[str] = field(default_factory=list)
    unsaved_pages: list[str] = field(default_factory=list)

    @property
    def pages_transcribed(self) -> int:
        return self.pages_total - len(self.failed_pages)
