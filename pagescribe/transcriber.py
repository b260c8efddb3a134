"""Single-page transcription through a local vision model."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PIL import Image

from pagescribe.exceptions import TranscriptionError
from pagescribe.providers.base import VisionLanguageModel
from pagescribe.text_clean import clean_transcription
from pagescribe.types import PageImage, TranscriptionResult

logger = logging.getLogger(__name__)

TRANSCRIPTION_PROMPT = """Extract and transcribe *only* the main textual content of the book page shown in this image. Preserve formatting like paragraphs where possible.

IGNORE all of the following elements:
- Headers with book title, chapter name, or author names
- Footers with page numbers or location indicators
- Reader progress indicators (percentage, time left)
- Navigation bars or buttons
- Reader menu items or icons
- Any location markers like "Location 123-456"
- Chapter or section numbering not part of the actual text
- Any UI elements overlaid on the text

Provide only the clean transcribed text content, exactly as it appears on the page. Do not add any descriptions or commentary about the image itself."""


@dataclass
class Transcriber:
    """
    Runs one OCR request per page image.

    ``transcribe`` never raises: any failure (unreadable image, network error,
    timeout, empty answer) is logged and reported as ``text=None``.
    """

    vlm: VisionLanguageModel
    model: str
    prompt: str = TRANSCRIPTION_PROMPT

    def transcribe(self, page: PageImage, model: str | None = None) -> TranscriptionResult:
        model = model or self.model
        logger.info("  - OCR for %s using %s...", page.name, model)
        text: str | None = None
        try:
            text = self._run(page, model)
            logger.info("    OCR Success for %s.", page.name)
        except TranscriptionError as e:
            logger.warning("  - Warning: %s", e)
        except Exception as e:
            logger.error("  - Error processing %s: %s", page.name, e)
            if e.__cause__ is not None:
                logger.error("    Cause: %s", e.__cause__)

        return TranscriptionResult(
            source_sequence_number=page.sequence_number,
            source_name=page.name,
            text=text,
            model=model,
        )

    def _run(self, page: PageImage, model: str) -> str:
        with Image.open(page.path) as im:
            im.load()
            raw = self.vlm.generate(prompt=self.prompt, images=[im], model=model)

        text = clean_transcription(raw)
        if not text:
            raise TranscriptionError(f"Received no content from Ollama for {page.name}.")
        return text
