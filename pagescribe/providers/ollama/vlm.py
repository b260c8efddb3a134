"""Ollama VLM provider for page transcription."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

from PIL import Image

from pagescribe.config import DEFAULT_REQUEST_TIMEOUT_SEC
from pagescribe.providers.base import VisionLanguageModel
from pagescribe.providers.ollama.client import OllamaClient, img_to_b64_png

logger = logging.getLogger(__name__)


def _extract_content_from_response(res: dict[str, Any]) -> str:
    """
    Extract text content from an Ollama /api/chat response.

    Standard shape is {"message": {"content": "..."}}; a bare "response"
    field (/api/generate style) is accepted as a fallback.
    """
    msg = res.get("message")
    if isinstance(msg, dict) and msg.get("content"):
        return str(msg["content"]).strip()
    if res.get("response"):
        return str(res["response"]).strip()

    logger.warning("[OllamaVLM] Empty response. Keys received: %s", list(res.keys()))
    return ""


@dataclass
class OllamaVLM(VisionLanguageModel):
    """
    Ollama-based Vision Language Model provider.

    Model name falls back to the OLLAMA_MODEL environment variable.

    Example model tags:
    - gemma3:12b-it-qat
    - llama3.2-vision
    """

    model: str = ""
    timeout_sec: int = DEFAULT_REQUEST_TIMEOUT_SEC
    host: str = ""  # e.g. http://localhost:11434 (defaults from OLLAMA_HOST)
    options: dict | None = None

    def __post_init__(self) -> None:
        if not self.model:
            self.model = os.environ.get("OLLAMA_MODEL", "gemma3:12b-it-qat")

    def generate(self, *, prompt: str, images: list[Image.Image] | None = None, model: str | None = None) -> str:
        """Generate a text response for the prompt and (at most one) image."""
        images = (images or [])[:1]
        message: dict[str, Any] = {"role": "user", "content": prompt}
        if images:
            message["images"] = [img_to_b64_png(images[0])]

        client = OllamaClient(host=self.host, timeout_sec=self.timeout_sec)
        res = client.chat(model=model or self.model, messages=[message], options=self.options)
        return _extract_content_from_response(res)
