"""Base protocol for vision-language models."""

from __future__ import annotations

from typing import Protocol

from PIL import Image


class VisionLanguageModel(Protocol):
    """Minimal VLM interface: prompt + optional image -> text."""

    def generate(self, *, prompt: str, images: list[Image.Image] | None = None, model: str | None = None) -> str: ...
