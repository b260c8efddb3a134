"""Ollama HTTP API client."""

from __future__ import annotations

import base64
import io
import os
from dataclasses import dataclass
from typing import Any

import requests
from PIL import Image

from pagescribe.config import DEFAULT_OLLAMA_HOST, DEFAULT_REQUEST_TIMEOUT_SEC


def _default_host() -> str:
    """Get default Ollama host from environment or use localhost."""
    return os.environ.get("OLLAMA_HOST", DEFAULT_OLLAMA_HOST).rstrip("/")


def img_to_b64_png(img: Image.Image) -> str:
    """Convert PIL Image to base64-encoded PNG string."""
    buf = io.BytesIO()
    img.convert("RGB").save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


@dataclass
class OllamaClient:
    """HTTP client for Ollama API."""

    host: str = ""
    timeout_sec: int = DEFAULT_REQUEST_TIMEOUT_SEC

    def __post_init__(self) -> None:
        """Initialize host from environment if not provided."""
        if not self.host:
            self.host = _default_host()
        self.host = self.host.rstrip("/")

    def chat(
        self,
        *,
        model: str,
        messages: list[dict[str, Any]],
        options: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Generate chat response using /api/chat endpoint."""
        payload: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "stream": False,
        }
        if options:
            payload["options"] = options
        r = requests.post(f"{self.host}/api/chat", json=payload, timeout=self.timeout_sec)
        r.raise_for_status()
        return r.json()
