"""Ollama provider for VLM transcription."""

from pagescribe.providers.ollama.client import OllamaClient
from pagescribe.providers.ollama.vlm import OllamaVLM

__all__ = ["OllamaClient", "OllamaVLM"]
