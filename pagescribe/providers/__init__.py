"""Providers module for vision-language inference services."""

from pagescribe.providers.ollama import OllamaClient, OllamaVLM

__all__ = ["OllamaClient", "OllamaVLM"]
