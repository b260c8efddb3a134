"""
pagescribe - Screenshot capture, VLM transcription and searchable PDF assembly.

This package captures sequential page screenshots from a browser (Playwright),
transcribes each page with a local vision-language model served by Ollama, and
assembles the results into a markdown file or a searchable PDF.

Modules:
    browser: Playwright-backed browser session
    capture: Click/wait/screenshot loop with cancellation
    cli: Command-line interface
    config: Run configuration value objects
    image_store: Ordered screenshot listing
    markdown_writer: Markdown assembly
    pdf_inspect: PDF page/text-layer inspection
    pdf_writer: Searchable PDF assembly
    text_clean: Model output post-processing
    transcriber: Per-page OCR with failure isolation
"""

from pagescribe import (
    browser,
    capture,
    cli,
    config,
    image_store,
    markdown_writer,
    pdf_inspect,
    pdf_writer,
    text_clean,
    transcriber,
)

__version__ = "0.1.0"

__all__ = [
    "browser",
    "capture",
    "cli",
    "config",
    "image_store",
    "markdown_writer",
    "pdf_inspect",
    "pdf_writer",
    "text_clean",
    "transcriber",
]
