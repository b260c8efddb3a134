"""
pagescribe CLI - capture page screenshots, transcribe them with an Ollama VLM,
and assemble markdown or a searchable PDF.

Usage:
    pagescribe capture --url https://example.com/reader --delay-ms 1500
    pagescribe transcribe --screenshots ./screenshots --out ocr.md
    pagescribe pdf --screenshots ./screenshots --out out.pdf
    pagescribe inspect out.pdf
"""

from __future__ import annotations

import logging
import signal
import time
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pagescribe.browser import PlaywrightSession
from pagescribe.capture import CancellationToken, PageAdvancer, install_interrupt_handler
from pagescribe.config import (
    DEFAULT_MARKDOWN_MODEL,
    DEFAULT_OLLAMA_HOST,
    DEFAULT_PDF_MODEL,
    DEFAULT_REQUEST_TIMEOUT_SEC,
    CaptureConfig,
    TranscribeConfig,
    build_config,
)
from pagescribe.exceptions import ConfigurationError, ListingError
from pagescribe.image_store import list_pages
from pagescribe.markdown_writer import MarkdownWriter, preview
from pagescribe.pdf_inspect import inspect_pdf
from pagescribe.pdf_writer import SearchablePdfWriter
from pagescribe.providers.ollama import OllamaVLM
from pagescribe.transcriber import Transcriber

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(add_completion=False)
console = Console()
logger = logging.getLogger("pagescribe")


def _setup_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    root = logging.getLogger()
    root.handlers = [RichHandler(console=console, show_path=False, markup=False)]
    root.setLevel(level)


class timed:
    """Context manager for timing operations."""

    def __init__(self, label: str):
        self.label = label
        self.t0 = 0.0

    def __enter__(self):
        self.t0 = time.time()
        logger.info("START %s", self.label)
        return self

    def __exit__(self, exc_type, exc, tb):
        dt = time.time() - self.t0
        if exc:
            logger.error("FAIL  %s (%.2fs): %s", self.label, dt, exc)
        else:
            logger.info("DONE  %s (%.2fs)", self.label, dt)
        return False


def _create_transcriber(cfg: TranscribeConfig) -> Transcriber:
    vlm = OllamaVLM(model=cfg.model, host=cfg.ollama_host, timeout_sec=cfg.request_timeout_sec)
    return Transcriber(vlm=vlm, model=cfg.model)


def _load_pages(screenshots: Path):
    try:
        return list_pages(screenshots)
    except ListingError as e:
        logger.error("Error getting screenshot files: %s", e)
        raise typer.Exit(code=1)


def _transcribe_config(**values) -> TranscribeConfig:
    try:
        return build_config(TranscribeConfig, **values)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        raise typer.Exit(code=1)


# =============================================================================
# Commands
# =============================================================================

@app.command()
def capture(
    url: str = typer.Option("", "--url", envvar="TARGET_URL", help="Page to open"),
    delay_ms: int = typer.Option(1000, "--delay-ms", envvar="DELAY_MS", help="Wait after each click (ms)"),
    output_dir: Path = typer.Option(Path("./screenshots"), "--output-dir", envvar="OUTPUT_DIR"),
    session_dir: Path = typer.Option(Path("./sessions"), "--session-dir", envvar="SESSION_DIR"),
    headless: bool = typer.Option(False, "--headless/--headed"),
    verbose: bool = typer.Option(True, "--verbose/--quiet"),
):
    """Click a fixed point repeatedly and save a full-page screenshot after each click."""
    _setup_logging(verbose)

    try:
        cfg = build_config(
            CaptureConfig,
            target_url=url,
            click_delay_ms=delay_ms,
            output_dir=output_dir,
            session_dir=session_dir,
            headless=headless,
        )
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        raise typer.Exit(code=1)

    token = CancellationToken()
    previous = install_interrupt_handler(token)
    logger.info("Script started. Press Ctrl+C to stop gracefully.")

    session = PlaywrightSession(cfg.session_dir, headless=cfg.headless, navigation_timeout_ms=cfg.navigation_timeout_ms)
    advancer = PageAdvancer(session=session, config=cfg, token=token, console=console)
    exit_code = 0
    try:
        completed = advancer.run()
        logger.info("Captured %d screenshot(s) into %s", completed, cfg.output_dir)
    except Exception as e:
        if token.cancelled:
            logger.info("Ignoring error during shutdown (%s): %s", token.reason, e)
        else:
            logger.exception("An error occurred: %s", e)
            exit_code = 1
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)

    logger.info("Script finished.")
    raise typer.Exit(code=exit_code)


@app.command()
def transcribe(
    screenshots: Path = typer.Option(Path("./screenshots"), "--screenshots", envvar="OUTPUT_DIR"),
    out: Path = typer.Option(Path("./ocr.md"), "--out", help="Markdown output file"),
    model: str = typer.Option(DEFAULT_MARKDOWN_MODEL, "--model", envvar="OLLAMA_MODEL"),
    ollama_host: str = typer.Option(DEFAULT_OLLAMA_HOST, "--ollama-host", envvar="OLLAMA_HOST"),
    timeout_sec: int = typer.Option(DEFAULT_REQUEST_TIMEOUT_SEC, "--timeout-sec", envvar="OLLAMA_TIMEOUT_SEC"),
    verbose: bool = typer.Option(True, "--verbose/--quiet"),
):
    """Transcribe every screenshot into one markdown file."""
    _setup_logging(verbose)
    cfg = _transcribe_config(
        screenshots_dir=screenshots,
        output_path=out,
        model=model,
        ollama_host=ollama_host,
        request_timeout_sec=timeout_sec,
    )
    logger.info("Starting Markdown generation process using model: %s", cfg.model)
    logger.info("Output file: %s", cfg.output_path)
    logger.info("Timeout set to: %d minutes", cfg.request_timeout_sec // 60)

    pages = _load_pages(cfg.screenshots_dir)
    writer = MarkdownWriter(path=cfg.output_path, transcriber=_create_transcriber(cfg), model=cfg.model)
    try:
        with timed(f"transcribe pages={len(pages)}"):
            report = writer.assemble(pages)
    except OSError as e:
        logger.error("Could not initialize markdown file %s: %s", cfg.output_path, e)
        raise typer.Exit(code=1)

    logger.info(
        "%d/%d page(s) transcribed; failures: %s",
        report.pages_transcribed,
        report.pages_total,
        ", ".join(report.failed_pages) or "none",
    )
    if report.unsaved_pages:
        logger.warning("Pages missing from %s: %s", report.output_path, ", ".join(report.unsaved_pages))
    if report.pages_transcribed and report.output_path.is_file():
        console.rule("Markdown File Preview (first 5 lines)")
        console.print(preview(report.output_path), markup=False)
        console.rule()


@app.command()
def pdf(
    screenshots: Path = typer.Option(Path("./screenshots"), "--screenshots", envvar="OUTPUT_DIR"),
    out: Path = typer.Option(Path("./out.pdf"), "--out", help="PDF output file"),
    model: str = typer.Option(DEFAULT_PDF_MODEL, "--model", envvar="OLLAMA_VISION_MODEL"),
    ollama_host: str = typer.Option(DEFAULT_OLLAMA_HOST, "--ollama-host", envvar="OLLAMA_HOST"),
    timeout_sec: int = typer.Option(DEFAULT_REQUEST_TIMEOUT_SEC, "--timeout-sec", envvar="OLLAMA_TIMEOUT_SEC"),
    incremental: bool = typer.Option(True, "--incremental/--save-at-end", help="Save after every page"),
    verbose: bool = typer.Option(True, "--verbose/--quiet"),
):
    """Build a searchable PDF: screenshot pages with an invisible OCR text layer."""
    _setup_logging(verbose)
    cfg = _transcribe_config(
        screenshots_dir=screenshots,
        output_path=out,
        model=model,
        ollama_host=ollama_host,
        request_timeout_sec=timeout_sec,
        incremental_save=incremental,
    )
    logger.info("Starting searchable PDF generation: %s", cfg.output_path)
    logger.info("Using OCR model: %s", cfg.model)

    pages = _load_pages(cfg.screenshots_dir)
    writer = SearchablePdfWriter(
        path=cfg.output_path,
        transcriber=_create_transcriber(cfg),
        model=cfg.model,
        incremental=cfg.incremental_save,
    )
    with timed(f"pdf pages={len(pages)}"):
        report = writer.assemble(pages)

    console.rule()
    if report.pages_written:
        logger.info("Processing finished. PDF saved to %s with %d page(s).", report.output_path, report.pages_written)
        logger.info("NOTE: Text selection might not perfectly align with visual text due to OCR limitations.")
    else:
        logger.warning("Processing finished, but no pages were successfully added to the PDF.")
    if report.failed_pages:
        logger.warning("Pages without a text layer: %s", ", ".join(report.failed_pages))


@app.command()
def inspect(
    pdf_path: Path = typer.Argument(..., help="PDF to inspect"),
    show_text: bool = typer.Option(False, "--show-text", help="Print the first line of each text layer"),
):
    """Show page sizes and whether each page carries a text layer."""
    if not pdf_path.is_file():
        console.print(f"[red]PDF not found:[/red] {pdf_path}")
        raise typer.Exit(code=1)

    infos = inspect_pdf(str(pdf_path))
    table = Table(title=f"{pdf_path.name}: {len(infos)} page(s)")
    table.add_column("page", justify="right")
    table.add_column("size")
    table.add_column("text layer")
    if show_text:
        table.add_column("first line")

    for info in infos:
        row = [
            str(info.page_index + 1),
            f"{info.width:g}x{info.height:g}",
            f"{len(info.text)} chars" if info.text else "none",
        ]
        if show_text:
            row.append((info.text or "").splitlines()[0] if info.text else "")
        table.add_row(*row)
    console.print(table)


def main():
    """Entry point for the pagescribe CLI."""
    app()
