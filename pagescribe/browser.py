"""Controllable browser session backed by Playwright (Chromium, persistent profile)."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Protocol

from playwright.sync_api import BrowserContext, Page, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from pagescribe.exceptions import SessionClosedError
from pagescribe.types import ClickPoint

logger = logging.getLogger(__name__)

# Records the last pointer position so the terminal can display it.
MOUSE_TRACKING_SCRIPT = """
window.currentMouseX = 0;
window.currentMouseY = 0;
document.addEventListener('mousemove', (event) => {
    window.currentMouseX = event.clientX;
    window.currentMouseY = event.clientY;
}, true);
"""

READ_POINTER_JS = """() => ({
    x: typeof window.currentMouseX !== 'undefined' ? window.currentMouseX : 0,
    y: typeof window.currentMouseY !== 'undefined' ? window.currentMouseY : 0,
})"""


class BrowserSession(Protocol):
    """Operations the page advancer needs from a browser."""

    def open(self, url: str) -> None: ...

    def on_close(self, callback: Callable[[], None]) -> None: ...

    def is_closed(self) -> bool: ...

    def pointer_position(self) -> ClickPoint: ...

    def move(self, point: ClickPoint) -> None: ...

    def click(self, point: ClickPoint) -> None: ...

    def wait(self, ms: int) -> None: ...

    def screenshot(self, path: Path) -> None: ...

    def close(self) -> None: ...


class PlaywrightSession:
    """
    Headed Chromium with a persistent user-data directory.

    Login state and cookies live in ``session_dir`` and survive between runs.
    """

    def __init__(self, session_dir: Path, *, headless: bool = False, navigation_timeout_ms: int = 60_000) -> None:
        self.session_dir = Path(session_dir)
        self.headless = headless
        self.navigation_timeout_ms = navigation_timeout_ms
        self._playwright: Playwright | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._closed = False
        self._close_callbacks: list[Callable[[], None]] = []

    def open(self, url: str) -> None:
        if self.session_dir.exists():
            logger.info("Using existing session data directory: %s", self.session_dir)
        else:
            logger.info("Creating session data directory: %s", self.session_dir)
            self.session_dir.mkdir(parents=True, exist_ok=True)

        logger.info("Launching browser...")
        self._playwright = sync_playwright().start()
        self._context = self._playwright.chromium.launch_persistent_context(
            str(self.session_dir.resolve()),
            headless=self.headless,
            no_viewport=True,
            handle_sigint=False,
        )
        self._context.on("close", lambda _ctx: self._handle_close())

        self._page = self._context.pages[0] if self._context.pages else self._context.new_page()
        self._page.add_init_script(MOUSE_TRACKING_SCRIPT)

        logger.info("Navigating to %s...", url)
        self._page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
        logger.info("Navigation complete.")

    def on_close(self, callback: Callable[[], None]) -> None:
        self._close_callbacks.append(callback)

    def _handle_close(self) -> None:
        if self._closed:
            return
        self._closed = True
        logger.warning("Browser disconnected. Stopping.")
        for cb in self._close_callbacks:
            cb()

    def is_closed(self) -> bool:
        return self._closed or self._page is None or self._page.is_closed()

    def _require_page(self) -> Page:
        page = self._page
        if page is None or self._closed or page.is_closed():
            raise SessionClosedError("Browser page closed or context lost.")
        return page

    def pointer_position(self) -> ClickPoint:
        pos = self._require_page().evaluate(READ_POINTER_JS)
        return ClickPoint(x=pos["x"], y=pos["y"])

    def move(self, point: ClickPoint) -> None:
        self._require_page().mouse.move(point.x, point.y)

    def click(self, point: ClickPoint) -> None:
        self._require_page().mouse.click(point.x, point.y)

    def wait(self, ms: int) -> None:
        if ms <= 0:
            return
        if self.is_closed():
            time.sleep(ms / 1000)
            return
        self._require_page().wait_for_timeout(ms)

    def screenshot(self, path: Path) -> None:
        self._require_page().screenshot(path=str(path), full_page=True)

    def close(self) -> None:
        try:
            if self._context is not None and not self._closed:
                logger.info("Closing browser (session data preserved)...")
                self._closed = True
                self._context.close()
                logger.info("Browser closed.")
            else:
                logger.info("Browser already closed or disconnected.")
        except PlaywrightError as e:
            logger.warning("Browser close failed: %s", e)
        finally:
            if self._playwright is not None:
                self._playwright.stop()
                self._playwright = None
            self._context = None
            self._page = None
