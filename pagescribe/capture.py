"""
Page advancer: click a fixed point, wait, screenshot, repeat until stopped.

The loop runs on the calling thread. It stops when its CancellationToken is
set, either by the SIGINT handler or by the browser reporting that it closed.
The token is only checked at iteration boundaries and right before a
screenshot.
"""

from __future__ import annotations

import logging
import signal
import sys
import threading
from dataclasses import dataclass, field
from typing import Callable

from rich.console import Console
from rich.live import Live
from rich.text import Text

from pagescribe.browser import BrowserSession
from pagescribe.config import CaptureConfig
from pagescribe.exceptions import SessionClosedError
from pagescribe.image_store import page_path
from pagescribe.types import ClickPoint

logger = logging.getLogger(__name__)

CONFIRM_PROMPT = "Mouse Position Check: (Move mouse in browser, check position below) Press ENTER in this terminal to confirm position..."


class CancellationToken:
    """One-shot stop signal shared between a signal handler and the capture loop."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self.reason: str | None = None

    def cancel(self, reason: str) -> bool:
        """Set the token. Returns False if it was already set."""
        with self._lock:
            if self._event.is_set():
                return False
            self.reason = reason
            self._event.set()
            return True

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def install_interrupt_handler(token: CancellationToken):
    """Route SIGINT to ``token``. Returns the previous handler."""

    def _handler(signum, frame) -> None:
        if token.cancel("interrupt"):
            logger.warning("Caught interrupt signal (Ctrl+C). Stopping loop and closing browser...")

    return signal.signal(signal.SIGINT, _handler)


def wait_for_enter() -> threading.Event:
    """Start a daemon thread that sets the returned event when Enter is pressed on stdin."""
    confirmed = threading.Event()

    def _read() -> None:
        try:
            sys.stdin.readline()
        finally:
            confirmed.set()

    threading.Thread(target=_read, name="confirm-enter", daemon=True).start()
    return confirmed


@dataclass
class PointerSampler:
    """
    Polls the in-page pointer position at a fixed interval.

    The sampler owns the last-known position. Callers only read snapshots
    of it through ``last``.
    """

    session: BrowserSession
    interval_ms: int = 250
    _last: ClickPoint = field(default_factory=lambda: ClickPoint(x=0, y=0))
    _error: bool = False

    @property
    def last(self) -> ClickPoint:
        return self._last

    def sample(self) -> ClickPoint:
        if self.session.is_closed():
            raise SessionClosedError("Browser page closed before the click position was confirmed.")
        try:
            self._last = self.session.pointer_position()
            self._error = False
        except SessionClosedError:
            raise
        except Exception as e:
            # intermittent evaluate failures during navigation
            logger.debug("Pointer sample failed: %s", e)
            self._error = True
        return self._last

    def status(self) -> Text:
        if self._error:
            return Text(f"{CONFIRM_PROMPT} (Error getting position)")
        return Text(f"{CONFIRM_PROMPT} Current Pos: ({self._last.x:g}, {self._last.y:g})")

    def run_until(
        self,
        confirmed: threading.Event,
        token: CancellationToken,
        console: Console | None = None,
    ) -> ClickPoint | None:
        """Sample until ``confirmed`` is set, then freeze a final reading."""
        with Live(self.status(), console=console, refresh_per_second=8, transient=True) as live:
            while not confirmed.is_set():
                if token.cancelled:
                    return None
                self.sample()
                live.update(self.status())
                self.session.wait(self.interval_ms)

        if token.cancelled:
            return None
        final = self.session.pointer_position() if not self.session.is_closed() else None
        if final is None:
            raise SessionClosedError("Browser page closed or context lost before final confirmation.")
        self._last = final
        return final


@dataclass
class PageAdvancer:
    """Drives one capture session and writes ``1.png``, ``2.png``, ... into the output dir."""

    session: BrowserSession
    config: CaptureConfig
    token: CancellationToken
    confirm: Callable[[], threading.Event] = wait_for_enter
    console: Console | None = None

    def run(self) -> int:
        """Run the capture session. Returns the number of screenshots written."""
        self.session.on_close(lambda: self.token.cancel("browser closed"))
        try:
            self.session.open(self.config.target_url)

            point = self.acquire_click_point()
            if point is None:
                logger.info("Stopped before a click position was confirmed.")
                return 0
            logger.info("Using coordinates (%g, %g) for clicks.", point.x, point.y)

            out_dir = self.config.output_dir
            if not out_dir.exists():
                logger.info("Creating output directory: %s", out_dir)
                out_dir.mkdir(parents=True, exist_ok=True)

            logger.info("Starting screenshot loop... Press Ctrl+C to stop.")
            completed = self._loop(point)
            logger.info("Loop stopped after %d screenshot(s).", completed)
            return completed
        finally:
            self.session.close()

    def acquire_click_point(self) -> ClickPoint | None:
        logger.info(">>> Position your mouse cursor over the desired click location <<<")
        logger.info(">>> in the browser window. Then press Enter in this terminal. <<<")
        sampler = PointerSampler(self.session, interval_ms=self.config.pointer_poll_interval_ms)
        point = sampler.run_until(self.confirm(), self.token, console=self.console)
        if point is not None:
            logger.info("Position captured: (%g, %g)", point.x, point.y)
        return point

    def _should_stop(self) -> bool:
        if self.token.cancelled:
            return True
        if self.session.is_closed():
            logger.warning("Page closed unexpectedly. Stopping loop.")
            return True
        return False

    def _loop(self, point: ClickPoint) -> int:
        completed = 0
        index = 1
        while not self._should_stop():
            logger.info("--- Iteration %d ---", index)

            self.session.move(point)
            self.session.wait(self.config.pre_click_delay_ms)
            self.session.click(point)

            logger.info("Waiting for %dms...", self.config.click_delay_ms)
            self.session.wait(self.config.click_delay_ms)

            if self._should_stop():
                break

            path = page_path(self.config.output_dir, index)
            logger.info("Taking screenshot: %s", path)
            self.session.screenshot(path)
            completed = index
            index += 1
        return completed
