from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from pagescribe.types import ClickPoint, PageImage, TranscriptionResult


def _make_png(path: Path, size: tuple[int, int] = (120, 80), color: tuple[int, int, int] = (255, 255, 255)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color).save(path, format="PNG")
    return path


class ScriptedTranscriber:
    """Deterministic stand-in for Transcriber: returns canned text per filename."""

    def __init__(self, texts: dict[str, str | None], model: str = "test-model") -> None:
        self.texts = texts
        self.model = model
        self.calls: list[str] = []
        self.before_call: Callable[[PageImage], None] | None = None

    def transcribe(self, page: PageImage, model: str | None = None) -> TranscriptionResult:
        if self.before_call is not None:
            self.before_call(page)
        self.calls.append(page.name)
        return TranscriptionResult(
            source_sequence_number=page.sequence_number,
            source_name=page.name,
            text=self.texts.get(page.name),
            model=model or self.model,
        )


class FakeSession:
    """In-memory BrowserSession that writes real PNGs for screenshots."""

    def __init__(self, pointer: ClickPoint | None = None) -> None:
        self.pointer = pointer or ClickPoint(x=120, y=340)
        self.opened_url: str | None = None
        self.closed = False
        self.close_calls = 0
        self.moves: list[ClickPoint] = []
        self.clicks: list[ClickPoint] = []
        self.waits: list[int] = []
        self.shots: list[Path] = []
        self.on_screenshot: Callable[[int], None] | None = None
        self.fail_on_open: Exception | None = None
        self._callbacks: list[Callable[[], None]] = []

    def open(self, url: str) -> None:
        if self.fail_on_open is not None:
            raise self.fail_on_open
        self.opened_url = url

    def on_close(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    def browser_closed(self) -> None:
        self.closed = True
        for cb in self._callbacks:
            cb()

    def is_closed(self) -> bool:
        return self.closed

    def pointer_position(self) -> ClickPoint:
        return self.pointer

    def move(self, point: ClickPoint) -> None:
        self.moves.append(point)

    def click(self, point: ClickPoint) -> None:
        self.clicks.append(point)

    def wait(self, ms: int) -> None:
        self.waits.append(ms)

    def screenshot(self, path: Path) -> None:
        _make_png(Path(path))
        self.shots.append(Path(path))
        if self.on_screenshot is not None:
            self.on_screenshot(len(self.shots))

    def close(self) -> None:
        self.closed = True
        self.close_calls += 1


@pytest.fixture()
def make_png() -> Callable[..., Path]:
    return _make_png


@pytest.fixture()
def screenshots_dir(tmp_path: Path) -> Path:
    """Three pages with distinct sizes: 1.png, 2.png, 3.png."""
    folder = tmp_path / "screenshots"
    _make_png(folder / "1.png", size=(120, 80))
    _make_png(folder / "2.png", size=(90, 140))
    _make_png(folder / "3.png", size=(200, 100))
    return folder


@pytest.fixture()
def scripted_transcriber() -> type[ScriptedTranscriber]:
    return ScriptedTranscriber


@pytest.fixture()
def fake_session() -> FakeSession:
    return FakeSession()
