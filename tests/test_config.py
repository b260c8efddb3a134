from pathlib import Path

import pytest

from pagescribe.config import (
    DEFAULT_MARKDOWN_MODEL,
    DEFAULT_REQUEST_TIMEOUT_SEC,
    CaptureConfig,
    TranscribeConfig,
    build_config,
)
from pagescribe.exceptions import ConfigurationError


class TestCaptureConfig:
    def test_defaults(self) -> None:
        cfg = CaptureConfig(target_url="https://example.com")

        assert cfg.click_delay_ms == 1000
        assert cfg.output_dir == Path("./screenshots")
        assert cfg.session_dir == Path("./sessions")
        assert cfg.navigation_timeout_ms == 60_000
        assert cfg.pre_click_delay_ms == 100
        assert cfg.pointer_poll_interval_ms == 250

    def test_missing_url_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="TARGET_URL"):
            build_config(CaptureConfig, target_url="  ")

    def test_negative_delay_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="click_delay_ms"):
            build_config(CaptureConfig, target_url="https://example.com", click_delay_ms=-5)

    def test_non_numeric_delay_is_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError, match="click_delay_ms"):
            build_config(CaptureConfig, target_url="https://example.com", click_delay_ms="soon")

    def test_is_frozen(self) -> None:
        cfg = CaptureConfig(target_url="https://example.com")

        with pytest.raises(Exception):
            cfg.click_delay_ms = 5  # type: ignore[misc]


class TestTranscribeConfig:
    def test_defaults(self) -> None:
        cfg = TranscribeConfig(output_path=Path("ocr.md"))

        assert cfg.model == DEFAULT_MARKDOWN_MODEL
        assert cfg.request_timeout_sec == DEFAULT_REQUEST_TIMEOUT_SEC == 1800
        assert cfg.ollama_host == "http://localhost:11434"
        assert cfg.incremental_save is True

    def test_host_trailing_slash_removed(self) -> None:
        cfg = TranscribeConfig(output_path=Path("ocr.md"), ollama_host="http://gpu-box:11434/")

        assert cfg.ollama_host == "http://gpu-box:11434"

    def test_blank_model_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="model"):
            build_config(TranscribeConfig, output_path=Path("ocr.md"), model="  ")
