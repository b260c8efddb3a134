"""Run configuration value objects.

Both objects are built once at startup (from CLI options, which fall back to
environment variables) and passed down explicitly.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pagescribe.exceptions import ConfigurationError

DEFAULT_MARKDOWN_MODEL = "gemma3:12b-it-qat"
DEFAULT_PDF_MODEL = "llama3.2-vision"
DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_REQUEST_TIMEOUT_SEC = 30 * 60


class CaptureConfig(BaseModel):
    """Settings for one screenshot capture session."""

    model_config = ConfigDict(frozen=True)

    target_url: str
    click_delay_ms: int = Field(1000, ge=0)
    output_dir: Path = Path("./screenshots")
    session_dir: Path = Path("./sessions")
    navigation_timeout_ms: int = Field(60_000, gt=0)
    pre_click_delay_ms: int = Field(100, ge=0)
    pointer_poll_interval_ms: int = Field(250, gt=0)
    headless: bool = False

    @field_validator("target_url")
    @classmethod
    def _require_url(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("TARGET_URL must be set")
        return v


class TranscribeConfig(BaseModel):
    """Settings for one transcription/assembly run."""

    model_config = ConfigDict(frozen=True)

    screenshots_dir: Path = Path("./screenshots")
    output_path: Path
    model: str = DEFAULT_MARKDOWN_MODEL
    ollama_host: str = DEFAULT_OLLAMA_HOST
    request_timeout_sec: int = Field(DEFAULT_REQUEST_TIMEOUT_SEC, gt=0)
    incremental_save: bool = True

    @field_validator("model")
    @classmethod
    def _require_model(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("model identifier must not be empty")
        return v

    @field_validator("ollama_host")
    @classmethod
    def _normalize_host(cls, v: str) -> str:
        return (v or DEFAULT_OLLAMA_HOST).rstrip("/")


def build_config(model_cls, **values):
    """Instantiate a config model, turning validation failures into ConfigurationError."""
    try:
        return model_cls(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'config'}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(problems) from e
