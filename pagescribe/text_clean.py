from __future__ import annotations

import re

_LEADING_FENCE_RE = re.compile(r"^```(?:markdown)?\s*")
_TRAILING_FENCE_RE = re.compile(r"```\s*$")
_THINK_TAG_RE = re.compile(r"<think>.*?</think>", flags=re.IGNORECASE | re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a single enclosing ``` / ```markdown fence."""
    s = text.strip()
    s = _LEADING_FENCE_RE.sub("", s)
    s = _TRAILING_FENCE_RE.sub("", s)
    return s.strip()


def clean_transcription(text: str | None) -> str:
    """
    Cleanup for VLM transcription outputs:
    - Remove <think>...</think> blocks (thinking models)
    - Remove an enclosing code fence
    """
    if not text:
        return ""

    s = _THINK_TAG_RE.sub("", text)
    return strip_code_fences(s)
