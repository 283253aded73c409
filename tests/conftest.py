"""Shared pytest fixtures."""

from __future__ import annotations

import base64
from pathlib import Path
from typing import Optional

import pytest

from screenshot_analyzer.providers.base import VisionProvider


PNG_1X1_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAQAAAC1HAwCAAAAC0lEQVR42mP8/x8AAwMCAO7+fJ8AAAAASUVORK5CYII="
)

ENV_VARS = (
    "OPENROUTER_API_KEY",
    "OPENROUTER_MODEL",
    "OPENROUTER_BASE_URL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "OLLAMA_HOST",
    "OLLAMA_MODEL",
    "VISION_PROVIDER",
    "ANALYSIS_MAX_TOKENS",
    "ANALYSIS_TEMPERATURE",
    "LOG_LEVEL",
)


class FakeProvider(VisionProvider):
    """Provider returning canned replies and recording each request."""

    def __init__(self, replies: list[str], available: bool = True) -> None:
        self.replies = list(replies)
        self.available = available
        self.calls: list[dict] = []

    @property
    def name(self) -> str:
        return "fake"

    def is_available(self) -> bool:
        return self.available

    async def analyze(
        self,
        image_path: Path,
        prompt: Optional[str] = None,
        media_type: Optional[str] = None,
    ) -> str:
        self.calls.append({"image_path": image_path, "prompt": prompt, "media_type": media_type})
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    path = tmp_path / "screenshot.png"
    path.write_bytes(PNG_1X1_BYTES)
    return path


@pytest.fixture
def fake_provider_factory():
    def _make(*replies: str, available: bool = True) -> FakeProvider:
        return FakeProvider(list(replies) or ['{"uxInsights": ["ok"]}'], available=available)

    return _make
