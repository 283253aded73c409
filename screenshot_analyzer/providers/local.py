"""
Local LLM Vision Provider

Implements screenshot analysis using local LLMs via Ollama.
Supports LLaVA, BakLLaVA, and other vision-capable local models.
"""

import logging
from pathlib import Path
from typing import Optional

import requests

from ..errors import AnalysisError
from .base import VisionProvider

logger = logging.getLogger(__name__)


class LocalProvider(VisionProvider):
    """
    Vision provider using local LLMs through Ollama.

    Runs completely offline; no data leaves the machine.

    Requirements:
    - Ollama installed (https://ollama.ai/)
    - Vision model pulled (e.g., `ollama pull llava`)

    Example:
        provider = LocalProvider(host="http://localhost:11434", model="llava")
        reply = await provider.analyze(Path("screenshot.png"))
    """

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "llava",
        max_tokens: int = 2000,
        temperature: float = 0.7,
        timeout: float = 120
    ):
        """
        Initialize local LLM provider.

        Args:
            host: Ollama server URL (default: http://localhost:11434)
            model: Vision model name (default: llava)
                   Run `ollama list` to see available models
            max_tokens: Prediction limit passed as num_predict
            temperature: Sampling temperature
            timeout: Request timeout in seconds (local models can be slow)
        """
        self.host = host.rstrip("/")
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    @property
    def name(self) -> str:
        """Provider name for identification"""
        return "local"

    def is_available(self) -> bool:
        """
        Check if Ollama server is running.

        Returns:
            True if server is reachable, False otherwise
        """
        try:
            response = requests.get(f"{self.host}/api/tags", timeout=2)
            return response.status_code == 200
        except requests.RequestException:
            return False

    async def analyze(
        self,
        image_path: Path,
        prompt: Optional[str] = None,
        media_type: Optional[str] = None
    ) -> str:
        """
        Analyze screenshot using local LLM via Ollama.

        Ollama takes raw base64 images, so the media type is not sent.

        Args:
            image_path: Path to validated image
            prompt: Optional user instruction
            media_type: Unused, accepted for interface compatibility

        Returns:
            Raw reply text

        Raises:
            AnalysisError: If Ollama is not reachable or the request fails
        """
        prompt, _ = self._resolve_request(image_path, prompt, media_type)

        try:
            image_data = self._encode_image(image_path)

            logger.info("Requesting analysis from %s (%s)", self.name, self.model)
            response = requests.post(
                f"{self.host}/api/generate",
                json={
                    "model": self.model,
                    "system": self._build_system_prompt(),
                    "prompt": prompt,
                    "images": [image_data],
                    "stream": False,
                    "options": {
                        "temperature": self.temperature,
                        "num_predict": self.max_tokens
                    }
                },
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error("Failed to connect to Ollama at %s: %s", self.host, e)
            raise AnalysisError(
                f"Ollama server not reachable at {self.host}. "
                f"Make sure Ollama is running: `ollama serve`"
            ) from e
        except OSError as e:
            raise AnalysisError(f"Could not read screenshot: {e}") from e

        if response.status_code != 200:
            logger.error("Ollama API error: %s", response.text)
            raise AnalysisError("Failed to analyze image. Please try again later.")

        try:
            content = response.json().get("response", "")
        except ValueError as e:
            raise AnalysisError("Invalid response from AI service") from e

        if not content:
            raise AnalysisError("Invalid response from AI service")

        return content
