"""
Base Vision Provider Interface

Abstract base class defining the contract for vision model providers.
Providers only transport the screenshot and return the model's raw
reply text; shaping that text is the normalizer's job.
"""

import base64
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..validation import guess_media_type

DEFAULT_PROMPT = (
    "Analyze this screenshot for UX/usability issues, visual design feedback, "
    "and general best practices."
)

SYSTEM_PROMPT = """You are a UX/UI design expert. Analyze the provided screenshot and provide structured feedback in JSON format with the following structure:
{
  "uxInsights": ["UX/usability observation 1", "UX/usability observation 2"],
  "visualDesign": ["Visual design observation 1", "Visual design observation 2"],
  "bestPractices": ["Best practice observation 1", "Best practice observation 2"],
  "annotations": [{"x": 100, "y": 200, "width": 50, "height": 30, "text": "Specific annotation"}]
}

Focus on actionable insights for improving the design. If you can't provide exact coordinates for annotations, omit the annotations field. Always respond with valid JSON."""


class VisionProvider(ABC):
    """
    Abstract base class for vision model providers.

    All vision providers (OpenRouter, OpenAI, Anthropic, Local) must
    implement this interface to ensure consistent behavior and easy
    swapping.

    Subclasses must implement:
    - analyze(): Send screenshot and instruction, return reply text
    - is_available(): Check if provider is configured and ready
    - name: Property returning provider name
    """

    max_tokens: int = 2000
    temperature: float = 0.7

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Provider name for logging and identification.

        Returns:
            Provider name (e.g., "openrouter", "openai", "local")
        """
        pass

    @abstractmethod
    async def analyze(
        self,
        image_path: Path,
        prompt: Optional[str] = None,
        media_type: Optional[str] = None
    ) -> str:
        """
        Send a screenshot to the vision model and return its reply.

        The request carries the system instruction asking for the
        AnalysisResult JSON shape, the user instruction, and the image
        as a base64 data URL.

        Args:
            image_path: Path to an already validated image file
            prompt: User instruction (defaults to DEFAULT_PROMPT)
            media_type: MIME type of the image (guessed from the name
                        when omitted)

        Returns:
            Raw reply text, untrusted and unvalidated

        Raises:
            AnalysisError: If the API call fails or the reply is empty
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if provider is configured and ready to use.

        Returns:
            True if provider can be used, False otherwise
        """
        pass

    def _encode_image(self, image_path: Path) -> str:
        """
        Encode image file as base64 string.

        Args:
            image_path: Path to image file

        Returns:
            Base64-encoded image data
        """
        with open(image_path, "rb") as f:
            return base64.b64encode(f.read()).decode("utf-8")

    def _build_system_prompt(self) -> str:
        """System instruction requesting the structured JSON reply"""
        return SYSTEM_PROMPT

    def _resolve_request(
        self,
        image_path: Path,
        prompt: Optional[str],
        media_type: Optional[str]
    ) -> tuple[str, str]:
        """Fill in the default instruction and media type"""
        return (
            prompt or DEFAULT_PROMPT,
            media_type or guess_media_type(image_path) or "image/png",
        )
