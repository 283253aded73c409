"""
Anthropic Claude Vision Provider

Implements screenshot analysis using Claude's vision capabilities.
Supports Claude 3+ models with vision understanding.
"""

import logging
from pathlib import Path
from typing import Optional

import anthropic

from ..errors import AnalysisError
from .base import VisionProvider

logger = logging.getLogger(__name__)


class AnthropicProvider(VisionProvider):
    """
    Vision provider using Anthropic's Claude models.

    The system instruction goes in the dedicated system parameter and
    the screenshot is sent as a base64 image block.

    Example:
        provider = AnthropicProvider(api_key="sk-ant-...")
        reply = await provider.analyze(Path("screenshot.png"))
    """

    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-sonnet-20241022",
        max_tokens: int = 2000,
        temperature: float = 0.7,
        client: Optional[anthropic.Anthropic] = None
    ):
        """
        Initialize Anthropic provider.

        Args:
            api_key: Anthropic API key (get from https://console.anthropic.com/)
            model: Claude model to use, must be vision-capable (Claude 3+)
            max_tokens: Completion token limit
            temperature: Sampling temperature
            client: Preconfigured client (built from api_key when omitted)
        """
        self.client = client or anthropic.Anthropic(api_key=api_key)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._api_key = api_key

    @property
    def name(self) -> str:
        """Provider name for identification"""
        return "anthropic"

    def is_available(self) -> bool:
        """
        Check if Anthropic provider is configured.

        Returns:
            True if API key is set, False otherwise
        """
        return self._api_key is not None and len(self._api_key) > 0

    async def analyze(
        self,
        image_path: Path,
        prompt: Optional[str] = None,
        media_type: Optional[str] = None
    ) -> str:
        """
        Analyze screenshot using Claude vision model.

        Args:
            image_path: Path to validated image
            prompt: Optional user instruction
            media_type: Optional MIME type of the image

        Returns:
            Raw reply text (all text blocks joined)

        Raises:
            AnalysisError: If API call fails or the reply has no text
        """
        prompt, media_type = self._resolve_request(image_path, prompt, media_type)

        try:
            image_data = self._encode_image(image_path)

            logger.info("Requesting analysis from %s (%s)", self.name, self.model)
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                system=self._build_system_prompt(),
                messages=[{
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": media_type,
                                "data": image_data
                            }
                        },
                        {
                            "type": "text",
                            "text": prompt
                        }
                    ]
                }]
            )

        except anthropic.APIError as e:
            logger.error("Anthropic API error: %s", e)
            raise AnalysisError("Failed to analyze image. Please try again later.") from e
        except OSError as e:
            raise AnalysisError(f"Could not read screenshot: {e}") from e

        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        )
        if not text:
            logger.error("Invalid Anthropic response structure: %r", response)
            raise AnalysisError("Invalid response from AI service")

        return text
