"""
OpenAI-Compatible Vision Providers

Implements screenshot analysis over the OpenAI chat-completions API.
OpenRouter exposes the same API, so OpenRouterProvider only changes
the endpoint, the default model and the attribution headers.
"""

import logging
from pathlib import Path
from typing import Optional

import openai

from ..errors import AnalysisError
from .base import VisionProvider

logger = logging.getLogger(__name__)

OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_HEADERS = {
    "HTTP-Referer": "https://screenshot-analyzer.vercel.app",
    "X-Title": "Screenshot Analyzer",
}


class OpenAIProvider(VisionProvider):
    """
    Vision provider using OpenAI's vision-capable chat models.

    Example:
        provider = OpenAIProvider(api_key="sk-...")
        reply = await provider.analyze(Path("screenshot.png"))
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        max_tokens: int = 2000,
        temperature: float = 0.7,
        client: Optional[openai.OpenAI] = None
    ):
        """
        Initialize OpenAI provider.

        Args:
            api_key: OpenAI API key (get from https://platform.openai.com/api-keys)
            model: Vision-capable model to use (default: gpt-4o)
            max_tokens: Completion token limit
            temperature: Sampling temperature
            client: Preconfigured client (built from api_key when omitted)
        """
        self.client = client or self._build_client(api_key)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._api_key = api_key

    def _build_client(self, api_key: str) -> openai.OpenAI:
        return openai.OpenAI(api_key=api_key)

    @property
    def name(self) -> str:
        """Provider name for identification"""
        return "openai"

    def is_available(self) -> bool:
        """
        Check if the provider is configured.

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
        Analyze screenshot with a chat-completions vision model.

        Args:
            image_path: Path to validated image
            prompt: Optional user instruction
            media_type: Optional MIME type of the image

        Returns:
            Raw reply text

        Raises:
            AnalysisError: If API call fails or the reply has no content
        """
        prompt, media_type = self._resolve_request(image_path, prompt, media_type)

        try:
            image_data = self._encode_image(image_path)

            logger.info("Requesting analysis from %s (%s)", self.name, self.model)
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "system",
                        "content": self._build_system_prompt()
                    },
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "text",
                                "text": prompt
                            },
                            {
                                "type": "image_url",
                                "image_url": {
                                    "url": f"data:{media_type};base64,{image_data}"
                                }
                            }
                        ]
                    }
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature
            )

        except openai.APIError as e:
            logger.error("%s API error: %s", self.name, e)
            raise AnalysisError("Failed to analyze image. Please try again later.") from e
        except OSError as e:
            raise AnalysisError(f"Could not read screenshot: {e}") from e

        content = None
        if response.choices:
            content = response.choices[0].message.content
        if not content:
            logger.error("Invalid %s response structure: %r", self.name, response)
            raise AnalysisError("Invalid response from AI service")

        return content


class OpenRouterProvider(OpenAIProvider):
    """
    Vision provider routing requests through OpenRouter.

    Uses OpenRouter's OpenAI-compatible endpoint so any vision model
    it hosts can be selected by name.

    Example:
        provider = OpenRouterProvider(api_key="sk-or-v1-...")
        reply = await provider.analyze(Path("screenshot.png"))
    """

    def __init__(
        self,
        api_key: str,
        model: str = "meta-llama/llama-2-70b-chat",
        base_url: str = OPENROUTER_BASE_URL,
        max_tokens: int = 2000,
        temperature: float = 0.7,
        client: Optional[openai.OpenAI] = None
    ):
        self.base_url = base_url
        super().__init__(
            api_key=api_key,
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            client=client
        )

    def _build_client(self, api_key: str) -> openai.OpenAI:
        return openai.OpenAI(
            api_key=api_key,
            base_url=self.base_url,
            default_headers=OPENROUTER_HEADERS
        )

    @property
    def name(self) -> str:
        """Provider name for identification"""
        return "openrouter"
