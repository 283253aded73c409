"""
Vision Provider Implementations

Pluggable vision model providers following a common interface.
Supports multiple backends: OpenRouter, OpenAI, Anthropic Claude, Local LLMs.
"""

from typing import Optional

from ..models import Config
from .base import VisionProvider
from .anthropic import AnthropicProvider
from .openai import OpenAIProvider, OpenRouterProvider
from .local import LocalProvider

__all__ = [
    "VisionProvider",
    "OpenRouterProvider",
    "OpenAIProvider",
    "AnthropicProvider",
    "LocalProvider",
    "get_provider",
]


def get_provider(
    provider_name: str,
    config: Config,
    model: Optional[str] = None
) -> VisionProvider:
    """
    Factory function to get configured vision provider.

    Args:
        provider_name: One of "openrouter", "openai", "anthropic", or "local"
        config: Configuration object with API keys
        model: Optional model name overriding the configured one

    Returns:
        Configured vision provider instance

    Raises:
        ValueError: If provider name is unknown or not configured

    Example:
        provider = get_provider("openrouter", config)
        reply = await provider.analyze(image_path)
    """
    request_options = {
        "max_tokens": config.max_tokens,
        "temperature": config.temperature,
    }

    if provider_name == "openrouter":
        if not config.has_openrouter():
            raise ValueError(
                "OpenRouter API key not configured. "
                "Set OPENROUTER_API_KEY in .env file"
            )
        return OpenRouterProvider(
            api_key=config.openrouter_api_key,
            model=model or config.openrouter_model,
            base_url=config.openrouter_base_url,
            **request_options
        )

    elif provider_name == "openai":
        if not config.has_openai():
            raise ValueError(
                "OpenAI API key not configured. "
                "Set OPENAI_API_KEY in .env file"
            )
        return OpenAIProvider(
            api_key=config.openai_api_key,
            model=model or config.openai_model,
            **request_options
        )

    elif provider_name == "anthropic":
        if not config.has_anthropic():
            raise ValueError(
                "Anthropic API key not configured. "
                "Set ANTHROPIC_API_KEY in .env file"
            )
        return AnthropicProvider(
            api_key=config.anthropic_api_key,
            model=model or config.anthropic_model,
            **request_options
        )

    elif provider_name == "local":
        return LocalProvider(
            host=config.ollama_host,
            model=model or config.ollama_model,
            **request_options
        )

    else:
        raise ValueError(
            f"Unknown provider: {provider_name}. "
            f"Choose from: openrouter, openai, anthropic, local"
        )
