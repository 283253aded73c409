"""
Configuration Management

Loads configuration from .env files and provides typed config objects.
Handles API keys, provider settings, request parameters and logging.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .models import Config


def load_config(env_file: Optional[Path] = None) -> Config:
    """
    Load configuration from .env file and environment variables.

    Searches for .env file in:
    1. Provided env_file path
    2. Current directory
    3. User's home directory

    Environment variables override .env file values.

    Args:
        env_file: Optional path to .env file

    Returns:
        Config object with all settings

    Example:
        config = load_config()
        if config.has_openrouter():
            provider = OpenRouterProvider(config.openrouter_api_key)
    """
    if env_file and env_file.exists():
        load_dotenv(env_file)
    elif Path(".env").exists():
        load_dotenv(".env")
    elif (Path.home() / ".env").exists():
        load_dotenv(Path.home() / ".env")

    defaults = Config()

    config = Config(
        openrouter_api_key=os.getenv("OPENROUTER_API_KEY"),
        openrouter_model=os.getenv("OPENROUTER_MODEL", defaults.openrouter_model),
        openrouter_base_url=os.getenv("OPENROUTER_BASE_URL", defaults.openrouter_base_url),
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        openai_model=os.getenv("OPENAI_MODEL", defaults.openai_model),
        anthropic_api_key=os.getenv("ANTHROPIC_API_KEY"),
        anthropic_model=os.getenv("ANTHROPIC_MODEL", defaults.anthropic_model),
        ollama_host=os.getenv("OLLAMA_HOST", defaults.ollama_host),
        ollama_model=os.getenv("OLLAMA_MODEL", defaults.ollama_model),
        vision_provider=os.getenv("VISION_PROVIDER", defaults.vision_provider),
        max_tokens=int(os.getenv("ANALYSIS_MAX_TOKENS", str(defaults.max_tokens))),
        temperature=float(os.getenv("ANALYSIS_TEMPERATURE", str(defaults.temperature))),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level),
    )

    return config


def configure_logging(level: str = "WARNING", console: Optional[Console] = None) -> None:
    """
    Route log records through rich on stderr.

    Installs the handler once; later calls only change the level.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)
        console: Optional rich console to log to
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    if any(isinstance(handler, RichHandler) for handler in root.handlers):
        return

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
