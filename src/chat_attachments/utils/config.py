"""Configuration utilities for environment-based setup."""

import os
from collections.abc import Sequence
from pathlib import Path

from dotenv import load_dotenv

from chat_attachments.agents.agent_connection import LiteLLMAgent
from chat_attachments.files.downloader import DEFAULT_MAX_FILE_SIZE, FileDownloader
from chat_attachments.files.handler import FileHandler
from chat_attachments.files.models import ProcessedFile
from chat_attachments.files.processors import has_images

# Model name prefix -> environment variable holding its provider key
API_KEY_ENV_VARS = {"gpt": "OPENAI_API_KEY", "claude": "ANTHROPIC_API_KEY"}


def load_environment() -> None:
    """Load environment variables from .env file if it exists."""
    load_dotenv()


def _resolve_secret(value: str | None, env_var: str | None, missing: str) -> str:
    """Return the explicit value or the named environment variable.

    Raises:
        ValueError: With the ``missing`` message if neither is set
    """
    load_environment()

    if value is None and env_var is not None:
        value = os.getenv(env_var)

    if not value:
        raise ValueError(missing)

    return value


def _api_key_env_var(model: str) -> str | None:
    for prefix, env_var in API_KEY_ENV_VARS.items():
        if model.startswith(prefix):
            return env_var
    return None


def get_bot_token(token: str | None = None) -> str:
    """Resolve the chat platform bot token.

    Args:
        token: Explicit token (if None, loads from SLACK_BOT_TOKEN env var)

    Returns:
        The bot token

    Raises:
        ValueError: If no token is found in parameter or environment
    """
    return _resolve_secret(
        token,
        "SLACK_BOT_TOKEN",
        "Slack bot token not found. Set SLACK_BOT_TOKEN environment variable "
        "or pass bot_token parameter.",
    )


def get_max_file_size(value: int | None = None) -> int:
    """Resolve the download size ceiling in bytes.

    Args:
        value: Explicit ceiling (if None, loads from ATTACHMENT_MAX_FILE_SIZE,
            falling back to 50 MiB)

    Returns:
        The ceiling in bytes

    Raises:
        ValueError: If the configured value is not a positive integer
    """
    load_environment()

    if value is None:
        raw = os.getenv("ATTACHMENT_MAX_FILE_SIZE")
        if raw is None:
            return DEFAULT_MAX_FILE_SIZE
        try:
            value = int(raw)
        except ValueError as e:
            raise ValueError(
                f"ATTACHMENT_MAX_FILE_SIZE must be an integer, got '{raw}'"
            ) from e

    if value <= 0:
        raise ValueError(f"Maximum file size must be positive, got {value}")

    return value


def create_file_downloader(
    bot_token: str | None = None,
    max_file_size: int | None = None,
    temp_dir: str | Path | None = None,
) -> FileDownloader:
    """Create a FileDownloader with environment-based configuration.

    Raises:
        ValueError: If no bot token is found or the size ceiling is invalid
    """
    return FileDownloader(
        bot_token=get_bot_token(bot_token),
        max_file_size=get_max_file_size(max_file_size),
        temp_dir=temp_dir,
    )


def create_file_handler(
    bot_token: str | None = None,
    max_file_size: int | None = None,
    temp_dir: str | Path | None = None,
) -> FileHandler:
    """Create a FileHandler with environment-based configuration.

    Args:
        bot_token: Bot token (if None, loads from SLACK_BOT_TOKEN env var)
        max_file_size: Download ceiling in bytes
        temp_dir: Directory for downloaded files

    Returns:
        Configured FileHandler
    """
    return FileHandler(
        create_file_downloader(
            bot_token=bot_token, max_file_size=max_file_size, temp_dir=temp_dir
        )
    )


def create_litellm_agent(
    model: str,
    api_key: str | None = None,
    max_tokens: int = 1000,
) -> LiteLLMAgent:
    """Create a LiteLLM agent with environment-based configuration.

    Args:
        model: Model name (e.g., 'gpt-4o', 'claude-3-5-sonnet-20241022')
        api_key: API key (if None, tries to infer from model and environment)
        max_tokens: Maximum tokens for response

    Returns:
        Configured LiteLLMAgent

    Raises:
        ValueError: If no API key is found and cannot be inferred
    """
    api_key = _resolve_secret(
        api_key,
        _api_key_env_var(model),
        f"API key not found for model '{model}'. Set appropriate environment "
        "variable or pass api_key parameter.",
    )
    return LiteLLMAgent(model=model, api_key=api_key, max_tokens=max_tokens)


def get_default_models() -> dict[str, str]:
    """Get default models for text-only and image-bearing messages.

    Returns:
        Dictionary mapping route names to default model names
    """
    return {
        "text": "claude-3-5-haiku-20241022",
        "vision": "claude-3-5-sonnet-20241022",
    }


def select_model(
    files: Sequence[ProcessedFile],
    text_model: str | None = None,
    vision_model: str | None = None,
) -> str:
    """Pick the vision model when any file is an image, else the text model."""
    defaults = get_default_models()
    if has_images(files):
        return vision_model or defaults["vision"]
    return text_model or defaults["text"]
