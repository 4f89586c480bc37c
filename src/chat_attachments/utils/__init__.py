"""Utility functions for environment-based configuration."""

from .config import (
    create_file_downloader,
    create_file_handler,
    create_litellm_agent,
    get_bot_token,
    get_default_models,
    get_max_file_size,
    load_environment,
    select_model,
)

__all__ = [
    "load_environment",
    "get_bot_token",
    "get_max_file_size",
    "create_file_downloader",
    "create_file_handler",
    "create_litellm_agent",
    "get_default_models",
    "select_model",
]
