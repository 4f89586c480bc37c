"""Chat Attachments - turn chat file attachments into multimodal LLM content."""

__version__ = "0.1.0"

# Core agent classes
from .agents import AgentConnection, AnthropicAgent, LiteLLMAgent, OpenAIAgent

# Custom exceptions
from .exceptions import (
    AttachmentException,
    DeleteFailure,
    HttpError,
    InvalidFileDescriptor,
    InvalidImageContent,
    MissingDownloadUrl,
    ReadFailure,
    SizeLimitExceeded,
    WriteFailure,
)

# Attachment pipeline
from .files import (
    ContentBlock,
    ContentBlockBuilder,
    DownloadResult,
    FileDescriptor,
    FileDownloader,
    FileHandler,
    ImageBlock,
    ProcessedFile,
    TextBlock,
    classify,
    cleanup,
    has_images,
    has_valid_image_header,
)

# Configuration utilities
from .utils import (
    create_file_downloader,
    create_file_handler,
    create_litellm_agent,
    get_default_models,
    load_environment,
    select_model,
)

__all__ = [
    "__version__",
    "AgentConnection",
    "LiteLLMAgent",
    "OpenAIAgent",
    "AnthropicAgent",
    "ContentBlock",
    "ContentBlockBuilder",
    "DownloadResult",
    "FileDescriptor",
    "FileDownloader",
    "FileHandler",
    "ImageBlock",
    "ProcessedFile",
    "TextBlock",
    "classify",
    "cleanup",
    "has_images",
    "has_valid_image_header",
    "load_environment",
    "create_file_downloader",
    "create_file_handler",
    "create_litellm_agent",
    "get_default_models",
    "select_model",
    # Exceptions
    "AttachmentException",
    "DeleteFailure",
    "HttpError",
    "InvalidFileDescriptor",
    "InvalidImageContent",
    "MissingDownloadUrl",
    "ReadFailure",
    "SizeLimitExceeded",
    "WriteFailure",
]
