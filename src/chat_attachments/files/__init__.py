"""Attachment download, validation and content block assembly."""

from .capabilities import (
    FileClassification,
    classify,
    get_supported_file_types,
    to_image_media_type,
)
from .downloader import DownloadResult, FileDownloader
from .handler import FileHandler
from .janitor import cleanup
from .models import (
    ContentBlock,
    FileDescriptor,
    ImageBlock,
    ProcessedFile,
    TextBlock,
)
from .processors import ContentBlockBuilder, has_images
from .signatures import detect_image_format, has_valid_image_header

__all__ = [
    "ContentBlock",
    "ContentBlockBuilder",
    "DownloadResult",
    "FileClassification",
    "FileDescriptor",
    "FileDownloader",
    "FileHandler",
    "ImageBlock",
    "ProcessedFile",
    "TextBlock",
    "classify",
    "cleanup",
    "detect_image_format",
    "get_supported_file_types",
    "has_images",
    "has_valid_image_header",
    "to_image_media_type",
]
