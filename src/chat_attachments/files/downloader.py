"""Authenticated download of chat attachments into temp files."""

import logging
import tempfile
import time
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests

from chat_attachments.exceptions import (
    AttachmentException,
    HttpError,
    InvalidImageContent,
    SizeLimitExceeded,
    WriteFailure,
)
from chat_attachments.files.capabilities import classify
from chat_attachments.files.models import FileDescriptor, ProcessedFile
from chat_attachments.files.signatures import has_valid_image_header

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 50 * 1024 * 1024
DEFAULT_TIMEOUT = 30.0
TEMP_FILE_PREFIX = "slack-file-"


@dataclass(frozen=True)
class DownloadResult:
    """Outcome of downloading one attachment.

    Exactly one of ``file`` and ``error`` is set.
    """

    name: str | None
    file: ProcessedFile | None = None
    error: AttachmentException | None = None

    @property
    def ok(self) -> bool:
        return self.file is not None


class FileDownloader:
    """Downloads chat attachments with a bearer token and stores them on disk.

    Files are fetched one at a time in input order. A failure on one file is
    logged and reported in its ``DownloadResult``; it never aborts the batch.

    Attributes:
        bot_token: Bearer token sent with every download request
        max_file_size: Largest declared or received size, in bytes, that is accepted
        temp_dir: Directory receiving the downloaded files
        timeout: Per-request timeout in seconds

    Example:
        ```python
        from chat_attachments.files.downloader import FileDownloader

        downloader = FileDownloader(bot_token="xoxb-...")
        files = downloader.download_all(event["files"])
        ```
    """

    def __init__(
        self,
        bot_token: str,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        temp_dir: str | Path | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the downloader.

        Args:
            bot_token: Chat platform bot token used as bearer credential
            max_file_size: Download ceiling in bytes (default: 50 MiB)
            temp_dir: Target directory (default: the system temp directory)
            timeout: Request timeout in seconds

        Raises:
            ValueError: If bot_token is empty or max_file_size is not positive
        """
        if not bot_token:
            raise ValueError("Bot token is required")
        if max_file_size <= 0:
            raise ValueError("max_file_size must be positive")

        self.bot_token = bot_token
        self.max_file_size = max_file_size
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())
        self.timeout = timeout

    def download_all(
        self, descriptors: Iterable[FileDescriptor | Mapping[str, Any]]
    ) -> list[ProcessedFile]:
        """Download every attachment and keep the ones that succeeded.

        Args:
            descriptors: Descriptors or raw platform file objects

        Returns:
            Processed files in input order, failures omitted
        """
        return [
            result.file
            for result in self.download_results(descriptors)
            if result.file is not None
        ]

    def download_results(
        self, descriptors: Iterable[FileDescriptor | Mapping[str, Any]]
    ) -> list[DownloadResult]:
        """Download every attachment and report one result per input."""
        return [self.fetch(descriptor) for descriptor in descriptors]

    def fetch(self, descriptor: FileDescriptor | Mapping[str, Any]) -> DownloadResult:
        """Download a single attachment.

        Args:
            descriptor: A FileDescriptor or a raw platform file object

        Returns:
            DownloadResult holding either the ProcessedFile or the error
        """
        name: str | None = None
        try:
            name = _descriptor_name(descriptor)
            if not isinstance(descriptor, FileDescriptor):
                descriptor = FileDescriptor.from_slack(descriptor)
            if descriptor.size > self.max_file_size:
                raise SizeLimitExceeded(
                    descriptor.name, descriptor.size, self.max_file_size
                )
            processed = self._download(descriptor)
        except SizeLimitExceeded as e:
            logger.warning(
                "File too large, skipping: %s (%d bytes, limit %d)",
                e.file_name,
                e.size,
                e.limit,
            )
            return DownloadResult(name=name, error=e)
        except AttachmentException as e:
            logger.error("Failed to download file %s: %s", name, e)
            return DownloadResult(name=name, error=e)
        except Exception as e:
            logger.exception("Unexpected error processing file %s", name)
            error = AttachmentException(
                f"Unexpected error processing file {name}: {e}"
            )
            error.__cause__ = e
            return DownloadResult(name=name, error=error)

        return DownloadResult(name=name, file=processed)

    def _download(self, descriptor: FileDescriptor) -> ProcessedFile:
        url = descriptor.resolve_download_url()
        logger.debug(
            "Downloading file %s (%s) from %s",
            descriptor.name,
            descriptor.mimetype,
            _truncate_url(url),
        )

        try:
            response = requests.get(
                url,
                headers={"Authorization": f"Bearer {self.bot_token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise HttpError(descriptor.name, reason=str(e)) from e

        if not response.ok:
            raise HttpError(descriptor.name, response.status_code, response.reason)

        content_type = response.headers.get("content-type", "")
        body = response.content
        if len(body) > self.max_file_size:
            raise SizeLimitExceeded(descriptor.name, len(body), self.max_file_size)
        logger.info(
            "File downloaded: %s (content-type %s, %d bytes, first bytes %s)",
            descriptor.name,
            content_type,
            len(body),
            body[:8].hex(),
        )

        classification = classify(descriptor.mimetype)
        if classification.is_image and not has_valid_image_header(body):
            raise InvalidImageContent(
                descriptor.name,
                descriptor.mimetype,
                content_type=content_type,
                leading_bytes=body[:16].hex(),
            )

        temp_path = self._temp_path_for(descriptor.name)
        try:
            temp_path.write_bytes(body)
        except (OSError, ValueError) as e:
            raise WriteFailure(descriptor.name, str(temp_path), e) from e

        logger.info(
            "Stored %s at %s (image=%s, text=%s)",
            descriptor.name,
            temp_path,
            classification.is_image,
            classification.is_text,
        )
        return ProcessedFile(
            path=str(temp_path),
            name=descriptor.name,
            mimetype=descriptor.mimetype,
            is_image=classification.is_image,
            is_text=classification.is_text,
            size=descriptor.size,
            temp_path=str(temp_path),
        )

    def _temp_path_for(self, name: str) -> Path:
        # Unique per millisecond and name only; same-name files in the same
        # millisecond overwrite each other.
        timestamp = int(time.time() * 1000)
        return self.temp_dir / f"{TEMP_FILE_PREFIX}{timestamp}-{Path(name).name}"


def _descriptor_name(descriptor: object) -> str | None:
    if isinstance(descriptor, FileDescriptor):
        return descriptor.name
    if not isinstance(descriptor, Mapping):
        return None
    name = descriptor.get("name")
    return name if isinstance(name, str) else None


def _truncate_url(url: str, limit: int = 80) -> str:
    return url if len(url) <= limit else url[:limit] + "..."
