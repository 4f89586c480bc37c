"""Facade tying download, content assembly and cleanup together."""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any

from chat_attachments.files.capabilities import get_supported_file_types
from chat_attachments.files.downloader import FileDownloader
from chat_attachments.files.janitor import cleanup
from chat_attachments.files.models import ContentBlock, FileDescriptor, ProcessedFile
from chat_attachments.files.processors import ContentBlockBuilder, has_images


class FileHandler:
    """Entry point for turning a message's attachments into content blocks.

    Example:
        ```python
        from chat_attachments.utils.config import create_file_handler

        handler = create_file_handler()
        with handler.processed_files(event["files"]) as files:
            blocks = handler.build_content_blocks(files, event.get("text", ""))
            reply = agent.query_with_content(blocks)
        # temp files are gone here, even if the query raised
        ```
    """

    def __init__(
        self,
        downloader: FileDownloader,
        builder: ContentBlockBuilder | None = None,
    ) -> None:
        self.downloader = downloader
        self.builder = builder or ContentBlockBuilder()

    def download_and_process_files(
        self, files: Iterable[FileDescriptor | Mapping[str, Any]]
    ) -> list[ProcessedFile]:
        """Download attachments, omitting any that fail."""
        return self.downloader.download_all(files)

    def build_content_blocks(
        self, files: Sequence[ProcessedFile], user_text: str
    ) -> list[ContentBlock]:
        """Build the ordered content blocks for the chat API."""
        return self.builder.build(files, user_text)

    def has_images(self, files: Sequence[ProcessedFile]) -> bool:
        """Check whether a multimodal model is needed for these files."""
        return has_images(files)

    def cleanup_temp_files(self, files: Iterable[ProcessedFile]) -> None:
        """Delete the temp files of a processed batch."""
        cleanup(files)

    def get_supported_file_types(self) -> list[str]:
        return get_supported_file_types()

    @contextmanager
    def processed_files(
        self, files: Iterable[FileDescriptor | Mapping[str, Any]]
    ) -> Iterator[list[ProcessedFile]]:
        """Download attachments for one turn and clean them up afterwards.

        Args:
            files: Descriptors or raw platform file objects

        Yields:
            The successfully processed files
        """
        processed = self.download_and_process_files(files)
        try:
            yield processed
        finally:
            self.cleanup_temp_files(processed)
