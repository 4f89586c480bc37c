"""Assembly of processed attachments into chat API content blocks."""

import base64
import logging
from collections.abc import Sequence
from pathlib import Path

from chat_attachments.exceptions import ReadFailure
from chat_attachments.files.capabilities import to_image_media_type
from chat_attachments.files.models import (
    ContentBlock,
    ImageBlock,
    ProcessedFile,
    TextBlock,
)

logger = logging.getLogger(__name__)

MAX_TEXT_FILE_CHARS = 10_000
TRUNCATION_MARKER = "..."
FRAGMENT_SEPARATOR = "\n\n"
NO_USER_TEXT_DIRECTIVE = (
    "Please analyze these files and provide insights or assistance "
    "based on their content."
)


class ContentBlockBuilder:
    """Builds the ordered content block list for one user message.

    Text fragments (the user's message, file contents, placeholders and image
    captions) accumulate in a pending buffer. The buffer is flushed into a
    single text block right before each image and once more at the end, so
    text always lands in front of the image it preceded. An image's caption
    is added to the buffer after the image block and therefore travels with
    the next flushed text block.

    Reading a file never raises: unreadable files become placeholder text.

    Attributes:
        max_text_chars: Characters of a text file kept before truncation

    Example:
        ```python
        from chat_attachments.files.processors import ContentBlockBuilder

        blocks = ContentBlockBuilder().build(files, "What is in these?")
        payload = [block.to_api() for block in blocks]
        ```
    """

    def __init__(self, max_text_chars: int = MAX_TEXT_FILE_CHARS) -> None:
        self.max_text_chars = max_text_chars

    def build(
        self, files: Sequence[ProcessedFile], user_text: str
    ) -> list[ContentBlock]:
        """Convert processed files and the user's text into content blocks.

        Args:
            files: Processed files in the order they were attached
            user_text: Text the user sent with the files (may be empty)

        Returns:
            Ordered content blocks; empty when there is neither text nor files
        """
        blocks: list[ContentBlock] = []
        pending: list[str] = []

        if user_text:
            pending.append(user_text)

        for file in files:
            if file.is_image:
                self._flush(pending, blocks)
                self._add_image(file, pending, blocks)
            elif file.is_text:
                pending.append(self._text_fragment(file))
            else:
                pending.append(
                    f"[Binary file: {file.name} ({file.mimetype}, {file.size} bytes)]"
                )

        if not user_text and files:
            pending.append(NO_USER_TEXT_DIRECTIVE)

        self._flush(pending, blocks)
        return blocks

    def _add_image(
        self,
        file: ProcessedFile,
        pending: list[str],
        blocks: list[ContentBlock],
    ) -> None:
        try:
            data = _read_bytes(file)
        except ReadFailure as e:
            logger.error("Failed to read image for inline embedding: %s", e)
            pending.append(f"[Failed to read image: {file.name}]")
            return

        media_type = to_image_media_type(file.mimetype)
        if media_type is None:
            pending.append(f"[Unsupported image format: {file.name} ({file.mimetype})]")
            return

        blocks.append(
            ImageBlock(
                media_type=media_type,
                data=base64.b64encode(data).decode("ascii"),
            )
        )
        pending.append(f"[Image: {file.name}]")

    def _text_fragment(self, file: ProcessedFile) -> str:
        try:
            content = _read_text(file)
        except ReadFailure as e:
            logger.error("Failed to read text file: %s", e)
            return f"[Error reading file: {file.name}]"

        if len(content) > self.max_text_chars:
            content = content[: self.max_text_chars] + TRUNCATION_MARKER
        return f"## File: {file.name}\n```\n{content}\n```"

    @staticmethod
    def _flush(pending: list[str], blocks: list[ContentBlock]) -> None:
        if pending:
            blocks.append(TextBlock(text=FRAGMENT_SEPARATOR.join(pending)))
            pending.clear()


def has_images(files: Sequence[ProcessedFile]) -> bool:
    """Return True if any processed file was classified as an image."""
    return any(file.is_image for file in files)


def _read_bytes(file: ProcessedFile) -> bytes:
    try:
        return Path(file.path).read_bytes()
    except OSError as e:
        raise ReadFailure(file.name, file.path, e) from e


def _read_text(file: ProcessedFile) -> str:
    try:
        return Path(file.path).read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ReadFailure(file.name, file.path, e) from e
