"""Data models for attachment descriptors, processed files and content blocks."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from chat_attachments.exceptions import InvalidFileDescriptor, MissingDownloadUrl
from chat_attachments.files.capabilities import ImageMediaType


class FileDescriptor(BaseModel):
    """A file attachment as announced by the chat platform.

    Mirrors the subset of Slack's file object the downloader needs; any other
    keys of the platform payload are ignored.

    Attributes:
        name: Original file name
        mimetype: Declared mimetype
        size: Declared size in bytes
        url_private_download: Authenticated direct-download URL
        url_private: Authenticated file URL, used when no download URL exists

    Example:
        ```python
        from chat_attachments.files.models import FileDescriptor

        descriptor = FileDescriptor.from_slack(event["files"][0])
        url = descriptor.resolve_download_url()
        ```
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(description="Original file name")
    mimetype: str = Field(description="Declared mimetype")
    size: int = Field(ge=0, description="Declared size in bytes")
    url_private_download: str | None = Field(
        default=None, description="Authenticated direct-download URL"
    )
    url_private: str | None = Field(
        default=None, description="Authenticated file URL"
    )

    @classmethod
    def from_slack(cls, raw: Mapping[str, Any]) -> "FileDescriptor":
        """Build a descriptor from a raw Slack file object.

        Raises:
            InvalidFileDescriptor: If required fields are missing or malformed
        """
        if not isinstance(raw, Mapping):
            raise InvalidFileDescriptor(
                f"Invalid file descriptor: expected a mapping, got {type(raw).__name__}"
            )
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            name = raw.get("name") if isinstance(raw.get("name"), str) else None
            raise InvalidFileDescriptor(
                f"Invalid file descriptor: {e.error_count()} validation error(s)",
                file_name=name,
            ) from e

    def resolve_download_url(self) -> str:
        """Return the private download URL, falling back to the private URL.

        Raises:
            MissingDownloadUrl: If neither URL is set
        """
        url = self.url_private_download or self.url_private
        if not url:
            raise MissingDownloadUrl(self.name)
        return url


@dataclass(frozen=True)
class ProcessedFile:
    """A successfully downloaded attachment stored in a temp file.

    Owned by the caller for one message-handling turn and deleted by
    ``cleanup`` once the turn is over.
    """

    path: str
    name: str
    mimetype: str
    is_image: bool
    is_text: bool
    size: int
    temp_path: str | None = None


class TextBlock(BaseModel):
    """Plain text content block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str

    def to_api(self) -> dict[str, Any]:
        """Convert to the chat API message-content shape."""
        return {"type": "text", "text": self.text}

    def to_litellm(self) -> dict[str, Any]:
        """Convert to the OpenAI-format content part LiteLLM expects."""
        return {"type": "text", "text": self.text}


class ImageBlock(BaseModel):
    """Inline base64 image content block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["image"] = "image"
    media_type: ImageMediaType
    data: str = Field(description="Base64 encoded image bytes")

    def to_api(self) -> dict[str, Any]:
        """Convert to the chat API message-content shape."""
        return {
            "type": "image",
            "source": {
                "type": "base64",
                "media_type": self.media_type,
                "data": self.data,
            },
        }

    def to_litellm(self) -> dict[str, Any]:
        """Convert to an OpenAI-format ``image_url`` part with a data URL."""
        return {
            "type": "image_url",
            "image_url": {"url": f"data:{self.media_type};base64,{self.data}"},
        }


ContentBlock = Annotated[TextBlock | ImageBlock, Field(discriminator="type")]
