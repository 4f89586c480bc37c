"""Mimetype classification and supported image media types."""

from typing import Literal, NamedTuple, cast

ImageMediaType = Literal["image/jpeg", "image/png", "image/gif", "image/webp"]

SUPPORTED_IMAGE_MEDIA_TYPES: tuple[ImageMediaType, ...] = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
)

TEXT_MIMETYPE_PREFIXES: tuple[str, ...] = (
    "text/",
    "application/json",
    "application/javascript",
    "application/typescript",
    "application/xml",
    "application/yaml",
    "application/x-yaml",
)


class FileClassification(NamedTuple):
    """Semantic category derived from a declared mimetype.

    At most one of the flags is set; both False means binary/other.
    """

    is_image: bool
    is_text: bool

    @property
    def is_binary(self) -> bool:
        return not (self.is_image or self.is_text)


def is_image_mimetype(mimetype: str) -> bool:
    """Check if the declared mimetype claims an image."""
    return mimetype.startswith("image/")


def is_text_mimetype(mimetype: str) -> bool:
    """Check if the declared mimetype is readable as text."""
    return mimetype.startswith(TEXT_MIMETYPE_PREFIXES)


def classify(mimetype: str) -> FileClassification:
    """Classify a declared mimetype as image, text or neither.

    Classification trusts the declared type. Image content is verified
    separately against its byte signature at download time.

    Args:
        mimetype: Declared mimetype, e.g. ``"image/png"``.

    Returns:
        FileClassification with ``is_image`` and ``is_text`` flags.
    """
    return FileClassification(
        is_image=is_image_mimetype(mimetype),
        is_text=is_text_mimetype(mimetype),
    )


def to_image_media_type(mimetype: str) -> ImageMediaType | None:
    """Map a mimetype to a media type the chat API accepts for inline images."""
    if mimetype in SUPPORTED_IMAGE_MEDIA_TYPES:
        return cast(ImageMediaType, mimetype)
    return None


def get_supported_file_types() -> list[str]:
    """Get a human-readable summary of the attachment families handled.

    Returns:
        List of descriptions suitable for a help message
    """
    return [
        "Images: jpg, png, gif, webp, svg",
        "Text files: txt, md, json, js, ts, py, java, etc.",
        "Documents: pdf, docx (limited support)",
        "Code files: most programming languages",
    ]
