"""Binary signature sniffing for downloaded image attachments.

Each supported format is a row of ``(offset, expected_bytes)`` checks that must
all match. Adding a format means adding a row to ``IMAGE_SIGNATURES``.
"""

from dataclasses import dataclass

# Below this length no signature is checked at all.
MIN_HEADER_LENGTH = 4


@dataclass(frozen=True)
class ImageSignature:
    """Magic-number pattern identifying one image format.

    Args:
        format: Short format tag (``"png"``, ``"jpeg"``, ...).
        checks: ``(offset, expected_bytes)`` pairs that must all match.
    """

    format: str
    checks: tuple[tuple[int, bytes], ...]

    @property
    def min_length(self) -> int:
        """Smallest buffer length on which every check can run."""
        return max(offset + len(expected) for offset, expected in self.checks)

    def matches(self, data: bytes) -> bool:
        """Return True if ``data`` carries this signature."""
        if len(data) < self.min_length:
            return False
        return all(
            data[offset : offset + len(expected)] == expected
            for offset, expected in self.checks
        )


IMAGE_SIGNATURES: tuple[ImageSignature, ...] = (
    ImageSignature("png", ((0, b"\x89PNG"),)),
    ImageSignature("jpeg", ((0, b"\xff\xd8\xff"),)),
    ImageSignature("gif", ((0, b"GIF8"),)),
    ImageSignature("webp", ((0, b"RIFF"), (8, b"WEBP"))),
)


def detect_image_format(data: bytes) -> str | None:
    """Identify the image format of ``data`` from its leading bytes.

    Args:
        data: Raw file content.

    Returns:
        The format tag of the first matching signature, or None when the
        buffer is too short or matches no known signature.
    """
    if len(data) < MIN_HEADER_LENGTH:
        return None
    for signature in IMAGE_SIGNATURES:
        if signature.matches(data):
            return signature.format
    return None


def has_valid_image_header(data: bytes) -> bool:
    """Return True if ``data`` starts with a PNG, JPEG, GIF or WebP signature."""
    return detect_image_format(data) is not None
