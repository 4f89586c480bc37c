"""Unit tests for ContentBlockBuilder."""

import base64
from collections.abc import Callable

import pytest

from chat_attachments.files.models import ImageBlock, ProcessedFile, TextBlock
from chat_attachments.files.processors import (
    NO_USER_TEXT_DIRECTIVE,
    ContentBlockBuilder,
    has_images,
)

MakeFile = Callable[..., ProcessedFile]


@pytest.fixture
def builder() -> ContentBlockBuilder:
    return ContentBlockBuilder()


@pytest.mark.unit
class TestBuildWithoutFiles:
    """Test content blocks built from text alone."""

    def test_nothing_yields_empty_list(self, builder: ContentBlockBuilder) -> None:
        assert builder.build([], "") == []

    def test_text_only(self, builder: ContentBlockBuilder) -> None:
        assert builder.build([], "hello") == [TextBlock(text="hello")]


@pytest.mark.unit
class TestBuildWithImages:
    """Test image embedding and the ordering of text around images."""

    def test_single_image_without_text(
        self,
        builder: ContentBlockBuilder,
        make_processed_file: MakeFile,
        image_bytes: dict[str, bytes],
    ) -> None:
        """Test that the caption travels with the text flushed after the image."""
        image = make_processed_file(
            "cat.png", "image/png", image_bytes["png"], is_image=True
        )

        blocks = builder.build([image], "")

        assert blocks == [
            ImageBlock(
                media_type="image/png",
                data=base64.b64encode(image_bytes["png"]).decode("ascii"),
            ),
            TextBlock(text=f"[Image: cat.png]\n\n{NO_USER_TEXT_DIRECTIVE}"),
        ]

    def test_user_text_is_flushed_before_image(
        self,
        builder: ContentBlockBuilder,
        make_processed_file: MakeFile,
        image_bytes: dict[str, bytes],
    ) -> None:
        image = make_processed_file(
            "cat.jpg", "image/jpeg", image_bytes["jpeg"], is_image=True
        )

        blocks = builder.build([image], "What breed is this?")

        assert [b.type for b in blocks] == ["text", "image", "text"]
        assert blocks[0] == TextBlock(text="What breed is this?")
        assert blocks[2] == TextBlock(text="[Image: cat.jpg]")

    def test_caption_is_not_flushed_immediately(
        self,
        builder: ContentBlockBuilder,
        make_processed_file: MakeFile,
        image_bytes: dict[str, bytes],
    ) -> None:
        """Test that a caption joins the text preceding the next image."""
        first = make_processed_file(
            "a.png", "image/png", image_bytes["png"], is_image=True
        )
        notes = make_processed_file("notes.txt", "text/plain", "hi", is_text=True)
        second = make_processed_file(
            "b.webp", "image/webp", image_bytes["webp"], is_image=True
        )

        blocks = builder.build([first, notes, second], "compare")

        assert [b.type for b in blocks] == ["text", "image", "text", "image", "text"]
        assert blocks[2] == TextBlock(
            text="[Image: a.png]\n\n## File: notes.txt\n```\nhi\n```"
        )
        assert blocks[4] == TextBlock(text="[Image: b.webp]")

    def test_consecutive_images(
        self,
        builder: ContentBlockBuilder,
        make_processed_file: MakeFile,
        image_bytes: dict[str, bytes],
    ) -> None:
        first = make_processed_file(
            "a.gif", "image/gif", image_bytes["gif"], is_image=True
        )
        second = make_processed_file(
            "b.png", "image/png", image_bytes["png"], is_image=True
        )

        blocks = builder.build([first, second], "")

        assert [b.type for b in blocks] == ["image", "text", "image", "text"]
        assert blocks[1] == TextBlock(text="[Image: a.gif]")
        assert blocks[3] == TextBlock(
            text=f"[Image: b.png]\n\n{NO_USER_TEXT_DIRECTIVE}"
        )

    def test_unsupported_image_format_becomes_placeholder(
        self, builder: ContentBlockBuilder, make_processed_file: MakeFile
    ) -> None:
        svg = make_processed_file(
            "logo.svg", "image/svg+xml", b"<svg/>", is_image=True
        )

        blocks = builder.build([svg], "look")

        assert blocks == [
            TextBlock(text="look"),
            TextBlock(text="[Unsupported image format: logo.svg (image/svg+xml)]"),
        ]

    def test_unreadable_image_becomes_placeholder(
        self, builder: ContentBlockBuilder, make_processed_file: MakeFile
    ) -> None:
        missing = make_processed_file(
            "gone.png", "image/png", is_image=True, write=False
        )

        blocks = builder.build([missing], "")

        assert blocks == [
            TextBlock(
                text=f"[Failed to read image: gone.png]\n\n{NO_USER_TEXT_DIRECTIVE}"
            )
        ]


@pytest.mark.unit
class TestBuildWithTextAndBinaryFiles:
    """Test inlining of text files and placeholders for other files."""

    def test_text_file_is_fenced(
        self, builder: ContentBlockBuilder, make_processed_file: MakeFile
    ) -> None:
        code = make_processed_file(
            "main.py", "text/x-python", "print('hi')", is_text=True
        )

        blocks = builder.build([code], "review")

        assert blocks == [
            TextBlock(text="review\n\n## File: main.py\n```\nprint('hi')\n```")
        ]

    def test_long_text_file_is_truncated(
        self, builder: ContentBlockBuilder, make_processed_file: MakeFile
    ) -> None:
        content = "a" * 10_000 + "b" * 50
        big = make_processed_file("big.txt", "text/plain", content, is_text=True)

        blocks = builder.build([big], "summarize")

        text = blocks[0].text  # type: ignore[union-attr]
        assert text == (
            "summarize\n\n## File: big.txt\n```\n" + "a" * 10_000 + "...\n```"
        )
        assert "b" not in text.split("```")[1]

    def test_text_exactly_at_limit_is_not_truncated(
        self, builder: ContentBlockBuilder, make_processed_file: MakeFile
    ) -> None:
        exact = make_processed_file(
            "exact.txt", "text/plain", "x" * 10_000, is_text=True
        )

        blocks = builder.build([exact], "hi")

        assert "..." not in blocks[0].text  # type: ignore[union-attr]

    def test_custom_truncation_limit(self, make_processed_file: MakeFile) -> None:
        short = make_processed_file("s.txt", "text/plain", "abcdef", is_text=True)

        blocks = ContentBlockBuilder(max_text_chars=3).build([short], "x")

        assert blocks == [TextBlock(text="x\n\n## File: s.txt\n```\nabc...\n```")]

    def test_unreadable_text_file_becomes_placeholder(
        self, builder: ContentBlockBuilder, make_processed_file: MakeFile
    ) -> None:
        missing = make_processed_file(
            "gone.txt", "text/plain", is_text=True, write=False
        )

        blocks = builder.build([missing], "hi")

        assert blocks == [TextBlock(text="hi\n\n[Error reading file: gone.txt]")]

    def test_invalid_utf8_is_replaced(
        self, builder: ContentBlockBuilder, make_processed_file: MakeFile
    ) -> None:
        broken = make_processed_file(
            "latin1.txt", "text/plain", b"caf\xe9", is_text=True
        )

        blocks = builder.build([broken], "hi")

        assert "caf\ufffd" in blocks[0].text  # type: ignore[union-attr]

    def test_binary_file_placeholder(
        self, builder: ContentBlockBuilder, make_processed_file: MakeFile
    ) -> None:
        archive = make_processed_file("a.zip", "application/zip", b"PK\x03\x04")

        blocks = builder.build([archive], "")

        assert blocks == [
            TextBlock(
                text="[Binary file: a.zip (application/zip, 4 bytes)]\n\n"
                + NO_USER_TEXT_DIRECTIVE
            )
        ]

    def test_binary_file_is_never_read(self, builder: ContentBlockBuilder) -> None:
        """Test that a binary placeholder does not touch the file system."""
        phantom = ProcessedFile(
            path="/nonexistent/blob.bin",
            name="blob.bin",
            mimetype="application/octet-stream",
            is_image=False,
            is_text=False,
            size=10,
        )

        blocks = builder.build([phantom], "x")

        assert blocks == [
            TextBlock(
                text="x\n\n[Binary file: blob.bin (application/octet-stream, 10 bytes)]"
            )
        ]

    def test_no_empty_blocks(
        self,
        builder: ContentBlockBuilder,
        make_processed_file: MakeFile,
        image_bytes: dict[str, bytes],
    ) -> None:
        image = make_processed_file(
            "a.png", "image/png", image_bytes["png"], is_image=True
        )
        blocks = builder.build([image], "hi")
        for block in blocks:
            if isinstance(block, TextBlock):
                assert block.text


@pytest.mark.unit
class TestHasImages:
    """Test the multimodal routing helper."""

    def test_has_images(self, make_processed_file: MakeFile) -> None:
        text = make_processed_file("a.txt", "text/plain", "x", is_text=True)
        image = make_processed_file("b.png", "image/png", b"", is_image=True)

        assert has_images([text, image]) is True
        assert has_images([text]) is False
        assert has_images([]) is False
