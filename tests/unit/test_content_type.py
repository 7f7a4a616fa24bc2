"""
Unit tests for content type detection.
"""

import io
from unittest.mock import patch

import magic

from objectfs.storage.content_type import guess_content_type
from tests.consts import PNG_BYTES

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"


class TestBuffers:
    """Test sniffing in-memory content."""

    def test_png_bytes(self):
        assert guess_content_type(PNG_BYTES) == "image/png"

    def test_pdf_bytes(self):
        assert guess_content_type(PDF_BYTES) == "application/pdf"

    def test_bytearray(self):
        assert guess_content_type(bytearray(PNG_BYTES)) == "image/png"

    def test_plain_text(self):
        assert guess_content_type("just some words\n") == "text/plain"


class TestStreams:
    """Test sniffing streamed content."""

    def test_file_on_disk(self, tmp_path):
        path = tmp_path / "image.bin"
        path.write_bytes(PNG_BYTES)

        with open(path, "rb") as f:
            assert guess_content_type(f) == "image/png"
            assert f.tell() == 0

    def test_in_memory_stream_keeps_position(self):
        stream = io.BytesIO(b"ignored" + PNG_BYTES)
        stream.seek(7)

        assert guess_content_type(stream) == "image/png"
        assert stream.tell() == 7

    def test_unseekable_stream(self):
        class Pipe:
            def read(self, size=-1):
                return PNG_BYTES

            def seekable(self):
                return False

        assert guess_content_type(Pipe()) is None


class TestFailures:
    """Detection never fails the caller."""

    def test_magic_error_returns_none(self):
        with patch("objectfs.storage.content_type.magic.from_buffer", side_effect=magic.MagicException("broken")):
            assert guess_content_type(PNG_BYTES) is None

    def test_unsupported_object_returns_none(self):
        assert guess_content_type(12345) is None
