"""
Best-effort MIME type detection for content being written.
"""

import logging
import os
from typing import Optional

import magic

from objectfs.storage.adapter import Content

logger = logging.getLogger(__name__)

# libmagic only needs the head of a stream to identify it
SNIFF_SIZE = 2048


def guess_content_type(content: Content) -> Optional[str]:
    """
    Detect the MIME type of content from its magic bytes.

    Buffers are sniffed directly. Streams backed by a file on disk are
    sniffed through that file; other seekable streams through their first
    bytes, leaving the stream position untouched.

    Args:
        content: Bytes, text or a readable binary stream

    Returns:
        MIME type string, or None if it could not be detected
    """
    try:
        if isinstance(content, (bytes, bytearray, str)):
            return magic.from_buffer(bytes(content) if isinstance(content, bytearray) else content, mime=True)

        name = getattr(content, "name", None)
        if isinstance(name, str) and os.path.isfile(name):
            return magic.from_file(name, mime=True)

        if hasattr(content, "seekable") and content.seekable():
            position = content.tell()
            head = content.read(SNIFF_SIZE)
            content.seek(position)
            return magic.from_buffer(head, mime=True)
    except (magic.MagicException, OSError, ValueError) as e:
        logger.debug(f"Content type detection failed: {e}")

    return None
