"""
Flowmark Reader - opens a .flm container and hands back the payload.

Load pipeline (first failure wins):
    open -> decode container -> locate document.json -> decode UTF-8
         -> parse JSON -> check format tag

Security features:
  - Member size limit (prevents OOM from crafted archives)
  - Strict JSON (NaN/Infinity rejected)
  - The payload is returned exactly as stored, never re-serialized
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from flowmark.codec import ArchiveCodec
from flowmark.errors import FLMEncodingError, FLMIOError
from flowmark.spec import ENCODING, MAX_MAGIC_SCAN_BYTES, MAX_MEMBER_SIZE, MEMBER_NAME, ZIP_MAGIC
from flowmark.validation import check_format_tag

logger = logging.getLogger(__name__)


class FLMReader:
    """
    .flm file reader.

    Usage:
        text = FLMReader.read("notes.flm")

        # Already have the bytes (upload, clipboard, test fixture)
        text = FLMReader.parse(data)
    """

    codec = ArchiveCodec()

    @staticmethod
    def is_flm(path: str | Path) -> bool:
        """Fast check if a file looks like a zip container. Reads only the magic bytes."""
        try:
            handle = open(path, "rb")
        except OSError as exc:
            raise FLMIOError(f"Failed to open file: {exc}") from exc
        with handle:
            head = handle.read(MAX_MAGIC_SCAN_BYTES)
        return head.startswith(ZIP_MAGIC)

    @staticmethod
    def is_flm_bytes(data: bytes) -> bool:
        """Fast check if bytes look like a zip container."""
        return data[:len(ZIP_MAGIC)] == ZIP_MAGIC

    @classmethod
    def read(cls, path: str | Path, max_size: int = MAX_MEMBER_SIZE) -> str:
        """Load and validate a .flm file. Returns the document.json text."""
        try:
            handle = open(path, "rb")
        except OSError as exc:
            raise FLMIOError(f"Failed to open file: {exc}") from exc
        with handle:
            data = cls.codec.read_member(handle, MEMBER_NAME, max_size=max_size)
        text = cls._decode(data)
        logger.debug("Loaded %s (%d chars payload)", path, len(text))
        return text

    @classmethod
    def parse(cls, data: bytes, max_size: int = MAX_MEMBER_SIZE) -> str:
        """Same as read(), for a container already in memory."""
        payload = cls.codec.read_member(io.BytesIO(data), MEMBER_NAME, max_size=max_size)
        return cls._decode(payload)

    @classmethod
    def members(cls, path: str | Path) -> list[str]:
        """Names of all members in the container at `path`."""
        try:
            handle = open(path, "rb")
        except OSError as exc:
            raise FLMIOError(f"Failed to open file: {exc}") from exc
        with handle:
            return cls.codec.member_names(handle)

    @staticmethod
    def _decode(data: bytes) -> str:
        try:
            text = data.decode(ENCODING)
        except UnicodeDecodeError as exc:
            raise FLMEncodingError(f"Failed to read {MEMBER_NAME}: not valid UTF-8: {exc}") from exc
        check_format_tag(text)
        return text


def load(path: str | Path, **kwargs) -> str:
    """Shortcut for FLMReader.read()."""
    return FLMReader.read(path, **kwargs)
