"""
Flowmark Writer - serializes a document payload into a .flm container.

Write path:
  1. Encode the payload as UTF-8 (the payload is already JSON text)
  2. Build a single-member zip: document.json, deflate, 0644, fixed timestamp
  3. Finalize the central directory and close the file

Safety features:
  - Atomic by default: write to a temp file in the same directory, fsync,
    then os.replace over the target (a failed save never truncates the
    previous document)
  - Temp file is removed on every failure path
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO

from flowmark.codec import ArchiveCodec
from flowmark.errors import FLMEncodingError, FLMIOError
from flowmark.spec import ENCODING, EXTENSION, MEMBER_NAME, UNIX_PERMISSIONS
from flowmark.validation import check_format_tag

logger = logging.getLogger(__name__)


class FLMWriter:

    codec = ArchiveCodec()

    @staticmethod
    def encode(document_text: str) -> bytes:
        try:
            return document_text.encode(ENCODING)
        except UnicodeEncodeError as exc:
            raise FLMEncodingError(f"Failed to encode {MEMBER_NAME} as UTF-8: {exc}") from exc

    @classmethod
    def serialize(cls, document_text: str, handle: BinaryIO) -> int:
        """Write the container for `document_text` onto an open binary handle.
        Returns bytes written."""
        return cls._serialize_payload(cls.encode(document_text), handle)

    @classmethod
    def _serialize_payload(cls, payload: bytes, handle: BinaryIO) -> int:
        start = handle.tell()
        cls.codec.write_member(handle, MEMBER_NAME, payload)
        return handle.tell() - start

    @classmethod
    def write(
        cls,
        path: str | Path,
        document_text: str,
        *,
        atomic: bool = True,
        validate: bool = False,
        mode: int = UNIX_PERMISSIONS,
    ) -> int:
        """
        Write `document_text` to a .flm file at `path`. Returns bytes written.

        The payload is not checked unless validate=True. Text that cannot be
        encoded as UTF-8 is rejected before the filesystem is touched.

        The atomic save replaces whatever is at `path`: a symlink there is
        replaced by a regular file rather than written through, and the new
        file gets `mode` regardless of the old file's permissions.

        With atomic=False the target is opened and truncated in place (symlinks
        are followed, existing permissions kept, `mode` unused), so a failure
        can leave a damaged file behind.
        """
        if validate:
            check_format_tag(document_text)
        payload = cls.encode(document_text)

        if atomic:
            size = cls._write_atomic(path, payload, mode)
        else:
            size = cls._write_in_place(path, payload)

        logger.debug("Saved %s (%d bytes, %d chars payload)", path, size, len(document_text))
        return size

    @classmethod
    def _write_in_place(cls, path: str | Path, payload: bytes) -> int:
        try:
            handle = open(path, "wb")
        except OSError as exc:
            raise FLMIOError(f"Failed to create file: {exc}") from exc
        with handle:
            return cls._serialize_payload(payload, handle)

    @classmethod
    def _write_atomic(cls, path: str | Path, payload: bytes, mode: int) -> int:
        dir_name = os.path.dirname(os.path.abspath(path)) or "."
        try:
            fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix=EXTENSION + ".tmp")
        except OSError as exc:
            raise FLMIOError(f"Failed to create file: {exc}") from exc

        try:
            with os.fdopen(fd, "wb") as f:
                size = cls._serialize_payload(payload, f)
                try:
                    f.flush()
                    os.fsync(f.fileno())
                except OSError as exc:
                    raise FLMIOError(f"Failed to write to archive: {exc}") from exc
            try:
                os.chmod(tmp_path, mode)
                os.replace(tmp_path, path)
            except OSError as exc:
                raise FLMIOError(f"Failed to replace file: {exc}") from exc
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
        return size


def save(path: str | Path, document_text: str, **kwargs) -> int:
    """Shortcut for FLMWriter.write()."""
    return FLMWriter.write(path, document_text, **kwargs)
