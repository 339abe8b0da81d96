"""
Archive codec - named-member write and read over a zip container.

The codec works on binary file handles the caller already owns, so the
caller decides where bytes land (target file, temp file, BytesIO) and when
handles are released. Every zipfile failure is translated into one of the
FLMError categories at the step where it happened.
"""

from __future__ import annotations

import zipfile
import zlib
from typing import BinaryIO

from flowmark.errors import (
    FLMContainerError,
    FLMIOError,
    FLMMemberNotFoundError,
)
from flowmark.spec import (
    COMPRESSION,
    CREATE_SYSTEM_UNIX,
    FILE_TYPE_REGULAR,
    FIXED_DATE_TIME,
    MAX_MEMBER_SIZE,
    UNIX_PERMISSIONS,
)

# Raised by zipfile while decompressing or checking a member
_MEMBER_READ_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,  # Unsupported compression method
    RuntimeError,         # Encrypted member
    ValueError,           # Undecodable name in the local header
)

# Raised by zipfile while parsing the central directory
_ARCHIVE_OPEN_ERRORS = (
    zipfile.BadZipFile,
    ValueError,
    EOFError,
    NotImplementedError,  # Unsupported zip version
)


class ArchiveCodec:
    """
    Zip codec with a fixed write policy.

    Usage:
        codec = ArchiveCodec()
        with open("doc.flm", "wb") as f:
            codec.write_member(f, "document.json", payload)
        with open("doc.flm", "rb") as f:
            payload = codec.read_member(f, "document.json")
    """

    def __init__(
        self,
        compression: int = COMPRESSION,
        permissions: int = UNIX_PERMISSIONS,
        date_time: tuple[int, int, int, int, int, int] = FIXED_DATE_TIME,
    ) -> None:
        self.compression = compression
        self.permissions = permissions
        self.date_time = date_time

    def member_info(self, name: str) -> zipfile.ZipInfo:
        """Build the header for a new member. Same name -> same header bytes."""
        info = zipfile.ZipInfo(name, date_time=self.date_time)
        info.compress_type = self.compression
        info.create_system = CREATE_SYSTEM_UNIX
        info.external_attr = (FILE_TYPE_REGULAR | self.permissions) << 16
        return info

    def write_member(self, handle: BinaryIO, name: str, data: bytes) -> None:
        """Write a single-member archive onto `handle` and finalize it."""
        try:
            archive = zipfile.ZipFile(handle, mode="w", compression=self.compression)
            member = archive.open(self.member_info(name), mode="w")
        except (OSError, ValueError, zipfile.LargeZipFile) as exc:
            raise FLMContainerError(f"Failed to add {name} to archive: {exc}") from exc

        try:
            member.write(data)
            member.close()
        except (OSError, zipfile.LargeZipFile) as exc:
            raise FLMIOError(f"Failed to write to archive: {exc}") from exc

        try:
            archive.close()
        except (OSError, ValueError) as exc:
            raise FLMContainerError(f"Failed to finalize archive: {exc}") from exc

    def read_member(
        self, handle: BinaryIO, name: str, *, max_size: int = MAX_MEMBER_SIZE,
    ) -> bytes:
        """Read one member's bytes from the archive on `handle`."""
        try:
            archive = zipfile.ZipFile(handle, mode="r")
        except _ARCHIVE_OPEN_ERRORS as exc:
            raise FLMContainerError(f"Failed to read archive: {exc}") from exc
        except OSError as exc:
            raise FLMIOError(f"Failed to read file: {exc}") from exc

        with archive:
            try:
                info = archive.getinfo(name)
            except KeyError as exc:
                raise FLMMemberNotFoundError(f"{name} not found in .flm file") from exc

            if info.file_size > max_size:
                raise FLMContainerError(
                    f"{name} size {info.file_size} exceeds maximum {max_size} bytes. "
                    f"Pass max_size= to override."
                )

            try:
                with archive.open(info) as member:
                    # One byte past the limit catches headers that lie about size
                    data = member.read(max_size + 1)
            except _MEMBER_READ_ERRORS as exc:
                raise FLMContainerError(f"Failed to read {name}: {exc}") from exc
            except OSError as exc:
                raise FLMIOError(f"Failed to read {name}: {exc}") from exc

        if len(data) > max_size:
            raise FLMContainerError(
                f"{name} exceeds maximum {max_size} bytes. Pass max_size= to override."
            )
        return data

    def member_names(self, handle: BinaryIO) -> list[str]:
        """List member names without reading any member data."""
        try:
            with zipfile.ZipFile(handle, mode="r") as archive:
                return archive.namelist()
        except _ARCHIVE_OPEN_ERRORS as exc:
            raise FLMContainerError(f"Failed to read archive: {exc}") from exc
