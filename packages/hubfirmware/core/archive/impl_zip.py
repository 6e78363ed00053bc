"""Zip-backed archive adapter.

Decompression is CPU-bound and runs in a worker thread via asyncio.to_thread,
so awaiting an entry read never blocks the event loop.
"""

from __future__ import annotations

import asyncio
import io
import zlib
from zipfile import BadZipFile, LargeZipFile, ZipFile, ZipInfo

from hubfirmware.core.archive.protocols import ArchiveError
from hubfirmware.core.utils.logging import get_logger

logger = get_logger(__name__)

# Errors zipfile raises for corrupt or unsupported members.
_ZIP_READ_ERRORS = (
    BadZipFile,
    LargeZipFile,
    zlib.error,
    NotImplementedError,
    EOFError,
    OSError,
    ValueError,  # closed archive
)


class ZipArchiveEntry:
    """One file member of a ZipArchive."""

    def __init__(self, archive: ZipFile, info: ZipInfo) -> None:
        self._archive = archive
        self._info = info

    @property
    def name(self) -> str:
        return self._info.filename

    @property
    def size(self) -> int:
        """Uncompressed size declared in the zip directory."""
        return self._info.file_size

    def _read_sync(self) -> bytes:
        try:
            return self._archive.read(self._info)
        except _ZIP_READ_ERRORS as e:
            raise ArchiveError(f"failed to read {self.name}: {e}") from e

    async def read_bytes(self) -> bytes:
        return await asyncio.to_thread(self._read_sync)

    async def read_text(self, encoding: str = "utf-8") -> str:
        data = await self.read_bytes()
        return data.decode(encoding)


class ZipArchive:
    """Opened zip archive over an in-memory buffer."""

    def __init__(self, archive: ZipFile) -> None:
        self._archive = archive
        self._entries: dict[str, ZipArchiveEntry] = {}
        for info in archive.infolist():
            if info.is_dir():
                continue
            # Later duplicates win, matching ZipFile.getinfo().
            self._entries[info.filename] = ZipArchiveEntry(archive, info)

    def entry(self, name: str) -> ZipArchiveEntry | None:
        return self._entries.get(name)

    def names(self) -> list[str]:
        return list(self._entries)

    def close(self) -> None:
        """Release the underlying ZipFile; entries can no longer be read."""
        self._archive.close()

    def __enter__(self) -> ZipArchive:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class ZipArchiveReader:
    """ArchiveReader for zip data (the firmware distribution format)."""

    def _open_sync(self, data: bytes) -> ZipArchive:
        try:
            # BytesIO shares an immutable bytes buffer until written to.
            return ZipArchive(ZipFile(io.BytesIO(data)))
        except _ZIP_READ_ERRORS as e:
            raise ArchiveError(f"bad zip data: {e}") from e

    async def open(self, data: bytes) -> ZipArchive:
        """
        Parse the zip central directory of ``data``.

        Raises:
            ArchiveError: If ``data`` is not a zip archive
        """
        archive = await asyncio.to_thread(self._open_sync, data)
        logger.debug("opened zip archive with entries: %s", archive.names())
        return archive
