"""Protocols for archive access.

Firmware packages are archives, but the firmware layer never parses archive
formats itself. It talks to an ArchiveReader that turns raw bytes into an
OpenedArchive of named entries, each readable as bytes or text.
"""

from typing import Protocol


class ArchiveError(Exception):
    """Raised by archive adapters for any failure to open or read an archive.

    Adapters wrap their own library-specific errors in this type so callers
    deal with a single opaque error class.
    """


class ArchiveEntry(Protocol):
    """A single named member of an opened archive."""

    @property
    def name(self) -> str:
        """Entry name, exactly as stored in the archive."""
        ...

    async def read_bytes(self) -> bytes:
        """
        Read the decompressed entry contents.

        Raises:
            ArchiveError: If the entry cannot be decompressed
        """
        ...

    async def read_text(self, encoding: str = "utf-8") -> str:
        """
        Read and decode the entry contents.

        Raises:
            ArchiveError: If the entry cannot be decompressed
            UnicodeDecodeError: If the contents are not valid in ``encoding``
        """
        ...


class OpenedArchive(Protocol):
    """An archive whose directory has been parsed.

    The caller's raw bytes must stay alive for as long as the archive is used.
    """

    def entry(self, name: str) -> ArchiveEntry | None:
        """Look up an entry by exact name; None if absent (sync, no I/O)."""
        ...

    def names(self) -> list[str]:
        """Names of all file entries, in archive order (sync, no I/O)."""
        ...


class ArchiveReader(Protocol):
    """Opens raw bytes as an archive (async)."""

    async def open(self, data: bytes) -> OpenedArchive:
        """
        Interpret ``data`` as an archive.

        Args:
            data: Complete archive contents

        Returns:
            Opened archive

        Raises:
            ArchiveError: If ``data`` is not a readable archive
        """
        ...
