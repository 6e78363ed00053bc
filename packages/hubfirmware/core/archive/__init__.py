"""Archive access layer for hubfirmware.

Firmware packages are read through the ArchiveReader protocol so the
firmware layer stays independent of the archive format.

Example:
    >>> from hubfirmware.core.archive import ZipArchiveReader
    >>> archive = await ZipArchiveReader().open(zip_bytes)
    >>> entry = archive.entry("main.py")
    >>> text = await entry.read_text()
"""

from .impl_fake import FakeArchive, FakeArchiveEntry, FakeArchiveReader
from .impl_zip import ZipArchive, ZipArchiveEntry, ZipArchiveReader
from .protocols import ArchiveEntry, ArchiveError, ArchiveReader, OpenedArchive

__all__ = [
    # Protocols
    "ArchiveEntry",
    "ArchiveReader",
    "OpenedArchive",
    # Errors
    "ArchiveError",
    # Zip implementation
    "ZipArchive",
    "ZipArchiveEntry",
    "ZipArchiveReader",
    # Fakes
    "FakeArchive",
    "FakeArchiveEntry",
    "FakeArchiveReader",
]
