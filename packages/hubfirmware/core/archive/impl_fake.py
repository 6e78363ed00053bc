"""In-memory fake archive adapter for tests.

Archives are plain ``{name: bytes}`` mappings registered against the exact
byte string that should "open" to them, so the firmware layer can be tested
without building real zip files.
"""

from __future__ import annotations

from collections.abc import Mapping

from hubfirmware.core.archive.protocols import ArchiveError


class FakeArchiveEntry:
    """Entry backed by an in-memory bytes value."""

    def __init__(self, name: str, data: bytes) -> None:
        self._name = name
        self._data = data
        self.read_count = 0

    @property
    def name(self) -> str:
        return self._name

    async def read_bytes(self) -> bytes:
        self.read_count += 1
        return self._data

    async def read_text(self, encoding: str = "utf-8") -> str:
        return (await self.read_bytes()).decode(encoding)


class FakeArchive:
    """Opened fake archive."""

    def __init__(self, members: Mapping[str, bytes]) -> None:
        self._entries = {name: FakeArchiveEntry(name, data) for name, data in members.items()}

    def entry(self, name: str) -> FakeArchiveEntry | None:
        return self._entries.get(name)

    def names(self) -> list[str]:
        return list(self._entries)


class FakeArchiveReader:
    """
    Fake ArchiveReader.

    Bytes registered via :meth:`add` open to the given members; any other
    input fails with ArchiveError, like unreadable data would.
    """

    def __init__(self) -> None:
        self._archives: dict[bytes, FakeArchive] = {}
        self.open_count = 0

    def add(self, data: bytes, members: Mapping[str, bytes]) -> FakeArchive:
        """Register ``data`` as an archive containing ``members``."""
        archive = FakeArchive(members)
        self._archives[bytes(data)] = archive
        return archive

    async def open(self, data: bytes) -> FakeArchive:
        self.open_count += 1
        try:
            return self._archives[bytes(data)]
        except KeyError:
            raise ArchiveError("unregistered archive data") from None
