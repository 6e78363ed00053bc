"""Firmware package reader.

A firmware package is an archive holding exactly these entries:

- ``firmware-base.bin``: the firmware image
- ``firmware.metadata.json``: FirmwareMetadata as JSON
- ``main.py``: the bootstrap script
- ``ReadMe_OSS.txt``: open source license notices

FirmwareReader.load() checks that all four exist and returns a handle. Entry
contents are only read (and metadata only validated) when an accessor is
awaited.
"""

from __future__ import annotations

import asyncio
import codecs

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from hubfirmware.core.archive import ArchiveEntry, ArchiveError, ArchiveReader, ZipArchiveReader
from hubfirmware.core.firmware.errors import FirmwareReaderError, FirmwareReaderErrorCode
from hubfirmware.core.firmware.models import FirmwareMetadata
from hubfirmware.core.utils.logging import get_logger

logger = get_logger(__name__)

FIRMWARE_BASE_BIN = "firmware-base.bin"
METADATA_JSON = "firmware.metadata.json"
MAIN_PY = "main.py"
README_OSS_TXT = "ReadMe_OSS.txt"

# The metadata document is always UTF-8, regardless of FirmwareReaderOptions.encoding.
METADATA_ENCODING = "utf-8"

# Checked in this order; the first missing entry is the one reported.
REQUIRED_ENTRIES: tuple[tuple[str, FirmwareReaderErrorCode], ...] = (
    (FIRMWARE_BASE_BIN, FirmwareReaderErrorCode.MISSING_FIRMWARE_IMAGE),
    (METADATA_JSON, FirmwareReaderErrorCode.MISSING_METADATA),
    (MAIN_PY, FirmwareReaderErrorCode.MISSING_SCRIPT),
    (README_OSS_TXT, FirmwareReaderErrorCode.MISSING_LICENSE),
)

_LOAD_TOKEN = object()


class FirmwareReaderOptions(BaseModel):
    """Per-reader behavior configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    encoding: str = Field(
        default="utf-8", description="Text encoding of main.py and ReadMe_OSS.txt"
    )
    cache: bool = Field(
        default=False,
        description="Read each entry from the archive at most once and reuse the bytes",
    )

    @field_validator("encoding")
    @classmethod
    def _known_codec(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown text encoding: {value}") from e
        return value


class FirmwareReader:
    """
    Validated handle over a firmware package.

    Construct with ``await FirmwareReader.load(data)``; the constructor is
    private. The raw package bytes must stay alive as long as the reader.
    """

    def __init__(
        self,
        token: object,
        firmware: ArchiveEntry,
        metadata: ArchiveEntry,
        main_py: ArchiveEntry,
        readme_oss: ArchiveEntry,
        options: FirmwareReaderOptions,
    ) -> None:
        if token is not _LOAD_TOKEN:
            raise TypeError("use FirmwareReader.load() to create a FirmwareReader")
        self._firmware = firmware
        self._metadata = metadata
        self._main_py = main_py
        self._readme_oss = readme_oss
        self._options = options
        self._cache: dict[str, bytes] = {}

    @classmethod
    async def load(
        cls,
        data: bytes,
        archive_reader: ArchiveReader | None = None,
        options: FirmwareReaderOptions | None = None,
    ) -> FirmwareReader:
        """
        Open a firmware package and check that it has all required entries.

        Args:
            data: The package (e.g. ``cityhub.zip``) contents
            archive_reader: Archive adapter; zip by default
            options: Reader options; defaults if None

        Returns:
            Reader for the package

        Raises:
            FirmwareReaderError: MALFORMED_ARCHIVE if ``data`` cannot be opened
                (the adapter error is the cause), otherwise the MISSING_* code of
                the first missing entry
        """
        archive_reader = archive_reader or ZipArchiveReader()
        options = options or FirmwareReaderOptions()

        try:
            archive = await archive_reader.open(data)
        except Exception as e:
            raise FirmwareReaderError(FirmwareReaderErrorCode.MALFORMED_ARCHIVE, e) from e

        entries: list[ArchiveEntry] = []
        for name, missing_code in REQUIRED_ENTRIES:
            entry = archive.entry(name)
            if entry is None:
                raise FirmwareReaderError(missing_code)
            entries.append(entry)

        logger.debug("loaded firmware package (%d bytes)", len(data))
        return cls(_LOAD_TOKEN, *entries, options=options)

    @property
    def options(self) -> FirmwareReaderOptions:
        return self._options

    async def _read_bytes(self, entry: ArchiveEntry) -> bytes:
        if not self._options.cache:
            return await self._read_entry(entry)
        if entry.name not in self._cache:
            self._cache[entry.name] = await self._read_entry(entry)
        return self._cache[entry.name]

    async def _read_text(self, entry: ArchiveEntry, encoding: str | None = None) -> str:
        encoding = encoding or self._options.encoding
        if self._options.cache:
            return (await self._read_bytes(entry)).decode(encoding)
        try:
            return await entry.read_text(encoding)
        except ArchiveError as e:
            raise FirmwareReaderError(FirmwareReaderErrorCode.MALFORMED_ARCHIVE, e) from e

    @staticmethod
    async def _read_entry(entry: ArchiveEntry) -> bytes:
        try:
            return await entry.read_bytes()
        except ArchiveError as e:
            raise FirmwareReaderError(FirmwareReaderErrorCode.MALFORMED_ARCHIVE, e) from e

    async def read_firmware_base(self) -> bytes:
        """Read ``firmware-base.bin`` unchanged."""
        return await self._read_bytes(self._firmware)

    async def read_metadata(self) -> FirmwareMetadata:
        """
        Read and validate ``firmware.metadata.json``.

        Raises:
            FirmwareReaderError: INVALID_METADATA if the entry is not decodable
                text, not JSON, or not a valid FirmwareMetadata
        """
        try:
            text = await self._read_text(self._metadata, METADATA_ENCODING)
            return FirmwareMetadata.from_json(text)
        except (UnicodeDecodeError, ValidationError) as e:
            raise FirmwareReaderError(FirmwareReaderErrorCode.INVALID_METADATA, e) from e

    async def read_main_py(self) -> str:
        """Read the ``main.py`` bootstrap script."""
        return await self._read_text(self._main_py)

    async def read_readme_oss(self) -> str:
        """Read the ``ReadMe_OSS.txt`` license notices."""
        return await self._read_text(self._readme_oss)


class FirmwareReaderSync:
    """
    Synchronous wrapper around FirmwareReader.

    Uses asyncio.run() for each call, so it must not be used from inside a
    running event loop.
    """

    def __init__(self, reader: FirmwareReader) -> None:
        self._async_reader = reader

    @classmethod
    def load(
        cls,
        data: bytes,
        archive_reader: ArchiveReader | None = None,
        options: FirmwareReaderOptions | None = None,
    ) -> FirmwareReaderSync:
        """Open a firmware package (blocking). See FirmwareReader.load()."""
        return cls(asyncio.run(FirmwareReader.load(data, archive_reader, options)))

    def read_firmware_base(self) -> bytes:
        """Read the firmware image (blocking)."""
        return asyncio.run(self._async_reader.read_firmware_base())

    def read_metadata(self) -> FirmwareMetadata:
        """Read the firmware metadata (blocking)."""
        return asyncio.run(self._async_reader.read_metadata())

    def read_main_py(self) -> str:
        """Read the bootstrap script (blocking)."""
        return asyncio.run(self._async_reader.read_main_py())

    def read_readme_oss(self) -> str:
        """Read the license notices (blocking)."""
        return asyncio.run(self._async_reader.read_readme_oss())
