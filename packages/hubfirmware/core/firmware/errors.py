"""Firmware package errors."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType


class FirmwareReaderErrorCode(Enum):
    """Kinds of failure raised by FirmwareReader."""

    MALFORMED_ARCHIVE = "malformed-archive"
    """The package data could not be read as an archive."""

    MISSING_FIRMWARE_IMAGE = "missing-firmware-image"
    """The archive has no firmware-base.bin."""

    MISSING_METADATA = "missing-metadata"
    """The archive has no firmware.metadata.json."""

    MISSING_SCRIPT = "missing-script"
    """The archive has no main.py."""

    MISSING_LICENSE = "missing-license"
    """The archive has no ReadMe_OSS.txt."""

    INVALID_METADATA = "invalid-metadata"
    """firmware.metadata.json is not valid JSON or does not match the schema."""


FIRMWARE_READER_ERROR_MESSAGES: Mapping[FirmwareReaderErrorCode, str] = MappingProxyType(
    {
        FirmwareReaderErrorCode.MALFORMED_ARCHIVE: "bad zip data",
        FirmwareReaderErrorCode.MISSING_FIRMWARE_IMAGE: "missing firmware-base.bin",
        FirmwareReaderErrorCode.MISSING_METADATA: "missing firmware.metadata.json",
        FirmwareReaderErrorCode.MISSING_SCRIPT: "missing main.py",
        FirmwareReaderErrorCode.MISSING_LICENSE: "missing ReadMe_OSS.txt",
        FirmwareReaderErrorCode.INVALID_METADATA: "invalid firmware.metadata.json",
    }
)


class FirmwareError(Exception):
    """Base class for all hubfirmware errors."""


class FirmwareReaderError(FirmwareError):
    """Raised when a firmware package cannot be loaded or read.

    Attributes:
        code: Which failure occurred.
        cause: The underlying error, if any (also chained as ``__cause__``).
    """

    def __init__(self, code: FirmwareReaderErrorCode, cause: BaseException | None = None) -> None:
        super().__init__(FIRMWARE_READER_ERROR_MESSAGES[code])
        self.code = code
        self.cause = cause

    def __repr__(self) -> str:
        return f"FirmwareReaderError(code={self.code.name}, cause={self.cause!r})"


class NameEncodingUnsupportedError(FirmwareError, ValueError):
    """Raised when the firmware metadata does not allow embedding a hub name."""

    def __init__(self) -> None:
        super().__init__("firmware image does not support firmware name")
