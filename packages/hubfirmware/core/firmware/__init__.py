"""Firmware package reading and hub name encoding.

Example (async):
    >>> from hubfirmware.core.firmware import FirmwareReader, encode_hub_name
    >>> reader = await FirmwareReader.load(zip_bytes)
    >>> metadata = await reader.read_metadata()
    >>> image = bytearray(await reader.read_firmware_base())
    >>> name = encode_hub_name("my hub", metadata)
    >>> offset = metadata.hub_name_offset
    >>> image[offset : offset + len(name)] = name

Example (sync):
    >>> from hubfirmware.core.firmware import FirmwareReaderSync
    >>> reader = FirmwareReaderSync.load(zip_bytes)
    >>> script = reader.read_main_py()
"""

from .errors import (
    FIRMWARE_READER_ERROR_MESSAGES,
    FirmwareError,
    FirmwareReaderError,
    FirmwareReaderErrorCode,
    NameEncodingUnsupportedError,
)
from .hub_name import decode_hub_name, encode_hub_name
from .models import (
    ZIP_FILE_NAME_MAP,
    ChecksumType,
    FirmwareMetadata,
    HubType,
    firmware_version_from_package_version,
)
from .reader import (
    FIRMWARE_BASE_BIN,
    MAIN_PY,
    METADATA_JSON,
    README_OSS_TXT,
    REQUIRED_ENTRIES,
    FirmwareReader,
    FirmwareReaderOptions,
    FirmwareReaderSync,
)

__all__ = [
    # Models
    "ChecksumType",
    "FirmwareMetadata",
    "HubType",
    "ZIP_FILE_NAME_MAP",
    "firmware_version_from_package_version",
    # Errors
    "FIRMWARE_READER_ERROR_MESSAGES",
    "FirmwareError",
    "FirmwareReaderError",
    "FirmwareReaderErrorCode",
    "NameEncodingUnsupportedError",
    # Reader
    "FIRMWARE_BASE_BIN",
    "MAIN_PY",
    "METADATA_JSON",
    "README_OSS_TXT",
    "REQUIRED_ENTRIES",
    "FirmwareReader",
    "FirmwareReaderOptions",
    "FirmwareReaderSync",
    # Hub name
    "decode_hub_name",
    "encode_hub_name",
]
