"""Firmware metadata models.

The metadata document shipped as ``firmware.metadata.json`` uses kebab-case
keys. Fields marked "since v1.1.0" are absent from older packages and are
modeled as optional rather than looked up dynamically.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum, IntEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class HubType(IntEnum):
    """Hub device IDs, as reported by the bootloader."""

    MOVE_HUB = 0x40
    """LEGO BOOST Move hub."""

    CITY_HUB = 0x41
    """LEGO Powered Up 2-port hub."""

    TECHNIC_HUB = 0x80
    """LEGO Technic 4-port hub."""


class ChecksumType(str, Enum):
    """Checksum algorithm the bootloader uses to verify the firmware."""

    SUM = "sum"
    CRC32 = "crc32"


ZIP_FILE_NAME_MAP: Mapping[HubType, str] = MappingProxyType(
    {
        HubType.MOVE_HUB: "movehub.zip",
        HubType.CITY_HUB: "cityhub.zip",
        HubType.TECHNIC_HUB: "technichub.zip",
    }
)
"""Firmware package file name for each hub type."""


def firmware_version_from_package_version(package_version: str) -> str:
    """Strip everything up to the last ``v`` of a release tag.

    Example:
        >>> firmware_version_from_package_version("@pybricks/firmware@v6.1.0")
        '6.1.0'
    """
    return package_version[package_version.rfind("v") + 1 :]


class FirmwareMetadata(BaseModel):
    """Contents of ``firmware.metadata.json``.

    Instances are immutable. Unknown keys are ignored so packages with newer
    minor metadata versions still load. Scalar fields are strict: JSON booleans
    and numeric strings are not accepted where integers are expected.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    metadata_version: str = Field(
        strict=True,
        alias="metadata-version",
        description="Version of the metadata format itself",
    )
    firmware_version: str = Field(
        strict=True, alias="firmware-version", description="Firmware binary version"
    )
    device_id: HubType = Field(alias="device-id", description="Hub the firmware runs on")
    checksum_type: ChecksumType = Field(
        alias="checksum-type", description="Bootloader checksum algorithm"
    )
    mpy_abi_version: int = Field(
        strict=True,
        alias="mpy-abi-version",
        description=".mpy ABI version the firmware accepts",
    )
    mpy_cross_options: tuple[StrictStr, ...] = Field(
        alias="mpy-cross-options",
        description="Options to pass to mpy-cross to produce a compatible .mpy file",
    )
    user_mpy_offset: int = Field(
        strict=True,
        alias="user-mpy-offset",
        ge=0,
        description="Offset from the firmware start where the user .mpy is expected",
    )
    max_firmware_size: int = Field(
        strict=True,
        alias="max-firmware-size",
        ge=0,
        description="Maximum firmware size allowed on the hub",
    )

    # since v1.1.0
    hub_name_offset: int | None = Field(
        default=None,
        strict=True,
        alias="hub-name-offset",
        ge=0,
        description="Offset in the firmware where the hub name is stored",
    )
    max_hub_name_size: int | None = Field(
        default=None,
        strict=True,
        alias="max-hub-name-size",
        ge=1,
        description="Size of the hub name buffer in bytes, including the zero terminator",
    )
    firmware_sha256: str | None = Field(
        default=None,
        strict=True,
        alias="firmware-sha256",
        description="SHA-256 hex digest of the firmware",
    )

    @classmethod
    def from_json(cls, text: str | bytes) -> FirmwareMetadata:
        """Parse and validate a metadata JSON document.

        Raises:
            pydantic.ValidationError: If the document is not JSON or has the wrong shape
        """
        return cls.model_validate_json(text)

    @property
    def supports_hub_name(self) -> bool:
        """Whether a custom hub name can be embedded in this firmware."""
        return self.max_hub_name_size is not None
