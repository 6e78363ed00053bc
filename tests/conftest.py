"""Shared pytest fixtures for hubfirmware tests."""

from __future__ import annotations

import io
import json
from typing import Any
from zipfile import ZIP_DEFLATED, ZipFile

import pytest

from hubfirmware.core.firmware import FirmwareMetadata

# ============================================================================
# Metadata Fixtures
# ============================================================================


@pytest.fixture
def metadata_v1_0() -> dict[str, Any]:
    """Metadata document in the v1.0.0 format (no hub name fields)."""
    return {
        "metadata-version": "1.0.0",
        "firmware-version": "3.0.0",
        "device-id": 0x41,
        "checksum-type": "crc32",
        "mpy-abi-version": 5,
        "mpy-cross-options": ["-mno-unicode"],
        "user-mpy-offset": 100000,
        "max-firmware-size": 106496,
    }


@pytest.fixture
def metadata_v1_1(metadata_v1_0: dict[str, Any]) -> dict[str, Any]:
    """Metadata document in the v1.1.0 format."""
    return {
        **metadata_v1_0,
        "metadata-version": "1.1.0",
        "hub-name-offset": 4096,
        "max-hub-name-size": 16,
        "firmware-sha256": "ab" * 32,
    }


@pytest.fixture
def metadata(metadata_v1_1: dict[str, Any]) -> FirmwareMetadata:
    """Parsed v1.1.0 metadata."""
    return FirmwareMetadata.model_validate(metadata_v1_1)


# ============================================================================
# Package Fixtures
# ============================================================================


def make_zip(members: dict[str, bytes]) -> bytes:
    """Build an in-memory zip archive."""
    buffer = io.BytesIO()
    with ZipFile(buffer, "w", compression=ZIP_DEFLATED) as archive:
        for name, data in members.items():
            archive.writestr(name, data)
    return buffer.getvalue()


@pytest.fixture
def zip_factory():
    """Provide the in-memory zip builder."""
    return make_zip


@pytest.fixture
def firmware_image() -> bytes:
    """Fake firmware image with every byte value present."""
    return bytes(range(256)) * 8


@pytest.fixture
def package_members(firmware_image: bytes, metadata_v1_1: dict[str, Any]) -> dict[str, bytes]:
    """All four required package entries."""
    return {
        "firmware-base.bin": firmware_image,
        "firmware.metadata.json": json.dumps(metadata_v1_1).encode(),
        "main.py": b"from _pybricks import hub\nprint('hello')\n",
        "ReadMe_OSS.txt": "License notices © authors\n".encode(),
    }


@pytest.fixture
def package_zip(package_members: dict[str, bytes]) -> bytes:
    """Complete, valid firmware package as zip bytes."""
    return make_zip(package_members)
