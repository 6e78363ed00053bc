"""Hub name encoding for embedding in a firmware image."""

from __future__ import annotations

from hubfirmware.core.firmware.errors import NameEncodingUnsupportedError
from hubfirmware.core.firmware.models import FirmwareMetadata


def _is_utf8_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def _replace_lone_surrogates(name: str) -> str:
    # Surrogate pairs recombine through UTF-16; unpaired halves decode to U+FFFD.
    return name.encode("utf-16", "surrogatepass").decode("utf-16", "replace")


def encode_hub_name(name: str, metadata: FirmwareMetadata) -> bytes:
    """
    Encode a hub name as zero-terminated UTF-8 sized for the firmware.

    The result is always exactly ``max-hub-name-size`` bytes and can be
    written to the firmware image at ``hub-name-offset``. Names that do not fit
    are truncated at a code point boundary; the last byte is always zero. Lone
    surrogates are written as U+FFFD.

    Args:
        name: The hub name
        metadata: Metadata of the firmware the name is for

    Returns:
        Zero-padded name buffer

    Raises:
        NameEncodingUnsupportedError: If the metadata has no ``max-hub-name-size``

    Example:
        >>> encode_hub_name("AB", metadata)  # max-hub-name-size == 5
        b'AB\\x00\\x00\\x00'
    """
    size = metadata.max_hub_name_size
    if size is None:
        raise NameEncodingUnsupportedError()

    encoded = _replace_lone_surrogates(name).encode("utf-8")
    limit = size - 1
    if len(encoded) > limit:
        # Back up to the start of the code point that straddles the limit.
        while limit > 0 and _is_utf8_continuation(encoded[limit]):
            limit -= 1
        encoded = encoded[:limit]

    buffer = bytearray(size)
    buffer[: len(encoded)] = encoded
    return bytes(buffer)


def decode_hub_name(buffer: bytes) -> str:
    """Read a zero-terminated UTF-8 hub name (inverse of encode_hub_name)."""
    end = buffer.find(0)
    if end == -1:
        end = len(buffer)
    return bytes(buffer[:end]).decode("utf-8")
