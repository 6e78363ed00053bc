"""Shared utilities for hubfirmware."""

from hubfirmware.core.utils.logging import (
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
)

__all__ = [
    "StructuredJSONFormatter",
    "configure_logging",
    "get_logger",
]
