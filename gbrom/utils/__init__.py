"""
Utility modules for the Game Boy cartridge loader
"""

from .constants import (
    HEADER_OFFSET,
    HEADER_SIZE,
    HEADER_END,
    HEADER_CHECKSUM_START,
    HEADER_CHECKSUM_END,
    ROM_SIZE_BASE,
    MAX_ROM_SIZE_CODE,
    DRAIN_CHUNK_SIZE,
    CANONICAL_BOOT_LOGO,
)

__all__ = [
    "HEADER_OFFSET",
    "HEADER_SIZE",
    "HEADER_END",
    "HEADER_CHECKSUM_START",
    "HEADER_CHECKSUM_END",
    "ROM_SIZE_BASE",
    "MAX_ROM_SIZE_CODE",
    "DRAIN_CHUNK_SIZE",
    "CANONICAL_BOOT_LOGO",
]
