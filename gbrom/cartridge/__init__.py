"""
Cartridge header structures for the Game Boy cartridge loader
"""

from .field_markers import FieldMarker, FieldDescription, ChecksumCoverage, describe, checksummed
from .header import CartridgeHeaderLayout, CartridgeHeader, CHECKSUM_SPAN, describe_offset

__all__ = [
    "FieldMarker",
    "FieldDescription",
    "ChecksumCoverage",
    "describe",
    "checksummed",
    "CartridgeHeaderLayout",
    "CartridgeHeader",
    "CHECKSUM_SPAN",
    "describe_offset",
]
