"""
Game Boy Cartridge Loader

Loads boot firmware and cartridge images, decodes the cartridge header and
verifies its checksum.
"""

from .core import (
    ROM,
    LoadPhase,
    LoadError,
    StreamReadError,
    SeekError,
    load,
    load_files,
    header_checksum,
    verify_header_checksum,
    rom_size_from_code,
    rom_size_bytes,
)
from .cartridge import CartridgeHeader, CartridgeHeaderLayout
from .logging import LoadLogger

__version__ = "1.0.0"
__all__ = [
    "ROM",
    "LoadPhase",
    "LoadError",
    "StreamReadError",
    "SeekError",
    "load",
    "load_files",
    "header_checksum",
    "verify_header_checksum",
    "rom_size_from_code",
    "rom_size_bytes",
    "CartridgeHeader",
    "CartridgeHeaderLayout",
    "LoadLogger",
]
