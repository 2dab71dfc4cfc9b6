"""
Core loading modules for the Game Boy cartridge loader
"""

from .errors import LoadPhase, LoadError, StreamReadError, SeekError
from .rom import ROM, header_checksum, verify_header_checksum, rom_size_from_code, rom_size_bytes
from .loader import load, load_files

__all__ = [
    "LoadPhase",
    "LoadError",
    "StreamReadError",
    "SeekError",
    "ROM",
    "header_checksum",
    "verify_header_checksum",
    "rom_size_from_code",
    "rom_size_bytes",
    "load",
    "load_files",
]
