"""
Load failures raised while reading firmware and cartridge streams
"""

from enum import Enum
from typing import Optional


class LoadPhase(Enum):
    """Step of the load that failed"""
    FIRMWARE = "firmware"
    HEADER_SEEK = "header seek"
    HEADER = "header"
    CARTRIDGE_DATA = "cartridge data"


class LoadError(Exception):
    """A load aborted; no ROM was produced."""

    def __init__(self, phase: LoadPhase, message: str, offset: Optional[int] = None):
        self.phase = phase
        self.offset = offset
        where = f" at 0x{offset:X}" if offset is not None else ""
        super().__init__(f"{phase.value}{where}: {message}")


class StreamReadError(LoadError):
    """I/O failure or premature end of data while reading a stream."""


class SeekError(LoadError):
    """Cartridge stream cannot be positioned at the header (too short or not seekable)."""
