"""Cartridge loader: builds a :class:`ROM` from firmware and cartridge streams.

The load either returns a fully populated ROM or raises a :class:`LoadError`
subclass; no partially filled aggregate is ever handed out. Streams are left
positioned at their end and are not closed.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import BinaryIO, Optional

from ..cartridge.header import CartridgeHeader, describe_offset
from ..logging.logger import LoadLogger
from ..utils.constants import (
    DRAIN_CHUNK_SIZE,
    HEADER_END,
    HEADER_OFFSET,
    HEADER_SIZE,
    MAX_ROM_SIZE_CODE,
)
from .errors import LoadPhase, SeekError, StreamReadError
from .rom import ROM, header_checksum, rom_size_bytes


def _remaining_length(stream: BinaryIO) -> Optional[int]:
    """Bytes between the current position and EOF, or None if not seekable."""
    seekable = getattr(stream, "seekable", None)
    if seekable is None or not seekable():
        return None
    pos = stream.tell()
    end = stream.seek(0, io.SEEK_END)
    stream.seek(pos)
    return end - pos


def _drain(stream: BinaryIO, phase: LoadPhase, start: int, expected: Optional[int]) -> bytes:
    """Read until EOF; ``expected`` (when known) must match the byte count."""
    data = bytearray()
    try:
        while True:
            chunk = stream.read(DRAIN_CHUNK_SIZE)
            if not chunk:
                break
            data += chunk
    except (OSError, ValueError) as exc:
        raise StreamReadError(phase, f"read failed: {exc}", offset=start + len(data)) from exc

    if expected is not None and len(data) != expected:
        raise StreamReadError(
            phase,
            f"expected {expected} bytes, stream ended after {len(data)} bytes",
            offset=start + len(data),
        )
    return bytes(data)


def _read_exact(stream: BinaryIO, size: int, phase: LoadPhase, start: int) -> bytes:
    data = bytearray()
    try:
        while len(data) < size:
            chunk = stream.read(size - len(data))
            if not chunk:
                break
            data += chunk
    except (OSError, ValueError) as exc:
        raise StreamReadError(phase, f"read failed: {exc}", offset=start + len(data)) from exc

    if len(data) < size:
        stop = start + len(data)
        raise StreamReadError(
            phase,
            f"short read ({len(data)}/{size} bytes), data ends inside {describe_offset(stop)}",
            offset=stop,
        )
    return bytes(data)


def _read_firmware(firmware_stream: BinaryIO) -> bytes:
    try:
        expected = _remaining_length(firmware_stream)
    except (OSError, ValueError) as exc:
        raise StreamReadError(LoadPhase.FIRMWARE, f"cannot measure stream: {exc}") from exc
    return _drain(firmware_stream, LoadPhase.FIRMWARE, 0, expected)


def _read_header(cartridge_stream: BinaryIO) -> tuple[CartridgeHeader, int]:
    """Position at the header, decode it and return it with the image size."""
    try:
        size = cartridge_stream.seek(0, io.SEEK_END)
    except (OSError, ValueError) as exc:
        raise SeekError(LoadPhase.HEADER_SEEK, f"cartridge stream is not seekable: {exc}") from exc

    if size < HEADER_END:
        raise SeekError(
            LoadPhase.HEADER_SEEK,
            f"cartridge image too small ({size} bytes, header ends at 0x{HEADER_END:X})",
            offset=size,
        )

    try:
        cartridge_stream.seek(HEADER_OFFSET)
    except (OSError, ValueError) as exc:
        raise SeekError(LoadPhase.HEADER_SEEK, str(exc), offset=HEADER_OFFSET) from exc

    raw = _read_exact(cartridge_stream, HEADER_SIZE, LoadPhase.HEADER, HEADER_OFFSET)
    return CartridgeHeader.from_bytes(raw), size


def _read_cartridge_data(cartridge_stream: BinaryIO, size: int) -> bytes:
    try:
        cartridge_stream.seek(HEADER_END)
    except (OSError, ValueError) as exc:
        raise SeekError(LoadPhase.CARTRIDGE_DATA, str(exc), offset=HEADER_END) from exc
    return _drain(cartridge_stream, LoadPhase.CARTRIDGE_DATA, HEADER_END, size - HEADER_END)


def _report(rom: ROM, logger: LoadLogger) -> None:
    header = rom.header
    logger.console(f"  - Title: {header.title_text!r}")
    logger.console(f"  - Cartridge type: 0x{header.cartridge_type:02X}")

    if header.rom_size_code <= MAX_ROM_SIZE_CODE:
        logger.console(f"  - ROM size: {rom_size_bytes(rom) // 1024} KB (code 0x{header.rom_size_code:02X})")
    else:
        logger.console_always(
            f"  ⚠ Warning: Unknown ROM size code 0x{header.rom_size_code:02X}, "
            f"assuming {rom_size_bytes(rom) // 1024} KB"
        )

    computed = header_checksum(rom)
    if computed == header.header_checksum:
        logger.console(f"  ✓ Header checksum: 0x{computed:02X}")
    else:
        logger.console_always(
            f"  ⚠ Warning: Header checksum mismatch: computed 0x{computed:02X}, "
            f"stored 0x{header.header_checksum:02X}"
        )

    if header.has_canonical_logo():
        logger.console("  ✓ Boot logo matches")
    else:
        logger.console_always("  ⚠ Warning: Boot logo differs from the canonical bitmap")

    logger.detail(header.describe())


def load(cartridge_stream: BinaryIO, firmware_stream: BinaryIO,
         *, logger: Optional[LoadLogger] = None) -> ROM:
    """Load firmware and cartridge streams into a :class:`ROM`.

    Args:
        cartridge_stream: Seekable binary stream holding the full cartridge image
        firmware_stream: Binary stream holding the boot firmware, drained to EOF
        logger: Optional logger receiving load progress

    Raises:
        StreamReadError: a read failed or a stream ended early
        SeekError: the cartridge is too short to hold a header, or not seekable
    """
    if logger:
        logger.console("[*] Loading firmware...")
    firmware = _read_firmware(firmware_stream)
    if logger:
        logger.console(f"  - Firmware size: {len(firmware)} bytes")
        logger.console(f"[*] Reading cartridge header at 0x{HEADER_OFFSET:04X}...")

    header, size = _read_header(cartridge_stream)
    cartridge_data = _read_cartridge_data(cartridge_stream, size)

    rom = ROM(firmware=firmware, header=header, cartridge_data=cartridge_data)
    if logger:
        _report(rom, logger)
        logger.console(f"  - Cartridge data: {len(cartridge_data)} bytes ({size} byte image)")
    return rom


def load_files(cartridge_path: str | Path, firmware_path: str | Path | None = None,
               *, logger: Optional[LoadLogger] = None) -> ROM:
    """Open the given image files and :func:`load` them.

    Without ``firmware_path`` the firmware buffer is empty.
    """
    cartridge_path = Path(cartridge_path)
    if not cartridge_path.exists():
        raise FileNotFoundError(f"Cartridge image not found: {cartridge_path}")
    if firmware_path is not None:
        firmware_path = Path(firmware_path)
        if not firmware_path.exists():
            raise FileNotFoundError(f"Firmware image not found: {firmware_path}")

    if logger:
        logger.console(f"[*] Loading cartridge image from {cartridge_path}...")

    with open(cartridge_path, 'rb') as cartridge_stream:
        if firmware_path is None:
            return load(cartridge_stream, io.BytesIO(), logger=logger)
        with open(firmware_path, 'rb') as firmware_stream:
            return load(cartridge_stream, firmware_stream, logger=logger)
