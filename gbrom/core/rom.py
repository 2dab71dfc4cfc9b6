"""ROM aggregate and the read-only queries over it."""

from dataclasses import dataclass

from ..cartridge.header import CHECKSUM_SPAN, CartridgeHeader
from ..utils.constants import (
    MAX_ROM_SIZE_CODE,
    ROM_SIZE_BASE,
)


@dataclass(frozen=True, repr=False)
class ROM:
    """A loaded cartridge: firmware, decoded header and post-header data.

    Only produced by a successful load. ``cartridge_data`` starts at image
    offset 0x150; the first 0x100 bytes of the image are not retained.
    """

    firmware: bytes
    header: CartridgeHeader
    cartridge_data: bytes

    def header_checksum(self) -> int:
        return header_checksum(self)

    def verify_header_checksum(self) -> bool:
        return verify_header_checksum(self)

    def rom_size_bytes(self) -> int:
        return rom_size_bytes(self)

    def __repr__(self) -> str:
        return (
            f"ROM(title={self.header.title_text!r}, firmware={len(self.firmware)} bytes, "
            f"cartridge_data={len(self.cartridge_data)} bytes)"
        )


def header_checksum(rom: ROM) -> int:
    """Recompute the header checksum over image bytes 0x134..0x14C inclusive.

    ``x = x - byte - 1`` for each byte, modulo 256. The caller compares the
    result against ``rom.header.header_checksum``; a mismatch is not an error.
    """
    raw = rom.header.pack()
    chk = 0
    for b in raw[CHECKSUM_SPAN]:
        chk = (chk - b - 1) & 0xFF
    return chk


def verify_header_checksum(rom: ROM) -> bool:
    """True when the recomputed header checksum matches the stored one."""
    return header_checksum(rom) == rom.header.header_checksum


def rom_size_from_code(code: int) -> int:
    """Total ROM size in bytes for a header ROM size code.

    Codes 0x00-0x08 map to 32 KiB << code (32 KiB .. 8 MiB). Every other code,
    including the extended 0x52-0x54 codes, falls back to 32 KiB. Treat the
    fallback as "unknown, assume minimum", not as an authoritative size.
    """
    if 0 <= code <= MAX_ROM_SIZE_CODE:
        return ROM_SIZE_BASE << code
    return ROM_SIZE_BASE


def rom_size_bytes(rom: ROM) -> int:
    """ROM size derived from the header; see :func:`rom_size_from_code`."""
    return rom_size_from_code(rom.header.rom_size_code)
