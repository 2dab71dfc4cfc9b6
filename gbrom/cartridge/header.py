"""
Cartridge header layout and record for Game Boy ROM images.

The header lives at 0x0100-0x014F of every cartridge image. Its layout is
declared once as a packed ctypes structure; decoding slices the raw bytes
field by field using that declaration and never reinterprets memory.
Multi-byte fields stay opaque byte strings, so no endianness is implied.
"""

import ctypes
from ctypes import c_uint8
from dataclasses import dataclass
from typing import Annotated, Dict, Union

from ..types.c_types import c_struct, c_array
from ..utils.constants import (
    CANONICAL_BOOT_LOGO,
    HEADER_CHECKSUM_END,
    HEADER_CHECKSUM_START,
    HEADER_OFFSET,
    HEADER_SIZE,
)
from .field_markers import ChecksumCoverage, FieldDescription, checksummed, describe


class CartridgeHeaderLayout(c_struct):
    """Cartridge header at 0x0100 of the ROM image"""
    entry_point: Annotated[c_array, c_uint8 * 4, describe("Boot entry code")]                  # 0x100
    boot_logo: Annotated[c_array, c_uint8 * 0x30, describe("Boot logo bitmap")]                # 0x104
    title: Annotated[c_array, c_uint8 * 0x10, describe("Game title"), checksummed()]           # 0x134
    new_licensee_code: Annotated[c_array, c_uint8 * 2, describe("New licensee code"), checksummed()]  # 0x144
    sgb_flag: Annotated[int, c_uint8, describe("SGB support flag"), checksummed()]             # 0x146
    cartridge_type: Annotated[int, c_uint8, describe("Cartridge type"), checksummed()]         # 0x147
    rom_size_code: Annotated[int, c_uint8, describe("ROM size code"), checksummed()]           # 0x148
    ram_size_code: Annotated[int, c_uint8, describe("RAM size code"), checksummed()]           # 0x149
    destination_code: Annotated[int, c_uint8, describe("Destination code"), checksummed()]     # 0x14A
    old_licensee_code: Annotated[int, c_uint8, describe("Old licensee code"), checksummed()]   # 0x14B
    rom_version: Annotated[int, c_uint8, describe("Mask ROM version"), checksummed()]          # 0x14C
    header_checksum: Annotated[int, c_uint8, describe("Header checksum")]                      # 0x14D
    global_checksum: Annotated[c_array, c_uint8 * 2, describe("Global checksum")]              # 0x14E


if ctypes.sizeof(CartridgeHeaderLayout) != HEADER_SIZE:
    raise TypeError(
        f"CartridgeHeaderLayout is {ctypes.sizeof(CartridgeHeaderLayout)} bytes, expected {HEADER_SIZE}"
    )

# Header-relative bytes fed to the header checksum, taken from the field markers
CHECKSUM_SPAN = CartridgeHeaderLayout.marker_span(ChecksumCoverage)

if (HEADER_OFFSET + CHECKSUM_SPAN.start, HEADER_OFFSET + CHECKSUM_SPAN.stop - 1) != (
        HEADER_CHECKSUM_START, HEADER_CHECKSUM_END):
    raise TypeError(
        f"Checksum markers cover 0x{HEADER_OFFSET + CHECKSUM_SPAN.start:X}.."
        f"0x{HEADER_OFFSET + CHECKSUM_SPAN.stop - 1:X}, expected "
        f"0x{HEADER_CHECKSUM_START:X}..0x{HEADER_CHECKSUM_END:X}"
    )


def describe_offset(offset: int) -> str:
    """Name the header field covering an absolute image offset.

    Used for diagnostics, e.g. ``"title (0x134+0x10)"``.
    """
    field_info = CartridgeHeaderLayout.get_field_at_offset(offset - HEADER_OFFSET)
    if field_info is None:
        return f"outside header (0x{offset:X})"
    name, field_offset, field_size = field_info
    return f"{name} (0x{HEADER_OFFSET + field_offset:X}+0x{field_size:X})"


@dataclass(frozen=True)
class CartridgeHeader:
    """Decoded cartridge header.

    Byte-sequence fields are ``bytes``; single-byte fields are ``int``.
    """

    entry_point: bytes
    boot_logo: bytes
    title: bytes
    new_licensee_code: bytes
    sgb_flag: int
    cartridge_type: int
    rom_size_code: int
    ram_size_code: int
    destination_code: int
    old_licensee_code: int
    rom_version: int
    header_checksum: int
    global_checksum: bytes

    @classmethod
    def from_bytes(cls, raw: bytes) -> "CartridgeHeader":
        """Decode exactly ``HEADER_SIZE`` raw bytes into a header record."""
        if len(raw) != HEADER_SIZE:
            raise ValueError(
                f"Cartridge header must be {HEADER_SIZE} bytes, got {len(raw)} bytes"
            )

        values: Dict[str, Union[int, bytes]] = {}
        for field_name, ctypes_type in CartridgeHeaderLayout._fields_:
            chunk = bytes(raw[CartridgeHeaderLayout.field_slice(field_name)])
            if issubclass(ctypes_type, ctypes.Array):
                values[field_name] = chunk
            else:
                values[field_name] = chunk[0]
        return cls(**values)

    def pack(self) -> bytes:
        """Rebuild the raw header bytes in layout order."""
        out = bytearray()
        for field_name, ctypes_type in CartridgeHeaderLayout._fields_:
            value = getattr(self, field_name)
            if issubclass(ctypes_type, ctypes.Array):
                out += value
            else:
                out.append(value)
        return bytes(out)

    @property
    def title_text(self) -> str:
        """Title as ASCII text, NUL padding stripped; bytes >= 0x80 become U+FFFD."""
        return self.title.rstrip(b"\x00").decode("ascii", errors="replace")

    def has_canonical_logo(self) -> bool:
        """True when boot_logo is the canonical 48-byte logo bitmap."""
        return self.boot_logo == CANONICAL_BOOT_LOGO

    def describe(self) -> str:
        """Multi-line ``name: value`` summary of every field."""
        lines = []
        for field_name, _ in CartridgeHeaderLayout._fields_:
            value = getattr(self, field_name)
            marker = CartridgeHeaderLayout.get_field_marker(field_name, FieldDescription)
            label = marker.text if marker else field_name
            if isinstance(value, bytes):
                rendered = value.hex()
            else:
                rendered = f"0x{value:02X}"
            lines.append(f"{label}: {rendered}")
        return "\n".join(lines)
