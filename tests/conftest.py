"""Shared fixtures: synthetic cartridge images built in memory."""

from __future__ import annotations

import io

import pytest

from gbrom.utils.constants import CANONICAL_BOOT_LOGO

CARTRIDGE_SIZE = 32 * 1024


def checksum_of(image: bytes | bytearray) -> int:
    chk = 0
    for b in image[0x134:0x14D]:
        chk = (chk + ~b) & 0xFF
    return chk


def make_cartridge(
    *,
    size: int = CARTRIDGE_SIZE,
    title: bytes = b"TESTGAME",
    cartridge_type: int = 0x00,
    rom_size_code: int = 0x00,
    ram_size_code: int = 0x00,
    logo: bytes = CANONICAL_BOOT_LOGO,
    fix_checksum: bool = True,
) -> bytes:
    image = bytearray(size)
    # filler pattern so misplaced offsets show up in comparisons
    for i in range(0x150, size):
        image[i] = i & 0xFF
    image[0x100:0x104] = b"\x00\xc3\x50\x01"
    image[0x104:0x134] = logo
    image[0x134:0x144] = title.ljust(0x10, b"\x00")
    image[0x144:0x146] = b"01"
    image[0x146] = 0x03
    image[0x147] = cartridge_type
    image[0x148] = rom_size_code
    image[0x149] = ram_size_code
    image[0x14A] = 0x01
    image[0x14B] = 0x33
    image[0x14C] = 0x02
    image[0x14D] = checksum_of(image) if fix_checksum else (checksum_of(image) + 1) & 0xFF
    image[0x14E:0x150] = b"\xbe\xef"
    return bytes(image)


@pytest.fixture
def cartridge_image() -> bytes:
    return make_cartridge()


@pytest.fixture
def firmware_image() -> bytes:
    return bytes(range(256))


@pytest.fixture
def cartridge_stream(cartridge_image):
    return io.BytesIO(cartridge_image)


@pytest.fixture
def firmware_stream(firmware_image):
    return io.BytesIO(firmware_image)
