"""Tests for the cartridge header layout and record."""

from __future__ import annotations

import ctypes

import pytest

from gbrom.cartridge import (
    CHECKSUM_SPAN,
    CartridgeHeader,
    CartridgeHeaderLayout,
    ChecksumCoverage,
    FieldDescription,
    describe_offset,
)
from gbrom.utils.constants import HEADER_OFFSET, HEADER_SIZE

from conftest import make_cartridge

EXPECTED_LAYOUT = [
    ("entry_point", 0x100, 4),
    ("boot_logo", 0x104, 0x30),
    ("title", 0x134, 0x10),
    ("new_licensee_code", 0x144, 2),
    ("sgb_flag", 0x146, 1),
    ("cartridge_type", 0x147, 1),
    ("rom_size_code", 0x148, 1),
    ("ram_size_code", 0x149, 1),
    ("destination_code", 0x14A, 1),
    ("old_licensee_code", 0x14B, 1),
    ("rom_version", 0x14C, 1),
    ("header_checksum", 0x14D, 1),
    ("global_checksum", 0x14E, 2),
]


def _raw_header(**kwargs) -> bytes:
    return make_cartridge(**kwargs)[0x100:0x150]


def test_layout_matches_cartridge_header_map() -> None:
    offsets = CartridgeHeaderLayout.field_offsets()
    got = [(name, HEADER_OFFSET + off, size) for name, (off, size) in offsets.items()]
    assert got == EXPECTED_LAYOUT


def test_layout_has_no_padding() -> None:
    assert sum(size for _, _, size in EXPECTED_LAYOUT) == HEADER_SIZE == 0x50
    assert ctypes.sizeof(CartridgeHeaderLayout) == HEADER_SIZE


def test_checksum_coverage_spans_title_through_rom_version() -> None:
    covered = CartridgeHeaderLayout.fields_with_marker(ChecksumCoverage)
    assert covered[0] == "title"
    assert covered[-1] == "rom_version"
    first = CartridgeHeaderLayout.field_slice(covered[0]).start
    last = CartridgeHeaderLayout.field_slice(covered[-1]).stop - 1
    assert (HEADER_OFFSET + first, HEADER_OFFSET + last) == (0x134, 0x14C)


def test_every_field_is_described() -> None:
    for name, _, _ in EXPECTED_LAYOUT:
        assert CartridgeHeaderLayout.get_field_marker(name, FieldDescription) is not None


def test_from_bytes_decodes_fields() -> None:
    header = CartridgeHeader.from_bytes(_raw_header(title=b"POKEMON", cartridge_type=0x13, rom_size_code=0x05))
    assert header.entry_point == b"\x00\xc3\x50\x01"
    assert header.title == b"POKEMON" + b"\x00" * 9
    assert header.new_licensee_code == b"01"
    assert header.sgb_flag == 0x03
    assert header.cartridge_type == 0x13
    assert header.rom_size_code == 0x05
    assert header.destination_code == 0x01
    assert header.old_licensee_code == 0x33
    assert header.rom_version == 0x02
    assert header.global_checksum == b"\xbe\xef"


def test_multi_byte_fields_stay_bytes() -> None:
    header = CartridgeHeader.from_bytes(_raw_header())
    assert isinstance(header.new_licensee_code, bytes)
    assert isinstance(header.global_checksum, bytes)
    assert isinstance(header.rom_version, int)


def test_pack_reproduces_raw_bytes() -> None:
    raw = _raw_header(title=b"ZELDA")
    header = CartridgeHeader.from_bytes(raw)
    assert header.pack() == raw
    assert bytes(CartridgeHeaderLayout.from_buffer_copy(raw)) == raw


@pytest.mark.parametrize("size", [0, HEADER_SIZE - 1, HEADER_SIZE + 1])
def test_from_bytes_rejects_wrong_size(size: int) -> None:
    with pytest.raises(ValueError):
        CartridgeHeader.from_bytes(bytes(size))


def test_title_text_strips_padding() -> None:
    header = CartridgeHeader.from_bytes(_raw_header(title=b"TETRIS"))
    assert header.title_text == "TETRIS"


def test_title_text_full_width() -> None:
    header = CartridgeHeader.from_bytes(_raw_header(title=b"ABCDEFGHIJKLMNOP"))
    assert header.title_text == "ABCDEFGHIJKLMNOP"


def test_canonical_logo_detection() -> None:
    assert CartridgeHeader.from_bytes(_raw_header()).has_canonical_logo()
    assert not CartridgeHeader.from_bytes(_raw_header(logo=bytes(0x30))).has_canonical_logo()


def test_describe_lists_fields() -> None:
    text = CartridgeHeader.from_bytes(_raw_header(cartridge_type=0x1B)).describe()
    assert "Cartridge type: 0x1B" in text
    assert "Global checksum: beef" in text
    assert len(text.splitlines()) == len(EXPECTED_LAYOUT)


def test_describe_offset() -> None:
    assert describe_offset(0x134) == "title (0x134+0x10)"
    assert describe_offset(0x14F) == "global_checksum (0x14E+0x2)"
    assert describe_offset(0x150).startswith("outside header")


def test_checksum_span_comes_from_markers() -> None:
    assert CartridgeHeaderLayout.marker_span(ChecksumCoverage) == CHECKSUM_SPAN
    assert CHECKSUM_SPAN == slice(0x34, 0x4D)


def test_marker_span_requires_marked_field() -> None:
    class _Unmarked:
        pass

    with pytest.raises(KeyError):
        CartridgeHeaderLayout.marker_span(_Unmarked)


def test_title_text_keeps_control_bytes_and_replaces_high_bytes() -> None:
    header = CartridgeHeader.from_bytes(_raw_header(title=b"A\x01B\xffC"))
    assert header.title_text == "A\x01B\ufffdC"
