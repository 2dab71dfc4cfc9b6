"""
Constants for the Game Boy cartridge loader
"""

# Cartridge header placement within the image
HEADER_OFFSET = 0x100
HEADER_SIZE = 0x50
HEADER_END = HEADER_OFFSET + HEADER_SIZE  # 0x150: first byte of cartridge data

# Header checksum input, absolute image offsets, both ends inclusive
HEADER_CHECKSUM_START = 0x134
HEADER_CHECKSUM_END = 0x14C

# ROM size code policy (0x148)
ROM_SIZE_BASE = 32 * 1024
MAX_ROM_SIZE_CODE = 0x08

# Read granularity when draining a stream to EOF
DRAIN_CHUNK_SIZE = 64 * 1024

# Boot logo bitmap as stored at 0x104 by every licensed cartridge
CANONICAL_BOOT_LOGO = bytes.fromhex(
    "ceed6666cc0d000b03730083000c000d0008111f8889000e"
    "dccc6ee6ddddd999bbbb67636e0eecccdddc999fbbb9333e"
)
