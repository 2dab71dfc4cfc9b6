"""
Type definitions for the Game Boy cartridge loader
"""

from .c_types import (
    c_array,
    _CStructMeta,
    c_struct
)

__all__ = [
    "c_array",
    "_CStructMeta",
    "c_struct"
]
