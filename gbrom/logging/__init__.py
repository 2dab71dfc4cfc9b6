"""
Logging components for the Game Boy cartridge loader
"""

from .logger import LoadLogger

__all__ = [
    "LoadLogger",
]
