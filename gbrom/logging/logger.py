"""
Simple message router for cartridge loading.

Message routing:
- console(): stdout only (load steps, sizes, warnings)
- detail(): <cartridge stem>.load.log only (decoded header dump)
"""

from pathlib import Path
from typing import Optional, TextIO, Union


class LoadLogger:
    """Dumb message router: console < load.log"""

    def __init__(self, cartridge_path: Union[str, Path], verbose: bool = True,
                 log_dir: Union[str, Path] = "."):
        """Initialize logger with a detail log named after the cartridge.

        Args:
            cartridge_path: Path or name of the cartridge (used to derive the log filename)
            verbose: If False, suppress console output except warnings
            log_dir: Directory receiving the detail log
        """
        self.verbose = verbose

        basename = Path(cartridge_path).stem
        self.detail_path = Path(log_dir) / f"{basename}.load.log"

        self._detail_file: Optional[TextIO] = None
        self._is_open = False

    def open(self) -> None:
        """Open the detail log for writing."""
        if self._is_open:
            return
        self._detail_file = open(self.detail_path, 'w', buffering=1)
        self._is_open = True

    def console(self, msg: str) -> None:
        """Write to console only (respects verbose setting)."""
        if self.verbose:
            print(msg)

    def console_always(self, msg: str) -> None:
        """Write to console always (ignores verbose setting)."""
        print(msg)

    def detail(self, msg: str) -> None:
        """Write to the detail log."""
        if self._detail_file:
            self._detail_file.write(msg + "\n")

    def close(self) -> None:
        """Close the detail log."""
        if self._detail_file:
            self._detail_file.close()
            self._detail_file = None
        self._is_open = False

    def __enter__(self):
        """Context manager entry."""
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
