"""Small delays between filesystem operations.

FAT media on USB readers and anti-virus scanners hooking file creation can
lag behind the calls that return to us. A short pause before each kind of
operation gives them time to settle. The delays are mitigations only; the
reorganizer is correct with all of them set to zero.
"""

import time
from typing import Callable

from ..models.config import ThrottleConfig


class OperationThrottle:
    """Sleep a configured number of milliseconds before each operation."""

    def __init__(self, create_ms: int = 20, delete_ms: int = 50, move_ms: int = 10,
                 rename_ms: int = 200, sleep: Callable[[float], None] = time.sleep):
        self.create_ms = create_ms
        self.delete_ms = delete_ms
        self.move_ms = move_ms
        self.rename_ms = rename_ms
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: ThrottleConfig, **kwargs) -> "OperationThrottle":
        return cls(
            create_ms=config.create_ms,
            delete_ms=config.delete_ms,
            move_ms=config.move_ms,
            rename_ms=config.rename_ms,
            **kwargs
        )

    @classmethod
    def disabled(cls) -> "OperationThrottle":
        """A throttle that never waits."""
        return cls(create_ms=0, delete_ms=0, move_ms=0, rename_ms=0)

    def before_create(self) -> None:
        self._wait(self.create_ms)

    def before_delete(self) -> None:
        self._wait(self.delete_ms)

    def before_move(self) -> None:
        self._wait(self.move_ms)

    def before_rename(self) -> None:
        self._wait(self.rename_ms)

    def _wait(self, delay_ms: int) -> None:
        if delay_ms > 0:
            self._sleep(delay_ms / 1000.0)
