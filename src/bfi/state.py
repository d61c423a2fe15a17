from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from .errors import TapeBoundsError

DEFAULT_TAPE_LENGTH = 30000


def check_tape_config(tape_length: int, start_pointer: int) -> None:
    if tape_length < 1:
        raise ValueError(f"tape length must be at least 1 (got {tape_length})")
    if not 0 <= start_pointer < tape_length:
        raise ValueError(f"start pointer {start_pointer} is outside the tape [0, {tape_length})")


@dataclass
class MachineState:
    tape_length: int = DEFAULT_TAPE_LENGTH
    start_pointer: int = 0
    memory: np.ndarray = field(init=False, repr=False)
    pointer: int = field(init=False)
    steps: int = field(init=False)

    def __post_init__(self) -> None:
        check_tape_config(self.tape_length, self.start_pointer)
        self.reset()

    def reset(self) -> None:
        self.memory = np.zeros(self.tape_length, dtype=np.uint8)
        self.pointer = self.start_pointer
        self.steps = 0

    @property
    def current(self) -> int:
        return int(self.memory[self.pointer])

    @current.setter
    def current(self, value: int) -> None:
        self.memory[self.pointer] = value & 0xFF

    def move(self, delta: int) -> None:
        target = self.pointer + delta
        if not 0 <= target < self.tape_length:
            raise TapeBoundsError(
                message=(
                    f"RuntimeError: pointer moved to {target}, outside the tape "
                    f"[0, {self.tape_length}) (step {self.steps})"
                ),
                pointer=self.pointer,
                step=self.steps,
                tape_length=self.tape_length,
            )
        self.pointer = target

    def window(self, radius: int = 8) -> Tuple[int, np.ndarray]:
        """Return ``(first_address, cells)`` for the cells around the pointer."""
        lo = max(0, self.pointer - radius)
        hi = min(self.tape_length, self.pointer + radius)
        return lo, self.memory[lo:hi]
