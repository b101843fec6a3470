from __future__ import annotations

from typing import List

import numpy as np

from .errors import TapeAllocationError

DEFAULT_TAPE_SIZE = 65535


class Tape:
    """Zeroed byte cells plus a pointer that wraps modulo the tape size."""

    def __init__(self, size: int = DEFAULT_TAPE_SIZE):
        if size < 1:
            raise ValueError(f"Tape size must be at least 1, got {size}")
        try:
            self.memory = np.zeros(size, dtype=np.uint8)
        except MemoryError as exc:
            raise TapeAllocationError(size=size) from exc
        self.size = size
        self.pointer = 0

    def __len__(self) -> int:
        return self.size

    def forward(self) -> None:
        self.pointer = (self.pointer + 1) % self.size

    def backward(self) -> None:
        self.pointer = (self.pointer - 1) % self.size

    def increment(self) -> None:
        # int() first so numpy never sees an out-of-range uint8
        self.memory[self.pointer] = (int(self.memory[self.pointer]) + 1) & 0xFF

    def decrement(self) -> None:
        self.memory[self.pointer] = (int(self.memory[self.pointer]) - 1) & 0xFF

    def get(self) -> int:
        return int(self.memory[self.pointer])

    def set(self, value: int) -> None:
        self.memory[self.pointer] = value & 0xFF

    def snapshot(self, start: int = 0, count: int = 16) -> List[int]:
        return [int(b) for b in self.memory[start:start + count]]
