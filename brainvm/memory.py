"""
Memory tape: a fixed-size cyclic array of 8-bit cells plus the data pointer.

Cells are stored in a flat bytearray; every write is masked to 8 bits so
increment/decrement wrap modulo 256. The pointer wraps at both ends of the
tape (last cell <-> cell 0).
"""

from typing import Optional

DEFAULT_MEMORY_SIZE = 30000
CELL_MASK = 0xFF


class Tape:
    """Byte-addressable cyclic tape with a single movable pointer."""

    def __init__(self, size: int = DEFAULT_MEMORY_SIZE):
        if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
            raise ValueError(f"Memory size must be a positive integer, got {size!r}")
        self._mem = bytearray(size)
        self.pointer = 0

    def __len__(self) -> int:
        return len(self._mem)

    # --- Cell access ---

    def read(self, addr: Optional[int] = None) -> int:
        """Read the cell at ``addr`` (default: the pointer)."""
        if addr is None:
            addr = self.pointer
        return self._mem[addr]

    def write(self, value: int, addr: Optional[int] = None):
        """Write ``value`` masked to 8 bits at ``addr`` (default: the pointer)."""
        if addr is None:
            addr = self.pointer
        self._mem[addr] = value & CELL_MASK

    def increment(self):
        self.write(self.read() + 1)

    def decrement(self):
        self.write(self.read() - 1)

    # --- Pointer movement ---

    def move_next(self):
        self.pointer += 1
        if self.pointer == len(self._mem):
            self.pointer = 0

    def move_prev(self):
        if self.pointer == 0:
            self.pointer = len(self._mem) - 1
        else:
            self.pointer -= 1

    # --- Bulk ---

    def reset(self):
        """Zero every cell and return the pointer to cell 0."""
        self._mem[:] = bytes(len(self._mem))
        self.pointer = 0

    def snapshot(self, start: int = 0, length: Optional[int] = None) -> bytes:
        """Copy of ``length`` cells starting at ``start`` (default: whole tape)."""
        end = len(self._mem) if length is None else start + length
        return bytes(self._mem[start:end])

    def dump(self, start: int = 0, length: int = 16) -> str:
        """Hex view of a tape window, pointer cell bracketed. Used by trace logs."""
        cells = []
        for addr in range(start, min(start + length, len(self._mem))):
            text = f"{self._mem[addr]:02X}"
            cells.append(f"[{text}]" if addr == self.pointer else f" {text} ")
        return "".join(cells)
