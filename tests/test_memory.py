"""
Memory tape tests: cell wraparound, pointer wraparound, reset.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from brainvm.memory import Tape, DEFAULT_MEMORY_SIZE


class TestTape:
    def test_default_size_zeroed(self):
        tape = Tape()
        assert len(tape) == DEFAULT_MEMORY_SIZE == 30000
        assert tape.snapshot() == bytes(30000)
        assert tape.pointer == 0

    def test_write_masks_to_byte(self):
        tape = Tape(4)
        tape.write(0x18D)
        assert tape.read() == 0x8D

    def test_increment_wraps(self):
        tape = Tape(1)
        tape.write(255)
        tape.increment()
        assert tape.read() == 0

    def test_decrement_wraps(self):
        tape = Tape(1)
        tape.decrement()
        assert tape.read() == 255

    def test_pointer_wraps_both_ways(self):
        tape = Tape(3)
        tape.move_prev()
        assert tape.pointer == 2
        tape.move_next()
        assert tape.pointer == 0

    def test_single_cell_tape(self):
        tape = Tape(1)
        tape.move_next()
        assert tape.pointer == 0
        tape.move_prev()
        assert tape.pointer == 0

    def test_reset(self):
        tape = Tape(8)
        tape.move_next()
        tape.write(7)
        tape.reset()
        assert tape.pointer == 0
        assert tape.snapshot() == bytes(8)

    def test_dump_marks_pointer(self):
        tape = Tape(4)
        tape.move_next()
        tape.write(0xAB)
        assert tape.dump(0, 3) == " 00 [AB] 00 "

    @pytest.mark.parametrize("size", [0, -1, 2.5, True])
    def test_invalid_size(self, size):
        with pytest.raises(ValueError):
            Tape(size)
