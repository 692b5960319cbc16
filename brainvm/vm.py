"""
brainvm execution engine.

StandardVm executes a translated program directly, one Operation at a time,
without any optimization. It owns:
  - the memory tape (memory.Tape, 30000 cells by default) and data pointer
  - the loaded program (tuple of Operation)
  - the instruction pointer (ip)
  - one input stream (for IN) and one output stream (for OUT)

Execution model:
  1. Fetch the operation at ip; ip == len(program) means normal termination
  2. Execute its handler; the handler returns the next ip
  3. Repeat

Loop matching is done by linear scan every time a loop boundary is taken:
  LOOP_FORWARD with a zero cell scans forward for the LOOP_BACK at nesting
  depth 0, LOOP_BACK with a nonzero cell scans backward for the LOOP_FORWARD
  at depth 0. In both cases execution resumes right after the match. There
  is no jump table, so every loop iteration rescans its own body.

Errors (see errors.py) abort the run immediately. After a failed run the
engine state is unspecified until the next reset()/run().

Usage:
    vm = StandardVm(VmConfig(memory_size=256, output=io.BytesIO()))
    vm.run(translate(tokenize("++[->+<]")))
    vm.memory[:2]   # b"\\x00\\x02"
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from .errors import VmError, UnmatchedLoopOpen, UnmatchedLoopClose, IoFailure
from .memory import Tape, DEFAULT_MEMORY_SIZE
from .streams import standard_input, standard_output
from .translator import Operation

__all__ = [
    'StandardVm', 'VmConfig', 'DEFAULT_MEMORY_SIZE',
    'VmError', 'UnmatchedLoopOpen', 'UnmatchedLoopClose', 'IoFailure',
]

log = logging.getLogger(__name__)


@dataclass
class VmConfig:
    """Engine configuration. Unset streams default to the process stdin/stdout.

    memory_size: number of tape cells, any positive int
    input:       byte source for IN, anything with read(n)
    output:      byte sink for OUT, anything with write(b)
    trace:       DEBUG-log every executed operation
    """
    memory_size: int = DEFAULT_MEMORY_SIZE
    input: Optional[Any] = None
    output: Optional[Any] = None
    trace: bool = False


class StandardVm:
    """Virtual machine for direct execution of the eight standard operations."""

    def __init__(self, config: Optional[VmConfig] = None):
        config = config or VmConfig()
        self.config = config
        self.tape = Tape(config.memory_size)
        self.input = config.input if config.input is not None else standard_input()
        self.output = config.output if config.output is not None else standard_output()
        self._program: Tuple[Operation, ...] = ()
        self._ip = 0
        self._trace = config.trace
        self._dispatch = self._build_dispatch()

    # ══════════════════════════════════════════════
    # State
    # ══════════════════════════════════════════════

    @property
    def instruction_pointer(self) -> int:
        return self._ip

    @property
    def data_pointer(self) -> int:
        return self.tape.pointer

    @property
    def cell(self) -> int:
        """Value of the cell under the data pointer."""
        return self.tape.read()

    @property
    def memory(self) -> bytes:
        return self.tape.snapshot()

    @property
    def program(self) -> Tuple[Operation, ...]:
        return self._program

    def reset(self):
        """Zero the tape, the data pointer and the instruction pointer."""
        self.tape.reset()
        self._ip = 0

    def load(self, program: Iterable[Operation]):
        """Load a program to be executed by the next argument-less run()."""
        self._program = tuple(program)
        self._ip = 0

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def run(self, program: Optional[Iterable[Operation]] = None):
        """Reset the machine and execute ``program`` (default: the loaded one).

        Blocks until the program ends. Raises UnmatchedLoopOpen,
        UnmatchedLoopClose or IoFailure.
        """
        if program is not None:
            self._program = tuple(program)
        self.reset()
        log.debug("run: %d operations, %d cells", len(self._program), len(self.tape))

        steps = 0
        try:
            while self.step():
                steps += 1
            self._flush()
        except VmError as e:
            log.warning("run aborted after %d steps: %s", steps, e)
            raise
        log.debug("run finished after %d steps", steps)

    def step(self) -> bool:
        """Execute one operation. Returns False if the program has ended."""
        op = self._fetch()
        if op is None:
            return False
        if self._trace:
            log.debug("ip=%05d %-12s mp=%05d cell=%3d  %s",
                      self._ip, op.name, self.tape.pointer, self.tape.read(),
                      self.tape.dump(self.tape.pointer & ~0x7, 8))
        self._ip = self._dispatch[op]()
        return True

    def _fetch(self) -> Optional[Operation]:
        if self._ip >= len(self._program):
            return None
        return self._program[self._ip]

    def _flush(self):
        flush = getattr(self.output, "flush", None)
        if flush is None:
            return
        try:
            flush()
        except (OSError, ValueError) as e:
            raise IoFailure(type(e).__name__, self._ip, errno=getattr(e, "errno", None),
                            detail=str(e)) from e

    # ══════════════════════════════════════════════
    # Operation handlers
    # ══════════════════════════════════════════════
    # Handler signature: handler() -> next ip

    def _build_dispatch(self) -> Dict[Operation, Callable[[], int]]:
        return {
            Operation.INC:          self._op_inc,
            Operation.DEC:          self._op_dec,
            Operation.NEXT:         self._op_next,
            Operation.PREV:         self._op_prev,
            Operation.IN:           self._op_in,
            Operation.OUT:          self._op_out,
            Operation.LOOP_FORWARD: self._op_loop_forward,
            Operation.LOOP_BACK:    self._op_loop_back,
        }

    def _op_inc(self) -> int:
        self.tape.increment()
        return self._ip + 1

    def _op_dec(self) -> int:
        self.tape.decrement()
        return self._ip + 1

    def _op_next(self) -> int:
        self.tape.move_next()
        return self._ip + 1

    def _op_prev(self) -> int:
        self.tape.move_prev()
        return self._ip + 1

    def _op_in(self) -> int:
        try:
            data = self.input.read(1)
        except (OSError, ValueError) as e:
            raise IoFailure(type(e).__name__, self._ip, errno=getattr(e, "errno", None),
                            detail=str(e)) from e
        if not data:
            raise IoFailure("UnexpectedEof", self._ip, detail="input stream exhausted")
        value = data[0]
        if isinstance(value, str):
            value = ord(value)
        self.tape.write(value)
        return self._ip + 1

    def _op_out(self) -> int:
        try:
            written = self.output.write(bytes((self.tape.read(),)))
        except (OSError, ValueError) as e:
            raise IoFailure(type(e).__name__, self._ip, errno=getattr(e, "errno", None),
                            detail=str(e)) from e
        # None: buffered writer, byte accepted
        if written == 0:
            raise IoFailure("WriteZero", self._ip, detail="output stream accepted no data")
        return self._ip + 1

    def _op_loop_forward(self) -> int:
        if self.tape.read() != 0:
            return self._ip + 1
        nested = 0
        for addr in range(self._ip + 1, len(self._program)):
            op = self._program[addr]
            if op is Operation.LOOP_FORWARD:
                nested += 1
            elif op is Operation.LOOP_BACK:
                if nested == 0:
                    return addr + 1
                nested -= 1
        raise UnmatchedLoopOpen(self._ip)

    def _op_loop_back(self) -> int:
        if self.tape.read() == 0:
            return self._ip + 1
        nested = 0
        for addr in range(self._ip - 1, -1, -1):
            op = self._program[addr]
            if op is Operation.LOOP_BACK:
                nested += 1
            elif op is Operation.LOOP_FORWARD:
                if nested == 0:
                    return addr + 1
                nested -= 1
        raise UnmatchedLoopClose(self._ip)
