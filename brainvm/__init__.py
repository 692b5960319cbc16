"""
brainvm — a minimal virtual machine for the 8-instruction tape language
========================================================================
Runs programs made of ``+ - > < , . [ ]`` directly against a cyclic tape
of 8-bit cells, reading and writing caller-supplied byte streams.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌────────────┐    ┌──────────────┐
    │  Source  │───>│  Lexer   │───>│ Translator │───>│  StandardVm  │
    │ (bytes)  │    │ (tokens) │    │ (ops)      │    │ (tape + I/O) │
    └──────────┘    └──────────┘    └────────────┘    └──────────────┘

    - lexer.py:      byte -> Token, every other byte is a comment
    - translator.py: Token -> Operation, 1:1
    - vm.py:         fetch/execute loop, loop matching by linear scan
    - memory.py:     cyclic byte tape + data pointer
    - streams.py:    shared stdin/stdout handles
    - errors.py:     ReadError, UnmatchedLoopOpen/Close, IoFailure
"""

__version__ = "0.2.0"

from .errors import (
    BrainVmError, ReadError, VmError,
    UnmatchedLoopOpen, UnmatchedLoopClose, IoFailure,
)
from .lexer import Lexer, Token, parse, tokenize
from .translator import Operation, translate, untranslate
from .memory import Tape, DEFAULT_MEMORY_SIZE
from .streams import SharedStream, standard_input, standard_output
from .vm import StandardVm, VmConfig


def run_source(source, *, memory_size: int = DEFAULT_MEMORY_SIZE,
               input=None, output=None) -> StandardVm:
    """Lex, translate and run ``source`` on a fresh StandardVm.

    Full pipeline: tokenize -> translate -> StandardVm.run.

    Args:
        source: Program text (str or bytes).
        memory_size: Number of tape cells (default 30000).
        input: Byte source for ``,`` (default: process stdin).
        output: Byte sink for ``.`` (default: process stdout).

    Returns:
        The engine after the run, for inspecting its tape.
    """
    program = translate(tokenize(source))
    vm = StandardVm(VmConfig(memory_size=memory_size, input=input, output=output))
    vm.run(program)
    return vm
