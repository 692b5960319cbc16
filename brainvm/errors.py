"""
Exception hierarchy for brainvm.

    BrainVmError
     ├── ReadError               program source could not be read
     └── VmError                 raised by the execution engine
          ├── UnmatchedLoopOpen  "[" without a matching "]"
          ├── UnmatchedLoopClose "]" without a matching "["
          └── IoFailure          single-byte read/write on a runtime stream failed

Running off either end of the program while scanning for a matching bracket
is reported as the corresponding unmatched-loop error. There is no separate
"instruction pointer out of program" error.
"""

from __future__ import annotations
from typing import Optional

__all__ = [
    'BrainVmError', 'ReadError', 'VmError',
    'UnmatchedLoopOpen', 'UnmatchedLoopClose', 'IoFailure',
]


class BrainVmError(Exception):
    """Base class for every error raised by brainvm."""


class ReadError(BrainVmError):
    """The program source stream failed while being read."""
    def __init__(self, message: str, errno: Optional[int] = None):
        self.errno = errno
        super().__init__(message)


class VmError(BrainVmError):
    """Raised by StandardVm.run(); the run is aborted immediately."""


class UnmatchedLoopOpen(VmError):
    def __init__(self, ip: int):
        self.ip = ip
        super().__init__(f"Unmatched '[' at operation {ip}")


class UnmatchedLoopClose(VmError):
    def __init__(self, ip: int):
        self.ip = ip
        super().__init__(f"Unmatched ']' at operation {ip}")


class IoFailure(VmError):
    """A runtime read (``,``) or write (``.``) failed.

    ``kind`` classifies the failure: ``"UnexpectedEof"`` for an input stream
    that returned no byte, ``"WriteZero"`` for an output stream that accepted
    no byte, otherwise the class name of the underlying error
    (``"BrokenPipeError"``, ``"PermissionError"``, ``"ValueError"`` for a
    closed stream...). ``errno`` is copied from
    the underlying error when it has one.
    """
    def __init__(self, kind: str, ip: int, errno: Optional[int] = None,
                 detail: str = ""):
        self.kind = kind
        self.ip = ip
        self.errno = errno
        msg = f"I/O failure at operation {ip}: {kind}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)
