"""
Runtime byte streams for the engine.

The engine needs one byte source (for ``,``) and one byte sink (for ``.``).
Any object with ``read(n)`` / ``write(b)`` works, e.g. ``io.BytesIO``.

SharedStream wraps a stream so several owners (engines, the caller) can hold
the same handle; each read/write/flush holds the handle's lock for the
duration of the call. The standard-stream factories build such a handle
over the process stdin/stdout once, and return that same handle afterwards.
"""

from __future__ import annotations
import sys
import threading
from typing import BinaryIO, Optional

__all__ = ['SharedStream', 'standard_input', 'standard_output']


class SharedStream:
    """Lock-guarded handle over a binary stream."""

    def __init__(self, raw: BinaryIO, name: str = ""):
        self.raw = raw
        self.name = name or getattr(raw, "name", type(raw).__name__)
        self._lock = threading.Lock()

    def read(self, size: int = -1) -> bytes:
        with self._lock:
            return self.raw.read(size)

    def write(self, data: bytes) -> Optional[int]:
        with self._lock:
            return self.raw.write(data)

    def flush(self):
        flush = getattr(self.raw, "flush", None)
        if flush is None:
            return
        with self._lock:
            flush()

    def __repr__(self):
        return f"SharedStream({self.name!r})"


_stdin: Optional[SharedStream] = None
_stdout: Optional[SharedStream] = None
_factory_lock = threading.Lock()


def _binary(stream):
    # sys.stdin/stdout are text wrappers; the engine works in bytes
    return getattr(stream, "buffer", stream)


def standard_input() -> SharedStream:
    """Shared handle over the process standard input."""
    global _stdin
    with _factory_lock:
        if _stdin is None:
            _stdin = SharedStream(_binary(sys.stdin), "<stdin>")
        return _stdin


def standard_output() -> SharedStream:
    """Shared handle over the process standard output."""
    global _stdout
    with _factory_lock:
        if _stdout is None:
            _stdout = SharedStream(_binary(sys.stdout), "<stdout>")
        return _stdout
