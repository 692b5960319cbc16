"""
Lexer for brainvm program source.

Converts raw program bytes into a list of Tokens. Exactly eight bytes are
significant:

    +  INC     increment the cell at the pointer
    -  DEC     decrement the cell at the pointer
    >  SHR     move the pointer right
    <  SHL     move the pointer left
    ,  IN      read one byte into the cell
    .  OUT     write the cell as one byte
    [  STL     start of loop
    ]  ENDL    end of loop

Every other byte is a comment and is dropped. The whole source is read
before any token is produced; loop balance is not checked here (an
unmatched bracket is a runtime error of the engine).
"""

from __future__ import annotations
import enum
import logging
from typing import BinaryIO, Dict, List, Union

from .errors import ReadError

__all__ = ['Token', 'Lexer', 'ReadError', 'parse', 'tokenize']

log = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Token types
# ──────────────────────────────────────────────

class Token(enum.Enum):
    INC = "+"
    DEC = "-"
    SHR = ">"
    SHL = "<"
    IN = ","
    OUT = "."
    STL = "["
    ENDL = "]"

    def __repr__(self):
        return f"Token.{self.name}"


# Byte value -> token, for the eight significant bytes only
SYMBOLS: Dict[int, Token] = {ord(tok.value): tok for tok in Token}


# ──────────────────────────────────────────────
# Lexer
# ──────────────────────────────────────────────

def _as_bytes(data: Union[bytes, bytearray, str]) -> bytes:
    # Non-latin-1 characters are never instructions
    if isinstance(data, str):
        return data.encode("latin-1", errors="replace")
    return bytes(data)


class Lexer:
    """Tokenizes an in-memory program source."""

    def __init__(self, source: Union[bytes, bytearray, str]):
        self.source = _as_bytes(source)
        self.tokens: List[Token] = []

    def tokenize(self) -> List[Token]:
        """Scan the entire source and return the list of tokens."""
        self.tokens = [SYMBOLS[b] for b in self.source if b in SYMBOLS]
        log.debug("lexed %d bytes into %d tokens", len(self.source), len(self.tokens))
        return self.tokens


def tokenize(source: Union[bytes, bytearray, str]) -> List[Token]:
    """Lex an in-memory source (bytes or str)."""
    return Lexer(source).tokenize()


def parse(stream: BinaryIO) -> List[Token]:
    """Read ``stream`` to completion and return its tokens in source order.

    The stream is read but never closed; the caller owns it. An ``OSError``
    or an undecodable text stream is re-raised as ReadError.
    """
    try:
        data = stream.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ReadError(f"Cannot read program source: {e}",
                        errno=getattr(e, "errno", None)) from e
    if data is None:
        # Non-blocking raw stream with nothing available
        data = b""
    return tokenize(data)
