"""
Translator: lexer Tokens -> engine Operations.

A 1:1, order-preserving rename. It keeps the surface syntax (Token) apart
from the instruction set the engine executes (Operation).
"""

from __future__ import annotations
import enum
from typing import Dict, Iterable, List, Tuple

from .lexer import Token

__all__ = ['Operation', 'translate', 'untranslate']


class Operation(enum.Enum):
    INC = "inc"                     # +  increment the cell at the pointer
    DEC = "dec"                     # -  decrement the cell at the pointer
    NEXT = "next"                   # >  move the pointer right
    PREV = "prev"                   # <  move the pointer left
    IN = "in"                       # ,  read one byte into the cell
    OUT = "out"                     # .  write the cell as one byte
    LOOP_FORWARD = "loop_forward"   # [  jump past matching ] if cell is 0
    LOOP_BACK = "loop_back"         # ]  jump back to matching [ if cell is not 0

    def __repr__(self):
        return f"Operation.{self.name}"


OPERATIONS: Dict[Token, Operation] = {
    Token.INC: Operation.INC,
    Token.DEC: Operation.DEC,
    Token.SHR: Operation.NEXT,
    Token.SHL: Operation.PREV,
    Token.IN: Operation.IN,
    Token.OUT: Operation.OUT,
    Token.STL: Operation.LOOP_FORWARD,
    Token.ENDL: Operation.LOOP_BACK,
}

TOKENS: Dict[Operation, Token] = {op: tok for tok, op in OPERATIONS.items()}


def translate(tokens: Iterable[Token]) -> Tuple[Operation, ...]:
    """Translate source tokens to engine operations."""
    return tuple(OPERATIONS[tok] for tok in tokens)


def untranslate(operations: Iterable[Operation]) -> List[Token]:
    """Map operations back to the tokens they were translated from."""
    return [TOKENS[op] for op in operations]
