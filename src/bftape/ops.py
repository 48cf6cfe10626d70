from __future__ import annotations

from enum import Enum
from typing import Dict, Optional


class Operation(Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    LOOP_START = '['
    LOOP_END = ']'

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def from_char(cls, ch: str) -> Optional['Operation']:
        return _CHAR_TABLE.get(ch)

    def __str__(self) -> str:
        return f"{self.value} : {self.description}"


_CHAR_TABLE: Dict[str, Operation] = {op.value: op for op in Operation}

_DESCRIPTIONS: Dict[Operation, str] = {
    Operation.MOVE_RIGHT: 'moves the data pointer to the right by one cell.',
    Operation.MOVE_LEFT: 'moves the data pointer to the left by one cell.',
    Operation.INCREMENT: 'increases the value stored at the current cell by 1.',
    Operation.DECREMENT: 'decreases the value stored at the current cell by 1.',
    Operation.OUTPUT: 'Outputs the byte at the current data pointer.',
    Operation.INPUT: 'Accepts a byte of input, and stores the value at the current data pointer.',
    Operation.LOOP_START: 'Starts a loop.',
    Operation.LOOP_END: 'Ends a loop.',
}