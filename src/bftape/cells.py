from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

import numpy as np


@dataclass(frozen=True)
class CellKind:
    """
    Value type stored in the tape cells.

    Arithmetic goes through plain ints and is reduced modulo the dtype range
    before being stored back, so numpy never sees an overflowing scalar op.
    """

    name: str
    dtype: np.dtype

    @property
    def bits(self) -> int:
        return self.dtype.itemsize * 8

    @property
    def modulus(self) -> int:
        return 1 << self.bits

    @property
    def zero(self):
        return self.dtype.type(0)

    def increment(self, value):
        return self.dtype.type((int(value) + 1) % self.modulus)

    def decrement(self, value):
        return self.dtype.type((int(value) - 1) % self.modulus)

    def from_byte(self, byte: int):
        return self.dtype.type(byte & 0xFF)

    def to_byte(self, value) -> int:
        return int(value) & 0xFF

    def new_tape(self, length: int) -> np.ndarray:
        return np.zeros(length, dtype=self.dtype)


U8 = CellKind('u8', np.dtype(np.uint8))
U16 = CellKind('u16', np.dtype(np.uint16))
U32 = CellKind('u32', np.dtype(np.uint32))

_BY_BITS: Dict[int, CellKind] = {k.bits: k for k in (U8, U16, U32)}


def cell_kind_for(bits: int) -> CellKind:
    try:
        return _BY_BITS[int(bits)]
    except KeyError:
        raise ValueError(f"Unsupported cell width: {bits} (expected one of {sorted(_BY_BITS)})") from None
