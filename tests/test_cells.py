#!/usr/bin/env python3
"""
Cell kind arithmetic tests.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np
import pytest

from bftape import U8, U16, U32, cell_kind_for


def test_increment():
    assert U8.increment(np.uint8(0)) == 1


def test_increment_wrapping():
    assert U8.increment(np.uint8(255)) == 0


def test_decrement():
    assert U8.decrement(np.uint8(255)) == 254


def test_decrement_wrapping():
    assert U8.decrement(np.uint8(0)) == 255


def test_wider_cells_wrap_at_their_own_width():
    assert U16.increment(np.uint16(255)) == 256
    assert U16.increment(np.uint16(65535)) == 0
    assert U16.decrement(np.uint16(0)) == 65535
    assert U32.decrement(np.uint32(0)) == 2 ** 32 - 1


def test_byte_conversion():
    assert U8.from_byte(200) == 200
    assert U16.to_byte(np.uint16(0x1234)) == 0x34
    assert U32.to_byte(np.uint32(7)) == 7


def test_zero_and_tape():
    tape = U16.new_tape(4)
    assert tape.dtype == np.uint16
    assert list(tape) == [0, 0, 0, 0]
    assert U16.zero == 0
    assert U16.zero.dtype == np.uint16


def test_cell_kind_for():
    assert cell_kind_for(8) is U8
    assert cell_kind_for(16) is U16
    assert cell_kind_for(32) is U32
    with pytest.raises(ValueError):
        cell_kind_for(12)
