from __future__ import annotations

import logging

from typing import BinaryIO, Optional

import numpy as np

from .cells import U8, CellKind
from .errors import make_bracket_resolution_error, make_head_error, make_io_error
from .ops import Operation
from .program import Instruction, Program

logger = logging.getLogger(__name__)

DEFAULT_TAPE_LENGTH = 30000


class VirtualMachine:
    """
    Tape machine executing a loaded Program.

    The Program is shared and never modified. The tape and both cursors belong
    to this instance and are only changed by the operation handlers below;
    each handler returns the next program position.

    After an error the machine stays where it failed and should be discarded.
    """

    def __init__(self, program: Program, tape_length: int = 0, growable: bool = False, cell_kind: CellKind = U8):
        if tape_length < 0:
            raise ValueError(f"tape_length must not be negative, got {tape_length}")
        if tape_length == 0:
            tape_length = DEFAULT_TAPE_LENGTH
        self.program = program
        self.cell_kind = cell_kind
        self.growable = growable
        self._initial_length = tape_length
        self._buf = cell_kind.new_tape(tape_length)
        self._tape = self._buf[:tape_length]
        self.tape_head = 0
        self.program_position = 0
        logger.debug(
            "VM for %s: %d %s cells, growable=%s", program.name, tape_length, cell_kind.name, growable
        )

    # ===== State =====

    @property
    def tape(self) -> np.ndarray:
        view = self._tape.view()
        view.flags.writeable = False
        return view

    @property
    def current_cell(self):
        return self._tape[self.tape_head]

    @property
    def finished(self) -> bool:
        return self.program_position >= len(self.program)

    def reset(self) -> None:
        self._buf = self.cell_kind.new_tape(self._initial_length)
        self._tape = self._buf[:self._initial_length]
        self.tape_head = 0
        self.program_position = 0

    # ===== Main loop =====

    def run(self, input_stream: BinaryIO, output_stream: BinaryIO) -> None:
        instructions = self.program.instructions
        end = len(instructions)
        while self.program_position < end:
            op = instructions[self.program_position].operation
            if op is Operation.INCREMENT:
                self.program_position = self.increment_cell_at_head()
            elif op is Operation.DECREMENT:
                self.program_position = self.decrement_cell_at_head()
            elif op is Operation.MOVE_RIGHT:
                self.program_position = self.move_right()
            elif op is Operation.MOVE_LEFT:
                self.program_position = self.move_left()
            elif op is Operation.OUTPUT:
                self.program_position = self.write_out_of_cell(output_stream)
            elif op is Operation.INPUT:
                self.program_position = self.read_into_cell(input_stream)
            elif op is Operation.LOOP_START:
                self.program_position = self.start_loop()
            elif op is Operation.LOOP_END:
                self.program_position = self.end_loop()
        logger.debug("Finished %s: head=%d, tape length=%d", self.program.name, self.tape_head, len(self._tape))

    # ===== Tape head =====

    def _current_instruction(self) -> Optional[Instruction]:
        if 0 <= self.program_position < len(self.program):
            return self.program[self.program_position]
        return None

    def _head_error(self, *, below_zero: bool = False):
        ins = self._current_instruction()
        return make_head_error(
            name=self.program.name,
            source=self.program.source,
            line=ins.line if ins else 0,
            column=ins.column if ins else 0,
            operation=ins.operation if ins else None,
            position=self.tape_head,
            tape_length=len(self._tape),
            below_zero=below_zero,
        )

    def check_head_location(self) -> int:
        if self.tape_head >= len(self._tape):
            if not self.growable:
                raise self._head_error()
            self._grow()
            logger.debug("Tape grown to %d cells", len(self._tape))
        return self.program_position

    def _grow(self) -> None:
        length = len(self._tape)
        if length == len(self._buf):
            # cells past the visible length are always zero
            buf = self.cell_kind.new_tape(max(2 * length, 1))
            buf[:length] = self._tape
            self._buf = buf
        self._tape = self._buf[:length + 1]

    def move_right(self) -> int:
        self.check_head_location()
        self.tape_head += 1
        self.check_head_location()
        return self.program_position + 1

    def move_left(self) -> int:
        self.check_head_location()
        if self.tape_head == 0:
            raise self._head_error(below_zero=True)
        self.tape_head -= 1
        self.check_head_location()
        return self.program_position + 1

    # ===== Cells =====

    def increment_cell_at_head(self) -> int:
        self._tape[self.tape_head] = self.cell_kind.increment(self._tape[self.tape_head])
        return self.program_position + 1

    def decrement_cell_at_head(self) -> int:
        self._tape[self.tape_head] = self.cell_kind.decrement(self._tape[self.tape_head])
        return self.program_position + 1

    def set_cell(self, index: int, value: int) -> None:
        """Store ``value`` (reduced to the cell width) at ``index``; for preparing tapes."""
        self._tape[index] = self.cell_kind.dtype.type(int(value) % self.cell_kind.modulus)

    # ===== I/O =====

    def _io_error(self, cause: BaseException):
        ins = self._current_instruction()
        return make_io_error(
            name=self.program.name,
            line=ins.line if ins else 0,
            column=ins.column if ins else 0,
            operation=ins.operation if ins else None,
            cause=cause,
        )

    def read_into_cell(self, reader: BinaryIO) -> int:
        try:
            data = reader.read(1)
        except OSError as e:
            raise self._io_error(e) from e
        if not data:
            cause = EOFError('failed to fill whole buffer: no more input')
            raise self._io_error(cause) from cause
        self._tape[self.tape_head] = self.cell_kind.from_byte(data[0])
        return self.program_position + 1

    def write_out_of_cell(self, writer: BinaryIO) -> int:
        byte = self.cell_kind.to_byte(self._tape[self.tape_head])
        try:
            written = writer.write(bytes((byte,)))
        except OSError as e:
            raise self._io_error(e) from e
        if written is not None and written != 1:
            cause = OSError(f"short write: {written} of 1 byte written")
            raise self._io_error(cause) from cause
        return self.program_position + 1

    # ===== Loops =====

    def start_loop(self) -> int:
        close = self.program.bracket_map.get(self.program_position)
        if close is None:
            raise make_bracket_resolution_error(name=self.program.name, position=self.program_position)
        return close

    def end_loop(self) -> int:
        if self._tape[self.tape_head] == 0:
            return self.program_position + 1
        open_ = self.program.reverse_bracket_map.get(self.program_position)
        if open_ is None:
            raise make_bracket_resolution_error(name=self.program.name, position=self.program_position)
        return open_ + 1
