from __future__ import annotations

import io

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .cells import cell_kind_for
from .program import Program, load, load_file
from .vm import DEFAULT_TAPE_LENGTH, VirtualMachine


@dataclass(frozen=True)
class RunOptions:
    tape_length: int = DEFAULT_TAPE_LENGTH
    growable: bool = False
    cell_bits: int = 8


@dataclass(frozen=True)
class RunResult:
    output: bytes
    tape_head: int
    tape_length: int
    program_position: int


def run_program(program: Program, input_data: bytes = b"", *, options: Optional[RunOptions] = None) -> RunResult:
    opts = RunOptions() if options is None else options
    vm = VirtualMachine(program, opts.tape_length, opts.growable, cell_kind_for(opts.cell_bits))
    out = io.BytesIO()
    vm.run(io.BytesIO(input_data), out)
    return RunResult(
        output=out.getvalue(),
        tape_head=vm.tape_head,
        tape_length=len(vm.tape),
        program_position=vm.program_position,
    )


def run_string(source: str, input_data: bytes = b"", *, name: str = "<string>", options: Optional[RunOptions] = None) -> RunResult:
    return run_program(load(source, name), input_data, options=options)


def run_file(path: str | Path, input_data: bytes = b"", *, options: Optional[RunOptions] = None, encoding: str = "utf-8") -> RunResult:
    return run_program(load_file(path, encoding=encoding), input_data, options=options)
