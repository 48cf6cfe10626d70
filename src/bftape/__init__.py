from .api import RunOptions, RunResult, run_file, run_program, run_string
from .cells import U8, U16, U32, CellKind, cell_kind_for
from .errors import (
    BFTapeError,
    BracketResolutionFailure,
    InvalidHeadPosition,
    LoadError,
    ProgramReadError,
    UnmatchedBracketError,
    UnmatchedCloseBracket,
    UnmatchedOpenBracket,
    VMError,
    VMIOError,
)
from .ops import Operation
from .program import Instruction, Program, load, load_file
from .vm import DEFAULT_TAPE_LENGTH, VirtualMachine

__all__ = [
    'Operation',
    'Instruction',
    'Program',
    'load',
    'load_file',
    'CellKind',
    'U8',
    'U16',
    'U32',
    'cell_kind_for',
    'VirtualMachine',
    'DEFAULT_TAPE_LENGTH',
    'RunOptions',
    'RunResult',
    'run_program',
    'run_string',
    'run_file',
    'BFTapeError',
    'LoadError',
    'UnmatchedBracketError',
    'UnmatchedOpenBracket',
    'UnmatchedCloseBracket',
    'ProgramReadError',
    'VMError',
    'InvalidHeadPosition',
    'VMIOError',
    'BracketResolutionFailure',
]
