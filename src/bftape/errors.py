from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .ops import Operation


def _build_context(lines: List[str], line_no_1: int, column: int = 0, *, context: int = 2) -> str:
    if not lines:
        return ''
    idx = min(max(1, line_no_1), len(lines))
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx and column > 0:
            out.append(f"       | {' ' * (column - 1)}^")
    return "\n".join(out)


def _hint_for(message: str, *, kind: str) -> Optional[str]:
    msg = message.lower()
    if kind == 'load':
        if "unmatched '['" in msg:
            return "Every '[' needs a matching ']' later in the program."
        if "unmatched ']'" in msg:
            return "Remove the stray ']' or add the '[' that should open this loop."
        return None
    if kind == 'runtime':
        if 'left of cell 0' in msg:
            return 'The tape has no cells below index 0; check the balance of < and > in the loop body.'
        if 'past the end of the tape' in msg:
            return 'Use a longer tape (--cells) or let it grow on demand (--extensible).'
        return None
    return None


@dataclass(eq=False)
class BFTapeError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


class LoadError(BFTapeError):
    """Raised when a program cannot be turned into a valid Program."""


@dataclass(eq=False)
class UnmatchedBracketError(LoadError):
    line: int
    column: int
    bracket: str
    context: str


class UnmatchedOpenBracket(UnmatchedBracketError):
    pass


class UnmatchedCloseBracket(UnmatchedBracketError):
    pass


@dataclass(eq=False)
class ProgramReadError(LoadError):
    path: str


class VMError(BFTapeError):
    """Raised by the virtual machine while a program is running."""


@dataclass(eq=False)
class InvalidHeadPosition(VMError):
    line: int
    column: int
    operation: Optional[Operation]
    name: str
    position: int
    tape_length: int
    context: str = ''


@dataclass(eq=False)
class VMIOError(VMError):
    cause: BaseException


@dataclass(eq=False)
class BracketResolutionFailure(VMError):
    position: int


def make_unmatched_bracket_error(*, bracket: str, name: str, source: str, line: int, column: int) -> UnmatchedBracketError:
    lines = source.split('\n')
    ctx = _build_context(lines, line, column)
    message = f"unmatched '{bracket}' in {name} at line {line}, column {column}"
    hint = _hint_for(message, kind='load')
    hint_block = f"\nHint: {hint}" if hint else ""
    cls = UnmatchedOpenBracket if bracket == '[' else UnmatchedCloseBracket
    return cls(
        message=f"LoadError: {message}\n{ctx}{hint_block}",
        line=line,
        column=column,
        bracket=bracket,
        context=ctx,
    )


def make_read_error(*, path: str, cause: BaseException) -> ProgramReadError:
    return ProgramReadError(
        message=f"LoadError: could not read program {path}: {cause}",
        path=path,
    )


def make_head_error(
    *,
    name: str,
    source: str,
    line: int,
    column: int,
    operation: Optional[Operation],
    position: int,
    tape_length: int,
    below_zero: bool = False,
) -> InvalidHeadPosition:
    if below_zero:
        what = 'the head cannot move left of cell 0'
    else:
        what = f"the head is past the end of the tape at position {position}"
    by = f" by the command: {operation}" if operation is not None else ""
    message = (
        f"In {name}: line {line}, column {column} {what}{by}. "
        f"The head should stay within 0 and {tape_length - 1}."
    )
    ctx = _build_context(source.split('\n'), line, column) if source and line > 0 else ''
    hint = _hint_for(message, kind='runtime')
    ctx_block = f"\n{ctx}" if ctx else ""
    hint_block = f"\nHint: {hint}" if hint else ""
    return InvalidHeadPosition(
        message=f"RuntimeError: {message}{ctx_block}{hint_block}",
        line=line,
        column=column,
        operation=operation,
        name=name,
        position=position,
        tape_length=tape_length,
        context=ctx,
    )


def make_io_error(*, name: str, line: int, column: int, operation: Optional[Operation], cause: BaseException) -> VMIOError:
    where = f" ({operation.symbol})" if operation is not None else ""
    return VMIOError(
        message=f"IOError: in {name}: line {line}, column {column}{where}: {cause}",
        cause=cause,
    )


def make_bracket_resolution_error(*, name: str, position: int) -> BracketResolutionFailure:
    return BracketResolutionFailure(
        message=f"RuntimeError: in {name}: no matching bracket recorded for instruction {position}",
        position=position,
    )
