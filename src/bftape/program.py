from __future__ import annotations

import bisect
import logging

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Tuple, Union

from .errors import make_read_error, make_unmatched_bracket_error
from .ops import Operation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Instruction:
    operation: Operation
    line: int
    column: int


class _LineColLookup:
    """Maps absolute character offsets to 1-based (line, column) pairs."""

    def __init__(self, text: str):
        self._newlines = [i for i, ch in enumerate(text) if ch == '\n']

    def get(self, offset: int) -> Tuple[int, int]:
        line_idx = bisect.bisect_left(self._newlines, offset)
        line_start = self._newlines[line_idx - 1] + 1 if line_idx > 0 else 0
        return line_idx + 1, offset - line_start + 1


@dataclass(frozen=True)
class Program:
    """
    A validated program: positioned instructions plus the loop pairs.

    ``bracket_map`` maps every loop-open index to its loop-close index and
    ``reverse_bracket_map`` holds the same pairs the other way round.
    """

    instructions: Tuple[Instruction, ...]
    name: str
    bracket_map: Mapping[int, int] = field(hash=False)
    reverse_bracket_map: Mapping[int, int] = field(repr=False, hash=False)
    source: str = field(default='', repr=False, compare=False)

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]


def tokenize(source: str) -> List[Instruction]:
    lookup = _LineColLookup(source)
    out: List[Instruction] = []
    for offset, ch in enumerate(source):
        op = Operation.from_char(ch)
        if op is None:
            continue
        line, column = lookup.get(offset)
        out.append(Instruction(op, line, column))
    return out


def match_brackets(instructions: List[Instruction], *, name: str = '<string>', source: str = '') -> Dict[int, int]:
    stack: List[int] = []
    pairs: Dict[int, int] = {}

    for pos, ins in enumerate(instructions):
        if ins.operation is Operation.LOOP_START:
            stack.append(pos)
        elif ins.operation is Operation.LOOP_END:
            if not stack:
                raise make_unmatched_bracket_error(
                    bracket=']', name=name, source=source, line=ins.line, column=ins.column
                )
            pairs[stack.pop()] = pos

    if stack:
        unmatched = instructions[stack[-1]]
        raise make_unmatched_bracket_error(
            bracket='[', name=name, source=source, line=unmatched.line, column=unmatched.column
        )
    return pairs


def load(source: str, name: str = '<string>') -> Program:
    instructions = tokenize(source)
    pairs = match_brackets(instructions, name=name, source=source)
    logger.debug("Loaded %s: %d instructions, %d loops", name, len(instructions), len(pairs))
    return Program(
        instructions=tuple(instructions),
        name=name,
        bracket_map=MappingProxyType(pairs),
        reverse_bracket_map=MappingProxyType({close: open_ for open_, close in pairs.items()}),
        source=source,
    )


def load_file(path: Union[str, Path], *, encoding: str = "utf-8") -> Program:
    p = Path(path)
    try:
        text = p.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        raise make_read_error(path=str(path), cause=e) from e
    return load(text, str(path))
