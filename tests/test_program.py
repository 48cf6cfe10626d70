#!/usr/bin/env python3
"""
Loader tests: filtering, source positions and bracket matching.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bftape import (
    LoadError,
    Operation,
    ProgramReadError,
    UnmatchedCloseBracket,
    UnmatchedOpenBracket,
    load,
    load_file,
)

WORKING_SOURCE = (
    "+-this\n"
    "            is not a\n"
    "            []>< brainfuck\n"
    "                program! .,"
)


def working_program():
    return load(WORKING_SOURCE, "test.bf")


def test_filtering_keeps_only_operations():
    program = working_program()
    assert len(program) == 8

    source = "hello + world - [ ] < > . , 123"
    assert len(load(source)) == sum(1 for ch in source if ch in "><+-.,[]")


def test_comment_only_source_is_empty_program():
    program = load("no code in here at all\n\n")
    assert len(program) == 0
    assert dict(program.bracket_map) == {}


def test_instruction_order():
    ops = [ins.operation for ins in working_program()]
    assert ops == [
        Operation.INCREMENT,
        Operation.DECREMENT,
        Operation.LOOP_START,
        Operation.LOOP_END,
        Operation.MOVE_RIGHT,
        Operation.MOVE_LEFT,
        Operation.OUTPUT,
        Operation.INPUT,
    ]


def test_lines():
    lines = [ins.line for ins in working_program()]
    assert lines == [1, 1, 3, 3, 3, 3, 4, 4]


def test_columns():
    columns = [ins.column for ins in working_program()]
    assert columns == [1, 2, 13, 14, 15, 16, 26, 27]


def test_position_after_newline():
    program = load("+-\n[]")
    assert (program[2].operation, program[2].line, program[2].column) == (Operation.LOOP_START, 2, 1)
    assert (program[3].operation, program[3].line, program[3].column) == (Operation.LOOP_END, 2, 2)


def test_simple_pair():
    program = load("[]")
    assert dict(program.bracket_map) == {0: 1}
    assert dict(program.reverse_bracket_map) == {1: 0}


def test_nested_pairs_are_a_bijection():
    program = load("[[][]]+[-]")
    assert dict(program.bracket_map) == {0: 5, 1: 2, 3: 4, 7: 9}
    assert len(set(program.bracket_map.values())) == len(program.bracket_map)
    for open_, close in program.bracket_map.items():
        assert program.reverse_bracket_map[close] == open_
    starts = [i for i, ins in enumerate(program) if ins.operation is Operation.LOOP_START]
    assert sorted(program.bracket_map) == starts


def test_too_few_closings():
    with pytest.raises(UnmatchedOpenBracket) as exc:
        load("[[]", "test.bf")
    assert exc.value.bracket == '['
    assert (exc.value.line, exc.value.column) == (1, 1)
    assert isinstance(exc.value, LoadError)


def test_unmatched_open_reports_latest_open():
    with pytest.raises(UnmatchedOpenBracket) as exc:
        load("[\n  [\n [ ]")
    assert (exc.value.line, exc.value.column) == (2, 3)


def test_unexpected_closing():
    with pytest.raises(UnmatchedCloseBracket) as exc:
        load("[[][]]]", "test.bf")
    assert exc.value.bracket == ']'
    assert (exc.value.line, exc.value.column) == (1, 7)


def test_close_before_open_fails_immediately():
    with pytest.raises(UnmatchedCloseBracket) as exc:
        load("+\n ][")
    assert (exc.value.line, exc.value.column) == (2, 2)


def test_bracket_error_message_has_context():
    with pytest.raises(UnmatchedCloseBracket) as exc:
        load("++\n+]\n--", "prog.bf")
    msg = str(exc.value)
    assert "prog.bf" in msg
    assert "line 2, column 2" in msg
    assert ">    2 | +]" in msg
    assert "Hint:" in msg


def test_program_is_immutable():
    program = load("[]")
    with pytest.raises(TypeError):
        program.bracket_map[5] = 6
    with pytest.raises(AttributeError):
        program.name = "other"


def test_programs_are_hashable():
    first = load("+[-]", "a.bf")
    second = load("+[-]", "a.bf")
    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_load_file(tmp_path):
    path = tmp_path / "prog.bf"
    path.write_text("comment\n+[-]", encoding="utf-8")
    program = load_file(path)
    assert program.name == str(path)
    assert len(program) == 4
    assert (program[1].line, program[1].column) == (2, 2)


def test_load_missing_file(tmp_path):
    missing = tmp_path / "nope.bf"
    with pytest.raises(ProgramReadError) as exc:
        load_file(missing)
    assert exc.value.path == str(missing)
    assert isinstance(exc.value.__cause__, OSError)
    assert not isinstance(exc.value, UnmatchedOpenBracket)


def test_load_file_with_bad_brackets(tmp_path):
    path = tmp_path / "bad.bf"
    path.write_text("]", encoding="utf-8")
    with pytest.raises(UnmatchedCloseBracket):
        load_file(path)
