#!/usr/bin/env python3
"""
Parser tests: tree shape, comments, and the three syntax errors.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bftree import MAX_LOOP_DEPTH, BFAllocationError, NestingTooDeep, NodeKind, Program, UnmatchedClose, UnmatchedOpen, parse


def kinds(program, head):
    return [node.kind for _, node in program.block(head)]


def test_primitives_in_order():
    program = parse("><+-.,")
    assert kinds(program, program.first) == [
        NodeKind.INC_PTR,
        NodeKind.DEC_PTR,
        NodeKind.INC_VAL,
        NodeKind.DEC_VAL,
        NodeKind.OUT,
        NodeKind.IN,
    ]


def test_loop_body_and_siblings():
    program = parse("+[>-]<")
    top = list(program.block(program.first))
    assert [n.kind for _, n in top] == [NodeKind.INC_VAL, NodeKind.LOOP, NodeKind.DEC_PTR]

    loop = top[1][1]
    assert kinds(program, loop.body) == [NodeKind.INC_PTR, NodeKind.DEC_VAL]
    for _, node in top:
        if node.kind is not NodeKind.LOOP:
            assert node.body is None


def test_empty_loop_has_no_body():
    program = parse("[]")
    assert len(program) == 1
    assert program.nodes[program.first].kind is NodeKind.LOOP
    assert program.nodes[program.first].body is None


def test_comments_are_ignored():
    program = parse(b"hello + world\n[ - ] \xff\x00 .")
    assert program.emit() == "+[-]."


def test_comment_only_source_gives_empty_program():
    program = parse("   \n\t just words ")
    assert len(program) == 0
    assert program.first is None


def test_accepts_bytes_bytearray_and_str():
    assert parse(b"+[-]").emit() == parse(bytearray(b"+[-]")).emit() == parse("+[-]").emit()


def test_single_unmatched_open():
    with pytest.raises(UnmatchedOpen) as info:
        parse("+[>+")
    assert str(info.value) == "Syntax error: unmatched '['"
    assert info.value.offset == 1


def test_unmatched_open_reports_innermost_loop():
    with pytest.raises(UnmatchedOpen) as info:
        parse("[[]\n  [")
    assert info.value.line == 2
    assert info.value.column == 3


def test_leading_close():
    with pytest.raises(UnmatchedClose) as info:
        parse("  ]+++")
    assert str(info.value) == "Syntax error: unmatched ']'"
    assert info.value.offset == 2


def test_close_after_balanced_loops():
    with pytest.raises(UnmatchedClose) as info:
        parse("+\n[-]]")
    err = info.value
    assert (err.offset, err.line, err.column) == (5, 2, 4)
    assert "unmatched ']'" in err.describe()
    assert "^" in err.context


def test_max_depth_is_accepted():
    source = "[" * MAX_LOOP_DEPTH + "]" * MAX_LOOP_DEPTH
    program = parse(source)
    assert len(program) == MAX_LOOP_DEPTH
    assert program.max_depth() == MAX_LOOP_DEPTH


def test_nesting_too_deep():
    with pytest.raises(NestingTooDeep) as info:
        parse("[" * (MAX_LOOP_DEPTH + 1))
    assert str(info.value) == "Error: loop nesting too deep"
    assert info.value.offset == MAX_LOOP_DEPTH


def test_nesting_limit_is_configurable():
    parse("[[]]", max_depth=2)
    with pytest.raises(NestingTooDeep):
        parse("[[[]]]", max_depth=2)


@pytest.fixture
def release_log(monkeypatch):
    released = []
    original = Program.release

    def spy(self):
        count = len(self.nodes)
        visited = original(self)
        released.append((count, visited))
        return visited

    monkeypatch.setattr(Program, "release", spy)
    return released


@pytest.mark.parametrize("source, max_depth, error, nodes", [
    ("+>[-[<]", MAX_LOOP_DEPTH, UnmatchedOpen, 6),
    ("+[-]]>>", MAX_LOOP_DEPTH, UnmatchedClose, 3),
    ("+[[[", 2, NestingTooDeep, 3),
    ("+[", 0, NestingTooDeep, 1),
])
def test_partial_program_is_released_on_failure(release_log, source, max_depth, error, nodes):
    with pytest.raises(error):
        parse(source, max_depth=max_depth)
    assert release_log == [(nodes, nodes)]


def test_negative_nesting_limit_is_rejected(release_log):
    with pytest.raises(ValueError):
        parse("+", max_depth=-1)
    assert release_log == []


def test_zero_nesting_limit_allows_flat_programs():
    assert parse("+>.,", max_depth=0).emit() == "+>.,"


def test_node_allocation_failure(monkeypatch, release_log):
    original = Program.add
    calls = []

    def add(self, kind):
        calls.append(kind)
        if len(calls) > 2:
            raise MemoryError
        return original(self, kind)

    monkeypatch.setattr(Program, "add", add)
    with pytest.raises(BFAllocationError) as info:
        parse("+[->+<]")
    assert str(info.value) == "Memory allocation failed."
    assert release_log == [(2, 2)]
