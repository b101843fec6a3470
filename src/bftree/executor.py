from __future__ import annotations

import logging
import sys
from typing import BinaryIO, List, Optional

from .tape import Tape
from .tree import NodeKind, Program

logger = logging.getLogger(__name__)

_NEWLINE = 10


def _run(program: Program, tape: Tape, stdin: BinaryIO, stdout: BinaryIO) -> None:
    nodes = program.nodes
    # loops whose body is currently running, innermost last
    active: List[int] = []
    head = program.first

    while True:
        if head is None:
            if not active:
                return
            loop = nodes[active[-1]]
            if tape.get():
                # an empty body over a non-zero cell spins forever; that is the program's choice
                head = loop.body
            else:
                active.pop()
                head = loop.next
            continue

        node = nodes[head]
        kind = node.kind

        if kind is NodeKind.INC_PTR:
            tape.forward()
        elif kind is NodeKind.DEC_PTR:
            tape.backward()
        elif kind is NodeKind.INC_VAL:
            tape.increment()
        elif kind is NodeKind.DEC_VAL:
            tape.decrement()
        elif kind is NodeKind.OUT:
            value = tape.get()
            stdout.write(bytes((value,)))
            if value == _NEWLINE:
                stdout.flush()
        elif kind is NodeKind.IN:
            # pending output must be visible before blocking on input
            stdout.flush()
            ch = stdin.read(1)
            tape.set(ch[0] if ch else 0)
        elif kind is NodeKind.LOOP:
            if tape.get():
                active.append(head)
                head = node.body
                continue

        head = node.next


def execute(
    program: Program,
    tape: Tape,
    *,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> None:
    """Run ``program`` against ``tape``.

    Loop nesting is tracked on an explicit stack, so deep programs never
    exhaust the interpreter's call stack. Output is flushed on newlines,
    before every read, and once at the end.
    """
    if stdin is None:
        stdin = sys.stdin.buffer
    if stdout is None:
        stdout = sys.stdout.buffer
    try:
        _run(program, tape, stdin, stdout)
    finally:
        stdout.flush()
    logger.debug("execution finished, pointer at %d", tape.pointer)
