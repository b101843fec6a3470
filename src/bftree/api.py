from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from .executor import execute
from .parser import MAX_LOOP_DEPTH, Source, parse
from .tape import DEFAULT_TAPE_SIZE, Tape
from .tree import Program

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunOptions:
    tape_size: int = DEFAULT_TAPE_SIZE
    max_depth: int = MAX_LOOP_DEPTH


@dataclass(frozen=True)
class RunResult:
    tape: Tape
    node_count: int


def parse_file(path: str | Path, *, options: Optional[RunOptions] = None) -> Program:
    opts = options or RunOptions()
    with open(path, 'rb') as f:
        source = f.read()
    return parse(source, max_depth=opts.max_depth)


def run_program(
    program: Program,
    *,
    options: Optional[RunOptions] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> RunResult:
    """Allocate a tape, execute, and release ``program`` whatever happens."""
    opts = options or RunOptions()
    node_count = len(program)
    try:
        tape = Tape(opts.tape_size)
        execute(program, tape, stdin=stdin, stdout=stdout)
    finally:
        released = program.release()
        logger.debug("released %d of %d nodes", released, node_count)
    return RunResult(tape=tape, node_count=node_count)


def run_string(
    source: Source,
    *,
    options: Optional[RunOptions] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> RunResult:
    opts = options or RunOptions()
    program = parse(source, max_depth=opts.max_depth)
    return run_program(program, options=opts, stdin=stdin, stdout=stdout)


def run_file(
    path: str | Path,
    *,
    options: Optional[RunOptions] = None,
    stdin: Optional[BinaryIO] = None,
    stdout: Optional[BinaryIO] = None,
) -> RunResult:
    opts = options or RunOptions()
    program = parse_file(path, options=opts)
    return run_program(program, options=opts, stdin=stdin, stdout=stdout)
