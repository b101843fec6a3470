
from .api import RunOptions, RunResult, parse_file, run_file, run_program, run_string
from .errors import (
    BFAllocationError,
    BFError,
    BFSyntaxError,
    NestingTooDeep,
    TapeAllocationError,
    UnmatchedClose,
    UnmatchedOpen,
)
from .executor import execute
from .parser import MAX_LOOP_DEPTH, parse
from .tape import DEFAULT_TAPE_SIZE, Tape
from .tree import Node, NodeKind, Program

__all__ = [
    'parse',
    'execute',
    'Program',
    'Node',
    'NodeKind',
    'Tape',
    'MAX_LOOP_DEPTH',
    'DEFAULT_TAPE_SIZE',
    'RunOptions',
    'RunResult',
    'parse_file',
    'run_program',
    'run_string',
    'run_file',
    'BFError',
    'BFSyntaxError',
    'NestingTooDeep',
    'UnmatchedClose',
    'UnmatchedOpen',
    'BFAllocationError',
    'TapeAllocationError',
]
