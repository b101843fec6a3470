from __future__ import annotations

import logging
from typing import List, Optional, Type, Union

from .errors import (
    BFAllocationError,
    BFSyntaxError,
    NestingTooDeep,
    UnmatchedClose,
    UnmatchedOpen,
    make_syntax_error,
)
from .tree import KIND_BY_BYTE, NodeKind, Program

logger = logging.getLogger(__name__)

MAX_LOOP_DEPTH = 512

_OPEN = ord('[')
_CLOSE = ord(']')

Source = Union[bytes, bytearray, str]


def _as_bytes(source: Source) -> bytes:
    if isinstance(source, str):
        return source.encode('latin-1')
    return bytes(source)


def _fail(program: Program, cls: Type[BFSyntaxError], data: bytes, offset: int) -> BFSyntaxError:
    released = program.release()
    logger.debug("parse failed at offset %d, released %d nodes", offset, released)
    return make_syntax_error(cls, source=data, offset=offset)


def parse(source: Source, *, max_depth: int = MAX_LOOP_DEPTH) -> Program:
    """Build a Program from raw source in a single left-to-right scan.

    Bytes other than ``><+-.,[]`` are comments. Raises ``NestingTooDeep``,
    ``UnmatchedClose`` or ``UnmatchedOpen``; no partial program escapes.
    """
    if max_depth < 0:
        raise ValueError(f"Loop nesting limit must be non-negative, got {max_depth}")
    data = _as_bytes(source)
    program = Program()

    depth = 0
    open_loops: List[int] = []
    open_offsets: List[int] = []
    # most recently appended node per depth, for constant-time sibling append
    last_at_depth: List[Optional[int]] = [None] * (max_depth + 1)

    try:
        for offset, byte in enumerate(data):
            if byte == _CLOSE:
                if depth == 0:
                    raise _fail(program, UnmatchedClose, data, offset)
                open_loops.pop()
                open_offsets.pop()
                depth -= 1
                continue

            kind = KIND_BY_BYTE.get(byte)
            if kind is None:
                continue

            if kind is NodeKind.LOOP and depth >= max_depth:
                raise _fail(program, NestingTooDeep, data, offset)

            idx = program.add(kind)
            prev = last_at_depth[depth]
            if prev is not None:
                program.nodes[prev].next = idx
            elif depth == 0:
                program.first = idx
            else:
                program.nodes[open_loops[-1]].body = idx
            last_at_depth[depth] = idx

            if kind is NodeKind.LOOP:
                open_loops.append(idx)
                open_offsets.append(offset)
                depth += 1
                last_at_depth[depth] = None
    except MemoryError as exc:
        program.release()
        raise BFAllocationError() from exc

    if depth != 0:
        raise _fail(program, UnmatchedOpen, data, open_offsets[-1])

    logger.debug("parsed %d bytes into %d nodes", len(data), len(program))
    return program
