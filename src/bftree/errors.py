from __future__ import annotations

from dataclasses import dataclass
from typing import List, Type, TypeVar


def _build_context(lines: List[str], line_no_1: int, column_1: int, *, context: int = 1) -> str:
    idx = max(1, line_no_1)
    start = max(1, idx - context)
    end = min(len(lines), idx + context)

    out: List[str] = []
    for i in range(start, end + 1):
        prefix = '>' if i == idx else ' '
        out.append(f"{prefix} {i:4d} | {lines[i - 1]}")
        if i == idx:
            out.append(f"       | {' ' * (column_1 - 1)}^")
    return "\n".join(out)


def _locate(source: bytes, offset: int) -> tuple[int, int]:
    line = source.count(b'\n', 0, offset) + 1
    line_start = source.rfind(b'\n', 0, offset) + 1
    return line, offset - line_start + 1


@dataclass(eq=False)
class BFError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(eq=False)
class BFSyntaxError(BFError):
    offset: int
    line: int
    column: int
    context: str

    def describe(self) -> str:
        return f"{self.message} (line {self.line}, column {self.column})\n{self.context}"


class NestingTooDeep(BFSyntaxError):
    pass


class UnmatchedClose(BFSyntaxError):
    pass


class UnmatchedOpen(BFSyntaxError):
    pass


@dataclass(eq=False)
class BFAllocationError(BFError):
    message: str = "Memory allocation failed."


@dataclass(eq=False)
class TapeAllocationError(BFAllocationError):
    message: str = "Memory allocation failed for data tape."
    size: int = 0


MESSAGES = {
    NestingTooDeep: "Error: loop nesting too deep",
    UnmatchedClose: "Syntax error: unmatched ']'",
    UnmatchedOpen: "Syntax error: unmatched '['",
}

_E = TypeVar('_E', bound=BFSyntaxError)


def make_syntax_error(cls: Type[_E], *, source: bytes, offset: int) -> _E:
    line, column = _locate(source, offset)
    lines = source.decode('latin-1').split('\n')
    return cls(
        message=MESSAGES[cls],
        offset=offset,
        line=line,
        column=column,
        context=_build_context(lines, line, column),
    )
