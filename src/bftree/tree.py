from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple


class NodeKind(enum.Enum):
    INC_PTR = '>'
    DEC_PTR = '<'
    INC_VAL = '+'
    DEC_VAL = '-'
    OUT = '.'
    IN = ','
    LOOP = '['


# byte value -> kind, for the seven characters that create a node
KIND_BY_BYTE = {ord(k.value): k for k in NodeKind}


@dataclass
class Node:
    kind: NodeKind
    body: Optional[int] = None  # first node of the loop block (LOOP only)
    next: Optional[int] = None  # next sibling in the same block


@dataclass
class Program:
    """Parsed program stored as an arena of nodes linked by index.

    ``first`` is the head of the top-level sequence. Every ``body``/``next``
    link points at a node appended later than its holder, so the forest is
    acyclic by construction.
    """

    nodes: List[Node] = field(default_factory=list)
    first: Optional[int] = None

    def __len__(self) -> int:
        return len(self.nodes)

    def add(self, kind: NodeKind) -> int:
        self.nodes.append(Node(kind))
        return len(self.nodes) - 1

    def block(self, head: Optional[int]) -> Iterator[Tuple[int, Node]]:
        """Iterate one sibling chain starting at ``head``."""
        while head is not None:
            node = self.nodes[head]
            yield head, node
            head = node.next

    def walk(self) -> Iterator[Tuple[int, Node]]:
        """Depth-first, left-to-right traversal yielding ``(depth, node)``."""
        stack: List[Tuple[int, Optional[int]]] = [(0, self.first)]
        while stack:
            depth, idx = stack.pop()
            if idx is None:
                continue
            node = self.nodes[idx]
            yield depth, node
            # siblings after the loop body
            stack.append((depth, node.next))
            if node.kind is NodeKind.LOOP:
                stack.append((depth + 1, node.body))

    def emit(self) -> str:
        out: List[str] = []
        stack: List[Optional[int]] = [self.first]
        while stack:
            idx = stack.pop()
            if idx is None:
                continue
            if idx < 0:
                out.append(']')
                continue
            node = self.nodes[idx]
            out.append(node.kind.value)
            stack.append(node.next)
            if node.kind is NodeKind.LOOP:
                stack.append(-1)
                stack.append(node.body)
        return ''.join(out)

    def max_depth(self) -> int:
        deepest = 0
        for depth, node in self.walk():
            if node.kind is NodeKind.LOOP:
                deepest = max(deepest, depth + 1)
        return deepest

    def release(self) -> int:
        """Drop every node reachable from ``first``; return how many were visited."""
        visited = 0
        stack: List[Optional[int]] = [self.first]
        while stack:
            idx = stack.pop()
            while idx is not None:
                node = self.nodes[idx]
                if node.body is not None:
                    stack.append(node.body)
                visited += 1
                idx = node.next
        self.nodes = []
        self.first = None
        return visited
