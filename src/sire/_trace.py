"""Trace evaluation for debugging.

``trace()`` runs the same match rules as ``pattern.match`` but through a
visitor, recording one step per node attempt. The trace result always equals
the plain match result; the steps show how it was reached (which branch of
an alternative won, how many repetitions a star took, where a concat gave
up).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sire._cursor import Cursor

if TYPE_CHECKING:
    from sire._nodes import Alternative, Char, CharRange, Concat, Empty, Kleene, Pattern


@dataclass(frozen=True, slots=True)
class TraceStep:
    """One attempt to match ``node`` starting at ``start``.

    ``end`` is the cursor position after the attempt; for a failed attempt it
    equals ``start``. ``depth`` is 0 for the root.
    """

    node: Pattern
    start: int
    end: int
    matched: bool
    depth: int


@dataclass(frozen=True, slots=True)
class MatchTrace:
    """Outcome of ``trace()``.

    Steps are in completion order: children finish before their parent, so
    the root's step is always last.
    """

    result: int | None
    steps: tuple[TraceStep, ...]

    @property
    def matched(self) -> bool:
        return self.result is not None

    def steps_for(self, node: Pattern) -> list[TraceStep]:
        """Steps for this exact node instance (identity, not equality)."""
        return [s for s in self.steps if s.node is node]


class MatchTracer:
    """Visitor that matches a tree against a cursor and records each attempt."""

    def __init__(self, cursor: Cursor) -> None:
        self.cursor = cursor
        self.steps: list[TraceStep] = []
        self.matched = False
        self._depth = 0

    def run(self, node: Pattern) -> bool:
        """Match ``node`` at the cursor, recording the attempt."""
        start = self.cursor.mark()
        depth = self._depth
        self._depth += 1
        node.accept(self)
        self._depth = depth
        self.steps.append(TraceStep(node, start, self.cursor.pos, self.matched, depth))
        return self.matched

    def visit_empty(self, node: Empty) -> None:
        self.matched = node.match(self.cursor)

    def visit_char(self, node: Char) -> None:
        self.matched = node.match(self.cursor)

    def visit_char_range(self, node: CharRange) -> None:
        self.matched = node.match(self.cursor)

    def visit_concat(self, node: Concat) -> None:
        mark = self.cursor.mark()
        ok = self.run(node.left) and self.run(node.right)
        if not ok:
            self.cursor.reset(mark)
        self.matched = ok

    def visit_alternative(self, node: Alternative) -> None:
        mark = self.cursor.mark()
        ok = self.run(node.left)
        if not ok:
            self.cursor.reset(mark)
            ok = self.run(node.right)
            if not ok:
                self.cursor.reset(mark)
        self.matched = ok

    def visit_kleene(self, node: Kleene) -> None:
        while True:
            mark = self.cursor.mark()
            if not self.run(node.expr):
                self.cursor.reset(mark)
                break
            if self.cursor.consumed_since(mark) == 0:
                break
        self.matched = True


def trace(pattern: Pattern, text: str, pos: int = 0) -> MatchTrace:
    """Match ``pattern`` at ``pos`` and return the full trace.

    ``trace(p, text, pos).result == match_prefix(p, text, pos)`` always.
    """
    tracer = MatchTracer(Cursor(text, pos))
    result = tracer.cursor.pos if tracer.run(pattern) else None
    return MatchTrace(result=result, steps=tuple(tracer.steps))
