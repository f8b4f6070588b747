"""Pattern nodes — the closed variant set and its match rules.

Every node implements two operations:

- ``match(cursor) -> bool``: on success the cursor sits just past the
  consumed text; on failure the cursor is exactly where it was on entry.
  Composites rely on this to backtrack: a parent that sees a child fail
  never has to clean up after it.
- ``accept(visitor)``: calls the visitor operation for this variant.

Nodes are frozen dataclasses. A tree is built once and matched any number of
times; matching mutates only the caller's cursor, so a tree can be shared by
concurrent matches that each use their own cursor.

The Pattern union type is pattern-matchable via match/case.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias

from sire._errors import InvalidRangeError, PatternError

if TYPE_CHECKING:
    from sire._cursor import Cursor
    from sire._types import PatternVisitor

# Deeper trees would run the recursive matcher into Python's recursion limit.
MAX_DEPTH = 256


@dataclass(frozen=True, slots=True)
class Empty:
    """Matches the empty string anywhere. Never consumes, never fails."""

    def match(self, cursor: Cursor) -> bool:
        return True

    def accept(self, visitor: PatternVisitor) -> None:
        visitor.visit_empty(self)

    @property
    def depth(self) -> int:
        return 1


@dataclass(frozen=True, slots=True)
class Char:
    """Matches exactly one occurrence of ``ch``."""

    ch: str

    def __post_init__(self) -> None:
        _check_char("Char", self.ch)

    def match(self, cursor: Cursor) -> bool:
        if cursor.peek() != self.ch:
            return False
        cursor.advance()
        return True

    def accept(self, visitor: PatternVisitor) -> None:
        visitor.visit_char(self)

    @property
    def depth(self) -> int:
        return 1


@dataclass(frozen=True, slots=True)
class CharRange:
    """Matches one character in ``[front, back]``, inclusive, by code point.

    Raises:
        InvalidRangeError: If ``front > back``. The bounds are never swapped
            or clamped.
    """

    front: str
    back: str

    def __post_init__(self) -> None:
        _check_char("CharRange front", self.front)
        _check_char("CharRange back", self.back)
        if self.front > self.back:
            raise InvalidRangeError(self.front, self.back)

    def contains(self, ch: str) -> bool:
        return self.front <= ch <= self.back

    def match(self, cursor: Cursor) -> bool:
        ch = cursor.peek()
        if ch is None or not self.contains(ch):
            return False
        cursor.advance()
        return True

    def accept(self, visitor: PatternVisitor) -> None:
        visitor.visit_char_range(self)

    @property
    def depth(self) -> int:
        return 1


@dataclass(frozen=True, slots=True)
class Concat:
    """Matches ``left`` immediately followed by ``right``.

    All-or-nothing: if ``right`` fails, the cursor goes back to where
    ``left`` started, not to where ``right`` gave up. ``left`` is matched
    once; a different ``left`` match is never tried to help ``right``.
    """

    left: Pattern
    right: Pattern
    _depth: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _init_depth(self, self.left, self.right)

    def match(self, cursor: Cursor) -> bool:
        mark = cursor.mark()
        if self.left.match(cursor) and self.right.match(cursor):
            return True
        cursor.reset(mark)
        return False

    def accept(self, visitor: PatternVisitor) -> None:
        visitor.visit_concat(self)

    @property
    def depth(self) -> int:
        return self._depth


@dataclass(frozen=True, slots=True)
class Alternative:
    """Ordered choice: ``left`` first, ``right`` only if ``left`` fails.

    When both branches could match, ``left`` wins even if ``right`` would
    consume more. There is no longest-match preference.
    """

    left: Pattern
    right: Pattern
    _depth: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _init_depth(self, self.left, self.right)

    def match(self, cursor: Cursor) -> bool:
        mark = cursor.mark()
        if self.left.match(cursor):
            return True
        cursor.reset(mark)
        if self.right.match(cursor):
            return True
        cursor.reset(mark)
        return False

    def accept(self, visitor: PatternVisitor) -> None:
        visitor.visit_alternative(self)

    @property
    def depth(self) -> int:
        return self._depth


@dataclass(frozen=True, slots=True)
class Kleene:
    """Zero or more repetitions of ``expr``, greedy and committed.

    Repeats until ``expr`` fails or matches without consuming anything, then
    succeeds where the last successful repetition ended. Never fails.

    Once committed, repetitions are never given back: ``Concat(Kleene(a), a)``
    rejects ``"aaa"`` because the star takes all three ``a`` characters and
    nothing is left for the trailing ``a``.
    """

    expr: Pattern
    _depth: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _init_depth(self, self.expr)

    def match(self, cursor: Cursor) -> bool:
        while True:
            mark = cursor.mark()
            if not self.expr.match(cursor):
                cursor.reset(mark)
                return True
            if cursor.consumed_since(mark) == 0:
                return True

    def accept(self, visitor: PatternVisitor) -> None:
        visitor.visit_kleene(self)

    @property
    def depth(self) -> int:
        return self._depth


# Union type — the closed variant set.
Pattern: TypeAlias = Empty | Char | CharRange | Concat | Alternative | Kleene

_NODE_TYPES = (Empty, Char, CharRange, Concat, Alternative, Kleene)


def _check_char(what: str, value: Any) -> None:
    if not isinstance(value, str) or len(value) != 1:
        msg = f"{what} must be a single character, got {value!r}"
        raise PatternError(msg)


def _init_depth(node: Concat | Alternative | Kleene, *children: Any) -> None:
    for child in children:
        if not isinstance(child, _NODE_TYPES):
            msg = (
                f"{type(node).__name__} child must be a pattern node, "
                f"got {type(child).__name__}"
            )
            raise PatternError(msg)
    depth = 1 + max(child.depth for child in children)
    if depth > MAX_DEPTH:
        msg = f"pattern depth {depth} exceeds maximum allowed depth {MAX_DEPTH}"
        raise PatternError(msg)
    object.__setattr__(node, "_depth", depth)


# ═══════════════════════════════════════════════════════════════════════════════
# Builders
# ═══════════════════════════════════════════════════════════════════════════════


def sequence(*patterns: Pattern) -> Pattern:
    """Concatenate patterns left to right.

    - Empty -> Empty() (matches the empty string)
    - Single -> unwrapped
    - Multiple -> balanced Concat tree

    Balancing keeps long literals under MAX_DEPTH. It does not change what
    matches: Concat never re-matches a child, so grouping is irrelevant.
    """
    if not patterns:
        return Empty()
    return _balanced(Concat, patterns)


def choice(*patterns: Pattern) -> Pattern:
    """Ordered choice over patterns; earlier patterns take priority.

    Raises:
        PatternError: If no patterns are given (there is nothing to choose).
    """
    if not patterns:
        msg = "choice requires at least one pattern"
        raise PatternError(msg)
    return _balanced(Alternative, patterns)


def literal(text: str) -> Pattern:
    """Match ``text`` character for character."""
    return sequence(*(Char(ch) for ch in text))


def one_of(chars: str) -> Pattern:
    """Match any single character of ``chars``."""
    return choice(*(Char(ch) for ch in chars))


def _balanced(
    node_type: type[Concat] | type[Alternative], patterns: tuple[Pattern, ...]
) -> Pattern:
    if len(patterns) == 1:
        return patterns[0]
    mid = len(patterns) // 2
    return node_type(_balanced(node_type, patterns[:mid]), _balanced(node_type, patterns[mid:]))


# ═══════════════════════════════════════════════════════════════════════════════
# Structural folds
# ═══════════════════════════════════════════════════════════════════════════════


def pattern_depth(p: Pattern) -> int:
    """Calculate the nesting depth of a pattern tree."""
    match p:
        case Empty() | Char() | CharRange():
            return 1
        case Concat(left=left, right=right) | Alternative(left=left, right=right):
            return 1 + max(pattern_depth(left), pattern_depth(right))
        case Kleene(expr=expr):
            return 1 + pattern_depth(expr)
        case _:  # pragma: no cover
            return 0


def pattern_size(p: Pattern) -> int:
    """Count the nodes in a pattern tree."""
    match p:
        case Empty() | Char() | CharRange():
            return 1
        case Concat(left=left, right=right) | Alternative(left=left, right=right):
            return 1 + pattern_size(left) + pattern_size(right)
        case Kleene(expr=expr):
            return 1 + pattern_size(expr)
        case _:  # pragma: no cover
            return 0
