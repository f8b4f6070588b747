"""Render pattern trees as regex text.

The output uses RE2 syntax (``(?:...)`` groups, ``\\x{...}`` escapes) so a
rendered pattern can be handed to ``google-re2`` as-is. The text describes
the same language as the tree, but not the same matching policy: RE2
backtracks into stars and alternatives where sire commits.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sire._nodes import Alternative, Char, CharRange, Concat, Empty, Kleene, Pattern


class _Prec(IntEnum):
    ALTERNATION = 0
    CONCATENATION = 1
    STAR = 2
    ATOM = 3


def _escape(ch: str) -> str:
    if ch.isalnum() or ch == "_":
        return ch
    if ch.isascii() and ch.isprintable() and ch != " ":
        return "\\" + ch
    if ch.isprintable():
        return ch
    return f"\\x{{{ord(ch):X}}}"


class PatternFormatter:
    """Visitor that builds regex text bottom-up.

    After ``node.accept(formatter)``, ``formatter.text`` holds the rendering
    of ``node``. Subexpressions are wrapped in a non-capturing group only
    where operator precedence requires it.

    >>> from sire import Char, Concat, Kleene
    >>> to_regex(Kleene(Concat(Char("a"), Char("b"))))
    '(?:ab)*'
    """

    def __init__(self) -> None:
        self.text = ""
        self._prec = _Prec.ATOM

    def visit_empty(self, node: Empty) -> None:
        self._emit("(?:)", _Prec.ATOM)

    def visit_char(self, node: Char) -> None:
        self._emit(_escape(node.ch), _Prec.ATOM)

    def visit_char_range(self, node: CharRange) -> None:
        if node.front == node.back:
            self._emit(f"[{_escape(node.front)}]", _Prec.ATOM)
        else:
            self._emit(f"[{_escape(node.front)}-{_escape(node.back)}]", _Prec.ATOM)

    def visit_concat(self, node: Concat) -> None:
        left = self._render(node.left, _Prec.CONCATENATION)
        right = self._render(node.right, _Prec.CONCATENATION)
        self._emit(left + right, _Prec.CONCATENATION)

    def visit_alternative(self, node: Alternative) -> None:
        left = self._render(node.left, _Prec.ALTERNATION)
        right = self._render(node.right, _Prec.ALTERNATION)
        self._emit(f"{left}|{right}", _Prec.ALTERNATION)

    def visit_kleene(self, node: Kleene) -> None:
        # A starred star needs a group: RE2 rejects "a**".
        expr = self._render(node.expr, _Prec.ATOM)
        self._emit(f"{expr}*", _Prec.STAR)

    def _render(self, node: Pattern, min_prec: _Prec) -> str:
        node.accept(self)
        if self._prec < min_prec:
            return f"(?:{self.text})"
        return self.text

    def _emit(self, text: str, prec: _Prec) -> None:
        self.text = text
        self._prec = prec


def to_regex(pattern: Pattern) -> str:
    """Render ``pattern`` as RE2-compatible regex text."""
    formatter = PatternFormatter()
    pattern.accept(formatter)
    return formatter.text
