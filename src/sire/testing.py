"""Test utilities for sire.

Provides a visitor that records dispatch, for checking that ``accept`` routes
every node to the right operation and for exploring tree shapes in tests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sire._nodes import Alternative, Char, CharRange, Concat, Empty, Kleene, Pattern


class RecordingVisitor:
    """Record ``(operation name, node)`` for every visit, in visit order.

    With ``recurse=True`` (the default) the visitor walks the whole tree in
    pre-order; with ``recurse=False`` it records only the node it is handed.

    >>> from sire import Char, Kleene
    >>> v = RecordingVisitor()
    >>> Kleene(Char("a")).accept(v)
    >>> v.operations
    ['visit_kleene', 'visit_char']
    """

    def __init__(self, *, recurse: bool = True) -> None:
        self.recurse = recurse
        self.calls: list[tuple[str, Pattern]] = []

    @property
    def operations(self) -> list[str]:
        return [name for name, _ in self.calls]

    def operations_for(self, node: Pattern) -> list[str]:
        """Operations fired for this exact node instance."""
        return [name for name, n in self.calls if n is node]

    def visit_empty(self, node: Empty) -> None:
        self.calls.append(("visit_empty", node))

    def visit_char(self, node: Char) -> None:
        self.calls.append(("visit_char", node))

    def visit_char_range(self, node: CharRange) -> None:
        self.calls.append(("visit_char_range", node))

    def visit_concat(self, node: Concat) -> None:
        self.calls.append(("visit_concat", node))
        if self.recurse:
            node.left.accept(self)
            node.right.accept(self)

    def visit_alternative(self, node: Alternative) -> None:
        self.calls.append(("visit_alternative", node))
        if self.recurse:
            node.left.accept(self)
            node.right.accept(self)

    def visit_kleene(self, node: Kleene) -> None:
        self.calls.append(("visit_kleene", node))
        if self.recurse:
            node.expr.accept(self)
