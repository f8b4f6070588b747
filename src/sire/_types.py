"""Core protocols for sire.

The pattern tree is a closed set of node variants; operations over it are
open. PatternVisitor is the port through which external algorithms
(formatting, serialization, tracing) walk a tree without the node types
knowing about them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sire._nodes import Alternative, Char, CharRange, Concat, Empty, Kleene


@runtime_checkable
class PatternVisitor(Protocol):
    """One operation per node variant.

    Each node's ``accept`` calls exactly the operation for its own variant,
    passing itself. Visitors that need to descend call ``child.accept(self)``
    themselves; results are carried on the visitor, not returned.

    Adding a node variant means extending this protocol and every visitor.
    """

    def visit_empty(self, node: Empty, /) -> None: ...

    def visit_char(self, node: Char, /) -> None: ...

    def visit_char_range(self, node: CharRange, /) -> None: ...

    def visit_concat(self, node: Concat, /) -> None: ...

    def visit_alternative(self, node: Alternative, /) -> None: ...

    def visit_kleene(self, node: Kleene, /) -> None: ...
