"""Cursor — a mutable position inside an immutable input string.

Matching advances the cursor past consumed text on success and must leave it
exactly where it was on failure. Nodes snapshot with ``mark()`` and undo with
``reset()``; the cursor itself has no notion of success or failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering

from sire._errors import CursorError


@total_ordering
@dataclass(eq=False, slots=True)
class Cursor:
    """Position marker into ``text``.

    ``pos`` ranges over ``0..len(text)`` inclusive; ``len(text)`` is
    end-of-input. Cursors order by position, and only cursors over the same
    input are comparable.

    >>> c = Cursor("ab")
    >>> c.peek(), c.advance(), c.peek(), c.advance(), c.at_end()
    ('a', None, 'b', None, True)
    """

    text: str
    pos: int = 0

    def __post_init__(self) -> None:
        self._check(self.pos)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str | None:
        """The character under the cursor, or None at end-of-input."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def advance(self, n: int = 1) -> None:
        """Move forward ``n`` characters.

        Raises:
            CursorError: If the move would go past end-of-input or backwards.
        """
        if n < 0:
            msg = f"cannot advance by negative count {n}"
            raise CursorError(msg)
        self._check(self.pos + n)
        self.pos += n

    def mark(self) -> int:
        """Snapshot the current position for a later ``reset``."""
        return self.pos

    def reset(self, mark: int) -> None:
        """Restore a position taken with ``mark``."""
        self._check(mark)
        self.pos = mark

    def consumed_since(self, mark: int) -> int:
        return self.pos - mark

    @property
    def remaining(self) -> str:
        return self.text[self.pos :]

    def copy(self) -> Cursor:
        return Cursor(self.text, self.pos)

    def _check(self, pos: int) -> None:
        if not 0 <= pos <= len(self.text):
            msg = f"position {pos} outside input of length {len(self.text)}"
            raise CursorError(msg)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self.pos == other.pos and self.text == other.text

    def __lt__(self, other: Cursor) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        if self.text != other.text:
            msg = "cannot order cursors over different inputs"
            raise CursorError(msg)
        return self.pos < other.pos
