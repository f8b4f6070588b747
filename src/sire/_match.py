"""Match drivers — thin wrappers around ``pattern.match(cursor)``.

Matching itself is the recursive composition of each node's own rule; these
helpers only set up a cursor and read the outcome.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sire._cursor import Cursor

if TYPE_CHECKING:
    from sire._nodes import Pattern


def match_prefix(pattern: Pattern, text: str, pos: int = 0) -> int | None:
    """Match ``pattern`` at ``pos`` and return where the match ends.

    Returns None if the pattern does not match at ``pos``. A zero-width match
    returns ``pos`` itself, so test the result against None, not for truth.
    """
    cursor = Cursor(text, pos)
    if pattern.match(cursor):
        return cursor.pos
    return None


def fullmatch(pattern: Pattern, text: str) -> bool:
    """True if ``pattern`` matches at 0 and consumes all of ``text``.

    Alternatives and stars commit to their first success, so a pattern can
    fail to fullmatch text that a backtracking regex engine would accept.
    """
    cursor = Cursor(text)
    return pattern.match(cursor) and cursor.at_end()


def search(pattern: Pattern, text: str) -> tuple[int, int] | None:
    """Find the first position at which ``pattern`` matches.

    Returns ``(start, end)`` of the match, or None. End-of-input is a valid
    start position, so a pattern that matches the empty string always finds
    a match.
    """
    cursor = Cursor(text)
    for start in range(len(text) + 1):
        cursor.reset(start)
        if pattern.match(cursor):
            return start, cursor.pos
    return None
