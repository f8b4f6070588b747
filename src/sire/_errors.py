"""Error types for sire.

A failed match is a plain ``False``, never an exception. Everything here
signals a programming error: a malformed tree, a misused cursor, or a
malformed pattern config.
"""

from __future__ import annotations


class PatternError(Exception):
    """Errors from pattern construction and validation."""


class InvalidRangeError(PatternError):
    """A CharRange was built with ``front > back``."""

    def __init__(self, front: str, back: str) -> None:
        self.front = front
        self.back = back
        super().__init__(f"invalid range: {front!r} > {back!r}")


class CursorError(PatternError):
    """A cursor was positioned outside its input or compared across inputs."""


class ConfigParseError(PatternError):
    """Error parsing a config dict into a pattern tree."""
