"""sire — a small backtracking pattern-matching engine.

All public types are exported from this module for flat imports:

    from sire import Char, Concat, Cursor, Kleene, fullmatch
"""

__version__ = "0.1.0"

# Config — see sire._config for details
from sire._config import dump_pattern, parse_pattern
from sire._cursor import Cursor
from sire._errors import ConfigParseError, CursorError, InvalidRangeError, PatternError
from sire._format import PatternFormatter, to_regex
from sire._match import fullmatch, match_prefix, search

# Pattern tree
from sire._nodes import (
    MAX_DEPTH,
    Alternative,
    Char,
    CharRange,
    Concat,
    Empty,
    Kleene,
    Pattern,
    choice,
    literal,
    one_of,
    pattern_depth,
    pattern_size,
    sequence,
)
from sire._trace import MatchTrace, MatchTracer, TraceStep, trace
from sire._types import PatternVisitor

__all__ = [
    # Protocols
    "PatternVisitor",
    # Cursor
    "Cursor",
    # Nodes
    "Empty",
    "Char",
    "CharRange",
    "Concat",
    "Alternative",
    "Kleene",
    "Pattern",
    "MAX_DEPTH",
    # Builders and folds
    "sequence",
    "choice",
    "literal",
    "one_of",
    "pattern_depth",
    "pattern_size",
    # Matching
    "match_prefix",
    "fullmatch",
    "search",
    # Formatting
    "PatternFormatter",
    "to_regex",
    # Tracing
    "MatchTrace",
    "MatchTracer",
    "TraceStep",
    "trace",
    # Config
    "parse_pattern",
    "dump_pattern",
    # Errors
    "PatternError",
    "InvalidRangeError",
    "CursorError",
    "ConfigParseError",
]
