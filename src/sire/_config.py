"""Pattern config — build pattern trees from plain dicts (JSON/YAML shape).

There is no textual pattern syntax; a tree is described structurally with a
``type`` discriminant per node:

| Config ``type``  | Fields                 | Node                  |
|------------------|------------------------|-----------------------|
| ``empty``        | —                      | Empty                 |
| ``char``         | ``char``               | Char                  |
| ``range``        | ``front``, ``back``    | CharRange             |
| ``concat``       | ``left``, ``right``    | Concat                |
| ``alternative``  | ``left``, ``right``    | Alternative           |
| ``kleene``       | ``expr``               | Kleene                |
| ``literal``      | ``text``               | sequence of Char      |
| ``sequence``     | ``patterns``           | balanced Concat tree  |
| ``choice``       | ``patterns``           | balanced Alternative  |

``dump_pattern`` produces the core shapes only (no shorthands), and
``parse_pattern(dump_pattern(p)) == p`` for every tree.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sire._errors import ConfigParseError, PatternError
from sire._nodes import (
    MAX_DEPTH,
    Alternative,
    Char,
    CharRange,
    Concat,
    Empty,
    Kleene,
    choice,
    literal,
    sequence,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from sire._nodes import Pattern

logger = logging.getLogger(__name__)


def parse_pattern(data: dict[str, Any]) -> Pattern:
    """Parse a dict into a pattern tree.

    This is the main entry point for config loading.

    Raises:
        ConfigParseError: If the dict is malformed, or if a node rejects its
            arguments (e.g. a reversed range). The node's own error is
            chained as ``__cause__``.
    """
    pattern = _parse_node(data, "pattern", 1)
    logger.debug("parsed pattern config: depth=%d", pattern.depth)
    return pattern


def _parse_node(data: Any, path: str, depth: int) -> Pattern:
    if depth > MAX_DEPTH:
        msg = f"{path}: config nesting exceeds maximum allowed depth {MAX_DEPTH}"
        raise ConfigParseError(msg)
    if not isinstance(data, dict):
        msg = f"{path} must be a dict, got {type(data).__name__}"
        raise ConfigParseError(msg)

    node_type = data.get("type")
    if node_type is None:
        msg = f"{path} missing required field 'type'"
        raise ConfigParseError(msg)

    if node_type == "empty":
        return Empty()
    if node_type == "char":
        return _build(path, Char, _require_str(data, "char", path))
    if node_type == "range":
        front = _require_str(data, "front", path)
        back = _require_str(data, "back", path)
        return _build(path, CharRange, front, back)
    if node_type in ("concat", "alternative"):
        left = _parse_node(_require(data, "left", path), f"{path}.left", depth + 1)
        right = _parse_node(_require(data, "right", path), f"{path}.right", depth + 1)
        node_cls = Concat if node_type == "concat" else Alternative
        return _build(path, node_cls, left, right)
    if node_type == "kleene":
        expr = _parse_node(_require(data, "expr", path), f"{path}.expr", depth + 1)
        return _build(path, Kleene, expr)
    if node_type == "literal":
        return _build(path, literal, _require_str(data, "text", path))
    if node_type in ("sequence", "choice"):
        raw = _require(data, "patterns", path)
        if not isinstance(raw, list):
            msg = f"{path}.patterns must be a list, got {type(raw).__name__}"
            raise ConfigParseError(msg)
        children = [
            _parse_node(child, f"{path}.patterns[{i}]", depth + 1)
            for i, child in enumerate(raw)
        ]
        builder = sequence if node_type == "sequence" else choice
        return _build(path, builder, *children)

    msg = f"{path}: unknown pattern type: {node_type!r}"
    raise ConfigParseError(msg)


def _require(data: dict[str, Any], key: str, path: str) -> Any:
    if key not in data:
        msg = f"{path} ({data['type']}) missing required field {key!r}"
        raise ConfigParseError(msg)
    return data[key]


def _require_str(data: dict[str, Any], key: str, path: str) -> str:
    value = _require(data, key, path)
    if not isinstance(value, str):
        msg = f"{path}.{key} must be a string, got {type(value).__name__}"
        raise ConfigParseError(msg)
    return value


def _build(path: str, factory: Callable[..., Pattern], *args: Any) -> Pattern:
    try:
        return factory(*args)
    except PatternError as e:
        msg = f"{path}: {e}"
        raise ConfigParseError(msg) from e


# ═══════════════════════════════════════════════════════════════════════════════
# Dumping (pattern tree → dict)
# ═══════════════════════════════════════════════════════════════════════════════


class _PatternDumper:
    """Visitor producing the core config shape for a node."""

    def __init__(self) -> None:
        self.data: dict[str, Any] = {}

    def visit_empty(self, node: Empty) -> None:
        self.data = {"type": "empty"}

    def visit_char(self, node: Char) -> None:
        self.data = {"type": "char", "char": node.ch}

    def visit_char_range(self, node: CharRange) -> None:
        self.data = {"type": "range", "front": node.front, "back": node.back}

    def visit_concat(self, node: Concat) -> None:
        self.data = {
            "type": "concat",
            "left": self._dump(node.left),
            "right": self._dump(node.right),
        }

    def visit_alternative(self, node: Alternative) -> None:
        self.data = {
            "type": "alternative",
            "left": self._dump(node.left),
            "right": self._dump(node.right),
        }

    def visit_kleene(self, node: Kleene) -> None:
        self.data = {"type": "kleene", "expr": self._dump(node.expr)}

    def _dump(self, node: Pattern) -> dict[str, Any]:
        node.accept(self)
        return self.data


def dump_pattern(pattern: Pattern) -> dict[str, Any]:
    """Convert a pattern tree into its config dict."""
    dumper = _PatternDumper()
    pattern.accept(dumper)
    return dumper.data
