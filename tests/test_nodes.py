"""Tests for pattern node matching, construction, and builders."""

from __future__ import annotations

import dataclasses

import pytest

from sire import (
    MAX_DEPTH,
    Alternative,
    Char,
    CharRange,
    Concat,
    Cursor,
    Empty,
    InvalidRangeError,
    Kleene,
    PatternError,
    choice,
    fullmatch,
    literal,
    match_prefix,
    one_of,
    pattern_depth,
    pattern_size,
    search,
    sequence,
)


class TestEmpty:
    def test_matches_empty_input(self) -> None:
        c = Cursor("")
        assert Empty().match(c) is True
        assert c.pos == 0

    def test_never_advances(self) -> None:
        c = Cursor("abc", 1)
        assert Empty().match(c) is True
        assert c.pos == 1


class TestChar:
    def test_match_advances_one(self) -> None:
        c = Cursor("a")
        assert Char("a").match(c) is True
        assert c.pos == 1

    def test_wrong_char_leaves_cursor(self) -> None:
        c = Cursor("b")
        assert Char("a").match(c) is False
        assert c.pos == 0

    def test_end_of_input_leaves_cursor(self) -> None:
        c = Cursor("")
        assert Char("a").match(c) is False
        assert c.pos == 0

    def test_non_ascii(self) -> None:
        assert match_prefix(Char("é"), "été") == 1

    @pytest.mark.parametrize("bad", ["", "ab", None, 97])
    def test_requires_single_character(self, bad: object) -> None:
        with pytest.raises(PatternError):
            Char(bad)  # type: ignore[arg-type]


class TestCharRange:
    @pytest.mark.parametrize("ch", "abmz")
    def test_lowercase_letters_match(self, ch: str) -> None:
        c = Cursor(ch)
        assert CharRange("a", "z").match(c) is True
        assert c.pos == 1

    @pytest.mark.parametrize("text", ["A", "0", "9", ""])
    def test_rejects_outside_range(self, text: str) -> None:
        c = Cursor(text)
        assert CharRange("a", "z").match(c) is False
        assert c.pos == 0

    def test_reversed_bounds_fail_fast(self) -> None:
        with pytest.raises(InvalidRangeError) as exc_info:
            CharRange("z", "a")
        assert exc_info.value.front == "z"
        assert exc_info.value.back == "a"

    def test_reversed_bounds_are_not_swapped(self) -> None:
        # No partially built node escapes a failed construction.
        with pytest.raises(InvalidRangeError):
            CharRange("9", "0")

    def test_single_point_range(self) -> None:
        r = CharRange("q", "q")
        assert r.contains("q")
        assert not r.contains("r")

    def test_requires_single_characters(self) -> None:
        with pytest.raises(PatternError):
            CharRange("ab", "z")

    def test_invalid_range_is_pattern_error(self) -> None:
        assert issubclass(InvalidRangeError, PatternError)


class TestConcat:
    def test_full_match(self) -> None:
        c = Cursor("ab")
        assert Concat(Char("a"), Char("b")).match(c) is True
        assert c.pos == 2

    def test_right_failure_restores_entry(self) -> None:
        c = Cursor("ac")
        assert Concat(Char("a"), Char("b")).match(c) is False
        assert c.pos == 0

    def test_input_ends_after_left(self) -> None:
        c = Cursor("a")
        assert Concat(Char("a"), Char("b")).match(c) is False
        assert c.pos == 0

    def test_restore_is_to_entry_not_zero(self) -> None:
        c = Cursor("xxac", 2)
        assert Concat(Char("a"), Char("b")).match(c) is False
        assert c.pos == 2

    def test_nested_restore(self) -> None:
        p = Concat(Concat(Char("a"), Char("b")), Concat(Char("c"), Char("d")))
        c = Cursor("abcx")
        assert p.match(c) is False
        assert c.pos == 0

    def test_children_must_be_nodes(self) -> None:
        with pytest.raises(PatternError):
            Concat(Char("a"), "b")  # type: ignore[arg-type]


class TestAlternative:
    def test_left_branch(self) -> None:
        c = Cursor("a")
        assert Alternative(Char("a"), Char("b")).match(c) is True
        assert c.pos == 1

    def test_right_branch(self) -> None:
        c = Cursor("b")
        assert Alternative(Char("a"), Char("b")).match(c) is True
        assert c.pos == 1

    def test_failure_restores(self) -> None:
        c = Cursor("abx")
        p = Alternative(literal("abc"), literal("abd"))
        assert p.match(c) is False
        assert c.pos == 0

    def test_left_wins_over_longer_right(self) -> None:
        assert match_prefix(Alternative(Char("a"), literal("ab")), "ab") == 1

    def test_right_retried_from_entry(self) -> None:
        assert match_prefix(Alternative(literal("abc"), literal("abd")), "abd") == 3


class TestKleene:
    @pytest.mark.parametrize(
        ("text", "end"),
        [("", 0), ("a", 1), ("aaa", 3), ("aab", 2), ("b", 0)],
    )
    def test_greedy_repetition(self, text: str, end: int) -> None:
        c = Cursor(text)
        assert Kleene(Char("a")).match(c) is True
        assert c.pos == end

    def test_zero_width_body_terminates(self) -> None:
        c = Cursor("abc")
        assert Kleene(Empty()).match(c) is True
        assert c.pos == 0

    def test_nested_star_terminates(self) -> None:
        assert match_prefix(Kleene(Kleene(Char("a"))), "aaab") == 3

    def test_star_of_optional_terminates(self) -> None:
        p = Kleene(Alternative(Char("a"), Empty()))
        assert match_prefix(p, "aab") == 2

    def test_partial_repetition_is_undone(self) -> None:
        assert match_prefix(Kleene(literal("ab")), "ababa") == 4

    def test_does_not_backtrack_into_star(self) -> None:
        # A backtracking regex engine accepts "aaa" for a*a; this engine
        # commits the star to all three characters and then fails.
        p = Concat(Kleene(Char("a")), Char("a"))
        c = Cursor("aaa")
        assert p.match(c) is False
        assert c.pos == 0
        assert fullmatch(p, "aaa") is False

    def test_long_input_does_not_recurse(self) -> None:
        assert match_prefix(Kleene(Char("a")), "a" * 10_000) == 10_000


class TestFailureRestoresCursor:
    """A failed match leaves the cursor where it was, for every variant."""

    @pytest.mark.parametrize(
        "pattern",
        [
            Char("a"),
            CharRange("a", "c"),
            Concat(Char("x"), Char("a")),
            Concat(Kleene(Char("x")), Char("a")),
            Alternative(Concat(Char("x"), Char("a")), Concat(Char("x"), Char("b"))),
            Concat(Alternative(Char("x"), Empty()), Char("q")),
        ],
        ids=["char", "range", "concat", "star-concat", "alternative", "optional-concat"],
    )
    @pytest.mark.parametrize("start", [0, 1, 3])
    def test_failed_match_restores(self, pattern: object, start: int) -> None:
        c = Cursor("xxxz", start)
        assert pattern.match(c) is False  # type: ignore[attr-defined]
        assert c.pos == start

    def test_empty_and_kleene_never_fail(self) -> None:
        for pattern in (Empty(), Kleene(Char("q"))):
            c = Cursor("xyz", 1)
            assert pattern.match(c) is True
            assert c.pos == 1


class TestImmutability:
    def test_nodes_are_frozen(self) -> None:
        node = Concat(Char("a"), Char("b"))
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.left = Char("c")  # type: ignore[misc]

    def test_tree_reusable_across_cursors(self) -> None:
        p = Concat(Kleene(CharRange("0", "9")), Char(";"))
        c1 = Cursor("12;")
        c2 = Cursor("9;")
        assert p.match(c1) is True
        assert p.match(c2) is True
        assert (c1.pos, c2.pos) == (3, 2)

    def test_structural_equality(self) -> None:
        assert Concat(Char("a"), Empty()) == Concat(Char("a"), Empty())
        assert Kleene(Char("a")) != Kleene(Char("b"))


class TestDepth:
    def test_leaf_depth(self) -> None:
        assert pattern_depth(Char("a")) == 1
        assert Char("a").depth == 1

    def test_stored_depth_matches_fold(self) -> None:
        p = Alternative(Kleene(Concat(Char("a"), Empty())), Char("b"))
        assert p.depth == pattern_depth(p) == 4

    def test_exceeding_max_depth_raises(self) -> None:
        p = Char("a")
        for _ in range(MAX_DEPTH - 1):
            p = Kleene(p)
        assert p.depth == MAX_DEPTH
        with pytest.raises(PatternError, match="exceeds maximum"):
            Kleene(p)

    def test_size(self) -> None:
        assert pattern_size(Concat(Kleene(Char("a")), Alternative(Empty(), Char("b")))) == 6


class TestBuilders:
    def test_sequence_empty(self) -> None:
        assert sequence() == Empty()

    def test_sequence_single_unwrapped(self) -> None:
        assert sequence(Char("a")) == Char("a")

    def test_sequence_is_balanced(self) -> None:
        p = literal("x" * 1000)
        assert p.depth <= 11
        assert fullmatch(p, "x" * 1000)

    def test_literal(self) -> None:
        assert match_prefix(literal("abc"), "abcd") == 3
        assert match_prefix(literal("abc"), "abx") is None
        assert literal("") == Empty()

    def test_choice_requires_patterns(self) -> None:
        with pytest.raises(PatternError):
            choice()

    def test_choice_preserves_priority(self) -> None:
        p = choice(literal("a"), literal("ab"), literal("abc"))
        assert match_prefix(p, "abc") == 1
        p = choice(literal("abc"), literal("ab"), literal("a"))
        assert match_prefix(p, "abc") == 3

    def test_one_of(self) -> None:
        p = one_of("+-*/")
        assert all(match_prefix(p, op) == 1 for op in "+-*/")
        assert match_prefix(p, "%") is None


class TestDrivers:
    def test_match_prefix_zero_width_is_not_none(self) -> None:
        assert match_prefix(Empty(), "abc") == 0

    def test_match_prefix_at_offset(self) -> None:
        assert match_prefix(literal("bc"), "abc", 1) == 3

    def test_fullmatch_requires_all_input(self) -> None:
        assert fullmatch(literal("ab"), "ab") is True
        assert fullmatch(literal("ab"), "abc") is False

    def test_search_finds_first_start(self) -> None:
        p = Concat(CharRange("0", "9"), Kleene(CharRange("0", "9")))
        assert search(p, "abc 123 45") == (4, 7)

    def test_search_no_match(self) -> None:
        assert search(Char("q"), "abc") is None

    def test_search_empty_pattern_matches_at_start(self) -> None:
        assert search(Kleene(Char("q")), "abc") == (0, 0)

    def test_search_at_end_of_input(self) -> None:
        assert search(Empty(), "") == (0, 0)
