"""
Tests for the parser combinators.
"""

import re

from stache.combinators import (
    SKIP,
    ParseResult,
    all_of,
    always,
    any_of,
    consume_until,
    discard,
    many,
    match_char,
    match_pattern,
    transform,
)


class TestPrimitives:

    def test_match_char(self):
        """Matches only a leading character"""
        parser = match_char("{")
        assert parser("{x") == ParseResult("{", "x")
        assert parser("x{") is None
        assert parser("") is None

    def test_match_pattern_is_anchored(self):
        """Pattern must match at the start of the input"""
        parser = match_pattern(r"\d+")
        assert parser("12ab") == ParseResult("12", "ab")
        assert parser("a12") is None

    def test_match_pattern_accepts_compiled(self):
        """Compiled patterns keep their flags"""
        parser = match_pattern(re.compile("abc", re.IGNORECASE))
        assert parser("ABCd") == ParseResult("ABC", "d")

    def test_match_pattern_empty_match_succeeds(self):
        """A zero-length match is a success, not a failure"""
        result = match_pattern(r"\s*")("abc")
        assert result == ParseResult("", "abc")

    def test_consume_until(self):
        """Stops before the first match"""
        parser = consume_until("{{")
        assert parser("ab{{c}}") == ParseResult("ab", "{{c}}")
        assert parser("{{c") == ParseResult("", "{{c")

    def test_consume_until_without_match(self):
        """Consumes everything when the pattern never occurs"""
        assert consume_until("{{")("plain text") == ParseResult("plain text", "")
        assert consume_until("{{")("") == ParseResult("", "")

    def test_discard(self):
        """Keeps progress, drops value"""
        parser = discard(match_char("a"))
        assert parser("ab") == ParseResult(SKIP, "b")
        assert parser("b") is None

    def test_always(self):
        """Succeeds without consuming"""
        assert always(5)("rest") == ParseResult(5, "rest")

    def test_transform(self):
        """Maps values of successful parses only"""
        parser = transform(match_pattern(r"\d+"), int)
        assert parser("42x") == ParseResult(42, "x")
        assert parser("x") is None


class TestAlgebra:

    def test_any_of_order_matters(self):
        """First successful alternative wins"""
        parser = any_of(match_pattern("a"), match_pattern("a+"))
        assert parser("aaa") == ParseResult("a", "aa")

        parser = any_of(match_pattern("a+"), match_pattern("a"))
        assert parser("aaa") == ParseResult("aaa", "")

    def test_any_of_fails_when_all_fail(self):
        """No alternative, no result"""
        parser = any_of(match_char("x"), match_char("y"))
        assert parser("z") is None

    def test_any_of_falsy_value_is_success(self):
        """An empty value still counts as success"""
        parser = any_of(always(""), always("second"))
        assert parser("t") == ParseResult("", "t")

    def test_all_of_collects_values(self):
        """Values are collected in order, discarded ones skipped"""
        parser = all_of(match_char("a"), discard(match_char("b")), match_char("c"))
        assert parser("abcd") == ParseResult(["a", "c"], "d")

    def test_all_of_fails_as_a_whole(self):
        """A failing step gives no partial result"""
        parser = all_of(match_char("a"), match_char("b"), match_char("c"))
        assert parser("abx") is None

    def test_all_of_empty(self):
        """Empty sequence succeeds without consuming"""
        assert all_of()("abc") == ParseResult([], "abc")

    def test_nested_composition(self):
        """Combinators compose as values"""
        digit = match_pattern(r"\d")
        pair = all_of(digit, discard(match_char(",")), digit)
        parser = any_of(pair, transform(digit, lambda d: [d]))

        assert parser("1,2") == ParseResult(["1", "2"], "")
        assert parser("1;2") == ParseResult(["1"], ";2")


class TestRepetition:

    def test_many_collects_until_failure(self):
        """Runs repeat while they succeed"""
        parser = many(match_pattern(r"\d"))
        assert parser("123x") == ParseResult(["1", "2", "3"], "x")

    def test_many_zero_runs(self):
        """No run at all is still a success"""
        assert many(match_char("a"))("bcd") == ParseResult([], "bcd")
        assert many(match_char("a"))("") == ParseResult([], "")

    def test_many_skips_discarded(self):
        """Discarded values are not collected"""
        parser = many(any_of(match_pattern(r"\d"), discard(match_char(","))))
        assert parser("1,2,x") == ParseResult(["1", "2"], "x")

    def test_many_stops_on_empty_match(self):
        """A run that consumes nothing ends the repetition"""
        assert many(always("x"))("abc") == ParseResult([], "abc")
        assert many(match_pattern(r"a*"))("aab") == ParseResult(["aa"], "b")

    def test_many_long_input(self):
        """Long repetitions do not grow the call stack"""
        parser = many(all_of(discard(match_char(",")), match_pattern(r"\d")))
        result = parser(",1" * 5000)
        assert len(result.value) == 5000
        assert result.tail == ""
