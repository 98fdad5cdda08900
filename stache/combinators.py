"""
Parser combinators.

A parser is any callable that takes the unconsumed input and returns either
a ParseResult (produced value + remaining input) or None on failure.
Failure is never signalled with an exception, so choice and sequencing can
compose failures freely.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from re import Pattern
from typing import Any, Callable, List, Optional, Union


@dataclass(frozen=True)
class ParseResult:
    """Successful parse: produced value and the remaining input."""
    value: Any
    tail: str


Parser = Callable[[str], Optional[ParseResult]]

PatternLike = Union[str, Pattern[str]]


class _Skip:
    """Marker for values that sequencing must not collect."""

    def __repr__(self) -> str:
        return "SKIP"


SKIP = _Skip()


def _compile(pattern: PatternLike) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern)
    return pattern


# -------------------- Primitives --------------------

def match_char(c: str) -> Parser:
    """Succeeds iff the input starts with character `c`; consumes it."""
    def parser(tail: str) -> Optional[ParseResult]:
        if tail.startswith(c):
            return ParseResult(c, tail[len(c):])
        return None
    return parser


def match_pattern(pattern: PatternLike) -> Parser:
    """Succeeds iff `pattern` matches at the very start of the input."""
    regex = _compile(pattern)

    def parser(tail: str) -> Optional[ParseResult]:
        m = regex.match(tail)
        if m is None:
            return None
        return ParseResult(m.group(0), tail[m.end():])
    return parser


def consume_until(pattern: PatternLike) -> Parser:
    """
    Consumes everything before the first match of `pattern`.

    If the pattern does not occur, the whole input is consumed.
    Never fails.
    """
    regex = _compile(pattern)

    def parser(tail: str) -> Optional[ParseResult]:
        m = regex.search(tail)
        if m is None:
            return ParseResult(tail, "")
        return ParseResult(tail[:m.start()], tail[m.start():])
    return parser


def discard(parser: Parser) -> Parser:
    """Runs `parser` and keeps its progress, but drops its value."""
    def wrapped(tail: str) -> Optional[ParseResult]:
        result = parser(tail)
        if result is None:
            return None
        return ParseResult(SKIP, result.tail)
    return wrapped


def always(value: Any) -> Parser:
    """Succeeds without consuming input, yielding `value`."""
    def parser(tail: str) -> Optional[ParseResult]:
        return ParseResult(value, tail)
    return parser


def transform(parser: Parser, fn: Callable[[Any], Any]) -> Parser:
    """Applies `fn` to the value of a successful parse."""
    def wrapped(tail: str) -> Optional[ParseResult]:
        result = parser(tail)
        if result is None:
            return None
        return ParseResult(fn(result.value), result.tail)
    return wrapped


# -------------------- Algebra --------------------

def any_of(*parsers: Parser) -> Parser:
    """
    Ordered choice.

    Alternatives are tried in the given order and the first success wins,
    so the order encodes precedence.
    """
    def parser(tail: str) -> Optional[ParseResult]:
        for alternative in parsers:
            result = alternative(tail)
            if result is not None:
                return result
        return None
    return parser


def all_of(*parsers: Parser) -> Parser:
    """
    Sequencing.

    Runs every parser over the shrinking input and collects the produced
    values (except SKIP) into a list. Fails as a whole if any step fails.
    """
    def parser(tail: str) -> Optional[ParseResult]:
        values: List[Any] = []
        for step in parsers:
            result = step(tail)
            if result is None:
                return None
            if result.value is not SKIP:
                values.append(result.value)
            tail = result.tail
        return ParseResult(values, tail)
    return parser


def many(parser: Parser) -> Parser:
    """
    Repetition: zero or more runs of `parser`, collected into a list.

    Stops at the first failure or at a run that consumes nothing.
    Never fails.
    """
    def wrapped(tail: str) -> Optional[ParseResult]:
        values: List[Any] = []
        while True:
            result = parser(tail)
            if result is None or len(result.tail) == len(tail):
                return ParseResult(values, tail)
            if result.value is not SKIP:
                values.append(result.value)
            tail = result.tail
    return wrapped


__all__ = [
    "ParseResult",
    "Parser",
    "SKIP",
    "match_char",
    "match_pattern",
    "consume_until",
    "discard",
    "always",
    "transform",
    "any_of",
    "all_of",
    "many",
]
