"""
Template grammar.

Every rule is a parser built from the combinators in `combinators`.
Section rules need to parse their bodies with the full template grammar,
so they are produced by factories that take the body parser as an argument;
the template driver supplies it.

Tag precedence inside {{ ... }}:
    escaped value, raw value {{{ }}}, section #, inverted section ^, helper %

The sigils > (partial) and ! (comment) are reserved and have no rule.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional

from .combinators import (
    ParseResult, Parser,
    all_of, always, any_of, consume_until, discard, many, match_char, match_pattern, transform,
)
from .nodes import (
    ArgsNode, EscapedNode, HelperNode, InvertedSectionNode, NameNode, PrimitiveNode,
    SectionNode, TemplateNode, UnescapedNode,
)

OPEN_TAG = "{{"
CLOSE_TAG = "}}"

OPEN_TAG_RE = re.compile(re.escape(OPEN_TAG))
CLOSE_TAG_RE = re.compile(re.escape(CLOSE_TAG))
SPACE_RE = re.compile(r"\s*")

NAME_RE = re.compile(r"[a-z_$][a-z0-9_$]*(?:\.[a-z_$][a-z0-9_$]*)*", re.IGNORECASE)
STRING_RE = re.compile(r"'[^']*'|\"[^\"]*\"")
NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
# true/false followed by an identifier character is a name (e.g. `trueish`)
BOOLEAN_RE = re.compile(r"(?:true|false)(?![A-Za-z0-9_$.])")

# Receives section body text and the length of input left after the body;
# None means the body may not be parsed at this depth
BodyParser = Callable[[str, int], Optional[List[TemplateNode]]]


def end_section_re(name: str) -> re.Pattern[str]:
    """
    End marker {{/ name }} for a section named `name`.

    The closing braces are only looked ahead, the tag rule consumes them.
    """
    return re.compile(r"\{\{/\s*" + re.escape(name) + r"\s*(?=\}\})")


# -------------------- Punctuation --------------------

space = discard(match_pattern(SPACE_RE))
open_tag = discard(match_pattern(OPEN_TAG_RE))
close_tag = discard(match_pattern(CLOSE_TAG_RE))
text = consume_until(OPEN_TAG_RE)


# -------------------- Values --------------------

name = transform(match_pattern(NAME_RE), NameNode)

primitive = transform(
    any_of(
        match_pattern(STRING_RE),
        match_pattern(NUMBER_RE),
        match_pattern(BOOLEAN_RE),
    ),
    PrimitiveNode,
)

# Literals go first so that `true`/`false` are not taken for names
value_expr = any_of(primitive, name)

value = transform(all_of(space, value_expr, space), lambda values: values[0])


# -------------------- Value tags --------------------

escaped_tag = transform(value, EscapedNode)

raw_tag = transform(
    all_of(discard(match_char("{")), value, discard(match_char("}"))),
    lambda values: UnescapedNode(values[0]),
)


# -------------------- Helpers --------------------

# , arg [, arg ...]
more_args = many(
    transform(all_of(discard(match_char(",")), value), lambda values: values[0]),
)


helper_args = transform(
    all_of(
        discard(match_char(":")),
        value,
        more_args,
        space,
    ),
    lambda values: ArgsNode(tuple([values[0]] + values[1])),
)

helper_tag = transform(
    all_of(
        discard(match_char("%")),
        space,
        name,
        space,
        any_of(helper_args, always(ArgsNode())),
        space,
    ),
    lambda values: HelperNode(values[0], values[1]),
)


# -------------------- Sections --------------------

def section_header(sigil: str) -> Parser:
    """`#name }}` / `^name }}` - yields the section NameNode."""
    return transform(
        all_of(discard(match_char(sigil)), space, name, space, close_tag),
        lambda values: values[0],
    )


def section_rule(sigil: str, node_cls: Callable[[NameNode, tuple], TemplateNode],
                 parse_body: BodyParser) -> Parser:
    """
    Section opened by `sigil`.

    The body runs up to the first matching end marker and is parsed
    with `parse_body`. Without an end marker, or when `parse_body`
    refuses the body, the rule fails.
    """
    header = section_header(sigil)

    def parser(tail: str) -> Optional[ParseResult]:
        opened = header(tail)
        if opened is None:
            return None
        context: NameNode = opened.value
        end_re = end_section_re(context.path)

        body = consume_until(end_re)(opened.tail)
        if not body.tail:
            return None
        end = match_pattern(end_re)(body.tail)
        if end is None:
            return None

        nodes = parse_body(body.value, len(body.tail))
        if nodes is None:
            return None
        return ParseResult(node_cls(context, tuple(nodes)), end.tail)

    return parser


def tag_rule(parse_body: BodyParser) -> Parser:
    """One complete tag: {{ ... }}, in order of precedence."""
    return transform(
        all_of(
            open_tag,
            any_of(
                escaped_tag,
                raw_tag,
                section_rule("#", SectionNode, parse_body),
                section_rule("^", InvertedSectionNode, parse_body),
                helper_tag,
            ),
            close_tag,
        ),
        lambda values: values[0],
    )


def unterminated_section(tail: str) -> Optional[ParseResult]:
    """
    Matches a section opening tag at the start of `tail`.

    Used after a failed tag parse to tell an unterminated section apart
    from a malformed tag.
    """
    return all_of(
        open_tag,
        any_of(section_header("#"), section_header("^")),
    )(tail)


__all__ = [
    "OPEN_TAG",
    "CLOSE_TAG",
    "BodyParser",
    "end_section_re",
    "text",
    "name",
    "primitive",
    "value",
    "escaped_tag",
    "raw_tag",
    "helper_args",
    "helper_tag",
    "section_header",
    "section_rule",
    "tag_rule",
    "unterminated_section",
]
