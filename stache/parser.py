"""
Template driver.

Alternates between consuming plain text and consuming one tag until the
input is exhausted. A tag that does not parse turns the rest of the input
into literal text and is reported as a diagnostic, so parsing itself never
fails.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from . import grammar
from .errors import (
    MalformedTagError, NestingTooDeepError, TemplateSyntaxError, UnterminatedSectionError,
)
from .nodes import TemplateAST, TemplateNode, TextNode

logger = logging.getLogger(__name__)


class DiagnosticKind(enum.Enum):
    """What went wrong with a degraded tag."""
    MALFORMED_TAG = "malformed_tag"
    UNTERMINATED_SECTION = "unterminated_section"
    NESTING_TOO_DEEP = "nesting_too_deep"


@dataclass(frozen=True)
class Diagnostic:
    """
    Problem found while parsing.

    The template region starting at `position` was kept as literal text.
    """
    kind: DiagnosticKind
    message: str
    position: int       # Offset in the source text
    line: int           # 1-based
    column: int         # 1-based

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "position": self.position,
            "line": self.line,
            "column": self.column,
        }


@dataclass(frozen=True)
class Template:
    """Parsed template: top-level nodes plus parse diagnostics."""
    nodes: TemplateAST
    diagnostics: Tuple[Diagnostic, ...] = ()

    def __iter__(self) -> Iterator[TemplateNode]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def __str__(self) -> str:
        return "".join(str(node) for node in self.nodes)


class TemplateParser:
    """
    Builds a Template from source text.

    Section bodies are parsed recursively with the same grammar. An instance
    keeps per-parse state, so use one instance per parse call.

    Sections nested deeper than `max_depth` are not parsed: the opener of
    the first one too deep and the rest of its enclosing body stay text.
    """

    MAX_DEPTH = 64

    def __init__(self, max_depth: int = MAX_DEPTH) -> None:
        self.max_depth = max_depth
        self._tag = grammar.tag_rule(self._parse_body)
        self._source = ""
        # Input length that follows the text being parsed at each nesting level
        self._trailing: List[int] = []
        self._diagnostics: List[Diagnostic] = []
        self._too_deep = False

    def parse(self, source: str) -> Template:
        self._source = source
        self._trailing = []
        self._diagnostics = []
        self._too_deep = False

        nodes = self._parse_nodes(source, 0)

        return Template(nodes=tuple(nodes), diagnostics=tuple(self._diagnostics))

    def _parse_body(self, body: str, after: int) -> Optional[List[TemplateNode]]:
        # One entry per enclosing level, the top level included
        if len(self._trailing) > self.max_depth:
            self._too_deep = True
            return None
        return self._parse_nodes(body, self._trailing[-1] + after)

    def _parse_nodes(self, source: str, trailing: int) -> List[TemplateNode]:
        self._trailing.append(trailing)
        try:
            nodes: List[TemplateNode] = []
            tail = source
            while tail:
                result = grammar.text(tail)
                if result.value:
                    nodes.append(TextNode(result.value))
                tail = result.tail
                if not tail:
                    break

                result = self._tag(tail)
                if result is None:
                    self._degrade(tail, trailing)
                    nodes.append(TextNode(tail))
                    break
                nodes.append(result.value)
                tail = result.tail
            return nodes
        finally:
            self._trailing.pop()

    def _degrade(self, tail: str, trailing: int) -> None:
        position = len(self._source) - trailing - len(tail)
        line, column = self._line_col(position)

        opened = grammar.unterminated_section(tail)
        if self._too_deep:
            self._too_deep = False
            kind = DiagnosticKind.NESTING_TOO_DEEP
            message = f"Sections nested deeper than {self.max_depth} levels"
        elif opened is not None:
            kind = DiagnosticKind.UNTERMINATED_SECTION
            message = f"Section '{opened.value[0]}' is never closed"
        else:
            kind = DiagnosticKind.MALFORMED_TAG
            message = "Malformed tag"

        logger.debug("%s at %d:%d, keeping the rest as text", message, line, column)
        self._diagnostics.append(Diagnostic(kind, message, position, line, column))

    def _line_col(self, position: int) -> Tuple[int, int]:
        line = self._source.count("\n", 0, position) + 1
        line_start = self._source.rfind("\n", 0, position) + 1
        return line, position - line_start + 1


def parse(source: str, *, strict: bool = False) -> Template:
    """
    Parses template text.

    Args:
        source: Template source
        strict: Raise on the first diagnostic instead of degrading to text

    Returns:
        Parsed template; unparsable regions are kept as literal text and
        listed in `Template.diagnostics`

    Raises:
        UnterminatedSectionError: strict mode, a section has no end tag
        MalformedTagError: strict mode, a tag matches no rule
        NestingTooDeepError: strict mode, sections nest deeper than
            `TemplateParser.MAX_DEPTH`
    """
    template = TemplateParser().parse(source)
    if strict and template.diagnostics:
        raise syntax_error(template.diagnostics[0])
    return template


def syntax_error(diagnostic: Diagnostic) -> TemplateSyntaxError:
    """Exception matching a diagnostic."""
    if diagnostic.kind == DiagnosticKind.UNTERMINATED_SECTION:
        return UnterminatedSectionError(diagnostic)
    if diagnostic.kind == DiagnosticKind.NESTING_TOO_DEEP:
        return NestingTooDeepError(diagnostic)
    return MalformedTagError(diagnostic)


__all__ = [
    "DiagnosticKind",
    "Diagnostic",
    "Template",
    "TemplateParser",
    "parse",
    "syntax_error",
]
