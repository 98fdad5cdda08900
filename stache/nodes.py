"""
AST nodes of a template.

A closed set of immutable node classes. Every node reports its NodeType;
the evaluator dispatches on it. Section bodies are tuples, so a parsed
tree cannot be changed after construction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class NodeType(Enum):
    """Node kinds."""
    TEXT = "text"
    NAME = "name"
    PRIMITIVE = "primitive"
    ESCAPED = "escaped"
    UNESCAPED = "unescaped"
    SECTION = "section"
    INVERTED_SECTION = "inverted_section"
    HELPER = "helper"
    ARGS = "args"


@dataclass(frozen=True)
class TemplateNode(ABC):
    """Base class for all AST nodes."""

    @abstractmethod
    def get_type(self) -> NodeType:
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        """Template source equivalent of the node."""
        pass


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """Literal text, rendered as is."""
    text: str

    def get_type(self) -> NodeType:
        return NodeType.TEXT

    def _to_string(self) -> str:
        return self.text


@dataclass(frozen=True)
class NameNode(TemplateNode):
    """
    Dotted name: foo, foo.bar.baz

    Resolved against the environment one segment at a time.
    """
    path: str

    @property
    def segments(self) -> Tuple[str, ...]:
        return tuple(self.path.split("."))

    def get_type(self) -> NodeType:
        return NodeType.NAME

    def _to_string(self) -> str:
        return self.path


@dataclass(frozen=True)
class PrimitiveNode(TemplateNode):
    """Source token of a string, number or boolean literal."""
    token: str

    def get_type(self) -> NodeType:
        return NodeType.PRIMITIVE

    def _to_string(self) -> str:
        return self.token


ValueNode = Union[NameNode, PrimitiveNode]


@dataclass(frozen=True)
class EscapedNode(TemplateNode):
    """{{ value }}"""
    inner: ValueNode

    def get_type(self) -> NodeType:
        return NodeType.ESCAPED

    def _to_string(self) -> str:
        return f"{{{{ {self.inner} }}}}"


@dataclass(frozen=True)
class UnescapedNode(TemplateNode):
    """{{{ value }}}"""
    inner: ValueNode

    def get_type(self) -> NodeType:
        return NodeType.UNESCAPED

    def _to_string(self) -> str:
        return f"{{{{{{ {self.inner} }}}}}}"


@dataclass(frozen=True)
class SectionNode(TemplateNode):
    """
    {{# name }} body {{/ name }}

    Body is rendered per list element, once for a mapping or a truthy value,
    and not at all for a falsy value.
    """
    context: NameNode
    body: Tuple[TemplateNode, ...]

    def get_type(self) -> NodeType:
        return NodeType.SECTION

    def _to_string(self) -> str:
        inner = "".join(str(node) for node in self.body)
        return f"{{{{# {self.context} }}}}{inner}{{{{/ {self.context} }}}}"


@dataclass(frozen=True)
class InvertedSectionNode(TemplateNode):
    """{{^ name }} body {{/ name }} - rendered only for a falsy context."""
    context: NameNode
    body: Tuple[TemplateNode, ...]

    def get_type(self) -> NodeType:
        return NodeType.INVERTED_SECTION

    def _to_string(self) -> str:
        inner = "".join(str(node) for node in self.body)
        return f"{{{{^ {self.context} }}}}{inner}{{{{/ {self.context} }}}}"


@dataclass(frozen=True)
class ArgsNode(TemplateNode):
    """Positional helper arguments."""
    values: Tuple[ValueNode, ...] = ()

    def get_type(self) -> NodeType:
        return NodeType.ARGS

    def _to_string(self) -> str:
        return ", ".join(str(value) for value in self.values)


@dataclass(frozen=True)
class HelperNode(TemplateNode):
    """{{% name: arg, arg }}"""
    name: NameNode
    args: ArgsNode

    def get_type(self) -> NodeType:
        return NodeType.HELPER

    def _to_string(self) -> str:
        if not self.args.values:
            return f"{{{{% {self.name} }}}}"
        return f"{{{{% {self.name}: {self.args} }}}}"


# A template body: ordered, immutable sequence of nodes
TemplateAST = Tuple[TemplateNode, ...]


__all__ = [
    "NodeType",
    "TemplateNode",
    "TextNode",
    "NameNode",
    "PrimitiveNode",
    "ValueNode",
    "EscapedNode",
    "UnescapedNode",
    "SectionNode",
    "InvertedSectionNode",
    "ArgsNode",
    "HelperNode",
    "TemplateAST",
]
