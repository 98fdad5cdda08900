"""
Template evaluator.

Walks the AST against a read-only environment and produces the output
string. Evaluation is lenient: missing names, non-callable helpers and
falsy section contexts render as empty text instead of raising.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, Optional, Union, cast

from .escaping import escape_html
from .nodes import (
    ArgsNode,
    EscapedNode,
    HelperNode,
    InvertedSectionNode,
    NameNode,
    NodeType,
    PrimitiveNode,
    SectionNode,
    TemplateNode,
    TextNode,
    UnescapedNode,
)
from .parser import Template
from .scope import Scope

logger = logging.getLogger(__name__)

Environment = Mapping[str, Any]


class EvaluationError(Exception):
    """Node of unknown type reached the evaluator."""
    pass


def decode_literal(token: str) -> Union[str, int, float, bool]:
    """
    Decodes a literal token produced by the grammar.

    Quoted strings lose their quotes (no escape sequences are processed),
    digits become int or float, true/false become bool.
    """
    if token == "true":
        return True
    if token == "false":
        return False
    if token[:1] in ("'", '"') and token[-1:] == token[:1] and len(token) >= 2:
        return token[1:-1]
    if "." in token:
        return float(token)
    return int(token)


def stringify(value: Any) -> str:
    """
    Text form of an evaluated value.

    None becomes empty text, booleans are lowercase, integral floats lose
    the fraction (1.0 -> "1") and lists are joined with commas.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


class TemplateEvaluator:
    """
    Evaluates AST nodes.

    Holds no state: the environment is passed to every call and is never
    modified. Sections see their context through a layered Scope.
    """

    def render(self, nodes: Iterable[TemplateNode], env: Optional[Environment] = None) -> str:
        """Concatenates the evaluation of every node."""
        if env is None:
            env = {}
        return "".join(stringify(self.evaluate(node, env)) for node in nodes)

    def evaluate(self, node: TemplateNode, env: Environment) -> Any:
        """
        Evaluates one node.

        Value nodes (name, primitive, args) yield raw values; every other
        node yields text.

        Raises:
            EvaluationError: for an object that is not one of the AST nodes
        """
        node_type = node.get_type()

        if node_type == NodeType.TEXT:
            return cast(TextNode, node).text
        elif node_type == NodeType.NAME:
            return self._evaluate_name(cast(NameNode, node), env)
        elif node_type == NodeType.PRIMITIVE:
            return decode_literal(cast(PrimitiveNode, node).token)
        elif node_type == NodeType.ESCAPED:
            return self._evaluate_escaped(cast(EscapedNode, node), env)
        elif node_type == NodeType.UNESCAPED:
            return stringify(self.evaluate(cast(UnescapedNode, node).inner, env))
        elif node_type == NodeType.SECTION:
            return self._evaluate_section(cast(SectionNode, node), env)
        elif node_type == NodeType.INVERTED_SECTION:
            return self._evaluate_inverted(cast(InvertedSectionNode, node), env)
        elif node_type == NodeType.HELPER:
            return self._evaluate_helper(cast(HelperNode, node), env)
        elif node_type == NodeType.ARGS:
            return self._evaluate_args(cast(ArgsNode, node), env)
        else:
            raise EvaluationError(f"Unknown node type: {node_type}")

    def _evaluate_name(self, node: NameNode, env: Environment) -> Any:
        """
        Resolves a dotted name segment by segment.

        A segment missing at any level makes the whole name absent.
        """
        current: Any = env
        for segment in node.segments:
            if not isinstance(current, Mapping) or segment not in current:
                return None
            current = current[segment]
        return current

    def _evaluate_escaped(self, node: EscapedNode, env: Environment) -> str:
        value = self.evaluate(node.inner, env)
        if not value:
            return ""
        return escape_html(stringify(value))

    def _evaluate_section(self, node: SectionNode, env: Environment) -> str:
        """
        {{# name }}

        - list: body once per element, element keys over the outer environment
        - mapping: body once, mapping keys over the outer environment
        - other truthy value: body once with the outer environment
        - falsy: nothing
        """
        value = self.evaluate(node.context, env)

        if isinstance(value, (list, tuple)):
            parts: List[str] = []
            for item in value:
                item_env = Scope(item, env) if isinstance(item, Mapping) else env
                parts.append(self.render(node.body, item_env))
            return "".join(parts)

        if isinstance(value, Mapping):
            return self.render(node.body, Scope(value, env))

        if value:
            return self.render(node.body, env)

        return ""

    def _evaluate_inverted(self, node: InvertedSectionNode, env: Environment) -> str:
        if self.evaluate(node.context, env):
            return ""
        return self.render(node.body, env)

    def _evaluate_helper(self, node: HelperNode, env: Environment) -> Any:
        """
        {{% name: args }}

        Calls the resolved value with the evaluated arguments. Absent or
        non-callable values render nothing; a failing helper is logged and
        renders nothing.
        """
        func = self.evaluate(node.name, env)
        if not callable(func):
            return None

        args = self._evaluate_args(node.args, env)
        try:
            return func(*args)
        except Exception as e:
            logger.warning(f"Helper '{node.name}' failed: {e}")
            return None

    def _evaluate_args(self, node: ArgsNode, env: Environment) -> List[Any]:
        return [self.evaluate(value, env) for value in node.values]


_evaluator = TemplateEvaluator()


def render(template: Union[Template, Iterable[TemplateNode]], environment: Optional[Environment] = None) -> str:
    """
    Renders a parsed template.

    Args:
        template: Result of `parse` or any sequence of nodes
        environment: Names available to the template; None means empty

    Returns:
        Rendered text
    """
    return _evaluator.render(template, environment)


__all__ = [
    "Environment",
    "EvaluationError",
    "TemplateEvaluator",
    "decode_literal",
    "stringify",
    "render",
]
