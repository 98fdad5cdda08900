"""
Mustache-style templates.

    >>> from stache import parse, render
    >>> render(parse("Hello {{ who }}!"), {"who": "world"})
    'Hello world!'
"""

from __future__ import annotations

from .errors import (
    DataLoadError,
    MalformedTagError,
    NestingTooDeepError,
    StacheUserError,
    TemplateSyntaxError,
    UnterminatedSectionError,
)
from .evaluator import TemplateEvaluator, render
from .parser import Diagnostic, DiagnosticKind, Template, TemplateParser, parse

__all__ = [
    "parse",
    "render",
    "Template",
    "TemplateParser",
    "TemplateEvaluator",
    "Diagnostic",
    "DiagnosticKind",
    "StacheUserError",
    "TemplateSyntaxError",
    "MalformedTagError",
    "UnterminatedSectionError",
    "NestingTooDeepError",
    "DataLoadError",
]
