"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from StacheUserError.

Programming errors and bugs should NOT inherit from StacheUserError -
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .parser import Diagnostic


class StacheUserError(Exception):
    """
    Base class for all user-facing errors.

    These errors indicate problems that the user can fix:
    broken templates, unreadable data files, bad command-line values.
    """
    pass


class TemplateSyntaxError(StacheUserError):
    """A template could not be parsed in strict mode."""

    def __init__(self, diagnostic: Diagnostic):
        super().__init__(f"{diagnostic.message} at {diagnostic.line}:{diagnostic.column}")
        self.diagnostic = diagnostic
        self.line = diagnostic.line
        self.column = diagnostic.column


class MalformedTagError(TemplateSyntaxError):
    """Tag body matches no grammar rule or has no closing braces."""
    pass


class UnterminatedSectionError(TemplateSyntaxError):
    """Section opened with {{# name }} or {{^ name }} has no {{/ name }}."""
    pass


class NestingTooDeepError(TemplateSyntaxError):
    """Sections nest deeper than the parser allows."""
    pass


class DataLoadError(StacheUserError):
    """Environment data file cannot be read or decoded."""
    pass


__all__ = [
    "StacheUserError",
    "TemplateSyntaxError",
    "MalformedTagError",
    "UnterminatedSectionError",
    "NestingTooDeepError",
    "DataLoadError",
]
