"""Errors raised or returned at the document load boundary."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchemaIssue:
    path: str  # dot-joined, e.g. "providers.openai.weight"
    message: str


class ParseError(Exception):
    """Base class for documents that could not be loaded."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidJsonError(ParseError):
    """The text is not syntactically valid JSON."""


class SchemaViolationError(ParseError):
    """The JSON parsed but does not match the routing file structure."""

    def __init__(self, issues: list[SchemaIssue], message: str = "Schema validation failed.") -> None:
        super().__init__(message)
        self.issues = issues

    def __str__(self) -> str:
        lines = [self.message]
        lines.extend(f"  {i.path or '<root>'}: {i.message}" for i in self.issues)
        return "\n".join(lines)
