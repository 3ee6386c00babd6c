"""Routing document model, parsing, validation and suggestions."""

from routing_studio.routing.errors import (
    InvalidJsonError,
    ParseError,
    SchemaIssue,
    SchemaViolationError,
)
from routing_studio.routing.schema import ParseResult, parse_document, serialize_document
from routing_studio.routing.types import RoutingDocument, Severity, ValidationIssue
from routing_studio.routing.validate import suggest_models_for_class, validate_routing

__all__ = [
    "InvalidJsonError",
    "ParseError",
    "ParseResult",
    "RoutingDocument",
    "SchemaIssue",
    "SchemaViolationError",
    "Severity",
    "ValidationIssue",
    "parse_document",
    "serialize_document",
    "suggest_models_for_class",
    "validate_routing",
]
