"""Parse and serialize routing documents.

``parse_document`` never raises for bad input; it returns a ``ParseResult``
so callers at the load boundary can keep the current document and show the
error instead. ``load_document`` is the raising variant for scripts and the CLI.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from routing_studio.routing.errors import (
    InvalidJsonError,
    ParseError,
    SchemaIssue,
    SchemaViolationError,
)
from routing_studio.routing.types import RoutingDocument

logger = logging.getLogger("routing_studio.routing.schema")

JSON_INDENT = 2

# Discriminated unions add the tag value to an error's loc. Only the
# legacy map uses one inside the document.
_UNION_TAGS = {"legacyPreferenceMap": {"class", "explicit"}}


@dataclass(frozen=True)
class ParseResult:
    value: RoutingDocument | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unexpected token {name}")


def _error_path(loc: tuple[int | str, ...]) -> str:
    parts = list(loc)
    tags = _UNION_TAGS.get(str(parts[0])) if parts else None
    if tags and len(parts) >= 3 and parts[2] in tags:
        del parts[2]
    return ".".join(str(p) for p in parts)


def schema_issues(exc: ValidationError) -> list[SchemaIssue]:
    """Flatten a pydantic error into one ``SchemaIssue`` per failed constraint."""
    return [
        SchemaIssue(path=_error_path(err["loc"]), message=err["msg"])
        for err in exc.errors(include_url=False)
    ]


def parse_document(text: str) -> ParseResult:
    """Parse *text* into a ``RoutingDocument``.

    Unknown keys are kept at every level. Models without ``tags`` get an
    empty list.
    """
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        return ParseResult(error=InvalidJsonError(f"Invalid JSON: {exc}"))

    try:
        doc = RoutingDocument.model_validate(data)
    except ValidationError as exc:
        issues = schema_issues(exc)
        logger.debug("Schema validation failed with %d issue(s)", len(issues))
        return ParseResult(error=SchemaViolationError(issues))

    return ParseResult(value=doc)


def serialize_document(doc: RoutingDocument) -> str:
    """Deterministic text form: insertion key order, 2-space indent, trailing newline."""
    return json.dumps(doc.to_json_dict(), indent=JSON_INDENT, ensure_ascii=False) + "\n"


def load_document(path: Path) -> RoutingDocument:
    """Read and parse a routing file, raising ``ParseError`` on failure."""
    result = parse_document(path.read_text(encoding="utf-8"))
    if result.error is not None:
        raise result.error
    return result.value


def write_text_atomic(path: Path, text: str) -> None:
    """Write *text* via a .tmp sibling and replace, so readers never see half a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(path)


def write_document(path: Path, doc: RoutingDocument) -> str:
    """Persist *doc* to *path* and return the text that was written."""
    text = serialize_document(doc)
    write_text_atomic(path, text)
    logger.debug("Wrote %d bytes to %s", len(text), path)
    return text
