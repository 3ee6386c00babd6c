"""Referential integrity checks and rule-based model suggestions.

Both functions are total over any document that made it through
``parse_document``: they report problems, they never raise.
"""

from __future__ import annotations

import math
import operator
from collections.abc import Iterable, Sequence
from typing import Any

from routing_studio.routing.types import (
    ClassRule,
    IssueSummary,
    LegacyClassPreference,
    LegacyExplicitPreference,
    MetricRule,
    RoutingDocument,
    Severity,
    TagRule,
    ValidationIssue,
)

_COMPARATORS = {
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
}


def provider_of(model_id: str) -> str | None:
    """Return the ``provider`` part of ``provider:name``, or None if there isn't one."""
    idx = model_id.find(":")
    if idx <= 0:
        return None
    return model_id[:idx]


def _duplicates(seq: Sequence[str]) -> list[str]:
    """Distinct values that appear more than once, in order of first repeat."""
    seen: set[str] = set()
    dupes: dict[str, None] = {}
    for item in seq:
        if item in seen:
            dupes[item] = None
        seen.add(item)
    return list(dupes)


def validate_routing(doc: RoutingDocument) -> list[ValidationIssue]:
    """Return every integrity issue in *doc*, grouped by check.

    Only three things are errors: a default pointing at a missing class
    (licensed or unlicensed) and a provider map where nothing is enabled.
    Everything else still routes, just with less metadata or fewer
    fallbacks, so it is reported as a warning.
    """
    issues: list[ValidationIssue] = []

    def warn(path: str, message: str) -> None:
        issues.append(ValidationIssue(Severity.WARNING, path, message))

    def error(path: str, message: str) -> None:
        issues.append(ValidationIssue(Severity.ERROR, path, message))

    class_keys = set(doc.classes)
    model_keys = set(doc.models)
    provider_keys = set(doc.providers)

    # Defaults
    if doc.defaults.licensed not in class_keys:
        error("defaults.licensed", f"Unknown class '{doc.defaults.licensed}'.")
    if doc.defaults.unlicensed not in class_keys:
        error("defaults.unlicensed", f"Unknown class '{doc.defaults.unlicensed}'.")

    # Class sequences
    for class_name, seq in doc.classes.items():
        if not seq:
            warn(f"classes.{class_name}", "Empty class: routing will have no fallbacks.")
        dupes = _duplicates(seq)
        if dupes:
            warn(f"classes.{class_name}", f"Duplicate model entries: {', '.join(dupes)}.")

    # Class entries
    for class_name, seq in doc.classes.items():
        for i, model_id in enumerate(seq):
            path = f"classes.{class_name}[{i}]"
            if model_id not in model_keys:
                warn(
                    path,
                    f"Model '{model_id}' is not defined in 'models'. "
                    "It will route, but you lose metadata & scoring.",
                )
            provider = provider_of(model_id)
            if provider and provider not in provider_keys:
                warn(path, f"Provider '{provider}' is not defined in 'providers'.")

    # Models
    for model_id in doc.models:
        provider = provider_of(model_id)
        if provider and provider not in provider_keys:
            warn(f"models.{model_id}", f"Model provider '{provider}' is missing from 'providers'.")

    # Providers
    if doc.providers and not any(cfg.enabled for cfg in doc.providers.values()):
        error("providers", "All providers are disabled. Routing will have no valid targets.")

    # Legacy preferences
    for key, pref in (doc.legacy_preference_map or {}).items():
        match pref:
            case LegacyClassPreference(class_=target) if target not in class_keys:
                warn(f"legacyPreferenceMap.{key}", f"Legacy key maps to unknown class '{target}'.")
            case LegacyExplicitPreference(model=target) if target not in model_keys:
                warn(f"legacyPreferenceMap.{key}", f"Legacy key maps to unknown model '{target}'.")
            case LegacyClassPreference() | LegacyExplicitPreference():
                pass

    return issues


def summarize_issues(issues: Iterable[ValidationIssue]) -> IssueSummary:
    """Count issues by severity."""
    counts = {Severity.ERROR: 0, Severity.WARNING: 0, Severity.INFO: 0}
    for issue in issues:
        counts[issue.severity] += 1
    return IssueSummary(
        errors=counts[Severity.ERROR],
        warnings=counts[Severity.WARNING],
        infos=counts[Severity.INFO],
    )


def _as_finite_number(value: Any) -> float | None:
    """Coerce *value* to a finite float, or None when it isn't numeric."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _matches(rule: ClassRule, model: Any) -> bool:
    match rule:
        case TagRule(tag=tag):
            return tag in model.tags
        case MetricRule(metric=metric, op=op, value=threshold):
            number = _as_finite_number(model.metric(metric))
            return number is not None and _COMPARATORS[op](number, threshold)
    return False


def suggest_models_for_class(doc: RoutingDocument, rules: Sequence[ClassRule]) -> list[str]:
    """Model ids satisfying every rule, best reasoning first.

    An empty rule list matches every model. A metric rule against a missing
    or non-numeric field fails rather than passing silently.
    """
    out = [
        model_id
        for model_id, info in doc.models.items()
        if all(_matches(rule, info) for rule in rules)
    ]
    out.sort(key=lambda model_id: doc.models[model_id].reasoning or 0, reverse=True)
    return out
