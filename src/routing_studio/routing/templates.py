"""Starter routing document used for "new file"."""

from __future__ import annotations

from routing_studio.routing.types import RoutingDocument

STARTER_FILE_NAME = "starter.routing.json"


def create_starter_document() -> RoutingDocument:
    """A small but valid document: one provider, four classes, three models.

    Returns a fresh object on every call.
    """
    return RoutingDocument.model_validate({
        "version": 1,
        "providers": {
            "openai": {"enabled": True, "weight": 0},
        },
        "defaults": {
            "licensed": "default",
            "unlicensed": "default",
        },
        "classes": {
            "default": ["openai:gpt-4o-mini"],
            "frontier": ["openai:gpt-5.1", "openai:gpt-4.1"],
            "fast": ["openai:gpt-4o-mini"],
            "cheap": ["openai:gpt-4o-mini"],
        },
        "legacyPreferenceMap": {},
        "models": {
            "openai:gpt-4o-mini": {
                "reasoning": 0.55,
                "latency": 0.95,
                "cost": 0.95,
                "contextTokens": 128000,
                "tools": True,
                "vision": True,
                "tags": ["tools", "vision", "fast", "cheap"],
            },
            "openai:gpt-4.1": {
                "reasoning": 0.85,
                "latency": 0.7,
                "cost": 0.5,
                "contextTokens": 128000,
                "tools": True,
                "vision": True,
                "tags": ["tools", "vision", "long"],
            },
            "openai:gpt-5.1": {
                "reasoning": 0.95,
                "latency": 0.65,
                "cost": 0.35,
                "contextTokens": 200000,
                "tools": True,
                "vision": True,
                "tags": ["tools", "vision", "frontier"],
            },
        },
    })
