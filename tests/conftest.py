"""Shared test fixtures."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import pytest

from routing_studio.routing.templates import create_starter_document
from routing_studio.routing.types import RoutingDocument
from routing_studio.routing.ui_config import MemoryUiConfigStore
from routing_studio.state.editor import RoutingEditor


def model_entry(reasoning: float = 0.5, **overrides: Any) -> dict[str, Any]:
    """A schema-valid model entry as it appears in a routing file."""
    entry = {
        "reasoning": reasoning,
        "latency": 0.5,
        "cost": 0.5,
        "contextTokens": 128000,
        "tools": True,
        "vision": False,
        "tags": [],
    }
    entry.update(overrides)
    return entry


BASE_DOC: dict[str, Any] = {
    "version": 1,
    "providers": {"openai": {"enabled": True, "weight": 0}},
    "defaults": {"licensed": "default", "unlicensed": "default"},
    "classes": {"default": ["openai:gpt-4o-mini"]},
    "models": {"openai:gpt-4o-mini": model_entry(0.55)},
}


def make_doc(**overrides: Any) -> RoutingDocument:
    """Build a document from ``BASE_DOC`` with top-level keys replaced."""
    data = copy.deepcopy(BASE_DOC)
    data.update(overrides)
    return RoutingDocument.model_validate(data)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from ~/.routing-studio."""
    from routing_studio.config.settings import get_settings

    monkeypatch.setattr("routing_studio.config.settings.CONFIG_FILE", tmp_path / "config.json")
    monkeypatch.setenv("ROUTING_STUDIO_UI_CONFIG_FILE", str(tmp_path / "ui_state.json"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def starter() -> RoutingDocument:
    return create_starter_document()


@pytest.fixture
def ui_store() -> MemoryUiConfigStore:
    return MemoryUiConfigStore()


@pytest.fixture
def editor(ui_store: MemoryUiConfigStore) -> RoutingEditor:
    return RoutingEditor(ui_store)


@pytest.fixture
def doc_factory():
    """``doc_factory(classes=..., models=...)`` → a parsed document."""
    return make_doc


@pytest.fixture
def entry():
    """``entry(reasoning, **fields)`` → a raw model entry dict."""
    return model_entry
