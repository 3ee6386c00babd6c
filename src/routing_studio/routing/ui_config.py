"""UI config sidecar: defaults plus pluggable load/save stores.

The UI config lives outside the routing document and outside undo history.
Callers own when it is loaded (once per session) and saved (on every edit).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from routing_studio.config.constants import UI_CONFIG_FILE, UI_CONFIG_KEY
from routing_studio.routing.schema import write_text_atomic
from routing_studio.routing.types import ClassMeta, MetricDefinition, UiConfig

logger = logging.getLogger("routing_studio.routing.ui_config")


def default_ui_config() -> UiConfig:
    """Built-in metric definitions and class labels."""
    return UiConfig(
        metric_definitions=[
            MetricDefinition(
                key="reasoning",
                label="Reasoning",
                description="0..1 where higher means better reasoning/quality.",
            ),
            MetricDefinition(
                key="latency",
                label="Speed",
                description="0..1 where higher means faster (lower latency).",
            ),
            MetricDefinition(
                key="cost",
                label="Cost efficiency",
                description="0..1 where higher means cheaper / better value.",
            ),
        ],
        class_meta={
            "default": ClassMeta(
                key="default", label="Default",
                description="Balanced routing for general usage.",
            ),
            "frontier": ClassMeta(
                key="frontier", label="Frontier",
                description="Highest capability models (often higher cost).",
            ),
            "fast": ClassMeta(key="fast", label="Fast", description="Low latency models."),
            "cheap": ClassMeta(key="cheap", label="Cheap", description="Low cost models."),
            "long": ClassMeta(
                key="long", label="Long context",
                description="Models suited to long context windows.",
            ),
        },
    )


def dump_ui_config(cfg: UiConfig) -> str:
    return json.dumps(cfg.model_dump(mode="json", by_alias=True, exclude_none=True))


def parse_ui_config(raw: str | None) -> UiConfig:
    """Parse a stored blob, falling back to defaults when it is unusable."""
    if not raw:
        return default_ui_config()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.warning("Stored UI config is not valid JSON, using defaults: %s", exc)
        return default_ui_config()

    if not isinstance(data, dict) or not data.get("metricDefinitions") or "classMeta" not in data:
        logger.warning("Stored UI config is missing required fields, using defaults")
        return default_ui_config()

    try:
        return UiConfig.model_validate(data)
    except ValidationError as exc:
        logger.warning("Stored UI config failed validation, using defaults: %s", exc)
        return default_ui_config()


class UiConfigStore(Protocol):
    def load(self) -> UiConfig: ...

    def save(self, cfg: UiConfig) -> None: ...


class MemoryUiConfigStore:
    """Keeps the serialized blob in memory. Useful for tests and embedding."""

    def __init__(self, raw: str | None = None) -> None:
        self.raw = raw

    def load(self) -> UiConfig:
        return parse_ui_config(self.raw)

    def save(self, cfg: UiConfig) -> None:
        self.raw = dump_ui_config(cfg)


class JsonFileUiConfigStore:
    """A small JSON key-value file; the UI config is one value in it.

    Other keys in the file are left alone on save.
    """

    def __init__(self, path: Path | None = None, key: str = UI_CONFIG_KEY) -> None:
        self._path = path or UI_CONFIG_FILE
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Failed to read UI state file %s: %s", self._path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> UiConfig:
        raw = self._read_all().get(self._key)
        if raw is not None and not isinstance(raw, str):
            raw = None
        return parse_ui_config(raw)

    def save(self, cfg: UiConfig) -> None:
        data = self._read_all()
        data[self._key] = dump_ui_config(cfg)
        write_text_atomic(self._path, json.dumps(data, indent=2) + "\n")
        logger.debug("Saved UI config to %s", self._path)
