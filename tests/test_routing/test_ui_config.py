"""Tests for the UI config sidecar and its stores."""

from __future__ import annotations

import json
from pathlib import Path

from routing_studio.routing.types import MetricRule, TagRule, UiConfig
from routing_studio.routing.ui_config import (
    JsonFileUiConfigStore,
    MemoryUiConfigStore,
    default_ui_config,
    parse_ui_config,
)


def test_defaults():
    cfg = default_ui_config()
    assert [m.key for m in cfg.metric_definitions] == ["reasoning", "latency", "cost"]
    assert set(cfg.class_meta) == {"default", "frontier", "fast", "cheap", "long"}
    assert all(meta.rules is None for meta in cfg.class_meta.values())


def test_defaults_are_fresh_objects():
    a = default_ui_config()
    a.class_meta["fast"].label = "Changed"
    assert default_ui_config().class_meta["fast"].label == "Fast"


class TestParseFallbacks:
    def test_missing_blob(self):
        assert parse_ui_config(None) == default_ui_config()

    def test_malformed_json(self):
        assert parse_ui_config("{not json") == default_ui_config()

    def test_empty_metric_definitions(self):
        raw = json.dumps({"metricDefinitions": [], "classMeta": {}})
        assert parse_ui_config(raw) == default_ui_config()

    def test_missing_class_meta(self):
        raw = json.dumps({"metricDefinitions": [{"key": "cost", "label": "Cost", "min": 0, "max": 1, "step": 0.1, "higherIsBetter": True}]})
        assert parse_ui_config(raw) == default_ui_config()

    def test_invalid_rule_shape(self):
        raw = json.dumps({
            "metricDefinitions": [{"key": "cost", "label": "Cost", "min": 0, "max": 1, "step": 0.1, "higherIsBetter": True}],
            "classMeta": {"x": {"key": "x", "label": "X", "rules": [{"type": "regex"}]}},
        })
        assert parse_ui_config(raw) == default_ui_config()

    def test_valid_blob(self):
        raw = json.dumps({
            "metricDefinitions": [{"key": "cost", "label": "Cost", "min": 0, "max": 1, "step": 0.1, "higherIsBetter": False}],
            "classMeta": {
                "cheap": {
                    "key": "cheap",
                    "label": "Cheap",
                    "rules": [
                        {"type": "tag", "tag": "cheap"},
                        {"type": "metric", "metric": "cost", "op": ">=", "value": 0.8},
                    ],
                },
            },
        })
        cfg = parse_ui_config(raw)
        assert cfg.metric_definitions[0].higher_is_better is False
        rules = cfg.class_meta["cheap"].rules
        assert isinstance(rules[0], TagRule)
        assert isinstance(rules[1], MetricRule)
        assert rules[1].value == 0.8


def _with_rules() -> UiConfig:
    cfg = default_ui_config()
    cfg.class_meta["cheap"].rules = [TagRule(tag="cheap"), MetricRule(metric="cost", op=">", value=0.7)]
    return cfg


def test_memory_store_round_trip():
    store = MemoryUiConfigStore()
    assert store.load() == default_ui_config()
    store.save(_with_rules())
    assert store.load() == _with_rules()
    assert "higherIsBetter" in store.raw
    assert '"icon"' not in store.raw


class TestJsonFileStore:
    def test_missing_file_gives_defaults(self, tmp_path: Path):
        store = JsonFileUiConfigStore(path=tmp_path / "ui_state.json")
        assert store.load() == default_ui_config()

    def test_save_and_reload(self, tmp_path: Path):
        path = tmp_path / "ui_state.json"
        JsonFileUiConfigStore(path=path).save(_with_rules())
        assert JsonFileUiConfigStore(path=path).load() == _with_rules()

    def test_value_stored_as_blob_under_key(self, tmp_path: Path):
        path = tmp_path / "ui_state.json"
        JsonFileUiConfigStore(path=path).save(default_ui_config())
        data = json.loads(path.read_text(encoding="utf-8"))
        assert isinstance(data["routing-studio.ui-config.v1"], str)

    def test_other_keys_untouched(self, tmp_path: Path):
        path = tmp_path / "ui_state.json"
        path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
        JsonFileUiConfigStore(path=path).save(default_ui_config())
        assert json.loads(path.read_text(encoding="utf-8"))["theme"] == "dark"

    def test_corrupted_file(self, tmp_path: Path):
        path = tmp_path / "ui_state.json"
        path.write_text("NOT VALID JSON{{{", encoding="utf-8")
        assert JsonFileUiConfigStore(path=path).load() == default_ui_config()
