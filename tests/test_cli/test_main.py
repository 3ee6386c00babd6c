"""Tests for the routing-studio CLI."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from routing_studio.cli.main import app, parse_metric_rule
from routing_studio.routing.schema import serialize_document, write_document
from routing_studio.routing.templates import create_starter_document
from routing_studio.routing.types import MetricRule, TagRule
from routing_studio.routing.ui_config import MemoryUiConfigStore, default_ui_config

runner = CliRunner()


@pytest.fixture
def routing_file(tmp_path: Path) -> Path:
    path = tmp_path / "team.routing.json"
    write_document(path, create_starter_document())
    return path


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "routing-studio" in result.output


class TestNew:
    def test_writes_starter(self, tmp_path: Path):
        target = tmp_path / "new.routing.json"
        result = runner.invoke(app, ["new", str(target)])
        assert result.exit_code == 0
        assert target.read_text(encoding="utf-8") == serialize_document(create_starter_document())

    def test_refuses_overwrite(self, routing_file: Path):
        routing_file.write_text("{}", encoding="utf-8")
        result = runner.invoke(app, ["new", str(routing_file)])
        assert result.exit_code == 1
        assert routing_file.read_text(encoding="utf-8") == "{}"

    def test_force_overwrites(self, routing_file: Path):
        routing_file.write_text("{}", encoding="utf-8")
        result = runner.invoke(app, ["new", str(routing_file), "--force"])
        assert result.exit_code == 0
        assert json.loads(routing_file.read_text(encoding="utf-8"))["version"] == 1


class TestValidate:
    def test_clean_file(self, routing_file: Path):
        result = runner.invoke(app, ["validate", str(routing_file)])
        assert result.exit_code == 0
        assert "no issues" in result.output

    def test_errors_exit_nonzero(self, routing_file: Path):
        data = json.loads(routing_file.read_text(encoding="utf-8"))
        data["defaults"]["licensed"] = "missing"
        routing_file.write_text(json.dumps(data), encoding="utf-8")
        result = runner.invoke(app, ["validate", str(routing_file)])
        assert result.exit_code == 1
        assert "defaults.licensed" in result.output

    def test_warnings_only_exit_zero(self, routing_file: Path):
        data = json.loads(routing_file.read_text(encoding="utf-8"))
        data["classes"]["spare"] = []
        routing_file.write_text(json.dumps(data), encoding="utf-8")
        result = runner.invoke(app, ["validate", str(routing_file)])
        assert result.exit_code == 0
        assert "classes.spare" in result.output

    def test_json_output(self, routing_file: Path):
        data = json.loads(routing_file.read_text(encoding="utf-8"))
        data["classes"]["spare"] = []
        routing_file.write_text(json.dumps(data), encoding="utf-8")
        result = runner.invoke(app, ["validate", str(routing_file), "--json"])
        assert result.exit_code == 0
        assert json.loads(result.output) == [
            {"severity": "warning", "path": "classes.spare", "message": "Empty class: routing will have no fallbacks."},
        ]

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_schema_violation_lists_paths(self, routing_file: Path):
        data = json.loads(routing_file.read_text(encoding="utf-8"))
        data["providers"]["openai"]["weight"] = "heavy"
        routing_file.write_text(json.dumps(data), encoding="utf-8")
        result = runner.invoke(app, ["validate", str(routing_file)])
        assert result.exit_code == 1
        assert "providers.openai.weight" in result.output

    def test_missing_file(self, tmp_path: Path):
        result = runner.invoke(app, ["validate", str(tmp_path / "nope.json")])
        assert result.exit_code == 1


class TestSuggest:
    def test_by_tag(self, routing_file: Path):
        result = runner.invoke(app, ["suggest", str(routing_file), "--tag", "long"])
        assert result.exit_code == 0
        assert "openai:gpt-4.1" in result.output
        assert "openai:gpt-5.1" not in result.output

    def test_by_metric(self, routing_file: Path):
        result = runner.invoke(app, ["suggest", str(routing_file), "-m", "cost>=0.9"])
        assert result.exit_code == 0
        assert "openai:gpt-4o-mini" in result.output
        assert "openai:gpt-4.1" not in result.output

    def test_no_match(self, routing_file: Path):
        result = runner.invoke(app, ["suggest", str(routing_file), "-t", "audio"])
        assert result.exit_code == 0
        assert "No models match" in result.output

    def test_requires_rules(self, routing_file: Path):
        result = runner.invoke(app, ["suggest", str(routing_file)])
        assert result.exit_code == 1

    def test_bad_metric_expression(self, routing_file: Path):
        result = runner.invoke(app, ["suggest", str(routing_file), "-m", "cost=>high"])
        assert result.exit_code != 0

    def test_rules_from_class_meta(self, routing_file: Path):
        cfg = default_ui_config()
        cfg.class_meta["frontier"].rules = [TagRule(tag="frontier")]
        store = MemoryUiConfigStore()
        store.save(cfg)
        with patch("routing_studio.cli.main.get_ui_store", return_value=store):
            result = runner.invoke(app, ["suggest", str(routing_file), "--class", "frontier"])
        assert result.exit_code == 0
        assert "openai:gpt-5.1" in result.output
        assert "openai:gpt-4o-mini" not in result.output


@pytest.mark.parametrize(
    ("expr", "expected"),
    [
        ("cost>=0.5", MetricRule(metric="cost", op=">=", value=0.5)),
        (" latency < .8 ", MetricRule(metric="latency", op="<", value=0.8)),
        ("contextTokens>100000", MetricRule(metric="contextTokens", op=">", value=100000)),
    ],
)
def test_parse_metric_rule(expr, expected):
    assert parse_metric_rule(expr) == expected


class TestFormat:
    def test_already_formatted(self, routing_file: Path):
        result = runner.invoke(app, ["format", str(routing_file), "--check"])
        assert result.exit_code == 0

    def test_check_reports_changes(self, routing_file: Path):
        routing_file.write_text(json.dumps(json.loads(routing_file.read_text(encoding="utf-8"))), encoding="utf-8")
        result = runner.invoke(app, ["format", str(routing_file), "--check"])
        assert result.exit_code == 1

    def test_rewrites(self, routing_file: Path):
        compact = json.dumps(json.loads(routing_file.read_text(encoding="utf-8")))
        routing_file.write_text(compact, encoding="utf-8")
        result = runner.invoke(app, ["format", str(routing_file)])
        assert result.exit_code == 0
        assert routing_file.read_text(encoding="utf-8") == serialize_document(create_starter_document())
