"""Tests for the dva-models command-line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dva_parser.cli import app

runner = CliRunner()

# Logs go to stderr; keep them out of the JSON under test
QUIET = ["--log-level", "CRITICAL"]


@pytest.fixture
def project(tmp_path: Path, default_export_model_code: str, syntax_error_code: str) -> Path:
    models = tmp_path / "src" / "models"
    models.mkdir(parents=True)
    (models / "user.js").write_text(default_export_model_code, encoding="utf-8")
    (models / "broken.js").write_text(syntax_error_code, encoding="utf-8")
    (tmp_path / "src" / "app.js").write_text("app.start();", encoding="utf-8")
    return tmp_path


@pytest.mark.parametrize("args", [[], ["parse"], ["scan"], ["find"]], ids=["root", "parse", "scan", "find"])
def test_short_help_flag(args: list[str]) -> None:
    result = runner.invoke(app, [*args, "-h"])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.requires_tree_sitter
def test_parse_prints_models(project: Path) -> None:
    path = project / "src" / "models" / "user.js"
    result = runner.invoke(app, [*QUIET, "parse", str(path)])

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["path"] == str(path)
    assert [m["namespace"] for m in data["models"]] == ["user"]
    assert set(data["models"][0]["reducers"]) == {"save", "clear"}


@pytest.mark.requires_tree_sitter
def test_parse_syntax_error_exits_with_error(project: Path) -> None:
    result = runner.invoke(app, [*QUIET, "parse", str(project / "src" / "models" / "broken.js")])

    assert result.exit_code == 1
    assert "Syntax error" in result.output


def test_parse_missing_file_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, [*QUIET, "parse", str(tmp_path / "missing.js")])

    assert result.exit_code == 1
    assert "Error" in result.output


@pytest.mark.requires_tree_sitter
def test_scan_reports_models_and_errors(project: Path) -> None:
    result = runner.invoke(app, [*QUIET, "scan", str(project)])

    assert result.exit_code == 0
    data = json.loads(result.output)
    namespaces = [m["namespace"] for f in data["files"] for m in f["models"]]
    assert namespaces == ["user"]
    assert [Path(e["path"]).name for e in data["errors"]] == ["broken.js"]


@pytest.mark.requires_tree_sitter
def test_find_action(project: Path) -> None:
    result = runner.invoke(app, [*QUIET, "find", "user/fetch", str(project)])

    assert result.exit_code == 0
    location, code = result.output.split("\n", 1)
    assert location.endswith("user.js:13:5")
    assert code.startswith("*fetch(")


@pytest.mark.requires_tree_sitter
def test_find_unknown_action(project: Path) -> None:
    result = runner.invoke(app, [*QUIET, "find", "user/missing", str(project)])

    assert result.exit_code == 1
    assert "No reducer or effect handles user/missing" in result.output
