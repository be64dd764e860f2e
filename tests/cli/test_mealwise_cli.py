"""Tests for the mealwise CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from cli.cli import EXIT_BAD_INPUT, EXIT_INVALID, EXIT_VALID, app

runner = CliRunner()


def _plan(meals: list[dict]) -> dict:
    return {"weekStartDate": "2024-01-01", "settings": {"dinnerCooldown": 5}, "meals": meals}


@pytest.fixture
def valid_plan_file(tmp_path: Path) -> Path:
    path = tmp_path / "valid.json"
    path.write_text(
        json.dumps(
            _plan([
                {"dayOfWeek": "Monday", "mealType": "dinner", "recipeId": "chili", "recipeName": "Chili"},
                {"dayOfWeek": "Tuesday", "mealType": "dinner", "recipeId": "stew", "recipeName": "Stew"},
            ])
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def invalid_plan_file(tmp_path: Path) -> Path:
    path = tmp_path / "invalid.json"
    path.write_text(
        json.dumps(
            _plan([
                {"dayOfWeek": "Monday", "mealType": "dinner", "recipeId": "chili", "recipeName": "Chili"},
                {"dayOfWeek": "Wednesday", "mealType": "dinner", "recipeId": "chili", "recipeName": "Chili"},
            ])
        ),
        encoding="utf-8",
    )
    return path


def test_valid_plan_exits_zero(valid_plan_file: Path):
    result = runner.invoke(app, ["validate", str(valid_plan_file)])

    assert result.exit_code == EXIT_VALID
    assert "Meal plan is valid" in result.output


def test_invalid_plan_exits_one(invalid_plan_file: Path):
    result = runner.invoke(app, ["validate", str(invalid_plan_file)])

    assert result.exit_code == EXIT_INVALID
    assert "Meal plan is invalid" in result.output
    assert "2 days apart, requires 5" in result.output


def test_output_file_holds_response(invalid_plan_file: Path, tmp_path: Path):
    output = tmp_path / "response.json"

    result = runner.invoke(app, ["validate", str(invalid_plan_file), "--json", "--diagnostics", "--output", str(output)])

    assert result.exit_code == EXIT_INVALID
    body = json.loads(output.read_text(encoding="utf-8"))
    assert body["is_valid"] is False
    assert [f["kind"] for f in body["findings"]] == ["cooldown_violation", "batch_undeclared_repeat"]
    assert body["diagnostics"]


def test_missing_file_exits_two(tmp_path: Path):
    result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])

    assert result.exit_code == EXIT_BAD_INPUT


def test_malformed_json_exits_two(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == EXIT_BAD_INPUT
    assert "not valid JSON" in result.output


def test_invalid_request_exits_two(tmp_path: Path):
    path = tmp_path / "bad-settings.json"
    path.write_text(json.dumps({"weekStartDate": "2024-01-01", "settings": {"macroMode": "keto"}}), encoding="utf-8")

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == EXIT_BAD_INPUT
    assert "not a valid meal plan request" in result.output


def test_server_configures_logging_before_starting(monkeypatch: pytest.MonkeyPatch):
    calls: list[tuple[str, object]] = []
    monkeypatch.setattr("cli.cli.setup_logger", lambda level, log_file: calls.append(("logging", level)))
    monkeypatch.setattr("cli.cli.uvicorn.run", lambda app_path, **kwargs: calls.append(("uvicorn", kwargs)))

    result = runner.invoke(app, ["server", "--port", "9001", "--debug"])

    assert result.exit_code == 0
    assert calls[0] == ("logging", "DEBUG")
    assert calls[1] == ("uvicorn", {"host": "127.0.0.1", "port": 9001, "reload": False, "log_level": "debug"})
