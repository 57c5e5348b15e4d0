from __future__ import annotations

import importlib
import json
from pathlib import Path

import pytest


def test_console_entrypoint_exposes_app() -> None:
    pytest.importorskip("typer")

    module = importlib.import_module("access_assistant.main")

    assert hasattr(module, "app")
    assert module.app is not None


def test_simulate_applies_spoken_confirmation(tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from access_assistant.main import app

    settings_file = tmp_path / "settings.json"
    result = typer_testing.CliRunner().invoke(
        app,
        ["simulate", "high contrast", "yes", "--settings-file", str(settings_file)],
        catch_exceptions=False,
    )

    assert result.exit_code == 0
    assert "High Contrast has been enabled." in result.stdout
    assert json.loads(settings_file.read_text(encoding="utf-8"))["highContrast"] is True


def test_set_setting_rejects_unknown_values(tmp_path: Path) -> None:
    typer_testing = pytest.importorskip("typer.testing")
    from access_assistant.main import app

    settings_file = tmp_path / "settings.json"
    runner = typer_testing.CliRunner()

    ok = runner.invoke(app, ["set-setting", "colorBlindMode", "deuteranopia", "--settings-file", str(settings_file)])
    bad = runner.invoke(app, ["set-setting", "colorBlindMode", "sepia", "--settings-file", str(settings_file)])

    assert ok.exit_code == 0
    assert bad.exit_code == 2
    assert json.loads(settings_file.read_text(encoding="utf-8"))["colorBlindMode"] == "deuteranopia"
