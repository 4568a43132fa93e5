"""
Integration tests for scripts/parse_resume.py.

The script is loaded from its path (scripts/ is not a package) and driven
through typer's CliRunner. Logger setup is redirected to the test's tmp dir.
"""

import importlib.util
import json
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

PROJECT_ROOT = Path(__file__).parent.parent.parent
FIXTURES_PATH = PROJECT_ROOT / "tests" / "fixtures"
SCRIPT_PATH = PROJECT_ROOT / "scripts" / "parse_resume.py"

runner = CliRunner()


@pytest.fixture
def script(tmp_path, monkeypatch):
    spec = importlib.util.spec_from_file_location("parse_resume_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    def quiet_logger(log_dir, source="text"):
        logger.remove()
        return log_dir / "intake.log"

    monkeypatch.setattr(module, "setup_intake_logger", quiet_logger)
    monkeypatch.setattr(module, "LOGS_PATH", tmp_path / "logs")
    yield module
    logger.remove()


@pytest.mark.integration
def test_summary_output(script):
    result = runner.invoke(script.app, [str(FIXTURES_PATH / "software_engineer.txt")])

    assert result.exit_code == 0
    assert "name: Priya Raman" in result.output
    assert "=== Experience (2) ===" in result.output
    assert "Northwind Payments" in result.output
    assert "Parsing successful" in result.output


@pytest.mark.integration
def test_json_output(script):
    result = runner.invoke(script.app, [str(FIXTURES_PATH / "software_engineer.txt"), "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["status"] == "ok"
    assert data["resume"]["skills"][0] == "Python"
    assert data["resume"]["keyAchievements"]["title"] == "Key Achievements"


@pytest.mark.integration
def test_diagnostics_listed(script):
    result = runner.invoke(
        script.app, [str(FIXTURES_PATH / "messy_generation.txt"), "--diagnostics"]
    )

    assert result.exit_code == 0
    assert "=== Diagnostics (8) ===" in result.output
    assert "E-mail: sam@example.com" in result.output


@pytest.mark.integration
def test_error_document_exit_code(script):
    result = runner.invoke(script.app, [str(FIXTURES_PATH / "error_response.txt")])

    assert result.exit_code == 2
    assert "Insufficient details provided" in result.output


@pytest.mark.integration
def test_missing_file(script, tmp_path):
    result = runner.invoke(script.app, [str(tmp_path / "nope.txt")])

    assert result.exit_code == 1


@pytest.mark.integration
def test_invalid_config(script, tmp_path):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("entry_markers:\n  SUMMARY: [title]\n")

    result = runner.invoke(
        script.app,
        [str(FIXTURES_PATH / "software_engineer.txt"), "--config", str(config_file)],
    )

    assert result.exit_code == 1


@pytest.mark.integration
def test_malformed_config_file(script, tmp_path):
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("entry_markers: [title\n")

    result = runner.invoke(
        script.app,
        [str(FIXTURES_PATH / "software_engineer.txt"), "--config", str(config_file)],
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
