"""Mini README: Tests for the settings model and its logging defaults.

The environment label picks the default log level; an explicit
``MONTHBUDGET_LOG_LEVEL`` always wins. The CLI applies the resulting level to
the root logger before running any command.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from main_budget_centre import cli
from monthbudget.configuration import MonthBudgetSettings, get_settings


@pytest.fixture()
def clean_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for name in ["MONTHBUDGET_ENVIRONMENT", "MONTHBUDGET_LOG_LEVEL", "MONTHBUDGET_LOG_FILE"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MONTHBUDGET_DATA_DIRECTORY", str(tmp_path))
    get_settings.cache_clear()
    root_level = logging.getLogger().level
    yield tmp_path
    logging.getLogger().setLevel(root_level)
    get_settings.cache_clear()


@pytest.mark.parametrize(
    "environment, expected",
    [
        ("development", "DEBUG"),
        ("Development", "DEBUG"),
        ("production", "INFO"),
        ("staging", "INFO"),
    ],
)
def test_environment_sets_default_log_level(
    clean_environment: Path, environment: str, expected: str
) -> None:
    settings = MonthBudgetSettings(environment=environment)
    assert settings.log_level is None
    assert settings.effective_log_level == expected


def test_explicit_log_level_wins(clean_environment: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONTHBUDGET_ENVIRONMENT", "development")
    monkeypatch.setenv("MONTHBUDGET_LOG_LEVEL", "warning")

    settings = get_settings()

    assert settings.environment == "development"
    assert settings.effective_log_level == "warning"


def test_default_environment_logs_at_info(clean_environment: Path) -> None:
    settings = get_settings()
    assert settings.environment == "production"
    assert settings.effective_log_level == "INFO"
    assert settings.storage_path == clean_environment.resolve() / "budget.json"


def test_cli_applies_development_log_level(
    clean_environment: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("MONTHBUDGET_ENVIRONMENT", "development")

    result = CliRunner().invoke(cli, ["months"])

    assert result.exit_code == 0, result.output
    assert logging.getLogger().level == logging.DEBUG
