"""Tests for CLI interface"""

from __future__ import annotations

import logging

import click
import pytest
import yaml
from click.testing import CliRunner

from retrykit.cli import _die, cli, setup_logging


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("RETRYKIT_POLICY", "RETRYKIT_MAX_RETRY_COUNT", "RETRYKIT_FIRST_FAST_RETRY"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


def _schedule_rows(output: str) -> list[list[str]]:
    """Table rows of the schedule output (log lines and header skipped)"""
    rows = [line.split() for line in output.splitlines()]
    return [row for row in rows if row and row[0].isdigit()]


class TestSetupLogging:
    """Tests for setup_logging function"""

    def test_setup_logging_info_level(self):
        setup_logging(verbose=False)
        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_debug_level(self):
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG


class TestDie:
    """Tests for _die function"""

    def test_die_without_exception(self):
        with pytest.raises(click.ClickException, match="Test error"):
            _die("Test error", verbose=False)

    def test_die_with_exception_verbose(self):
        with pytest.raises(click.ClickException, match="Test error"):
            _die("Test error", verbose=True, exc=ValueError("Test exception"))


class TestScheduleCommand:
    """Tests for the schedule command"""

    def test_default_schedule(self, runner):
        result = runner.invoke(cli, ["schedule", "--attempts", "4", "--seed", "1"])

        assert result.exit_code == 0, result.output
        rows = _schedule_rows(result.output)
        assert len(rows) == 4
        # first retry is immediate with default configuration
        assert rows[0] == ["0", "retry", "0.000"]
        assert all(row[1] == "retry" for row in rows)

    def test_seed_makes_schedule_reproducible(self, runner):
        first = runner.invoke(cli, ["schedule", "-n", "6", "--seed", "42"])
        second = runner.invoke(cli, ["schedule", "-n", "6", "--seed", "42"])
        assert _schedule_rows(first.output) == _schedule_rows(second.output)

    def test_schedule_stops_when_exhausted(self, runner, tmp_path):
        config_file = tmp_path / "retry.yml"
        config_file.write_text(
            yaml.safe_dump({"backoff": {"max_retry_count": 2, "max_backoff": 1}}),
            encoding="utf-8",
        )

        result = runner.invoke(cli, ["--config", str(config_file), "schedule", "-n", "10"])

        assert result.exit_code == 0, result.output
        rows = _schedule_rows(result.output)
        assert [row[0] for row in rows] == ["0", "1", "2", "3"]
        assert rows[-1][1:3] == ["give", "up"]

    def test_policy_override(self, runner):
        result = runner.invoke(cli, ["schedule", "--policy", "no_retry"])

        assert result.exit_code == 0, result.output
        assert "give up" in result.output

    def test_unknown_policy(self, runner):
        result = runner.invoke(cli, ["schedule", "--policy", "linear"])

        assert result.exit_code != 0
        assert "Unknown retry policy" in result.output

    def test_invalid_config_file(self, runner, tmp_path):
        config_file = tmp_path / "bad.yml"
        config_file.write_text("backoff:\n  max_retry_count: 0\n", encoding="utf-8")

        result = runner.invoke(cli, ["--config", str(config_file), "schedule"])

        assert result.exit_code != 0
        assert "Configuration validation failed" in result.output


class TestShowConfigCommand:
    """Tests for the show-config command"""

    def test_show_config_reflects_file(self, runner, tmp_path):
        config_file = tmp_path / "retry.yml"
        config_file.write_text(
            "policy: no_retry\nbackoff:\n  max_retry_count: 5\n", encoding="utf-8"
        )

        result = runner.invoke(cli, ["--config", str(config_file), "show-config"])

        assert result.exit_code == 0, result.output
        assert "policy: no_retry" in result.output
        assert "max_retry_count: 5" in result.output
        assert "first_fast_retry: true" in result.output
