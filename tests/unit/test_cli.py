#
# tests/unit/test_cli.py
#
"""
Tests for the refenv command line interface.
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from conftest import make_case, make_stream

from refenv.cli.main import cli
from refenv.cli.utils import LoggingSettings


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestMainCLI:
    def test_cli_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "refenv" in result.output.lower()
        assert "run" in result.output
        assert "parse" in result.output
        assert "config" in result.output

    def test_cli_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "version" in result.output.lower()

    def test_invalid_log_level(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--log-level", "INVALID", "config", "show"])

        assert result.exit_code != 0


class TestLoggingOptions:
    def test_command_options_override_group_options(self, runner: CliRunner) -> None:
        with patch("refenv.cli.utils.setup_logging") as mock_setup:
            result = runner.invoke(cli, ["-l", "ERROR", "--json-logs", "config", "show", "-l", "DEBUG"])

        assert result.exit_code == 0
        mock_setup.assert_called_once_with(level=logging.DEBUG, json_logs=True, log_file=None)

    def test_command_default_level_applies_when_unset(self, runner: CliRunner) -> None:
        with patch("refenv.cli.utils.setup_logging") as mock_setup:
            result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        mock_setup.assert_called_once_with(level=logging.WARNING, json_logs=False, log_file=None)

    def test_settings_fill_unset_values_from_parent(self) -> None:
        parent = LoggingSettings(level="ERROR", file="/tmp/refenv.log", json=True)

        merged = LoggingSettings(level="DEBUG").over(parent)

        assert merged == LoggingSettings(level="DEBUG", file="/tmp/refenv.log", json=True)


class TestParseCommand:
    def test_passing_output(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "t.js.out"
        output.write_text(make_stream([make_case(name="adds numbers")]))

        result = runner.invoke(cli, ["parse", str(output), "--name", "t.js"])

        assert result.exit_code == 0
        assert "adds numbers" in result.output
        assert "PASS" in result.output

    def test_failing_case(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "t.js.out"
        output.write_text(make_stream([make_case(passed="false")]))

        result = runner.invoke(cli, ["parse", str(output), "--name", "t.js"])

        assert result.exit_code == 1
        assert "FAIL" in result.output

    def test_negative_name_inverts_result(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "t.out"
        output.write_text("crashed before reporting\n")

        result = runner.invoke(cli, ["parse", str(output), "--name", "t-n.js", "--exit-code", "3"])

        assert result.exit_code == 0

    def test_parse_failure_is_reported(self, runner: CliRunner, tmp_path: Path) -> None:
        output = tmp_path / "t.out"
        output.write_text("no markers here\n")

        result = runner.invoke(cli, ["parse", str(output), "--name", "t.js"])

        assert result.exit_code == 1
        assert "missing size marker" in result.output


class TestConfigCommands:
    def test_show_defaults(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "DriverConfig" in result.output
        assert "-n.js" in result.output

    def test_show_invalid_file(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "refenv.conf"
        path.write_text("[driver]\nconcurrency = 0\n")

        result = runner.invoke(cli, ["config", "show", "-c", str(path)])

        assert result.exit_code == 1


class TestRunCommand:
    def test_run_suite(self, runner: CliRunner, tmp_path: Path, fake_shell: Path) -> None:
        suite_dir = tmp_path / "ecma"
        suite_dir.mkdir()
        (suite_dir / "pass.js").write_text(make_stream([make_case()]))
        (suite_dir / "crash-n.js").write_text("#exit 2\n")

        result = runner.invoke(
            cli,
            ["run", str(suite_dir), "--executable", str(fake_shell), "--helper-functions", "shell.js"],
        )

        assert result.exit_code == 0, result.output
        assert "ecma" in result.output

    def test_run_suite_with_failure(self, runner: CliRunner, tmp_path: Path, fake_shell: Path) -> None:
        suite_dir = tmp_path / "ecma"
        suite_dir.mkdir()
        (suite_dir / "bad.js").write_text(make_stream([make_case(passed="false", name="broken")]))

        result = runner.invoke(cli, ["run", str(suite_dir), "-e", str(fake_shell), "-j", "2"])

        assert result.exit_code == 1
        assert "bad.js" in result.output
        assert "broken" in result.output

    def test_run_requires_suite(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["run"])

        assert result.exit_code != 0
