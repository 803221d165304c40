"""Tests for the root CLI group, --help and --examples."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from ctkit import __version__
from ctkit.cli import cli

COMMANDS = ["check", "compile", "define", "show", "validate"]


@pytest.mark.usefixtures("_isolated_project")
class TestRootGroup:
    def test_no_command_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        for command in COMMANDS:
            assert command in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    @pytest.mark.parametrize("command", COMMANDS)
    def test_help(self, cli_runner: CliRunner, command: str) -> None:
        result = cli_runner.invoke(cli, [command, "--help"])
        assert result.exit_code == 0
        assert "--examples" in result.output

    @pytest.mark.parametrize("command", COMMANDS)
    def test_examples(self, cli_runner: CliRunner, command: str) -> None:
        result = cli_runner.invoke(cli, [command, "--examples"])
        assert result.exit_code == 0
        assert "Examples for" in result.output
        assert f"ctkit {command}" in result.output
