"""Unit tests for the Typer CLI."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from agent_builder.cli.main import app
from agent_builder.ingress.interactive import InteractiveIngress
from agent_builder.ingress.queue import QueueIngress

cli = CliRunner()


@pytest.fixture(autouse=True)
def keep_log_sinks():
    with patch("agent_builder.cli.main.configure_logging"):
        yield


@pytest.fixture
def cli_settings(settings):
    with patch("agent_builder.cli.main.settings", settings):
        yield settings


class TestBuild:
    def test_parses_flags_into_event(self, cli_settings):
        with patch("agent_builder.cli.main.run", return_value=0) as mock_run:
            result = cli.invoke(
                app,
                [
                    "build",
                    "--plugins", "alpha, beta",
                    "--character", "c.json",
                    "--agentId", "a1",
                    "--registry", "registry.example.com",
                ],
            )

        assert result.exit_code == 0
        ingress = mock_run.call_args.args[0]
        assert isinstance(ingress, InteractiveIngress)
        assert ingress.event.plugins == ["alpha", "beta"]
        assert ingress.event.agent_id == "a1"
        assert ingress.event.docker_registry == "registry.example.com"

    def test_failure_exit_code(self, cli_settings):
        with patch("agent_builder.cli.main.run", return_value=1):
            result = cli.invoke(
                app, ["build", "--plugins", "alpha", "--character", "c.json", "--agentId", "a1"]
            )
        assert result.exit_code == 1

    def test_agent_id_required(self, cli_settings):
        result = cli.invoke(app, ["build", "--plugins", "alpha", "--character", "c.json"])
        assert result.exit_code != 0


class TestStart:
    def test_queue_mode(self, cli_settings):
        with patch("agent_builder.cli.main.run", return_value=0) as mock_run:
            result = cli.invoke(app, ["start"])

        assert result.exit_code == 0
        assert isinstance(mock_run.call_args.args[0], QueueIngress)
        assert "ignored" not in result.output

    def test_queue_mode_warns_about_flags(self, cli_settings):
        with patch("agent_builder.cli.main.run", return_value=0) as mock_run:
            result = cli.invoke(app, ["start", "--agentId", "a1", "--registry", "registry.example.com"])

        assert result.exit_code == 0
        assert "--agentId" in result.output
        assert "--registry" in result.output
        assert "ignored in queue mode" in result.output
        assert isinstance(mock_run.call_args.args[0], QueueIngress)

    def test_development_mode_uses_flags(self, cli_settings):
        cli_settings.mode = "development"
        with patch("agent_builder.cli.main.run", return_value=0) as mock_run:
            result = cli.invoke(
                app, ["start", "--plugins", "alpha", "--character", "c.json", "--agentId", "a1"]
            )

        assert result.exit_code == 0
        assert isinstance(mock_run.call_args.args[0], InteractiveIngress)

    def test_development_mode_requires_flags(self, cli_settings):
        cli_settings.mode = "development"
        with patch("agent_builder.cli.main.run") as mock_run:
            result = cli.invoke(app, ["start", "--plugins", "alpha"])

        assert result.exit_code == 1
        assert "--agentId" in result.output
        mock_run.assert_not_called()


class TestGenerate:
    def test_writes_tree_without_toolchain(self, cli_settings, character_file):
        with patch("agent_builder.cli.main.run") as mock_run:
            result = cli.invoke(
                app,
                ["generate", "--plugins", "alpha", "--character", str(character_file), "--agentId", "a1"],
            )

        assert result.exit_code == 0
        mock_run.assert_not_called()
        assert (cli_settings.builds_root / "a1" / "index.ts").is_file()

    def test_invalid_plugin(self, cli_settings, character_file):
        result = cli.invoke(
            app,
            ["generate", "--plugins", "bad-id", "--character", str(character_file), "--agentId", "a1"],
        )
        assert result.exit_code == 1


def test_version():
    result = cli.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "agent-builder v" in result.output


def test_info(cli_settings):
    result = cli.invoke(app, ["info"])
    assert result.exit_code == 0
    assert "agent-creation" in result.output
