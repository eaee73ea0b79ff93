"""Tests for the CLI entry point and global options."""

from typing import Any

import pytest
from typer.testing import CliRunner

from apps.cli.main import app
from qdrant_sdk import __version__


@pytest.mark.unit
class TestGlobalOptions:
    """Test the top-level callback."""

    def test_version(self, cli_runner: CliRunner) -> None:
        """The version command prints the SDK version."""
        result = cli_runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_help_lists_command_groups(self, cli_runner: CliRunner) -> None:
        """All command groups are registered."""
        result = cli_runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for group in ("collections", "aliases", "snapshots", "points", "health"):
            assert group in result.stdout

    def test_options_override_environment(
        self,
        cli_runner: CliRunner,
        patch_client: Any,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Command-line options win over environment settings."""
        monkeypatch.setenv("QDRANT_GRPC_URL", "http://from-env:6334")
        client, get_client = patch_client("collections")
        client.list_collections.return_value = []

        result = cli_runner.invoke(
            app,
            [
                "--url",
                "https://qdrant.internal:6334",
                "--api-key",
                "secret",
                "--timeout",
                "3",
                "collections",
                "list",
            ],
        )

        assert result.exit_code == 0
        config = get_client.call_args.args[0]
        assert config.qdrant_grpc_url == "https://qdrant.internal:6334"
        assert config.qdrant_api_key.get_secret_value() == "secret"
        assert config.grpc_timeout == 3.0

    def test_environment_used_without_options(
        self,
        cli_runner: CliRunner,
        patch_client: Any,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Settings come from the environment when no option is given."""
        monkeypatch.setenv("QDRANT_GRPC_URL", "http://from-env:6334")
        client, get_client = patch_client("collections")
        client.list_collections.return_value = []

        result = cli_runner.invoke(app, ["collections", "list"])

        assert result.exit_code == 0
        assert get_client.call_args.args[0].qdrant_grpc_url == "http://from-env:6334"

    def test_invalid_log_level_exits(self, cli_runner: CliRunner) -> None:
        """Invalid settings are reported and exit 1."""
        result = cli_runner.invoke(app, ["--log-level", "verbose", "version"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.stdout

    def test_logging_configured_from_settings(
        self, cli_runner: CliRunner, no_logging_setup: Any
    ) -> None:
        """Logging is set up with the resolved level."""
        result = cli_runner.invoke(app, ["--log-level", "debug", "version"])

        assert result.exit_code == 0
        no_logging_setup.assert_called_once_with("DEBUG")
