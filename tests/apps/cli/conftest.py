"""Fixtures for CLI tests: a Typer runner and patched client factories."""

from typing import Any

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide Typer CLI test runner.

    Returns:
        CliRunner: Typer test runner instance.
    """
    return CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup(mocker: Any) -> Any:
    """Keep the CLI from replacing pytest's root logging handlers."""
    return mocker.patch("apps.cli.qdrant_sdk_cli.main.setup_logging")


@pytest.fixture
def patch_client(mocker: Any) -> Any:
    """Patch ``get_client`` in a command module; returns the client used inside ``with``.

    Example:
        client, get_client = patch_client("collections")
    """

    def _patch(module: str) -> tuple[Any, Any]:
        get_client = mocker.patch(f"apps.cli.qdrant_sdk_cli.commands.{module}.get_client")
        client = mocker.MagicMock()
        get_client.return_value.__enter__.return_value = client
        return client, get_client

    return _patch
