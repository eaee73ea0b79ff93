"""Tests for the aliases CLI command."""

from typing import Any

import pytest
from qdrant_client import grpc as qdrant_grpc
from typer.testing import CliRunner

from apps.cli.main import app


@pytest.mark.unit
class TestAliasesList:
    """Test aliases list."""

    def test_all_aliases(self, cli_runner: CliRunner, patch_client: Any) -> None:
        """Every alias is shown with its collection."""
        client, _ = patch_client("aliases")
        client.list_aliases.return_value = [
            qdrant_grpc.AliasDescription(alias_name="prod", collection_name="docs_v2")
        ]

        result = cli_runner.invoke(app, ["aliases", "list"])

        assert result.exit_code == 0
        assert "prod" in result.stdout
        assert "docs_v2" in result.stdout

    def test_aliases_of_one_collection(self, cli_runner: CliRunner, patch_client: Any) -> None:
        """--collection asks only for that collection's aliases."""
        client, _ = patch_client("aliases")
        client.list_collection_aliases.return_value = ["live"]

        result = cli_runner.invoke(app, ["aliases", "list", "-c", "docs"])

        assert result.exit_code == 0
        assert "live" in result.stdout
        client.list_collection_aliases.assert_called_once_with("docs")
        client.list_aliases.assert_not_called()

    def test_no_aliases(self, cli_runner: CliRunner, patch_client: Any) -> None:
        client, _ = patch_client("aliases")
        client.list_aliases.return_value = []

        result = cli_runner.invoke(app, ["aliases", "list"])

        assert result.exit_code == 0
        assert "No aliases found" in result.stdout
