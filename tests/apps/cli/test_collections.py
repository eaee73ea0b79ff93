"""Tests for the collections CLI commands."""

from typing import Any

import pytest
from qdrant_client import grpc as qdrant_grpc
from typer.testing import CliRunner

from apps.cli.main import app
from qdrant_sdk import QdrantException


@pytest.mark.unit
class TestCollectionsList:
    """Test collections list."""

    def test_lists_names(self, cli_runner: CliRunner, patch_client: Any) -> None:
        """Collection names are printed in a table."""
        client, _ = patch_client("collections")
        client.list_collections.return_value = ["docs", "images"]

        result = cli_runner.invoke(app, ["collections", "list"])

        assert result.exit_code == 0
        assert "Collections (2)" in result.stdout
        assert "docs" in result.stdout
        assert "images" in result.stdout

    def test_empty(self, cli_runner: CliRunner, patch_client: Any) -> None:
        """An empty server says so."""
        client, _ = patch_client("collections")
        client.list_collections.return_value = []

        result = cli_runner.invoke(app, ["collections", "list"])

        assert result.exit_code == 0
        assert "No collections found" in result.stdout

    def test_error_exits_1(self, cli_runner: CliRunner, patch_client: Any) -> None:
        """Client errors are printed and exit 1."""
        client, _ = patch_client("collections")
        client.list_collections.side_effect = QdrantException(
            "list_collections failed: unauthorized", status_code="UNAUTHENTICATED"
        )

        result = cli_runner.invoke(app, ["collections", "list"])

        assert result.exit_code == 1
        assert "Error listing collections" in result.stdout


@pytest.mark.unit
class TestCollectionsInfo:
    """Test collections info."""

    def test_shows_status_and_aliases(self, cli_runner: CliRunner, patch_client: Any) -> None:
        """Status, point count and aliases are shown."""
        client, _ = patch_client("collections")
        client.get_collection_info.return_value = qdrant_grpc.CollectionInfo(
            status=qdrant_grpc.CollectionStatus.Green,
            points_count=1200,
            config=qdrant_grpc.CollectionConfig(
                params=qdrant_grpc.CollectionParams(shard_number=2, replication_factor=1)
            ),
        )
        client.list_collection_aliases.return_value = ["prod"]

        result = cli_runner.invoke(app, ["collections", "info", "docs"])

        assert result.exit_code == 0
        assert "Green" in result.stdout
        assert "1200" in result.stdout
        assert "prod" in result.stdout
        client.get_collection_info.assert_called_once_with("docs")


@pytest.mark.unit
class TestCollectionsExists:
    """Test collections exists."""

    def test_exists(self, cli_runner: CliRunner, patch_client: Any) -> None:
        client, _ = patch_client("collections")
        client.collection_exists.return_value = True

        result = cli_runner.invoke(app, ["collections", "exists", "docs"])

        assert result.exit_code == 0
        assert "exists" in result.stdout

    def test_missing_exits_1(self, cli_runner: CliRunner, patch_client: Any) -> None:
        client, _ = patch_client("collections")
        client.collection_exists.return_value = False

        result = cli_runner.invoke(app, ["collections", "exists", "docs"])

        assert result.exit_code == 1
        assert "does not exist" in result.stdout


@pytest.mark.unit
class TestCollectionsDelete:
    """Test collections delete."""

    def test_delete_with_yes(self, cli_runner: CliRunner, patch_client: Any) -> None:
        """--yes skips confirmation and forwards the timeout."""
        client, _ = patch_client("collections")

        result = cli_runner.invoke(
            app, ["collections", "delete", "docs", "--yes", "--timeout", "30"]
        )

        assert result.exit_code == 0
        assert "Deleted collection 'docs'" in result.stdout
        client.delete_collection.assert_called_once_with("docs", timeout=30)

    def test_declined_confirmation_aborts(self, cli_runner: CliRunner, patch_client: Any) -> None:
        """Answering no leaves the collection alone."""
        client, _ = patch_client("collections")

        result = cli_runner.invoke(app, ["collections", "delete", "docs"], input="n\n")

        assert result.exit_code == 1
        client.delete_collection.assert_not_called()

    def test_confirmed_delete(self, cli_runner: CliRunner, patch_client: Any) -> None:
        client, _ = patch_client("collections")

        result = cli_runner.invoke(app, ["collections", "delete", "docs"], input="y\n")

        assert result.exit_code == 0
        client.delete_collection.assert_called_once_with("docs", timeout=None)
