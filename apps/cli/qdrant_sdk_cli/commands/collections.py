"""CLI collection commands: list, info, exists and delete."""

import typer
from google.protobuf.json_format import MessageToDict
from qdrant_client import grpc as qdrant_grpc
from rich.console import Console
from rich.table import Table

from apps.cli.qdrant_sdk_cli.deps import get_client
from qdrant_sdk import QdrantException
from qdrant_sdk.common.config import QdrantSdkConfig

console = Console()


def _fail(action: str, error: Exception) -> typer.Exit:
    console.print(f"[red]Error {action}: {error}[/red]")
    return typer.Exit(1)


def list_collections_command(config: QdrantSdkConfig) -> None:
    """Print the names of all collections."""
    try:
        with get_client(config) as client:
            names = client.list_collections()
    except (QdrantException, ValueError) as e:
        raise _fail("listing collections", e) from e

    if not names:
        console.print("[yellow]No collections found[/yellow]")
        return

    table = Table(title=f"Collections ({len(names)})")
    table.add_column("Name", style="cyan")
    for name in sorted(names):
        table.add_row(name)
    console.print(table)


def collection_info_command(config: QdrantSdkConfig, collection_name: str) -> None:
    """Print status, point counts and configuration of one collection."""
    try:
        with get_client(config) as client:
            info = client.get_collection_info(collection_name)
            aliases = client.list_collection_aliases(collection_name)
    except (QdrantException, ValueError) as e:
        raise _fail(f"reading collection '{collection_name}'", e) from e

    params = MessageToDict(info.config.params, preserving_proto_field_name=True)

    table = Table(title=f"Collection: {collection_name}")
    table.add_column("Property", style="cyan")
    table.add_column("Value")
    table.add_row("Status", qdrant_grpc.CollectionStatus.Name(info.status))
    table.add_row("Points", str(info.points_count))
    table.add_row("Indexed vectors", str(info.indexed_vectors_count))
    table.add_row("Segments", str(info.segments_count))
    table.add_row("Shards", str(params.get("shard_number", 1)))
    table.add_row("Replication factor", str(params.get("replication_factor", 1)))
    table.add_row("Payload indexes", ", ".join(sorted(info.payload_schema)) or "-")
    table.add_row("Aliases", ", ".join(sorted(aliases)) or "-")
    console.print(table)


def collection_exists_command(config: QdrantSdkConfig, collection_name: str) -> None:
    """Print whether a collection exists; exit 1 when it does not."""
    try:
        with get_client(config) as client:
            exists = client.collection_exists(collection_name)
    except (QdrantException, ValueError) as e:
        raise _fail(f"checking collection '{collection_name}'", e) from e

    if not exists:
        console.print(f"[yellow]Collection '{collection_name}' does not exist[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]Collection '{collection_name}' exists[/green]")


def delete_collection_command(
    config: QdrantSdkConfig, collection_name: str, timeout: int | None = None
) -> None:
    """Delete a collection."""
    try:
        with get_client(config) as client:
            client.delete_collection(collection_name, timeout=timeout)
    except (QdrantException, ValueError) as e:
        raise _fail(f"deleting collection '{collection_name}'", e) from e

    console.print(f"[green]Deleted collection '{collection_name}'[/green]")
