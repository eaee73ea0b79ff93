"""CLI snapshot commands: list, create and delete."""

from datetime import UTC, datetime

import typer
from qdrant_client import grpc as qdrant_grpc
from rich.console import Console
from rich.table import Table

from apps.cli.qdrant_sdk_cli.deps import get_client
from qdrant_sdk import QdrantException
from qdrant_sdk.common.config import QdrantSdkConfig

console = Console()


def _created_at(snapshot: qdrant_grpc.SnapshotDescription) -> str:
    if not snapshot.HasField("creation_time"):
        return "-"
    return snapshot.creation_time.ToDatetime(tzinfo=UTC).strftime("%Y-%m-%d %H:%M:%S")


def _size(snapshot: qdrant_grpc.SnapshotDescription) -> str:
    size = float(snapshot.size)
    for unit in ("B", "KiB", "MiB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GiB"


def list_snapshots_command(config: QdrantSdkConfig, collection_name: str) -> None:
    """Print the snapshots of a collection, newest first."""
    try:
        with get_client(config) as client:
            snapshots = client.list_snapshots(collection_name)
    except (QdrantException, ValueError) as e:
        console.print(f"[red]Error listing snapshots of '{collection_name}': {e}[/red]")
        raise typer.Exit(1) from e

    if not snapshots:
        console.print(f"[yellow]No snapshots for '{collection_name}'[/yellow]")
        return

    def sort_key(snapshot: qdrant_grpc.SnapshotDescription) -> datetime:
        if snapshot.HasField("creation_time"):
            return snapshot.creation_time.ToDatetime()
        return datetime.min

    table = Table(title=f"Snapshots: {collection_name}")
    table.add_column("Name", style="cyan")
    table.add_column("Created (UTC)")
    table.add_column("Size", justify="right")
    for snapshot in sorted(snapshots, key=sort_key, reverse=True):
        table.add_row(snapshot.name, _created_at(snapshot), _size(snapshot))
    console.print(table)


def create_snapshot_command(config: QdrantSdkConfig, collection_name: str) -> None:
    try:
        with get_client(config) as client:
            snapshot = client.create_snapshot(collection_name)
    except (QdrantException, ValueError) as e:
        console.print(f"[red]Error creating snapshot of '{collection_name}': {e}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]Created snapshot {snapshot.name} ({_size(snapshot)})[/green]")


def delete_snapshot_command(
    config: QdrantSdkConfig, collection_name: str, snapshot_name: str
) -> None:
    try:
        with get_client(config) as client:
            client.delete_snapshot(collection_name, snapshot_name)
    except (QdrantException, ValueError) as e:
        console.print(f"[red]Error deleting snapshot {snapshot_name}: {e}[/red]")
        raise typer.Exit(1) from e

    console.print(f"[green]Deleted snapshot {snapshot_name}[/green]")
