"""CLI alias commands."""

import typer
from rich.console import Console
from rich.table import Table

from apps.cli.qdrant_sdk_cli.deps import get_client
from qdrant_sdk import QdrantException
from qdrant_sdk.common.config import QdrantSdkConfig

console = Console()


def list_aliases_command(config: QdrantSdkConfig, collection_name: str | None = None) -> None:
    """Print aliases, optionally only those of one collection."""
    try:
        with get_client(config) as client:
            if collection_name:
                rows = [
                    (alias, collection_name)
                    for alias in client.list_collection_aliases(collection_name)
                ]
            else:
                rows = [
                    (alias.alias_name, alias.collection_name) for alias in client.list_aliases()
                ]
    except (QdrantException, ValueError) as e:
        console.print(f"[red]Error listing aliases: {e}[/red]")
        raise typer.Exit(1) from e

    if not rows:
        console.print("[yellow]No aliases found[/yellow]")
        return

    table = Table(title="Aliases")
    table.add_column("Alias", style="cyan")
    table.add_column("Collection")
    for alias, collection in sorted(rows):
        table.add_row(alias, collection)
    console.print(table)
