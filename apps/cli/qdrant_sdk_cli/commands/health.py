"""CLI health command implementation."""

import typer
from rich.console import Console
from rich.table import Table

from apps.cli.qdrant_sdk_cli.deps import get_async_client
from qdrant_sdk import QdrantException
from qdrant_sdk.common.config import QdrantSdkConfig

console = Console()


async def health_command(config: QdrantSdkConfig) -> None:
    """Query the server health endpoint and print title, version and commit.

    Args:
        config: Resolved connection settings.
    """
    try:
        async with get_async_client(config) as client:
            reply = await client.health()
    except (QdrantException, ValueError) as e:
        console.print(f"[red]Qdrant unavailable at {config.qdrant_grpc_url}: {e}[/red]")
        raise typer.Exit(1) from e

    table = Table(title="Qdrant Health")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Address", config.qdrant_grpc_url)
    table.add_row("Title", reply.title)
    table.add_row("Version", reply.version)
    table.add_row("Commit", reply.commit or "-")

    console.print(table)
