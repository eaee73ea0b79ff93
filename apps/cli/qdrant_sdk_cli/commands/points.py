"""CLI point commands."""

import typer
from qdrant_client import grpc as qdrant_grpc
from rich.console import Console

from apps.cli.qdrant_sdk_cli.deps import get_client
from qdrant_sdk import QdrantException
from qdrant_sdk.common.config import QdrantSdkConfig
from qdrant_sdk.conversions import match

console = Console()


def _parse_filter(where: list[str]) -> dict[str, str]:
    conditions: dict[str, str] = {}
    for item in where:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{item}'", param_hint="--where")
        conditions[key] = value
    return conditions


def count_points_command(
    config: QdrantSdkConfig,
    collection_name: str,
    where: list[str] | None = None,
    exact: bool = True,
) -> None:
    """Count points, optionally restricted to payload keyword matches.

    Args:
        config: Resolved connection settings.
        collection_name: Collection to count in.
        where: ``KEY=VALUE`` keyword conditions; all must match.
        exact: Exact count instead of an estimate.
    """
    conditions = _parse_filter(where or [])
    query_filter = qdrant_grpc.Filter(must=[match(key, value) for key, value in conditions.items()])

    try:
        with get_client(config) as client:
            total = client.count(
                collection_name,
                query_filter=query_filter if conditions else None,
                exact=exact,
            )
    except (QdrantException, ValueError) as e:
        console.print(f"[red]Error counting points in '{collection_name}': {e}[/red]")
        raise typer.Exit(1) from e

    label = "points" if exact else "points (approximate)"
    console.print(f"[bold]{total}[/bold] {label} in '{collection_name}'")
