"""Qdrant SDK CLI - Typer command-line interface over the gRPC client."""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.console import Console

from apps.cli.qdrant_sdk_cli.commands import (
    aliases_app,
    collections_app,
    points_app,
    snapshots_app,
)
from apps.cli.qdrant_sdk_cli.deps import resolve_config
from apps.cli.qdrant_sdk_cli.utils import async_command
from qdrant_sdk import __version__
from qdrant_sdk.common.logging import setup_logging
from qdrant_sdk.common.tracing import TracingContext

app = typer.Typer(
    name="qdrant-sdk",
    help="Qdrant SDK CLI - inspect and manage a Qdrant server over gRPC",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


@app.callback()
def main(
    ctx: typer.Context,
    url: str | None = typer.Option(
        None, "--url", help="gRPC address, e.g. https://qdrant.internal:6334 (QDRANT_GRPC_URL)"
    ),
    api_key: str | None = typer.Option(None, "--api-key", help="API key (QDRANT_API_KEY)"),
    certificate_thumbprint: str | None = typer.Option(
        None,
        "--certificate-thumbprint",
        help="SHA-256 thumbprint of the server certificate (QDRANT_CERTIFICATE_THUMBPRINT)",
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", min=0, help="Deadline for every call in seconds (QDRANT_GRPC_TIMEOUT)"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (LOG_LEVEL)"),
) -> None:
    """Resolve connection settings once for every subcommand."""
    try:
        config = resolve_config(url, api_key, certificate_thumbprint, timeout, log_level)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1) from e

    setup_logging(config.log_level)
    ctx.with_resource(TracingContext())
    logger.debug("CLI command started", extra={"command": ctx.invoked_subcommand})
    ctx.obj = config


@app.command()
def version() -> None:
    """Print the SDK version."""
    console.print(f"qdrant-sdk {__version__}")


@app.command()
@async_command
async def health(ctx: typer.Context) -> None:
    """
    Check that the server answers and show its version.

    Examples:
        qdrant-sdk health
        qdrant-sdk --url https://qdrant.internal:6334 --api-key $KEY health
    """
    from apps.cli.qdrant_sdk_cli.commands.health import health_command

    await health_command(ctx.obj)


# ========== collections ==========


@collections_app.command(name="list")
def collections_list(ctx: typer.Context) -> None:
    """List all collections."""
    from apps.cli.qdrant_sdk_cli.commands.collections import list_collections_command

    list_collections_command(ctx.obj)


@collections_app.command(name="info")
def collections_info(
    ctx: typer.Context,
    collection_name: str = typer.Argument(..., help="Collection name"),
) -> None:
    """Show status, point counts and aliases of a collection."""
    from apps.cli.qdrant_sdk_cli.commands.collections import collection_info_command

    collection_info_command(ctx.obj, collection_name)


@collections_app.command(name="exists")
def collections_exists(
    ctx: typer.Context,
    collection_name: str = typer.Argument(..., help="Collection name"),
) -> None:
    """Exit 0 when the collection exists, 1 otherwise."""
    from apps.cli.qdrant_sdk_cli.commands.collections import collection_exists_command

    collection_exists_command(ctx.obj, collection_name)


@collections_app.command(name="delete")
def collections_delete(
    ctx: typer.Context,
    collection_name: str = typer.Argument(..., help="Collection name"),
    timeout: int | None = typer.Option(None, "--timeout", min=0, help="Server-side timeout (s)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """
    Delete a collection and all its points.

    Examples:
        qdrant-sdk collections delete docs --yes
    """
    if not yes:
        typer.confirm(f"Delete collection '{collection_name}'?", abort=True)

    from apps.cli.qdrant_sdk_cli.commands.collections import delete_collection_command

    delete_collection_command(ctx.obj, collection_name, timeout=timeout)


app.add_typer(collections_app, name="collections")


# ========== aliases ==========


@aliases_app.command(name="list")
def aliases_list(
    ctx: typer.Context,
    collection_name: str | None = typer.Option(
        None, "--collection", "-c", help="Only aliases of this collection"
    ),
) -> None:
    """List aliases and the collections they point at."""
    from apps.cli.qdrant_sdk_cli.commands.aliases import list_aliases_command

    list_aliases_command(ctx.obj, collection_name)


app.add_typer(aliases_app, name="aliases")


# ========== snapshots ==========


@snapshots_app.command(name="list")
def snapshots_list(
    ctx: typer.Context,
    collection_name: str = typer.Argument(..., help="Collection name"),
) -> None:
    """List snapshots of a collection."""
    from apps.cli.qdrant_sdk_cli.commands.snapshots import list_snapshots_command

    list_snapshots_command(ctx.obj, collection_name)


@snapshots_app.command(name="create")
def snapshots_create(
    ctx: typer.Context,
    collection_name: str = typer.Argument(..., help="Collection name"),
) -> None:
    """Create a snapshot of a collection."""
    from apps.cli.qdrant_sdk_cli.commands.snapshots import create_snapshot_command

    create_snapshot_command(ctx.obj, collection_name)


@snapshots_app.command(name="delete")
def snapshots_delete(
    ctx: typer.Context,
    collection_name: str = typer.Argument(..., help="Collection name"),
    snapshot_name: str = typer.Argument(..., help="Snapshot name"),
) -> None:
    """Delete a snapshot of a collection."""
    from apps.cli.qdrant_sdk_cli.commands.snapshots import delete_snapshot_command

    delete_snapshot_command(ctx.obj, collection_name, snapshot_name)


app.add_typer(snapshots_app, name="snapshots")


# ========== points ==========


@points_app.command(name="count")
def points_count(
    ctx: typer.Context,
    collection_name: str = typer.Argument(..., help="Collection name"),
    where: list[str] | None = typer.Option(
        None, "--where", "-w", help="Payload keyword condition KEY=VALUE (repeatable)"
    ),
    exact: bool = typer.Option(True, "--exact/--approximate", help="Exact or estimated count"),
) -> None:
    """
    Count points in a collection.

    Examples:
        qdrant-sdk points count docs
        qdrant-sdk points count docs --where city=Berlin --approximate
    """
    from apps.cli.qdrant_sdk_cli.commands.points import count_points_command

    count_points_command(ctx.obj, collection_name, where=where, exact=exact)


app.add_typer(points_app, name="points")


if __name__ == "__main__":
    app()
