"""Qdrant SDK CLI commands package.

Command implementations are organized by resource:
- health: Server health check
- collections: List, inspect and delete collections
- aliases: List aliases
- snapshots: Create, list and delete collection snapshots
- points: Count points

Shared sub-apps are created here and registered by ``main``.
"""

from __future__ import annotations

import typer

collections_app = typer.Typer(name="collections", help="Manage collections")
aliases_app = typer.Typer(name="aliases", help="Inspect collection aliases")
snapshots_app = typer.Typer(name="snapshots", help="Manage collection snapshots")
points_app = typer.Typer(name="points", help="Inspect points")

__all__ = ["aliases_app", "collections_app", "points_app", "snapshots_app"]
