"""Expose the CLI Typer app as ``apps.cli.main:app``."""

from __future__ import annotations

from apps.cli.qdrant_sdk_cli.main import app

__all__ = ["app"]
