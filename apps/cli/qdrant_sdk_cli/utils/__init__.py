"""Helpers shared by CLI commands."""

from apps.cli.qdrant_sdk_cli.utils.async_wrapper import async_command

__all__ = ["async_command"]
