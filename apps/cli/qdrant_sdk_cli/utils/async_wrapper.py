"""Async command wrapper for Typer CLI.

Provides decorator to wrap async commands for synchronous Typer interface.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import wraps
from typing import Any


def async_command(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to run an async command function in a fresh event loop.

    Usage:
        @app.command()
        @async_command
        async def health(ctx: typer.Context) -> None:
            await health_command(ctx.obj)

    Args:
        func: Async function to wrap.

    Returns:
        Synchronous wrapper function that executes the async function.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(func(*args, **kwargs))

    return wrapper


__all__ = ["async_command"]
