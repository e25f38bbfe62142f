"""
graphmapper/api/routes/__init__.py

Shared helpers used across all route modules.
"""
from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import partial
from typing import Any, TypeVar

from graphmapper.graph.builder import GraphBuilder
from graphmapper.graph.palette import ColorPalette

T = TypeVar("T")


def get_builder() -> GraphBuilder:
    """FastAPI dependency returning a GraphBuilder with its own palette.

    Requests never share color assignments.
    """
    return GraphBuilder(ColorPalette())


async def offload(func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """Run a CPU-bound graph operation in the default thread pool."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(func, *args, **kwargs))
