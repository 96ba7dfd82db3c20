"""Boundary between the async client side and the blocking dispatcher.

Requests cross the boundary as an operation name, a repository path and
positional string arguments; replies come back as JSON-plain envelopes
``{"success": bool, "data": ...}`` or ``{"success": False, "error": str}``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from gitdesk.git.dispatcher import Dispatcher

__all__ = ["Bridge", "ThreadBridge"]


@runtime_checkable
class Bridge(Protocol):
    """Anything that can carry one operation to a dispatcher and back."""

    async def invoke(
        self, operation: str, repo_path: Path | str, *args: str | None
    ) -> dict[str, Any]: ...


class ThreadBridge:
    """Runs each dispatch on a worker thread.

    The event loop stays responsive while git runs; concurrent calls for
    different repositories proceed in parallel, calls for the same
    repository are serialized by its engine binding.
    """

    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    async def invoke(
        self, operation: str, repo_path: Path | str, *args: str | None
    ) -> dict[str, Any]:
        result = await asyncio.to_thread(
            self._dispatcher.dispatch, operation, repo_path, *args
        )
        return result.to_envelope()
