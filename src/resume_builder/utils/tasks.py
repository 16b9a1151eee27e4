"""Cancellable background work tied to the lifetime of one view."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class ScopeClosedError(RuntimeError):
    """Raised when scheduling work on a closed scope."""


class ViewScope:
    """Owns the pending tasks started by a view.

    Closing the scope cancels everything still pending. A result is handed
    to its callback only if the scope is still open when it arrives.
    """

    def __init__(self):
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def busy(self) -> bool:
        return any(not t.done() for t in self._tasks)

    @property
    def closed(self) -> bool:
        return self._closed

    def run(
        self,
        coro: Awaitable[Any],
        on_result: Callable[[Any], None],
        on_error: Callable[[BaseException], None] | None = None,
    ) -> asyncio.Task:
        """Schedule ``coro`` on the running loop."""
        if self._closed:
            if asyncio.iscoroutine(coro):
                coro.close()
            raise ScopeClosedError("View scope is closed")
        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._deliver(t, on_result, on_error))
        return task

    def _deliver(self, task: asyncio.Task, on_result, on_error) -> None:
        self._tasks.discard(task)
        if self._closed or task.cancelled():
            logger.debug("Discarding result of %r", task)
            return
        exc = task.exception()
        if exc is not None:
            if on_error is None:
                logger.error("Background task failed", exc_info=exc)
            else:
                on_error(exc)
            return
        on_result(task.result())

    async def wait(self) -> None:
        """Wait for every pending task to settle."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
            # Let done callbacks run before checking again.
            await asyncio.sleep(0)

    def close(self) -> None:
        self._closed = True
        for task in list(self._tasks):
            task.cancel()

    async def __aenter__(self) -> ViewScope:
        return self

    async def __aexit__(self, *exc) -> None:
        self.close()
