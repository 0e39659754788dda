# File: inflio/features/content_api/service/scope.py
import asyncio
import logging
from typing import Awaitable, Set, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestScope:
    """
    Owns the in-flight requests of one view.

    Closing the scope (the view unmounting) cancels everything still
    pending, so no late response lands on a view that is gone.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()
        self._closed = False

    @property
    def pending(self) -> int:
        return sum(1 for t in self._tasks if not t.done())

    @property
    def closed(self) -> bool:
        return self._closed

    def spawn(self, coro: Awaitable[T]) -> "asyncio.Task[T]":
        """Schedules a request on the running loop and tracks it."""
        if self._closed:
            # Do not leak the un-awaited coroutine
            close = getattr(coro, "close", None)
            if close is not None:
                close()
            raise RuntimeError("RequestScope is closed")

        task = asyncio.ensure_future(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def close(self) -> None:
        """Cancels every pending request and waits for them to unwind. Idempotent."""
        self._closed = True
        tasks = [t for t in self._tasks if not t.done()]
        for task in tasks:
            task.cancel()
        if tasks:
            logger.debug(f"Cancelled {len(tasks)} in-flight requests")
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    async def __aenter__(self) -> "RequestScope":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
