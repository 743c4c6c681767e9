from __future__ import annotations

import asyncio
import logging

from src.wallet_tasks.domain.repositories import TaskDispatcher, TaskRunner

logger = logging.getLogger(__name__)


class AsyncioTaskDispatcher(TaskDispatcher):
    """
    Runs each dispatched task as a background coroutine on the running event loop.

    ``max_concurrency`` bounds how many tasks execute at the same time; tasks
    beyond the bound wait in PENDING and can still be cancelled.
    """

    def __init__(self, max_concurrency: int | None = None) -> None:
        self._max_concurrency = max_concurrency
        self._semaphore: asyncio.Semaphore | None = None
        self._running: set[asyncio.Task[None]] = set()

    async def dispatch(self, task_id: str, runner: TaskRunner) -> None:
        background = asyncio.create_task(self._run(task_id, runner), name=f"wallet-task-{task_id}")
        # Keep a strong reference until the coroutine finishes.
        self._running.add(background)
        background.add_done_callback(self._running.discard)

    async def _run(self, task_id: str, runner: TaskRunner) -> None:
        try:
            if self._max_concurrency is None:
                await runner(task_id)
                return
            if self._semaphore is None:
                self._semaphore = asyncio.Semaphore(self._max_concurrency)
            async with self._semaphore:
                await runner(task_id)
        except Exception:
            logger.exception("Background task execution crashed", extra={"task_id": task_id})

    @property
    def pending(self) -> int:
        return len(self._running)

    async def drain(self) -> None:
        """Wait for every dispatched task to finish."""
        while self._running:
            await asyncio.gather(*list(self._running), return_exceptions=True)
