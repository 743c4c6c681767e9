from __future__ import annotations

import asyncio
import logging

from celery import Celery

from src.wallet_tasks.domain.repositories import TaskDispatcher, TaskRunner

logger = logging.getLogger(__name__)

EXECUTE_TASK_NAME = "execute_wallet_task"


class CeleryTaskDispatcher(TaskDispatcher):
    """
    Hands task ids to Celery workers, which run them against the shared store.

    The in-process ``runner`` is not used: the worker builds its own TaskService.
    """

    def __init__(self, celery_app_instance: Celery, queue: str | None = None) -> None:
        self._celery_app = celery_app_instance
        self._queue = queue

    async def dispatch(self, task_id: str, runner: TaskRunner) -> None:
        """
        Enqueue the task id; the Celery task id mirrors the wallet task id.
        """
        await asyncio.to_thread(
            self._celery_app.send_task,
            EXECUTE_TASK_NAME,
            args=[task_id],
            queue=self._queue,
            task_id=task_id,
        )
        logger.info("Task sent to Celery", extra={"task_id": task_id, "queue": self._queue})
