import logging
from datetime import UTC, datetime
from typing import Any, cast
from uuid import uuid4

import inject

from src.wallet_tasks.application.executor import TaskExecutor
from src.wallet_tasks.domain.exceptions import (
    DuplicateTaskIdError,
    PersistenceError,
    TaskDispatchError,
    TaskNotFoundError,
)
from src.wallet_tasks.domain.models import (
    Task,
    TaskPatch,
    TaskStatus,
    TaskStatusView,
    TaskType,
)
from src.wallet_tasks.domain.repositories import TaskDispatcher, TaskStore
from src.wallet_tasks.domain.state_machine import ensure_transition

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TaskService:
    """Creates wallet tasks, runs them once, and tracks them through their lifecycle."""

    def __init__(
        self,
        store: TaskStore | None = None,
        executor: TaskExecutor | None = None,
        dispatcher: TaskDispatcher | None = None,
    ) -> None:
        self._store = store or cast(TaskStore, inject.instance(TaskStore))
        self._executor = executor or cast(TaskExecutor, inject.instance(TaskExecutor))
        self._dispatcher = dispatcher or cast(TaskDispatcher, inject.instance(TaskDispatcher))

    async def create_task(
        self,
        task_type: TaskType | str,
        parameters: dict[str, Any] | None,
        wallet_address: str,
        user_id: str | None = None,
    ) -> TaskStatusView:
        """
        Persist a PENDING task and hand it to the dispatcher without waiting for it.

        The type is not checked here; an unknown type fails the task when it runs.
        """
        task = Task(
            id=str(uuid4()),
            task_type=task_type.value if isinstance(task_type, TaskType) else task_type,
            parameters=dict(parameters or {}),
            status=TaskStatus.PENDING,
            wallet_address=wallet_address,
            user_id=user_id,
            created_at=_utcnow(),
        )
        try:
            await self._store.insert(task)
        except (DuplicateTaskIdError, PersistenceError):
            logger.exception("Failed to create task", extra={"task_type": task.task_type})
            raise

        logger.info(
            "Task created",
            extra={"task_id": task.id, "task_type": task.task_type, "wallet_address": wallet_address},
        )
        try:
            await self._dispatcher.dispatch(task.id, self.execute_task)
        except Exception as exc:
            logger.exception("Failed to dispatch task", extra={"task_id": task.id})
            await self._transition(
                task.id,
                TaskStatus.PENDING,
                TaskPatch(status=TaskStatus.CANCELLED, finished_at=_utcnow()),
            )
            raise TaskDispatchError(task.id, str(exc)) from exc

        return TaskStatusView(task_id=task.id, status=TaskStatus.PENDING)

    async def execute_task(self, task_id: str) -> None:
        """
        Run a task once. Handler failures are recorded on the task; store errors
        propagate to the dispatcher, which logs them.
        """
        task = await self._store.find_by_id(task_id)
        if task is None:
            logger.error("Task not found for execution", extra={"task_id": task_id})
            return

        started = await self._transition(
            task_id,
            TaskStatus.PENDING,
            TaskPatch(status=TaskStatus.EXECUTING, executed_at=_utcnow()),
        )
        if not started:
            logger.info(
                "Task is no longer pending, skipping execution",
                extra={"task_id": task_id},
            )
            return

        try:
            result = await self._executor.execute(task)
        except Exception as exc:
            logger.warning(
                "Task execution failed",
                extra={"task_id": task_id, "task_type": task.task_type, "error": str(exc)},
            )
            patch = TaskPatch(
                status=TaskStatus.FAILED,
                error=str(exc) or "Unknown error",
                finished_at=_utcnow(),
            )
        else:
            patch = TaskPatch(status=TaskStatus.COMPLETED, result=result, finished_at=_utcnow())

        if not await self._transition(task_id, TaskStatus.EXECUTING, patch):
            logger.critical(
                "Task left EXECUTING before its outcome was recorded",
                extra={"task_id": task_id, "status": patch.status.value},
            )
            return
        logger.info(
            "Task finished",
            extra={"task_id": task_id, "status": patch.status.value},
        )

    async def get_task_status(self, task_id: str) -> TaskStatusView:
        """Return the current status for the task identified by ``task_id``."""
        task = await self._store.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        return TaskStatusView.from_task(task)

    async def get_user_tasks(self, wallet_address: str, limit: int = 10) -> list[Task]:
        """Return the wallet's most recent tasks, newest first."""
        return await self._store.list_by_owner(wallet_address, limit)

    async def cancel_task(self, task_id: str) -> bool:
        """Cancel a task that has not started executing yet."""
        cancelled = await self._transition(
            task_id,
            TaskStatus.PENDING,
            TaskPatch(status=TaskStatus.CANCELLED, finished_at=_utcnow()),
        )
        if cancelled:
            logger.info("Task cancelled", extra={"task_id": task_id})
        return cancelled

    async def _transition(self, task_id: str, expected: TaskStatus, patch: TaskPatch) -> bool:
        ensure_transition(expected, patch.status)
        return await self._store.conditional_update(task_id, expected, patch)
