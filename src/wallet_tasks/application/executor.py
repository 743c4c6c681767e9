from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from src.wallet_tasks.application import handlers
from src.wallet_tasks.domain.exceptions import UnknownTaskTypeError
from src.wallet_tasks.domain.models.task import Task
from src.wallet_tasks.domain.models.task_result import TaskResult
from src.wallet_tasks.domain.models.task_type import TaskType
from src.wallet_tasks.domain.repositories import AnalysisProvider

logger = logging.getLogger(__name__)

TaskHandler = Callable[[dict[str, Any], str], Awaitable[TaskResult]]


class TaskExecutor:
    """Dispatch table from task type to the handler implementing it."""

    def __init__(self) -> None:
        self._handlers: dict[TaskType, TaskHandler] = {}

    @classmethod
    def default(cls, provider: AnalysisProvider) -> "TaskExecutor":
        """Build an executor with a handler registered for every task type."""
        executor = cls()
        executor.register(TaskType.SAVE_MONEY, handlers.save_money)
        executor.register(TaskType.SEND_MONEY, handlers.send_money)
        executor.register(TaskType.SET_SUBSCRIPTION, handlers.set_subscription)
        executor.register(TaskType.CHECK_BALANCE, handlers.check_balance)
        executor.register(TaskType.ANALYZE_SPENDING, handlers.AnalyzeSpendingHandler(provider))
        executor.register(TaskType.OPTIMIZE_YIELD, handlers.optimize_yield)
        executor.register(TaskType.SET_BUDGET_LIMIT, handlers.set_budget_limit)
        executor.register(TaskType.AUTO_SAVE, handlers.auto_save)
        return executor

    def register(self, task_type: TaskType, handler: TaskHandler) -> None:
        self._handlers[task_type] = handler

    def get_handler(self, task_type: str) -> TaskHandler | None:
        try:
            return self._handlers.get(TaskType(task_type))
        except ValueError:
            return None

    async def execute(self, task: Task) -> TaskResult:
        handler = self.get_handler(task.task_type)
        if handler is None:
            logger.warning(
                "No handler registered for task type",
                extra={"task_id": task.id, "task_type": task.task_type},
            )
            raise UnknownTaskTypeError(task.task_type)
        return await handler(dict(task.parameters), task.wallet_address)
