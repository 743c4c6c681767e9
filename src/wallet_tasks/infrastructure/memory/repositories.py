from __future__ import annotations

import itertools
import threading

from src.wallet_tasks.domain.exceptions import DuplicateTaskIdError
from src.wallet_tasks.domain.models.task import Task, TaskPatch
from src.wallet_tasks.domain.models.task_status import TaskStatus
from src.wallet_tasks.domain.repositories import TaskStore


class InMemoryTaskStore(TaskStore):
    """Process-local task storage. Tasks are copied in and out of the store."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._sequence: dict[str, int] = {}
        self._counter = itertools.count()
        # Plain mutex: no awaits happen while it is held, and the store may be
        # shared by several event loops (API thread, worker threads).
        self._lock = threading.Lock()

    async def insert(self, task: Task) -> None:
        with self._lock:
            if task.id in self._tasks:
                raise DuplicateTaskIdError(task.id)
            self._tasks[task.id] = task.model_copy(deep=True)
            self._sequence[task.id] = next(self._counter)

    async def find_by_id(self, task_id: str) -> Task | None:
        with self._lock:
            task = self._tasks.get(task_id)
            return task.model_copy(deep=True) if task is not None else None

    async def conditional_update(
        self, task_id: str, expected_status: TaskStatus, patch: TaskPatch
    ) -> bool:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None or task.status != expected_status:
                return False
            self._tasks[task_id] = patch.apply(task)
            return True

    async def list_by_owner(self, wallet_address: str, limit: int) -> list[Task]:
        with self._lock:
            owned = [task for task in self._tasks.values() if task.wallet_address == wallet_address]
            owned.sort(key=lambda task: (task.created_at, self._sequence[task.id]), reverse=True)
            return [task.model_copy(deep=True) for task in owned[: max(limit, 0)]]
