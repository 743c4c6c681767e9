from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol

from src.wallet_tasks.domain.models.analysis import (
    AnalysisType,
    WalletAnalysis,
    WalletTransaction,
)
from src.wallet_tasks.domain.models.task import Task, TaskPatch
from src.wallet_tasks.domain.models.task_status import TaskStatus

TaskRunner = Callable[[str], Awaitable[None]]


class TaskStore(Protocol):
    async def insert(self, task: Task) -> None:
        """Persist a new task. Raises DuplicateTaskIdError if the id exists."""

    async def find_by_id(self, task_id: str) -> Task | None:
        """Return the task with ``task_id`` or None."""

    async def conditional_update(
        self, task_id: str, expected_status: TaskStatus, patch: TaskPatch
    ) -> bool:
        """Apply ``patch`` only if the stored status equals ``expected_status``."""

    async def list_by_owner(self, wallet_address: str, limit: int) -> list[Task]:
        """Return the owner's tasks, newest first."""


class TaskDispatcher(Protocol):
    async def dispatch(self, task_id: str, runner: TaskRunner) -> None:
        """Schedule execution of ``task_id`` and return without waiting for it."""


class AnalysisProvider(Protocol):
    async def analyze(
        self,
        wallet_address: str,
        transactions: list[WalletTransaction],
        analysis_type: AnalysisType,
    ) -> WalletAnalysis:
        """Produce insights and recommendations for a wallet's transactions."""
