"""Test doubles shared by the test modules."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from src.wallet_tasks.domain.exceptions import AnalysisProviderError
from src.wallet_tasks.domain.models.analysis import (
    AnalysisType,
    WalletAnalysis,
    WalletTransaction,
)
from src.wallet_tasks.domain.models.task import Task, TaskPatch
from src.wallet_tasks.domain.models.task_status import TaskStatus
from src.wallet_tasks.domain.repositories import (
    AnalysisProvider,
    TaskDispatcher,
    TaskRunner,
)
from src.wallet_tasks.infrastructure.memory.repositories import InMemoryTaskStore

WALLET = "0xabc"


class StubAnalysisProvider(AnalysisProvider):
    """Returns a canned analysis and remembers what it was asked."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[WalletTransaction], AnalysisType]] = []

    async def analyze(
        self,
        wallet_address: str,
        transactions: list[WalletTransaction],
        analysis_type: AnalysisType,
    ) -> WalletAnalysis:
        self.calls.append((wallet_address, transactions, analysis_type))
        return WalletAnalysis(
            insights=["You spend most on Fridays"],
            recommendations=["Save 10% of each transfer"],
            summary="Steady spending",
            confidence=80,
        )


class FailingAnalysisProvider(AnalysisProvider):
    async def analyze(self, wallet_address, transactions, analysis_type) -> WalletAnalysis:
        raise AnalysisProviderError("Gemini request failed with status 503")


class RecordingDispatcher(TaskDispatcher):
    """Records dispatched task ids without running them."""

    def __init__(self) -> None:
        self.dispatched: list[str] = []
        self.runners: list[TaskRunner] = []

    async def dispatch(self, task_id: str, runner: TaskRunner) -> None:
        self.dispatched.append(task_id)
        self.runners.append(runner)


class FailingDispatcher(TaskDispatcher):
    async def dispatch(self, task_id: str, runner: TaskRunner) -> None:
        raise RuntimeError("broker unavailable")


class RecordingTaskStore(InMemoryTaskStore):
    """In-memory store that keeps every status transition it applied."""

    def __init__(self) -> None:
        super().__init__()
        self.transitions: dict[str, list[TaskStatus]] = {}

    async def insert(self, task: Task) -> None:
        await super().insert(task)
        self.transitions.setdefault(task.id, []).append(task.status)

    async def conditional_update(
        self, task_id: str, expected_status: TaskStatus, patch: TaskPatch
    ) -> bool:
        applied = await super().conditional_update(task_id, expected_status, patch)
        if applied:
            self.transitions.setdefault(task_id, []).append(patch.status)
        return applied


def make_task(
    task_id: str,
    *,
    wallet_address: str = WALLET,
    task_type: str = "CHECK_BALANCE",
    created_at: datetime | None = None,
    status: TaskStatus = TaskStatus.PENDING,
    parameters: dict[str, Any] | None = None,
) -> Task:
    return Task(
        id=task_id,
        task_type=task_type,
        parameters=parameters or {},
        status=status,
        wallet_address=wallet_address,
        created_at=created_at or datetime(2024, 1, 1, tzinfo=UTC),
    )


def minutes_after_epoch(minutes: int) -> datetime:
    return datetime(2024, 1, 1, tzinfo=UTC) + timedelta(minutes=minutes)
