from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.wallet_tasks.domain.models.task_result import TaskResult
from src.wallet_tasks.domain.models.task_status import TaskStatus


class Task(BaseModel):
    id: str = Field(description="Unique task identifier.")
    task_type: str = Field(
        description="Declared task type. Unknown values fail at execution time."
    )
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Type-specific parameters."
    )
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Current status.")
    wallet_address: str = Field(description="Wallet that owns the task.")
    user_id: str | None = Field(default=None, description="Optional user identifier.")
    created_at: datetime = Field(description="When the task was created.")
    executed_at: datetime | None = Field(
        default=None, description="When execution started."
    )
    finished_at: datetime | None = Field(
        default=None, description="When the task reached a terminal status."
    )
    result: TaskResult | None = Field(
        default=None, description="Outcome of a completed task."
    )
    error: str | None = Field(default=None, description="Failure description.")


class TaskPatch(BaseModel):
    """Fields applied by a conditional status transition."""

    status: TaskStatus
    executed_at: datetime | None = None
    finished_at: datetime | None = None
    result: TaskResult | None = None
    error: str | None = None

    def apply(self, task: Task) -> Task:
        updates = self.model_dump(exclude_none=True, exclude={"result"})
        if self.result is not None:
            updates["result"] = self.result.model_copy(deep=True)
        return task.model_copy(update=updates, deep=True)
