from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.wallet_tasks.domain.models import Task, TaskResult, TaskStatus


class ExecuteTaskRequest(BaseModel):
    task_type: str = Field(..., description="Task type, e.g. SAVE_MONEY.")
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Type-specific parameters."
    )
    wallet_address: str = Field(..., description="Wallet that owns the task.")
    user_id: str | None = Field(default=None, description="Optional user identifier.")


class ExecuteTaskResponse(BaseModel):
    task_id: str = Field(..., description="Identifier used to poll the task.")
    status: TaskStatus = Field(..., description="Status right after creation.")


class CancelTaskResponse(BaseModel):
    task_id: str
    cancelled: bool


class TaskHistoryItem(BaseModel):
    id: str
    task_type: str
    parameters: dict[str, Any]
    status: TaskStatus
    created_at: datetime
    executed_at: datetime | None = None
    result: TaskResult | None = None
    error: str | None = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskHistoryItem":
        return cls(
            id=task.id,
            task_type=task.task_type,
            parameters=task.parameters,
            status=task.status,
            created_at=task.created_at,
            executed_at=task.executed_at,
            result=task.result,
            error=task.error,
        )


class HealthResponse(BaseModel):
    status: str
    version: str
