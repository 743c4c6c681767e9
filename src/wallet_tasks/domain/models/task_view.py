from pydantic import BaseModel, Field

from src.wallet_tasks.domain.models.task import Task
from src.wallet_tasks.domain.models.task_result import TaskResult
from src.wallet_tasks.domain.models.task_status import TaskStatus


class TaskStatusView(BaseModel):
    """Compact representation returned when polling a single task."""

    task_id: str = Field(description="Unique task identifier.")
    status: TaskStatus = Field(description="Current status.")
    result: TaskResult | None = Field(default=None, description="Result, once completed.")
    error: str | None = Field(default=None, description="Error, once failed.")

    @classmethod
    def from_task(cls, task: Task) -> "TaskStatusView":
        return cls(
            task_id=task.id,
            status=task.status,
            result=task.result,
            error=task.error,
        )
