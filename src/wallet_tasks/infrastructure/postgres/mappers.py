from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from src.wallet_tasks.domain.models.task import Task, TaskPatch
from src.wallet_tasks.domain.models.task_result import TaskResult
from src.wallet_tasks.infrastructure.postgres.orm import TaskRow


def _aware(value: datetime | None) -> datetime | None:
    # SQLite hands timestamps back without tzinfo; everything is stored as UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class OrmMapper:
    @staticmethod
    def to_task_row(task: Task) -> TaskRow:
        return TaskRow(
            id=task.id,
            task_type=task.task_type,
            parameters=task.parameters,
            status=task.status,
            wallet_address=task.wallet_address,
            user_id=task.user_id,
            created_at=task.created_at,
            executed_at=task.executed_at,
            finished_at=task.finished_at,
            result=OrmMapper.to_result_data(task.result),
            error=task.error,
        )

    @staticmethod
    def to_result_data(result: TaskResult | None) -> dict[str, Any] | None:
        if result is None:
            return None
        return result.model_dump(mode="json")

    @staticmethod
    def to_patch_values(patch: TaskPatch) -> dict[str, Any]:
        values: dict[str, Any] = {"status": patch.status}
        for field in ("executed_at", "finished_at", "error"):
            value = getattr(patch, field)
            if value is not None:
                values[field] = value
        if patch.result is not None:
            values["result"] = OrmMapper.to_result_data(patch.result)
        return values

    @staticmethod
    def to_domain_task(row: TaskRow) -> Task:
        return Task(
            id=row.id,
            task_type=row.task_type,
            parameters=row.parameters or {},
            status=row.status,
            wallet_address=row.wallet_address,
            user_id=row.user_id,
            created_at=_aware(row.created_at),
            executed_at=_aware(row.executed_at),
            finished_at=_aware(row.finished_at),
            result=TaskResult.model_validate(row.result) if row.result is not None else None,
            error=row.error,
        )
