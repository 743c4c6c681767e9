from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query

from src.setup.api_config import get_api_settings
from src.wallet_tasks.application.services import TaskService
from src.wallet_tasks.application.templates import TaskTemplate, list_templates
from src.wallet_tasks.domain.exceptions import (
    DuplicateTaskIdError,
    PersistenceError,
    TaskDispatchError,
    TaskNotFoundError,
)
from src.wallet_tasks.domain.models import TaskStatusView
from src.wallet_tasks.presentation.schemas import (
    CancelTaskResponse,
    ExecuteTaskRequest,
    ExecuteTaskResponse,
    TaskHistoryItem,
)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])
logger = logging.getLogger(__name__)

# Instantiate services once (simple DI)
_settings = get_api_settings()
_task_service = TaskService()


@router.post(
    "/execute",
    response_model=ExecuteTaskResponse,
    summary="Create a wallet task",
    description="Stores a PENDING task and starts it in the background. Poll its status by id.",
    responses={400: {"description": "Missing task type or wallet."}, 500: {"description": "Internal server error."}},
)
async def execute_task(body: ExecuteTaskRequest) -> ExecuteTaskResponse:
    if not body.task_type.strip() or not body.wallet_address.strip():
        raise HTTPException(status_code=400, detail="task_type and wallet_address are required")
    try:
        created = await _task_service.create_task(
            body.task_type,
            body.parameters,
            body.wallet_address,
            user_id=body.user_id,
        )
    except (PersistenceError, DuplicateTaskIdError, TaskDispatchError):
        raise HTTPException(status_code=500, detail="Failed to execute task")  # noqa: B904
    return ExecuteTaskResponse(task_id=created.task_id, status=created.status)


@router.get(
    "/status/{task_id}",
    response_model=TaskStatusView,
    summary="Check task status",
    responses={404: {"description": "Task not found."}, 500: {"description": "Internal server error."}},
)
async def task_status(task_id: str) -> TaskStatusView:
    try:
        return await _task_service.get_task_status(task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")  # noqa: B904
    except PersistenceError:
        logger.exception("Failed to get task status", extra={"task_id": task_id})
        raise HTTPException(status_code=500, detail="Failed to get task status")  # noqa: B904


@router.get(
    "/user/{wallet_address}",
    response_model=list[TaskHistoryItem],
    summary="List a wallet's tasks",
    description="Most recent tasks first.",
)
async def user_tasks(
    wallet_address: str,
    limit: int = Query(
        _settings.USER_TASKS_DEFAULT_LIMIT,
        ge=1,
        le=_settings.USER_TASKS_MAX_LIMIT,
        description="Maximum number of tasks to return.",
    ),
) -> list[TaskHistoryItem]:
    try:
        tasks = await _task_service.get_user_tasks(wallet_address, limit)
    except PersistenceError:
        logger.exception("Failed to get user tasks", extra={"wallet_address": wallet_address})
        raise HTTPException(status_code=500, detail="Failed to get user tasks")  # noqa: B904
    return [TaskHistoryItem.from_task(task) for task in tasks]


@router.post(
    "/cancel/{task_id}",
    response_model=CancelTaskResponse,
    summary="Cancel a pending task",
    responses={400: {"description": "Task cannot be cancelled or not found."}},
)
async def cancel_task(task_id: str) -> CancelTaskResponse:
    try:
        cancelled = await _task_service.cancel_task(task_id)
    except PersistenceError:
        logger.exception("Failed to cancel task", extra={"task_id": task_id})
        raise HTTPException(status_code=500, detail="Failed to cancel task")  # noqa: B904
    if not cancelled:
        raise HTTPException(status_code=400, detail="Task cannot be cancelled or not found")
    return CancelTaskResponse(task_id=task_id, cancelled=True)


@router.get(
    "/templates",
    response_model=dict[str, TaskTemplate],
    summary="Task templates",
    description="Starter task requests for common wallet actions.",
)
async def task_templates() -> dict[str, TaskTemplate]:
    return list_templates()
