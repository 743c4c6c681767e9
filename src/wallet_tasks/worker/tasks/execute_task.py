import asyncio
import logging

import inject

from src.setup.app_config import configure_di
from src.wallet_tasks.application.services import TaskService
from src.wallet_tasks.infrastructure.celery.app import celery_app
from src.wallet_tasks.infrastructure.celery.dispatcher import EXECUTE_TASK_NAME

logger = logging.getLogger(__name__)


def run_task(task_id: str, service: TaskService | None = None) -> None:
    """Execute one wallet task on a fresh event loop."""
    if service is None:
        configure_di(worker=True)
        service = inject.instance(TaskService)
    asyncio.run(service.execute_task(task_id))


@celery_app.task(name=EXECUTE_TASK_NAME, bind=True, ignore_result=True)
def execute_wallet_task(self, task_id: str) -> None:
    """
    Celery entry point for a dispatched wallet task.
    Outcomes are written to the task store, not to the Celery result backend.
    """
    logger.info("Worker picked up task", extra={"task_id": task_id, "celery_id": self.request.id})
    run_task(task_id)
