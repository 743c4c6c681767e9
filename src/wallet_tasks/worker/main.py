import logging
import os

from src.setup.celery_config import get_celery_settings
from src.setup.logging_config import configure_logging
from src.setup.task_config import get_task_settings
from src.wallet_tasks.infrastructure.celery.app import celery_app

logger = logging.getLogger(__name__)


def main() -> None:
    log_level = os.getenv("LOG_LEVEL", "INFO")
    concurrency = os.getenv("CELERY_CONCURRENCY", "2")
    queues = os.getenv("CELERY_QUEUES", get_celery_settings().TASK_QUEUE)
    configure_logging(log_level)
    if get_task_settings().STORAGE_BACKEND == "memory":
        logger.warning("Worker is using the in-memory task store; tasks created by the API are not visible here")
    celery_app.worker_main(
        [
            "worker",
            "-l",
            log_level,
            "--concurrency",
            concurrency,
            "-Q",
            queues,
        ]
    )


if __name__ == "__main__":
    main()
