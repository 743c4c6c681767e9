import inject

from src.setup.analysis_config import AnalysisSettings, get_analysis_settings
from src.setup.celery_config import get_celery_settings
from src.setup.db_config import get_database_settings
from src.setup.task_config import TaskSettings, get_task_settings
from src.wallet_tasks.application.executor import TaskExecutor
from src.wallet_tasks.application.services import TaskService
from src.wallet_tasks.domain.repositories import AnalysisProvider, TaskDispatcher, TaskStore
from src.wallet_tasks.infrastructure.analysis.gemini import GeminiAnalysisProvider
from src.wallet_tasks.infrastructure.analysis.mock import MockAnalysisProvider
from src.wallet_tasks.infrastructure.local.dispatcher import AsyncioTaskDispatcher
from src.wallet_tasks.infrastructure.memory.repositories import InMemoryTaskStore


def build_task_store(settings: TaskSettings, *, null_pool: bool = False) -> TaskStore:
    if settings.STORAGE_BACKEND == "sql":
        from src.wallet_tasks.infrastructure.postgres.orm import PostgresOrm
        from src.wallet_tasks.infrastructure.postgres.repositories import SqlTaskStore

        db_settings = get_database_settings()
        orm = PostgresOrm(db_settings.DATABASE_URL, echo=db_settings.DB_ECHO, null_pool=null_pool)
        return SqlTaskStore(orm)
    return InMemoryTaskStore()


def build_analysis_provider(
    settings: AnalysisSettings, *, per_request_client: bool = False
) -> AnalysisProvider:
    if not settings.GEMINI_API_KEY:
        return MockAnalysisProvider()
    return GeminiAnalysisProvider(
        settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
        timeout=settings.GEMINI_TIMEOUT_SECONDS,
        per_request_client=per_request_client,
    )


def build_task_dispatcher(settings: TaskSettings) -> TaskDispatcher:
    if settings.DISPATCH_BACKEND == "celery":
        from src.wallet_tasks.infrastructure.celery.app import celery_app
        from src.wallet_tasks.infrastructure.celery.dispatcher import CeleryTaskDispatcher

        return CeleryTaskDispatcher(celery_app, queue=get_celery_settings().TASK_QUEUE)
    return AsyncioTaskDispatcher(max_concurrency=settings.MAX_CONCURRENT_TASKS)


def configure_di(*, worker: bool = False) -> None:
    """Bind the task store, executor, dispatcher and service into the injector."""
    if inject.is_configured():
        return

    task_settings = get_task_settings()
    analysis_settings = get_analysis_settings()
    store = build_task_store(task_settings, null_pool=worker)
    provider = build_analysis_provider(analysis_settings, per_request_client=worker)
    executor = TaskExecutor.default(provider)
    dispatcher = build_task_dispatcher(task_settings)

    def _config(binder: inject.Binder) -> None:
        binder.bind(TaskStore, store)
        binder.bind(AnalysisProvider, provider)
        binder.bind(TaskExecutor, executor)
        binder.bind(TaskDispatcher, dispatcher)
        binder.bind_to_constructor(TaskService, TaskService)

    inject.configure(_config)
