from contextlib import asynccontextmanager

from fastapi import FastAPI

import inject

from src.setup.api_config import ApiSettings
from src.setup.app_config import configure_di
from src.setup.db_config import get_database_settings
from src.setup.logging_config import configure_logging
from src.wallet_tasks.domain.repositories import AnalysisProvider, TaskDispatcher, TaskStore
from src.wallet_tasks.infrastructure.analysis.gemini import GeminiAnalysisProvider
from src.wallet_tasks.infrastructure.local.dispatcher import AsyncioTaskDispatcher
from src.wallet_tasks.infrastructure.postgres.repositories import SqlTaskStore
from src.wallet_tasks.presentation.schemas import HealthResponse

settings = ApiSettings()
configure_logging(settings.LOG_LEVEL)
configure_di()


@asynccontextmanager
async def lifespan(_: FastAPI):
    store = inject.instance(TaskStore)
    if isinstance(store, SqlTaskStore) and get_database_settings().DB_CREATE_SCHEMA:
        await store.orm.create_schema()
    yield
    dispatcher = inject.instance(TaskDispatcher)
    if isinstance(dispatcher, AsyncioTaskDispatcher):
        await dispatcher.drain()
    if isinstance(store, SqlTaskStore):
        await store.orm.dispose()
    provider = inject.instance(AnalysisProvider)
    if isinstance(provider, GeminiAnalysisProvider):
        await provider.close()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Wallet task API: create, poll, list and cancel asynchronous wallet actions",
    lifespan=lifespan,
)


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=settings.APP_VERSION)


from src.wallet_tasks.presentation.routes import router as api_router  # noqa: E402

app.include_router(api_router, prefix="")
