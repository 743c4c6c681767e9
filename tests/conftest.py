from __future__ import annotations

import importlib
from collections.abc import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.wallet_tasks.application.executor import TaskExecutor
from src.wallet_tasks.application.services import TaskService
from src.wallet_tasks.domain.repositories import TaskDispatcher, TaskStore
from src.wallet_tasks.infrastructure.local.dispatcher import AsyncioTaskDispatcher
from src.wallet_tasks.infrastructure.memory.repositories import InMemoryTaskStore
from tests.doubles import RecordingDispatcher, RecordingTaskStore, StubAnalysisProvider


@pytest.fixture
def store() -> RecordingTaskStore:
    return RecordingTaskStore()


@pytest.fixture
def provider() -> StubAnalysisProvider:
    return StubAnalysisProvider()


@pytest.fixture
def executor(provider: StubAnalysisProvider) -> TaskExecutor:
    return TaskExecutor.default(provider)


@pytest.fixture
def dispatcher() -> AsyncioTaskDispatcher:
    return AsyncioTaskDispatcher()


@pytest.fixture
def service(
    store: RecordingTaskStore,
    executor: TaskExecutor,
    dispatcher: AsyncioTaskDispatcher,
) -> TaskService:
    return TaskService(store=store, executor=executor, dispatcher=dispatcher)


@pytest.fixture
def env_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """Provide environment variables for ApiSettings."""
    monkeypatch.setenv("APP_NAME", "Test API")
    monkeypatch.setenv("APP_VERSION", "0.1.0")
    monkeypatch.setenv("USER_TASKS_MAX_LIMIT", "5")


def _patch_inject_instance(
    monkeypatch: pytest.MonkeyPatch,
    bindings: dict[object, object],
) -> Callable[[object], object]:
    """Patch `inject.instance` to return the test doubles."""
    import inject

    def fake_instance(interface: object) -> object:
        if interface in bindings:
            return bindings[interface]
        raise RuntimeError(f"Unexpected dependency request: {interface}")

    monkeypatch.setattr(inject, "instance", fake_instance)
    return fake_instance


@pytest.fixture
def api_client(env_settings: None, monkeypatch: pytest.MonkeyPatch):
    """FastAPI test client with the task service wired to in-memory doubles."""
    task_store = InMemoryTaskStore()
    recording_dispatcher = RecordingDispatcher()
    _patch_inject_instance(
        monkeypatch,
        {
            TaskStore: task_store,
            TaskExecutor: TaskExecutor.default(StubAnalysisProvider()),
            TaskDispatcher: recording_dispatcher,
        },
    )

    # Reload so the module-level service picks up the patched injector.
    routes_module = importlib.reload(importlib.import_module("src.wallet_tasks.presentation.routes"))

    app = FastAPI()
    app.include_router(routes_module.router)
    client = TestClient(app)
    return client, routes_module._task_service, task_store, recording_dispatcher
