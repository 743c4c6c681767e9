import pytest

from src.wallet_tasks.domain.exceptions import DuplicateTaskIdError
from src.wallet_tasks.domain.models.task import TaskPatch
from src.wallet_tasks.domain.models.task_result import TaskResult
from src.wallet_tasks.domain.models.task_status import TaskStatus
from src.wallet_tasks.infrastructure.memory.repositories import InMemoryTaskStore
from tests.doubles import make_task


@pytest.mark.asyncio
async def test_insert_rejects_duplicate_ids() -> None:
    store = InMemoryTaskStore()
    await store.insert(make_task("t-1"))

    with pytest.raises(DuplicateTaskIdError):
        await store.insert(make_task("t-1"))


@pytest.mark.asyncio
async def test_find_returns_copies() -> None:
    store = InMemoryTaskStore()
    await store.insert(make_task("t-1", parameters={"amount": "1"}))

    loaded = await store.find_by_id("t-1")
    loaded.parameters["amount"] = "999"
    loaded.status = TaskStatus.COMPLETED

    reloaded = await store.find_by_id("t-1")
    assert reloaded.parameters == {"amount": "1"}
    assert reloaded.status is TaskStatus.PENDING
    assert await store.find_by_id("missing") is None


@pytest.mark.asyncio
async def test_conditional_update_checks_expected_status() -> None:
    store = InMemoryTaskStore()
    await store.insert(make_task("t-1"))
    result = TaskResult(success=True, message="done")

    assert not await store.conditional_update(
        "t-1", TaskStatus.EXECUTING, TaskPatch(status=TaskStatus.COMPLETED, result=result)
    )
    assert await store.conditional_update(
        "t-1", TaskStatus.PENDING, TaskPatch(status=TaskStatus.EXECUTING)
    )
    assert await store.conditional_update(
        "t-1", TaskStatus.EXECUTING, TaskPatch(status=TaskStatus.COMPLETED, result=result)
    )
    assert not await store.conditional_update(
        "missing", TaskStatus.PENDING, TaskPatch(status=TaskStatus.CANCELLED)
    )

    task = await store.find_by_id("t-1")
    assert task.status is TaskStatus.COMPLETED
    assert task.result == result
    assert task.error is None


@pytest.mark.asyncio
async def test_list_by_owner_breaks_timestamp_ties_by_insertion_order() -> None:
    store = InMemoryTaskStore()
    for task_id in ("first", "second", "third"):
        await store.insert(make_task(task_id))
    await store.insert(make_task("foreign", wallet_address="0xdef"))

    tasks = await store.list_by_owner("0xabc", limit=2)

    assert [task.id for task in tasks] == ["third", "second"]
    assert await store.list_by_owner("0xabc", limit=0) == []
