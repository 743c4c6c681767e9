from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.wallet_tasks.domain.exceptions import DuplicateTaskIdError, PersistenceError
from src.wallet_tasks.domain.models.task import Task, TaskPatch
from src.wallet_tasks.domain.models.task_status import TaskStatus
from src.wallet_tasks.domain.repositories import TaskStore
from src.wallet_tasks.infrastructure.postgres.mappers import OrmMapper
from src.wallet_tasks.infrastructure.postgres.orm import PostgresOrm, TaskRow


class SqlTaskStore(TaskStore):
    """SQL-backed task storage using SQLAlchemy async sessions."""

    def __init__(self, orm: PostgresOrm) -> None:
        self._orm = orm

    @property
    def orm(self) -> PostgresOrm:
        return self._orm

    async def insert(self, task: Task) -> None:
        """Persist a new task."""
        task_row = OrmMapper.to_task_row(task)
        try:
            async with self._orm.session_factory() as session:
                async with session.begin():
                    session.add(task_row)
        except IntegrityError as exc:
            raise DuplicateTaskIdError(task.id) from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to insert task '{task.id}'") from exc

    async def find_by_id(self, task_id: str) -> Task | None:
        """Fetch a task by id."""
        try:
            async with self._orm.session_factory() as session:
                result = await session.execute(select(TaskRow).where(TaskRow.id == task_id))
                task_row = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to load task '{task_id}'") from exc
        if task_row is None:
            return None
        return OrmMapper.to_domain_task(task_row)

    async def conditional_update(
        self, task_id: str, expected_status: TaskStatus, patch: TaskPatch
    ) -> bool:
        """Apply the patch only while the stored status is ``expected_status``."""
        statement = (
            update(TaskRow)
            .where(TaskRow.id == task_id, TaskRow.status == expected_status)
            .values(**OrmMapper.to_patch_values(patch))
            .execution_options(synchronize_session=False)
        )
        try:
            async with self._orm.session_factory() as session:
                async with session.begin():
                    result = await session.execute(statement)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to update task '{task_id}'") from exc
        return result.rowcount == 1

    async def list_by_owner(self, wallet_address: str, limit: int) -> list[Task]:
        """List the owner's tasks, newest first."""
        statement = (
            select(TaskRow)
            .where(TaskRow.wallet_address == wallet_address)
            .order_by(TaskRow.created_at.desc(), TaskRow.seq.desc())
            .limit(limit)
        )
        try:
            async with self._orm.session_factory() as session:
                result = await session.execute(statement)
                rows = result.scalars().all()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to list tasks for '{wallet_address}'") from exc
        return [OrmMapper.to_domain_task(row) for row in rows]
