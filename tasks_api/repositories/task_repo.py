"""
repositories/task_repo.py
-------------------------
Data access layer for tasks.
All SQL statements against the `tasks` table live here. Every operation
borrows one connection from the pool and gives it back before returning.
"""

from typing import Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError

from tasks_api.db.pool import ConnectionPool
from tasks_api.errors import StorageError
from tasks_api.models import Task, tasks_table
from tasks_api.utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = (tasks_table.c.id, tasks_table.c.description, tasks_table.c.is_completed)

# largest value an Integer primary key holds on every supported backend
MAX_TASK_ID = 2**31 - 1


class TaskRepository:
    """Repository for CRUD operations on the tasks table."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    # ── READ ──────────────────────────────────────────────

    def list_all(self) -> list[Task]:
        """
        Fetch every task.

        Returns:
            List of Task objects in the order the database yields them.
        """
        with self._pool.connection() as conn:
            try:
                rows = conn.execute(select(*_COLUMNS)).all()
            except SQLAlchemyError as e:
                logger.error(f"Failed to list tasks: {e}")
                raise StorageError("Failed to list tasks") from e
        return [self._row_to_task(r) for r in rows]

    def get(self, task_id: int) -> Optional[Task]:
        """
        Fetch a single task by ID.

        Returns:
            A Task or None if no row has that id.
        """
        if not self._storable(task_id):
            return None
        with self._pool.connection() as conn:
            try:
                row = conn.execute(select(*_COLUMNS).where(tasks_table.c.id == task_id)).first()
            except SQLAlchemyError as e:
                logger.error(f"Failed to fetch task #{task_id}: {e}")
                raise StorageError(f"Failed to fetch task {task_id}") from e
        return self._row_to_task(row) if row else None

    # ── CREATE ────────────────────────────────────────────

    def create(self, task: Task) -> Task:
        """
        Insert a new task. Any id already set on ``task`` is ignored.

        Returns:
            A new Task carrying the id generated by the database.
        """
        with self._pool.connection() as conn:
            try:
                with conn.begin():
                    result = conn.execute(
                        insert(tasks_table).values(
                            description=task.description,
                            is_completed=task.is_completed,
                        )
                    )
                # generated key of this connection's insert
                task_id = result.inserted_primary_key[0]
            except SQLAlchemyError as e:
                logger.error(f"Failed to add task: {e}")
                raise StorageError("Failed to create task") from e
        logger.info(f"Added task #{task_id}")
        return Task(id=task_id, description=task.description, is_completed=task.is_completed)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, task_id: int, task: Task) -> Optional[Task]:
        """
        Overwrite description and completion flag of a task.

        Returns:
            The stored Task after the update, or None if no row has that id.
            Rewriting identical values counts as a successful update.
        """
        if not self._storable(task_id):
            return None
        with self._pool.connection() as conn:
            try:
                with conn.begin():
                    conn.execute(
                        update(tasks_table)
                        .where(tasks_table.c.id == task_id)
                        .values(description=task.description, is_completed=task.is_completed)
                    )
                    row = conn.execute(select(*_COLUMNS).where(tasks_table.c.id == task_id)).first()
            except SQLAlchemyError as e:
                logger.error(f"Failed to update task #{task_id}: {e}")
                raise StorageError(f"Failed to update task {task_id}") from e
        if row is None:
            return None
        logger.info(f"Updated task #{task_id}")
        return self._row_to_task(row)

    # ── DELETE ────────────────────────────────────────────

    def delete(self, task_id: int) -> int:
        """
        Delete a task. Deleting a missing id is not an error.

        Returns:
            Number of rows removed (0 or 1).
        """
        if not self._storable(task_id):
            return 0
        with self._pool.connection() as conn:
            try:
                with conn.begin():
                    result = conn.execute(delete(tasks_table).where(tasks_table.c.id == task_id))
                    deleted = result.rowcount
            except SQLAlchemyError as e:
                logger.error(f"Failed to delete task #{task_id}: {e}")
                raise StorageError(f"Failed to delete task {task_id}") from e
        logger.info(f"Deleted task #{task_id} ({deleted} row(s))")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _storable(task_id: int) -> bool:
        if 0 <= task_id <= MAX_TASK_ID:
            return True
        logger.debug(f"Task id {task_id} is outside the id column range")
        return False

    @staticmethod
    def _row_to_task(row: Row) -> Task:
        return Task(id=row.id, description=row.description, is_completed=bool(row.is_completed))
