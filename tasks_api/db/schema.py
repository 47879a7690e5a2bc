"""
db/schema.py
------------
Creates the `tasks` table if it does not already exist.
Safe to call on every start.
"""

from sqlalchemy.exc import SQLAlchemyError

from tasks_api.db.pool import ConnectionPool
from tasks_api.errors import StorageError
from tasks_api.models import tasks_table
from tasks_api.utils.logger import get_logger

logger = get_logger(__name__)


def create_schema(pool: ConnectionPool) -> None:
    """
    Issue ``CREATE TABLE IF NOT EXISTS`` for the tasks table.

    Raises:
        PoolUnavailable: If no connection can be obtained.
        StorageError: If the table cannot be created.
    """
    with pool.connection() as conn:
        try:
            with conn.begin():
                tasks_table.create(bind=conn, checkfirst=True)
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize schema: {e}")
            raise StorageError(f"Failed to create table {tasks_table.name}") from e
    logger.info("Database schema initialized successfully.")
