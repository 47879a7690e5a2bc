"""
tasks_api/errors.py
-------------------
Error taxonomy shared by the pool, the repository and the HTTP layer.
Each error knows the HTTP status the transport should answer with.
"""


class TaskServiceError(Exception):
    """Base class for every error raised by the tasks service."""

    status_code = 500

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class ConfigurationError(TaskServiceError):
    """Missing or invalid configuration. Fatal at startup."""


class PoolUnavailable(TaskServiceError):
    """No database connection could be obtained from the pool."""

    status_code = 503


class StorageError(TaskServiceError):
    """A statement failed while executing against the database."""


class InvalidPayload(TaskServiceError):
    """The request body could not be read as a Task."""

    status_code = 400


class NotFound(TaskServiceError):
    """No task row exists for the requested id."""

    status_code = 404

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
