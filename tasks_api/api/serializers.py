"""
api/serializers.py
------------------
Converts between the wire JSON shape of a task and `Task` objects, and turns
repository outcomes into Flask responses.
"""

from typing import Any, Iterable, Union

from flask import Response, jsonify

from tasks_api.errors import InvalidPayload, TaskServiceError
from tasks_api.models import Task


def task_from_json(payload: Any) -> Task:
    """
    Read a task body. An ``id`` in the payload is ignored.

    Raises:
        InvalidPayload: If the body is not an object, ``description`` is not
            a string or ``is_completed`` is not a boolean.
    """
    if not isinstance(payload, dict):
        raise InvalidPayload('Request body must be a JSON object')

    description = payload.get('description')
    if not isinstance(description, str):
        raise InvalidPayload("'description' must be a string")

    is_completed = payload.get('is_completed', False)
    if not isinstance(is_completed, bool):
        raise InvalidPayload("'is_completed' must be a boolean")

    return Task(description=description, is_completed=is_completed)


def task_to_json(task: Task) -> dict:
    return task.to_dict()


def ok(body: Union[Task, Iterable[Task]]) -> Response:
    if isinstance(body, Task):
        return jsonify(task_to_json(body))
    return jsonify([task_to_json(t) for t in body])


def created(task: Task, location: str):
    return jsonify(task_to_json(task)), 201, {'Location': location}


def no_content():
    return '', 204


def error(exc: TaskServiceError):
    return jsonify({'error': exc.message}), exc.status_code
