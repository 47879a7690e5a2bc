from flask import Blueprint, current_app, request, url_for

from tasks_api.api.serializers import created, error, no_content, ok, task_from_json
from tasks_api.errors import NotFound, TaskServiceError
from tasks_api.repositories.task_repo import TaskRepository
from tasks_api.utils.logger import get_logger

logger = get_logger(__name__)

api = Blueprint('api', __name__)


def get_repository() -> TaskRepository:
    return current_app.extensions['tasks_api'].repository


@api.errorhandler(TaskServiceError)
def handle_service_error(exc):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.path} failed: {exc.message}")
    return error(exc)


@api.route('/tasks', methods=['GET'])
def list_tasks():
    return ok(get_repository().list_all())


@api.route('/tasks/<int:task_id>', methods=['GET'])
def get_task(task_id):
    task = get_repository().get(task_id)
    if task is None:
        raise NotFound(task_id)
    return ok(task)


@api.route('/tasks', methods=['POST'])
def create_task():
    task = get_repository().create(task_from_json(request.get_json(silent=True)))
    return created(task, url_for('api.get_task', task_id=task.id))


@api.route('/tasks/<int:task_id>', methods=['PUT'])
def update_task(task_id):
    # the id in the path wins over any id in the body
    task = get_repository().update(task_id, task_from_json(request.get_json(silent=True)))
    if task is None:
        raise NotFound(task_id)
    return ok(task)


@api.route('/tasks/<int:task_id>', methods=['DELETE'])
def delete_task(task_id):
    get_repository().delete(task_id)
    return no_content()
