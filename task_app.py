from dataclasses import dataclass
from typing import Optional

from flask import Flask

from tasks_api.api.cors import init_cors
from tasks_api.api.routes import api
from tasks_api.config import Settings, load_settings
from tasks_api.db.pool import ConnectionPool
from tasks_api.db.schema import create_schema
from tasks_api.models import db
from tasks_api.repositories.task_repo import TaskRepository
from tasks_api.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@dataclass
class TasksExtension:
    pool: ConnectionPool
    repository: TaskRepository


def create_app(settings: Optional[Settings] = None):
    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)

    app = Flask(__name__)

    app.config['SQLALCHEMY_DATABASE_URI'] = settings.database_url
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = settings.engine_options()
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

    db.init_app(app)

    with app.app_context():
        pool = ConnectionPool(db.engine)
    try:
        create_schema(pool)
    except Exception:
        pool.close()
        raise

    app.extensions['tasks_api'] = TasksExtension(pool=pool, repository=TaskRepository(pool))

    app.register_blueprint(api)
    init_cors(app, settings.cors_allowed_origins)
    return app


if __name__ == '__main__':
    app = create_app()
    try:
        app.run(debug=True)
    finally:
        app.extensions['tasks_api'].pool.close()
