from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

class Task(db.Model):
    __tablename__ = 'tasks'

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    description = db.Column(db.Text, nullable=False)
    is_completed = db.Column(db.Boolean, nullable=False, default=False, server_default=db.false())

    def to_dict(self):
        return {
            'id': self.id,
            'description': self.description,
            'is_completed': self.is_completed,
        }

    def __repr__(self):
        return f'<Task {self.id} {self.description!r}>'


tasks_table = Task.__table__
